"""Output emission for annotated tables."""

from phagelink.output.writers import TableEmitter

__all__ = ["TableEmitter"]
