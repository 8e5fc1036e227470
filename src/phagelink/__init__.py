"""phagelink: annotate viral contig abundances with CheckV and INPHARED references."""

__version__ = "0.1.0"
