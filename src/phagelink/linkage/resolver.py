"""Resolve contig IDs to CheckV reference IDs via completeness.tsv."""

import structlog

from phagelink.references.index import KeyIndex
from phagelink.references.models import (
    COMPLETENESS_KEY_COLUMN,
    COMPLETENESS_REFERENCE_COLUMN,
)

logger = structlog.get_logger()

# Marker for a contig with no completeness row; classifies as unknown
UNRESOLVED_REFERENCE = ""


class ReferenceResolver:
    """Map each contig to the top-hit reference ID reported by CheckV.

    Lookup is exact on the completeness table's contig_id column. The output
    always has one entry per input contig:

    - no completeness row: ``UNRESOLVED_REFERENCE``
    - several rows for one contig: the first row in file order
    """

    def __init__(self, completeness_text: str):
        self.index = KeyIndex.from_text(
            completeness_text,
            name="completeness",
            key_column=COMPLETENESS_KEY_COLUMN,
            min_columns=COMPLETENESS_REFERENCE_COLUMN + 1,
            has_header=True,
        )
        self._duplicate_keys = set(self.index.duplicate_keys)

    def resolve(self, subject_id: str) -> str:
        row = self.index.get(subject_id)
        if row is None:
            return UNRESOLVED_REFERENCE
        return row[COMPLETENESS_REFERENCE_COLUMN].strip()

    def resolve_all(self, subject_ids: list[str]) -> list[str]:
        """Resolve contigs in order; result length equals input length."""
        ref_ids = [self.resolve(subject_id) for subject_id in subject_ids]

        unresolved = self.unresolved(subject_ids)
        logger.info(
            "resolve_references_complete",
            subjects=len(subject_ids),
            unresolved=len(unresolved),
            ambiguous=len(self.ambiguous(subject_ids)),
        )
        return ref_ids

    def unresolved(self, subject_ids: list[str]) -> list[str]:
        return [s for s in subject_ids if self.index.get(s) is None]

    def ambiguous(self, subject_ids: list[str]) -> list[str]:
        return [s for s in subject_ids if s.strip() in self._duplicate_keys]
