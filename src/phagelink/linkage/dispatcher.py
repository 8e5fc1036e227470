"""Dispatch reference IDs to their annotation family and build records."""

import structlog

from phagelink.linkage.models import AnnotationRecord
from phagelink.references.index import KeyIndex
from phagelink.references.models import (
    FAMILY_LAYOUTS,
    FAMILY_PREFIXES,
    KEY_COLUMN,
    Family,
)

logger = structlog.get_logger()


def classify_reference(ref_id: str) -> Family:
    """Return the annotation family for a reference ID based on its prefix.

    DTR -> circular, GCA -> genbank, LR/NC -> lab-curated, anything else
    (including the empty unresolved marker) -> unknown.
    """
    for prefixes, family in FAMILY_PREFIXES:
        if ref_id.startswith(prefixes):
            return family
    return Family.UNKNOWN


class AnnotationDispatcher:
    """Build exactly one AnnotationRecord per reference ID.

    Each family has its own exact-key index. A reference whose family is
    unknown, or whose ID is absent from the family table, gets an empty
    record. Repeated keys in a source table resolve to the first row.
    """

    def __init__(self, indexes: dict[Family, KeyIndex]):
        self.indexes = indexes

    @classmethod
    def from_tables(
        cls,
        circular_text: str,
        genbank_text: str,
        phage_text: str,
    ) -> "AnnotationDispatcher":
        """Index the three source tables on their first column.

        Rows too short to supply every column of their family are skipped
        (see KeyIndex.from_text).
        """
        texts = {
            Family.CIRCULAR: ("circular table", circular_text),
            Family.GENBANK: ("genbank table", genbank_text),
            Family.LAB_CURATED: ("phage table", phage_text),
        }
        indexes = {
            family: KeyIndex.from_text(
                text,
                name=name,
                key_column=KEY_COLUMN,
                min_columns=FAMILY_LAYOUTS[family].min_columns,
                has_header=True,
            )
            for family, (name, text) in texts.items()
        }
        return cls(indexes)

    def dispatch(self, ref_id: str) -> AnnotationRecord:
        family = classify_reference(ref_id)
        if family is Family.UNKNOWN:
            return AnnotationRecord.empty(ref_id)

        row = self.indexes[family].get(ref_id)
        if row is None:
            logger.debug("reference_not_found", ref_id=ref_id, family=family.value)
            return AnnotationRecord(ref_id=ref_id, family=family)

        layout = FAMILY_LAYOUTS[family]
        values = {name: row[column] for name, column in layout.columns.items()}
        return AnnotationRecord(ref_id=ref_id, family=family, **values)

    def dispatch_all(self, ref_ids: list[str]) -> list[AnnotationRecord]:
        """Dispatch in order; result length equals input length.

        Repeated reference IDs share one record instance.
        """
        cache: dict[str, AnnotationRecord] = {}
        records = []
        for ref_id in ref_ids:
            if ref_id not in cache:
                cache[ref_id] = self.dispatch(ref_id)
            records.append(cache[ref_id])

        logger.info(
            "dispatch_annotations_complete",
            references=len(ref_ids),
            distinct=len(cache),
            annotated=sum(1 for r in records if r.is_annotated),
        )
        return records
