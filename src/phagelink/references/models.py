"""Reference table layouts and annotation families."""

from dataclasses import dataclass
from enum import Enum

# Every reference table is keyed on its first column
KEY_COLUMN = 0

# CheckV completeness.tsv: contig_id (0) ... aai_top_hit (8)
COMPLETENESS_KEY_COLUMN = 0
COMPLETENESS_REFERENCE_COLUMN = 8

# INPHARED phage table: Accession (0) ... Host (14)
PHAGE_HOST_COLUMN = 14


class Family(str, Enum):
    """Annotation source family selected by a reference ID prefix."""

    CIRCULAR = "circular"
    GENBANK = "genbank"
    LAB_CURATED = "lab_curated"
    UNKNOWN = "unknown"


# Checked in order; first matching prefix wins
FAMILY_PREFIXES: tuple[tuple[tuple[str, ...], Family], ...] = (
    (("DTR",), Family.CIRCULAR),
    (("GCA",), Family.GENBANK),
    (("LR", "NC"), Family.LAB_CURATED),
)


@dataclass(frozen=True)
class FamilyLayout:
    """Which source columns fill which annotation fields for one family.

    Attributes:
        family: Family the layout belongs to
        columns: Mapping of AnnotationRecord field name -> 0-based column
    """

    family: Family
    columns: dict[str, int]

    @property
    def min_columns(self) -> int:
        """Number of columns a source row needs for every field to exist."""
        return max(self.columns.values()) + 1


FAMILY_LAYOUTS: dict[Family, FamilyLayout] = {
    Family.CIRCULAR: FamilyLayout(
        family=Family.CIRCULAR,
        columns={"source": 1, "lineage": 5, "habitat": 6},
    ),
    Family.GENBANK: FamilyLayout(
        family=Family.GENBANK,
        columns={"ncbi_id": 2, "ncbi_name": 3, "vog_clade": 6, "lineage": 7},
    ),
    Family.LAB_CURATED: FamilyLayout(
        family=Family.LAB_CURATED,
        columns={"phage_desc": 1, "phage_class": 2, "phage_host": 14, "lineage": 19},
    ),
}
