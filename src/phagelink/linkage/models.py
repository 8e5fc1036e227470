"""Data models for contig annotation records."""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict

from phagelink.references.models import Family

# Output order of the annotation columns
ANNOTATION_FIELDS = (
    "ncbi_name",
    "ncbi_id",
    "vog_clade",
    "habitat",
    "source",
    "phage_desc",
    "phage_class",
    "phage_host",
    "lineage",
)

# Columns appended to every abundance row
OUTPUT_COLUMNS = ("ref_id",) + ANNOTATION_FIELDS


class AnnotationRecord(BaseModel):
    """Reference annotation attached to a single contig.

    Attributes:
        ref_id: Reference ID the record was built from ("" if unresolved)
        family: Annotation family selected by the reference ID prefix
        ncbi_name .. lineage: Annotation fields; only those owned by
            ``family`` are filled, the rest stay empty strings

    Records are immutable so one instance can be shared by every contig
    pointing at the same reference.
    """

    model_config = ConfigDict(frozen=True)

    ref_id: str = ""
    family: Family = Family.UNKNOWN
    ncbi_name: str = ""
    ncbi_id: str = ""
    vog_clade: str = ""
    habitat: str = ""
    source: str = ""
    phage_desc: str = ""
    phage_class: str = ""
    phage_host: str = ""
    lineage: str = ""

    @classmethod
    def empty(cls, ref_id: str = "") -> "AnnotationRecord":
        """Record with all nine annotation fields blank."""
        return cls(ref_id=ref_id)

    @property
    def is_annotated(self) -> bool:
        return any(getattr(self, name) for name in ANNOTATION_FIELDS)

    def field_values(self) -> list[str]:
        """The nine annotation fields in output order."""
        return [getattr(self, name) for name in ANNOTATION_FIELDS]

    def to_columns(self) -> list[str]:
        """ref_id followed by the nine annotation fields."""
        return [self.ref_id, *self.field_values()]


@dataclass
class ResolutionReport:
    """Summary of linking contigs to reference annotations.

    Attributes:
        total_subjects: Number of contigs in the abundance table
        resolved: Contigs with a row in the completeness table
        annotated: Contigs whose record has at least one annotation field
        unresolved_ids: Contigs missing from the completeness table
        ambiguous_ids: Contigs with more than one completeness row (first used)
        family_counts: Family name -> number of contigs
        resolution_rate: resolved / total_subjects (0-1)
        annotation_rate: annotated / total_subjects (0-1)
    """

    total_subjects: int
    resolved: int
    annotated: int
    unresolved_ids: list[str] = field(default_factory=list)
    ambiguous_ids: list[str] = field(default_factory=list)
    family_counts: dict[str, int] = field(default_factory=dict)
    resolution_rate: float = 0.0
    annotation_rate: float = 0.0

    def __post_init__(self):
        if self.total_subjects > 0:
            self.resolution_rate = self.resolved / self.total_subjects
            self.annotation_rate = self.annotated / self.total_subjects
