"""Contig-to-reference linkage and annotation join."""

from phagelink.linkage.aligner import align_rows, subject_ids
from phagelink.linkage.dispatcher import AnnotationDispatcher, classify_reference
from phagelink.linkage.models import (
    ANNOTATION_FIELDS,
    OUTPUT_COLUMNS,
    AnnotationRecord,
    ResolutionReport,
)
from phagelink.linkage.populate import PopulateResult, run_populate, summarize_families
from phagelink.linkage.resolver import UNRESOLVED_REFERENCE, ReferenceResolver

__all__ = [
    "ANNOTATION_FIELDS",
    "OUTPUT_COLUMNS",
    "AnnotationRecord",
    "ResolutionReport",
    "ReferenceResolver",
    "UNRESOLVED_REFERENCE",
    "AnnotationDispatcher",
    "classify_reference",
    "align_rows",
    "subject_ids",
    "PopulateResult",
    "run_populate",
    "summarize_families",
]
