"""End-to-end annotation of an abundance table."""

from dataclasses import dataclass

import polars as pl
import structlog

from phagelink.linkage.aligner import align_rows, subject_ids
from phagelink.linkage.dispatcher import AnnotationDispatcher
from phagelink.linkage.models import AnnotationRecord, ResolutionReport
from phagelink.linkage.resolver import ReferenceResolver
from phagelink.references.fetch import ReferenceDatabase

logger = structlog.get_logger()


@dataclass
class PopulateResult:
    """Output of run_populate.

    Attributes:
        lines: Annotated abundance lines, header first
        records: One AnnotationRecord per abundance data row
        report: Linkage summary
    """

    lines: list[str]
    records: list[AnnotationRecord]
    report: ResolutionReport


def summarize_families(records: list[AnnotationRecord]) -> dict[str, int]:
    """Count records per annotation family."""
    df = pl.DataFrame(
        {"family": [r.family.value for r in records]},
        schema={"family": pl.Utf8},
    )
    counts = df.group_by("family").len().sort("family")
    return {row["family"]: row["len"] for row in counts.to_dicts()}


def run_populate(
    abundance_lines: list[str],
    completeness_text: str,
    reference_db: ReferenceDatabase,
    phage_text: str,
) -> PopulateResult:
    """Annotate every abundance row with its CheckV/INPHARED reference.

    Composes: subject IDs -> resolve reference IDs -> dispatch to family
    tables -> align with the original lines. Every output line is built
    before returning, so callers can emit all or nothing.

    Args:
        abundance_lines: Raw abundance table lines, header first
        completeness_text: CheckV completeness.tsv contents
        reference_db: CheckV circular and GenBank tables
        phage_text: INPHARED phage table contents

    Returns:
        PopulateResult with lines, records and report
    """
    subjects = subject_ids(abundance_lines)
    logger.info("populate_start", subjects=len(subjects))

    resolver = ReferenceResolver(completeness_text)
    ref_ids = resolver.resolve_all(subjects)

    dispatcher = AnnotationDispatcher.from_tables(
        circular_text=reference_db.circular_text,
        genbank_text=reference_db.genbank_text,
        phage_text=phage_text,
    )
    records = dispatcher.dispatch_all(ref_ids)

    lines = align_rows(abundance_lines, records)

    unresolved = resolver.unresolved(subjects)
    report = ResolutionReport(
        total_subjects=len(subjects),
        resolved=len(subjects) - len(unresolved),
        annotated=sum(1 for r in records if r.is_annotated),
        unresolved_ids=unresolved,
        ambiguous_ids=resolver.ambiguous(subjects),
        family_counts=summarize_families(records),
    )

    logger.info(
        "populate_complete",
        subjects=report.total_subjects,
        resolved=report.resolved,
        annotated=report.annotated,
        families=report.family_counts,
    )

    return PopulateResult(lines=lines, records=records, report=report)
