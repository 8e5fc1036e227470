"""Append annotation columns to abundance table rows."""

from phagelink.linkage.models import OUTPUT_COLUMNS, AnnotationRecord


def subject_ids(abundance_lines: list[str]) -> list[str]:
    """First column of every data row (the header line is skipped)."""
    return [line.split("\t", 1)[0] for line in abundance_lines[1:]]


def align_rows(
    abundance_lines: list[str],
    records: list[AnnotationRecord],
) -> list[str]:
    """Join each abundance line with the record at the same position.

    Line 0 is the header and gets the output column names appended. Line
    ``i`` (i >= 1) gets ``records[i - 1]``. Input order is kept as is.

    Args:
        abundance_lines: Raw abundance table lines, header first
        records: One record per data line, in the same order

    Returns:
        Output lines without trailing newlines

    Raises:
        ValueError: If the record count does not match the data line count
    """
    if not abundance_lines:
        return []

    data_rows = len(abundance_lines) - 1
    if len(records) != data_rows:
        raise ValueError(
            f"Cannot align {len(records)} annotation records with {data_rows} abundance rows"
        )

    lines = [abundance_lines[0] + "\t" + "\t".join(OUTPUT_COLUMNS)]
    for line, record in zip(abundance_lines[1:], records):
        lines.append(line + "\t" + "\t".join(record.to_columns()))
    return lines
