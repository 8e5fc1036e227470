"""Exact-key index over tab-delimited reference tables.

Tables are matched on a key column rather than by searching whole lines, so a
short identifier never matches inside an unrelated longer one.
"""

from dataclasses import dataclass, field

import structlog

logger = structlog.get_logger()

# Line numbers of skipped rows listed in the warning
_MAX_REPORTED_ROWS = 10


def split_table_lines(text: str) -> list[str]:
    """Split table text into rows on "\\n", dropping one trailing "\\r" per row.

    Unlike ``str.splitlines``, form feeds, separators such as \\x1c and
    Unicode line separators inside a field stay part of the row. A final
    newline does not produce an extra empty row.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


@dataclass
class KeyIndex:
    """Rows of a tab-delimited table addressed by the value of one column.

    Attributes:
        name: Table label used in log events
        key_column: 0-based column holding the key
        header: Split header row, or None if the table has no header
        rows: key -> split row (first occurrence in file order)
        duplicate_keys: Keys seen more than once; later rows were ignored
        malformed_lines: 1-based line numbers skipped for having too few columns
    """

    name: str
    key_column: int
    header: list[str] | None = None
    rows: dict[str, list[str]] = field(default_factory=dict)
    duplicate_keys: list[str] = field(default_factory=list)
    malformed_lines: list[int] = field(default_factory=list)

    @classmethod
    def from_text(
        cls,
        text: str,
        name: str,
        key_column: int = 0,
        min_columns: int = 1,
        has_header: bool = True,
    ) -> "KeyIndex":
        """Build an index from the full text of a table.

        Rows with fewer than ``min_columns`` fields (or lacking the key column)
        are skipped and reported with a warning. Blank lines are ignored. When
        a key repeats, the first row wins.

        Args:
            text: Entire table contents
            name: Label for log events
            key_column: Column holding the key
            min_columns: Minimum fields a row needs to be indexed
            has_header: Treat the first line as a header

        Returns:
            Populated KeyIndex
        """
        required = max(min_columns, key_column + 1)
        index = cls(name=name, key_column=key_column)

        lines = split_table_lines(text)
        start = 0
        if has_header and lines:
            index.header = lines[0].split("\t")
            start = 1

        for line_number, line in enumerate(lines[start:], start=start + 1):
            if not line.strip():
                continue

            fields = line.split("\t")
            if len(fields) < required:
                index.malformed_lines.append(line_number)
                continue

            key = fields[key_column].strip()
            if key in index.rows:
                index.duplicate_keys.append(key)
                continue
            index.rows[key] = fields

        if index.malformed_lines:
            logger.warning(
                "reference_rows_skipped",
                table=name,
                skipped=len(index.malformed_lines),
                required_columns=required,
                lines=index.malformed_lines[:_MAX_REPORTED_ROWS],
            )
        if index.duplicate_keys:
            logger.warning(
                "reference_duplicate_keys",
                table=name,
                duplicates=len(index.duplicate_keys),
                keys=index.duplicate_keys[:_MAX_REPORTED_ROWS],
                policy="first_row_wins",
            )

        logger.debug("reference_index_built", table=name, keys=len(index.rows))
        return index

    def get(self, key: str) -> list[str] | None:
        """Return the split row for ``key`` (surrounding whitespace ignored), or None."""
        key = key.strip()
        if not key:
            return None
        return self.rows.get(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        return len(self.rows)
