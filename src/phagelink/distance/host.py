"""Join best Mash hits with host annotations from the phage table."""

from dataclasses import dataclass

import structlog

from phagelink.distance.models import DistanceHit
from phagelink.distance.reducer import parse_distance_hits, reduce_min_distance
from phagelink.references.index import KeyIndex
from phagelink.references.models import KEY_COLUMN, PHAGE_HOST_COLUMN

logger = structlog.get_logger()

HIT_COLUMNS = ("contig_id", "phage_id", "mash_distance", "mash_p")
SUMMARY_HEADER = HIT_COLUMNS + ("host",)


class HostAnnotationJoiner:
    """Attach the phage table's host (or whole row) to each best hit.

    In summary mode the host column is emitted; with ``all_info`` the
    complete phage table row follows the hit columns. A reference missing
    from the phage table yields an empty host.
    """

    def __init__(self, phage_text: str, all_info: bool = False):
        self.all_info = all_info
        self.index = KeyIndex.from_text(
            phage_text,
            name="phage table",
            key_column=KEY_COLUMN,
            min_columns=1 if all_info else PHAGE_HOST_COLUMN + 1,
            has_header=True,
        )

    def header(self) -> str:
        """Header line for the chosen mode.

        Raises:
            ValueError: In full mode when the phage table has no header
        """
        if not self.all_info:
            return "\t".join(SUMMARY_HEADER)
        if self.index.header is None:
            raise ValueError("Phage table is empty; cannot build the full-row header")
        return "\t".join(HIT_COLUMNS) + "\t" + "\t".join(self.index.header)

    def host_for(self, reference_id: str) -> str:
        row = self.index.get(reference_id)
        if row is None:
            return ""
        if self.all_info:
            return "\t".join(row)
        return row[PHAGE_HOST_COLUMN]

    def join(self, hit: DistanceHit) -> str:
        return "\t".join([
            hit.query_id,
            hit.reference_id,
            hit.distance_text,
            hit.p_value,
            self.host_for(hit.reference_id),
        ])

    def join_all(self, best_hits: dict[str, DistanceHit]) -> list[str]:
        """Header followed by one line per query, in mapping order."""
        lines = [self.header()]
        missing = 0
        for hit in best_hits.values():
            if hit.reference_id not in self.index:
                missing += 1
            lines.append(self.join(hit))

        logger.info("host_join_complete", queries=len(best_hits), without_host_row=missing)
        return lines


@dataclass
class HostResult:
    """Output of run_host.

    Attributes:
        lines: Output lines, header first
        best_hits: query_id -> closest reference hit
    """

    lines: list[str]
    best_hits: dict[str, DistanceHit]


def run_host(distance_text: str, phage_text: str, all_info: bool = False) -> HostResult:
    """Assign each query contig its closest phage and that phage's host.

    Composes: parse mash output -> min-distance reduction -> host join.

    Raises:
        ValueError: On unparsable mash output
    """
    hits = parse_distance_hits(distance_text)
    best_hits = reduce_min_distance(hits)
    joiner = HostAnnotationJoiner(phage_text, all_info=all_info)
    return HostResult(lines=joiner.join_all(best_hits), best_hits=best_hits)
