"""Parse mash output and keep the closest reference per query."""

import polars as pl
import structlog

from phagelink.distance.models import MASH_COLUMNS, DistanceHit
from phagelink.references.index import split_table_lines

logger = structlog.get_logger()


def parse_distance_hits(text: str) -> list[DistanceHit]:
    """Parse tab-delimited mash dist output.

    Columns: reference_id, query_id, distance, p_value, shared hashes...
    Blank lines are ignored.

    Raises:
        ValueError: On a line with fewer than four columns or a
            non-numeric distance
    """
    hits = []
    for line_number, line in enumerate(split_table_lines(text), start=1):
        if not line.strip():
            continue

        fields = line.split("\t")
        if len(fields) < len(MASH_COLUMNS):
            raise ValueError(
                f"Unparsable distance output at line {line_number}: "
                f"expected at least {len(MASH_COLUMNS)} columns, got {len(fields)}"
            )

        reference_id, query_id, distance_text, p_value = fields[:4]
        try:
            distance = float(distance_text)
        except ValueError:
            raise ValueError(
                f"Unparsable distance output at line {line_number}: "
                f"distance {distance_text!r} is not a number"
            ) from None

        hits.append(DistanceHit(
            query_id=query_id,
            reference_id=reference_id,
            distance=distance,
            distance_text=distance_text,
            p_value=p_value,
        ))

    logger.info("parse_distance_hits_complete", hits=len(hits))
    return hits


def hits_to_frame(hits: list[DistanceHit]) -> pl.DataFrame:
    return pl.DataFrame(
        {
            "query_id": [h.query_id for h in hits],
            "reference_id": [h.reference_id for h in hits],
            "distance": [h.distance for h in hits],
        },
        schema={
            "query_id": pl.Utf8,
            "reference_id": pl.Utf8,
            "distance": pl.Float64,
        },
    )


def reduce_min_distance(hits: list[DistanceHit]) -> dict[str, DistanceHit]:
    """Keep the minimum-distance hit for every query.

    Ties go to the hit seen first. The mapping is ordered by each query's
    first appearance in ``hits``, so output is stable for a given input.

    Args:
        hits: Parsed hits in tool output order

    Returns:
        query_id -> best DistanceHit
    """
    df = hits_to_frame(hits)

    best = (
        df.with_row_index("_row")
        .with_columns(pl.col("_row").min().over("query_id").alias("_first_seen"))
        .sort(["_first_seen", "distance", "_row"])
        .unique(subset="query_id", keep="first", maintain_order=True)
    )

    result = {
        row["query_id"]: hits[row["_row"]]
        for row in best.select(["query_id", "_row"]).iter_rows(named=True)
    }

    logger.info("reduce_min_distance_complete", hits=len(hits), queries=len(result))
    return result
