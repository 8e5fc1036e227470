"""Data models for Mash distance hits."""

from dataclasses import dataclass

# Leading columns of `mash dist` tabular output
MASH_COLUMNS = ("reference_id", "query_id", "distance", "p_value")


@dataclass(frozen=True)
class DistanceHit:
    """One query-vs-reference Mash distance.

    Attributes:
        query_id: Query contig name
        reference_id: Reference genome name in the sketch index
        distance: Mash distance parsed as float (used for comparison)
        distance_text: Distance exactly as the tool printed it
        p_value: p-value exactly as the tool printed it
    """

    query_id: str
    reference_id: str
    distance: float
    distance_text: str
    p_value: str
