"""Closest-reference assignment from Mash distances."""

from phagelink.distance.host import (
    SUMMARY_HEADER,
    HostAnnotationJoiner,
    HostResult,
    run_host,
)
from phagelink.distance.models import MASH_COLUMNS, DistanceHit
from phagelink.distance.reducer import (
    hits_to_frame,
    parse_distance_hits,
    reduce_min_distance,
)
from phagelink.distance.runner import DistanceToolError, MashRunner

__all__ = [
    "DistanceHit",
    "MASH_COLUMNS",
    "MashRunner",
    "DistanceToolError",
    "parse_distance_hits",
    "hits_to_frame",
    "reduce_min_distance",
    "HostAnnotationJoiner",
    "HostResult",
    "SUMMARY_HEADER",
    "run_host",
]
