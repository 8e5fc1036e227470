from .loader import load_config, load_config_with_overrides
from .schema import (
    INPHARED_TABLE_URL,
    APIConfig,
    DistanceToolConfig,
    PipelineConfig,
    ReferenceSources,
)

__all__ = [
    "load_config",
    "load_config_with_overrides",
    "PipelineConfig",
    "ReferenceSources",
    "APIConfig",
    "DistanceToolConfig",
    "INPHARED_TABLE_URL",
]
