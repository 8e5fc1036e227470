"""Pydantic models for pipeline configuration."""

import hashlib
import json
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

# INPHARED phage table snapshot used when no local copy is supplied
INPHARED_TABLE_URL = "http://inphared.s3.climb.ac.uk/1Aug2022_data.tsv"


class ReferenceSources(BaseModel):
    """Locations of the reference tables used for annotation."""

    phage_table_url: str = Field(
        default=INPHARED_TABLE_URL,
        description="URL of the INPHARED phage table (used when no local file is given)",
    )
    circular_table: Path = Field(
        default=Path("genome_db/checkv_circular.tsv"),
        description="CheckV circular genome table, relative to the database directory",
    )
    genbank_table: Path = Field(
        default=Path("genome_db/checkv_genbank.tsv"),
        description="CheckV GenBank genome table, relative to the database directory",
    )

    @field_validator("circular_table", "genbank_table")
    @classmethod
    def require_relative(cls, v: Path) -> Path:
        """Genome tables are resolved against --db, so they must be relative."""
        if v.is_absolute():
            raise ValueError(f"Genome table path must be relative to the database directory: {v}")
        return v


class APIConfig(BaseModel):
    """Configuration for the HTTP client fetching remote tables."""

    max_retries: int = Field(
        default=1,
        ge=1,
        le=20,
        description="Maximum attempts for a failed request (1 = no retry)",
    )
    use_cache: bool = Field(
        default=True,
        description="Cache downloaded tables on disk",
    )
    cache_ttl_seconds: int = Field(
        default=86400,
        ge=0,
        description="Cache time-to-live in seconds (0 = infinite)",
    )
    timeout_seconds: int = Field(
        default=60,
        ge=1,
        description="Request timeout in seconds",
    )


class DistanceToolConfig(BaseModel):
    """Configuration for the external Mash distance tool."""

    executable: str = Field(
        default="mash",
        min_length=1,
        description="Mash executable name or path",
    )
    max_p_value: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Maximum p-value reported by mash dist (-v)",
    )


class PipelineConfig(BaseModel):
    """Main pipeline configuration."""

    cache_dir: Path = Field(
        default=Path(".phagelink_cache"),
        description="Directory for HTTP response caching",
    )
    sources: ReferenceSources = Field(
        default_factory=ReferenceSources,
        description="Reference table locations",
    )
    api: APIConfig = Field(
        default_factory=APIConfig,
        description="HTTP client configuration",
    )
    distance: DistanceToolConfig = Field(
        default_factory=DistanceToolConfig,
        description="Distance tool configuration",
    )

    def config_hash(self) -> str:
        """
        Compute SHA-256 hash of the configuration.

        Returns a deterministic hash based on all config values,
        useful for telling runs with different settings apart.
        """
        config_dict = self.model_dump(mode="python")
        config_json = json.dumps(
            config_dict,
            sort_keys=True,
            default=str,
        )
        return hashlib.sha256(config_json.encode()).hexdigest()
