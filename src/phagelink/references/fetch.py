"""Read reference tables from disk or download them."""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import structlog

from phagelink.api_clients import CachedAPIClient
from phagelink.config.schema import PipelineConfig, ReferenceSources

logger = structlog.get_logger()


def read_table_text(path: Path | str, label: str) -> str:
    """Read a whole text table into memory.

    Args:
        path: File to read
        label: Human-readable table name used in the error message

    Returns:
        File contents

    Raises:
        FileNotFoundError: If the file does not exist or is not a file
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Cannot read the {label}: {path}")

    text = path.read_text(encoding="utf-8")
    logger.info("table_read", table=label, path=str(path), lines=text.count("\n"))
    return text


class ReferenceTableSource(Protocol):
    """Anything that can produce the phage reference table as text."""

    def fetch_reference_table(self) -> str:
        ...


class LocalReferenceTable:
    """Phage reference table stored on disk."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def fetch_reference_table(self) -> str:
        return read_table_text(self.path, "phage table")

    def __repr__(self) -> str:
        return f"LocalReferenceTable({str(self.path)!r})"


class RemoteReferenceTable:
    """Phage reference table downloaded over HTTP."""

    def __init__(self, client: CachedAPIClient, url: str):
        self.client = client
        self.url = url

    def fetch_reference_table(self) -> str:
        logger.info("phage_table_download_start", url=self.url)
        text = self.client.get_text(self.url)
        logger.info("phage_table_download_complete", url=self.url, lines=text.count("\n"))
        return text

    def __repr__(self) -> str:
        return f"RemoteReferenceTable({self.url!r})"


def resolve_phage_source(
    path: Path | str | None,
    config: PipelineConfig,
) -> ReferenceTableSource:
    """Pick the local file when given, otherwise the configured remote URL."""
    if path is not None:
        return LocalReferenceTable(path)
    return RemoteReferenceTable(
        CachedAPIClient.from_config(config),
        config.sources.phage_table_url,
    )


@dataclass
class ReferenceDatabase:
    """Raw text of the CheckV genome tables."""

    circular_text: str
    genbank_text: str


def read_reference_db(
    db_dir: Path | str,
    sources: ReferenceSources | None = None,
) -> ReferenceDatabase:
    """Read the CheckV circular and GenBank tables from a database directory.

    Raises:
        FileNotFoundError: If either table is missing
    """
    db_dir = Path(db_dir)
    sources = sources or ReferenceSources()

    return ReferenceDatabase(
        circular_text=read_table_text(db_dir / sources.circular_table, "circular table"),
        genbank_text=read_table_text(db_dir / sources.genbank_table, "genbank table"),
    )
