"""Reference tables: layouts, sources, and exact-key indexes."""

from phagelink.references.fetch import (
    LocalReferenceTable,
    ReferenceDatabase,
    ReferenceTableSource,
    RemoteReferenceTable,
    read_reference_db,
    read_table_text,
    resolve_phage_source,
)
from phagelink.references.index import KeyIndex, split_table_lines
from phagelink.references.models import (
    COMPLETENESS_KEY_COLUMN,
    COMPLETENESS_REFERENCE_COLUMN,
    FAMILY_LAYOUTS,
    FAMILY_PREFIXES,
    KEY_COLUMN,
    PHAGE_HOST_COLUMN,
    Family,
    FamilyLayout,
)

__all__ = [
    "Family",
    "FamilyLayout",
    "FAMILY_LAYOUTS",
    "FAMILY_PREFIXES",
    "KEY_COLUMN",
    "COMPLETENESS_KEY_COLUMN",
    "COMPLETENESS_REFERENCE_COLUMN",
    "PHAGE_HOST_COLUMN",
    "KeyIndex",
    "split_table_lines",
    "ReferenceTableSource",
    "LocalReferenceTable",
    "RemoteReferenceTable",
    "ReferenceDatabase",
    "read_reference_db",
    "read_table_text",
    "resolve_phage_source",
]
