"""Datasheet ingestion: name normalization and document flattening."""

from pqa.ingest.datasheet_loader import (
    JsonDirectorySource,
    flatten_product,
    ingest_documents,
    load_datasheet_dir,
)
from pqa.ingest.name_normalizer import normalize_display_name, normalize_token

__all__ = [
    "JsonDirectorySource",
    "flatten_product",
    "ingest_documents",
    "load_datasheet_dir",
    "normalize_display_name",
    "normalize_token",
]
