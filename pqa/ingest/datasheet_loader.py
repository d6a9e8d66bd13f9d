"""Datasheet ingestion: read JSON datasheets and flatten them into per-product attribute maps."""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Iterable

from pqa.ingest.name_normalizer import normalize_display_name

logger = logging.getLogger(__name__)

# Product identifier fields, in priority order
ID_FIELDS = ("product", "designation", "number", "sku", "title")

# Dimension symbols are case-sensitive: "d" is the bore, "D" the outside diameter
_DIMENSION_SYMBOLS = {
    "B": "width",
    "d": "inner_diameter",
    "D": "outer_diameter",
}

# Sections flattened through normalize_display_name: name -> append unit?
_NAMED_SECTIONS = {
    "performance": True,
    "logistics": True,
    "properties": False,
    "specifications": False,
}


def format_value(value: Any) -> str:
    """Render a JSON value as a display string with invariant number formatting."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer() and abs(value) < 1e15:
            return str(int(value))
        return repr(value)
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _get(entry: dict[str, Any], field: str) -> str:
    """Case-insensitive field read, stripped; missing -> ''."""
    for k, v in entry.items():
        if k.lower() == field:
            return format_value(v).strip()
    return ""


def _set_attribute(attributes: dict[str, str], key: str, value: str) -> None:
    """Last write wins, comparing keys case-insensitively."""
    folded = key.casefold()
    for existing in [k for k in attributes if k.casefold() == folded]:
        del attributes[existing]
    attributes[key] = value


def _join_unit(value: str, unit: str, sep: str) -> str:
    return f"{value}{sep}{unit}" if unit else value


def _dimension_key(symbol: str, name: str) -> str | None:
    key = _DIMENSION_SYMBOLS.get(symbol.strip())
    if key:
        return key
    dn = name.strip().lower()
    if not dn:
        return None
    if "width" in dn:
        return "width"
    if "bore" in dn or "inner diameter" in dn:
        return "inner_diameter"
    if "outside diameter" in dn or "outer diameter" in dn:
        return "outer_diameter"
    if dn == "diameter":
        return "diameter"
    return None


def _flatten_dimensions(entries: list[Any], attributes: dict[str, str]) -> None:
    for dim in entries:
        if not isinstance(dim, dict):
            continue
        value = _get(dim, "value")
        if not value:
            continue
        key = _dimension_key(_get(dim, "symbol"), _get(dim, "name"))
        if key:
            # "15mm": dimensions carry no separator
            _set_attribute(attributes, key, _join_unit(value, _get(dim, "unit"), ""))


def _flatten_named(entries: list[Any], attributes: dict[str, str], with_unit: bool) -> None:
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        name = _get(entry, "name")
        value = _get(entry, "value")
        if not name or not value:
            continue
        key = normalize_display_name(name)
        if not key:
            continue
        display = _join_unit(value, _get(entry, "unit"), " ") if with_unit else value
        _set_attribute(attributes, key, display)


def _product_id(obj: dict[str, Any]) -> str | None:
    lowered = {k.lower(): v for k, v in obj.items()}
    for field in ID_FIELDS:
        candidate = format_value(lowered.get(field)).strip()
        if candidate:
            return candidate
    return None


def flatten_product(obj: dict[str, Any]) -> tuple[str, dict[str, str]] | None:
    """
    Flatten one product object into ``(product_id, attributes)``.

    Returns None when the object carries no identifier.
    """
    product_id = _product_id(obj)
    if not product_id:
        return None

    attributes: dict[str, str] = {}
    for name, value in obj.items():
        field = name.lower()
        if field in ID_FIELDS:
            continue
        if field == "dimensions" and isinstance(value, list):
            _flatten_dimensions(value, attributes)
        elif field in _NAMED_SECTIONS and isinstance(value, list):
            _flatten_named(value, attributes, with_unit=_NAMED_SECTIONS[field])
        else:
            _set_attribute(attributes, name, format_value(value))
    return product_id, attributes


def _product_objects(document: Any) -> list[dict[str, Any]]:
    if isinstance(document, dict):
        return [document]
    if isinstance(document, list):
        return [item for item in document if isinstance(item, dict)]
    raise ValueError(f"expected a product object or an array, got {type(document).__name__}")


def ingest_documents(documents: Iterable[Any]) -> dict[str, dict[str, str]]:
    """
    Build the product index from raw (already decoded) datasheet documents.

    Each document is a single product object or an array of them. A later
    product with the same id (case-insensitive) replaces the earlier one
    wholesale. A malformed document is logged and skipped.
    """
    products: dict[str, dict[str, str]] = {}
    key_by_fold: dict[str, str] = {}

    for index, document in enumerate(documents):
        try:
            objects = _product_objects(document)
            flattened = [f for f in (flatten_product(obj) for obj in objects) if f is not None]
        except Exception:
            logger.exception("Skipping malformed datasheet document #%d", index)
            continue

        for product_id, attributes in flattened:
            previous = key_by_fold.get(product_id.casefold())
            if previous is not None:
                del products[previous]
            products[product_id] = attributes
            key_by_fold[product_id.casefold()] = product_id

    logger.info("Ingested %d products", len(products))
    return products


def load_datasheet_dir(data_dir: str | Path) -> list[Any]:
    """Decode every top-level ``*.json`` file in ``data_dir``; unreadable files are skipped."""
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        logger.warning("Datasheet directory not found: %s", data_dir)
        return []

    documents: list[Any] = []
    for path in sorted(data_dir.glob("*.json")):
        try:
            with open(path, "r", encoding="utf-8") as f:
                documents.append(json.load(f))
        except (OSError, ValueError) as e:
            logger.warning("Failed to load datasheet file %s: %s", path, e)
    logger.info("Loaded %d datasheet files from %s", len(documents), data_dir)
    return documents


class JsonDirectorySource:
    """DatasheetSource over a directory of JSON files."""

    def __init__(self, data_dir: str | Path):
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def load_documents(self) -> list[Any]:
        return load_datasheet_dir(self._data_dir)
