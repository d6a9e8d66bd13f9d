"""Normalize attribute names into canonical snake_case keys.

Two dialects live here and are kept apart:

* ``normalize_token``: for free-form tokens (query attributes, stored keys).
  Every non-alphanumeric character becomes ``_`` and the slug is then passed
  through an exact-match synonym table (``b`` -> ``width``, ``c0`` ->
  ``basic_static_load_rating`` ...).
* ``normalize_display_name``: for human-readable datasheet labels
  ("Basic dynamic load rating C"). Ordered substring rules first, then a
  whitespace-only slug with no synonym table.

Merging the two would change which stored keys a query can reach.
"""

from __future__ import annotations

from typing import Any

# Exact-match synonym table for normalize_token. Every canonical value maps to itself.
_TOKEN_SYNONYMS: dict[str, str] = {
    # Dimensions
    "b": "width",
    "width": "width",
    "h": "height",
    "height": "height",
    "d": "inner_diameter",
    "id": "inner_diameter",
    "bore": "inner_diameter",
    "inner": "inner_diameter",
    "inner_diameter": "inner_diameter",
    "od": "outer_diameter",
    "outer": "outer_diameter",
    "outside": "outer_diameter",
    "outer_diameter": "outer_diameter",
    "outside_diameter": "outer_diameter",
    "diameter": "diameter",
    # Performance
    "reference_speed": "reference_speed",
    "limiting_speed": "limiting_speed",
    "basic_dynamic_load_rating": "basic_dynamic_load_rating",
    "basic_static_load_rating": "basic_static_load_rating",
    "dynamic_load_rating": "basic_dynamic_load_rating",
    "static_load_rating": "basic_static_load_rating",
    "c": "basic_dynamic_load_rating",
    "c0": "basic_static_load_rating",
    # Properties
    "material": "material_bearing",
    "material_bearing": "material_bearing",
    "cage": "cage",
    "bore_type": "bore_type",
    "coating": "coating",
    "number_of_rows": "number_of_rows",
    "rows": "number_of_rows",
    "lubricant": "lubricant",
    "relubrication_feature": "relubrication_feature",
    "locating_feature_bearing_outer_ring": "locating_feature_bearing_outer_ring",
    "tolerance_class": "tolerance_class",
    "filling_slots": "filling_slots",
    "sealing": "sealing",
    "radial_internal_clearance": "radial_internal_clearance",
    "matched_arrangement": "matched_arrangement",
    # Logistics
    "ean": "ean_code",
    "ean_code": "ean_code",
    "products_per_pallet": "products_per_pallet",
    "pack_code": "pack_code",
    "pack_gross_weight": "pack_gross_weight",
    "pack_height": "pack_height",
    "pack_length": "pack_length",
    "pack_volume": "pack_volume",
    "pack_width": "pack_width",
    "products_per_pack": "products_per_pack",
    "collecting_pack_quantity": "collecting_pack_quantity",
    "eclass_code": "eclass_code",
    "product_net_weight": "product_net_weight",
    "unspsc_code": "unspsc_code",
}

# Ordered (substring, key) rules for display names: first hit wins, so the
# longer performance names must stay ahead of the short logistics ones.
_DISPLAY_NAME_RULES: list[tuple[str, str]] = [
    ("reference speed", "reference_speed"),
    ("limiting speed", "limiting_speed"),
    ("basic dynamic load rating", "basic_dynamic_load_rating"),
    ("basic static load rating", "basic_static_load_rating"),
    ("eclass", "eclass_code"),
    ("ean", "ean_code"),
    ("unspsc", "unspsc_code"),
    ("material", "material_bearing"),
]


def _clean(raw: Any) -> str:
    """Coerce to a stripped, lowercased string."""
    if raw is None:
        return ""
    return str(raw).strip().lower()


def _collapse(slug: str) -> str:
    while "__" in slug:
        slug = slug.replace("__", "_")
    return slug.strip("_")


def slugify_token(raw: Any) -> str:
    """Lowercase, non-alphanumerics -> ``_``, collapse and trim underscores."""
    lowered = _clean(raw)
    return _collapse("".join(ch if ch.isalnum() else "_" for ch in lowered))


def normalize_token(raw: Any) -> str:
    """
    Normalize an attribute token ("OD", "Inner-Diameter", "c0") to a canonical key.

    Unknown tokens come back as their slug. Idempotent; never raises.
    """
    slug = slugify_token(raw)
    if not slug:
        return ""
    return _TOKEN_SYNONYMS.get(slug, slug)


def normalize_display_name(raw: Any) -> str:
    """
    Normalize a datasheet display label ("Limiting speed", "EAN code") to a key.

    Only whitespace turns into ``_``; other punctuation is dropped.
    """
    lowered = _clean(raw)
    if not lowered:
        return ""
    for needle, key in _DISPLAY_NAME_RULES:
        if needle in lowered:
            return key

    chars: list[str] = []
    for ch in lowered:
        if ch.isalnum():
            chars.append(ch)
        elif ch.isspace():
            chars.append("_")
    return _collapse("".join(chars))
