"""Validate and repair a draft (product, attribute) extraction against the original query."""

from __future__ import annotations

import logging
import re

from pqa.schemas.models import (
    DraftExtraction,
    ValidatedExtraction,
    ValidationOutcome,
)

logger = logging.getLogger(__name__)

# Bearing designation: 3–6 digits, optionally followed by a letter suffix ("6205", "6205 N")
PRODUCT_RE = re.compile(r"\b([0-9]{3,6}(?:\s*[A-Za-z]+)?)\b")

# Surface forms accepted verbatim from the extraction collaborator
ALLOWED_ATTRIBUTES = frozenset({
    "width", "height", "diameter", "inner_diameter", "outer_diameter",
    "bore", "id", "od", "b", "d", "inner", "outer", "inside", "outside",
})

# Keyword rules over the lowercased query, evaluated in order
_ATTRIBUTE_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\b(?:width|b)\b"), "width"),
    (re.compile(r"\b(?:height|h)\b"), "height"),
    (re.compile(r"\b(?:od|outer\s*diameter|outside\s*diameter|outside)\b"), "outer_diameter"),
    (re.compile(r"\b(?:id|inner\s*diameter|inside\s*diameter|inside|inner|bore|d)\b"), "inner_diameter"),
    (re.compile(r"\bdiameter\b"), "diameter"),
]


def is_product_designation(candidate: str | None) -> bool:
    """True when the whole candidate has the bearing-designation shape."""
    if not candidate or not candidate.strip():
        return False
    return PRODUCT_RE.fullmatch(candidate.strip()) is not None


def find_product(query: str) -> str | None:
    """First designation-shaped substring of the query, if any."""
    m = PRODUCT_RE.search(query or "")
    return m.group(1).strip() if m else None


def infer_attribute(query: str) -> str | None:
    """Apply the keyword rules to the query; first matching rule wins."""
    text = (query or "").lower()
    for pattern, attribute in _ATTRIBUTE_RULES:
        if pattern.search(text):
            return attribute
    return None


def validate_extraction(draft: DraftExtraction | None, query: str) -> ValidationOutcome:
    """
    Accept the draft where it is trustworthy, otherwise repair it from the query.

    Returns a failed outcome (with the product or attribute that
    could not be resolved named in ``reason``) when either side stays empty.
    """
    draft = draft or DraftExtraction()

    product = draft.product.strip()
    if not is_product_designation(product):
        repaired = find_product(query)
        if product:
            logger.debug("Draft product %r rejected; repaired from query as %r", product, repaired)
        product = repaired or ""

    attribute = draft.attribute.strip()
    if attribute.lower() not in ALLOWED_ATTRIBUTES:
        repaired = infer_attribute(query)
        if attribute:
            logger.debug("Draft attribute %r rejected; repaired from query as %r", attribute, repaired)
        attribute = repaired or ""

    missing = [name for name, value in (("product", product), ("attribute", attribute)) if not value]
    if missing:
        return ValidationOutcome(
            reason=f"could not resolve {' and '.join(missing)} from query",
        )
    return ValidationOutcome(
        extraction=ValidatedExtraction(product=product, attribute=attribute),
    )
