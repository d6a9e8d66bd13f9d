"""Pydantic models: single source of truth for extraction, lookup and answer shapes."""

from enum import Enum

from pydantic import BaseModel


class ResolutionStatus(str, Enum):
    FOUND = "found"
    INPUT_INVALID = "input_invalid"  # product or attribute unresolved after validation
    NOT_FOUND = "not_found"  # unknown product, or attribute missed by every match tier
    EXTERNAL_UNAVAILABLE = "external_unavailable"  # extraction collaborator failed / timed out


class MatchTier(str, Enum):
    """Which lookup strategy produced a hit."""

    EXACT = "exact"
    NORMALIZED = "normalized"
    SCAN = "scan"


class DraftExtraction(BaseModel):
    """Unvalidated (product, attribute) guess from the extraction collaborator."""

    product: str = ""
    attribute: str = ""


class ValidatedExtraction(BaseModel):
    """A (product, attribute) pair that passed validation / repair against the query."""

    product: str
    attribute: str


class ValidationOutcome(BaseModel):
    """Validated extraction, or the reason validation failed (input_invalid)."""

    extraction: ValidatedExtraction | None = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.extraction is not None


class LookupResult(BaseModel):
    """Outcome of AttributeStore.resolve."""

    found: bool = False
    value: str | None = None
    tier: MatchTier | None = None
    status: ResolutionStatus = ResolutionStatus.NOT_FOUND
    reason: str = ""


class Answer(BaseModel):
    """Answer surface handed to the transport (API / CLI)."""

    found: bool = False
    status: ResolutionStatus = ResolutionStatus.NOT_FOUND
    product: str = ""
    attribute: str = ""
    value: str = ""
    message: str = ""
