"""Pydantic models: single source of truth for all data shapes."""

from pqa.schemas.models import (
    Answer,
    DraftExtraction,
    LookupResult,
    MatchTier,
    ResolutionStatus,
    ValidatedExtraction,
    ValidationOutcome,
)

__all__ = [
    "Answer",
    "DraftExtraction",
    "LookupResult",
    "MatchTier",
    "ResolutionStatus",
    "ValidatedExtraction",
    "ValidationOutcome",
]
