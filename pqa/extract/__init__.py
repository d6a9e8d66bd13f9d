"""Query extraction: LLM draft extraction and its validation against the query text."""

from pqa.extract.query_extractor import QueryExtractor, parse_draft
from pqa.extract.validator import validate_extraction

__all__ = ["QueryExtractor", "parse_draft", "validate_extraction"]
