"""Tests for the LLM query extractor (mock LLM, no network)."""

import json

import pytest

from pqa.extract.query_extractor import QueryExtractor, parse_draft, render_prompt
from pqa.schemas.models import DraftExtraction


class MockLLM:
    def __init__(self, reply):
        self.reply = reply
        self.calls = []

    def complete(self, prompt: str, **kwargs) -> str:
        self.calls.append((prompt, kwargs))
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


def test_render_prompt_includes_query():
    prompt = render_prompt("What is the width of 6205?")
    assert "Query: What is the width of 6205?" in prompt
    assert '"product"' in prompt


def test_extract_valid_json():
    llm = MockLLM(json.dumps({"product": " 6205 ", "attribute": "width"}))
    draft = QueryExtractor(llm).extract("What is the width of 6205?")
    assert draft == DraftExtraction(product="6205", attribute="width")
    _, kwargs = llm.calls[0]
    assert "system" in kwargs
    assert kwargs["max_tokens"] == 80


def test_extract_strips_code_fence():
    llm = MockLLM('```json\n{"product": "6205 N", "attribute": "height"}\n```')
    assert QueryExtractor(llm).extract("Height of 6205 N?").product == "6205 N"


def test_extract_null_fields_become_empty():
    llm = MockLLM('{"product": null, "attribute": "od"}')
    assert QueryExtractor(llm).extract("od?") == DraftExtraction(product="", attribute="od")


@pytest.mark.parametrize("reply", ["not json {{{", "[1, 2]", "", "   "])
def test_extract_unparsable_reply_returns_none(reply):
    assert QueryExtractor(MockLLM(reply)).extract("width of 6205") is None


def test_extract_api_error_returns_none():
    assert QueryExtractor(MockLLM(RuntimeError("503"))).extract("width of 6205") is None


def test_extract_without_provider_returns_none():
    assert QueryExtractor(None).extract("width of 6205") is None


def test_is_configured_reflects_provider():
    assert QueryExtractor(MockLLM("{}")).is_configured
    assert not QueryExtractor(None).is_configured


def test_parse_draft_rejects_non_object():
    with pytest.raises(ValueError):
        parse_draft('"6205"')
