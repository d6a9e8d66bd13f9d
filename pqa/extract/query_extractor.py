"""Draft (product, attribute) extraction from a free-text query via an LLM."""

import json
import logging
import re
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from pqa.llm.base import LLMProvider
from pqa.schemas.models import DraftExtraction

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"

SYSTEM_PROMPT = (
    "You extract product designations and attributes from user queries about bearings. "
    "Return strict JSON with keys product and attribute. If not detected, use empty strings."
)


def _strip_code_fence(raw: str) -> str:
    s = raw.strip()
    if s.startswith("```"):
        s = re.sub(r"^```\w*\n?", "", s)
        s = re.sub(r"\n?```\s*$", "", s)
    return s.strip()


def _as_text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def parse_draft(raw: str) -> DraftExtraction:
    """Parse the model's JSON reply. Raises ValueError on anything but a JSON object."""
    data = json.loads(_strip_code_fence(raw))
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return DraftExtraction(
        product=_as_text(data.get("product")),
        attribute=_as_text(data.get("attribute")),
    )


def render_prompt(query: str) -> str:
    env = Environment(loader=FileSystemLoader(str(PROMPTS_DIR)))
    return env.get_template("extract_query.j2").render(query=query)


class QueryExtractor:
    """
    Ask the LLM for a draft extraction.

    ``extract`` never raises: an unconfigured provider, an API error or an
    unparsable reply are logged and returned as None.
    """

    def __init__(self, llm: LLMProvider | None):
        self._llm = llm

    @property
    def is_configured(self) -> bool:
        return self._llm is not None

    def extract(self, query: str) -> DraftExtraction | None:
        if self._llm is None:
            logger.warning("LLM provider not configured; skipping extraction")
            return None

        try:
            raw = self._llm.complete(
                render_prompt(query),
                system=SYSTEM_PROMPT,
                temperature=0.1,
                max_tokens=80,
                response_format={"type": "json_object"},
            )
        except Exception as e:
            logger.error("Extraction request failed: %s", e)
            return None

        if not raw or not raw.strip():
            return None
        try:
            return parse_draft(raw)
        except ValueError as e:  # json.JSONDecodeError is a ValueError
            logger.error("Failed to parse extraction JSON: %s", e)
            return None
