"""LLM provider protocol used by the query extractor."""

from typing import Any, Protocol


class LLMProvider(Protocol):
    """Protocol for LLM backends (OpenAI / Azure OpenAI, Anthropic).

    ``complete`` accepts ``system`` (system prompt), ``temperature`` and
    ``max_tokens`` keyword arguments.
    """

    def complete(self, prompt: str, **kwargs: Any) -> str:
        """Return raw text completion."""
        ...
