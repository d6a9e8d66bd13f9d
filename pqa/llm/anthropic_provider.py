"""Anthropic LLM implementation."""

from typing import Any

from anthropic import Anthropic


class AnthropicProvider:
    """Anthropic chat completion."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-3-5-sonnet-20241022",
        timeout: float = 30.0,
    ):
        self._client = Anthropic(api_key=api_key, timeout=timeout)
        self._model = model

    def complete(self, prompt: str, **kwargs: Any) -> str:
        request: dict[str, Any] = {
            "model": kwargs.get("model") or self._model,
            "max_tokens": kwargs.get("max_tokens", 1024),
            "messages": [{"role": "user", "content": prompt}],
        }
        if kwargs.get("system"):
            request["system"] = kwargs["system"]
        if kwargs.get("temperature") is not None:
            request["temperature"] = kwargs["temperature"]
        response = self._client.messages.create(**request)
        return response.content[0].text if response.content else ""
