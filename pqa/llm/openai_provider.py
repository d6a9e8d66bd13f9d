"""OpenAI / Azure OpenAI implementation."""

from typing import Any

from openai import AzureOpenAI, OpenAI


class OpenAIProvider:
    """OpenAI chat completion.

    When ``azure_endpoint`` is given the client talks to an Azure OpenAI
    deployment and ``model`` is the deployment name.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        azure_endpoint: str | None = None,
        api_version: str = "2024-08-01-preview",
        timeout: float = 30.0,
    ):
        if azure_endpoint:
            self._client = AzureOpenAI(
                api_key=api_key,
                azure_endpoint=azure_endpoint,
                api_version=api_version,
                timeout=timeout,
            )
        else:
            self._client = OpenAI(api_key=api_key, timeout=timeout)
        self._model = model

    def complete(self, prompt: str, **kwargs: Any) -> str:
        system = kwargs.pop("system", None)
        messages = [{"role": "system", "content": system}] if system else []
        messages.append({"role": "user", "content": prompt})
        response = self._client.chat.completions.create(
            model=kwargs.pop("model", None) or self._model,
            messages=messages,
            **kwargs,
        )
        msg = response.choices[0].message
        return msg.content or ""
