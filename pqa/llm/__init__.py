"""LLM adapter layer: OpenAI (incl. Azure) and Anthropic behind a common protocol."""

from pqa.config import Settings
from pqa.llm.anthropic_provider import AnthropicProvider
from pqa.llm.base import LLMProvider
from pqa.llm.openai_provider import OpenAIProvider


def get_provider(provider_name: str, **kwargs: object) -> LLMProvider:
    """Return the configured LLM provider. provider_name: 'openai' | 'anthropic'."""
    if provider_name.lower() == "anthropic":
        return AnthropicProvider(**kwargs)
    return OpenAIProvider(**kwargs)


def provider_from_settings(settings: Settings) -> LLMProvider:
    """Build the provider named by ``settings.pqa_llm_provider`` with its key and model."""
    name = settings.pqa_llm_provider.lower()
    if name == "anthropic":
        return get_provider(
            name,
            api_key=settings.anthropic_api_key,
            model=settings.pqa_anthropic_model,
            timeout=settings.extraction_timeout_s,
        )
    if settings.azure_openai_endpoint:
        return get_provider(
            name,
            api_key=settings.azure_openai_key,
            model=settings.azure_openai_deployment,
            azure_endpoint=settings.azure_openai_endpoint,
            api_version=settings.azure_openai_api_version,
            timeout=settings.extraction_timeout_s,
        )
    return get_provider(
        name,
        api_key=settings.openai_api_key,
        model=settings.pqa_openai_model,
        timeout=settings.extraction_timeout_s,
    )


__all__ = ["LLMProvider", "OpenAIProvider", "AnthropicProvider", "get_provider", "provider_from_settings"]
