"""Query pipeline: cache -> extraction -> validation -> resolution -> answer -> cache."""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import Any, Callable

from pydantic import ValidationError

from pqa.cache.tiers import CacheTier, canonical_key, draft_key, get_cache_tier
from pqa.config import Settings, get_settings
from pqa.extract.query_extractor import QueryExtractor
from pqa.extract.validator import validate_extraction
from pqa.ingest.name_normalizer import normalize_token
from pqa.llm import provider_from_settings
from pqa.schemas.models import Answer, DraftExtraction, ResolutionStatus
from pqa.store.attribute_store import AttributeStore, get_attribute_store

logger = logging.getLogger(__name__)

INPUT_INVALID_MESSAGE = (
    "Sorry, I couldn't identify a product designation and attribute in your question."
)
UNAVAILABLE_MESSAGE = "The assistant is temporarily unavailable. Please try again later."


def format_found(product: str, attribute: str, value: str) -> str:
    return f"The {attribute.replace('_', ' ')} of the {product} bearing is {value}."


def format_not_found(product: str) -> str:
    return f"I'm sorry, I can't find that information for product {product}."


class QueryPipeline:
    """
    Answer one free-text question about a product attribute.

    The extraction call and every cache call run in a worker thread bounded by
    a timeout; a timeout or error counts as "nothing came back". Only found
    answers are cached, under both the draft (query text) key and the
    canonical (product, attribute) key.
    """

    def __init__(
        self,
        store: AttributeStore,
        extractor: QueryExtractor,
        cache: CacheTier,
        *,
        cache_ttl: timedelta = timedelta(hours=24),
        extraction_timeout: float = 30.0,
        cache_timeout: float = 2.0,
    ):
        self._store = store
        self._extractor = extractor
        self._cache = cache
        self._cache_ttl = cache_ttl
        self._extraction_timeout = extraction_timeout
        self._cache_timeout = cache_timeout

    async def _bounded(self, fn: Callable[..., Any], *args: Any, timeout: float, what: str) -> Any:
        try:
            return await asyncio.wait_for(asyncio.to_thread(fn, *args), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("%s timed out after %.1fs", what, timeout)
        except Exception:
            logger.exception("%s failed", what)
        return None

    async def _cached_answer(self, key: str) -> Answer | None:
        payload = await self._bounded(self._cache.get, key, timeout=self._cache_timeout, what="Cache get")
        if not payload:
            return None
        try:
            return Answer.model_validate_json(payload)
        except ValidationError:
            logger.warning("Ignoring malformed cache entry %s", key)
            return None

    async def _store_answer(self, answer: Answer, *keys: str) -> None:
        payload = answer.model_dump_json()
        for key in keys:
            await self._bounded(
                self._cache.set, key, payload, self._cache_ttl,
                timeout=self._cache_timeout, what="Cache set",
            )

    async def answer(self, query: str) -> Answer:
        query = query.strip()
        query_key = draft_key(query)

        cached = await self._cached_answer(query_key)
        if cached is not None:
            logger.info("Cache hit (query) for %r", query)
            return cached

        draft: DraftExtraction | None = await self._bounded(
            self._extractor.extract, query,
            timeout=self._extraction_timeout, what="Extraction",
        )
        # A configured extractor that returned nothing has failed or timed out
        extractor_failed = draft is None and self._extractor.is_configured
        if draft is None:
            logger.info("No draft extraction; repairing from query text only")

        outcome = validate_extraction(draft, query)
        if not outcome.ok:
            if extractor_failed:
                status, message = ResolutionStatus.EXTERNAL_UNAVAILABLE, UNAVAILABLE_MESSAGE
            else:
                status, message = ResolutionStatus.INPUT_INVALID, INPUT_INVALID_MESSAGE
            logger.info("Validation failed (%s): %s", status.value, outcome.reason)
            return Answer(found=False, status=status, message=message)

        product = outcome.extraction.product
        token = outcome.extraction.attribute
        attribute = normalize_token(token)
        pair_key = canonical_key(product, attribute)

        cached = await self._cached_answer(pair_key)
        if cached is not None:
            logger.info("Cache hit (canonical) for %s", pair_key)
            await self._store_answer(cached, query_key)
            return cached

        lookup = self._store.resolve(product, token)
        if not lookup.found:
            logger.info("Not found: %s", lookup.reason)
            return Answer(
                found=False,
                status=ResolutionStatus.NOT_FOUND,
                product=product,
                attribute=attribute,
                message=format_not_found(product),
            )

        answer = Answer(
            found=True,
            status=ResolutionStatus.FOUND,
            product=product,
            attribute=attribute,
            value=lookup.value or "",
            message=format_found(product, attribute, lookup.value or ""),
        )
        await self._store_answer(answer, pair_key, query_key)
        return answer


def build_pipeline(settings: Settings | None = None) -> QueryPipeline:
    """Wire the pipeline from settings: shared store and cache, configured LLM."""
    settings = settings or get_settings()
    llm = provider_from_settings(settings) if settings.llm_api_key else None
    if llm is None:
        logger.warning("No API key for LLM provider %r; using query-text repair only", settings.pqa_llm_provider)
    return QueryPipeline(
        get_attribute_store(),
        QueryExtractor(llm),
        get_cache_tier(),
        cache_ttl=timedelta(seconds=settings.cache_ttl_seconds),
        extraction_timeout=settings.extraction_timeout_s,
        cache_timeout=settings.cache_timeout_s,
    )
