"""In-memory product attribute index with three-tier attribute lookup."""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Mapping, NamedTuple

from pqa.config import get_settings
from pqa.ingest.datasheet_loader import JsonDirectorySource, ingest_documents
from pqa.ingest.name_normalizer import normalize_token
from pqa.schemas.models import LookupResult, MatchTier, ResolutionStatus
from pqa.store.base import DatasheetSource

logger = logging.getLogger(__name__)


class _ProductEntry(NamedTuple):
    product_id: str
    attributes: Mapping[str, str]
    keys_by_fold: Mapping[str, str]  # casefolded key -> stored key


class AttributeStore:
    """
    Product id -> attribute map, built once from a DatasheetSource on first use.

    The build runs under a lock and publishes a read-only mapping; afterwards
    reads take no lock. There is no reload.
    """

    def __init__(self, source: DatasheetSource):
        self._source = source
        self._lock = threading.Lock()
        self._index: Mapping[str, _ProductEntry] | None = None

    @property
    def is_built(self) -> bool:
        return self._index is not None

    def build(self) -> None:
        """Build eagerly (no-op once built)."""
        self._ensure_built()

    def _ensure_built(self) -> Mapping[str, _ProductEntry]:
        index = self._index
        if index is not None:
            return index
        with self._lock:
            if self._index is None:
                self._index = self._build()
            return self._index

    def _build(self) -> Mapping[str, _ProductEntry]:
        try:
            documents = self._source.load_documents()
        except Exception:
            logger.exception("Datasheet source failed; attribute store will be empty")
            documents = []

        products = ingest_documents(documents)
        index: dict[str, _ProductEntry] = {}
        for product_id, attributes in products.items():
            index[product_id.casefold()] = _ProductEntry(
                product_id=product_id,
                attributes=MappingProxyType(dict(attributes)),
                keys_by_fold=MappingProxyType({k.casefold(): k for k in attributes}),
            )
        logger.info("Attribute store built: %d products", len(index))
        return MappingProxyType(index)

    def _entry(self, product_id: str) -> _ProductEntry | None:
        return self._ensure_built().get((product_id or "").strip().casefold())

    def products(self) -> list[str]:
        """Product ids as ingested, sorted case-insensitively."""
        return sorted((e.product_id for e in self._ensure_built().values()), key=str.casefold)

    def attributes(self, product_id: str) -> Mapping[str, str] | None:
        entry = self._entry(product_id)
        return entry.attributes if entry else None

    def resolve(self, product_id: str, attribute_token: str) -> LookupResult:
        """
        Look up one attribute of one product.

        Strategies, first hit wins: exact (case-insensitive) key, normalized
        key, then a scan comparing the normalized form of every stored key.
        """
        entry = self._entry(product_id)
        if entry is None:
            return LookupResult(
                status=ResolutionStatus.NOT_FOUND,
                reason=f"unknown product {product_id!r}",
            )

        token = attribute_token or ""
        key = entry.keys_by_fold.get(token.casefold())
        if key is not None:
            return _hit(entry.attributes[key], MatchTier.EXACT)

        normalized = normalize_token(token)
        if normalized:
            key = entry.keys_by_fold.get(normalized.casefold())
            if key is not None:
                return _hit(entry.attributes[key], MatchTier.NORMALIZED)

            for stored_key, value in entry.attributes.items():
                if normalize_token(stored_key) == normalized:
                    return _hit(value, MatchTier.SCAN)

        return LookupResult(
            status=ResolutionStatus.NOT_FOUND,
            reason=f"attribute {attribute_token!r} not found for product {entry.product_id!r}",
        )


def _hit(value: str, tier: MatchTier) -> LookupResult:
    return LookupResult(found=True, value=value, tier=tier, status=ResolutionStatus.FOUND)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

_store: AttributeStore | None = None
_store_lock = threading.Lock()


def get_attribute_store() -> AttributeStore:
    """Return the process-wide store over the configured datasheet directory."""
    global _store
    if _store is not None:
        return _store
    with _store_lock:
        if _store is None:
            settings = get_settings()
            logger.info("Using datasheet directory %s", settings.data_dir)
            _store = AttributeStore(JsonDirectorySource(settings.data_dir))
    return _store
