"""Datasheet source interface (Protocol) for the attribute store."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DatasheetSource(Protocol):
    """
    Supplies the complete set of raw datasheet documents once, at build time.

    Each document is a decoded JSON value: a product object or an array of
    product objects. The store never refreshes or watches the source.
    """

    def load_documents(self) -> list[Any]:
        ...
