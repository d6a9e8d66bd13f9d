"""Product attribute index and lookup."""

from pqa.store.attribute_store import AttributeStore, get_attribute_store
from pqa.store.base import DatasheetSource

__all__ = ["AttributeStore", "DatasheetSource", "get_attribute_store"]
