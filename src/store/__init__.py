# src/store/__init__.py

from .deals import DEFAULT_STORE_PATH, DealStore, InMemoryDealStore, JsonDealStore

__all__ = ["DealStore", "InMemoryDealStore", "JsonDealStore", "DEFAULT_STORE_PATH"]
