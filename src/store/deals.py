# src/store/deals.py
"""
Deal store: save/load/delete calculator runs.

Design
------
- Protocol `DealStore` is the seam callers depend on; the calculation layer never imports it.
- `InMemoryDealStore` keeps deals in a list (tests, one-shot CLI runs).
- `JsonDealStore` persists the same list as one JSON array in a single file,
  rewritten whole on every mutation.

Public API
----------
class DealStore(Protocol):
    save(type, name, inputs, results) -> SavedDeal
    update(deal) -> bool
    get(id) -> SavedDeal | None
    require(id) -> SavedDeal            # raises DealNotFoundError
    list() -> list[SavedDeal]
    list_by_type(type) -> list[SavedDeal]
    delete(id) -> bool

Invariants
----------
- Insertion order is preserved by list().
- ids are UUID4 strings; dates are timezone-aware ISO-8601 (UTC).
"""

from __future__ import annotations

import json
import logging
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError

from src.core.errors import DealNotFoundError, StoreCorruptedError
from src.schemas.models import DealType, SavedDeal

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path("data") / "real_estate_deals.json"


class DealStore(Protocol):
    def save(self, type: DealType, name: str, inputs: dict[str, Any], results: dict[str, Any]) -> SavedDeal: ...

    def update(self, deal: SavedDeal) -> bool: ...

    def get(self, deal_id: str) -> SavedDeal | None: ...

    def require(self, deal_id: str) -> SavedDeal: ...

    def list(self) -> list[SavedDeal]: ...

    def list_by_type(self, type: DealType) -> list[SavedDeal]: ...

    def delete(self, deal_id: str) -> bool: ...


def _new_deal(type: DealType, name: str, inputs: dict[str, Any], results: dict[str, Any]) -> SavedDeal:
    return SavedDeal(
        id=str(uuid.uuid4()),
        type=type,
        name=name,
        date=datetime.now(timezone.utc).isoformat(),
        inputs=inputs,
        results=results,
    )


class InMemoryDealStore:
    """List-backed store. Subclasses persist by overriding _load/_flush."""

    def __init__(self, deals: list[SavedDeal] | None = None) -> None:
        self._deals: list[SavedDeal] = list(deals or [])

    # ---------- persistence hooks ----------

    def _load(self) -> list[SavedDeal]:
        return self._deals

    def _flush(self, deals: list[SavedDeal]) -> None:
        self._deals = deals

    # ---------- Public API ----------

    def save(self, type: DealType, name: str, inputs: dict[str, Any], results: dict[str, Any]) -> SavedDeal:
        deals = list(self._load())
        deal = _new_deal(type, name, inputs, results)
        deals.append(deal)
        self._flush(deals)
        logger.info("saved %s deal %r as %s", type, name, deal.id)
        return deal

    def update(self, deal: SavedDeal) -> bool:
        deals = list(self._load())
        for i, existing in enumerate(deals):
            if existing.id == deal.id:
                deals[i] = deal
                self._flush(deals)
                logger.info("updated deal %s", deal.id)
                return True
        return False

    def get(self, deal_id: str) -> SavedDeal | None:
        return next((d for d in self._load() if d.id == deal_id), None)

    def require(self, deal_id: str) -> SavedDeal:
        deal = self.get(deal_id)
        if deal is None:
            raise DealNotFoundError(f"no saved deal with id {deal_id!r}")
        return deal

    def list(self) -> list[SavedDeal]:
        return list(self._load())

    def list_by_type(self, type: DealType) -> list[SavedDeal]:
        return [d for d in self._load() if d.type == type]

    def delete(self, deal_id: str) -> bool:
        deals = list(self._load())
        kept = [d for d in deals if d.id != deal_id]
        if len(kept) == len(deals):
            return False
        self._flush(kept)
        logger.info("deleted deal %s", deal_id)
        return True


class JsonDealStore(InMemoryDealStore):
    """
    File-backed store: one JSON array of deals.

    A missing file reads as an empty store. A file that is not a JSON array of
    valid deals raises StoreCorruptedError rather than being silently replaced.
    """

    def __init__(self, path: str | Path = DEFAULT_STORE_PATH) -> None:
        super().__init__()
        self.path = Path(path)

    def _load(self) -> list[SavedDeal]:
        if not self.path.exists():
            return []
        text = self.path.read_text(encoding="utf-8")
        if not text.strip():
            return []
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise StoreCorruptedError(f"Invalid JSON in {self.path}: {e}") from e
        if not isinstance(raw, list):
            raise StoreCorruptedError(f"{self.path} must hold a JSON array of deals")
        try:
            deals = [SavedDeal.model_validate(item) for item in raw]
        except ValidationError as e:
            raise StoreCorruptedError(f"Invalid deal record in {self.path}:\n{e}") from e
        logger.debug("loaded %d deals from %s", len(deals), self.path)
        return deals

    def _flush(self, deals: list[SavedDeal]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps([d.model_dump(mode="json") for d in deals], indent=2)
        # atomic replace
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(payload, encoding="utf-8")
        os.replace(tmp, self.path)
