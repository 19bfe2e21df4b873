# tests/conftest.py
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from src.store.deals import InMemoryDealStore, JsonDealStore
from tests.utils import (
    make_creative_inputs,
    make_mortgage_inputs,
    make_saved_deal,
    make_wholesale_inputs,
)


# -------- Environment isolation --------
@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for var in ("RECALC_STORE", "RECALC_LOG_LEVEL", "RECALC_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)
    yield
    pkg = logging.getLogger("src")
    for handler in pkg.handlers[:]:
        pkg.removeHandler(handler)
        handler.close()


# -------- Input fixtures --------
@pytest.fixture
def creative_inputs():
    """Factory for canonical creative-financing inputs (overridable)."""

    def _factory(**overrides):
        return make_creative_inputs(**overrides)

    return _factory


@pytest.fixture
def mortgage_inputs():
    def _factory(**overrides):
        return make_mortgage_inputs(**overrides)

    return _factory


@pytest.fixture
def wholesale_inputs():
    def _factory(**overrides):
        return make_wholesale_inputs(**overrides)

    return _factory


# -------- Store fixtures --------
@pytest.fixture
def memory_store() -> InMemoryDealStore:
    return InMemoryDealStore()


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "real_estate_deals.json"


@pytest.fixture
def json_store(store_path: Path) -> JsonDealStore:
    return JsonDealStore(store_path)


@pytest.fixture
def saved_deals():
    """Three deals of mixed types, oldest first."""
    from datetime import datetime, timezone

    return [
        make_saved_deal(deal_id="a", type="creative", name="Oak", when=datetime(2024, 1, 1, tzinfo=timezone.utc)),
        make_saved_deal(
            deal_id="b",
            type="wholesale",
            name="Elm",
            when=datetime(2024, 2, 1, tzinfo=timezone.utc),
            annual_cash_flow=None,
        ),
        make_saved_deal(
            deal_id="c",
            type="mortgage",
            name="Pine",
            when=datetime(2024, 3, 1, tzinfo=timezone.utc),
            annual_cash_flow=12_000.0,
        ),
    ]
