# tests/test_deal_store.py
import json
import uuid

import pytest

from src.core.errors import DealNotFoundError, StoreCorruptedError
from src.store.deals import InMemoryDealStore, JsonDealStore


def _save_two(store):
    a = store.save("creative", "Oak St", {"purchase_price": 180_000}, {"cash_flow": {"annual_cash_flow": 6_000}})
    b = store.save("wholesale", "Elm St", {"arv": 250_000}, {"max_allowable_offer": 177_500})
    return a, b


@pytest.mark.parametrize("store_fixture", ["memory_store", "json_store"])
def test_save_list_get_delete(request, store_fixture):
    store = request.getfixturevalue(store_fixture)
    a, b = _save_two(store)

    uuid.UUID(a.id)  # valid UUID4 string
    assert a.id != b.id
    assert [d.id for d in store.list()] == [a.id, b.id]
    assert store.get(a.id) == a
    assert [d.id for d in store.list_by_type("wholesale")] == [b.id]

    assert store.delete(a.id) is True
    assert store.delete(a.id) is False
    assert store.get(a.id) is None
    assert [d.id for d in store.list()] == [b.id]


def test_require_missing_raises(memory_store):
    with pytest.raises(DealNotFoundError) as exc:
        memory_store.require("nope")
    assert "nope" in str(exc.value)


def test_update_replaces_in_place(memory_store):
    a, b = _save_two(memory_store)
    renamed = a.model_copy(update={"name": "Oak Street"})
    assert memory_store.update(renamed) is True
    assert [d.name for d in memory_store.list()] == ["Oak Street", "Elm St"]
    assert memory_store.update(renamed.model_copy(update={"id": "missing"})) is False


def test_in_memory_store_can_be_seeded(saved_deals):
    store = InMemoryDealStore(saved_deals)
    assert [d.id for d in store.list()] == ["a", "b", "c"]


def test_json_store_persists_across_instances(json_store, store_path):
    a, _ = _save_two(json_store)
    reopened = JsonDealStore(store_path)
    assert [d.name for d in reopened.list()] == ["Oak St", "Elm St"]
    assert reopened.get(a.id).inputs == {"purchase_price": 180_000}

    raw = json.loads(store_path.read_text(encoding="utf-8"))
    assert isinstance(raw, list) and raw[0]["type"] == "creative"


def test_json_store_missing_or_empty_file_is_empty(store_path):
    assert JsonDealStore(store_path).list() == []
    store_path.parent.mkdir(parents=True)
    store_path.write_text("  ", encoding="utf-8")
    assert JsonDealStore(store_path).list() == []


@pytest.mark.parametrize("payload", ["{not json", '{"deals": []}', '[{"id": 1}]'])
def test_json_store_corrupted_file_raises(store_path, payload):
    store_path.parent.mkdir(parents=True)
    store_path.write_text(payload, encoding="utf-8")
    with pytest.raises(StoreCorruptedError):
        JsonDealStore(store_path).list()
    # the file is left untouched
    assert store_path.read_text(encoding="utf-8") == payload


def test_json_store_leaves_no_temp_file(json_store, store_path):
    _save_two(json_store)
    assert sorted(p.name for p in store_path.parent.iterdir()) == ["real_estate_deals.json"]
