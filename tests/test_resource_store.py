"""
Unit Tests for the resource list stores (database and JSON file backends).
"""

import json

import pytest

from fleetbook.schemas.resource import ResourceType
from fleetbook.services.resource_store import (
    DatabaseResourceStore,
    JsonFileResourceStore,
    UnknownResourceType,
    resolve_resource_type,
)


@pytest.fixture(params=["database", "file"])
def store(request, db_session, tmp_path):
    if request.param == "database":
        return DatabaseResourceStore(db_session)
    return JsonFileResourceStore(str(tmp_path / "resources.json"))


# =============================================================================
# SHARED BEHAVIOUR
# =============================================================================

class TestResourceStore:

    def test_starts_with_six_empty_lists(self, store):
        assert store.get() == {member.value: [] for member in ResourceType}

    def test_add_trims_and_keeps_order(self, store):
        assert store.add("consignors", "  Apex Steel ")
        assert store.add("consignors", "Acme Mills")
        assert store.get()["consignors"] == ["Apex Steel", "Acme Mills"]

    def test_blank_and_duplicate_ignored(self, store):
        store.add("truck_numbers", "MH12AB1234")
        assert not store.add("truck_numbers", "   ")
        assert not store.add("truck_numbers", "MH12AB1234 ")
        assert store.get()["truck_numbers"] == ["MH12AB1234"]

    def test_lists_are_independent(self, store):
        store.add(ResourceType.CONSIGNORS, "Pune")
        store.add(ResourceType.CONSIGNOR_LOCATIONS, "Pune")
        resources = store.get()
        assert resources["consignors"] == ["Pune"]
        assert resources["consignor_locations"] == ["Pune"]
        assert resources["consignee_locations"] == []

    def test_remove(self, store):
        store.add("nature_of_goods", "Steel Coils")
        store.add("nature_of_goods", "Onions")
        assert store.remove("nature_of_goods", "Steel Coils")
        assert not store.remove("nature_of_goods", "Steel Coils")
        assert store.get()["nature_of_goods"] == ["Onions"]

    def test_legacy_type_names(self, store):
        store.add("truckNumbers", "GJ01EF9012")
        assert store.get()["truck_numbers"] == ["GJ01EF9012"]

    def test_unknown_type_raises(self, store):
        with pytest.raises(UnknownResourceType):
            store.add("drivers", "Ravi")


# =============================================================================
# FILE BACKEND
# =============================================================================

class TestJsonFileResourceStore:

    def test_persists_between_instances(self, tmp_path):
        path = tmp_path / "resources.json"
        JsonFileResourceStore(str(path)).add("consignees", "Metro Retail")
        assert JsonFileResourceStore(str(path)).get()["consignees"] == ["Metro Retail"]

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "resources.json"
        path.write_text("{not json", encoding="utf-8")
        assert JsonFileResourceStore(str(path)).get()["consignees"] == []

    def test_reads_legacy_document(self, tmp_path):
        path = tmp_path / "resources.json"
        path.write_text(json.dumps({"natureOfGoods": ["Onions", "Onions"], "bogus": ["x"]}), encoding="utf-8")
        resources = JsonFileResourceStore(str(path)).get()
        assert resources["nature_of_goods"] == ["Onions"]
        assert "bogus" not in resources


def test_resolve_resource_type():
    assert resolve_resource_type("consignee_locations") is ResourceType.CONSIGNEE_LOCATIONS
    assert resolve_resource_type("consigneeLocations") is ResourceType.CONSIGNEE_LOCATIONS
