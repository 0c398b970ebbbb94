"""Contract tests shared by every resource store."""

import pytest

from capplane.core.errors import ResourceExistsError, ResourceNotFoundError, StoreError
from capplane.store import InMemoryResourceStore, SqliteResourceStore, identity_of


def workload(name, namespace="dev-ns", **spec):
    return {"kind": "Workload", "metadata": {"name": name, "namespace": namespace}, "spec": spec}


@pytest.fixture(params=["memory", "sqlite"])
def resource_store(request, tmp_path):
    if request.param == "memory":
        yield InMemoryResourceStore()
        return
    store = SqliteResourceStore(tmp_path / "data" / "store.db")
    yield store
    store.close()


class TestContract:
    def test_create_and_get(self, resource_store):
        resource_store.create(workload("api", port=8080))
        assert resource_store.get("Workload", "api", namespace="dev-ns")["spec"] == {"port": 8080}

    def test_duplicate_create_conflicts(self, resource_store):
        resource_store.create(workload("api"))
        with pytest.raises(ResourceExistsError):
            resource_store.create(workload("api"))

    def test_same_name_other_namespace(self, resource_store):
        resource_store.create(workload("api"))
        resource_store.create(workload("api", namespace="prod-ns"))
        assert len(resource_store.list("Workload")) == 2

    def test_get_missing(self, resource_store):
        with pytest.raises(ResourceNotFoundError):
            resource_store.get("Workload", "nope", namespace="dev-ns")

    def test_update_missing(self, resource_store):
        with pytest.raises(ResourceNotFoundError):
            resource_store.update(workload("nope"))

    def test_update_keeps_position(self, resource_store):
        for name in ("a", "b", "c"):
            resource_store.create(workload(name))
        resource_store.update(workload("a", port=1))
        items = resource_store.list("Workload")
        assert [item["metadata"]["name"] for item in items] == ["a", "b", "c"]
        assert items[0]["spec"] == {"port": 1}

    def test_list_filters(self, resource_store):
        resource_store.create(workload("a"))
        resource_store.create(workload("b", namespace="prod-ns"))
        resource_store.create({"kind": "TraitDefinition", "metadata": {"name": "scaler"}})

        assert [i["metadata"]["name"] for i in resource_store.list("Workload", "prod-ns")] == ["b"]
        assert [i["metadata"]["name"] for i in resource_store.list("TraitDefinition")] == ["scaler"]
        assert resource_store.list("Unknown") == []

    def test_returned_items_are_copies(self, resource_store):
        resource_store.create(workload("api", port=8080))
        resource_store.get("Workload", "api", namespace="dev-ns")["spec"]["port"] = 1
        assert resource_store.get("Workload", "api", namespace="dev-ns")["spec"]["port"] == 8080


class TestIdentity:
    def test_missing_namespace_is_empty(self):
        assert identity_of({"kind": "TraitDefinition", "metadata": {"name": "x"}}) == ("TraitDefinition", "", "x")

    def test_missing_name(self):
        with pytest.raises(StoreError):
            identity_of({"kind": "Workload", "metadata": {}})


def test_sqlite_persists_across_connections(tmp_path):
    path = tmp_path / "store.db"
    first = SqliteResourceStore(path)
    first.create(workload("api"))
    first.close()

    second = SqliteResourceStore(path)
    try:
        assert second.get("Workload", "api", namespace="dev-ns")["metadata"]["name"] == "api"
    finally:
        second.close()
