from __future__ import annotations

import pytest

from edutube.app.domain.errors import DocumentNotFoundError, FieldNotFoundError
from edutube.app.services.curation import CurationService
from tests.unit.stubs import InMemoryDocumentStore


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def service(store: InMemoryDocumentStore) -> CurationService:
    return CurationService(
        store,
        ids_collection="IDs",
        all_document="all",
        categories_collection="Categories",
        category_document_id="categories",
        blacklist_collection="Blacklist",
        blacklist_document_id="blacklist",
    )


class TestWhitelistIds:
    def test_add_then_fetch_then_delete(self, service: CurationService, store: InMemoryDocumentStore) -> None:
        service.add_whitelist_ids("Math", {"c1": "UC1", "c2": "UC2"})

        assert service.fetch_whitelist_ids() == [{"id": "math", "c1": "UC1", "c2": "UC2"}]

        message = service.delete_whitelist_id("math", "c1")

        assert message == "Field c1 of Document math deleted successfully."
        assert store.documents[("IDs", "math")] == {"c2": "UC2"}

    def test_add_without_name_targets_all(self, service: CurationService, store: InMemoryDocumentStore) -> None:
        service.add_whitelist_ids(None, {"c1": "UC1"})
        service.add_whitelist_ids("  ", {"c2": "UC2"})

        assert store.documents[("IDs", "all")] == {"c1": "UC1", "c2": "UC2"}

    def test_add_merges_into_existing_set(self, service: CurationService, store: InMemoryDocumentStore) -> None:
        store.seed("IDs", "math", {"c1": "UC1"})

        service.add_whitelist_ids("math", {"c2": "UC2"})

        assert store.documents[("IDs", "math")] == {"c1": "UC1", "c2": "UC2"}

    def test_fetch_lists_every_set(self, service: CurationService, store: InMemoryDocumentStore) -> None:
        store.seed("IDs", "all", {"x": "UC9"})
        store.seed("IDs", "math", {"a": "UC1"})

        assert service.fetch_whitelist_ids() == [
            {"id": "all", "x": "UC9"},
            {"id": "math", "a": "UC1"},
        ]

    def test_update_ignores_id_field(self, service: CurationService, store: InMemoryDocumentStore) -> None:
        store.seed("IDs", "all", {"x": "UC9"})

        service.update_whitelist_ids({"id": "all", "y": "UC8"})

        assert store.documents[("IDs", "all")] == {"x": "UC9", "y": "UC8"}

    def test_update_without_all_document_raises(self, service: CurationService) -> None:
        with pytest.raises(DocumentNotFoundError):
            service.update_whitelist_ids({"y": "UC8"})

    def test_delete_missing_field_raises(self, service: CurationService, store: InMemoryDocumentStore) -> None:
        store.seed("IDs", "math", {"c1": "UC1"})

        with pytest.raises(FieldNotFoundError) as exc_info:
            service.delete_whitelist_id("math", "c9")

        assert str(exc_info.value) == "Field c9 not found in Document math."
        assert store.documents[("IDs", "math")] == {"c1": "UC1"}

    def test_delete_from_missing_document_raises(self, service: CurationService) -> None:
        with pytest.raises(FieldNotFoundError):
            service.delete_whitelist_id("physics", "c1")


class TestBlacklist:
    def test_add_then_fetch_entries(self, service: CurationService) -> None:
        service.add_blacklist({"b1": "UCBAD"})
        service.add_blacklist({"b2": "UCWORSE"})

        assert service.fetch_blacklist() == [["b1", "UCBAD"], ["b2", "UCWORSE"]]

    def test_fetch_missing_document_raises(self, service: CurationService) -> None:
        with pytest.raises(DocumentNotFoundError):
            service.fetch_blacklist()

    def test_delete_field(self, service: CurationService, store: InMemoryDocumentStore) -> None:
        store.seed("Blacklist", "blacklist", {"b1": "UCBAD", "b2": "UCWORSE"})

        ack = service.delete_blacklist_field("b1")

        assert ack.path == "Blacklist/blacklist"
        assert store.documents[("Blacklist", "blacklist")] == {"b2": "UCWORSE"}


class TestCategories:
    def test_entries_and_values(self, service: CurationService, store: InMemoryDocumentStore) -> None:
        store.seed("Categories", "categories", {"k1": "Math", "k2": "Physics"})

        assert service.fetch_category_entries() == [["k1", "Math"], ["k2", "Physics"]]
        assert service.fetch_category_values() == ["Math", "Physics"]

    def test_add_merges(self, service: CurationService, store: InMemoryDocumentStore) -> None:
        store.seed("Categories", "categories", {"k1": "Math"})

        service.add_categories({"k2": "Physics"})

        assert store.documents[("Categories", "categories")] == {"k1": "Math", "k2": "Physics"}

    def test_update_ignores_id_field(self, service: CurationService, store: InMemoryDocumentStore) -> None:
        store.seed("Categories", "categories", {"k1": "Math"})

        service.update_categories({"id": "categories", "k1": "Algebra"})

        assert store.documents[("Categories", "categories")] == {"k1": "Algebra"}

    def test_delete_field(self, service: CurationService, store: InMemoryDocumentStore) -> None:
        store.seed("Categories", "categories", {"k1": "Math", "k2": "Physics"})

        service.delete_category_field("k2")

        assert service.fetch_category_values() == ["Math"]

    def test_fetch_missing_document_raises(self, service: CurationService) -> None:
        with pytest.raises(DocumentNotFoundError):
            service.fetch_category_values()
