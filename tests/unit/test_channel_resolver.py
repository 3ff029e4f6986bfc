from __future__ import annotations

import pytest

from edutube.app.domain.errors import DocumentNotFoundError
from edutube.app.services.channel_resolver import ChannelResolver
from tests.unit.stubs import InMemoryDocumentStore


def _resolver(store: InMemoryDocumentStore) -> ChannelResolver:
    return ChannelResolver(store, collection="IDs", all_document="all")


class TestChannelResolverResolve:
    def test_unions_query_set_with_all_set(self) -> None:
        store = InMemoryDocumentStore()
        store.seed("IDs", "math", {"a": "C1"})
        store.seed("IDs", "all", {"x": "C9"})

        result = _resolver(store).resolve("math")

        assert set(result) == {"C1", "C9"}

    def test_result_contains_all_set(self) -> None:
        store = InMemoryDocumentStore()
        store.seed("IDs", "physics", {"a": "C1", "b": "C2"})
        store.seed("IDs", "all", {"x": "C2", "y": "C3", "z": "C4"})

        result = _resolver(store).resolve("physics")

        assert {"C2", "C3", "C4"} <= set(result)

    def test_removes_duplicates(self) -> None:
        store = InMemoryDocumentStore()
        store.seed("IDs", "math", {"a": "C1", "b": "C2", "c": "C1"})
        store.seed("IDs", "all", {"x": "C2", "y": "C1"})

        result = _resolver(store).resolve("math")

        assert sorted(result) == ["C1", "C2"]

    def test_query_is_case_folded(self) -> None:
        store = InMemoryDocumentStore()
        store.seed("IDs", "math", {"a": "C1"})
        store.seed("IDs", "all", {"x": "C9"})

        result = _resolver(store).resolve("  MaTh ")

        assert set(result) == {"C1", "C9"}

    def test_unknown_query_raises_not_found(self) -> None:
        store = InMemoryDocumentStore()
        store.seed("IDs", "all", {"x": "C9"})

        with pytest.raises(DocumentNotFoundError) as exc_info:
            _resolver(store).resolve("chemistry")

        assert exc_info.value.document_id == "chemistry"

    def test_missing_all_document_raises_not_found(self) -> None:
        store = InMemoryDocumentStore()
        store.seed("IDs", "math", {"a": "C1"})

        with pytest.raises(DocumentNotFoundError) as exc_info:
            _resolver(store).resolve("math")

        assert exc_info.value.document_id == "all"


class TestChannelResolverAllChannels:
    def test_returns_all_set_without_empty_values(self) -> None:
        store = InMemoryDocumentStore()
        store.seed("IDs", "all", {"x": "C9", "y": "", "z": "C8"})

        assert _resolver(store).all_channels() == ["C9", "C8"]
