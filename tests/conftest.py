from __future__ import annotations

import os

# Settings are read at import time; keep the suite independent of a local .env.
os.environ.setdefault("API_KEY", "test-api-key")
os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")

import pytest
from fastapi.testclient import TestClient

from edutube.app.infra.cache.file_cache import FileStaleCache
from tests.unit.stubs import FakeYouTubeApi, InMemoryDocumentStore, InMemoryRealtimeStore


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def realtime_store() -> InMemoryRealtimeStore:
    return InMemoryRealtimeStore()


@pytest.fixture
def youtube_api() -> FakeYouTubeApi:
    return FakeYouTubeApi()


@pytest.fixture
def stale_cache(tmp_path) -> FileStaleCache:
    return FileStaleCache(tmp_path / "cache", max_age_seconds=3600)


@pytest.fixture
def client(document_store, realtime_store, youtube_api, stale_cache):
    from edutube.app import deps
    from edutube.app.main import app

    youtube = youtube_api.client()
    app.dependency_overrides[deps.get_document_store] = lambda: document_store
    app.dependency_overrides[deps.get_realtime_store] = lambda: realtime_store
    app.dependency_overrides[deps.get_youtube_client] = lambda: youtube
    app.dependency_overrides[deps.get_stale_cache] = lambda: stale_cache

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
