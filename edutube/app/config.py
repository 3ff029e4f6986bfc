from __future__ import annotations

from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # YouTube Data API v3
    API_KEY: str
    BASEAPI_URL: str = "https://www.googleapis.com/youtube/v3"
    YOUTUBE_MAX_RESULTS: int = 10
    PLAYLIST_MAX_RESULTS: int = 50
    YOUTUBE_TIMEOUT_SECONDS: float = 10.0

    SUPABASE_URL: AnyUrl
    SUPABASE_SERVICE_ROLE_KEY: str
    DOCUMENTS_TABLE: str = "documents"
    REALTIME_TABLE: str = "realtime_nodes"

    # Document store layout
    IDS_COLLECTION: str = "IDs"
    ALL_CHANNELS_DOCUMENT: str = "all"
    CATEGORIES_COLLECTION: str = "Categories"
    CATEGORY_DOCUMENT_ID: str = "Z6ytPTHJANaMWRH5O920"
    BLACKLIST_COLLECTION: str = "Blacklist"
    BLACKLIST_DOCUMENT_ID: str = "YoPdyY2LXMqSoLmGGJL8"

    CACHE_DIR: str = "cache"
    CACHE_MAX_AGE_SECONDS: int = 60 * 60
    CACHE_SERVE_FRESH_FIRST: bool = False

    FRONTEND_CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["*"])


settings = Settings()
