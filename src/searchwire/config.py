from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, Field


def _default_base_url() -> str:
    return os.getenv("SEARCHWIRE_BASE_URL", "http://localhost:9200")


class RequestSettings(BaseModel):
    """Runtime configuration for request preparation and the CLI."""

    base_url: str = Field(default_factory=_default_base_url)
    log_level: str = Field(default_factory=lambda: os.getenv("SEARCHWIRE_LOG_LEVEL", "INFO"))
    batch_content_type: str = Field(
        default_factory=lambda: os.getenv("SEARCHWIRE_CONTENT_TYPE", "application/x-ndjson")
    )
    content_type: str = "application/json"


@lru_cache(maxsize=1)
def get_settings() -> RequestSettings:
    return RequestSettings()


__all__ = ["RequestSettings", "get_settings"]
