from __future__ import annotations

import httpx

from ..config import get_settings
from ..models import BulkIndexRequest, Fireable, MultiSearchRequest


class RequestBuilder:
    """Turns request values into ``httpx.Request`` objects for an external transport.

    Nothing is sent: the caller owns the client, connection handling and retries.
    """

    def __init__(self, base_url: str | None = None, headers: dict[str, str] | None = None) -> None:
        settings = get_settings()
        self._settings = settings
        self._base_url = (base_url or settings.base_url).rstrip("/")
        self._extra_headers = dict(headers or {})

    def _headers(self, fireable: Fireable, content: bytes) -> dict[str, str]:
        headers = dict(self._extra_headers)
        if content:
            if isinstance(fireable, (BulkIndexRequest, MultiSearchRequest)):
                headers["Content-Type"] = self._settings.batch_content_type
            else:
                headers["Content-Type"] = self._settings.content_type
        return headers

    def url(self, fireable: Fireable) -> str:
        return f"{self._base_url}/{fireable.path().lstrip('/')}"

    def build(self, fireable: Fireable) -> httpx.Request:
        content = fireable.body()
        return httpx.Request(
            fireable.method(),
            self.url(fireable),
            params=fireable.values(),
            content=content,
            headers=self._headers(fireable, content),
        )


def prepare_request(fireable: Fireable, base_url: str | None = None) -> httpx.Request:
    return RequestBuilder(base_url=base_url).build(fireable)


__all__ = ["RequestBuilder", "prepare_request"]
