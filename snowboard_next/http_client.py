from __future__ import annotations

import time
from typing import Any, Dict, Mapping, Optional

import httpx

from .logging import get_logger

logger = get_logger(__name__)


DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; SnowboardNextBot/1.0)"

_TEXTUAL_CONTENT_TYPES = ("text/", "html", "json")


class UnexpectedContentType(httpx.HTTPError):
    """Raised when a source answers with something other than text, HTML or JSON."""


class HttpFetcher:
    """HTTP client wrapper with retry/backoff on connection errors."""

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        *,
        max_attempts: int = 3,
        backoff_factor: float = 0.5,
    ) -> None:
        self.client = client or httpx.Client(
            timeout=10.0,
            headers={"User-Agent": DEFAULT_USER_AGENT},
            follow_redirects=True,
        )
        self.max_attempts = max_attempts
        self.backoff_factor = backoff_factor

    def fetch(self, url: str, *, params: Optional[Mapping[str, Any]] = None) -> httpx.Response:
        for attempt in range(1, self.max_attempts + 1):
            try:
                logger.info("http.fetch", url=url, attempt=attempt)
                return self.client.get(url, params=params)
            except httpx.RequestError as exc:
                logger.warning("http.fetch.retry", url=url, attempt=attempt, error=str(exc))
                if attempt == self.max_attempts:
                    raise
                time.sleep(self.backoff_factor * (2 ** (attempt - 1)))
        raise RuntimeError("Unexpected fetch state")

    def fetch_text(self, url: str) -> str:
        """GET ``url`` and return its body, refusing binary payloads."""
        response = self.fetch(url)
        response.raise_for_status()
        content_type = response.headers.get("content-type", "")
        if not any(marker in content_type for marker in _TEXTUAL_CONTENT_TYPES):
            raise UnexpectedContentType(f"fetch {url}: unexpected content-type {content_type}")
        return response.text

    def fetch_json(self, url: str, *, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        response = self.fetch(url, params=params)
        response.raise_for_status()
        return response.json()
