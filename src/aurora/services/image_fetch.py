"""Fetching remote images referenced by image posts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol

import httpx

from aurora.core.settings import settings

logger = logging.getLogger(__name__)


class ImageFetchError(RuntimeError):
    """The remote image could not be downloaded."""


@dataclass(frozen=True)
class FetchedImage:
    """Raw bytes and the MIME type the remote server reported."""

    data: bytes
    mime_type: str


class ImageFetcher(Protocol):
    async def fetch(self, url: str) -> FetchedImage:
        ...


class HttpImageFetcher:
    """Download images over HTTP with a bounded timeout."""

    def __init__(self, timeout_seconds: float) -> None:
        self.timeout = httpx.Timeout(timeout_seconds)

    async def fetch(self, url: str) -> FetchedImage:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ImageFetchError(str(exc)) from exc

        mime_type = response.headers.get("content-type", "")
        logger.debug("Fetched %d bytes (%s) from %s", len(response.content), mime_type, url)
        return FetchedImage(data=response.content, mime_type=mime_type)


@lru_cache(maxsize=1)
def get_image_fetcher() -> ImageFetcher:
    """Return the shared image fetcher."""
    return HttpImageFetcher(settings.image_fetch_timeout_seconds)
