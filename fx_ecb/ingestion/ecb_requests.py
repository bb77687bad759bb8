"""requests-based downloader for ECB euro reference rate feeds."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import requests
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from fx_ecb.errors import FeedDownloadError
from fx_ecb.utils.logger import get_logger

LOGGER = get_logger(__name__)

USER_AGENT = "fx-ecb-ingestor/1.0"

# Connection problems and timeouts are worth another attempt; HTTP error
# statuses are not.
_TRANSIENT_ERRORS = (requests.ConnectionError, requests.Timeout)

_retry_transient = retry(
    retry=retry_if_exception_type(_TRANSIENT_ERRORS),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    stop=stop_after_attempt(3),
    before_sleep=before_sleep_log(LOGGER, logging.WARNING),
    reraise=True,
)


class ECBRequestsClient:
    """Fetch ECB XML documents over HTTP with retries on transient failures."""

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
        chunk_size: int = 8192,
    ) -> None:
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", USER_AGENT)
        self.timeout = timeout
        self.chunk_size = chunk_size

    @_retry_transient
    def fetch(self, url: str) -> bytes:
        """Return the body of ``url``."""

        response = self.session.get(url, timeout=self.timeout)
        self._raise_with_context(response, url)
        LOGGER.info("Fetched %s bytes from %s", len(response.content), url)
        return response.content

    @_retry_transient
    def download(self, url: str, destination: Path) -> Path:
        """Stream ``url`` into ``destination`` and return its resolved path."""

        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        response = self.session.get(url, stream=True, timeout=self.timeout)
        self._raise_with_context(response, url)
        with open(destination, "wb") as handle:
            for chunk in response.iter_content(chunk_size=self.chunk_size):
                if chunk:
                    handle.write(chunk)
        LOGGER.info("Saved ECB feed %s -> %s", url, destination)
        return destination.resolve()

    @staticmethod
    def _raise_with_context(response: requests.Response, url: str) -> None:
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise FeedDownloadError(
                f"ECB endpoint responded with HTTP {response.status_code} for {url}"
            ) from exc

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "ECBRequestsClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["ECBRequestsClient", "USER_AGENT"]
