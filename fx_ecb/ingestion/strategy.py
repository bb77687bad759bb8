"""Abstractions for pluggable feed retrieval."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class FeedSource(Protocol):
    """Contract for fetching raw ECB feed documents.

    Implementations return the document body for ``url`` and can stream the
    same document to a local ``Path``.
    """

    def fetch(self, url: str) -> bytes:
        ...  # pragma: no cover - protocol definition

    def download(self, url: str, destination: Path) -> Path:
        ...  # pragma: no cover - protocol definition


__all__ = ["FeedSource"]
