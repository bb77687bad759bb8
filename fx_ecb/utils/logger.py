"""Package-wide logging setup for fx_ecb."""

from __future__ import annotations

import logging
import threading
from typing import Final

PACKAGE_LOGGER: Final[str] = "fx_ecb"
LOG_FORMAT: Final[str] = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_CONFIGURED = False
_CONFIG_LOCK = threading.Lock()


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Return the logger for ``name``, configuring root logging on first use.

    Modules executed as scripts report under ``fx_ecb.cli`` instead of
    ``__main__``.
    """
    global _CONFIGURED
    with _CONFIG_LOCK:
        if not _CONFIGURED:
            logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
            _CONFIGURED = True
    if name == "__main__":
        name = f"{PACKAGE_LOGGER}.cli"
    return logging.getLogger(name)


__all__ = ["get_logger", "LOG_FORMAT", "PACKAGE_LOGGER"]
