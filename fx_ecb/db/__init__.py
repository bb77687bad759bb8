"""Rate storage and serialization for fx_ecb."""

from __future__ import annotations

from fx_ecb.db.base_store import RateStoreStrategy
from fx_ecb.db.memory_store import MemoryRateStore

__all__ = ["RateStoreStrategy", "MemoryRateStore"]
