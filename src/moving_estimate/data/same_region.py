"""Process-wide table of distances for moves within a single prefecture."""

from __future__ import annotations

import functools
from types import MappingProxyType
from typing import Mapping

from ..config import settings


@functools.lru_cache(maxsize=1)
def get_same_region_table() -> Mapping[str, float]:
    """Build the read-only same-region table once from configuration."""
    return MappingProxyType(dict(settings.same_region_distances))


def clear_same_region_cache() -> None:
    get_same_region_table.cache_clear()
