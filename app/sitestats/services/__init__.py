from __future__ import annotations

from .site_stats import (
    SiteStats,
    active_users_cache_key,
    group_count_cache_key,
    refresh_active_users_if_stale,
)
from .site_stats_client import SiteStatsClient

__all__ = [
    "SiteStats",
    "SiteStatsClient",
    "active_users_cache_key",
    "group_count_cache_key",
    "refresh_active_users_if_stale",
]
