from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import quote

from django.core.cache import cache

from .site_stats_client import SiteStatsClient

if TYPE_CHECKING:
    from sitestats.models import SiteStatistics, Wiki

logger = logging.getLogger(__name__)

GROUP_COUNT_TTL = 60 * 60
ACTIVE_USERS_REFRESH_TTL = 24 * 60 * 60


def group_count_cache_key(wiki: Wiki, group: str) -> str:
    return f"sitestats:{wiki.code}:numberingroup:{quote(group, safe='')}"


def active_users_cache_key(wiki: Wiki) -> str:
    return f"sitestats:{wiki.code}:activeusers-updated"


class SiteStats:
    """Read access to the precomputed counters of one wiki."""

    def __init__(self, wiki: Wiki):
        self.wiki = wiki
        self._row: SiteStatistics | None = None

    def load(self) -> SiteStatistics:
        from sitestats.models import SiteStatistics

        if self._row is None:
            row = SiteStatistics.objects.filter(wiki=self.wiki).first()
            if row is None:
                logger.warning("No site statistics stored for %s, reporting zeros", self.wiki.code)
                row = SiteStatistics(wiki=self.wiki)
            self._row = row
        return self._row

    def edits(self) -> int:
        return self.load().total_edits

    def articles(self) -> int:
        return self.load().good_articles

    def pages(self) -> int:
        return self.load().total_pages

    def users(self) -> int:
        return self.load().users

    def active_users(self) -> int:
        return self.load().active_users

    def images(self) -> int:
        return self.load().images

    def number_in_group(self, group: str) -> int:
        """Return the number of users in a group, cached for an hour."""
        from sitestats.models import GroupMemberCount

        key = group_count_cache_key(self.wiki, group)
        count = cache.get(key)
        if count is None:
            count = (
                GroupMemberCount.objects.filter(wiki=self.wiki, group=group)
                .values_list("member_count", flat=True)
                .first()
            ) or 0
            cache.set(key, count, GROUP_COUNT_TTL)
        return count


def refresh_active_users_if_stale(wiki: Wiki, miser_mode: bool = False) -> bool:
    """Recount active users unless it was done during the last day.

    Returns True when a recount happened. Failures are logged and retried on
    the next call.
    """
    if miser_mode:
        return False

    key = active_users_cache_key(wiki)
    if cache.get(key):
        return False

    try:
        SiteStatsClient(wiki).update_active_users()
    except Exception:
        logger.exception("Failed to recount active users for %s", wiki.code)
        return False

    cache.set(key, "1", ACTIVE_USERS_REFRESH_TTL)
    return True
