from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any

os.environ.setdefault("PYWIKIBOT_NO_USER_CONFIG", "1")

import pywikibot  # noqa: E402
from django.core.cache import cache  # noqa: E402
from django.db import transaction  # noqa: E402

if TYPE_CHECKING:
    from sitestats.models import SiteStatistics, Wiki

logger = logging.getLogger(__name__)

COUNTER_FIELDS = {
    "edits": "total_edits",
    "articles": "good_articles",
    "pages": "total_pages",
    "users": "users",
    "activeusers": "active_users",
    "images": "images",
}


class SiteStatsClient:
    """Reads the site statistics of a wiki from its MediaWiki API."""

    def __init__(self, wiki: Wiki, site=None):
        self.wiki = wiki
        self.site = site or pywikibot.Site(code=wiki.code, fam=wiki.family)

    def fetch_siteinfo(self) -> dict[str, Any]:
        request = self.site.simple_request(
            action="query",
            meta="siteinfo",
            siprop="statistics|usergroups",
            sinumberingroup=1,
            formatversion=2,
        )
        response = request.submit()
        return response.get("query", {})

    def fetch_active_users(self) -> int:
        """Return the number of users active within the wiki's active user window."""
        statistics = self.fetch_siteinfo().get("statistics", {})
        return int(statistics.get("activeusers", 0))

    def update_active_users(self) -> int:
        from sitestats.models import SiteStatistics

        active_users = self.fetch_active_users()
        stats, _ = SiteStatistics.objects.get_or_create(wiki=self.wiki)
        stats.active_users = active_users
        stats.save(update_fields=["active_users", "updated_at"])
        logger.info("Active users on %s recounted: %s", self.wiki.code, active_users)
        return active_users

    def refresh_site_statistics(self, sync_groups: bool = False) -> SiteStatistics:
        """Store all counters and group sizes reported by the wiki."""
        from sitestats.models import GroupMemberCount, SiteConfiguration, SiteStatistics

        from .site_stats import group_count_cache_key

        siteinfo = self.fetch_siteinfo()
        statistics = siteinfo.get("statistics", {})
        usergroups = siteinfo.get("usergroups", [])

        with transaction.atomic():
            stats, _ = SiteStatistics.objects.get_or_create(wiki=self.wiki)
            for remote_name, field in COUNTER_FIELDS.items():
                if remote_name in statistics:
                    setattr(stats, field, int(statistics[remote_name]))
            stats.save()

            for group in usergroups:
                name = group.get("name")
                if not name or "number" not in group:
                    continue
                GroupMemberCount.objects.update_or_create(
                    wiki=self.wiki,
                    group=name,
                    defaults={"member_count": int(group["number"])},
                )

            if sync_groups and usergroups:
                configuration, _ = SiteConfiguration.objects.get_or_create(wiki=self.wiki)
                configuration.group_permissions = {
                    group["name"]: {right: True for right in group.get("rights", [])}
                    for group in usergroups
                    if group.get("name")
                }
                configuration.save(update_fields=["group_permissions", "updated_at"])

        group_names = [group["name"] for group in usergroups if group.get("name")]
        cache.delete_many([group_count_cache_key(self.wiki, name) for name in group_names])

        logger.info(
            "Refreshed site statistics for %s: %s pages, %s edits, %s groups",
            self.wiki.code,
            stats.total_pages,
            stats.total_edits,
            len(usergroups),
        )
        return stats
