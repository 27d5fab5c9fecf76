from __future__ import annotations

from django.db import models

from .wiki import Wiki


class SiteStatistics(models.Model):
    """Precomputed aggregate counters of a wiki."""

    wiki = models.OneToOneField(Wiki, on_delete=models.CASCADE, related_name="site_statistics")
    total_edits = models.BigIntegerField(default=0)
    good_articles = models.BigIntegerField(default=0, help_text="Content pages")
    total_pages = models.BigIntegerField(default=0)
    users = models.BigIntegerField(default=0)
    active_users = models.BigIntegerField(default=0)
    images = models.BigIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "Site statistics"

    def __str__(self) -> str:  # pragma: no cover - debug helper
        return f"Site statistics for {self.wiki.code}"


class GroupMemberCount(models.Model):
    """Number of users holding a user group on a wiki."""

    wiki = models.ForeignKey(Wiki, on_delete=models.CASCADE, related_name="group_member_counts")
    group = models.CharField(max_length=255)
    member_count = models.BigIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ("wiki", "group")
        ordering = ["wiki", "group"]

    def __str__(self) -> str:  # pragma: no cover - debug helper
        return f"{self.group} on {self.wiki.code}: {self.member_count}"
