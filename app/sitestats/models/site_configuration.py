"""SiteConfiguration model."""

from __future__ import annotations

from django.core.validators import MinValueValidator
from django.db import models


def _get_default_group_permissions():
    """Return the groups a fresh MediaWiki installation ships with."""
    return {
        "*": {"createaccount": True, "read": True, "edit": True},
        "user": {"move": True, "read": True, "edit": True, "upload": True},
        "autoconfirmed": {"autoconfirmed": True, "editsemiprotected": True},
        "bot": {"bot": True, "autoconfirmed": True, "nominornewtalk": True},
        "sysop": {"block": True, "delete": True, "protect": True, "editinterface": True},
        "bureaucrat": {"userrights": True, "noratelimit": True},
    }


def _get_default_implicit_groups():
    return ["*", "user", "autoconfirmed"]


class SiteConfiguration(models.Model):
    """Stores the per-wiki settings that shape the statistics report."""

    wiki = models.OneToOneField(
        "sitestats.Wiki", on_delete=models.CASCADE, related_name="configuration"
    )
    miser_mode = models.BooleanField(
        default=False,
        help_text="Skip expensive operations, such as recounting active users on page views.",
    )
    enable_uploads = models.BooleanField(
        default=False,
        help_text="Whether file uploads are possible. Controls the uploaded files row.",
    )
    active_user_days = models.PositiveIntegerField(
        default=30,
        validators=[MinValueValidator(1)],
        help_text="Number of days of activity that make a user count as active.",
    )
    group_permissions = models.JSONField(
        default=_get_default_group_permissions,
        blank=True,
        help_text="Mapping of user group to its rights, in display order.",
    )
    implicit_groups = models.JSONField(
        default=_get_default_implicit_groups,
        blank=True,
        help_text="Groups every user belongs to automatically. They are not listed.",
    )
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Configuration for {self.wiki.code}"
