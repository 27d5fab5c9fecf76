from __future__ import annotations

from .message_override import MessageOverride
from .site_configuration import SiteConfiguration
from .site_statistics import GroupMemberCount, SiteStatistics
from .wiki import Wiki

__all__ = [
    "Wiki",
    "SiteConfiguration",
    "SiteStatistics",
    "GroupMemberCount",
    "MessageOverride",
]
