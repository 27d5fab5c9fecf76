"""The Statistics report page: site counters, group sizes and extension rows."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.utils import translation
from django.utils.html import escape, format_html
from django.utils.safestring import mark_safe

from .hooks import statistics_add_extra
from .markup import escape_class, format_num, is_valid_title, link
from .messages import Message, MessageLocalizer
from .models import SiteConfiguration
from .services import SiteStats, refresh_active_users_if_stale

if TYPE_CHECKING:
    from django.http import HttpRequest

    from .models import Wiki

logger = logging.getLogger(__name__)

LEGACY_EXTRA_HEADER = "statistics-header-hooks"
PROJECT_NAMESPACE = "Project"


@dataclass
class StatisticsRow:
    """One table row; label is HTML, number is plain text."""

    label: str
    number: str = ""
    css_class: str = ""
    row_id: str = ""
    is_header: bool = False


class StatisticsPage:
    """Builds the statistics report of one wiki.

    Labels and numbers follow ``language``, falling back to the language
    negotiated for ``request``.
    """

    def __init__(self, wiki: Wiki, request: HttpRequest | None = None, language: str | None = None):
        if language is None and request is not None:
            language = getattr(request, "LANGUAGE_CODE", None)
        self.wiki = wiki
        self.configuration, _ = SiteConfiguration.objects.get_or_create(wiki=wiki)
        self.localizer = MessageLocalizer(wiki, language)
        self.stats = SiteStats(wiki)
        self.edits = 0
        self.good = 0
        self.images = 0
        self.total = 0
        self.users = 0
        self.active_users = 0

    def msg(self, key: str, *params) -> Message:
        return self.localizer.msg(key, *params)

    def execute(self) -> dict:
        with translation.override(self.localizer.language):
            return self._execute()

    def _execute(self) -> dict:
        refresh_active_users_if_stale(self.wiki, miser_mode=self.configuration.miser_mode)

        self.edits = self.stats.edits()
        self.good = self.stats.articles()
        self.images = self.stats.images()
        self.total = self.stats.pages()
        self.users = self.stats.users()
        self.active_users = self.stats.active_users()

        rows = [
            *self.get_page_stats(),
            *self.get_edit_stats(),
            *self.get_user_stats(),
            *self.get_group_stats(),
        ]

        extra_stats: dict = {}
        responses = statistics_add_extra.send(
            sender=self.__class__, extra_stats=extra_stats, page=self
        )
        if all(response is not False for _, response in responses):
            rows.extend(self.get_other_stats(extra_stats))
        else:
            logger.debug("Extra statistics suppressed by a receiver on %s", self.wiki.code)

        footer = self.msg("statistics-footer")
        return {
            "wiki": self.wiki,
            "title": self.msg("statistics").text(),
            "rows": rows,
            "footer_html": "" if footer.is_blank() else footer.parse(),
        }

    def format_row(
        self,
        text: str,
        number: str,
        css_class: str = "",
        row_id: str = "",
        desc_msg: str = "",
        desc_params: tuple = (),
    ) -> StatisticsRow:
        if desc_msg:
            msg = self.msg(desc_msg, *desc_params)
            if not msg.is_disabled():
                description = self.msg("parentheses").raw_params(msg.parse()).escaped()
                text = format_html(
                    '{}<br /><small class="mw-statistic-desc"> {}</small>', text, description
                )
        return StatisticsRow(
            label=mark_safe(text), number=number, css_class=css_class, row_id=row_id
        )

    def format_row_header(self, header: str) -> StatisticsRow:
        return StatisticsRow(label=self.msg(header).parse(), is_header=True)

    def get_page_stats(self) -> list[StatisticsRow]:
        rows = [
            self.format_row_header("statistics-header-pages"),
            self.format_row(
                link(self.wiki, "Special:AllPages", self.msg("statistics-articles").parse()),
                format_num(self.good),
                css_class="mw-statistics-articles",
                desc_msg="statistics-articles-desc",
            ),
            self.format_row(
                self.msg("statistics-pages").parse(),
                format_num(self.total),
                css_class="mw-statistics-pages",
                desc_msg="statistics-pages-desc",
            ),
        ]

        # Only when there are files or uploading is possible
        if self.images != 0 or self.configuration.enable_uploads:
            files_link = link(
                self.wiki, "Special:MediaStatistics", self.msg("statistics-files").parse()
            )
            rows.append(
                self.format_row(
                    files_link,
                    format_num(self.images),
                    css_class="mw-statistics-files",
                )
            )
        return rows

    def get_edit_stats(self) -> list[StatisticsRow]:
        average = self.edits / self.total if self.total else 0
        return [
            self.format_row_header("statistics-header-edits"),
            self.format_row(
                self.msg("statistics-edits").parse(),
                format_num(self.edits),
                css_class="mw-statistics-edits",
            ),
            self.format_row(
                self.msg("statistics-edits-average").parse(),
                format_num(f"{average:.2f}"),
                css_class="mw-statistics-edits-average",
            ),
        ]

    def get_user_stats(self) -> list[StatisticsRow]:
        active_label = format_html(
            "{} {}",
            self.msg("statistics-users-active").parse(),
            link(self.wiki, "Special:ActiveUsers", self.msg("listgrouprights-members").escaped()),
        )
        return [
            self.format_row_header("statistics-header-users"),
            self.format_row(
                self.msg("statistics-users").parse(),
                format_num(self.users),
                css_class="mw-statistics-users",
            ),
            self.format_row(
                active_label,
                format_num(self.active_users),
                css_class="mw-statistics-users-active",
                desc_msg="statistics-users-active-desc",
                desc_params=(format_num(self.configuration.active_user_days),),
            ),
        ]

    def get_group_stats(self) -> list[StatisticsRow]:
        rows = []
        implicit_groups = self.configuration.implicit_groups or []
        for group in self.configuration.group_permissions or {}:
            # Generic * and implicit groups have no members of their own
            if group == "*" or group in implicit_groups:
                continue

            msg = self.msg(f"group-{group}")
            group_name = group if msg.is_blank() else msg.text()

            msg = self.msg(f"grouppage-{group}").in_content_language()
            group_page_title = f"{PROJECT_NAMESPACE}:{group}" if msg.is_blank() else msg.text()

            if is_valid_title(group_page_title):
                group_page = link(self.wiki, group_page_title, escape(group_name))
            else:
                group_page = escape(group_name)

            members_link = link(
                self.wiki,
                "Special:ListUsers",
                self.msg("listgrouprights-members").escaped(),
                query={"group": group},
            )

            count = self.stats.number_in_group(group)
            css_class = f"statistics-group-{escape_class(group)}"
            if count == 0:
                # Lets skins hide empty groups
                css_class += " statistics-group-zero"

            rows.append(
                self.format_row(
                    format_html("{} {}", group_page, members_link),
                    format_num(count),
                    css_class=css_class,
                )
            )
        return rows

    def get_other_stats(self, stats: Mapping) -> list[StatisticsRow]:
        """Render rows contributed by statistics_add_extra receivers."""
        rows = []
        legacy_header_added = False
        for header, items in stats.items():
            if isinstance(items, Mapping):
                if header != LEGACY_EXTRA_HEADER:
                    rows.append(self.format_row_header(header))
                elif not legacy_header_added:
                    rows.append(self.format_row_header(LEGACY_EXTRA_HEADER))
                    legacy_header_added = True
                rows.extend(self._format_extra_items(items))
            else:
                if not legacy_header_added:
                    rows.append(self.format_row_header(LEGACY_EXTRA_HEADER))
                    legacy_header_added = True
                rows.extend(self._format_extra_items({header: items}))
        return rows

    def _format_extra_items(self, items: Mapping) -> list[StatisticsRow]:
        rows = []
        for key, value in items.items():
            if isinstance(value, Mapping):
                name = mark_safe(value.get("name", ""))
                number = value.get("number", "")
            else:
                name = self.msg(key).parse()
                number = value
            rows.append(
                self.format_row(
                    name,
                    format_num(number),
                    css_class="mw-statistics-hook",
                    row_id=f"mw-{key}",
                )
            )
        return rows
