"""Localized interface messages written in wikitext.

Messages are looked up in this order: a per-wiki ``MessageOverride`` for the
language, then the YAML catalog for the language, then the catalog of the base
language (``pt-br`` -> ``pt``), then English. Message text may use ``$1``..``$n``
parameters, a handful of magic words and simple wikitext markup, which
``Message.parse()`` renders to HTML.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING

import mwparserfromhell
import yaml
from django.conf import settings
from django.utils import translation
from django.utils.html import escape, format_html
from django.utils.safestring import SafeString, mark_safe
from mwparserfromhell.nodes import (
    Comment,
    ExternalLink,
    HTMLEntity,
    Tag,
    Template,
    Text,
    Wikilink,
)

from .markup import format_num, link, parse_num

if TYPE_CHECKING:
    from sitestats.models import Wiki

logger = logging.getLogger(__name__)

CATALOG_DIR = Path(__file__).resolve().parent / "i18n"
DEFAULT_LANGUAGE = "en"

ALLOWED_TAGS = {
    "b",
    "big",
    "br",
    "code",
    "del",
    "em",
    "i",
    "ins",
    "s",
    "small",
    "span",
    "strong",
    "sub",
    "sup",
    "u",
}

_LANGUAGE_RE = re.compile(r"^[a-z0-9-]+$")
_PARAM_RE = re.compile(r"\$(\d+)")
_RAW_MARKER = "\x7fRAW{}\x7f"


@lru_cache(maxsize=None)
def load_catalog(language: str) -> dict[str, str]:
    """Load the message catalog of a language; unknown languages have none."""
    path = CATALOG_DIR / f"{language}.yaml"
    if not _LANGUAGE_RE.match(language) or not path.is_file():
        return {}
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return {str(key): "" if value is None else str(value) for key, value in data.items()}


def language_chain(language: str | None) -> list[str]:
    normalized = (language or DEFAULT_LANGUAGE).lower().replace("_", "-")
    chain: list[str] = []
    for candidate in (normalized, normalized.split("-")[0], DEFAULT_LANGUAGE):
        if candidate and candidate not in chain:
            chain.append(candidate)
    return chain


def choose_plural(count: str, forms: list[str]) -> str:
    """Pick the singular form for exactly one and the last form otherwise."""
    if not forms:
        return ""
    if parse_num(count) == 1:
        return forms[0]
    return forms[1] if len(forms) > 1 else forms[0]


class WikitextRenderer:
    """Expands magic words and renders the small wikitext subset used by messages."""

    def __init__(self, wiki: Wiki):
        self.wiki = wiki

    def expand_template(self, template: Template) -> str | None:
        name = str(template.name).strip()
        magic, _, argument = name.partition(":")
        magic = magic.strip()
        if not argument:
            if magic.upper() == "SITENAME":
                return self.wiki.name
            return None
        if magic.lower() == "ns" and argument.strip().lower() in ("project", "4"):
            return self.wiki.project_namespace
        if magic.upper() == "PLURAL":
            return choose_plural(argument, [str(param) for param in template.params])
        if magic.lower() == "formatnum":
            return format_num(argument.strip())
        return None

    @staticmethod
    def is_plural(template: Template) -> bool:
        # Only PLURAL forms come from message text and may hold more markup
        return str(template.name).strip().upper().startswith("PLURAL:")

    def expand(self, source: str) -> str:
        """Return the text with magic words expanded and all other markup kept."""
        code = mwparserfromhell.parse(source)
        parts = []
        for node in code.nodes:
            if isinstance(node, Template):
                expansion = self.expand_template(node)
                if expansion is None:
                    parts.append(str(node))
                elif self.is_plural(node):
                    parts.append(self.expand(expansion))
                else:
                    parts.append(expansion)
            else:
                parts.append(str(node))
        return "".join(parts)

    def to_html(self, source: str) -> str:
        return self._render_nodes(mwparserfromhell.parse(source).nodes)

    def _render_nodes(self, nodes) -> str:
        return "".join(self._render_node(node) for node in nodes)

    def _render_node(self, node) -> str:
        if isinstance(node, Text):
            return escape(node.value)
        if isinstance(node, Comment):
            return ""
        if isinstance(node, HTMLEntity):
            return escape(node.normalize())
        if isinstance(node, Template):
            expansion = self.expand_template(node)
            if expansion is None:
                return escape(str(node))
            if self.is_plural(node):
                return self.to_html(expansion)
            return escape(expansion)
        if isinstance(node, Wikilink):
            target = self.expand(str(node.title)).strip().lstrip(":")
            if node.text is not None:
                label = self._render_nodes(node.text.nodes)
            else:
                label = escape(target)
            return link(self.wiki, target, mark_safe(label))
        if isinstance(node, ExternalLink):
            url = self.expand(str(node.url)).strip()
            if node.title is not None and str(node.title).strip():
                label = self._render_nodes(node.title.nodes)
            else:
                label = escape(url)
            return format_html(
                '<a class="external" rel="nofollow" href="{}">{}</a>', url, mark_safe(label)
            )
        if isinstance(node, Tag):
            tag = str(node.tag).strip().lower()
            if tag not in ALLOWED_TAGS:
                return escape(str(node))
            if tag == "br" or node.self_closing:
                return f"<{tag} />"
            contents = self._render_nodes(node.contents.nodes) if node.contents else ""
            return f"<{tag}>{contents}</{tag}>"
        return escape(str(node))


class Message:
    """A single interface message, with its parameters and target language."""

    def __init__(self, localizer: MessageLocalizer, key: str, params=()):
        self.localizer = localizer
        self.key = key
        self.language = localizer.language
        self._params: list[tuple[str, str]] = [("plain", str(param)) for param in params]

    def raw_params(self, *params) -> Message:
        """Add parameters inserted as-is after the message is rendered."""
        self._params.extend(("raw", str(param)) for param in params)
        return self

    def in_content_language(self) -> Message:
        self.language = self.localizer.content_language
        return self

    def fetch(self) -> str | None:
        return self.localizer.lookup(self.key, self.language)

    def exists(self) -> bool:
        return self.fetch() is not None

    def is_blank(self) -> bool:
        text = self.fetch()
        return text is None or text == ""

    def is_disabled(self) -> bool:
        return self.is_blank() or self.fetch() == "-"

    def _substitute(self, with_markers: bool) -> tuple[str, dict[str, str]]:
        source = self.fetch()
        raw_values: dict[str, str] = {}

        def replace(match: re.Match) -> str:
            index = int(match.group(1)) - 1
            if index < 0 or index >= len(self._params):
                return match.group(0)
            kind, value = self._params[index]
            if kind == "raw" and with_markers:
                marker = _RAW_MARKER.format(index)
                raw_values[marker] = value
                return marker
            return value

        return _PARAM_RE.sub(replace, source), raw_values

    @staticmethod
    def _restore(html: str, raw_values: dict[str, str]) -> str:
        for marker, value in raw_values.items():
            html = html.replace(marker, value)
        return html

    def _missing(self) -> str:
        return f"⧼{self.key}⧽"

    def plain(self) -> str:
        if not self.exists():
            return self._missing()
        return self._substitute(with_markers=False)[0]

    def text(self) -> str:
        if not self.exists():
            return self._missing()
        return self.localizer.renderer.expand(self.plain())

    def escaped(self) -> SafeString:
        if not self.exists():
            return escape(self._missing())
        source, raw_values = self._substitute(with_markers=True)
        html = escape(self.localizer.renderer.expand(source))
        return mark_safe(self._restore(html, raw_values))

    def parse(self) -> SafeString:
        if not self.exists():
            return escape(self._missing())
        source, raw_values = self._substitute(with_markers=True)
        html = self.localizer.renderer.to_html(source)
        return mark_safe(self._restore(html, raw_values))

    def __str__(self) -> str:
        return self.text()


class MessageLocalizer:
    """Resolves messages for one wiki in the user's and the wiki's language."""

    def __init__(self, wiki: Wiki, language: str | None = None):
        self.wiki = wiki
        self.language = language or translation.get_language() or settings.LANGUAGE_CODE
        self.renderer = WikitextRenderer(wiki)
        self._overrides: dict[tuple[str, str], str] | None = None

    @property
    def content_language(self) -> str:
        return self.wiki.language or DEFAULT_LANGUAGE

    @property
    def overrides(self) -> dict[tuple[str, str], str]:
        if self._overrides is None:
            self._overrides = {
                (override.key, override.language.lower()): override.text
                for override in self.wiki.message_overrides.all()
            }
        return self._overrides

    def lookup(self, key: str, language: str | None = None) -> str | None:
        for candidate in language_chain(language or self.language):
            if (key, candidate) in self.overrides:
                return self.overrides[(key, candidate)]
            catalog = load_catalog(candidate)
            if key in catalog:
                return catalog[key]
        return None

    def msg(self, key: str, *params) -> Message:
        return Message(self, key, params)
