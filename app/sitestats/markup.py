"""Small helpers for building the report markup."""

from __future__ import annotations

import re
import unicodedata
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from django.utils import formats
from django.utils.html import format_html
from django.utils.safestring import SafeString

if TYPE_CHECKING:
    from sitestats.models import Wiki

_CLASS_ESCAPE_RE = re.compile(r"(^[0-9\-])|[\x00-\x20!\"#$%&'()*+,./:;<=>?@\[\\\]^`{|}~]|\xa0")
_INVALID_TITLE_RE = re.compile(r"[#<>\[\]|{}\x00-\x1f\x7f]")


def format_num(value, decimal_pos: int | None = None) -> str:
    """Format a number with the grouping and separators of the active language.

    Values that are not numbers are returned unchanged as text.
    """
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return str(value)
    if not number.is_finite():
        return str(value)
    return formats.number_format(
        number, decimal_pos=decimal_pos, use_l10n=True, force_grouping=True
    )


def parse_num(text: str) -> Decimal | None:
    """Read a number written with the separators of the active language."""
    thousand_sep = formats.get_format("THOUSAND_SEPARATOR")
    decimal_sep = formats.get_format("DECIMAL_SEPARATOR")
    cleaned = str(text).strip()
    for sep in {thousand_sep, unicodedata.normalize("NFKD", thousand_sep)}:
        if sep and sep != decimal_sep:
            cleaned = cleaned.replace(sep, "")
    cleaned = cleaned.replace(decimal_sep, ".")
    try:
        number = Decimal(cleaned)
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def escape_class(name: str) -> str:
    """Turn an arbitrary string into something usable as a CSS class."""
    escaped = _CLASS_ESCAPE_RE.sub("_", name)
    return re.sub(r"_+", "_", escaped).rstrip("_")


def is_valid_title(text: str) -> bool:
    """Check whether text can be used as a page title."""
    title = (text or "").strip()
    if not title or title.startswith(":") or title.endswith(":"):
        return False
    return not _INVALID_TITLE_RE.search(title)


def link(wiki: Wiki, title: str, html: str, query: dict | None = None) -> SafeString:
    """Link to a page on the wiki; html must already be safe."""
    return format_html(
        '<a href="{}" title="{}">{}</a>',
        wiki.get_page_url(title, query),
        title.strip().replace("_", " "),
        html,
    )
