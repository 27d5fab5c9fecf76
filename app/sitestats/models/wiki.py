from __future__ import annotations

from urllib.parse import quote, urlencode, urlsplit

from django.db import models


class Wiki(models.Model):
    """Represents a MediaWiki installation whose statistics are reported."""

    name = models.CharField(max_length=200, help_text="Site name, used for {{SITENAME}}")
    code = models.CharField(max_length=50, unique=True)
    family = models.CharField(max_length=100, default="wikipedia")
    api_endpoint = models.URLField(
        help_text=("Full API endpoint, e.g. https://fi.wikipedia.org/w/api.php")
    )
    script_path = models.CharField(max_length=255, default="/w")
    article_path = models.CharField(max_length=255, default="/wiki/$1")
    language = models.CharField(
        max_length=35, default="en", help_text="Content language of the wiki"
    )
    project_namespace = models.CharField(
        max_length=100,
        default="Project",
        help_text="Localized name of the project namespace, used for {{ns:project}}",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["code"]

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"

    @property
    def server(self) -> str:
        parts = urlsplit(self.api_endpoint)
        return f"{parts.scheme}://{parts.netloc}"

    def get_page_url(self, title: str, query: dict | None = None) -> str:
        """Build the URL of a page on this wiki, optionally with query parameters."""
        normalized = title.strip().replace(" ", "_")
        if query:
            params = urlencode({"title": normalized, **query})
            return f"{self.server}{self.script_path}/index.php?{params}"
        return self.server + self.article_path.replace("$1", quote(normalized, safe=":/"))
