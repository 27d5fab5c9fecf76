from __future__ import annotations

from django.db import models


class MessageOverride(models.Model):
    """Wiki-specific replacement for an interface message, such as the footer."""

    wiki = models.ForeignKey(
        "sitestats.Wiki", on_delete=models.CASCADE, related_name="message_overrides"
    )
    key = models.CharField(max_length=255)
    language = models.CharField(max_length=35, default="en")
    text = models.TextField(blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ("wiki", "key", "language")
        ordering = ["wiki", "key", "language"]

    def __str__(self) -> str:
        return f"{self.key}/{self.language} on {self.wiki.code}"
