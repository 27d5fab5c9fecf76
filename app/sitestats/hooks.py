"""Extension points of the statistics report.

Receivers of ``statistics_add_extra`` get ``extra_stats``, a mutable mapping, and
``page``, the ``StatisticsPage`` being rendered. They add rows in one of two
shapes::

    @receiver(statistics_add_extra)
    def add_job_queue(sender, extra_stats, page, **kwargs):
        # header message key -> {item message key: number}
        extra_stats["statistics-header-jobs"] = {"statistics-jobs": 12}
        # or {item key: {"name": label html, "number": number}}
        extra_stats["statistics-header-jobs"]["queued"] = {"name": "Queued", "number": 3}
        # legacy: item message key -> number, listed under "Other statistics"
        extra_stats["statistics-mirrors"] = 2

A receiver that returns ``False`` suppresses all extra rows.
"""

from __future__ import annotations

from django.dispatch import Signal

statistics_add_extra = Signal()
