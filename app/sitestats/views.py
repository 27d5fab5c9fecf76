from __future__ import annotations

import logging
from http import HTTPStatus

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, render
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from .models import GroupMemberCount, SiteConfiguration, SiteStatistics, Wiki
from .services import SiteStatsClient
from .statistics_page import StatisticsPage

logger = logging.getLogger(__name__)


def _get_wiki(pk: int) -> Wiki:
    wiki = get_object_or_404(Wiki, pk=pk)
    SiteConfiguration.objects.get_or_create(wiki=wiki)
    return wiki


@require_GET
def index(request: HttpRequest) -> HttpResponse:
    """List the wikis with a statistics report."""
    wikis = Wiki.objects.all().order_by("code")
    return render(request, "sitestats/index.html", {"wikis": wikis})


@require_GET
def statistics_page(request: HttpRequest, pk: int) -> HttpResponse:
    """Render the Statistics report of a wiki."""
    wiki = _get_wiki(pk)
    page = StatisticsPage(wiki, request)
    return render(request, "sitestats/statistics.html", page.execute())


@require_GET
def api_site_statistics(request: HttpRequest, pk: int) -> JsonResponse:
    """Return the stored counters and group sizes of a wiki."""
    wiki = _get_wiki(pk)
    stats = SiteStatistics.objects.filter(wiki=wiki).first()
    groups = {
        entry.group: entry.member_count
        for entry in GroupMemberCount.objects.filter(wiki=wiki).order_by("group")
    }
    return JsonResponse(
        {
            "wiki": wiki.code,
            "updated_at": stats.updated_at.isoformat() if stats else None,
            "edits": stats.total_edits if stats else 0,
            "articles": stats.good_articles if stats else 0,
            "pages": stats.total_pages if stats else 0,
            "users": stats.users if stats else 0,
            "active_users": stats.active_users if stats else 0,
            "images": stats.images if stats else 0,
            "groups": groups,
        }
    )


@csrf_exempt
@require_http_methods(["POST"])
def api_site_statistics_refresh(request: HttpRequest, pk: int) -> JsonResponse:
    """Reload the counters of a wiki from its API."""
    wiki = _get_wiki(pk)
    sync_groups = request.POST.get("sync_groups", "false").lower() == "true"
    try:
        stats = SiteStatsClient(wiki).refresh_site_statistics(sync_groups=sync_groups)
    except Exception as exc:
        logger.exception("Failed to refresh site statistics for %s", wiki.code)
        return JsonResponse(
            {"error": str(exc)},
            status=HTTPStatus.BAD_GATEWAY,
        )
    return JsonResponse(
        {
            "wiki": wiki.code,
            "updated_at": stats.updated_at.isoformat(),
            "pages": stats.total_pages,
            "edits": stats.total_edits,
            "groups_synced": sync_groups,
        }
    )
