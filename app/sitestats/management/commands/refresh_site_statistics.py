"""
Management command to reload site statistics from the wikis' APIs.

Stores page, edit, user and file counters and the size of every user group.
"""

import pywikibot
from django.core.management.base import BaseCommand

from sitestats.models import Wiki
from sitestats.services import SiteStatsClient


class Command(BaseCommand):
    help = "Reload site statistics and group sizes from MediaWiki"

    def add_arguments(self, parser):
        parser.add_argument(
            "--wiki",
            type=str,
            help=(
                "Wiki code (e.g., 'fi' for Finnish Wikipedia). "
                "If not specified, refreshes all wikis."
            ),
        )
        parser.add_argument(
            "--sync-groups",
            action="store_true",
            help="Also replace the configured user groups with the ones the wiki reports.",
        )

    def handle(self, *args, **options):
        wiki_code = options.get("wiki")
        sync_groups = options.get("sync_groups", False)

        if wiki_code:
            try:
                wikis = [Wiki.objects.get(code=wiki_code)]
            except Wiki.DoesNotExist:
                self.stdout.write(self.style.ERROR(f"Wiki '{wiki_code}' not found"))
                return
        else:
            wikis = Wiki.objects.all()
            self.stdout.write(f"Refreshing site statistics for all {wikis.count()} wikis...\n")

        refreshed = 0
        for wiki in wikis:
            self.stdout.write(f"\n=== Refreshing site statistics for {wiki.name} ===")
            try:
                site = pywikibot.Site(code=wiki.code, fam=wiki.family)
                stats = SiteStatsClient(wiki, site=site).refresh_site_statistics(
                    sync_groups=sync_groups
                )
            except Exception as e:
                self.stdout.write(self.style.ERROR(f"  ✗ Error: {e}"))
                continue

            refreshed += 1
            self.stdout.write(
                self.style.SUCCESS(
                    f"  ✓ {stats.total_pages} pages, {stats.good_articles} content pages, "
                    f"{stats.total_edits} edits, {stats.users} users "
                    f"({stats.active_users} active), {stats.images} files"
                )
            )

        self.stdout.write(self.style.SUCCESS(f"\n\nCompleted! Refreshed {refreshed} wikis."))
