from django.contrib import admin

from .models import GroupMemberCount, MessageOverride, SiteConfiguration, SiteStatistics, Wiki


@admin.register(Wiki)
class WikiAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "language", "api_endpoint", "updated_at")
    search_fields = ("name", "code")


@admin.register(SiteConfiguration)
class SiteConfigurationAdmin(admin.ModelAdmin):
    list_display = ("wiki", "miser_mode", "enable_uploads", "active_user_days", "updated_at")
    search_fields = ("wiki__name", "wiki__code")
    list_filter = ("miser_mode", "enable_uploads")


@admin.register(SiteStatistics)
class SiteStatisticsAdmin(admin.ModelAdmin):
    list_display = (
        "wiki",
        "total_pages",
        "good_articles",
        "total_edits",
        "users",
        "active_users",
        "images",
        "updated_at",
    )
    search_fields = ("wiki__code",)
    readonly_fields = ("updated_at",)


@admin.register(GroupMemberCount)
class GroupMemberCountAdmin(admin.ModelAdmin):
    list_display = ("group", "wiki", "member_count", "updated_at")
    search_fields = ("group",)
    list_filter = ("wiki",)


@admin.register(MessageOverride)
class MessageOverrideAdmin(admin.ModelAdmin):
    list_display = ("key", "language", "wiki", "updated_at")
    search_fields = ("key", "text")
    list_filter = ("wiki", "language")
