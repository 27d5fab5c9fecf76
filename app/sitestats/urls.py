from django.urls import path

from . import views

urlpatterns = [
    path("", views.index, name="index"),
    path("wikis/<int:pk>/statistics/", views.statistics_page, name="statistics_page"),
    path(
        "api/wikis/<int:pk>/site-statistics/",
        views.api_site_statistics,
        name="api_site_statistics",
    ),
    path(
        "api/wikis/<int:pk>/site-statistics/refresh/",
        views.api_site_statistics_refresh,
        name="api_site_statistics_refresh",
    ),
]
