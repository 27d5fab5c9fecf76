import django.core.validators
import django.db.models.deletion
from django.db import migrations, models

import sitestats.models.site_configuration


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Wiki",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "name",
                    models.CharField(help_text="Site name, used for {{SITENAME}}", max_length=200),
                ),
                ("code", models.CharField(max_length=50, unique=True)),
                ("family", models.CharField(default="wikipedia", max_length=100)),
                (
                    "api_endpoint",
                    models.URLField(
                        help_text="Full API endpoint, e.g. https://fi.wikipedia.org/w/api.php"
                    ),
                ),
                ("script_path", models.CharField(default="/w", max_length=255)),
                ("article_path", models.CharField(default="/wiki/$1", max_length=255)),
                (
                    "language",
                    models.CharField(
                        default="en", help_text="Content language of the wiki", max_length=35
                    ),
                ),
                (
                    "project_namespace",
                    models.CharField(
                        default="Project",
                        help_text=(
                            "Localized name of the project namespace, used for {{ns:project}}"
                        ),
                        max_length=100,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["code"],
            },
        ),
        migrations.CreateModel(
            name="SiteConfiguration",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "miser_mode",
                    models.BooleanField(
                        default=False,
                        help_text=(
                            "Skip expensive operations, such as recounting active users "
                            "on page views."
                        ),
                    ),
                ),
                (
                    "enable_uploads",
                    models.BooleanField(
                        default=False,
                        help_text=(
                            "Whether file uploads are possible. Controls the uploaded files row."
                        ),
                    ),
                ),
                (
                    "active_user_days",
                    models.PositiveIntegerField(
                        default=30,
                        help_text="Number of days of activity that make a user count as active.",
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                (
                    "group_permissions",
                    models.JSONField(
                        blank=True,
                        default=sitestats.models.site_configuration._get_default_group_permissions,
                        help_text="Mapping of user group to its rights, in display order.",
                    ),
                ),
                (
                    "implicit_groups",
                    models.JSONField(
                        blank=True,
                        default=sitestats.models.site_configuration._get_default_implicit_groups,
                        help_text=(
                            "Groups every user belongs to automatically. They are not listed."
                        ),
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "wiki",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="configuration",
                        to="sitestats.wiki",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="SiteStatistics",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("total_edits", models.BigIntegerField(default=0)),
                ("good_articles", models.BigIntegerField(default=0, help_text="Content pages")),
                ("total_pages", models.BigIntegerField(default=0)),
                ("users", models.BigIntegerField(default=0)),
                ("active_users", models.BigIntegerField(default=0)),
                ("images", models.BigIntegerField(default=0)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "wiki",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="site_statistics",
                        to="sitestats.wiki",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "Site statistics",
            },
        ),
        migrations.CreateModel(
            name="GroupMemberCount",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("group", models.CharField(max_length=255)),
                ("member_count", models.BigIntegerField(default=0)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "wiki",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="group_member_counts",
                        to="sitestats.wiki",
                    ),
                ),
            ],
            options={
                "ordering": ["wiki", "group"],
                "unique_together": {("wiki", "group")},
            },
        ),
        migrations.CreateModel(
            name="MessageOverride",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("key", models.CharField(max_length=255)),
                ("language", models.CharField(default="en", max_length=35)),
                ("text", models.TextField(blank=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "wiki",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="message_overrides",
                        to="sitestats.wiki",
                    ),
                ),
            ],
            options={
                "ordering": ["wiki", "key", "language"],
                "unique_together": {("wiki", "key", "language")},
            },
        ),
    ]
