from __future__ import annotations

from django.test import TestCase
from django.utils import translation

from sitestats.messages import MessageLocalizer, choose_plural, language_chain, load_catalog
from sitestats.models import MessageOverride, Wiki


class CatalogTests(TestCase):
    def test_english_catalog_is_loaded(self):
        catalog = load_catalog("en")
        self.assertEqual(catalog["statistics-header-pages"], "Page statistics")
        self.assertEqual(catalog["statistics-footer"], "")

    def test_unknown_language_has_no_catalog(self):
        self.assertEqual(load_catalog("xx"), {})
        self.assertEqual(load_catalog("../en"), {})

    def test_language_chain(self):
        self.assertEqual(language_chain("fi"), ["fi", "en"])
        self.assertEqual(language_chain("pt-BR"), ["pt-br", "pt", "en"])
        self.assertEqual(language_chain("en-us"), ["en-us", "en"])
        self.assertEqual(language_chain(None), ["en"])

    def test_choose_plural(self):
        self.assertEqual(choose_plural("1", ["day", "days"]), "day")
        self.assertEqual(choose_plural("30", ["day", "days"]), "days")
        self.assertEqual(choose_plural("1,000", ["day", "days"]), "days")
        self.assertEqual(choose_plural("2", ["only"]), "only")
        self.assertEqual(choose_plural("2", []), "")

    def test_choose_plural_reads_localized_numbers(self):
        self.assertEqual(choose_plural("1.0", ["day", "days"]), "day")
        with translation.override("fi"):
            self.assertEqual(choose_plural("1,0", ["day", "days"]), "day")
            self.assertEqual(choose_plural("1,5", ["day", "days"]), "days")
            self.assertEqual(choose_plural("1\xa0000", ["day", "days"]), "days")
        self.assertEqual(choose_plural("n/a", ["day", "days"]), "days")


class MessageTests(TestCase):
    def setUp(self):
        self.wiki = Wiki.objects.create(
            name="Test Wiki",
            code="test",
            family="wikipedia",
            api_endpoint="https://test.wikipedia.org/w/api.php",
        )
        self.localizer = MessageLocalizer(self.wiki, "en")

    def test_text(self):
        self.assertEqual(self.localizer.msg("statistics-header-pages").text(), "Page statistics")

    def test_sitename_is_expanded(self):
        self.assertEqual(
            self.localizer.msg("statistics-edits").text(),
            "Page edits since Test Wiki was set up",
        )

    def test_wikilinks_are_rendered(self):
        self.assertEqual(
            self.localizer.msg("statistics-users").parse(),
            'Registered <a href="https://test.wikipedia.org/wiki/Special:ListUsers" '
            'title="Special:ListUsers">users</a>',
        )

    def test_plural_with_parameters(self):
        self.assertEqual(
            self.localizer.msg("statistics-users-active-desc", "1").text(),
            "Users who have performed an action in the last day",
        )
        self.assertEqual(
            self.localizer.msg("statistics-users-active-desc", "30").text(),
            "Users who have performed an action in the last 30 days",
        )

    def test_missing_message(self):
        msg = self.localizer.msg("no-such-message")
        self.assertFalse(msg.exists())
        self.assertTrue(msg.is_blank())
        self.assertTrue(msg.is_disabled())
        self.assertEqual(msg.text(), "⧼no-such-message⧽")
        self.assertEqual(msg.parse(), "⧼no-such-message⧽")

    def test_empty_message_is_blank(self):
        msg = self.localizer.msg("statistics-footer")
        self.assertTrue(msg.exists())
        self.assertTrue(msg.is_blank())

    def test_override_replaces_catalog_text(self):
        MessageOverride.objects.create(
            wiki=self.wiki,
            key="statistics-footer",
            language="en",
            text="See also [[Project:Statistics]].",
        )
        msg = MessageLocalizer(self.wiki, "en").msg("statistics-footer")
        self.assertFalse(msg.is_blank())
        self.assertEqual(
            msg.parse(),
            'See also <a href="https://test.wikipedia.org/wiki/Project:Statistics" '
            'title="Project:Statistics">Project:Statistics</a>.',
        )

    def test_dash_disables_message(self):
        MessageOverride.objects.create(
            wiki=self.wiki, key="statistics-pages-desc", language="en", text="-"
        )
        msg = MessageLocalizer(self.wiki, "en").msg("statistics-pages-desc")
        self.assertFalse(msg.is_blank())
        self.assertTrue(msg.is_disabled())

    def test_parse_escapes_text_and_renders_formatting(self):
        MessageOverride.objects.create(
            wiki=self.wiki, key="custom", language="en", text="a < b & ''c''"
        )
        msg = MessageLocalizer(self.wiki, "en").msg("custom")
        self.assertEqual(msg.parse(), "a &lt; b &amp; <i>c</i>")

    def test_unknown_tags_are_escaped(self):
        MessageOverride.objects.create(
            wiki=self.wiki, key="custom", language="en", text="<script>x</script>"
        )
        msg = MessageLocalizer(self.wiki, "en").msg("custom")
        self.assertNotIn("<script>", msg.parse())

    def test_raw_params_are_not_escaped(self):
        self.assertEqual(
            self.localizer.msg("parentheses").raw_params("<b>x</b>").escaped(),
            "(<b>x</b>)",
        )

    def test_plain_params_are_escaped(self):
        self.assertEqual(
            self.localizer.msg("parentheses", "<b>x</b>").escaped(),
            "(&lt;b&gt;x&lt;/b&gt;)",
        )

    def test_missing_parameter_is_left_in_place(self):
        self.assertEqual(self.localizer.msg("parentheses").text(), "($1)")

    def test_language_fallback(self):
        localizer = MessageLocalizer(self.wiki, "fi-FI")
        self.assertEqual(localizer.msg("statistics-header-pages").text(), "Sivutilastot")
        self.assertEqual(
            localizer.msg("statistics-pages-desc").text(),
            "All pages in the wiki, including talk pages, redirects, etc.",
        )

    def test_project_namespace(self):
        self.assertEqual(
            self.localizer.msg("grouppage-sysop").text(), "Project:Administrators"
        )
        self.wiki.project_namespace = "Wikipedia"
        localizer = MessageLocalizer(self.wiki, "en")
        self.assertEqual(localizer.msg("grouppage-sysop").text(), "Wikipedia:Administrators")

    def test_content_language(self):
        self.wiki.language = "fi"
        localizer = MessageLocalizer(self.wiki, "en")
        self.assertEqual(localizer.msg("group-sysop").text(), "Administrators")
        self.assertEqual(
            localizer.msg("group-sysop").in_content_language().text(), "Ylläpitäjät"
        )

    def test_override_for_other_language_is_ignored(self):
        MessageOverride.objects.create(
            wiki=self.wiki, key="statistics-header-pages", language="fi", text="Sivut"
        )
        localizer = MessageLocalizer(self.wiki, "en")
        self.assertEqual(localizer.msg("statistics-header-pages").text(), "Page statistics")

    def test_parse_renders_wikitext_subset(self):
        MessageOverride.objects.create(
            wiki=self.wiki,
            key="custom",
            language="en",
            text="[https://example.org site] a&nbsp;b <!-- c -->{{formatnum:1234567}} {{foo}}",
        )
        html = MessageLocalizer(self.wiki, "en").msg("custom").parse()
        self.assertEqual(
            html,
            '<a class="external" rel="nofollow" href="https://example.org">site</a>'
            " a\xa0b 1,234,567 {{foo}}",
        )

    def test_external_link_without_label(self):
        MessageOverride.objects.create(
            wiki=self.wiki, key="custom", language="en", text="[https://example.org]"
        )
        self.assertEqual(
            MessageLocalizer(self.wiki, "en").msg("custom").parse(),
            '<a class="external" rel="nofollow" href="https://example.org">'
            "https://example.org</a>",
        )

    def test_comments_are_dropped(self):
        MessageOverride.objects.create(
            wiki=self.wiki, key="custom", language="en", text="a<!-- hidden -->b"
        )
        self.assertEqual(MessageLocalizer(self.wiki, "en").msg("custom").parse(), "ab")

    def test_entities_are_decoded_and_escaped(self):
        MessageOverride.objects.create(
            wiki=self.wiki, key="custom", language="en", text="&lt;b&gt; &amp; &eacute;"
        )
        self.assertEqual(
            MessageLocalizer(self.wiki, "en").msg("custom").parse(), "&lt;b&gt; &amp; é"
        )

    def test_formatnum_follows_active_language(self):
        MessageOverride.objects.create(
            wiki=self.wiki, key="custom", language="en", text="{{formatnum:1234.5}}"
        )
        msg = MessageLocalizer(self.wiki, "en").msg("custom")
        self.assertEqual(msg.parse(), "1,234.5")
        with translation.override("de"):
            self.assertEqual(msg.parse(), "1.234,5")

    def test_unknown_template_is_shown_as_source(self):
        MessageOverride.objects.create(
            wiki=self.wiki, key="custom", language="en", text="{{foo|<b>}}"
        )
        msg = MessageLocalizer(self.wiki, "en").msg("custom")
        self.assertEqual(msg.parse(), "{{foo|&lt;b&gt;}}")
        self.assertEqual(msg.text(), "{{foo|<b>}}")

    def test_site_name_is_inserted_literally(self):
        self.wiki.name = "{{SITENAME}} [[Main Page]] <b>"
        localizer = MessageLocalizer(self.wiki, "en")
        self.assertEqual(
            localizer.msg("statistics-edits").parse(),
            "Page edits since {{SITENAME}} [[Main Page]] &lt;b&gt; was set up",
        )
        self.assertEqual(
            localizer.msg("statistics-edits").text(),
            "Page edits since {{SITENAME}} [[Main Page]] <b> was set up",
        )

    def test_project_namespace_is_inserted_literally(self):
        self.wiki.project_namespace = "{{ns:project}}"
        localizer = MessageLocalizer(self.wiki, "en")
        self.assertEqual(localizer.msg("grouppage-sysop").text(), "{{ns:project}}:Administrators")

    def test_plural_forms_are_expanded(self):
        MessageOverride.objects.create(
            wiki=self.wiki,
            key="custom",
            language="en",
            text="{{PLURAL:$1|one [[Special:ListUsers|user]]|$1 users on {{SITENAME}} now}}",
        )
        localizer = MessageLocalizer(self.wiki, "en")
        self.assertEqual(localizer.msg("custom", "2").text(), "2 users on Test Wiki now")
        self.assertEqual(
            localizer.msg("custom", "1").parse(),
            'one <a href="https://test.wikipedia.org/wiki/Special:ListUsers" '
            'title="Special:ListUsers">user</a>',
        )
