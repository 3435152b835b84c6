"""Tests for the host page wrapper and declarative render maps."""

from masjid_widgets.core.page import HREF, TEXT, FieldBinding, Page, resolve_render_map


class TestResolveRenderMap:
    def test_resolves_without_a_document(self):
        bindings = [
            FieldBinding("fajr", "fajarTime", str.lower),
            FieldBinding("link", "url", target=HREF),
            FieldBinding("hijri", lambda r: f"{r['day']} {r['month']}", target=TEXT),
        ]
        record = {"fajarTime": "05:30 AM", "url": "https://example.com", "day": 3, "month": "Rajab"}

        assert resolve_render_map(bindings, record) == {
            "fajr": ("html", "05:30 am"),
            "link": ("href", "https://example.com"),
            "hijri": ("text", "3 Rajab"),
        }

    def test_missing_fields_are_left_out(self):
        bindings = [FieldBinding("fajr", "fajarTime"), FieldBinding("isha", "ishaTime")]

        assert resolve_render_map(bindings, {"fajarTime": "05:30"}) == {"fajr": ("html", "05:30")}

    def test_reads_attributes_of_objects(self):
        class Day:
            sunrise = "08:01"

        assert resolve_render_map([FieldBinding("sunrise", "sunrise")], Day()) == {
            "sunrise": ("html", "08:01")
        }


class TestPage:
    def test_missing_element_is_skipped(self):
        page = Page("<div id='a'>x</div>")
        before = page.html()

        assert page.set_html("missing", "<b>y</b>") is False
        assert page.set_attr("missing", "href", "#") is False
        assert page.html() == before

    def test_set_html_parses_markup(self):
        page = Page("<div id='a'>old</div>")

        page.set_html("a", "<p>new <b>text</b></p>")

        assert page.element("a").find("b").get_text() == "text"
        assert "old" not in page.html()

    def test_set_text_escapes_markup(self):
        page = Page("<span id='a'></span>")

        page.set_text("a", "<b>x</b>")

        assert page.element("a").find("b") is None
        assert "&lt;b&gt;" in page.html()

    def test_classes_and_style(self):
        page = Page("<div id='bar' class='d-none' style='color: red'></div>")

        page.add_class("bar", "bigEntrance", "stretchLeft")
        page.remove_class("bar", "d-none")
        page.set_style("bar", "")

        bar = page.element("bar")
        assert bar["class"] == ["bigEntrance", "stretchLeft"]
        assert not bar.has_attr("style")

    def test_apply_render_map_counts_updates(self):
        page = Page("<span id='fajr'></span><a id='link'></a>")
        bindings = [
            FieldBinding("fajr", "fajr"),
            FieldBinding("link", "url", target=HREF),
            FieldBinding("absent", "fajr"),
        ]

        updated = page.apply_render_map(bindings, {"fajr": "05:30", "url": "/x"})

        assert updated == 2
        assert page.element("fajr").get_text() == "05:30"
        assert page.element("link")["href"] == "/x"

    def test_path_and_suffix(self):
        page = Page("", url="https://masjid.example/activities.html")

        assert page.path == "/activities.html"
        assert page.url_endswith("activities.html")
        assert not page.url_endswith("/")
