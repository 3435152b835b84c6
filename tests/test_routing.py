"""Tests for the URL-suffix routing table."""

from masjid_widgets.core.routing import COMMON_WIDGETS, widgets_for_url
from masjid_widgets.core.widget_registry import WidgetRegistry


def test_home_page_widgets():
    assert widgets_for_url("/") == COMMON_WIDGETS + [
        "notices", "prayer_circle", "signup_modal", "announcements", "live_event",
    ]


def test_activities_page_widgets():
    assert widgets_for_url("https://masjid.example/activities.html") == COMMON_WIDGETS + ["live_event", "programmes"]


def test_other_pages_get_common_widgets_only():
    assert widgets_for_url("/about.html") == COMMON_WIDGETS


def test_routes_override_and_dedupe():
    routes = {"common": ["footer_year", "hadith"], "pages": {"events.html": ["hadith", "live_event"]}}

    assert widgets_for_url("/events.html", routes) == ["footer_year", "hadith", "live_event"]


def test_every_routed_widget_is_registered():
    registry = WidgetRegistry()
    routed = set(widgets_for_url("/")) | set(widgets_for_url("/activities.html"))

    assert routed <= set(registry.widgets)


def test_unknown_widget_is_not_created():
    assert WidgetRegistry().create_widget(None, "weather", {}) is None


def test_disabled_widget_is_not_created():
    assert WidgetRegistry().create_widget(None, "hadith", {"enable": False}) is None
