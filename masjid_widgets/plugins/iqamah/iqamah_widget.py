from typing import Any

from masjid_widgets.core.context import RenderContext
from masjid_widgets.core.dates import month_name
from masjid_widgets.core.errors import WidgetDataError
from masjid_widgets.core.page import FieldBinding, Page
from masjid_widgets.core.widget_base import RefreshWidget, with_query
from .models import IqamahResponse, PrayerTimeDay


def _lower(value: Any) -> str:
    return str(value).lower()


# Begin times on the home page prayer panel
HOME_RENDER_MAP = [
    FieldBinding("fajr", "fajr_begins", _lower),
    FieldBinding("sunrise", "sunrise", _lower),
    FieldBinding("dhuhr", "dhuhr_begins", _lower),
    FieldBinding("asr", "asr_begins", _lower),
    FieldBinding("maghrib", "maghrib_begins", _lower),
    FieldBinding("isha", "isha_begins", _lower),
]

# Begin/jamaat table in the navigation bar, present on every page
NAV_RENDER_MAP = [
    FieldBinding("nav-hijri", lambda day: day.hijri_date),
    FieldBinding("nav-fajr-begins", "fajr_begins", _lower),
    FieldBinding("nav-fajr-jamaat", "fajr_jamaat", _lower),
    FieldBinding("nav-sunrise", "sunrise", _lower),
    FieldBinding("nav-zohr-begins", "dhuhr_begins", _lower),
    FieldBinding("nav-zohr-jamaat", "dhuhr_jamaat", _lower),
    FieldBinding("nav-asar-begins", "asr_begins", _lower),
    FieldBinding("nav-asar-jamaat", "asr_jamaat", _lower),
    FieldBinding("nav-magrib-begins", "maghrib_begins", _lower),
    FieldBinding("nav-magrib-jamaat", "maghrib_jamaat", _lower),
    FieldBinding("nav-isha-begins", "isha_begins", _lower),
    FieldBinding("nav-isha-jamaat", "isha_jamaat", _lower),
]


class IqamahWidget(RefreshWidget):
    """Today's begin and jamaat times"""
    name = "iqamah"
    cache_key = "iqamah-today"
    default_url = "https://getiqamahtimes-rds3nxm6za-ew.a.run.app"

    def build_url(self, ctx: RenderContext) -> str:
        # ctx.now is already in the masjid's timezone
        return with_query(self.url, year=ctx.now.year, month=month_name(ctx.now), day=ctx.now.day)

    def extract(self, payload: Any) -> PrayerTimeDay:
        response = IqamahResponse.model_validate(payload)
        if not response.data:
            raise WidgetDataError("No iqamah data for today")
        return response.data[0]

    def render(self, page: Page, ctx: RenderContext, value: PrayerTimeDay) -> None:
        month_label = ctx.display_month
        if page.url_endswith("/"):
            page.apply_render_map(HOME_RENDER_MAP, value)
            page.set_html("cur-month", month_label)
        page.apply_render_map(NAV_RENDER_MAP, value)
        page.set_html("nav-cur-month", month_label)
        page.set_html("footer-cur-month", month_label)
