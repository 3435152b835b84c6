from datetime import timedelta
from typing import Any, List

from pydantic import BaseModel, ConfigDict

from masjid_widgets.core.context import RenderContext
from masjid_widgets.core.dates import MONTH_LOOKAHEAD_DAYS, upcoming_month_name
from masjid_widgets.core.errors import WidgetDataError
from masjid_widgets.core.page import Page
from masjid_widgets.core.widget_base import RefreshWidget, with_query


class TimetableAsset(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: str


class TimetableResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    data: List[TimetableAsset]


class SalahTimetableWidget(RefreshWidget):
    """Links to the printable monthly salah timetable"""
    name = "salah_timetable"
    cache_key = "salahTimesAssetUrl"
    default_url = "https://getsalahtimes-rds3nxm6za-ew.a.run.app"

    def build_url(self, ctx: RenderContext) -> str:
        target = ctx.now + timedelta(days=MONTH_LOOKAHEAD_DAYS)
        return with_query(
            self.url,
            month=upcoming_month_name(ctx.now),
            year=target.year,
            isRamadan=str(ctx.is_ramadan).lower(),
        )

    def extract(self, payload: Any) -> str:
        response = TimetableResponse.model_validate(payload)
        if not response.data or not response.data[0].url:
            raise WidgetDataError("No salah times asset returned")
        return response.data[0].url

    def render(self, page: Page, ctx: RenderContext, value: str) -> None:
        page.set_attr("salah-times", "href", value)
        page.set_attr("salah-times-footer", "href", value)
        if page.path == "/":
            page.set_attr("salah-times-body", "href", value)
