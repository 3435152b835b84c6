from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter

from masjid_widgets.core.context import RenderContext
from masjid_widgets.core.errors import WidgetDataError
from masjid_widgets.core.page import Page
from masjid_widgets.core.widget_base import RefreshWidget


class Notice(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: Optional[str] = None


NoticeList = TypeAdapter(List[Notice])


class NoticesWidget(RefreshWidget):
    """Notice board gallery: one lightbox image per notice"""
    name = "notices"
    cache_key = "notices"
    default_url = "https://getnotices-rds3nxm6za-ew.a.run.app"

    def extract(self, payload: Any) -> List[Notice]:
        if not isinstance(payload, dict):
            raise WidgetDataError("Notices response is not an object")
        notices = payload.get("notices")
        # A response without a notices array clears the board
        if not isinstance(notices, list):
            return []
        return NoticeList.validate_python(notices)

    def render(self, page: Page, ctx: RenderContext, value: List[Notice]) -> None:
        container = page.element("noticeContainer")
        if container is None:
            return
        container.clear()

        for notice in value:
            if not notice.url:
                continue
            card = page.new_tag("div", classes=["col-md-6", "col-lg-4", "mx-auto", "fadeIn"])
            link = page.new_tag("a", classes=["lightbox"], href=notice.url)
            image = page.new_tag(
                "img",
                classes=["img-fluid", "image", "scale-on-hover", "pb-4"],
                src=notice.url,
                alt="Notice",
            )
            link.append(image)
            card.append(link)
            container.append(card)
