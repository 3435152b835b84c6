from typing import Any, List, Sequence

from masjid_widgets.core.context import RenderContext
from masjid_widgets.core.dates import format_time_ampm
from masjid_widgets.core.page import Page
from masjid_widgets.core.widget_base import RefreshWidget
from .models import Announcement, AnnouncementList, JummahSlot
from .selection import jummah_schedule_source, select_announcement

DEFAULT_NOTICE = '<p>Please check the masjid <a href="#notice-board">notice board.</a></p>'

SCHEDULE_ITEM_CLASSES = ["list-group-item", "d-flex", "justify-content-between", "align-items-center", "h5"]
SCHEDULE_BADGE_CLASSES = ["badge", "badge-primary", "badge-pill", "badge-danger"]


class AnnouncementsWidget(RefreshWidget):
    """Announcement banner and the Jummah speech/khutbah schedule"""
    name = "announcements"
    cache_key = "kicc-announcements"
    default_url = "https://getannouncements-rds3nxm6za-ew.a.run.app"

    def extract(self, payload: Any) -> List[Announcement]:
        return AnnouncementList.validate_python(payload)

    def render(self, page: Page, ctx: RenderContext, value: List[Announcement]) -> None:
        if page.element("announcement") is None:
            return
        selected = select_announcement(value, ctx.now.date())
        self.render_jummah_schedule(page, jummah_schedule_source(selected, value))
        if selected is None:
            page.set_html("announcement", DEFAULT_NOTICE)
            return

        page.set_html("announcement", selected.message or "")
        if selected.active:
            page.add_class("announcement-bar", "bigEntrance", "stretchLeft")
            page.remove_class("announcement-bar", "d-none")

    def render_fallback(self, page: Page, ctx: RenderContext) -> None:
        if page.element("announcement") is None:
            return
        page.set_html("announcement", DEFAULT_NOTICE)
        self.render_jummah_schedule(page, [])

    def render_jummah_schedule(self, page: Page, slots: Sequence[JummahSlot]) -> None:
        """Rebuild the schedule list below its header item"""
        schedule = page.element("jummah-schedule")
        if schedule is None:
            return

        items = schedule.find_all("li", recursive=False)
        for item in items[1:]:
            item.decompose()

        numbered = len(slots) > 1
        for index, slot in enumerate(slots, start=1):
            speech = format_time_ampm(slot.speech)
            khutbah = format_time_ampm(slot.khutbah)
            if speech:
                schedule.append(self._schedule_item(page, f"Speech {index}" if numbered else "Speech", speech))
            if khutbah:
                schedule.append(self._schedule_item(page, f"Khutbah {index}" if numbered else "Khutbah", khutbah))

    def _schedule_item(self, page: Page, label: str, time_text: str):
        item = page.new_tag("li", classes=SCHEDULE_ITEM_CLASSES)
        item.append(page.new_tag("span", text=label))
        item.append(page.new_tag("span", classes=SCHEDULE_BADGE_CLASSES, text=time_text))
        return item
