from datetime import datetime, timedelta
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict

from masjid_widgets.core.context import RenderContext
from masjid_widgets.core.dates import format_clock
from masjid_widgets.core.page import Page
from masjid_widgets.core.widget_base import RefreshWidget

LIVE_BADGE = '<span style="border-style: solid; font-size: 0.8em; padding: 5px; color: #B80000">LIVE NOW</span>'
OFF_AIR_BADGE = '<span style="border-style: solid; font-size: 0.8em; padding: 5px; color: #808080">Off Air</span>'
PLACEHOLDER_TITLE = "Check back for upcoming events"

REQUIRED_ELEMENTS = ("live-now", "event-name", "starts-at", "event-day", "event-date", "event-month", "event-year")


class LiveEvent(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    starts_at_timestamp: float
    ends_at_timestamp: Optional[float] = None


class LiveStatus(BaseModel):
    model_config = ConfigDict(extra="allow")

    is_live: bool = False
    events: List[LiveEvent] = []

    def next_event(self, now: datetime) -> LiveEvent:
        """Earliest scheduled event, or a placeholder starting a day from now"""
        if self.events:
            return min(self.events, key=lambda event: event.starts_at_timestamp)
        return LiveEvent(
            title=PLACEHOLDER_TITLE,
            starts_at_timestamp=int((now + timedelta(days=1)).timestamp()),
            ends_at_timestamp=int((now + timedelta(days=1, hours=1)).timestamp()),
        )


class LiveEventWidget(RefreshWidget):
    """Live radio badge and next scheduled broadcast. Always fetched, never cached."""
    name = "live_event"
    cache_key = None
    default_url = "https://api.mixlr.com/users/7752720"

    def extract(self, payload: Any) -> LiveStatus:
        if isinstance(payload, dict) and not isinstance(payload.get("events"), list):
            payload = {**payload, "events": []}
        return LiveStatus.model_validate(payload)

    def render(self, page: Page, ctx: RenderContext, value: LiveStatus) -> None:
        if not page.has_elements(*REQUIRED_ELEMENTS):
            self.logger.warning("Event elements missing in page")
            return

        page.set_html("live-now", LIVE_BADGE if value.is_live else OFF_AIR_BADGE)

        event = value.next_event(ctx.now)
        starts = datetime.fromtimestamp(event.starts_at_timestamp, tz=ctx.now.tzinfo)
        day_label = "Today" if starts.date() == ctx.now.date() else starts.strftime("%a")

        page.set_text("event-name", event.title or "")
        page.set_text("starts-at", format_clock(starts))
        page.set_text("event-day", day_label)
        page.set_text("event-date", f"{starts.day:02d}")
        page.set_text("event-month", starts.strftime("%b"))
        page.set_text("event-year", str(starts.year))
