from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from masjid_widgets.core.context import RenderContext
from masjid_widgets.core.page import Page
from masjid_widgets.core.widget_base import RefreshWidget

FALLBACK_ROWS = [
    ("Children's Youth Programme", "Check Events or Masjid Notice Board"),
    ("Adult's Monthly Programme", "Check Events or Masjid Notice Board"),
]


class Programme(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: Optional[str] = None
    time_description: Optional[str] = Field(None, alias="timeDescription")
    clock_time: Optional[str] = Field(None, alias="clockTime")
    image_url: Optional[str] = Field(None, alias="imageUrl")
    description: Optional[str] = None
    topic: Optional[str] = None
    speaker: Optional[str] = None
    location: Optional[str] = None
    listen_url: Optional[str] = Field(None, alias="listenUrl")

    @property
    def when(self) -> str:
        if self.time_description:
            return self.time_description
        return f"At {self.clock_time}" if self.clock_time else ""

    @property
    def has_image(self) -> bool:
        return bool(self.image_url and self.image_url.strip())


class ProgrammesResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    programmes: List[Programme]


class ProgrammesWidget(RefreshWidget):
    """Weekly programme table plus image cards on the activities page"""
    name = "programmes"
    cache_key = "masjidProgrammes_programme_active_true_v1"
    default_url = "https://getmasjidprogrammes-rds3nxm6za-ew.a.run.app?type=programme&active=true"
    eager_fallback = True

    def request_headers(self) -> Dict[str, str]:
        return {"Accept": "application/json"}

    def extract(self, payload: Any) -> List[Programme]:
        return ProgrammesResponse.model_validate(payload).programmes

    def render(self, page: Page, ctx: RenderContext, value: List[Programme]) -> None:
        self.render_table(page, value)
        self.render_cards(page, value)

    def render_fallback(self, page: Page, ctx: RenderContext) -> None:
        self.render(page, ctx, [])

    def render_table(self, page: Page, programmes: List[Programme]) -> None:
        tbody = page.element("weekly-programmes-tbody")
        if tbody is None:
            return
        tbody.clear()

        rows = [(p.name or "", p.when) for p in programmes] or FALLBACK_ROWS
        for name, when in rows:
            tr = page.new_tag("tr")
            tr.append(page.new_tag("td", text=name))
            tr.append(page.new_tag("td", text=when))
            tbody.append(tr)

    def render_cards(self, page: Page, programmes: List[Programme]) -> None:
        section = page.element("weekly-programmes-section")
        container = page.element("weekly-programmes")
        if section is None or container is None:
            return

        with_images = [p for p in programmes if p.has_image]
        container.clear()
        if not with_images:
            page.set_style(section, "display: none")
            return
        page.set_style(section, "")

        row = page.new_tag("div", classes=["row", "g-4"])
        for programme in with_images:
            col = page.new_tag("div", classes=["col-md-4", "mb-4"])
            col.append(self._card(page, programme))
            row.append(col)
        container.append(row)

    def _card(self, page: Page, programme: Programme):
        card = page.new_tag(
            "article",
            classes=["weekly-programme-card", "shadow-sm", "h-100", "border-0", "rounded-3", "overflow-hidden"],
        )
        image_wrapper = page.new_tag("div", classes=["weekly-programme-image-wrapper"])
        image_wrapper.append(page.new_tag(
            "img",
            classes=["weekly-programme-image"],
            src=programme.image_url,
            alt=programme.name or "Masjid programme",
        ))
        card.append(image_wrapper)

        body = page.new_tag("div", classes=["weekly-programme-body"])
        if programme.name:
            body.append(page.new_tag("h3", classes=["weekly-programme-title"], text=programme.name))
        if programme.when:
            body.append(page.new_tag("p", classes=["weekly-programme-meta"], text=programme.when))
        if programme.description:
            # Description is authored as HTML
            description = page.new_tag("div", classes=["weekly-programme-description"])
            page.set_html(description, programme.description)
            body.append(description)

        footer = page.new_tag("div", classes=["weekly-programme-footer"])
        for label, value in (("Topic", programme.topic), ("Speaker", programme.speaker),
                             ("Location", programme.location)):
            if value:
                paragraph = page.new_tag("p")
                page.set_html(paragraph, f"<strong>{label}:</strong> {value}")
                footer.append(paragraph)
        if programme.listen_url:
            footer.append(page.new_tag(
                "a",
                classes=["weekly-programme-link"],
                text="Listen / Watch live",
                href=programme.listen_url,
                target="_blank",
                rel="noopener noreferrer",
            ))
        if footer.contents:
            body.append(footer)

        card.append(body)
        return card
