from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from masjid_widgets.core.context import RenderContext
from masjid_widgets.core.errors import WidgetDataError
from masjid_widgets.core.page import Page
from masjid_widgets.core.widget_base import RefreshWidget

COLLECTION_TITLES = {
    "bukhari": "Sahih al-Bukhari",
    "muslim": "Sahih Muslim",
    "nasai": "Sunan an-Nasa'i",
    "abudawud": "Sunan Abi Dawud",
    "tirmidhi": "Jami` at-Tirmidhi",
    "ibnmajah": "Sunan Ibn Majah",
    "riyadussalihin": "Riyad as-Salihin",
}

FALLBACK_BODY = (
    "<p>Abu Hurairah (May Allah be pleased with him) reported: Messenger of Allah (ﷺ) said, "
    "\"The five (daily) Salat (prayers), and from one Jumu'ah prayer to the (next) Jumu'ah prayer, "
    "and from Ramadan to Ramadan are expiations for the (sins) committed in between (their intervals); "
    "provided the major sins are not committed\".<br/><br/><b>[Muslim]</b>.<br/><br/></p>"
)
FALLBACK_CITE = "Riyad as-Salihin 189:1059"
FALLBACK_LINK = "https://sunnah.com/riyadussalihin:1059"

REQUIRED_ELEMENTS = ("hadith-body", "hadith-cite", "hadith-link")


class HadithText(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    body: str
    chapter_number: Optional[Union[int, str]] = Field(None, alias="chapterNumber")


class RandomHadith(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    collection: str
    hadith_number: Union[int, str] = Field(alias="hadithNumber")
    hadith: HadithText

    @property
    def title(self) -> str:
        return COLLECTION_TITLES.get(self.collection, self.collection)

    @property
    def citation(self) -> str:
        return f"{self.title} {self.hadith.chapter_number}:{self.hadith_number}"

    @property
    def link(self) -> str:
        return f"https://sunnah.com/{self.collection}:{self.hadith_number}"


class HadithWidget(RefreshWidget):
    """Random hadith panel with a fixed hadith when nothing can be loaded"""
    name = "hadith"
    cache_key = "kicc-random-hadith"
    default_url = "https://randomhadith-rds3nxm6za-ew.a.run.app"

    def extract(self, payload: Any) -> RandomHadith:
        hadith = RandomHadith.model_validate(payload)
        if not hadith.hadith.body:
            raise WidgetDataError("Hadith has no body")
        return hadith

    def render(self, page: Page, ctx: RenderContext, value: RandomHadith) -> None:
        if not page.has_elements(*REQUIRED_ELEMENTS):
            return
        page.set_html("hadith-body", value.hadith.body)
        page.set_text("hadith-cite", value.citation)
        page.set_attr("hadith-link", "href", value.link)

    def render_fallback(self, page: Page, ctx: RenderContext) -> None:
        if not page.has_elements(*REQUIRED_ELEMENTS):
            return
        page.set_html("hadith-body", FALLBACK_BODY)
        page.set_text("hadith-cite", FALLBACK_CITE)
        page.set_attr("hadith-link", "href", FALLBACK_LINK)
