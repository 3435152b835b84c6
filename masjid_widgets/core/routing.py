"""
Static dispatch from page URL suffix to the widgets activated on that page.
"""
from typing import Dict, List, Optional

# Activated on every page
COMMON_WIDGETS = [
    "footer_year",
    "chat_widget",
    "cookie_policy",
    "salah_timetable",
    "iqamah",
    "hadith",
]

# First matching suffix wins
PAGE_WIDGETS: Dict[str, List[str]] = {
    "/": ["notices", "prayer_circle", "signup_modal", "announcements", "live_event"],
    "activities.html": ["live_event", "programmes"],
}


def widgets_for_url(url: str, routes: Optional[Dict] = None) -> List[str]:
    """Return the ordered, de-duplicated widget names for a page URL.

    routes may override either part: {"common": [...], "pages": {suffix: [...]}}.
    """
    routes = routes or {}
    common = routes.get("common", COMMON_WIDGETS)
    pages = routes.get("pages", PAGE_WIDGETS)

    names = list(common)
    for suffix, page_widgets in pages.items():
        if url.endswith(suffix):
            names.extend(page_widgets)
            break
    return list(dict.fromkeys(names))
