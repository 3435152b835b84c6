from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from masjid_widgets.core.dates import is_ramadan, upcoming_month_name


@dataclass
class RenderContext:
    """Per-page inputs shared by every widget painted during one start() call"""
    now: datetime
    ramadan_start: Optional[datetime] = None
    cookies: Dict[str, str] = field(default_factory=dict)

    @property
    def is_ramadan(self) -> bool:
        return is_ramadan(self.now, self.ramadan_start)

    @property
    def display_month(self) -> str:
        """Month label for timetables: 'Ramadan' during Ramadan, else the upcoming month"""
        return "Ramadan" if self.is_ramadan else upcoming_month_name(self.now)

    def cookie_flag(self, name: str) -> bool:
        """True when a cookie is present and not the string 'false'"""
        value = self.cookies.get(name)
        return value is not None and value.lower() != "false"
