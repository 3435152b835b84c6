"""
Pydantic models for the day-scoped iqamah response: {scope, year, month, day, data: [PrayerTimeDay]}.
"""
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class PrayerTimeDay(BaseModel):
    """Begin and jamaat times for one calendar day, plus its hijri date"""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    fajr_begins: Optional[str] = Field(None, alias="fajarTime")
    fajr_jamaat: Optional[str] = Field(None, alias="fajarJamahTime")
    sunrise: Optional[str] = Field(None, alias="sunriseTime")
    dhuhr_begins: Optional[str] = Field(None, alias="dhuharTime")
    dhuhr_jamaat: Optional[str] = Field(None, alias="zohrJamahTime")
    asr_begins: Optional[str] = Field(None, alias="asrTime")
    asr_jamaat: Optional[str] = Field(None, alias="asarJamahTime")
    maghrib_begins: Optional[str] = Field(None, alias="maghribTime")
    maghrib_jamaat: Optional[str] = Field(None, alias="maghribJamahTime")
    isha_begins: Optional[str] = Field(None, alias="ishaTime")
    isha_jamaat: Optional[str] = Field(None, alias="ishaJamahTime")
    hijri_day: Optional[Union[int, str]] = Field(None, alias="hijriDay")
    hijri_month_name: Optional[str] = Field(None, alias="hijriMonthName")
    hijri_year: Optional[Union[int, str]] = Field(None, alias="hijriYear")

    @property
    def hijri_date(self) -> Optional[str]:
        if self.hijri_day is None or not self.hijri_month_name or self.hijri_year is None:
            return None
        return f"{self.hijri_day} {self.hijri_month_name} {self.hijri_year}"


class IqamahResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    data: List[PrayerTimeDay]
