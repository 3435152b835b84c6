from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

JUMUAH = "jumuah"
BREAKING = "breaking"
GENERAL = "general"


class JummahSlot(BaseModel):
    """One Jumuah congregation: speech and khutbah start, 24h 'HH:MM'"""

    model_config = ConfigDict(extra="allow")

    speech: Optional[str] = None
    khutbah: Optional[str] = None


class Announcement(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: Optional[str] = None
    message: Optional[str] = ""
    active: bool = False
    jummah_times: Optional[List[JummahSlot]] = Field(None, alias="jummahTimes")

    @field_validator("active", mode="before")
    @classmethod
    def _null_is_inactive(cls, value):
        return False if value is None else value


AnnouncementList = TypeAdapter(List[Announcement])
