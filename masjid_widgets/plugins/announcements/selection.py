from datetime import date
from typing import List, Optional, Sequence

from .models import BREAKING, GENERAL, JUMUAH, Announcement

FRIDAY = 4


def _first_of_type(announcements: Sequence[Announcement], kind: str) -> Optional[Announcement]:
    return next((a for a in announcements if a.type == kind), None)


def select_announcement(announcements: Sequence[Announcement], today: date) -> Optional[Announcement]:
    """Pick the announcement to show today.

    Friday: the jumuah record if active, else the first general record, else the
    first record. Other days: the breaking record if active, else the first general
    record when neither breaking nor jumuah is active, else the first record.
    Only the first record of each type is considered.
    """
    if not announcements:
        return None

    jumuah = _first_of_type(announcements, JUMUAH)
    breaking = _first_of_type(announcements, BREAKING)
    general = _first_of_type(announcements, GENERAL)

    jumuah_active = bool(jumuah and jumuah.active)
    breaking_active = bool(breaking and breaking.active)

    if today.weekday() == FRIDAY:
        if jumuah_active:
            return jumuah
        if general:
            return general
        return announcements[0]

    if breaking_active:
        return breaking
    if not jumuah_active and general:
        return general
    return announcements[0]


def jummah_schedule_source(selected: Optional[Announcement],
                           announcements: Sequence[Announcement]) -> List:
    """Slots for the Jummah schedule: from the selection if it is the jumuah record,
    else from the first jumuah record that carries slots"""
    if selected is not None and selected.type == JUMUAH and selected.jummah_times:
        return list(selected.jummah_times)
    for announcement in announcements:
        if announcement.type == JUMUAH and announcement.jummah_times:
            return list(announcement.jummah_times)
    return []
