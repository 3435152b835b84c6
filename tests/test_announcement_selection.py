"""Tests for the announcement decision table."""

from datetime import date

import pytest

from masjid_widgets.plugins.announcements.models import Announcement, JummahSlot
from masjid_widgets.plugins.announcements.selection import jummah_schedule_source, select_announcement

FRIDAY = date(2025, 12, 5)
TUESDAY = date(2025, 12, 2)


def _a(type_, active=False, **kwargs):
    return Announcement(type=type_, active=active, message=f"{type_} message", **kwargs)


class TestSelectAnnouncement:
    def test_friday_prefers_active_jumuah(self):
        jumuah, breaking = _a("jumuah", True), _a("breaking", True)

        assert select_announcement([jumuah, breaking], FRIDAY) is jumuah

    def test_tuesday_prefers_active_breaking(self):
        jumuah, breaking = _a("jumuah", True), _a("breaking", True)

        assert select_announcement([jumuah, breaking], TUESDAY) is breaking

    @pytest.mark.parametrize("today", [FRIDAY, TUESDAY, date(2025, 12, 7)])
    def test_single_inactive_general_always_selected(self, today):
        general = _a("general", False)

        assert select_announcement([general], today) is general

    def test_friday_inactive_jumuah_falls_back_to_general(self):
        jumuah, general = _a("jumuah", False), _a("general")

        assert select_announcement([jumuah, general], FRIDAY) is general

    def test_friday_without_general_uses_first(self):
        breaking, jumuah = _a("breaking", True), _a("jumuah", False)

        assert select_announcement([breaking, jumuah], FRIDAY) is breaking

    def test_weekday_active_jumuah_blocks_general(self):
        jumuah, general = _a("jumuah", True), _a("general")

        assert select_announcement([jumuah, general], TUESDAY) is jumuah

    def test_weekday_all_inactive_prefers_general(self):
        breaking, jumuah, general = _a("breaking"), _a("jumuah"), _a("general")

        assert select_announcement([breaking, jumuah, general], TUESDAY) is general

    def test_empty_list_selects_nothing(self):
        assert select_announcement([], FRIDAY) is None


class TestJummahScheduleSource:
    def test_uses_selected_jumuah_slots(self):
        jumuah = _a("jumuah", True, jummah_times=[JummahSlot(speech="13:00", khutbah="13:30")])

        assert jummah_schedule_source(jumuah, [jumuah]) == jumuah.jummah_times

    def test_falls_back_to_any_jumuah_record(self):
        general = _a("general")
        jumuah = _a("jumuah", False, jummah_times=[JummahSlot(khutbah="13:30")])

        assert jummah_schedule_source(general, [general, jumuah]) == jumuah.jummah_times

    def test_no_jumuah_record_means_no_slots(self):
        assert jummah_schedule_source(None, [_a("general")]) == []
