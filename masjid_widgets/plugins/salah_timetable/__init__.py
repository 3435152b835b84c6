from .salah_timetable_widget import SalahTimetableWidget


def register_widgets(registry):
    registry.register_widget(SalahTimetableWidget)
