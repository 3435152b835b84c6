from .announcements_widget import AnnouncementsWidget


def register_widgets(registry):
    registry.register_widget(AnnouncementsWidget)
