from .live_event_widget import LiveEventWidget


def register_widgets(registry):
    registry.register_widget(LiveEventWidget)
