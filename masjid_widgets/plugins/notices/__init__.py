from .notices_widget import NoticesWidget


def register_widgets(registry):
    registry.register_widget(NoticesWidget)
