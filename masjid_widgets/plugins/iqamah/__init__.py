from .iqamah_widget import IqamahWidget


def register_widgets(registry):
    registry.register_widget(IqamahWidget)
