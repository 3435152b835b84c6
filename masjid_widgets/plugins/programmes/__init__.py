from .programmes_widget import ProgrammesWidget


def register_widgets(registry):
    registry.register_widget(ProgrammesWidget)
