from .hadith_widget import HadithWidget


def register_widgets(registry):
    registry.register_widget(HadithWidget)
