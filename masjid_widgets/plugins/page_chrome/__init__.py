from .chrome_widgets import (
    ChatWidget,
    CookiePolicyWidget,
    FooterYearWidget,
    PrayerCircleWidget,
    SignupModalWidget,
)


def register_widgets(registry):
    registry.register_widget(FooterYearWidget)
    registry.register_widget(ChatWidget)
    registry.register_widget(CookiePolicyWidget)
    registry.register_widget(SignupModalWidget)
    registry.register_widget(PrayerCircleWidget)
