class WidgetError(Exception):
    """Base error for widget painting"""


class WidgetDataError(WidgetError):
    """Payload parsed as JSON but does not have the shape the widget renders"""
