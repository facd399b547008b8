"""
Farm Market Event Bus — Errors
================================
Raised while wiring observers. Delivery itself never raises.
"""


class EventBusError(Exception):
    """Base error for subscription problems."""


class InvalidEventTypeFormat(EventBusError):
    def __init__(self, event_type):
        self.event_type = event_type
        super().__init__(
            f"Event type {event_type!r} is not dotted "
            f"engine.domain.action form."
        )


class DuplicateSubscriberError(EventBusError):
    def __init__(self, event_type: str, name: str):
        self.event_type = event_type
        self.name = name
        super().__init__(
            f"Subscriber '{name}' already receives '{event_type}'."
        )
