"""
Farm Market Event Bus — Public API
====================================
The registry mutates. The bus tells observers what happened.
"""

from core.events.dispatcher import DeliveryFailure, DispatchReport, dispatch
from core.events.errors import (
    DuplicateSubscriberError,
    EventBusError,
    InvalidEventTypeFormat,
)
from core.events.notification import Notification
from core.events.registry import ALL_EVENTS, SubscriberRegistry, Subscription

__all__ = [
    "ALL_EVENTS",
    "Notification",
    "Subscription",
    "SubscriberRegistry",
    "dispatch",
    "DispatchReport",
    "DeliveryFailure",
    "EventBusError",
    "InvalidEventTypeFormat",
    "DuplicateSubscriberError",
]
