"""
Farm Market Event Bus — Subscriptions
=======================================
Who hears which notification, in the order they signed up.

Rules:
- A subscription names one dotted event type, or ALL_EVENTS
- Delivery order is registration order across both kinds
- A handler may cover a given event type only once
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Optional

from core.events.errors import (
    DuplicateSubscriberError,
    EventBusError,
    InvalidEventTypeFormat,
)
from core.events.notification import Notification

logger = logging.getLogger("market.events")

ALL_EVENTS = "*"


@dataclass(frozen=True)
class Subscription:
    event_type: str
    handler: Callable[[Notification], None]
    name: str

    def covers(self, event_type: str) -> bool:
        return self.event_type == ALL_EVENTS or self.event_type == event_type


def _check_event_type(event_type) -> None:
    if event_type == ALL_EVENTS:
        return
    if not isinstance(event_type, str):
        raise InvalidEventTypeFormat(event_type)
    parts = event_type.split(".")
    if len(parts) < 3 or not all(part.strip() for part in parts):
        raise InvalidEventTypeFormat(event_type)


class SubscriberRegistry:
    def __init__(self):
        self._subscriptions: list[Subscription] = []
        self._lock = Lock()

    def subscribe(
        self,
        event_type: str,
        handler: Callable[[Notification], None],
        *,
        name: Optional[str] = None,
    ) -> Subscription:
        """
        Add a handler for one event type, or for ALL_EVENTS.

        Raises:
            InvalidEventTypeFormat:   event_type is not dotted or '*'
            DuplicateSubscriberError: handler already covers event_type
        """
        _check_event_type(event_type)
        if not callable(handler):
            raise EventBusError(f"Handler must be callable, got {type(handler)}.")

        subscription = Subscription(
            event_type=event_type,
            handler=handler,
            name=name or getattr(handler, "__qualname__", repr(handler)),
        )

        with self._lock:
            for existing in self._subscriptions:
                if existing.handler is not handler:
                    continue
                if existing.event_type in (ALL_EVENTS, event_type) or event_type == ALL_EVENTS:
                    raise DuplicateSubscriberError(event_type, subscription.name)
            self._subscriptions.append(subscription)

        logger.info(f"Subscribed {subscription.name} to {event_type}")
        return subscription

    def subscriptions_for(self, event_type: str) -> tuple[Subscription, ...]:
        with self._lock:
            return tuple(s for s in self._subscriptions if s.covers(event_type))
