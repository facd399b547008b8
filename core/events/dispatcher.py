"""
Farm Market Event Bus — Delivery
==================================
Hands one Notification to every matching subscription.

A failing handler is logged and recorded in the report. The remaining
handlers still run and the emitter's state change stands.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.events.notification import Notification
from core.events.registry import SubscriberRegistry

logger = logging.getLogger("market.events")


@dataclass(frozen=True)
class DeliveryFailure:
    subscriber: str
    error_type: str
    error: str


@dataclass(frozen=True)
class DispatchReport:
    notification: Notification
    delivered: tuple[str, ...] = ()
    failures: tuple[DeliveryFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures


def dispatch(
    notification: Notification, subscribers: SubscriberRegistry,
) -> DispatchReport:
    delivered: list[str] = []
    failures: list[DeliveryFailure] = []

    for subscription in subscribers.subscriptions_for(notification.event_type):
        try:
            subscription.handler(notification)
        except Exception as exc:
            failures.append(DeliveryFailure(
                subscriber=subscription.name,
                error_type=type(exc).__name__,
                error=str(exc),
            ))
            logger.error(
                f"{subscription.name} failed on {notification.event_type} "
                f"#{notification.sequence}: {exc}",
                exc_info=True,
            )
        else:
            delivered.append(subscription.name)

    return DispatchReport(
        notification=notification,
        delivered=tuple(delivered),
        failures=tuple(failures),
    )
