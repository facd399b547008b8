"""
Farm Market Django Adapter Wiring
===================================
Constructs HttpApiDependencies for live runs.

This module is adapter-only glue:
- reads Django settings once, on first use
- replays the configured journal so ids survive restarts
- registers a logging observer for every marketplace notification
"""

from __future__ import annotations

import logging
import threading

from django.conf import settings

from core.config.market import MarketConfig
from core.event_store.journal import InMemoryEventJournal, open_journal
from core.events.registry import ALL_EVENTS, SubscriberRegistry
from core.http_api.dependencies import HttpApiDependencies
from engines.marketplace.events import Notification
from engines.marketplace.replay import replay_registry

logger = logging.getLogger("market.http")
audit_logger = logging.getLogger("market.audit")

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def log_notification(notification: Notification) -> None:
    audit_logger.info(
        f"{notification.event_type} #{notification.sequence}: "
        f"{notification.payload}"
    )


def _build_subscribers() -> SubscriberRegistry:
    subscribers = SubscriberRegistry()
    subscribers.subscribe(ALL_EVENTS, log_notification, name="audit")
    return subscribers


def _build(config: MarketConfig) -> HttpApiDependencies:
    journal = open_journal(config.journal_path)
    if isinstance(journal, InMemoryEventJournal):
        logger.warning(
            "MARKET_JOURNAL_PATH not set; listings live in memory only."
        )

    registry, result = replay_registry(
        journal,
        subscriber_registry=_build_subscribers(),
        verify=config.verify_journal_on_load,
    )
    logger.info(
        f"Marketplace ready: {result.entries_applied} journal entries, "
        f"next product id {result.next_product_id}"
    )
    return HttpApiDependencies(registry=registry, config=config)


def build_dependencies() -> HttpApiDependencies:
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = _build(MarketConfig.from_settings(settings))
        return _DEPENDENCIES


def reset_dependencies() -> None:
    """Drop the cached registry (tests, settings reload)."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = None
