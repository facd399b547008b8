"""
Farm Market — Event Bus Tests
===============================
Subscriptions and failure-isolated delivery of notifications.
"""

import pytest

from core.events import (
    ALL_EVENTS,
    DuplicateSubscriberError,
    EventBusError,
    InvalidEventTypeFormat,
    Notification,
    SubscriberRegistry,
    dispatch,
)

ADDED = "marketplace.product.added.v1"
BOUGHT = "marketplace.product.bought.v1"


def _notification(event_type=ADDED, sequence=1):
    return Notification(event_type=event_type, payload={"id": 1}, sequence=sequence)


class TestSubscriptions:
    def test_subscription_is_scoped_to_its_event_type(self):
        subscribers = SubscriberRegistry()
        handler = lambda notification: None
        subscription = subscribers.subscribe(ADDED, handler, name="indexer")

        assert subscribers.subscriptions_for(ADDED) == (subscription,)
        assert subscribers.subscriptions_for(BOUGHT) == ()

    def test_name_defaults_to_handler_qualname(self):
        def audit_trail(notification):
            pass

        subscription = SubscriberRegistry().subscribe(ADDED, audit_trail)
        assert subscription.name.endswith("audit_trail")

    def test_all_events_keeps_registration_order(self):
        subscribers = SubscriberRegistry()
        first = subscribers.subscribe(ADDED, lambda n: None, name="first")
        every = subscribers.subscribe(ALL_EVENTS, lambda n: None, name="every")
        last = subscribers.subscribe(ADDED, lambda n: None, name="last")

        assert subscribers.subscriptions_for(ADDED) == (first, every, last)
        assert subscribers.subscriptions_for(BOUGHT) == (every,)

    @pytest.mark.parametrize("event_type", ["", "marketplace.added", "a..b", None])
    def test_bad_event_type(self, event_type):
        with pytest.raises(InvalidEventTypeFormat):
            SubscriberRegistry().subscribe(event_type, print)

    def test_same_handler_twice_for_one_type_rejected(self):
        subscribers = SubscriberRegistry()
        handler = lambda notification: None
        subscribers.subscribe(ADDED, handler)
        with pytest.raises(DuplicateSubscriberError):
            subscribers.subscribe(ADDED, handler)

    def test_all_events_overlapping_a_specific_type_rejected(self):
        subscribers = SubscriberRegistry()
        handler = lambda notification: None
        subscribers.subscribe(ADDED, handler)
        with pytest.raises(DuplicateSubscriberError):
            subscribers.subscribe(ALL_EVENTS, handler)

    def test_one_handler_may_cover_several_types(self):
        subscribers = SubscriberRegistry()
        handler = lambda notification: None
        subscribers.subscribe(ADDED, handler)
        subscribers.subscribe(BOUGHT, handler)
        assert len(subscribers.subscriptions_for(BOUGHT)) == 1

    def test_handler_must_be_callable(self):
        with pytest.raises(EventBusError):
            SubscriberRegistry().subscribe(ADDED, "nope")


class TestDispatch:
    def test_handlers_run_in_registration_order(self):
        subscribers = SubscriberRegistry()
        calls = []
        subscribers.subscribe(ADDED, lambda n: calls.append("first"), name="indexer")
        subscribers.subscribe(ADDED, lambda n: calls.append("second"), name="audit")

        report = dispatch(_notification(), subscribers)

        assert calls == ["first", "second"]
        assert report.delivered == ("indexer", "audit")
        assert report.ok

    def test_handler_receives_the_notification(self):
        subscribers = SubscriberRegistry()
        seen = []
        subscribers.subscribe(ALL_EVENTS, seen.append)
        notification = _notification(BOUGHT, sequence=3)

        dispatch(notification, subscribers)

        assert seen == [notification]

    def test_failure_is_isolated_and_reported(self):
        subscribers = SubscriberRegistry()
        calls = []

        def broken(notification):
            raise RuntimeError("boom")

        subscribers.subscribe(ADDED, broken, name="indexer")
        subscribers.subscribe(ADDED, calls.append, name="audit")

        report = dispatch(_notification(sequence=7), subscribers)

        assert len(calls) == 1
        assert report.notification.sequence == 7
        assert report.delivered == ("audit",)
        assert not report.ok
        assert report.failures[0].subscriber == "indexer"
        assert report.failures[0].error_type == "RuntimeError"
        assert report.failures[0].error == "boom"

    def test_no_subscribers(self):
        report = dispatch(_notification(), SubscriberRegistry())
        assert report.delivered == ()
        assert report.ok
