"""
Farm Market Engine — Product Registry
=======================================
Holds every listing, allocates ids, gates mutation by ownership and
emits one notification per successful state change.

Rules:
- Ids are issued 1, 2, 3, ... and never reused, even after removal
- Every precondition is checked before anything is written
- All operations are serialized by a single lock and may not nest;
  a call made from inside another one on the same thread raises
  ReentrantCallError
- Journal append happens before the in-memory write; a failing
  journal leaves the registry untouched
- Notifications are dispatched inside the critical section, so
  observers see them in mutation order
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Optional

from core.commands.rejection import ReasonCode, RejectionReason
from core.event_store.journal import JournalEntry
from core.events.dispatcher import dispatch
from core.events.registry import SubscriberRegistry
from engines.marketplace.errors import (
    FatalInvariantViolation,
    ReentrantCallError,
    error_for,
)
from engines.marketplace.events import (
    MARKETPLACE_PRODUCT_ADDED_V1,
    MARKETPLACE_PRODUCT_BOUGHT_V1,
    MARKETPLACE_PRODUCT_REMOVED_V1,
    MARKETPLACE_PRODUCT_UPDATED_V1,
    Notification,
    build_product_added_payload,
    build_product_bought_payload,
    build_product_removed_payload,
    build_product_updated_payload,
)
from engines.marketplace.models import Listing
from engines.marketplace.policies import (
    caller_identity_policy,
    depleted_listing_policy,
    listing_exists_policy,
    non_zero_purchase_policy,
    ownership_policy,
    positive_price_policy,
    positive_quantity_policy,
    product_name_policy,
    sufficient_quantity_policy,
    whole_units_policy,
)

logger = logging.getLogger("market.registry")


class ProductRegistry:
    """
    In-process listing ledger.

    Args:
        subscriber_registry: Observers notified after each mutation.
        journal:             Optional EventJournal; every notification is
                             appended to it before being applied.
    """

    def __init__(
        self,
        *,
        subscriber_registry: Optional[SubscriberRegistry] = None,
        journal=None,
    ):
        self._lock = threading.Lock()
        self._active = threading.local()
        self._listings: Dict[int, Listing] = {}
        self._next_id = 1
        self._sequence = 0
        self._subscribers = subscriber_registry or SubscriberRegistry()
        self._journal = journal

    # ── Internals ─────────────────────────────────────────────

    @contextmanager
    def _exclusive(self, operation: str) -> Iterator[None]:
        active = getattr(self._active, "operation", None)
        if active is not None:
            logger.error(f"{operation} attempted inside {active}")
            raise ReentrantCallError(operation, active)
        with self._lock:
            self._active.operation = operation
            try:
                yield
            finally:
                self._active.operation = None

    def _check(self, operation: str, reason: Optional[RejectionReason]) -> None:
        if reason is None:
            return
        logger.info(
            f"{operation} rejected: {reason.code} "
            f"({reason.policy_name}): {reason.message}"
        )
        raise error_for(reason)

    def _lookup(self, product_id: Any) -> Optional[Listing]:
        if not isinstance(product_id, int) or isinstance(product_id, bool):
            return None
        return self._listings.get(product_id)

    def _commit(
        self,
        event_type: str,
        payload: dict,
        apply: Callable[[], None],
    ) -> Notification:
        """Journal, apply, then notify. Caller must hold the lock."""
        if self._journal is not None:
            self._journal.append(event_type, payload)

        apply()

        self._sequence += 1
        notification = Notification(
            event_type=event_type,
            payload=dict(payload),
            sequence=self._sequence,
        )
        report = dispatch(notification, self._subscribers)
        if not report.ok:
            logger.warning(
                f"{event_type} #{notification.sequence}: "
                f"{len(report.failures)} subscriber(s) failed"
            )
        return notification

    # ── Mutations ─────────────────────────────────────────────

    def add_product(self, name: str, price: int, quantity: int, *, caller: Any) -> int:
        """Register a new listing owned by caller and return its id."""
        self._check("add_product", product_name_policy(name))
        self._check("add_product", caller_identity_policy(caller))
        self._check("add_product", positive_price_policy(price))
        self._check("add_product", positive_quantity_policy(quantity))

        with self._exclusive("add_product"):
            listing = Listing(
                id=self._next_id,
                name=name,
                price=price,
                quantity=quantity,
                owner=caller,
            )

            def apply() -> None:
                self._listings[listing.id] = listing
                self._next_id = listing.id + 1

            self._commit(
                MARKETPLACE_PRODUCT_ADDED_V1,
                build_product_added_payload(listing),
                apply,
            )

        logger.info(
            f"Product added: id={listing.id} name={name!r} "
            f"price={price} quantity={quantity}"
        )
        return listing.id

    def buy_product(self, product_id: int, quantity: int, *, caller: Any) -> None:
        """
        Take units off a listing. Any caller may buy.

        Check order: existence, availability, then non-zero.
        """
        self._check("buy_product", whole_units_policy(quantity))

        with self._exclusive("buy_product"):
            listing = self._lookup(product_id)
            self._check("buy_product", listing_exists_policy(product_id, listing))
            self._check("buy_product", sufficient_quantity_policy(listing, quantity))
            self._check("buy_product", non_zero_purchase_policy(quantity))

            updated = listing.with_quantity(listing.quantity - quantity)

            def apply() -> None:
                self._listings[product_id] = updated

            self._commit(
                MARKETPLACE_PRODUCT_BOUGHT_V1,
                build_product_bought_payload(product_id, caller, quantity),
                apply,
            )

        logger.info(
            f"Product bought: id={product_id} quantity={quantity} "
            f"remaining={updated.quantity}"
        )

    def update_product(
        self,
        product_id: int,
        new_price: int,
        new_quantity: int,
        *,
        caller: Any,
    ) -> None:
        """Owner-only overwrite of price and quantity, in either direction."""
        with self._exclusive("update_product"):
            listing = self._lookup(product_id)
            self._check(
                "update_product", ownership_policy(product_id, listing, caller)
            )
            self._check("update_product", positive_price_policy(new_price))
            self._check("update_product", positive_quantity_policy(new_quantity))

            updated = listing.with_terms(new_price, new_quantity)

            def apply() -> None:
                self._listings[product_id] = updated

            self._commit(
                MARKETPLACE_PRODUCT_UPDATED_V1,
                build_product_updated_payload(product_id, new_price, new_quantity),
                apply,
            )

        logger.info(
            f"Product updated: id={product_id} price={new_price} "
            f"quantity={new_quantity}"
        )

    def remove_product(self, product_id: int, *, caller: Any) -> None:
        """Owner-only removal of a sold-out listing. Leaves a tombstone."""
        with self._exclusive("remove_product"):
            listing = self._lookup(product_id)
            self._check(
                "remove_product", ownership_policy(product_id, listing, caller)
            )
            self._check("remove_product", depleted_listing_policy(listing))

            def apply() -> None:
                self._listings[product_id] = Listing.tombstone(product_id)

            self._commit(
                MARKETPLACE_PRODUCT_REMOVED_V1,
                build_product_removed_payload(product_id, listing.owner),
                apply,
            )

        logger.info(f"Product removed: id={product_id}")

    # ── Ownership queries ─────────────────────────────────────

    def check_ownership(self, product_id: int, *, caller: Any) -> bool:
        """
        Assert that caller owns a present listing.

        Returns True on success. Any other outcome is treated as a broken
        internal invariant and raises FatalInvariantViolation, which is not
        a MarketplaceError. Use is_owner() for an advisory probe.
        """
        with self._exclusive("check_ownership"):
            listing = self._lookup(product_id)
            if listing is not None and listing.present and listing.owner == caller:
                return True

        reason = RejectionReason(
            code=ReasonCode.FATAL_INVARIANT_VIOLATION,
            message=(
                f"Ownership assertion failed for product {product_id!r}."
            ),
            policy_name="check_ownership",
        )
        logger.error(f"check_ownership failed: {reason.message}")
        raise FatalInvariantViolation(reason)

    def is_owner(self, product_id: int, *, caller: Any) -> bool:
        with self._exclusive("is_owner"):
            listing = self._lookup(product_id)
            return (
                listing is not None
                and listing.present
                and listing.owner is not None
                and listing.owner == caller
            )

    # ── Reads ─────────────────────────────────────────────────

    def get_product(self, product_id: int) -> Optional[Listing]:
        """The live listing, or None for unknown and removed ids."""
        with self._exclusive("get_product"):
            listing = self._lookup(product_id)
            if listing is None or not listing.present:
                return None
            return listing

    def product_count(self) -> int:
        """Ids issued so far, removed ones included."""
        with self._exclusive("product_count"):
            return self._next_id - 1

    def live_products(self) -> tuple[Listing, ...]:
        with self._exclusive("live_products"):
            return tuple(
                self._listings[key]
                for key in sorted(self._listings)
                if self._listings[key].present
            )

    @property
    def next_product_id(self) -> int:
        with self._exclusive("next_product_id"):
            return self._next_id

    @property
    def subscriber_registry(self) -> SubscriberRegistry:
        return self._subscribers

    @property
    def journal(self):
        return self._journal

    # ── Replay ────────────────────────────────────────────────

    def restore(self, entry: JournalEntry) -> None:
        """
        Re-apply one journal entry without journaling or notifying.

        Used by replay only. Entries must arrive in journal order, and
        each one must satisfy the same rules the live operation enforced;
        anything else raises ValueError.
        """
        payload = entry.payload
        with self._exclusive("restore"):
            if entry.event_type == MARKETPLACE_PRODUCT_ADDED_V1:
                product_id = payload["id"]
                if product_id != self._next_id:
                    raise ValueError(
                        f"Journal entry {entry.sequence} adds product "
                        f"{product_id}, expected {self._next_id}."
                    )
                self._restore_check(entry, product_name_policy(payload["name"]))
                self._restore_check(entry, caller_identity_policy(payload["owner"]))
                self._restore_check(entry, positive_price_policy(payload["price"]))
                self._restore_check(entry, positive_quantity_policy(payload["quantity"]))
                self._listings[product_id] = Listing(
                    id=product_id,
                    name=payload["name"],
                    price=payload["price"],
                    quantity=payload["quantity"],
                    owner=payload["owner"],
                )
                self._next_id = product_id + 1

            elif entry.event_type == MARKETPLACE_PRODUCT_BOUGHT_V1:
                listing = self._restore_target(entry)
                quantity = payload["quantity"]
                self._restore_check(entry, whole_units_policy(quantity))
                self._restore_check(entry, non_zero_purchase_policy(quantity))
                self._restore_check(entry, sufficient_quantity_policy(listing, quantity))
                self._listings[listing.id] = listing.with_quantity(
                    listing.quantity - quantity
                )

            elif entry.event_type == MARKETPLACE_PRODUCT_UPDATED_V1:
                listing = self._restore_target(entry)
                new_price = payload["new_price"]
                new_quantity = payload["new_quantity"]
                self._restore_check(entry, positive_price_policy(new_price))
                self._restore_check(entry, positive_quantity_policy(new_quantity))
                self._listings[listing.id] = listing.with_terms(new_price, new_quantity)

            elif entry.event_type == MARKETPLACE_PRODUCT_REMOVED_V1:
                listing = self._restore_target(entry)
                self._restore_check(entry, depleted_listing_policy(listing))
                self._listings[listing.id] = Listing.tombstone(listing.id)

            else:
                raise ValueError(
                    f"Unknown event type in journal entry "
                    f"{entry.sequence}: {entry.event_type}"
                )

            self._sequence = entry.sequence

    @staticmethod
    def _restore_check(entry: JournalEntry, reason: Optional[RejectionReason]) -> None:
        if reason is not None:
            raise ValueError(
                f"Journal entry {entry.sequence} breaks "
                f"{reason.policy_name}: {reason.message}"
            )

    def _restore_target(self, entry: JournalEntry) -> Listing:
        listing = self._lookup(entry.payload["id"])
        if listing is None or not listing.present:
            raise ValueError(
                f"Journal entry {entry.sequence} targets missing product "
                f"{entry.payload['id']!r}."
            )
        return listing
