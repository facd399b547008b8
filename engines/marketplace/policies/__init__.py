"""
Farm Market Engine — Policies
===============================
Validation checks for marketplace operations.

Each policy returns None when satisfied, or a RejectionReason naming
itself. The registry evaluates them in a fixed order per operation and
stops at the first rejection, before any state is touched.
"""

from __future__ import annotations

from typing import Any, Optional

from core.commands.rejection import ReasonCode, RejectionReason
from engines.marketplace.models import Listing


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# ══════════════════════════════════════════════════════════════
# ARGUMENT POLICIES
# ══════════════════════════════════════════════════════════════

def product_name_policy(name: Any) -> Optional[RejectionReason]:
    if not isinstance(name, str) or not name.strip():
        return RejectionReason(
            code=ReasonCode.INVALID_ARGUMENT,
            message="Product name must be a non-empty string.",
            policy_name="product_name_policy",
        )
    return None


def caller_identity_policy(caller: Any) -> Optional[RejectionReason]:
    if caller is None or caller == "":
        return RejectionReason(
            code=ReasonCode.INVALID_ARGUMENT,
            message="Caller identity is required.",
            policy_name="caller_identity_policy",
        )
    return None


def positive_price_policy(price: Any) -> Optional[RejectionReason]:
    if not _is_int(price) or price <= 0:
        return RejectionReason(
            code=ReasonCode.INVALID_ARGUMENT,
            message=f"Price must be a positive integer, got {price!r}.",
            policy_name="positive_price_policy",
        )
    return None


def positive_quantity_policy(quantity: Any) -> Optional[RejectionReason]:
    if not _is_int(quantity) or quantity <= 0:
        return RejectionReason(
            code=ReasonCode.INVALID_ARGUMENT,
            message=f"Quantity must be a positive integer, got {quantity!r}.",
            policy_name="positive_quantity_policy",
        )
    return None


def whole_units_policy(quantity: Any) -> Optional[RejectionReason]:
    """Purchase amounts are unsigned integers; zero is judged later."""
    if not _is_int(quantity) or quantity < 0:
        return RejectionReason(
            code=ReasonCode.INVALID_ARGUMENT,
            message=f"Quantity must be a non-negative integer, got {quantity!r}.",
            policy_name="whole_units_policy",
        )
    return None


# ══════════════════════════════════════════════════════════════
# STATE POLICIES
# ══════════════════════════════════════════════════════════════

def listing_exists_policy(
    product_id: Any, listing: Optional[Listing],
) -> Optional[RejectionReason]:
    if listing is None or not listing.present:
        return RejectionReason(
            code=ReasonCode.NOT_FOUND,
            message=f"Product {product_id!r} does not exist.",
            policy_name="listing_exists_policy",
        )
    return None


def sufficient_quantity_policy(
    listing: Listing, quantity: int,
) -> Optional[RejectionReason]:
    if quantity > listing.quantity:
        return RejectionReason(
            code=ReasonCode.INSUFFICIENT_QUANTITY,
            message=(
                f"Insufficient quantity: {listing.quantity} available, "
                f"{quantity} requested for product {listing.id}."
            ),
            policy_name="sufficient_quantity_policy",
        )
    return None


def non_zero_purchase_policy(quantity: int) -> Optional[RejectionReason]:
    if quantity == 0:
        return RejectionReason(
            code=ReasonCode.INVALID_ARGUMENT,
            message="Purchase quantity must be greater than zero.",
            policy_name="non_zero_purchase_policy",
        )
    return None


def ownership_policy(
    product_id: Any, listing: Optional[Listing], caller: Any,
) -> Optional[RejectionReason]:
    """
    Caller must own the listing.

    Absent and tombstoned ids have owner None, which matches no caller.
    """
    owner = listing.owner if listing is not None else None
    if owner is None or owner != caller:
        return RejectionReason(
            code=ReasonCode.UNAUTHORIZED,
            message=f"Caller is not the owner of product {product_id!r}.",
            policy_name="ownership_policy",
        )
    return None


def depleted_listing_policy(listing: Listing) -> Optional[RejectionReason]:
    if listing.quantity != 0:
        return RejectionReason(
            code=ReasonCode.PRECONDITION_FAILED,
            message=(
                f"Product {listing.id} still has {listing.quantity} "
                f"units; only sold-out listings can be removed."
            ),
            policy_name="depleted_listing_policy",
        )
    return None
