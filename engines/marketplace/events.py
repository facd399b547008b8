"""
Farm Market Engine — Event Types and Payload Builders
=======================================================
Engine: Marketplace

The registry builds payloads only. Dispatch and journaling stay external.
"""

from __future__ import annotations

from typing import Any

from core.events.notification import Notification
from engines.marketplace.models import Listing

__all__ = [
    "MARKETPLACE_PRODUCT_ADDED_V1",
    "MARKETPLACE_PRODUCT_BOUGHT_V1",
    "MARKETPLACE_PRODUCT_UPDATED_V1",
    "MARKETPLACE_PRODUCT_REMOVED_V1",
    "MARKETPLACE_EVENT_TYPES",
    "Notification",
    "build_product_added_payload",
    "build_product_bought_payload",
    "build_product_updated_payload",
    "build_product_removed_payload",
]


# ══════════════════════════════════════════════════════════════
# EVENT TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

MARKETPLACE_PRODUCT_ADDED_V1 = "marketplace.product.added.v1"
MARKETPLACE_PRODUCT_BOUGHT_V1 = "marketplace.product.bought.v1"
MARKETPLACE_PRODUCT_UPDATED_V1 = "marketplace.product.updated.v1"
MARKETPLACE_PRODUCT_REMOVED_V1 = "marketplace.product.removed.v1"

MARKETPLACE_EVENT_TYPES = (
    MARKETPLACE_PRODUCT_ADDED_V1,
    MARKETPLACE_PRODUCT_BOUGHT_V1,
    MARKETPLACE_PRODUCT_UPDATED_V1,
    MARKETPLACE_PRODUCT_REMOVED_V1,
)


# ══════════════════════════════════════════════════════════════
# PAYLOAD BUILDERS
# ══════════════════════════════════════════════════════════════

def build_product_added_payload(listing: Listing) -> dict:
    # owner rides along for journal replay
    return {
        "id": listing.id,
        "name": listing.name,
        "price": listing.price,
        "quantity": listing.quantity,
        "owner": listing.owner,
    }


def build_product_bought_payload(product_id: int, buyer: Any, quantity: int) -> dict:
    return {
        "id": product_id,
        "buyer": buyer,
        "quantity": quantity,
    }


def build_product_updated_payload(product_id: int, new_price: int, new_quantity: int) -> dict:
    return {
        "id": product_id,
        "new_price": new_price,
        "new_quantity": new_quantity,
    }


def build_product_removed_payload(product_id: int, owner: Any) -> dict:
    return {
        "id": product_id,
        "owner": owner,
    }
