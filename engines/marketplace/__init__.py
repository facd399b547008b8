"""
Farm Market Engine — Public API
=================================
Farmers list products, buyers take units, owners reprice or delist.
"""

from engines.marketplace.errors import (
    FatalInvariantViolation,
    InsufficientQuantity,
    InvalidArgument,
    MarketplaceError,
    NotFound,
    PreconditionFailed,
    ReentrantCallError,
    Unauthorized,
)
from engines.marketplace.events import MARKETPLACE_EVENT_TYPES, Notification
from engines.marketplace.models import Listing
from engines.marketplace.registry import ProductRegistry
from engines.marketplace.replay import ReplayResult, replay_registry

__all__ = [
    "ProductRegistry",
    "Listing",
    "Notification",
    "MARKETPLACE_EVENT_TYPES",
    "replay_registry",
    "ReplayResult",
    "MarketplaceError",
    "InvalidArgument",
    "NotFound",
    "InsufficientQuantity",
    "Unauthorized",
    "PreconditionFailed",
    "FatalInvariantViolation",
    "ReentrantCallError",
]
