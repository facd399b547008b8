"""
Farm Market Engine — Listing Record
=====================================
The single entity held by the product registry.

RULES:
- Listings are immutable snapshots; every mutation stores a new one
- Prices and quantities are plain integers (no currency unit)
- A removed listing is kept as a tombstone so its id is never reissued
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass(frozen=True)
class Listing:
    """
    A product offered by a farmer.

    Fields:
        id:       Registry-assigned identifier (1, 2, 3, ...).
        name:     Display name.
        price:    Informational unit price (> 0 while present).
        quantity: Units still available (>= 0 while present).
        owner:    Principal that created the listing. None on tombstones.
        present:  False once the listing has been removed.
    """

    id: int
    name: str
    price: int
    quantity: int
    owner: Optional[Any]
    present: bool = True

    @classmethod
    def tombstone(cls, product_id: int) -> "Listing":
        """All fields cleared; the zero identity never equals a real caller."""
        return cls(
            id=product_id,
            name="",
            price=0,
            quantity=0,
            owner=None,
            present=False,
        )

    def with_quantity(self, quantity: int) -> "Listing":
        return replace(self, quantity=quantity)

    def with_terms(self, price: int, quantity: int) -> "Listing":
        return replace(self, price=price, quantity=quantity)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "owner": self.owner,
            "present": self.present,
        }
