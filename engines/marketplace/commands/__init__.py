"""
Farm Market Engine — Request Commands
=======================================
Typed marketplace requests built by boundary layers (HTTP, CLI).

Requests validate structure only (field presence and types). Domain
rules such as positivity, ownership and availability are enforced by
the registry, so rejection order stays the registry's.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


# ══════════════════════════════════════════════════════════════
# COMMAND TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

MARKETPLACE_PRODUCT_ADD_REQUEST = "marketplace.product.add.request"
MARKETPLACE_PRODUCT_BUY_REQUEST = "marketplace.product.buy.request"
MARKETPLACE_PRODUCT_UPDATE_REQUEST = "marketplace.product.update.request"
MARKETPLACE_PRODUCT_REMOVE_REQUEST = "marketplace.product.remove.request"

MARKETPLACE_COMMAND_TYPES = frozenset({
    MARKETPLACE_PRODUCT_ADD_REQUEST,
    MARKETPLACE_PRODUCT_BUY_REQUEST,
    MARKETPLACE_PRODUCT_UPDATE_REQUEST,
    MARKETPLACE_PRODUCT_REMOVE_REQUEST,
})


def _require_int(data: dict, field_name: str) -> int:
    if field_name not in data:
        raise ValueError(f"{field_name} is required.")
    value = data[field_name]
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{field_name} must be an integer.")
    return value


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AddProductRequest:
    """Request to list a new product."""
    name: str
    price: int
    quantity: int

    command_type = MARKETPLACE_PRODUCT_ADD_REQUEST

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise ValueError("name must be a string.")
        if not isinstance(self.price, int) or isinstance(self.price, bool):
            raise ValueError("price must be an integer.")
        if not isinstance(self.quantity, int) or isinstance(self.quantity, bool):
            raise ValueError("quantity must be an integer.")

    @classmethod
    def from_payload(cls, data: dict) -> "AddProductRequest":
        if "name" not in data:
            raise ValueError("name is required.")
        return cls(
            name=data["name"],
            price=_require_int(data, "price"),
            quantity=_require_int(data, "quantity"),
        )

    def execute(self, registry, *, caller: Any) -> int:
        return registry.add_product(
            self.name, self.price, self.quantity, caller=caller,
        )


@dataclass(frozen=True)
class BuyProductRequest:
    """Request to buy units of a listing."""
    product_id: int
    quantity: int

    command_type = MARKETPLACE_PRODUCT_BUY_REQUEST

    def __post_init__(self):
        if not isinstance(self.product_id, int) or isinstance(self.product_id, bool):
            raise ValueError("product_id must be an integer.")
        if not isinstance(self.quantity, int) or isinstance(self.quantity, bool):
            raise ValueError("quantity must be an integer.")

    @classmethod
    def from_payload(cls, product_id: int, data: dict) -> "BuyProductRequest":
        return cls(product_id=product_id, quantity=_require_int(data, "quantity"))

    def execute(self, registry, *, caller: Any) -> None:
        registry.buy_product(self.product_id, self.quantity, caller=caller)


@dataclass(frozen=True)
class UpdateProductRequest:
    """Owner request to reprice and/or restock a listing."""
    product_id: int
    new_price: int
    new_quantity: int

    command_type = MARKETPLACE_PRODUCT_UPDATE_REQUEST

    def __post_init__(self):
        if not isinstance(self.product_id, int) or isinstance(self.product_id, bool):
            raise ValueError("product_id must be an integer.")
        if not isinstance(self.new_price, int) or isinstance(self.new_price, bool):
            raise ValueError("new_price must be an integer.")
        if not isinstance(self.new_quantity, int) or isinstance(self.new_quantity, bool):
            raise ValueError("new_quantity must be an integer.")

    @classmethod
    def from_payload(cls, product_id: int, data: dict) -> "UpdateProductRequest":
        return cls(
            product_id=product_id,
            new_price=_require_int(data, "price"),
            new_quantity=_require_int(data, "quantity"),
        )

    def execute(self, registry, *, caller: Any) -> None:
        registry.update_product(
            self.product_id, self.new_price, self.new_quantity, caller=caller,
        )


@dataclass(frozen=True)
class RemoveProductRequest:
    """Owner request to delist a sold-out product."""
    product_id: int

    command_type = MARKETPLACE_PRODUCT_REMOVE_REQUEST

    def __post_init__(self):
        if not isinstance(self.product_id, int) or isinstance(self.product_id, bool):
            raise ValueError("product_id must be an integer.")

    def execute(self, registry, *, caller: Any) -> None:
        registry.remove_product(self.product_id, caller=caller)
