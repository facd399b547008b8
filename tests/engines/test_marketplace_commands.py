"""
Farm Market — Request Command Tests
=====================================
Structural validation only; domain rules stay with the registry.
"""

import pytest

from engines.marketplace.commands import (
    MARKETPLACE_COMMAND_TYPES,
    AddProductRequest,
    BuyProductRequest,
    RemoveProductRequest,
    UpdateProductRequest,
)
from engines.marketplace.errors import InvalidArgument, Unauthorized
from engines.marketplace.registry import ProductRegistry

FARMER = "farmer-ann"


class TestAddProductRequest:
    def test_from_payload(self):
        request = AddProductRequest.from_payload({"name": "Figs", "price": 8, "quantity": 3})
        assert request == AddProductRequest(name="Figs", price=8, quantity=3)
        assert request.command_type in MARKETPLACE_COMMAND_TYPES

    @pytest.mark.parametrize("payload", [
        {"price": 8, "quantity": 3},
        {"name": "Figs", "quantity": 3},
        {"name": "Figs", "price": "8", "quantity": 3},
        {"name": "Figs", "price": 8, "quantity": True},
        {"name": 5, "price": 8, "quantity": 3},
    ])
    def test_structural_errors(self, payload):
        with pytest.raises(ValueError):
            AddProductRequest.from_payload(payload)

    def test_domain_rules_left_to_registry(self):
        request = AddProductRequest(name="Figs", price=0, quantity=3)
        with pytest.raises(InvalidArgument):
            request.execute(ProductRegistry(), caller=FARMER)

    def test_execute_returns_id(self):
        registry = ProductRegistry()
        assert AddProductRequest("Figs", 8, 3).execute(registry, caller=FARMER) == 1


class TestListingRequests:
    def test_buy_update_remove_flow(self):
        registry = ProductRegistry()
        product_id = AddProductRequest("Figs", 8, 3).execute(registry, caller=FARMER)

        BuyProductRequest.from_payload(product_id, {"quantity": 1}).execute(registry, caller="buyer")
        UpdateProductRequest.from_payload(product_id, {"price": 9, "quantity": 1}).execute(
            registry, caller=FARMER,
        )
        BuyProductRequest(product_id, 1).execute(registry, caller="buyer")
        RemoveProductRequest(product_id).execute(registry, caller=FARMER)

        assert registry.get_product(product_id) is None

    def test_update_reads_price_and_quantity_keys(self):
        request = UpdateProductRequest.from_payload(4, {"price": 2, "quantity": 7})
        assert (request.product_id, request.new_price, request.new_quantity) == (4, 2, 7)

    def test_missing_quantity(self):
        with pytest.raises(ValueError, match="quantity"):
            BuyProductRequest.from_payload(1, {})

    def test_product_id_must_be_int(self):
        with pytest.raises(ValueError):
            RemoveProductRequest(product_id="1")

    def test_remove_by_stranger(self):
        registry = ProductRegistry()
        product_id = registry.add_product("Figs", 8, 1, caller=FARMER)
        with pytest.raises(Unauthorized):
            RemoveProductRequest(product_id).execute(registry, caller="stranger")
