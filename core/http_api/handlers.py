"""
Farm Market HTTP API - Framework-Agnostic Handlers
====================================================
Pure handler functions over request commands and injected dependencies.

Handlers never authenticate. The caller principal is resolved by the
adapter and passed in explicitly.
"""

from __future__ import annotations

import logging
from typing import Any

from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    error_response,
    rejection_response,
    success_response,
)
from core.commands.rejection import ReasonCode
from engines.marketplace.commands import (
    AddProductRequest,
    BuyProductRequest,
    RemoveProductRequest,
    UpdateProductRequest,
)
from engines.marketplace.errors import FatalInvariantViolation, MarketplaceError

logger = logging.getLogger("market.http")


def _execute(contract, dependencies: HttpApiDependencies, caller: Any) -> dict[str, Any]:
    try:
        result = contract.execute(dependencies.registry, caller=caller)
    except MarketplaceError as exc:
        return rejection_response(exc.reason)
    return success_response(result)


def post_add_product(
    contract: AddProductRequest,
    dependencies: HttpApiDependencies,
    *,
    caller: Any,
) -> dict[str, Any]:
    response = _execute(contract, dependencies, caller)
    if response["ok"]:
        response["data"] = {"id": response["data"]}
    return response


def post_buy_product(
    contract: BuyProductRequest,
    dependencies: HttpApiDependencies,
    *,
    caller: Any,
) -> dict[str, Any]:
    return _execute(contract, dependencies, caller)


def post_update_product(
    contract: UpdateProductRequest,
    dependencies: HttpApiDependencies,
    *,
    caller: Any,
) -> dict[str, Any]:
    return _execute(contract, dependencies, caller)


def post_remove_product(
    contract: RemoveProductRequest,
    dependencies: HttpApiDependencies,
    *,
    caller: Any,
) -> dict[str, Any]:
    return _execute(contract, dependencies, caller)


def get_product(product_id: int, dependencies: HttpApiDependencies) -> dict[str, Any]:
    listing = dependencies.registry.get_product(product_id)
    if listing is None:
        return error_response(
            code=ReasonCode.NOT_FOUND,
            message=f"Product {product_id} does not exist.",
        )
    return success_response(listing.to_dict())


def get_product_count(dependencies: HttpApiDependencies) -> dict[str, Any]:
    return success_response({"count": dependencies.registry.product_count()})


def get_ownership(
    product_id: int,
    dependencies: HttpApiDependencies,
    *,
    caller: Any,
) -> dict[str, Any]:
    try:
        owner = dependencies.registry.check_ownership(product_id, caller=caller)
    except FatalInvariantViolation as exc:
        logger.error(
            f"Ownership assertion aborted request for product {product_id}."
        )
        return rejection_response(exc.reason)
    return success_response({"owner": owner})
