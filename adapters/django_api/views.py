"""
Farm Market Django Adapter Views
==================================
Pass-through HTTP views over core/http_api handlers.
"""

from __future__ import annotations

import json
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from core.http_api.errors import (
    INVALID_REQUEST,
    METHOD_NOT_ALLOWED,
    MISSING_CALLER,
    error_response,
    status_for_response,
)
from core.http_api.handlers import (
    get_ownership,
    get_product,
    get_product_count,
    post_add_product,
    post_buy_product,
    post_remove_product,
    post_update_product,
)
from engines.marketplace.commands import (
    AddProductRequest,
    BuyProductRequest,
    RemoveProductRequest,
    UpdateProductRequest,
)


def _respond(payload: dict[str, Any]) -> JsonResponse:
    return JsonResponse(payload, status=status_for_response(payload))


def _json_error(code: str, message: str) -> JsonResponse:
    return _respond(error_response(code=code, message=message, details={}))


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        METHOD_NOT_ALLOWED, "Method not allowed for this endpoint."
    )


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _resolve_caller(request: HttpRequest, dependencies) -> str | None:
    caller = request.headers.get(dependencies.config.caller_header, "").strip()
    return caller or None


def _dispatch_write(write_handler, contract_factory, request: HttpRequest) -> JsonResponse:
    dependencies = build_dependencies()
    caller = _resolve_caller(request, dependencies)
    if caller is None:
        return _json_error(
            MISSING_CALLER,
            f"Header {dependencies.config.caller_header} is required.",
        )
    try:
        contract = contract_factory(_parse_json_body(request))
    except (ValueError, KeyError) as exc:
        return _json_error(INVALID_REQUEST, str(exc))

    return _respond(write_handler(contract, dependencies, caller=caller))


@csrf_exempt
def products_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(
        post_add_product, AddProductRequest.from_payload, request,
    )


@csrf_exempt
def product_count_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _respond(get_product_count(build_dependencies()))


@csrf_exempt
def product_detail_view(request: HttpRequest, product_id: int) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _respond(get_product(product_id, build_dependencies()))


@csrf_exempt
def product_buy_view(request: HttpRequest, product_id: int) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(
        post_buy_product,
        lambda body: BuyProductRequest.from_payload(product_id, body),
        request,
    )


@csrf_exempt
def product_update_view(request: HttpRequest, product_id: int) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(
        post_update_product,
        lambda body: UpdateProductRequest.from_payload(product_id, body),
        request,
    )


@csrf_exempt
def product_remove_view(request: HttpRequest, product_id: int) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(
        post_remove_product,
        lambda body: RemoveProductRequest(product_id=product_id),
        request,
    )


@csrf_exempt
def product_ownership_view(request: HttpRequest, product_id: int) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    dependencies = build_dependencies()
    caller = _resolve_caller(request, dependencies)
    if caller is None:
        return _json_error(
            MISSING_CALLER,
            f"Header {dependencies.config.caller_header} is required.",
        )
    return _respond(get_ownership(product_id, dependencies, caller=caller))
