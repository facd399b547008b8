"""
Farm Market HTTP API - Error Mapping
======================================
Stable transport error mapping for marketplace rejections.
"""

from __future__ import annotations

from typing import Any, Optional

from core.commands.rejection import ReasonCode, RejectionReason
from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse


INVALID_REQUEST = "INVALID_REQUEST"
MISSING_CALLER = "MISSING_CALLER"
METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"

HTTP_STATUS_BY_CODE = {
    ReasonCode.INVALID_ARGUMENT: 400,
    ReasonCode.NOT_FOUND: 404,
    ReasonCode.UNAUTHORIZED: 403,
    ReasonCode.INSUFFICIENT_QUANTITY: 409,
    ReasonCode.PRECONDITION_FAILED: 409,
    ReasonCode.FATAL_INVARIANT_VIOLATION: 500,
    INVALID_REQUEST: 400,
    MISSING_CALLER: 401,
    METHOD_NOT_ALLOWED: 405,
}


def status_for_response(payload: dict[str, Any]) -> int:
    if payload.get("ok"):
        return 200
    code = payload.get("error", {}).get("code")
    return HTTP_STATUS_BY_CODE.get(code, 400)


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(data: Any) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data).to_dict()


def map_rejection_reason(reason: RejectionReason) -> HttpApiErrorBody:
    return HttpApiErrorBody(
        code=reason.code,
        message=reason.message,
        details={
            "policy_name": reason.policy_name,
            "message_key": f"rejection.{reason.code.lower()}",
        },
    )


def rejection_response(reason: RejectionReason) -> dict[str, Any]:
    mapped = map_rejection_reason(reason)
    return error_response(
        code=mapped.code,
        message=mapped.message,
        details=mapped.details,
    )
