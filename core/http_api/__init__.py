"""
Farm Market HTTP API
======================
Framework-agnostic contracts, error mapping and handlers.
Adapters (Django) are thin glue over this package.
"""

from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    error_response,
    rejection_response,
    status_for_response,
    success_response,
)

__all__ = [
    "HttpApiDependencies",
    "HttpApiErrorBody",
    "HttpApiResponse",
    "error_response",
    "rejection_response",
    "status_for_response",
    "success_response",
]
