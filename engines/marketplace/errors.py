"""
Farm Market Engine — Errors
=============================
Exception taxonomy for rejected marketplace operations.

Every recoverable rejection derives from MarketplaceError and carries
a RejectionReason. FatalInvariantViolation deliberately sits outside
that family: generic rejection handlers must not absorb it. The same
holds for ReentrantCallError, which signals misuse rather than a
rejected request.
"""

from __future__ import annotations

from core.commands.rejection import ReasonCode, RejectionReason


class MarketplaceError(Exception):
    """Base error for all recoverable marketplace rejections."""

    code = ReasonCode.INVALID_ARGUMENT

    def __init__(self, reason: RejectionReason):
        self.reason = reason
        super().__init__(reason.message)

    @property
    def policy_name(self) -> str:
        return self.reason.policy_name


class InvalidArgument(MarketplaceError):
    """Non-positive price/quantity, zero purchase, empty name or caller."""

    code = ReasonCode.INVALID_ARGUMENT


class NotFound(MarketplaceError):
    """No present listing at the requested id."""

    code = ReasonCode.NOT_FOUND


class InsufficientQuantity(MarketplaceError):
    """Purchase asks for more units than are available."""

    code = ReasonCode.INSUFFICIENT_QUANTITY


class Unauthorized(MarketplaceError):
    """Caller is not the listing's owner."""

    code = ReasonCode.UNAUTHORIZED


class PreconditionFailed(MarketplaceError):
    """Removal attempted while units remain."""

    code = ReasonCode.PRECONDITION_FAILED


class FatalInvariantViolation(Exception):
    """
    Ownership assertion failed.

    Raised only by ProductRegistry.check_ownership. Not a subclass of
    MarketplaceError.
    """

    code = ReasonCode.FATAL_INVARIANT_VIOLATION

    def __init__(self, reason: RejectionReason):
        self.reason = reason
        super().__init__(reason.message)


class ReentrantCallError(RuntimeError):
    """
    A registry operation was started from inside another one on the
    same thread, typically by a subscriber reacting to a notification.
    """

    def __init__(self, operation: str, active: str):
        self.operation = operation
        self.active = active
        super().__init__(
            f"{operation} called while {active} is still in progress."
        )


ERRORS_BY_CODE = {
    ReasonCode.INVALID_ARGUMENT: InvalidArgument,
    ReasonCode.NOT_FOUND: NotFound,
    ReasonCode.INSUFFICIENT_QUANTITY: InsufficientQuantity,
    ReasonCode.UNAUTHORIZED: Unauthorized,
    ReasonCode.PRECONDITION_FAILED: PreconditionFailed,
}


def error_for(reason: RejectionReason) -> MarketplaceError:
    """Wrap a policy rejection in its exception type."""
    error_cls = ERRORS_BY_CODE.get(reason.code)
    if error_cls is None:
        raise ValueError(f"Unknown rejection code: {reason.code}")
    return error_cls(reason)
