"""
Farm Market Command Layer — Rejection Model
=============================================
Structured reasons for denied marketplace operations.

This is NOT an event. It is an explanation structure carried by
every marketplace rejection and surfaced to callers as-is.

Every rejection must be:
- Deterministic (same input + same state → same rejection)
- Machine-readable (code)
- Human-readable (message)
- Attributable (policy_name names the check that failed)
"""

from __future__ import annotations

from dataclasses import dataclass


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for operation rejection.

    Fields:
        code:        Machine-readable rejection code (e.g. 'NOT_FOUND').
        message:     Human-readable explanation.
        policy_name: Name of the check that caused rejection.
    """

    code: str
    message: str
    policy_name: str

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
        }


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Known rejection codes.

    Convention: SCREAMING_SNAKE_CASE.
    """

    # ── Caller input ──────────────────────────────────────────
    INVALID_ARGUMENT = "INVALID_ARGUMENT"

    # ── Listing state ─────────────────────────────────────────
    NOT_FOUND = "NOT_FOUND"
    INSUFFICIENT_QUANTITY = "INSUFFICIENT_QUANTITY"
    PRECONDITION_FAILED = "PRECONDITION_FAILED"

    # ── Authorization ─────────────────────────────────────────
    UNAUTHORIZED = "UNAUTHORIZED"

    # ── Internal consistency ──────────────────────────────────
    FATAL_INVARIANT_VIOLATION = "FATAL_INVARIANT_VIOLATION"
