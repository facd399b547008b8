"""
Farm Market Command Layer
===========================
Every denied operation carries exactly one RejectionReason.
"""

from core.commands.rejection import (
    ReasonCode,
    RejectionReason,
)

__all__ = [
    "ReasonCode",
    "RejectionReason",
]
