"""
Farm Market Event Bus — Notification
======================================
The one message shape the bus carries.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Notification:
    """
    A completed state change, handed to observers.

    sequence is the emitter's local counter (1, 2, 3, ...), so observers
    can detect gaps or reordering.
    """

    event_type: str
    payload: dict
    sequence: int
