"""
Farm Market Core Config — Market Settings
===========================================
Runtime settings for the marketplace registry and its HTTP boundary.

Values come from the Django settings module (which in turn reads the
environment). Engine code never reads the environment directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


DEFAULT_CALLER_HEADER = "X-Market-Caller"


@dataclass(frozen=True)
class MarketConfig:
    """
    Marketplace configuration.

    Fields:
        journal_path:  JSON-lines journal file. None → in-memory journal.
        caller_header: Request header carrying the authenticated principal.
        verify_journal_on_load: Check the hash chain before replay.
    """

    journal_path: Optional[str] = None
    caller_header: str = DEFAULT_CALLER_HEADER
    verify_journal_on_load: bool = True

    def __post_init__(self) -> None:
        if not self.caller_header or not isinstance(self.caller_header, str):
            raise ValueError("caller_header must be a non-empty string.")
        if self.journal_path is not None and not isinstance(self.journal_path, str):
            raise ValueError("journal_path must be a string or None.")

    @classmethod
    def from_settings(cls, settings: Any) -> "MarketConfig":
        """Build from a Django settings object (missing keys use defaults)."""
        journal_path = getattr(settings, "MARKET_JOURNAL_PATH", None) or None
        return cls(
            journal_path=str(journal_path) if journal_path else None,
            caller_header=getattr(
                settings, "MARKET_CALLER_HEADER", DEFAULT_CALLER_HEADER
            ),
            verify_journal_on_load=bool(
                getattr(settings, "MARKET_VERIFY_JOURNAL_ON_LOAD", True)
            ),
        )
