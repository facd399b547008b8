"""
Farm Market Event Store — Public API
======================================
Append-only, hash-chained journal of marketplace notifications.
"""

from core.event_store.errors import (
    JournalError,
    JournalFormatError,
    JournalIntegrityError,
)
from core.event_store.journal import (
    EventJournal,
    FileEventJournal,
    InMemoryEventJournal,
    JournalEntry,
    open_journal,
    seal_entry,
)
from core.event_store.hashing import GENESIS_HASH, verify_hash_chain

__all__ = [
    "EventJournal",
    "FileEventJournal",
    "InMemoryEventJournal",
    "JournalEntry",
    "open_journal",
    "seal_entry",
    "verify_hash_chain",
    "GENESIS_HASH",
    "JournalError",
    "JournalFormatError",
    "JournalIntegrityError",
]
