"""
Farm Market Event Store — Journal
===================================
Append-only, hash-chained record of every emitted notification.

Doctrine:
- Journal is a dependency injection point (testable, swappable).
- InMemory journal is deterministic and used in tests.
- File journal stores one JSON object per line.
- Appends are atomic with respect to each other; a failed append
  leaves no partial line behind.
- Entries are never modified or deleted.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Protocol

from core.event_store.errors import JournalFormatError
from core.event_store.hashing.hasher import (
    GENESIS_HASH,
    canonical_serialize,
    compute_event_hash,
)

logger = logging.getLogger("market.journal")


# ══════════════════════════════════════════════════════════════
# JOURNAL ENTRY
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class JournalEntry:
    """
    One sealed journal record.

    event_hash = SHA256(canonical_json(body()) + previous_hash)
    """

    sequence: int
    event_type: str
    payload: dict
    previous_hash: str
    event_hash: str

    def body(self) -> dict:
        """The hashed portion of the entry."""
        return {
            "sequence": self.sequence,
            "event_type": self.event_type,
            "payload": self.payload,
        }

    def to_dict(self) -> dict:
        data = self.body()
        data["previous_hash"] = self.previous_hash
        data["event_hash"] = self.event_hash
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "JournalEntry":
        return cls(
            sequence=int(data["sequence"]),
            event_type=str(data["event_type"]),
            payload=dict(data["payload"]),
            previous_hash=str(data["previous_hash"]),
            event_hash=str(data["event_hash"]),
        )


def seal_entry(
    *,
    sequence: int,
    event_type: str,
    payload: dict,
    previous_hash: str,
) -> JournalEntry:
    body = {"sequence": sequence, "event_type": event_type, "payload": payload}
    return JournalEntry(
        sequence=sequence,
        event_type=event_type,
        payload=dict(payload),
        previous_hash=previous_hash,
        event_hash=compute_event_hash(body, previous_hash),
    )


# ══════════════════════════════════════════════════════════════
# PROTOCOL
# ══════════════════════════════════════════════════════════════

class EventJournal(Protocol):
    def append(self, event_type: str, payload: dict) -> JournalEntry:
        """Seal and store a new entry chained to the previous one."""
        ...

    def read_all(self) -> tuple[JournalEntry, ...]:
        """All entries in append order."""
        ...

    @property
    def last_hash(self) -> str:
        ...


# ══════════════════════════════════════════════════════════════
# IN-MEMORY JOURNAL
# ══════════════════════════════════════════════════════════════

class InMemoryEventJournal:
    """Thread-safe in-memory journal. Used in tests and dev wiring."""

    def __init__(self, entries: tuple[JournalEntry, ...] = ()):
        self._lock = threading.Lock()
        self._entries: list[JournalEntry] = list(entries)

    def append(self, event_type: str, payload: dict) -> JournalEntry:
        with self._lock:
            entry = seal_entry(
                sequence=len(self._entries) + 1,
                event_type=event_type,
                payload=payload,
                previous_hash=self._last_hash_unlocked(),
            )
            self._entries.append(entry)
            return entry

    def read_all(self) -> tuple[JournalEntry, ...]:
        with self._lock:
            return tuple(self._entries)

    def _last_hash_unlocked(self) -> str:
        if not self._entries:
            return GENESIS_HASH
        return self._entries[-1].event_hash

    @property
    def last_hash(self) -> str:
        with self._lock:
            return self._last_hash_unlocked()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


# ══════════════════════════════════════════════════════════════
# FILE JOURNAL (JSON lines)
# ══════════════════════════════════════════════════════════════

class FileEventJournal:
    """
    JSON-lines journal on local disk.

    The file is read once at construction to recover the chain tip;
    every append is flushed and fsync'd before returning.
    """

    def __init__(self, path: str | os.PathLike):
        self._path = Path(path)
        self._lock = threading.Lock()
        self._count = 0
        self._last_hash = GENESIS_HASH

        existing = self._load()
        if existing:
            self._count = existing[-1].sequence
            self._last_hash = existing[-1].event_hash
        logger.info(
            f"Journal opened: {self._path} ({self._count} entries)"
        )

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> list[JournalEntry]:
        if not self._path.exists():
            return []

        entries: list[JournalEntry] = []
        with self._path.open("r", encoding="utf-8") as handle:
            for line_number, raw in enumerate(handle, start=1):
                line = raw.strip()
                if not line:
                    continue
                try:
                    entries.append(JournalEntry.from_dict(json.loads(line)))
                except (ValueError, KeyError, TypeError) as exc:
                    raise JournalFormatError(line_number, str(exc)) from exc
        return entries

    def append(self, event_type: str, payload: dict) -> JournalEntry:
        with self._lock:
            entry = seal_entry(
                sequence=self._count + 1,
                event_type=event_type,
                payload=payload,
                previous_hash=self._last_hash,
            )
            self._path.parent.mkdir(parents=True, exist_ok=True)
            size = self._path.stat().st_size if self._path.exists() else 0
            try:
                with self._path.open("a", encoding="utf-8") as handle:
                    handle.write(canonical_serialize(entry.to_dict()) + "\n")
                    handle.flush()
                    os.fsync(handle.fileno())
            except OSError:
                # cut any partial line so the file stays loadable
                if self._path.exists():
                    os.truncate(self._path, size)
                logger.error(
                    f"Journal append failed at sequence {entry.sequence}; "
                    f"{self._path} restored to {size} bytes"
                )
                raise
            self._count = entry.sequence
            self._last_hash = entry.event_hash
            return entry

    def read_all(self) -> tuple[JournalEntry, ...]:
        with self._lock:
            return tuple(self._load())

    @property
    def last_hash(self) -> str:
        with self._lock:
            return self._last_hash

    def __len__(self) -> int:
        with self._lock:
            return self._count


def open_journal(path: Optional[str]) -> Any:
    """File journal when a path is configured, in-memory otherwise."""
    if path:
        return FileEventJournal(path)
    return InMemoryEventJournal()
