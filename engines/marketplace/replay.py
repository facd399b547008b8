"""
Farm Market Engine — Journal Replay
=====================================
Rebuilds a ProductRegistry from its journal.

Rules:
- Replay MUST NOT append to the journal
- Replay MUST NOT notify subscribers
- The id counter resumes after the highest id ever issued
- A broken hash chain refuses replay (when verification is on)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from core.event_store.errors import JournalIntegrityError
from core.event_store.hashing.verifier import verify_hash_chain
from core.events.registry import SubscriberRegistry
from engines.marketplace.registry import ProductRegistry

logger = logging.getLogger("market.replay")


@dataclass(frozen=True)
class ReplayResult:
    entries_applied: int
    next_product_id: int
    last_hash: Optional[str]


def replay_registry(
    journal,
    *,
    subscriber_registry: Optional[SubscriberRegistry] = None,
    verify: bool = True,
) -> tuple[ProductRegistry, ReplayResult]:
    """
    Build a registry whose state equals the journal's history.

    The returned registry keeps writing to the same journal.

    Raises:
        JournalIntegrityError: chain verification failed, or an entry
                               does not apply cleanly.
    """
    entries = journal.read_all()
    last_hash = verify_hash_chain(entries) if verify else None

    registry = ProductRegistry(
        subscriber_registry=subscriber_registry, journal=journal,
    )
    for entry in entries:
        try:
            registry.restore(entry)
        except (KeyError, TypeError, ValueError) as exc:
            raise JournalIntegrityError(
                "REPLAY_APPLY_FAILED", entry.sequence, str(exc)
            ) from exc

    result = ReplayResult(
        entries_applied=len(entries),
        next_product_id=registry.next_product_id,
        last_hash=last_hash,
    )
    logger.info(
        f"Replay complete: {result.entries_applied} entries, "
        f"next product id {result.next_product_id}"
    )
    return registry, result
