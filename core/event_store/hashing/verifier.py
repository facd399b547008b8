"""
Farm Market Event Store — Hash-Chain Verifier
===============================================
Verifies that a sequence of journal entries forms an unbroken chain.

For every entry, in order:
1. sequence is exactly one more than the previous entry's
2. previous_hash equals the previous entry's event_hash (GENESIS first)
3. event_hash is correctly computed from the entry body

Any mismatch raises JournalIntegrityError. Nothing is auto-corrected.
"""

from typing import Iterable

from core.event_store.errors import JournalIntegrityError
from core.event_store.hashing.errors import HashRejectionCode
from core.event_store.hashing.hasher import GENESIS_HASH, compute_event_hash


def verify_hash_chain(entries: Iterable) -> str:
    """
    Verify journal entries and return the hash of the last one.

    An empty journal verifies to GENESIS_HASH.
    """
    expected_previous = GENESIS_HASH
    expected_sequence = 1

    for entry in entries:
        if entry.sequence != expected_sequence:
            raise JournalIntegrityError(
                HashRejectionCode.SEQUENCE_GAP,
                entry.sequence,
                f"expected sequence {expected_sequence}.",
            )

        if entry.previous_hash != expected_previous:
            raise JournalIntegrityError(
                HashRejectionCode.HASH_CHAIN_BROKEN,
                entry.sequence,
                f"previous_hash '{entry.previous_hash}' != "
                f"'{expected_previous}'.",
            )

        recomputed = compute_event_hash(entry.body(), entry.previous_hash)
        if entry.event_hash != recomputed:
            raise JournalIntegrityError(
                HashRejectionCode.HASH_COMPUTATION_MISMATCH,
                entry.sequence,
                f"stored hash '{entry.event_hash}' != "
                f"recomputed '{recomputed}'.",
            )

        expected_previous = entry.event_hash
        expected_sequence += 1

    return expected_previous
