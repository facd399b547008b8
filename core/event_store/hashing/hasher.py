"""
Farm Market Event Store — Hash Computation
============================================
Computes entry hashes using SHA-256.

Formula:
    event_hash = SHA256(canonical_json(body) + previous_hash)

Rules:
- Canonical JSON: sorted keys, no whitespace variability
- No salt, no randomness — determinism is mandatory
- First entry uses GENESIS_HASH as previous_hash
- Same input ALWAYS produces same output

This module ONLY computes. It does not verify or persist.
"""

import hashlib
import json
from typing import Any


GENESIS_HASH = "GENESIS"


def canonical_serialize(payload: Any) -> str:
    """
    Produce a deterministic JSON string from payload.

    Keys sorted at all levels, compact separators, ASCII only.
    Non-JSON types (UUID, datetime) fall back to str().
    """
    return json.dumps(
        payload,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=True,
        default=str,
    )


def compute_event_hash(payload: Any, previous_hash: str) -> str:
    """
    Compute the SHA-256 link for a journal entry.

    Args:
        payload:       Entry body (dict/JSON-serializable).
        previous_hash: Hash of the preceding entry, or GENESIS_HASH.

    Returns:
        64-character lowercase hex SHA-256 digest.
    """
    canonical = canonical_serialize(payload)
    hash_input = canonical + previous_hash
    return hashlib.sha256(hash_input.encode("utf-8")).hexdigest()
