"""
Ledger Event Store - Chain Hashing
====================================
    event_hash = SHA256(canonical_json(event_body) + previous_event_hash)

The event body is everything an event asserts (sequence, type, engine,
caller, block height, payload); the link to the previous hash makes
any edit, insertion or reordering visible downstream. The first event
links to GENESIS_HASH.
"""

import hashlib
import hmac
import json
from typing import Any


GENESIS_HASH = "GENESIS"


def canonical_serialize(body: Any) -> str:
    """Sorted keys, no whitespace, ASCII only; str() for unknown types."""
    return json.dumps(
        body, sort_keys=True, separators=(",", ":"), ensure_ascii=True, default=str,
    )


def compute_event_hash(body: Any, previous_event_hash: str) -> str:
    link = canonical_serialize(body) + previous_event_hash
    return hashlib.sha256(link.encode("utf-8")).hexdigest()


def link_is_intact(body: Any, previous_event_hash: str, event_hash: str) -> bool:
    return hmac.compare_digest(
        compute_event_hash(body, previous_event_hash), event_hash
    )
