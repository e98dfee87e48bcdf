"""Deterministic cache-key derivation for report queries.

A key is ``prefix + md5(canonical JSON of the ordered argument list)``.
Mappings are serialized with sorted keys at every depth, so two option
dicts with the same content but different insertion order produce the same
key.  Sequences keep their order because the reporting API treats
``"ga:users,ga:sessions"`` and its reverse as distinct requests anyway.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Sequence
from typing import Any


def serialize_arguments(arguments: Sequence[Any]) -> str:
    """Return the canonical JSON text for an ordered argument list.

    Values JSON cannot represent natively (``datetime.date`` and friends)
    fall back to ``str()``.
    """
    return json.dumps(
        list(arguments),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )


def determine_cache_key(prefix: str, arguments: Sequence[Any]) -> str:
    """Return the cache key for *arguments* under *prefix*."""
    digest = hashlib.md5(serialize_arguments(arguments).encode("utf-8")).hexdigest()
    return f"{prefix}{digest}"
