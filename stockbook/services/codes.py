from __future__ import annotations

import uuid
from typing import Iterable


def generate_id() -> str:
    """Opaque identifier for new products and movements."""
    return uuid.uuid4().hex


def generate_sku(now_ms: int, prefix: str = "V254", existing: Iterable[str] = ()) -> str:
    """Return the next free ``<prefix>-NNNNNN`` code.

    - The number is the last six digits of the epoch-millisecond clock.
    - If that code is already taken, the number is bumped until it is free.
    """
    taken = set(existing)
    n = int(str(int(now_ms))[-6:])
    candidate = f"{prefix}-{n:06d}"
    while candidate in taken:
        n = (n + 1) % 1000000
        candidate = f"{prefix}-{n:06d}"
    return candidate
