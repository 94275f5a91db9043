"""
Environment-driven settings.

Values are read when they are needed, so changing the environment of a
running process (or monkeypatching it in tests) takes effect immediately.
"""

import os
from typing import List, Optional, Tuple

CHECK_INVARIANTS_ENV = "AVLMAP_CHECK_INVARIANTS"
DEMO_KEYS_ENV = "AVLMAP_DEMO_KEYS"

_TRUTHY = {"1", "true", "yes", "on"}

# Insertion order used by the demo when AVLMAP_DEMO_KEYS is not set.
DEFAULT_DEMO_ITEMS: List[Tuple[int, int]] = [
    (0, 0), (1, -1), (2, -101), (3, 10), (4, 10), (5, 30),
]


def check_invariants_enabled(override: Optional[bool] = None) -> bool:
    """Return True if mutations should be followed by an invariant check."""
    if override is not None:
        return override
    raw = os.environ.get(CHECK_INVARIANTS_ENV, "")
    return raw.strip().lower() in _TRUTHY


def demo_items() -> List[Tuple[int, int]]:
    """Parse AVLMAP_DEMO_KEYS ("k:v,k:v,...") or fall back to the default items."""
    raw = os.environ.get(DEMO_KEYS_ENV)
    if not raw:
        return list(DEFAULT_DEMO_ITEMS)

    items: List[Tuple[int, int]] = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        key, sep, value = chunk.partition(":")
        if not sep:
            raise ValueError(f"{DEMO_KEYS_ENV} entry {chunk!r} must look like 'key:value'")
        items.append((int(key), int(value)))
    return items
