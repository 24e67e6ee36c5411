"""
Key hold tracking for terminal input.

Terminals deliver a key press and then auto-repeats while the key is held,
but never a release. HoldTracker turns that stream into press/release pairs:
the first press starts a hold, repeats keep it alive, and a key counts as
released once nothing has arrived for `release_after` seconds.

Pure logic class with no I/O. Timestamps are injected for deterministic
testing.
"""

import time
from typing import Optional

from .constants import KEY_RELEASE_AFTER


class HoldTracker:
    """
    Usage:
        holds = HoldTracker(release_after=0.6)
        holds.press('Q', timestamp=0.0)   # True  (new press: start the tone)
        holds.press('Q', timestamp=0.5)   # False (auto-repeat: keep playing)
        holds.expired(timestamp=0.8)      # []
        holds.expired(timestamp=1.2)      # ['Q'] (released: stop the tone)

    Args:
        release_after: Seconds without a repeat before a key counts as released
    """

    def __init__(self, release_after: float = KEY_RELEASE_AFTER):
        self.release_after = release_after
        self._last_seen: dict[str, float] = {}

    @property
    def held(self) -> set[str]:
        return set(self._last_seen)

    def is_held(self, key: str) -> bool:
        return key in self._last_seen

    def press(self, key: str, timestamp: Optional[float] = None) -> bool:
        """
        Record a press or repeat of `key`.

        Returns:
            True if this starts a new hold, False if the key was already held.
        """
        if timestamp is None:
            timestamp = time.monotonic()
        is_new = key not in self._last_seen
        self._last_seen[key] = timestamp
        return is_new

    def release(self, key: str) -> bool:
        """Explicit release (mouse up). Returns True if the key was held."""
        return self._last_seen.pop(key, None) is not None

    def expired(self, timestamp: Optional[float] = None) -> list[str]:
        """Release and return every key whose repeats have stopped."""
        if timestamp is None:
            timestamp = time.monotonic()
        released = [
            key for key, seen in self._last_seen.items()
            if timestamp - seen >= self.release_after
        ]
        for key in released:
            del self._last_seen[key]
        return released

    def reset(self) -> list[str]:
        """Release everything. Returns the keys that were held."""
        keys = list(self._last_seen)
        self._last_seen.clear()
        return keys
