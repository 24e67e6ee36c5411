"""
Note frequencies and the shuffled note pool.

Notes are semitone offsets from A440 in 12-tone equal temperament:
    frequency = 440 * 2 ** (offset / 12)

NotePool hands out every offset in a range exactly once, in random order,
so no two grid cells share a note within a session.
"""

import logging
import math
import random
from typing import Optional

from .constants import A440, NOTE_NAMES, SEMITONES_PER_OCTAVE

logger = logging.getLogger(__name__)


def note_to_frequency(offset: float, base: float = A440) -> float:
    """Frequency in Hz of the note `offset` semitones away from `base`."""
    return base * 2 ** (offset / SEMITONES_PER_OCTAVE)


def frequency_to_note(frequency: float, base: float = A440) -> int:
    """Nearest semitone offset from `base` for a frequency in Hz."""
    if frequency <= 0:
        raise ValueError(f"frequency must be > 0, got {frequency}")
    return round(SEMITONES_PER_OCTAVE * math.log2(frequency / base))


def note_name(offset: int) -> str:
    """
    Scientific pitch name for a semitone offset from A4.

    0 -> "A4", 3 -> "C5", -21 -> "C3", 12 -> "A5"
    """
    name = NOTE_NAMES[offset % SEMITONES_PER_OCTAVE]
    # Octave numbers change at C, which sits 3 semitones above A
    octave = 4 + (offset + 9) // SEMITONES_PER_OCTAVE
    return f"{name}{octave}"


class PoolExhausted(LookupError):
    """Raised when every note in the pool has already been drawn."""


class NotePool:
    """
    Allocator of unique notes in [lower_bound, upper_bound].

    The pool starts empty and is filled on the first draw with
    [0 .. upper_bound - lower_bound], shuffled uniformly (Fisher-Yates via
    random.Random.shuffle). Each draw pops one entry off the end.

    Usage:
        pool = NotePool(-21, 27)
        pool.draw()  # e.g. 659.26 (offset 7)
        pool.draw()  # a different note every time, 49 draws in total

    Args:
        lower_bound: Lowest semitone offset from A440 (inclusive)
        upper_bound: Highest semitone offset from A440 (inclusive)
        rng: Random source (a fresh random.Random if None)
        reset_on_exhaustion: Refill and reshuffle instead of raising
            PoolExhausted once every note has been drawn
    """

    def __init__(
        self,
        lower_bound: int,
        upper_bound: int,
        rng: Optional[random.Random] = None,
        reset_on_exhaustion: bool = False,
    ):
        if lower_bound > upper_bound:
            raise ValueError(
                f"lower_bound ({lower_bound}) must not exceed upper_bound ({upper_bound})"
            )
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound
        self.reset_on_exhaustion = reset_on_exhaustion
        self._rng = rng if rng is not None else random.Random()
        self._remaining: list[int] = []
        self._filled = False

    @property
    def interval(self) -> int:
        return self.upper_bound - self.lower_bound

    @property
    def capacity(self) -> int:
        """Number of distinct notes the pool can hand out."""
        return self.interval + 1

    @property
    def remaining(self) -> list[int]:
        """Copy of the entries not yet drawn (next draw is the last one)."""
        return list(self._remaining)

    def __len__(self) -> int:
        """Notes still available before the pool runs out."""
        if not self._filled:
            return self.capacity
        return len(self._remaining)

    def _fill(self) -> None:
        self._remaining = list(range(self.interval + 1))
        self._rng.shuffle(self._remaining)
        self._filled = True

    def reset(self) -> None:
        """Forget the current order; the next draw reshuffles the full range."""
        self._remaining = []
        self._filled = False

    def draw_offset(self) -> int:
        """Pop the next semitone offset (relative to A440)."""
        if not self._filled:
            self._fill()
        elif not self._remaining:
            if not self.reset_on_exhaustion:
                raise PoolExhausted(
                    f"All {self.capacity} notes in [{self.lower_bound}, {self.upper_bound}] "
                    f"have been drawn"
                )
            logger.info(f"Note pool exhausted, reshuffling {self.capacity} notes")
            self._fill()

        return self._remaining.pop() + self.lower_bound

    def draw(self) -> float:
        """Pop the next note and return its frequency in Hz."""
        offset = self.draw_offset()
        frequency = note_to_frequency(offset)
        logger.debug(f"Drew note {note_name(offset)} ({offset:+d}) = {frequency:.2f} Hz")
        return frequency
