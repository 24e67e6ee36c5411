"""
Tone assignment: one generated tone per grid cell.

Each label draws a unique note from the session's NotePool, gets its samples
rendered with the session's ToneConfig, and the samples are handed to an
encoder that turns them into something playable (WAV bytes by default).
"""

import logging
import random
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional, Sequence

from .config import ToneConfig
from .notes import NotePool, frequency_to_note, note_name
from .waveform import generate_samples
from .wav import encode_wav

logger = logging.getLogger(__name__)

Encoder = Callable[[Sequence[int], ToneConfig], Any]


@dataclass
class Tone:
    label: str
    frequency: float      # Hz
    sample_count: int
    artifact: Any         # whatever the encoder produced

    @property
    def note(self) -> str:
        return note_name(frequency_to_note(self.frequency))


class ToneMap(Mapping[str, Tone]):
    """Read-only label -> Tone mapping. Unknown labels look up as None."""

    def __init__(self, tones: Iterable[Tone] = ()):
        self._tones: dict[str, Tone] = {tone.label: tone for tone in tones}

    def __getitem__(self, label: str) -> Tone:
        return self._tones[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tones)

    def __len__(self) -> int:
        return len(self._tones)

    def get(self, label: Optional[str], default=None) -> Optional[Tone]:
        if label is None:
            return default
        return self._tones.get(label, default)

    def frequencies(self) -> dict[str, float]:
        return {label: tone.frequency for label, tone in self._tones.items()}


def assign_tones(
    labels: Iterable[str],
    pool: NotePool,
    config: ToneConfig,
    encode: Encoder = encode_wav,
) -> ToneMap:
    """
    Build the tone for every label.

    Args:
        labels: Cell labels, one tone each (must be unique)
        pool: Note pool owned by this session; one note is drawn per label
        config: Sample rate, channels, bit depth, length and waveform
        encode: Turns (samples, config) into the stored artifact

    Raises:
        ValueError: if a label appears twice (checked before any draw)
        PoolExhausted: if there are more labels than notes left in the pool
            and the pool does not reset
    """
    labels = list(labels)
    seen = set()
    for label in labels:
        if label in seen:
            raise ValueError(f"Duplicate cell label: {label!r}")
        seen.add(label)

    tones = []
    for label in labels:
        frequency = pool.draw()
        samples = generate_samples(config.request_for(frequency))
        tone = Tone(
            label=label,
            frequency=frequency,
            sample_count=len(samples),
            artifact=encode(samples, config),
        )
        logger.debug(f"Cell {label!r}: {tone.note} at {frequency:.2f} Hz")
        tones.append(tone)

    logger.info(
        f"Assigned {len(tones)} {config.waveform.value} tones "
        f"({config.tone_seconds:.1f}s each, {len(pool)} notes left in pool)"
    )
    return ToneMap(tones)


def build_session_tones(
    labels: Sequence[str],
    config: ToneConfig,
    encode: Encoder = encode_wav,
) -> ToneMap:
    """Create a session's NotePool from the config and assign every label."""
    config.check_grid_size(len(labels))
    pool = NotePool(
        config.note_lower_bound,
        config.note_upper_bound,
        rng=random.Random(config.seed),
        reset_on_exhaustion=config.reset_on_exhaustion,
    )
    return assign_tones(labels, pool, config, encode)
