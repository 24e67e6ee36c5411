"""
Waveform sample generation.

Turns a WaveformRequest into a flat list of integer PCM samples:
- Sawtooth: a ramp from 0 toward amplitude_max once per period
- Pulse: amplitude_max for the first pulse_width of each period, 0 after

The period is sample_rate / frequency samples and stays real-valued, so a
tone never drifts out of tune from rounding. With more than one channel the
flat sample index is divided by the channel count before taking the phase.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .constants import PULSE_WIDTH


class WaveKind(Enum):
    """The waveform shapes a tone can be rendered with"""
    SAWTOOTH = "sawtooth"
    PULSE = "pulse"


class InvalidWaveformRequest(ValueError):
    """Raised when a request cannot describe a periodic waveform."""


@dataclass(frozen=True)
class WaveformRequest:
    kind: WaveKind
    frequency: float        # Hz
    sample_rate: int        # Hz
    num_channels: int
    amplitude_max: int      # highest sample value, 2**bits - 1
    sample_count: int
    pulse_width: float = PULSE_WIDTH  # pulse only

    @property
    def period(self) -> float:
        """Samples per cycle (not rounded)."""
        return self.sample_rate / self.frequency

    def validate(self) -> None:
        """Raise InvalidWaveformRequest if any field is out of range."""
        if not isinstance(self.kind, WaveKind):
            raise InvalidWaveformRequest(f"Unknown waveform kind: {self.kind!r}")
        if not self.frequency > 0:
            raise InvalidWaveformRequest(f"frequency must be > 0, got {self.frequency}")
        if self.sample_rate <= 0:
            raise InvalidWaveformRequest(f"sample_rate must be > 0, got {self.sample_rate}")
        if self.num_channels <= 0:
            raise InvalidWaveformRequest(f"num_channels must be > 0, got {self.num_channels}")
        if self.amplitude_max < 0:
            raise InvalidWaveformRequest(f"amplitude_max must be >= 0, got {self.amplitude_max}")
        if self.sample_count < 0:
            raise InvalidWaveformRequest(f"sample_count must be >= 0, got {self.sample_count}")
        if not 0 < self.pulse_width <= 1:
            raise InvalidWaveformRequest(f"pulse_width must be in (0, 1], got {self.pulse_width}")


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def _sawtooth(request: WaveformRequest) -> list[int]:
    period = request.period
    channels = request.num_channels
    # The +1 keeps the ramp just under amplitude_max at its peak.
    # Reference output depends on it, so it stays.
    scale = request.amplitude_max / (period + 1)
    return [
        round_half_up(scale * ((i / channels) % period))
        for i in range(request.sample_count)
    ]


def _pulse(request: WaveformRequest) -> list[int]:
    wavelength = request.period
    channels = request.num_channels
    threshold = wavelength * request.pulse_width
    high = request.amplitude_max
    return [
        high if (i / channels) % wavelength < threshold else 0
        for i in range(request.sample_count)
    ]


GENERATORS: dict[WaveKind, Callable[[WaveformRequest], list[int]]] = {
    WaveKind.SAWTOOTH: _sawtooth,
    WaveKind.PULSE: _pulse,
}


def generate_samples(request: WaveformRequest) -> list[int]:
    """
    Generate the samples for a waveform request.

    Pure function: the same request always yields the same list, and every
    call returns a new list.

    Raises:
        InvalidWaveformRequest: if frequency, sample_rate or num_channels is
            not positive, or another field is out of range. Nothing is
            generated in that case.
    """
    request.validate()
    return GENERATORS[request.kind](request)


def parse_wave_kind(name: str) -> WaveKind:
    """Look up a WaveKind by its name, case-insensitive ("pulse", "SAWTOOTH")."""
    try:
        return WaveKind(name.strip().lower())
    except ValueError:
        choices = ", ".join(kind.value for kind in WaveKind)
        raise ValueError(f"Unknown waveform {name!r} (choose from: {choices})") from None
