"""
Session configuration: the fixed parameters every tone in a session shares.

Defaults come from constants.py. Any field can be overridden from the
environment with a TONE_GRID_* variable, e.g.:

    TONE_GRID_WAVEFORM=sawtooth TONE_GRID_NOTE_LOWER=-12 tone-grid
"""

import dataclasses
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import (
    SAMPLE_RATE, NUM_CHANNELS, BITS_PER_SAMPLE, SUPPORTED_BIT_DEPTHS,
    TONE_LENGTH, PULSE_WIDTH, NOTE_LOWER_BOUND, NOTE_UPPER_BOUND, ENV_PREFIX,
)
from .waveform import WaveKind, WaveformRequest, parse_wave_kind


class ConfigError(ValueError):
    """Raised for configuration values the instrument cannot work with."""


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean (1/0, true/false), got {raw!r}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def _parse_waveform(name: str, raw: str) -> WaveKind:
    try:
        return parse_wave_kind(raw)
    except ValueError as e:
        raise ConfigError(f"{name}: {e}") from None


# env suffix -> (field name, parser)
ENV_FIELDS = {
    "SAMPLE_RATE": ("sample_rate", _parse_int),
    "NUM_CHANNELS": ("num_channels", _parse_int),
    "BITS_PER_SAMPLE": ("bits_per_sample", _parse_int),
    "TONE_LENGTH": ("tone_length", _parse_int),
    "NOTE_LOWER": ("note_lower_bound", _parse_int),
    "NOTE_UPPER": ("note_upper_bound", _parse_int),
    "WAVEFORM": ("waveform", _parse_waveform),
    "PULSE_WIDTH": ("pulse_width", _parse_float),
    "RESET_POOL": ("reset_on_exhaustion", _parse_bool),
    "SEED": ("seed", _parse_int),
}


@dataclass(frozen=True)
class ToneConfig:
    """Parameters shared by every tone generated in one session."""
    sample_rate: int = SAMPLE_RATE
    num_channels: int = NUM_CHANNELS
    bits_per_sample: int = BITS_PER_SAMPLE
    tone_length: int = TONE_LENGTH            # samples per tone
    note_lower_bound: int = NOTE_LOWER_BOUND
    note_upper_bound: int = NOTE_UPPER_BOUND
    waveform: WaveKind = WaveKind.PULSE
    pulse_width: float = PULSE_WIDTH
    reset_on_exhaustion: bool = False
    seed: Optional[int] = None                # None = different notes every session

    def __post_init__(self):
        if self.sample_rate <= 0:
            raise ConfigError(f"sample_rate must be > 0, got {self.sample_rate}")
        if self.num_channels <= 0:
            raise ConfigError(f"num_channels must be > 0, got {self.num_channels}")
        if self.bits_per_sample not in SUPPORTED_BIT_DEPTHS:
            raise ConfigError(
                f"bits_per_sample must be one of {SUPPORTED_BIT_DEPTHS}, got {self.bits_per_sample}"
            )
        if self.tone_length < 0:
            raise ConfigError(f"tone_length must be >= 0, got {self.tone_length}")
        if self.note_lower_bound > self.note_upper_bound:
            raise ConfigError(
                f"note range is empty: lower bound {self.note_lower_bound} "
                f"> upper bound {self.note_upper_bound}"
            )
        if not 0 < self.pulse_width <= 1:
            raise ConfigError(f"pulse_width must be in (0, 1], got {self.pulse_width}")
        if not isinstance(self.waveform, WaveKind):
            raise ConfigError(f"waveform must be a WaveKind, got {self.waveform!r}")

    @property
    def amplitude_max(self) -> int:
        """Largest sample value for the bit depth (255 for 8-bit)."""
        return 2 ** self.bits_per_sample - 1

    @property
    def note_capacity(self) -> int:
        """Distinct notes available in the configured range."""
        return self.note_upper_bound - self.note_lower_bound + 1

    @property
    def tone_seconds(self) -> float:
        return self.tone_length / (self.sample_rate * self.num_channels)

    def request_for(self, frequency: float) -> WaveformRequest:
        """Waveform request for one tone of this session."""
        return WaveformRequest(
            kind=self.waveform,
            frequency=frequency,
            sample_rate=self.sample_rate,
            num_channels=self.num_channels,
            amplitude_max=self.amplitude_max,
            sample_count=self.tone_length,
            pulse_width=self.pulse_width,
        )

    def check_grid_size(self, cell_count: int) -> None:
        """Raise ConfigError if the grid needs more notes than the range holds."""
        if cell_count > self.note_capacity and not self.reset_on_exhaustion:
            raise ConfigError(
                f"Grid has {cell_count} cells but the note range "
                f"[{self.note_lower_bound}, {self.note_upper_bound}] only holds "
                f"{self.note_capacity} notes"
            )

    def replace(self, **changes) -> "ToneConfig":
        """Copy of this config with some fields changed (validated again)."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ToneConfig":
        """Build a config from defaults plus TONE_GRID_* overrides."""
        if environ is None:
            environ = os.environ
        overrides = {}
        for suffix, (field_name, parse) in ENV_FIELDS.items():
            name = ENV_PREFIX + suffix
            raw = environ.get(name)
            if raw is not None:
                overrides[field_name] = parse(name, raw)
        return cls(**overrides)
