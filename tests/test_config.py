#!/usr/bin/env python3
"""Tests for ToneConfig defaults, validation and environment overrides."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from tone_grid.config import ConfigError, ToneConfig
from tone_grid.waveform import WaveKind


class TestDefaults:
    """Defaults describe the classic instrument."""

    def test_defaults(self):
        config = ToneConfig()
        assert config.sample_rate == 44100
        assert config.num_channels == 1
        assert config.bits_per_sample == 8
        assert config.tone_length == 441000
        assert (config.note_lower_bound, config.note_upper_bound) == (-21, 27)
        assert config.waveform is WaveKind.PULSE
        assert config.pulse_width == 0.9
        assert config.reset_on_exhaustion is False

    def test_amplitude_max(self):
        assert ToneConfig().amplitude_max == 255
        assert ToneConfig(bits_per_sample=16).amplitude_max == 65535

    def test_note_capacity(self):
        assert ToneConfig().note_capacity == 49

    def test_tone_seconds(self):
        assert ToneConfig().tone_seconds == 10.0

    def test_request_for(self):
        request = ToneConfig(tone_length=50).request_for(220.0)
        assert request.frequency == 220.0
        assert request.sample_count == 50
        assert request.amplitude_max == 255
        assert request.kind is WaveKind.PULSE


class TestValidation:
    """Invalid values raise ConfigError."""

    @pytest.mark.parametrize("field,value", [
        ("sample_rate", 0),
        ("num_channels", 0),
        ("bits_per_sample", 12),
        ("tone_length", -1),
        ("pulse_width", 0.0),
        ("pulse_width", 1.01),
        ("waveform", "pulse"),
    ])
    def test_invalid(self, field, value):
        with pytest.raises(ConfigError):
            ToneConfig(**{field: value})

    def test_empty_note_range(self):
        with pytest.raises(ConfigError):
            ToneConfig(note_lower_bound=5, note_upper_bound=4)

    def test_replace_revalidates(self):
        with pytest.raises(ConfigError):
            ToneConfig().replace(sample_rate=-1)

    def test_check_grid_size(self):
        config = ToneConfig(note_lower_bound=0, note_upper_bound=9)
        config.check_grid_size(10)
        with pytest.raises(ConfigError):
            config.check_grid_size(11)

    def test_check_grid_size_with_reset(self):
        config = ToneConfig(note_lower_bound=0, note_upper_bound=9, reset_on_exhaustion=True)
        config.check_grid_size(40)


class TestFromEnv:
    """TONE_GRID_* variables override defaults."""

    def test_empty_env_is_default(self):
        assert ToneConfig.from_env({}) == ToneConfig()

    def test_overrides(self):
        config = ToneConfig.from_env({
            "TONE_GRID_SAMPLE_RATE": "22050",
            "TONE_GRID_BITS_PER_SAMPLE": "16",
            "TONE_GRID_WAVEFORM": "Sawtooth",
            "TONE_GRID_NOTE_LOWER": "-12",
            "TONE_GRID_NOTE_UPPER": "12",
            "TONE_GRID_PULSE_WIDTH": "0.5",
            "TONE_GRID_RESET_POOL": "yes",
            "TONE_GRID_SEED": "42",
        })
        assert config.sample_rate == 22050
        assert config.bits_per_sample == 16
        assert config.waveform is WaveKind.SAWTOOTH
        assert (config.note_lower_bound, config.note_upper_bound) == (-12, 12)
        assert config.pulse_width == 0.5
        assert config.reset_on_exhaustion is True
        assert config.seed == 42

    def test_unrelated_variables_ignored(self):
        assert ToneConfig.from_env({"HOME": "/root", "SAMPLE_RATE": "1"}) == ToneConfig()

    @pytest.mark.parametrize("name,value", [
        ("TONE_GRID_SAMPLE_RATE", "fast"),
        ("TONE_GRID_PULSE_WIDTH", "wide"),
        ("TONE_GRID_RESET_POOL", "maybe"),
        ("TONE_GRID_WAVEFORM", "sine"),
        ("TONE_GRID_BITS_PER_SAMPLE", "24"),
    ])
    def test_bad_values(self, name, value):
        with pytest.raises(ConfigError, match="(?i)" + name.replace("TONE_GRID_", "")):
            ToneConfig.from_env({name: value})

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("TONE_GRID_TONE_LENGTH", "1000")
        assert ToneConfig.from_env().tone_length == 1000
