#!/usr/bin/env python3
"""Tests for tone assignment (one unique note per grid cell)."""

import random
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from tone_grid.config import ConfigError, ToneConfig
from tone_grid.layout import ALL_KEYS
from tone_grid.notes import NotePool, PoolExhausted
from tone_grid.tones import Tone, ToneMap, assign_tones, build_session_tones
from tone_grid.waveform import WaveKind


def keep_samples(samples, config):
    """Encoder that stores the raw samples."""
    return list(samples)


@pytest.fixture
def config():
    return ToneConfig(tone_length=200, seed=1)


@pytest.fixture
def pool():
    return NotePool(-21, 27, rng=random.Random(5))


class TestAssignTones:
    """assign_tones builds one tone per label."""

    def test_one_tone_per_label(self, pool, config):
        tones = assign_tones(["A", "B", "C"], pool, config, keep_samples)
        assert sorted(tones) == ["A", "B", "C"]
        assert all(isinstance(tone, Tone) for tone in tones.values())

    def test_frequencies_are_distinct(self, pool, config):
        tones = assign_tones(ALL_KEYS, pool, config, keep_samples)
        assert len(set(tones.frequencies().values())) == len(ALL_KEYS)

    def test_draws_from_the_given_pool(self, pool, config):
        assign_tones(["A", "B"], pool, config, keep_samples)
        assert len(pool) == 47

    def test_samples_match_config(self, pool, config):
        tones = assign_tones(["A"], pool, config, keep_samples)
        tone = tones["A"]
        assert tone.sample_count == 200
        assert len(tone.artifact) == 200
        assert set(tone.artifact) <= {0, 255}  # pulse is the default waveform

    def test_sawtooth_config(self, pool):
        config = ToneConfig(tone_length=300, waveform=WaveKind.SAWTOOTH)
        tones = assign_tones(["A"], pool, config, keep_samples)
        assert len(set(tones["A"].artifact)) > 2

    def test_default_encoder_makes_wav(self, pool, config):
        tones = assign_tones(["A"], pool, config)
        assert tones["A"].artifact[:4] == b"RIFF"

    def test_encoder_receives_config(self, pool, config):
        seen = []
        assign_tones(["A"], pool, config, lambda samples, cfg: seen.append(cfg))
        assert seen == [config]

    def test_more_labels_than_notes(self, config):
        small_pool = NotePool(0, 2, rng=random.Random(0))
        with pytest.raises(PoolExhausted):
            assign_tones(["A", "B", "C", "D"], small_pool, config, keep_samples)

    def test_resetting_pool_allows_more_labels(self, config):
        small_pool = NotePool(0, 2, rng=random.Random(0), reset_on_exhaustion=True)
        tones = assign_tones(["A", "B", "C", "D"], small_pool, config, keep_samples)
        assert len(tones) == 4

    def test_duplicate_labels_rejected_before_drawing(self, pool, config):
        with pytest.raises(ValueError, match="Duplicate"):
            assign_tones(["A", "B", "A"], pool, config, keep_samples)
        assert len(pool) == pool.capacity

    def test_tone_note_name(self, config):
        tones = assign_tones(["A"], NotePool(0, 0), config, keep_samples)
        assert tones["A"].note == "A4"
        assert tones["A"].frequency == 440.0


class TestToneMap:
    """Lookups: unknown labels are absent, not errors."""

    def test_get_unknown_label(self):
        tones = ToneMap([Tone("Q", 440.0, 0, None)])
        assert tones.get("Z") is None
        assert tones.get(None) is None

    def test_get_known_label(self):
        tone = Tone("Q", 440.0, 0, None)
        assert ToneMap([tone]).get("Q") is tone

    def test_mapping_protocol(self):
        tones = ToneMap([Tone("Q", 440.0, 0, None), Tone("W", 880.0, 0, None)])
        assert len(tones) == 2
        assert "Q" in tones
        assert list(tones) == ["Q", "W"]
        assert tones.frequencies() == {"Q": 440.0, "W": 880.0}

    def test_empty(self):
        assert len(ToneMap()) == 0
        assert ToneMap().get("Q") is None


class TestBuildSessionTones:
    """The session builder owns its pool and checks the grid size."""

    def test_full_grid(self, config):
        tones = build_session_tones(ALL_KEYS, config, keep_samples)
        assert list(tones) == ALL_KEYS

    def test_seed_repeats_notes(self, config):
        first = build_session_tones(ALL_KEYS, config, keep_samples)
        second = build_session_tones(ALL_KEYS, config, keep_samples)
        assert first.frequencies() == second.frequencies()

    def test_grid_too_large_for_range(self):
        config = ToneConfig(tone_length=10, note_lower_bound=0, note_upper_bound=5)
        with pytest.raises(ConfigError):
            build_session_tones(ALL_KEYS, config, keep_samples)

    def test_grid_too_large_with_reset(self):
        config = ToneConfig(
            tone_length=10, note_lower_bound=0, note_upper_bound=5,
            reset_on_exhaustion=True,
        )
        tones = build_session_tones(ALL_KEYS, config, keep_samples)
        assert len(tones) == len(ALL_KEYS)
