#!/usr/bin/env python3
"""Tests for WAV encoding of generated samples."""

import io
import sys
import wave
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from tone_grid.config import ToneConfig
from tone_grid.wav import encode_wav, write_wav


def read_back(data: bytes):
    with wave.open(io.BytesIO(data), 'rb') as wav_file:
        params = wav_file.getparams()
        frames = wav_file.readframes(params.nframes)
    return params, frames


class TestEncodeWav:
    """In-memory WAV files."""

    def test_riff_header(self):
        data = encode_wav([0, 128, 255], ToneConfig())
        assert data[:4] == b"RIFF"
        assert data[8:12] == b"WAVE"

    def test_format_matches_config(self):
        params, _ = read_back(encode_wav([0] * 10, ToneConfig(sample_rate=22050)))
        assert params.nchannels == 1
        assert params.sampwidth == 1
        assert params.framerate == 22050
        assert params.nframes == 10

    def test_8_bit_samples_stored_unsigned(self):
        _, frames = read_back(encode_wav([0, 1, 128, 255], ToneConfig()))
        assert list(frames) == [0, 1, 128, 255]

    def test_16_bit_samples_stored_signed(self):
        config = ToneConfig(bits_per_sample=16)
        params, frames = read_back(encode_wav([0, 32768, 65535], config))
        assert params.sampwidth == 2
        values = [
            int.from_bytes(frames[i:i + 2], byteorder='little', signed=True)
            for i in range(0, len(frames), 2)
        ]
        assert values == [-32768, 0, 32767]

    def test_stereo_frames(self):
        params, _ = read_back(encode_wav([0] * 20, ToneConfig(num_channels=2)))
        assert params.nchannels == 2
        assert params.nframes == 10

    def test_empty(self):
        params, frames = read_back(encode_wav([], ToneConfig()))
        assert params.nframes == 0
        assert frames == b""

    def test_out_of_range_8_bit_sample(self):
        with pytest.raises(ValueError):
            encode_wav([256], ToneConfig())


class TestWriteWav:
    """WAV files on disk."""

    def test_writes_file(self, tmp_path):
        path = tmp_path / "q.wav"
        write_wav(path, [10, 20, 30], ToneConfig())
        with wave.open(str(path), 'rb') as wav_file:
            assert wav_file.getnframes() == 3
            assert list(wav_file.readframes(3)) == [10, 20, 30]
