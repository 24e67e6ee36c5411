"""WAV encoding for generated samples (RIFF container via the wave module)."""

import io
import wave
from pathlib import Path
from typing import Sequence

from .config import ToneConfig


def _pcm_bytes(samples: Sequence[int], bits_per_sample: int) -> bytes:
    """Pack unsigned samples into WAV PCM data."""
    if bits_per_sample == 8:
        # 8-bit WAV is unsigned: 0..255 goes in as is
        return bytes(samples)
    if bits_per_sample == 16:
        # 16-bit WAV is signed: shift 0..65535 down to -32768..32767
        return b"".join(
            (sample - 32768).to_bytes(2, byteorder='little', signed=True)
            for sample in samples
        )
    raise ValueError(f"Unsupported bit depth: {bits_per_sample}")


def _write(target, samples: Sequence[int], config: ToneConfig) -> None:
    with wave.open(target, 'wb') as wav_file:
        wav_file.setnchannels(config.num_channels)
        wav_file.setsampwidth(config.bits_per_sample // 8)
        wav_file.setframerate(config.sample_rate)
        wav_file.writeframes(_pcm_bytes(samples, config.bits_per_sample))


def encode_wav(samples: Sequence[int], config: ToneConfig) -> bytes:
    """Encode samples as a complete in-memory WAV file."""
    buffer = io.BytesIO()
    _write(buffer, samples, config)
    return buffer.getvalue()


def write_wav(path: Path, samples: Sequence[int], config: ToneConfig) -> None:
    """Write samples to a WAV file on disk."""
    _write(str(path), samples, config)
