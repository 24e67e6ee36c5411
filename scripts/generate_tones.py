#!/usr/bin/env python3
"""
Render a session's tones to WAV files

Writes one file per grid key (q.wav, semicolon.wav, ...), using the same
note pool and waveform settings the app uses. Handy for listening to a
waveform or note range without starting the TUI.

Settings start from the TONE_GRID_* environment (see tone_grid/config.py);
command-line flags override them.
"""

import argparse
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tone_grid.config import ConfigError, ToneConfig
from tone_grid.layout import ALL_KEYS, key_file_name
from tone_grid.notes import PoolExhausted
from tone_grid.tones import build_session_tones
from tone_grid.waveform import WaveKind
from tone_grid.wav import write_wav

DEFAULT_OUT_DIR = PROJECT_ROOT / "build" / "tones"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render grid tones to WAV files")
    parser.add_argument("--out", "-o", type=Path, default=DEFAULT_OUT_DIR,
                        help=f"Output directory (default: {DEFAULT_OUT_DIR})")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed, same seed = same notes")
    parser.add_argument("--waveform", choices=[kind.value for kind in WaveKind],
                        default=None, help="Waveform shape")
    parser.add_argument("--seconds", type=float, default=None,
                        help="Length of each tone in seconds")
    parser.add_argument("--bits", type=int, choices=[8, 16], default=None,
                        help="Bits per sample")
    return parser


def config_from_args(args: argparse.Namespace, base: ToneConfig) -> ToneConfig:
    """Apply command-line overrides on top of a base config."""
    changes = {}
    if args.seed is not None:
        changes["seed"] = args.seed
    if args.waveform is not None:
        changes["waveform"] = WaveKind(args.waveform)
    if args.bits is not None:
        changes["bits_per_sample"] = args.bits
    if args.seconds is not None:
        changes["tone_length"] = round(args.seconds * base.sample_rate * base.num_channels)
    return base.replace(**changes)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = config_from_args(args, ToneConfig.from_env())
        # Encoder is the identity: keep the samples, write them below
        tones = build_session_tones(ALL_KEYS, config, encode=lambda samples, _: samples)
    except (ConfigError, PoolExhausted) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Rendering {len(tones)} {config.waveform.value} tones "
          f"({config.tone_seconds:.1f}s, {config.bits_per_sample}-bit)...")
    print()

    args.out.mkdir(parents=True, exist_ok=True)
    for key, tone in tones.items():
        filename = f"{key_file_name(key)}.wav"
        write_wav(args.out / filename, tone.artifact, config)
        print(f"  {key} = {tone.note:<4} {tone.frequency:8.2f} Hz  -> {filename}")

    print()
    print(f"Done! Tones saved to {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
