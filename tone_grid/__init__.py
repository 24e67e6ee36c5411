"""
Tone Grid - A Keyboard Grid Instrument

A Textual TUI providing a 4x10 grid of colored cells. Every cell is bound to a
keyboard key and plays its own randomly chosen note:
- Waveforms: sawtooth and pulse tones rendered as raw PCM samples
- Notes: a shuffled pool so no two cells share a note
- Colors: one random hue family per session

Press and hold a key (or click a cell) to play it.
"""

__version__ = "1.0.0"
