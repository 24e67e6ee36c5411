"""
Tone Grid - Shared Constants

Pure data with no side effects. Importable from anywhere without triggering
pygame initialization or ALSA setup.
"""

# =============================================================================
# AUDIO DEFAULTS
# =============================================================================

SAMPLE_RATE = 44100          # Hz
NUM_CHANNELS = 1
BITS_PER_SAMPLE = 8          # 8-bit WAV: samples are 0..255
SUPPORTED_BIT_DEPTHS = (8, 16)

# Length of every tone in samples: NUM_SECONDS * NUM_CHANNELS * SAMPLE_RATE
TONE_LENGTH = 441000         # 10 seconds of mono audio

# Fraction of each cycle a pulse wave spends at its high level
PULSE_WIDTH = 0.9

# =============================================================================
# TUNING
# =============================================================================

A440 = 440.0                 # Concert pitch, semitone offset 0
SEMITONES_PER_OCTAVE = 12

# Semitone offsets from A440, inclusive (49 notes, about 4 octaves)
NOTE_LOWER_BOUND = -21
NOTE_UPPER_BOUND = 27

NOTE_NAMES = ["A", "A#", "B", "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#"]

# =============================================================================
# PLAYBACK
# =============================================================================

# Terminals send key repeats but no key releases: a held key counts as
# released once no repeat has arrived for this long (seconds).
# Must stay above the terminal's initial repeat delay (usually ~0.5s).
KEY_RELEASE_AFTER = 0.6
RELEASE_POLL_INTERVAL = 0.05

SOUND_VOLUME = 0.4           # Prevent clipping when several cells play

# =============================================================================
# ENVIRONMENT
# =============================================================================

ENV_PREFIX = "TONE_GRID_"
LOG_FORMAT = "[%(asctime)s] %(levelname)s:%(name)s: %(message)s"
