"""
Tone playback through pygame.mixer.

Each tone's WAV bytes become a pygame Sound. Playing a cell always starts its
tone from the beginning; stopping it rewinds it, so the next press starts
fresh.
"""

import io
import logging
import os

from .constants import SAMPLE_RATE, SOUND_VOLUME
from .tones import ToneMap

logger = logging.getLogger(__name__)


# Suppress ALSA error/log messages before pygame imports ALSA.
# These corrupt Textual's stderr-based UI. Install null handlers for both paths.
def _suppress_alsa_output():
    try:
        import ctypes
        import ctypes.util

        path = ctypes.util.find_library('asound') or 'libasound.so.2'
        asound = ctypes.CDLL(path)

        # Handler types: error has int err, log has uint level
        HANDLER = ctypes.CFUNCTYPE(None, ctypes.c_char_p, ctypes.c_int,
                                   ctypes.c_char_p, ctypes.c_int, ctypes.c_char_p)
        LOG_HANDLER = ctypes.CFUNCTYPE(None, ctypes.c_char_p, ctypes.c_int,
                                       ctypes.c_char_p, ctypes.c_uint, ctypes.c_char_p)

        noop = lambda *_: None
        err_h, log_h = HANDLER(noop), LOG_HANDLER(noop)
        _suppress_alsa_output._refs = (err_h, log_h)  # prevent GC

        asound.snd_lib_error_set_handler(err_h)
        try:
            asound.snd_lib_log_set_handler(log_h)
        except AttributeError:
            pass
    except OSError:
        # No libasound (macOS, containers): nothing to silence
        pass

_suppress_alsa_output()

# Suppress pygame welcome message (must be set before import)
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'
import pygame.mixer


class TonePlayer:
    """Plays the tones of a ToneMap, one pygame Sound per cell."""

    def __init__(self, frequency: int = SAMPLE_RATE, volume: float = SOUND_VOLUME):
        self.frequency = frequency
        self.volume = volume
        self._sounds: dict[str, pygame.mixer.Sound] = {}
        self._mixer_initialized = False

    @property
    def available(self) -> bool:
        return self._mixer_initialized

    def _init_audio(self) -> bool:
        """Initialize pygame mixer. Returns False if there is no audio device."""
        if self._mixer_initialized:
            return True
        try:
            # Larger buffer (2048) prevents ALSA underrun errors on slower hardware
            pygame.mixer.init(frequency=self.frequency, size=-16, channels=2, buffer=2048)
            pygame.mixer.set_num_channels(16)
        except pygame.error as e:
            logger.warning(f"Audio unavailable, playing silently: {e}")
            return False
        self._mixer_initialized = True
        logger.info(f"Mixer started at {self.frequency} Hz")
        return True

    def load(self, tones: ToneMap) -> int:
        """
        Turn every tone's WAV bytes into a Sound. Returns how many loaded.

        Tones that fail to decode are skipped (logged), the rest still play.
        """
        if not self._init_audio():
            return 0
        for label, tone in tones.items():
            try:
                sound = pygame.mixer.Sound(file=io.BytesIO(tone.artifact))
            except pygame.error as e:
                logger.warning(f"Could not load tone for {label!r}: {e}")
                continue
            sound.set_volume(self.volume)  # Prevent clipping when multiple sounds play
            self._sounds[label] = sound
        return len(self._sounds)

    def play(self, label: str) -> bool:
        """Play a cell's tone from the start. Unknown labels are ignored."""
        sound = self._sounds.get(label)
        if sound is None:
            return False
        sound.stop()
        sound.play()
        return True

    def stop(self, label: str) -> bool:
        """Stop a cell's tone; the next play starts from the beginning."""
        sound = self._sounds.get(label)
        if sound is None:
            return False
        sound.stop()
        return True

    def cleanup(self) -> None:
        """Stop all sounds and quit mixer."""
        if self._mixer_initialized:
            pygame.mixer.stop()
            pygame.mixer.quit()
            self._mixer_initialized = False
        self._sounds.clear()
