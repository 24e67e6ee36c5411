#!/usr/bin/env python3
"""
Tone Grid - Main Textual TUI Application

Keyboard controls:
- Any grid key (1-0, Q-P, A-;, Z-/): hold to play that cell's tone
- Mouse: press and hold on a cell
- Escape: Quit

Tones are rendered when the app starts. Every session gets new notes and a
new color family.
"""

import logging
import os
import random
import time

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static
from textual import events

from .colors import random_palette
from .config import ToneConfig
from .constants import LOG_FORMAT, RELEASE_POLL_INTERVAL
from .grid import CellPressed, CellReleased, ToneGrid
from .keyboard import HoldTracker
from .layout import ALL_KEYS, normalize_key
from .tones import ToneMap, build_session_tones
from .wav import encode_wav

logger = logging.getLogger(__name__)


class StatusLine(Static):
    """One-line hint under the grid"""

    DEFAULT_CSS = """
    StatusLine {
        dock: bottom;
        height: 1;
        text-align: center;
        color: $text-muted;
    }
    """


class ToneGridApp(App):
    """Grid instrument: every key plays its own note."""

    TITLE = "Tone Grid"

    BINDINGS = [
        Binding("escape", "quit", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        config: ToneConfig | None = None,
        player=None,
        encode=encode_wav,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.tone_config = config or ToneConfig()
        # Fail before the UI starts rather than halfway through building tones
        self.tone_config.check_grid_size(len(ALL_KEYS))
        if player is None:
            from .player import TonePlayer
            player = TonePlayer(frequency=self.tone_config.sample_rate)
        self.player = player
        self.encode = encode
        self.tones = ToneMap()
        self.holds = HoldTracker()
        self._mouse_held: set[str] = set()
        self.cell_colors = random_palette(len(ALL_KEYS), rng=random.Random(self.tone_config.seed))
        self.grid: ToneGrid | None = None

    def compose(self) -> ComposeResult:
        self.grid = ToneGrid(self.cell_colors)
        yield self.grid
        yield StatusLine("Tuning...", id="status")

    def on_mount(self) -> None:
        self.run_worker(self._build_tones, thread=True, exclusive=True, name="tones")
        self.set_interval(RELEASE_POLL_INTERVAL, self._release_expired)

    def _build_tones(self) -> None:
        """Thread worker: render every cell's tone, then hand over to the UI thread."""
        started = time.monotonic()
        tones = build_session_tones(ALL_KEYS, self.tone_config, self.encode)
        logger.info(f"Rendered {len(tones)} tones in {time.monotonic() - started:.2f}s")
        self.call_from_thread(self._tones_ready, tones)

    def _tones_ready(self, tones: ToneMap) -> None:
        self.tones = tones
        loaded = self.player.load(tones)
        status = self.query_one("#status", StatusLine)
        if loaded:
            status.update("Hold keys or click cells to play. Escape quits.")
        else:
            status.update("No audio device. Cells light up but stay silent.")

    # =========================================================================
    # Playing
    # =========================================================================

    def start_tone(self, key: str) -> None:
        """Light up a cell and play its tone from the beginning."""
        if self.tones.get(key) is None:
            return  # Not built yet (or not a cell): nothing to play
        self.grid.set_playing(key, True)
        self.player.play(key)

    def stop_tone(self, key: str) -> None:
        """Stop a cell's tone and rewind it."""
        self.grid.set_playing(key, False)
        self.player.stop(key)

    def _release_expired(self) -> None:
        for key in self.holds.expired():
            if key not in self._mouse_held:
                self.stop_tone(key)

    def on_key(self, event: events.Key) -> None:
        """Handle key press (and terminal auto-repeat while held)."""
        key = normalize_key(event.character)
        if key is None:
            return
        event.stop()
        if self.holds.press(key):
            self.start_tone(key)

    def on_cell_pressed(self, message: CellPressed) -> None:
        self._mouse_held.add(message.key)
        self.start_tone(message.key)

    def on_cell_released(self, message: CellReleased) -> None:
        self._mouse_held.discard(message.key)
        if not self.holds.is_held(message.key):
            self.stop_tone(message.key)


def configure_logging() -> None:
    """Log to TONE_GRID_LOG_FILE if set. Never to the terminal, Textual owns it."""
    log_file = os.environ.get("TONE_GRID_LOG_FILE")
    if not log_file:
        logging.getLogger("tone_grid").addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=os.environ.get("TONE_GRID_LOG_LEVEL", "INFO").upper(),
        format=LOG_FORMAT,
    )


def main():
    """Entry point for Tone Grid"""
    configure_logging()
    config = ToneConfig.from_env()
    logger.info(
        f"Starting: {config.waveform.value} tones, notes "
        f"[{config.note_lower_bound}, {config.note_upper_bound}], "
        f"{config.sample_rate} Hz / {config.bits_per_sample}-bit"
    )
    app = ToneGridApp(config)
    try:
        app.run()
    finally:
        app.player.cleanup()


if __name__ == "__main__":
    main()
