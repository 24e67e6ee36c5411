"""
The tone grid widget: a 10x4 grid of colored cells, one per key.

Rendered line by line with rich segments so every cell is exactly the same
size at any terminal width.
"""

from textual import events
from textual.message import Message
from textual.strip import Strip
from textual.widget import Widget
from rich.segment import Segment
from rich.style import Style

from .colors import text_color_for
from .layout import ALL_KEYS, GRID_COLS, GRID_KEYS, GridGeometry, cell_at

# Default backgrounds (dark and light themes)
DEFAULT_BG_DARK = "#2a1845"
DEFAULT_BG_LIGHT = "#e8daf0"

# Cells that are sounding are drawn inverted: light background, cell color text
PLAYING_BG = "#f8f0fc"


class CellPressed(Message, bubble=True):
    """Mouse button went down on a cell"""
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__()


class CellReleased(Message, bubble=True):
    """Mouse button came up after pressing a cell"""
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__()


class ToneGrid(Widget):
    """Single widget that renders the entire 10x4 grid manually."""

    DEFAULT_CSS = """
    ToneGrid {
        width: 100%;
        height: 100%;
    }
    """

    def __init__(self, colors: list[str], **kwargs) -> None:
        super().__init__(**kwargs)
        if len(colors) < len(ALL_KEYS):
            raise ValueError(f"Need {len(ALL_KEYS)} colors, got {len(colors)}")
        self.cell_colors: dict[str, str] = dict(zip(ALL_KEYS, colors))
        self.playing: set[str] = set()
        # Cell the mouse went down on, released even if the pointer wandered off
        self._mouse_key: str | None = None

    def on_mouse_down(self, event: events.MouseDown) -> None:
        key = self.key_at(event.x, event.y)
        if key is None:
            return
        event.stop()
        self._mouse_key = key
        self.post_message(CellPressed(key))

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if self._mouse_key is None:
            return
        event.stop()
        key, self._mouse_key = self._mouse_key, None
        self.post_message(CellReleased(key))

    def set_playing(self, key: str, playing: bool) -> None:
        """Mark a cell as sounding (or not) and redraw."""
        if playing:
            self.playing.add(key)
        else:
            self.playing.discard(key)
        self.refresh()

    def key_at(self, x: int, y: int) -> str | None:
        """Label of the cell under widget coordinates (x, y)."""
        return cell_at(x, y, self.size.width, self.size.height)

    def _get_default_bg(self) -> str:
        """Get default background based on current theme."""
        theme = getattr(self.app, "theme", None) or "textual-dark"
        return DEFAULT_BG_LIGHT if "light" in theme else DEFAULT_BG_DARK

    def _cell_styles(self, key: str) -> tuple[Style, Style]:
        color = self.cell_colors[key]
        if key in self.playing:
            return (
                Style(bgcolor=PLAYING_BG),
                Style(bgcolor=PLAYING_BG, color=color, bold=True),
            )
        return (
            Style(bgcolor=color),
            Style(bgcolor=color, color=text_color_for(color), bold=True),
        )

    def render_line(self, y: int) -> Strip:
        """Render a single line of the grid."""
        geometry = GridGeometry(self.size.width, self.size.height)
        bg_style = Style(bgcolor=self._get_default_bg())

        row_idx = geometry.row_at(y)
        if row_idx is None:
            return Strip([Segment(" " * geometry.width, bg_style)])

        label_line = geometry.is_label_line(y)
        cell_width = geometry.cell_width
        segments = []

        # Left margin
        if geometry.margin_left > 0:
            segments.append(Segment(" " * geometry.margin_left, bg_style))

        for col_idx in range(GRID_COLS):
            key = GRID_KEYS[row_idx][col_idx]
            cell_style, text_style = self._cell_styles(key)

            if label_line:
                # Center the key character
                pad_left = (cell_width - 1) // 2
                pad_right = cell_width - pad_left - 1
                segments.append(Segment(" " * pad_left, cell_style))
                segments.append(Segment(key, text_style))
                segments.append(Segment(" " * pad_right, cell_style))
            else:
                segments.append(Segment(" " * cell_width, cell_style))

        # Right margin
        if geometry.margin_right > 0:
            segments.append(Segment(" " * geometry.margin_right, bg_style))

        return Strip(segments)
