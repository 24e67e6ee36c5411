"""
Grid layout: which key lives in which cell, and which cell is under a point.

Pure data and arithmetic, shared by the renderer and the mouse handler so the
two always agree on cell boundaries.
"""

from typing import Optional

# 10x4 grid matching keyboard layout
GRID_KEYS = [
    ['1', '2', '3', '4', '5', '6', '7', '8', '9', '0'],
    ['Q', 'W', 'E', 'R', 'T', 'Y', 'U', 'I', 'O', 'P'],
    ['A', 'S', 'D', 'F', 'G', 'H', 'J', 'K', 'L', ';'],
    ['Z', 'X', 'C', 'V', 'B', 'N', 'M', ',', '.', '/'],
]

GRID_ROWS = len(GRID_KEYS)
GRID_COLS = len(GRID_KEYS[0])

# All keys in a flat list for indexing
ALL_KEYS = [key for row in GRID_KEYS for key in row]

# File-safe names for keys that can't appear in a filename
KEY_FILE_NAMES = {';': 'semicolon', ',': 'comma', '.': 'period', '/': 'slash'}


def normalize_key(char: Optional[str]) -> Optional[str]:
    """Map a typed character to its grid label ('q' -> 'Q'), or None."""
    if not char:
        return None
    lookup = char.upper() if char.isalpha() else char
    return lookup if lookup in ALL_KEYS else None


def key_file_name(key: str) -> str:
    return KEY_FILE_NAMES.get(key, key.lower())


class GridGeometry:
    """
    Cell sizes and margins for a grid drawn in a width x height area.

    All cells are the same size; leftover columns and rows become margins
    that center the grid.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.cell_width = width // GRID_COLS
        self.cell_height = height // GRID_ROWS
        self.grid_width = self.cell_width * GRID_COLS
        self.grid_height = self.cell_height * GRID_ROWS
        self.margin_left = (width - self.grid_width) // 2
        self.margin_top = (height - self.grid_height) // 2

    @property
    def margin_right(self) -> int:
        return self.width - self.margin_left - self.grid_width

    def row_at(self, y: int) -> Optional[int]:
        """Grid row for screen line y, or None in the margins."""
        if self.cell_height <= 0:
            return None
        grid_y = y - self.margin_top
        if grid_y < 0 or grid_y >= self.grid_height:
            return None
        return grid_y // self.cell_height

    def col_at(self, x: int) -> Optional[int]:
        """Grid column for screen column x, or None in the margins."""
        if self.cell_width <= 0:
            return None
        grid_x = x - self.margin_left
        if grid_x < 0 or grid_x >= self.grid_width:
            return None
        return grid_x // self.cell_width

    def is_label_line(self, y: int) -> bool:
        """Whether line y is the middle line of its cell (where the key is drawn)."""
        grid_y = y - self.margin_top
        return grid_y % self.cell_height == self.cell_height // 2


def cell_at(x: int, y: int, width: int, height: int) -> Optional[str]:
    """Label of the cell under point (x, y), or None if the point misses the grid."""
    geometry = GridGeometry(width, height)
    row = geometry.row_at(y)
    col = geometry.col_at(x)
    if row is None or col is None:
        return None
    return GRID_KEYS[row][col]
