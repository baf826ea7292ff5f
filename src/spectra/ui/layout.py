from __future__ import annotations

from dataclasses import dataclass

from spectra.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    HUD_HEIGHT,
    TILE_GAP,
    TILE_SIZE,
)


@dataclass(frozen=True, slots=True)
class BoardGeometry:
    tile_size: int
    gap: int
    left: float
    bottom: float
    rows: int
    cols: int

    @property
    def pitch(self) -> int:
        return self.tile_size + self.gap

    @property
    def width(self) -> float:
        return self.cols * self.pitch - self.gap

    @property
    def height(self) -> float:
        return self.rows * self.pitch - self.gap


def compute_board_geometry(window_width: int, window_height: int, rows: int, cols: int) -> BoardGeometry:
    """Size and centre the board so it fits the percentage caps and leaves room for the HUD."""
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HUD_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    pitch_by_w = max_board_w / cols
    pitch_by_h = max_board_h / rows
    tile_size = min(TILE_SIZE, int(min(pitch_by_w, pitch_by_h)) - TILE_GAP)
    if tile_size < 20:
        tile_size = 20  # safety minimum
    pitch = tile_size + TILE_GAP
    total_width = cols * pitch - TILE_GAP
    left = (window_width - total_width) / 2
    return BoardGeometry(tile_size=tile_size, gap=TILE_GAP, left=left, bottom=BOTTOM_MARGIN, rows=rows, cols=cols)


def cell_at_point(geometry: BoardGeometry, x: float, y: float) -> tuple[int, int] | None:
    """Map a window point to (row, col); clicks on the gaps snap to the cell before them."""
    if x < geometry.left or y < geometry.bottom:
        return None
    col = int((x - geometry.left) // geometry.pitch)
    # Row 0 is drawn at the top of the board.
    row_from_bottom = int((y - geometry.bottom) // geometry.pitch)
    row = geometry.rows - 1 - row_from_bottom
    if 0 <= row < geometry.rows and 0 <= col < geometry.cols:
        return row, col
    return None


def cell_origin(geometry: BoardGeometry, row: int, col: int) -> tuple[float, float]:
    """Bottom-left window coordinate of the tile at (row, col)."""
    x = geometry.left + col * geometry.pitch
    y = geometry.bottom + (geometry.rows - 1 - row) * geometry.pitch
    return x, y
