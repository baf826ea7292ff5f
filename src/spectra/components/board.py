from dataclasses import dataclass

@dataclass(slots=True)
class Board:
    """Fixed grid dimensions; row 0 is the top row."""
    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
