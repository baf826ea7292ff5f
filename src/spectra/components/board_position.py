from dataclasses import dataclass

@dataclass(slots=True)
class BoardPosition:
    """Grid coordinate of a tile entity. Row 0 is the top row."""
    row: int
    col: int
