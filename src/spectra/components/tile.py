from dataclasses import dataclass

@dataclass(slots=True)
class TileType:
    """Per-tile color assignment.

    Stores only the palette name. Empty state is handled by ActiveSwitch and
    display colors are looked up through the TileTypes registry.
    """
    type_name: str
