from dataclasses import dataclass

@dataclass(slots=True)
class ActiveSwitch:
    """Per-cell occupancy flag.

    active: True if the cell currently holds a colored tile; False if cleared/empty.
    The color itself lives in the TileType component.
    """
    active: bool = True
