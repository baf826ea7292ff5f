from dataclasses import dataclass

@dataclass(slots=True)
class TileTypeRegistry:
    """Tag component marking the single entity that stores the active palette.

    The same entity also carries a TileTypes component mapping color name -> RGB.
    """
    pass
