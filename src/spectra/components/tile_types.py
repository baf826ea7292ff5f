from dataclasses import dataclass, field
from random import Random
from typing import Dict, Iterable, List, Tuple

@dataclass(slots=True)
class TileTypes:
    """Palette definitions stored on the registry entity.

    ``types`` maps every known color name to its display RGB; ``spawnable`` is the
    ordered subset the active difficulty draws from.
    """
    types: Dict[str, Tuple[int,int,int]]
    spawnable: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.spawnable:
            # Preserve order while filtering unknown names.
            seen: set[str] = set()
            filtered: List[str] = []
            for name in self.spawnable:
                if name in self.types and name not in seen:
                    filtered.append(name)
                    seen.add(name)
            self.spawnable = filtered or list(self.types.keys())
        else:
            self.spawnable = list(self.types.keys())

    def background_for(self, type_name: str) -> Tuple[int,int,int]:
        return self.types[type_name]

    def all_types(self) -> List[str]:
        return list(self.spawnable)

    def random_type(self, rng: Random) -> str:
        return rng.choice(self.spawnable)

    def set_spawnable(self, type_names: Iterable[str]) -> None:
        filtered = [name for name in dict.fromkeys(type_names) if name in self.types]
        self.spawnable = filtered or list(self.types.keys())
