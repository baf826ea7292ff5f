from dataclasses import dataclass, field
from typing import Set, Tuple


@dataclass(slots=True)
class Selection:
    """Region currently highlighted and waiting to be cleared."""

    positions: Set[Tuple[int, int]] = field(default_factory=set)

    def clear(self) -> None:
        self.positions.clear()

    def __len__(self) -> int:
        return len(self.positions)
