from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True, slots=True)
class DifficultyProfile:
    """Immutable configuration selected by difficulty.

    ``max_time`` is both the initial and the maximum time budget in seconds;
    ``combo_timeout`` is the idle time after a clear before the combo resets.
    """

    key: str
    rows: int
    cols: int
    colors: Tuple[str, ...]
    max_time: int
    combo_timeout: float

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Board dimensions must be positive, got {self.rows}x{self.cols}")
        if not self.colors:
            raise ValueError("A difficulty profile needs at least one color")
        if self.max_time <= 0:
            raise ValueError(f"max_time must be positive, got {self.max_time}")
        if self.combo_timeout < 0:
            raise ValueError(f"combo_timeout must not be negative, got {self.combo_timeout}")


EASY = DifficultyProfile(
    key="easy",
    rows=5,
    cols=5,
    colors=("red", "blue", "yellow", "green"),
    max_time=45,
    combo_timeout=2.0,
)
MEDIUM = DifficultyProfile(
    key="medium",
    rows=6,
    cols=6,
    colors=("red", "blue", "yellow", "green", "purple", "cyan"),
    max_time=30,
    combo_timeout=1.0,
)
HARD = DifficultyProfile(
    key="hard",
    rows=7,
    cols=7,
    colors=("red", "blue", "yellow", "green", "purple", "cyan", "orange"),
    max_time=20,
    combo_timeout=0.5,
)

PROFILES: Dict[str, DifficultyProfile] = {
    profile.key: profile for profile in (EASY, MEDIUM, HARD)
}


def get_profile(key: str) -> DifficultyProfile:
    """Return the canonical profile for ``key`` (``easy``, ``medium`` or ``hard``)."""
    try:
        return PROFILES[key]
    except KeyError:
        raise KeyError(f"Unknown difficulty {key!r}; expected one of {sorted(PROFILES)}") from None
