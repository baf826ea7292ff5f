"""Session state resource describing score, timers and the lifecycle phase."""
from dataclasses import dataclass
from enum import Enum, auto


class GamePhase(Enum):
    """Lifecycle phases of a play session."""
    IDLE = auto()
    SELECTING = auto()
    ANIMATING = auto()
    GAME_OVER = auto()


@dataclass
class SessionState:
    """Singleton component holding the mutable state of the current session.

    ``clock`` is virtual time in seconds since ``init``; ``last_clear_time`` is
    measured on the same clock so combo decay stays deterministic under test.
    """
    difficulty: str = "medium"
    score: int = 0
    level: int = 1
    moves: int = 0
    combo: int = 0
    time_left: int = 0
    phase: GamePhase = GamePhase.IDLE
    clock: float = 0.0
    last_clear_time: float = 0.0
    best_score: int = 0

    @property
    def accepting_input(self) -> bool:
        return self.phase == GamePhase.SELECTING
