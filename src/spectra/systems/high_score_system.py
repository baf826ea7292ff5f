from __future__ import annotations

import logging

from esper import World

from spectra.events.bus import (
    EVENT_HIGH_SCORE_SAVED,
    EVENT_SESSION_STARTED,
    EVENT_TIME_EXPIRED,
    EventBus,
)
from spectra.persistence.high_scores import HighScoreStore, InMemoryHighScoreStore
from spectra.utils.session_state import get_session_state

logger = logging.getLogger(__name__)


class HighScoreSystem:
    """Loads the best score when a session starts and saves a new record at game over.

    Store failures never reach the game: an unreadable store counts as a best
    of 0 and a failed write is dropped.
    """

    def __init__(self, world: World, event_bus: EventBus, store: HighScoreStore | None = None) -> None:
        self.world = world
        self.event_bus = event_bus
        self.store: HighScoreStore = store if store is not None else InMemoryHighScoreStore()
        self._loaded_best = 0
        self._saved = False
        self.event_bus.subscribe(EVENT_SESSION_STARTED, self._on_session_started)
        self.event_bus.subscribe(EVENT_TIME_EXPIRED, self._on_time_expired)

    def _on_session_started(self, sender, **payload) -> None:
        state = get_session_state(self.world)
        self._loaded_best = self._load(state.difficulty)
        self._saved = False
        state.best_score = self._loaded_best

    def _on_time_expired(self, sender, **payload) -> None:
        if self._saved:
            return
        state = get_session_state(self.world)
        final_score = payload.get("final_score", state.score)
        if final_score <= self._loaded_best:
            return
        self._saved = True
        self._save(state.difficulty, final_score)
        state.best_score = final_score
        self.event_bus.emit(
            EVENT_HIGH_SCORE_SAVED,
            difficulty=state.difficulty,
            score=final_score,
            previous_best=self._loaded_best,
        )

    def _load(self, difficulty: str) -> int:
        try:
            return max(0, int(self.store.load_best_score(difficulty)))
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Could not load best score for %s: %s", difficulty, exc)
            return 0

    def _save(self, difficulty: str, score: int) -> None:
        try:
            self.store.save_best_score(difficulty, score)
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Could not save best score %d for %s: %s", score, difficulty, exc)
