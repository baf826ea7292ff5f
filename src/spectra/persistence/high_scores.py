from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Protocol


class HighScoreStore(Protocol):
    """Persistence provider for best scores keyed by difficulty."""

    def load_best_score(self, difficulty_key: str) -> int: ...

    def save_best_score(self, difficulty_key: str, score: int) -> None: ...


class InMemoryHighScoreStore:
    """Process-local store; useful for tests and throwaway sessions."""

    def __init__(self, initial: Dict[str, int] | None = None) -> None:
        self.scores: Dict[str, int] = dict(initial or {})
        self.saves: list[tuple[str, int]] = []

    def load_best_score(self, difficulty_key: str) -> int:
        return int(self.scores.get(difficulty_key, 0))

    def save_best_score(self, difficulty_key: str, score: int) -> None:
        self.scores[difficulty_key] = int(score)
        self.saves.append((difficulty_key, int(score)))


class JsonHighScoreStore:
    """Best scores persisted as one JSON object ``{difficulty: score}``.

    A missing or corrupt file reads as no scores; writes replace the whole file.
    """

    def __init__(self, save_path: Path | str | None = None) -> None:
        self._save_path = Path(save_path) if save_path is not None else self._default_save_path()

    @staticmethod
    def _default_save_path() -> Path:
        return Path.home() / ".spectra" / "high_scores.json"

    @property
    def save_path(self) -> Path:
        return self._save_path

    def _read_all(self) -> Dict[str, int]:
        try:
            with self._save_path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError:
            return {}
        if not isinstance(payload, dict):
            return {}
        scores: Dict[str, int] = {}
        for key, value in payload.items():
            try:
                scores[str(key)] = int(value)
            except (TypeError, ValueError):
                continue
        return scores

    def load_best_score(self, difficulty_key: str) -> int:
        return self._read_all().get(difficulty_key, 0)

    def save_best_score(self, difficulty_key: str, score: int) -> None:
        scores = self._read_all()
        scores[difficulty_key] = int(score)
        self._save_path.parent.mkdir(parents=True, exist_ok=True)
        with self._save_path.open("w", encoding="utf-8") as handle:
            json.dump(scores, handle, indent=2, sort_keys=True)
