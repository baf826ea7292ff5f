from __future__ import annotations

from dataclasses import dataclass

from spectra.constants import (
    COMBO_BONUS_PER_LEVEL,
    COMBO_MULTIPLIER_CAP,
    COMBO_MULTIPLIER_STEP,
    MOVES_PER_LEVEL,
    POINTS_PER_TILE,
)

# The multiplier grows in fifths; integer math keeps floor() exact.
_MULTIPLIER_DENOMINATOR = round(1 / COMBO_MULTIPLIER_STEP)
_MULTIPLIER_CAP_UNITS = round(COMBO_MULTIPLIER_CAP * _MULTIPLIER_DENOMINATOR)


@dataclass(frozen=True, slots=True)
class ClearScore:
    points: int
    multiplier: float
    base_points: int
    combo_bonus: int
    new_combo: int


def combo_multiplier(combo: int) -> float:
    return min(1 + combo * COMBO_MULTIPLIER_STEP, COMBO_MULTIPLIER_CAP)


def score_clear(region_size: int, combo_before: int) -> ClearScore:
    """Points for clearing ``region_size`` tiles with ``combo_before`` consecutive clears pending.

    ``floor(size * 10 * min(1 + combo * 0.2, 3.0))`` plus a flat ``combo * 100``
    bonus once a combo is running.
    """
    combo_before = max(0, combo_before)
    base_points = region_size * POINTS_PER_TILE
    units = min(_MULTIPLIER_DENOMINATOR + combo_before, _MULTIPLIER_CAP_UNITS)
    multiplied = (base_points * units) // _MULTIPLIER_DENOMINATOR
    combo_bonus = combo_before * COMBO_BONUS_PER_LEVEL if combo_before > 0 else 0
    return ClearScore(
        points=multiplied + combo_bonus,
        multiplier=combo_multiplier(combo_before),
        base_points=base_points,
        combo_bonus=combo_bonus,
        new_combo=combo_before + 1,
    )


def level_for_moves(moves: int) -> int:
    return moves // MOVES_PER_LEVEL + 1
