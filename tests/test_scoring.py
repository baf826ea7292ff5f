import pytest

from spectra.utils.scoring import combo_multiplier, level_for_moves, score_clear


def test_first_clear_has_no_bonus():
    result = score_clear(5, 0)
    assert result.multiplier == pytest.approx(1.0)
    assert result.base_points == 50
    assert result.combo_bonus == 0
    assert result.points == 50
    assert result.new_combo == 1


def test_running_combo_multiplies_and_adds_bonus():
    result = score_clear(4, 2)
    assert result.multiplier == pytest.approx(1.4)
    assert result.base_points == 40
    assert result.combo_bonus == 200
    assert result.points == 256
    assert result.new_combo == 3


def test_multiplier_is_capped():
    result = score_clear(10, 10)
    assert result.multiplier == pytest.approx(3.0)
    assert result.points == 1300
    assert result.new_combo == 11
    assert combo_multiplier(50) == pytest.approx(3.0)


def test_multiplied_points_are_floored():
    # 3 tiles * 10 * 1.2 = 36, 3 * 10 * 1.6 = 48: exact; 7 * 10 * 1.2 = 84
    assert score_clear(3, 1).points == 36 + 100
    assert score_clear(7, 1).points == 84 + 100
    assert score_clear(3, 3).points == 48 + 300


@pytest.mark.parametrize("moves, level", [(0, 1), (4, 1), (5, 2), (9, 2), (10, 3), (27, 6)])
def test_level_for_moves(moves, level):
    assert level_for_moves(moves) == level
