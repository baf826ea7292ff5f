import pytest

from spectra.components.difficulty import DifficultyProfile, PROFILES, get_profile
from spectra.constants import TILE_COLORS


@pytest.mark.parametrize(
    "key, rows, cols, colors, max_time, combo_timeout",
    [
        ("easy", 5, 5, 4, 45, 2.0),
        ("medium", 6, 6, 6, 30, 1.0),
        ("hard", 7, 7, 7, 20, 0.5),
    ],
)
def test_canonical_profiles(key, rows, cols, colors, max_time, combo_timeout):
    profile = get_profile(key)
    assert (profile.rows, profile.cols) == (rows, cols)
    assert len(profile.colors) == colors
    assert len(set(profile.colors)) == colors
    assert profile.max_time == max_time
    assert profile.combo_timeout == combo_timeout
    assert set(profile.colors) <= set(TILE_COLORS)


def test_unknown_profile_raises():
    with pytest.raises(KeyError):
        get_profile("impossible")
    assert sorted(PROFILES) == ["easy", "hard", "medium"]


def test_profile_validation():
    with pytest.raises(ValueError):
        DifficultyProfile(key="x", rows=0, cols=3, colors=("red",), max_time=10, combo_timeout=1.0)
    with pytest.raises(ValueError):
        DifficultyProfile(key="x", rows=3, cols=3, colors=(), max_time=10, combo_timeout=1.0)
    with pytest.raises(ValueError):
        DifficultyProfile(key="x", rows=3, cols=3, colors=("red",), max_time=0, combo_timeout=1.0)
