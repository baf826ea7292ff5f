import random

from spectra.events.bus import EVENT_MATCH_CLEARED, EVENT_MATCH_FOUND
from spectra.session import GameSession
from spectra.systems.render import COMBO_COLOR, HUD_COLOR, WARNING_COLOR, RenderSystem, format_score


class DummyWindow:
    width = 800
    height = 600


def _render(difficulty="medium"):
    session = GameSession(rng=random.Random(5), confirm_delay=0, clear_delay=0)
    render = RenderSystem(session.world, session.event_bus, DummyWindow())
    session.init(difficulty)
    return session, render


def test_format_score_pads_to_six_digits():
    assert format_score(0) == "000000"
    assert format_score(1234) == "001234"
    assert format_score(1234567) == "1234567"


def test_hud_shows_score_level_and_time():
    session, render = _render()
    session.state.score = 420
    session.state.best_score = 900
    lines = render.hud_lines()
    assert lines[0] == ("SCORE 000420   BEST 000900", HUD_COLOR)
    assert lines[1] == ("LEVEL 1   TIME 30", HUD_COLOR)
    assert len(lines) == 2


def test_hud_warns_when_time_runs_low_and_shows_combo():
    session, render = _render()
    session.state.time_left = 10
    session.state.combo = 3
    lines = render.hud_lines()
    assert lines[1][1] == WARNING_COLOR
    assert lines[2] == ("3x COMBO!", COMBO_COLOR)


def test_best_shown_tracks_current_score_once_beaten():
    session, render = _render()
    session.state.best_score = 100
    session.state.score = 250
    assert "BEST 000250" in render.hud_lines()[0][0]


def test_clearing_cells_follow_match_events():
    session, render = _render()
    session.event_bus.emit(EVENT_MATCH_FOUND, positions=[(0, 0), (0, 1), (0, 2)], size=3)
    assert render.clearing == {(0, 0), (0, 1), (0, 2)}
    session.event_bus.emit(EVENT_MATCH_CLEARED, positions=[(0, 0), (0, 1), (0, 2)], types=[], size=3)
    assert render.clearing == set()


def test_geometry_absent_before_first_session():
    session = GameSession()
    render = RenderSystem(session.world, session.event_bus, DummyWindow())
    assert render.geometry() is None
