from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods alive for systems not stored in a variable.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float
EVENT_COUNTDOWN_TICK = "countdown_tick"            # payload: time_left=int
EVENT_TIME_EXPIRED = "time_expired"                # payload: final_score=int


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col


# ============================================================================
# TILE & BOARD MECHANICS
# ============================================================================
EVENT_REGION_SELECTED = "region_selected"          # payload: positions=[(r,c),...], size=int
EVENT_SELECTION_CONFIRMED = "selection_confirmed"  # payload: None
EVENT_CLEAR_READY = "clear_ready"                  # payload: None
EVENT_MATCH_FOUND = "match_found"                  # payload: positions=[(r,c),...], size=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...], types=[(r,c,name),...], size=int
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=[GravityMove,...], cascades=int
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[(r,c),...]
EVENT_BOARD_RESHUFFLED = "board_reshuffled"        # payload: remedy=str ('shuffle' | 'regenerate')
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str, positions=list[(r,c)]
EVENT_RESOLUTION_COMPLETE = "resolution_complete"  # payload: size=int


# ============================================================================
# SCORING & PROGRESSION
# ============================================================================
EVENT_CLEARED = "cleared"                          # payload: region_size=int, points_awarded=int, new_combo=int
EVENT_LEVEL_UP = "level_up"                        # payload: new_level=int
EVENT_COMBO_RESET = "combo_reset"                  # payload: previous_combo=int


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_SESSION_STARTED = "session_started"          # payload: difficulty=str, rows=int, cols=int
EVENT_PHASE_CHANGED = "phase_changed"              # payload: previous_phase=GamePhase, new_phase=GamePhase
EVENT_HIGH_SCORE_SAVED = "high_score_saved"        # payload: difficulty=str, score=int, previous_best=int
