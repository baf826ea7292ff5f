from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(slots=True)
class ScheduledAction:
    """One-shot delayed event waiting in the scheduler queue.

    ``remaining`` counts down in virtual seconds; when it reaches zero the
    scheduler emits ``event_name`` with ``payload`` and deletes the entity.
    ``sequence`` keeps emission order stable for actions due on the same tick.
    """

    event_name: str
    remaining: float
    payload: Dict[str, Any] = field(default_factory=dict)
    sequence: int = 0
