# src/game/difficulty.py
from __future__ import annotations
from typing import TYPE_CHECKING

from .config import Tuning

if TYPE_CHECKING:
    from .session import GameSession


class DifficultyController:
    """
    Owns the shared scroll rate. Speed only ever goes up within a session,
    and pipes come more often as it does so spacing stays roughly constant.
    """
    def __init__(self, tuning: Tuning):
        self.tuning = tuning

    def on_point(self, session: GameSession, score: int) -> bool:
        """Call once for each score value reached. Returns True if the speed was raised."""
        step = self.tuning.speed_increase_threshold
        if score > 0 and score % step == 0:
            session.speed += self.tuning.speed_increase
            return True
        return False

    def pipe_interval(self, session: GameSession) -> float:
        t = self.tuning
        return t.base_pipe_interval * t.base_speed / session.speed

    def scroll_dx(self, session: GameSession, dt: float) -> float:
        return session.speed * dt
