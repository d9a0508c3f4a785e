# src/game/effects.py
from __future__ import annotations
from enum import Enum
from typing import Dict


class EffectKind(Enum):
    DOUBLE_SCORE = "double_score"
    PHASE = "phase"


class EffectManager:
    """Countdowns for the temporary power-ups. One slot per kind."""

    def __init__(self):
        self._remaining: Dict[EffectKind, float] = {}

    def activate(self, kind: EffectKind, duration: float):
        # re-pickup restarts the countdown, it never stacks
        self._remaining[kind] = float(duration)

    def tick(self, dt: float):
        for kind in list(self._remaining):
            self._remaining[kind] -= dt
            if self._remaining[kind] <= 0.0:
                del self._remaining[kind]

    def is_active(self, kind: EffectKind) -> bool:
        return kind in self._remaining

    def remaining(self, kind: EffectKind) -> float:
        return self._remaining.get(kind, 0.0)

    def clear(self):
        self._remaining.clear()
