# src/env/observations.py
"""
Compact observation vector for agents (float32, shape (8,)):

    [y_norm, vy_norm, pipe_dx, gap_top, gap_bottom, speed_norm, ghost, double]

- y_norm     : player top between ceiling line (0) and ground line (1)
- vy_norm    : velocity clipped to [-MAX_VY, MAX_VY] and scaled to [-1, 1]
- pipe_dx    : distance from the player to the next unpassed pipe's left edge / width
- gap_top    : that pipe's gap top / height   (fallback band when no pipe ahead)
- gap_bottom : that pipe's gap bottom / height
- speed_norm : current scroll speed / SPEED_NORM_MULT * base speed
- ghost      : 1 while PHASE is active
- double     : 1 while DOUBLE_SCORE is active
"""
from __future__ import annotations
from typing import Optional
import numpy as np

from src.game.effects import EffectKind
from src.game.pipes import Obstacle
from src.game.simulation import Simulation

OBS_SIZE = 8
SPEED_NORM_MULT = 5.0

OBS_LOW = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0], dtype=np.float32)
OBS_HIGH = np.array([1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0], dtype=np.float32)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def next_pipe(sim: Simulation) -> Optional[Obstacle]:
    """First pipe whose right edge is still ahead of the player."""
    ahead = [p for p in sim.pipes if p.right > sim.player.x]
    return min(ahead, key=lambda p: p.x) if ahead else None


def build_observation(sim: Simulation) -> np.ndarray:
    t, s, p = sim.tuning, sim.session, sim.player

    span = max(1.0, t.ground_y - t.ceiling_y)
    y_norm = _clamp01((p.y - t.ceiling_y) / span)
    vy_max = max(1.0, t.max_vy)
    vy_norm = max(-1.0, min(1.0, p.vy / vy_max))

    pipe = next_pipe(sim)
    if pipe is not None:
        dx = _clamp01((pipe.x - p.x) / t.width)
        top = _clamp01(pipe.gap_top / t.height)
        bottom = _clamp01(pipe.gap_bottom / t.height)
    else:
        dx = 1.0
        top = _clamp01(t.fallback_band / t.height)
        bottom = _clamp01((t.height - t.fallback_band) / t.height)

    speed_norm = _clamp01(s.speed / (SPEED_NORM_MULT * t.base_speed))
    ghost = 1.0 if s.effects.is_active(EffectKind.PHASE) else 0.0
    double = 1.0 if s.effects.is_active(EffectKind.DOUBLE_SCORE) else 0.0

    obs = np.array([y_norm, vy_norm, dx, top, bottom, speed_norm, ghost, double], dtype=np.float32)
    return np.clip(obs, OBS_LOW, OBS_HIGH)
