# src/game/pipes.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Tuple

import pygame

from .config import Tuning

if TYPE_CHECKING:
    from .session import GameSession


@dataclass(frozen=True)
class SafeGap:
    """Bounds of the most recent pipe gap, handed to the item spawner."""
    top: float
    bottom: float


@dataclass
class Obstacle:
    """
    A pipe pair from a single spawn: top segment [0, gap_top),
    bottom segment [gap_bottom, ground line). Both share x.
    """
    x: float
    gap_top: float
    gap_bottom: float
    width: float
    ground_y: float
    ceiling_y: float = 0.0
    passed: bool = False

    @property
    def top_height(self) -> float:
        return self.gap_top

    @property
    def bottom_height(self) -> float:
        return self.ground_y - self.gap_bottom

    @property
    def right(self) -> float:
        return self.x + self.width

    def rects(self) -> Tuple[pygame.Rect, pygame.Rect]:
        """Collision areas. The top one reaches up to the ceiling line so the
        player can't slip over a pipe above the screen."""
        top_from = min(0.0, self.ceiling_y)
        top = pygame.Rect(int(self.x), int(top_from), int(self.width),
                          int(self.gap_top - top_from))
        bot = pygame.Rect(int(self.x), int(self.gap_bottom), int(self.width),
                          int(self.bottom_height))
        return top, bot


class PipeGen:
    """
    Decides where each new pipe gap goes.
    - normal mode: gap top uniform in [PIPE_MIN, H - PIPE_MIN - GAP - GROUND]
    - straight-line stage: on score milestones, one gap y is held for
      `stage_duration` consecutive pipes
    All stage bookkeeping lives on the session.
    """
    def __init__(self, tuning: Tuning, rng: random.Random):
        self.tuning = tuning
        self.rng = rng

    def gap_range(self) -> Tuple[float, float]:
        t = self.tuning
        lo = t.pipe_min
        hi = t.height - t.pipe_min - t.gap_size - t.ground_height
        return lo, max(lo, hi)

    def _should_start_stage(self, session: GameSession) -> bool:
        t = self.tuning
        if session.in_stage:
            return False
        if session.score < t.stage_start_score or session.score % t.stage_every != 0:
            return False
        # one stage per milestone
        return session.stage_trigger_score != session.score

    def _next_gap_top(self, session: GameSession) -> float:
        t = self.tuning
        lo, hi = self.gap_range()

        if self._should_start_stage(session):
            session.in_stage = True
            session.stage_counter = 0
            session.stage_trigger_score = session.score
            s_lo = lo + t.stage_inset
            s_hi = max(s_lo, hi - t.stage_inset)
            session.stage_gap_top = self.rng.uniform(s_lo, s_hi)

        if session.in_stage:
            gap_top = session.stage_gap_top
            session.stage_counter += 1
            if session.stage_counter >= t.stage_duration:
                session.in_stage = False
                session.stage_counter = 0
            return gap_top

        return self.rng.uniform(lo, hi)

    def spawn(self, session: GameSession) -> Tuple[Obstacle, SafeGap]:
        """Emit a pipe pair at the right edge and the gap it leaves open."""
        t = self.tuning
        gap_top = self._next_gap_top(session)
        pipe = Obstacle(
            x=float(t.width),
            gap_top=gap_top,
            gap_bottom=gap_top + t.gap_size,
            width=t.pipe_w,
            ground_y=t.ground_y,
            ceiling_y=t.ceiling_y,
        )
        # bottom carries the ground-height correction
        gap = SafeGap(top=gap_top, bottom=gap_top + t.gap_size + t.ground_height)
        return pipe, gap


def scroll_pipes(pipes: List[Obstacle], dx: float) -> List[Obstacle]:
    """Move every pipe left by dx and drop the ones that left the screen."""
    for pipe in pipes:
        pipe.x -= dx
    return [p for p in pipes if p.right >= 0]
