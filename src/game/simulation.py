# src/game/simulation.py
from __future__ import annotations
import random
from dataclasses import dataclass, field
from typing import List, Optional

from .collisions import apply_pickups, award_passes, check_collisions
from .config import Tuning
from .difficulty import DifficultyController
from .effects import EffectKind
from .items import Collectible, ItemSpawner, scroll_items
from .pipes import Obstacle, PipeGen, scroll_pipes
from .player import Player
from .session import GameSession, RunResult


@dataclass
class TickResult:
    sounds: List[str] = field(default_factory=list)
    points: int = 0
    death_cause: Optional[str] = None
    result: Optional[RunResult] = None      # set when the run ended this tick

    @property
    def lost(self) -> bool:
        return self.result is not None


class Simulation:
    """
    One run of the Playing scene: player, pipes, items and the session.

    Each step() runs in a fixed order:
      1. physics       2. spawns        3. scroll
      4. collisions    5. effects/score 6. speed
    Collision tests rely on everything having moved already, and scoring
    reads `passed` after the scroll, so the order must not change.
    """
    def __init__(self, tuning: Optional[Tuning] = None, seed: Optional[int] = None):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.tuning = tuning or Tuning()
        self.rng = random.Random(seed)

        t = self.tuning
        self.session = GameSession(speed=t.base_speed)
        self.player = Player(x=t.player_x, y=t.height / 2, w=t.player_w, h=t.player_h)
        self.pipes: List[Obstacle] = []
        self.items: List[Collectible] = []

        self.pipe_gen = PipeGen(t, self.rng)
        self.spawner = ItemSpawner(t, self.rng)
        self.difficulty = DifficultyController(t)
        self.over = False

    def jump(self) -> List[str]:
        if self.over:
            return []
        self.player.jump(self.tuning.jump_impulse)
        return ["jump"]

    def step(self, dt: float) -> TickResult:
        assert dt >= 0.0, "dt must be non-negative"
        out = TickResult()
        if self.over:
            return out

        s, t = self.session, self.tuning
        s.elapsed += dt

        # 1. physics
        self.player.update_physics(dt, t.gravity)

        # 2. spawns (the fresh gap is passed on explicitly)
        s.pipe_timer += dt
        if s.pipe_timer >= self.difficulty.pipe_interval(s):
            s.pipe_timer = 0.0
            pipe, s.last_gap = self.pipe_gen.spawn(s)
            self.pipes.append(pipe)
        self.items.extend(self.spawner.update(s, dt, s.last_gap))

        # 3. scroll
        dx = self.difficulty.scroll_dx(s, dt)
        self.pipes = scroll_pipes(self.pipes, dx)
        self.items = scroll_items(self.items, dx)
        s.ground_offset = (s.ground_offset + dx) % t.ground_tile_w

        # 4. collisions
        report, self.items = check_collisions(self.player, self.pipes, self.items, s, t)
        if report.terminal:
            self.over = True
            self.player.alive = False
            out.death_cause = report.death_cause
            out.result = s.snapshot()
            out.sounds.append("hit")
            return out

        # 5. effects and score
        s.effects.tick(dt)
        out.sounds.extend(apply_pickups(report.picked, s, t))
        ghost = s.effects.is_active(EffectKind.PHASE)
        self.player.opacity = t.ghost_opacity if ghost else 1.0

        out.points = award_passes(self.player, self.pipes, s)
        first = s.score + 1
        s.score += out.points
        out.sounds.extend(["score"] * out.points)

        # 6. speed
        for value in range(first, s.score + 1):
            self.difficulty.on_point(s, value)

        return out
