# src/game/session.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .effects import EffectManager
from .items import ItemKind, PendingSpawn
from .pipes import SafeGap


@dataclass
class GameSession:
    """Everything one run of the Playing scene owns. Built fresh on entry."""
    speed: float
    score: int = 0
    coins: int = 0

    # straight-line stage
    in_stage: bool = False
    stage_counter: int = 0
    stage_gap_top: float = 0.0
    stage_trigger_score: int = -1

    # accumulators
    pipe_timer: float = 0.0
    item_timers: Dict[ItemKind, float] = field(default_factory=dict)
    pending_spawns: List[PendingSpawn] = field(default_factory=list)

    last_gap: Optional[SafeGap] = None
    ground_offset: float = 0.0
    effects: EffectManager = field(default_factory=EffectManager)
    elapsed: float = 0.0

    def snapshot(self) -> "RunResult":
        return RunResult(score=self.score, coins=self.coins)


@dataclass(frozen=True)
class RunResult:
    """What the Lost scene receives. Immutable once handed over."""
    score: int
    coins: int
