# src/game/collisions.py
"""
Overlap tests and the rules that react to them.

Checks run after everything has moved for the tick:
  - ground / ceiling line        -> terminal
  - pipe segments                -> terminal unless PHASE is active
  - items                        -> picked up (see PICKUP_HANDLERS)
Scoring is separate (award_passes) because it depends only on x.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

import pygame

from .config import Tuning
from .effects import EffectKind
from .items import Collectible, ItemKind
from .pipes import Obstacle
from .player import Player
from .session import GameSession


@dataclass
class CollisionReport:
    death_cause: Optional[str] = None       # "ground" | "ceiling" | "pipe" | None
    picked: List[Collectible] = field(default_factory=list)
    phased_through: int = 0                 # pipe overlaps ignored thanks to PHASE

    @property
    def terminal(self) -> bool:
        return self.death_cause is not None


def out_of_bounds(player: Player, tuning: Tuning) -> Optional[str]:
    if player.y >= tuning.ground_y:
        return "ground"
    if player.y <= tuning.ceiling_y:
        return "ceiling"
    return None


def pipe_overlaps(player_rect: pygame.Rect, pipes: List[Obstacle]) -> int:
    """Number of pipe pairs whose segments touch the player."""
    count = 0
    for pipe in pipes:
        top, bot = pipe.rects()
        if player_rect.colliderect(top) or player_rect.colliderect(bot):
            count += 1
    return count


def split_touched(player_rect: pygame.Rect,
                  items: List[Collectible]) -> Tuple[List[Collectible], List[Collectible]]:
    """Return (touched, untouched)."""
    touched, rest = [], []
    for item in items:
        (touched if player_rect.colliderect(item.rect) else rest).append(item)
    return touched, rest


def check_collisions(player: Player, pipes: List[Obstacle], items: List[Collectible],
                     session: GameSession, tuning: Tuning) -> Tuple[CollisionReport, List[Collectible]]:
    """Evaluate every overlap for this tick. Returns the report and the items left in play."""
    report = CollisionReport()
    report.death_cause = out_of_bounds(player, tuning)

    me = player.rect
    hit = pipe_overlaps(me, pipes)
    if hit:
        if session.effects.is_active(EffectKind.PHASE):
            report.phased_through = hit
        elif report.death_cause is None:
            report.death_cause = "pipe"

    report.picked, remaining = split_touched(me, items)
    return report, remaining


# --- pickups ---

def _collect_coin(session: GameSession, tuning: Tuning) -> str:
    session.coins += 2 if session.effects.is_active(EffectKind.DOUBLE_SCORE) else 1
    return "score"


def _collect_boost(session: GameSession, tuning: Tuning) -> str:
    session.effects.activate(EffectKind.DOUBLE_SCORE, tuning.effect_duration)
    return "score"


def _collect_phase(session: GameSession, tuning: Tuning) -> str:
    session.effects.activate(EffectKind.PHASE, tuning.effect_duration)
    return "score"


PICKUP_HANDLERS: Dict[ItemKind, Callable[[GameSession, Tuning], str]] = {
    ItemKind.COIN: _collect_coin,
    ItemKind.BOOST: _collect_boost,
    ItemKind.PHASE: _collect_phase,
}


def apply_pickups(picked: List[Collectible], session: GameSession, tuning: Tuning) -> List[str]:
    """Run each picked item's handler; returns the sound cues to play."""
    return [PICKUP_HANDLERS[item.kind](session, tuning) for item in picked]


def award_passes(player: Player, pipes: List[Obstacle], session: GameSession) -> int:
    """
    Mark every pipe whose right edge is at/behind the player as passed and
    add one point for each. A pipe is only ever counted once.
    """
    points = 0
    for pipe in pipes:
        if not pipe.passed and pipe.right <= player.x:
            pipe.passed = True
            points += 1
    return points
