# src/game/items.py
from __future__ import annotations
import random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

import pygame

from .config import Tuning
from .pipes import SafeGap

if TYPE_CHECKING:
    from .session import GameSession


class ItemKind(Enum):
    COIN = "coin"
    BOOST = "boost"     # double-score power-up
    PHASE = "phase"     # ghost power-up


@dataclass
class Collectible:
    kind: ItemKind
    x: float            # centre
    y: float            # centre
    size: float

    @property
    def rect(self) -> pygame.Rect:
        half = self.size / 2
        return pygame.Rect(int(self.x - half), int(self.y - half), int(self.size), int(self.size))


@dataclass
class PendingSpawn:
    """A timer fired; the item is placed once `delay` runs out."""
    kind: ItemKind
    delay: float


class ItemSpawner:
    """
    Three independent accumulators (coin / boost / phase). A fire that
    passes its chance roll queues a delayed spawn; when the delay is over
    the item is placed inside the gap it is given, shrunk by a margin.
    """
    def __init__(self, tuning: Tuning, rng: random.Random):
        self.tuning = tuning
        self.rng = rng
        t = tuning
        # kind -> (interval, chance, margin, size, x offset)
        self.table = {
            ItemKind.COIN: (t.coin_interval, t.coin_chance, t.coin_margin, t.coin_size, t.coin_spawn_offset),
            ItemKind.BOOST: (t.boost_interval, t.boost_chance, t.item_margin, t.item_size, t.item_spawn_offset),
            ItemKind.PHASE: (t.phase_interval, t.phase_chance, t.item_margin, t.item_size, t.item_spawn_offset),
        }

    def spawn_zone(self, kind: ItemKind, gap: Optional[SafeGap]) -> Optional[Tuple[float, float]]:
        """Vertical range an item may be centred in, or None when it would be empty."""
        if gap is None:
            band = self.tuning.fallback_band
            return band, self.tuning.height - band
        margin = self.table[kind][2]
        start = gap.top + margin
        end = gap.bottom - margin
        if end <= start:
            return None
        return start, end

    def place(self, kind: ItemKind, gap: Optional[SafeGap]) -> Optional[Collectible]:
        zone = self.spawn_zone(kind, gap)
        if zone is None:
            return None
        _, _, _, size, offset = self.table[kind]
        y = self.rng.uniform(*zone)
        return Collectible(kind=kind, x=self.tuning.width + offset, y=y, size=size)

    def _fire_timers(self, session: GameSession, dt: float):
        for kind, (interval, chance, _, _, _) in self.table.items():
            session.item_timers[kind] = session.item_timers.get(kind, 0.0) + dt
            while session.item_timers[kind] >= interval:
                session.item_timers[kind] -= interval
                if chance >= 1.0 or self.rng.random() < chance:
                    session.pending_spawns.append(PendingSpawn(kind, self.tuning.spawn_delay))

    def update(self, session: GameSession, dt: float, gap: Optional[SafeGap]) -> List[Collectible]:
        """Advance the timers by dt and return the items that appear this tick."""
        spawned: List[Collectible] = []
        waiting: List[PendingSpawn] = []
        for pending in session.pending_spawns:
            pending.delay -= dt
            if pending.delay > 0.0:
                waiting.append(pending)
                continue
            item = self.place(pending.kind, gap)
            if item is not None:
                spawned.append(item)
        session.pending_spawns = waiting

        # new fires wait a full delay starting next tick
        self._fire_timers(session, dt)
        return spawned


def scroll_items(items: List[Collectible], dx: float) -> List[Collectible]:
    for item in items:
        item.x -= dx
    return [it for it in items if it.x + it.size / 2 >= 0]
