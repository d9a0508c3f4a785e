# src/tests/items_unit.py
"""
Collectible spawner: timers, chance gating, safe-gap placement.

Usage (from repo root):
  python -m src.tests.items_unit
"""
import random

from src.game.config import Tuning
from src.game.items import ItemKind, ItemSpawner, Collectible, scroll_items
from src.game.pipes import SafeGap
from src.game.session import GameSession


def make_spawner(tuning: Tuning = None, seed: int = 1):
    t = tuning or Tuning()
    return t, ItemSpawner(t, random.Random(seed)), GameSession(speed=t.base_speed)


def zone_inset_test():
    t, spawner, _ = make_spawner()
    gap = SafeGap(top=100.0, bottom=400.0)
    assert spawner.spawn_zone(ItemKind.COIN, gap) == (100.0 + t.coin_margin, 400.0 - t.coin_margin)
    assert spawner.spawn_zone(ItemKind.BOOST, gap) == (100.0 + t.item_margin, 400.0 - t.item_margin)

    for kind in ItemKind:
        start, end = spawner.spawn_zone(kind, gap)
        for _ in range(200):
            item = spawner.place(kind, gap)
            assert start <= item.y <= end, "item outside the inset zone"
            assert gap.top < item.y < gap.bottom


def degenerate_zone_test():
    t, spawner, _ = make_spawner()
    # margin exactly half the gap: empty zone
    half = SafeGap(top=100.0, bottom=100.0 + 2 * t.coin_margin)
    assert spawner.spawn_zone(ItemKind.COIN, half) is None
    assert spawner.place(ItemKind.COIN, half) is None


def tiny_gap_never_spawns_test():
    t = Tuning(boost_chance=1.0, phase_chance=1.0)
    _, spawner, session = make_spawner(t)
    tiny = SafeGap(top=200.0, bottom=260.0)
    spawned = []
    for _ in range(60 * 60):  # a minute of ticks, many fire cycles
        spawned += spawner.update(session, 1.0 / 60.0, tiny)
    assert spawned == [], "degenerate zone must never produce an item"


def fallback_band_test():
    t, spawner, _ = make_spawner()
    assert spawner.spawn_zone(ItemKind.COIN, None) == (t.fallback_band, t.height - t.fallback_band)
    for _ in range(100):
        item = spawner.place(ItemKind.PHASE, None)
        assert t.fallback_band <= item.y <= t.height - t.fallback_band


def coin_timer_and_delay_test():
    t = Tuning(boost_chance=0.0, phase_chance=0.0)
    _, spawner, session = make_spawner(t)
    gap = SafeGap(top=100.0, bottom=400.0)
    dt = 0.25
    for _ in range(9):  # 2.25 s: the coin timer fires on the 9th tick
        assert spawner.update(session, dt, gap) == []
    assert len(session.pending_spawns) == 1
    out = spawner.update(session, dt, gap)  # delay elapses
    assert len(out) == 1 and out[0].kind is ItemKind.COIN
    assert out[0].x == t.width + t.coin_spawn_offset
    assert session.pending_spawns == []


def zero_chance_never_fires_test():
    t = Tuning(boost_chance=0.0, phase_chance=0.0)
    _, spawner, session = make_spawner(t)
    kinds = set()
    for _ in range(60 * 30):
        kinds |= {it.kind for it in spawner.update(session, 1.0 / 60.0, None)}
    assert kinds == {ItemKind.COIN}


def scroll_items_test():
    a = Collectible(ItemKind.COIN, x=10.0, y=300.0, size=30.0)
    b = Collectible(ItemKind.BOOST, x=400.0, y=300.0, size=40.0)
    kept = scroll_items([a, b], 100.0)
    assert kept == [b] and b.x == 300.0


def main():
    zone_inset_test()
    degenerate_zone_test()
    tiny_gap_never_spawns_test()
    fallback_band_test()
    coin_timer_and_delay_test()
    zero_chance_never_fires_test()
    scroll_items_test()
    print("✓ items unit sanity passed")


if __name__ == "__main__":
    main()
