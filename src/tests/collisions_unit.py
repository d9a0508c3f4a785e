# src/tests/collisions_unit.py
"""
Collision, pickup and scoring rules, driven through Simulation.step.

Usage (from repo root):
  python -m src.tests.collisions_unit
"""
from src.game.collisions import award_passes
from src.game.effects import EffectKind
from src.game.items import Collectible, ItemKind
from src.game.pipes import Obstacle
from src.game.session import RunResult
from src.game.simulation import Simulation


def make_sim(seed: int = 1) -> Simulation:
    sim = Simulation(seed=seed)
    sim.player.y = 300.0
    sim.player.vy = 0.0
    return sim


def pipe_at(sim: Simulation, x: float, gap_top: float) -> Obstacle:
    t = sim.tuning
    return Obstacle(x=x, gap_top=gap_top, gap_bottom=gap_top + t.gap_size,
                    width=t.pipe_w, ground_y=t.ground_y, ceiling_y=t.ceiling_y)


def pipe_behind(sim: Simulation) -> Obstacle:
    """Right edge one pixel behind the player, gap irrelevant."""
    return pipe_at(sim, sim.player.x - sim.tuning.pipe_w - 1, gap_top=250.0)


def coin_on_player(sim: Simulation, kind: ItemKind = ItemKind.COIN) -> Collectible:
    r = sim.player.rect
    return Collectible(kind, x=r.centerx, y=r.centery, size=30.0)


def passed_is_idempotent_test():
    sim = make_sim()
    pipe = pipe_behind(sim)
    sim.pipes = [pipe]
    tick = sim.step(0.0)
    assert tick.points == 1 and sim.session.score == 1 and pipe.passed
    assert "score" in tick.sounds
    for _ in range(5):
        sim.step(0.0)
    assert sim.session.score == 1, "a passed pipe never scores again"
    assert award_passes(sim.player, sim.pipes, sim.session) == 0


def scoring_uses_post_move_positions_test():
    sim = make_sim()
    # right edge 1px ahead now, behind the player once this tick's scroll is applied
    sim.pipes = [pipe_at(sim, sim.player.x + 1 - sim.tuning.pipe_w, gap_top=250.0)]
    tick = sim.step(1.0 / 60.0)
    assert not tick.lost
    assert tick.points == 1 and sim.session.score == 1


def pipe_hit_without_phase_loses_test():
    sim = make_sim()
    sim.session.score = 3
    sim.session.coins = 2
    sim.pipes = [pipe_at(sim, sim.player.x, gap_top=340.0), pipe_behind(sim)]
    sim.items = [coin_on_player(sim)]
    tick = sim.step(1.0 / 60.0)
    assert tick.lost and tick.death_cause == "pipe"
    assert tick.result == RunResult(score=3, coins=2), "snapshot taken before scoring"
    assert "hit" in tick.sounds
    assert sim.over and not sim.player.alive
    assert not sim.step(1.0 / 60.0).lost, "a finished run ignores further ticks"


def pipe_hit_with_phase_passes_through_test():
    sim = make_sim()
    sim.session.effects.activate(EffectKind.PHASE, sim.tuning.effect_duration)
    sim.pipes = [pipe_at(sim, sim.player.x, gap_top=340.0)]
    tick = sim.step(1.0 / 60.0)
    assert not tick.lost and not sim.over
    assert sim.player.opacity == sim.tuning.ghost_opacity


def ground_and_ceiling_are_terminal_test():
    sim = make_sim()
    sim.player.y = sim.tuning.ground_y
    assert sim.step(0.0).death_cause == "ground"

    sim = make_sim()
    sim.session.effects.activate(EffectKind.PHASE, 5.0)  # phase does not save you here
    sim.player.y = sim.tuning.ceiling_y
    assert sim.step(0.0).death_cause == "ceiling"


def coin_pickup_test():
    sim = make_sim()
    sim.items = [coin_on_player(sim)]
    tick = sim.step(0.0)
    assert sim.session.coins == 1 and sim.items == []
    assert tick.sounds == ["score"]

    sim.session.effects.activate(EffectKind.DOUBLE_SCORE, 5.0)
    sim.items = [coin_on_player(sim)]
    sim.step(0.0)
    assert sim.session.coins == 3, "double score makes a coin worth 2"


def power_up_pickup_test():
    sim = make_sim()
    sim.items = [coin_on_player(sim, ItemKind.BOOST), coin_on_player(sim, ItemKind.PHASE)]
    sim.step(0.0)
    e = sim.session.effects
    assert e.remaining(EffectKind.DOUBLE_SCORE) == sim.tuning.effect_duration
    assert e.remaining(EffectKind.PHASE) == sim.tuning.effect_duration
    assert sim.player.opacity == sim.tuning.ghost_opacity
    assert sim.session.coins == 0


def speed_increase_at_threshold_test():
    sim = make_sim()
    base, inc = sim.tuning.base_speed, sim.tuning.speed_increase
    sim.session.score = 1
    sim.pipes = [pipe_behind(sim)]
    sim.step(0.0)
    assert sim.session.score == 2 and sim.session.speed == base + inc

    sim.pipes.append(pipe_behind(sim))
    sim.step(0.0)
    assert sim.session.score == 3 and sim.session.speed == base + inc, "no bump off-milestone"

    # two pipes in one tick: 4 is a milestone, 5 is not
    sim.pipes += [pipe_behind(sim), pipe_behind(sim)]
    sim.step(0.0)
    assert sim.session.score == 5 and sim.session.speed == base + 2 * inc


def spawn_interval_shrinks_with_speed_test():
    sim = make_sim()
    before = sim.difficulty.pipe_interval(sim.session)
    sim.session.speed *= 2
    assert sim.difficulty.pipe_interval(sim.session) == before / 2


def main():
    passed_is_idempotent_test()
    scoring_uses_post_move_positions_test()
    pipe_hit_without_phase_loses_test()
    pipe_hit_with_phase_passes_through_test()
    ground_and_ceiling_are_terminal_test()
    coin_pickup_test()
    power_up_pickup_test()
    speed_increase_at_threshold_test()
    spawn_interval_shrinks_with_speed_test()
    print("✓ collisions unit sanity passed")


if __name__ == "__main__":
    main()
