# src/tests/pipes_unit.py
"""
Pipe gap generation and the straight-line stage.

Usage (from repo root):
  python -m src.tests.pipes_unit
"""
import math
import random

from src.game.config import Tuning
from src.game.pipes import Obstacle, PipeGen, scroll_pipes
from src.game.session import GameSession


def make_gen(seed: int = 7):
    t = Tuning()
    return t, PipeGen(t, random.Random(seed)), GameSession(speed=t.base_speed)


def gap_invariants_test():
    t, gen, session = make_gen()
    lo, hi = gen.gap_range()
    for _ in range(500):
        pipe, gap = gen.spawn(session)
        assert math.isclose(pipe.gap_bottom - pipe.gap_top, t.gap_size)
        assert lo <= pipe.gap_top <= hi, "gap top outside the normal range"
        assert pipe.top_height >= 0 and pipe.bottom_height >= 0
        total = pipe.top_height + t.gap_size + pipe.bottom_height
        assert math.isclose(total, t.height - t.ground_height)
        assert pipe.x == t.width and pipe.passed is False
        # safe gap carries the ground-height correction
        assert gap.top == pipe.gap_top
        assert math.isclose(gap.bottom, pipe.gap_top + t.gap_size + t.ground_height)


def no_stage_below_threshold_test():
    t, gen, session = make_gen()
    for score in (0, 1, 3, 4, 9, 11, 15):
        session.score = score
        gen.spawn(session)
        assert not session.in_stage, f"stage must not start at score {score}"


def stage_holds_gap_test():
    t, gen, session = make_gen(seed=11)
    session.score = 10
    tops = []
    for i in range(t.stage_duration):
        pipe, _ = gen.spawn(session)
        tops.append(pipe.gap_top)
        if i < t.stage_duration - 1:
            assert session.in_stage and session.stage_counter == i + 1
    assert len(set(tops)) == 1, "stage pipes must share one gap"
    assert not session.in_stage and session.stage_counter == 0

    lo, hi = gen.gap_range()
    assert lo + t.stage_inset <= tops[0] <= hi - t.stage_inset


def stage_does_not_retrigger_on_same_score_test():
    t, gen, session = make_gen(seed=5)
    session.score = 10
    for _ in range(t.stage_duration):
        gen.spawn(session)
    gen.spawn(session)
    assert not session.in_stage, "same milestone must not start a second stage"

    session.score = 20
    pipe, _ = gen.spawn(session)
    assert session.in_stage and session.stage_gap_top == pipe.gap_top


def scroll_culls_offscreen_test():
    t = Tuning()
    a = Obstacle(x=10.0, gap_top=100.0, gap_bottom=250.0, width=t.pipe_w, ground_y=t.ground_y)
    b = Obstacle(x=500.0, gap_top=100.0, gap_bottom=250.0, width=t.pipe_w, ground_y=t.ground_y)
    kept = scroll_pipes([a, b], 200.0)
    assert kept == [b] and b.x == 300.0


def main():
    gap_invariants_test()
    no_stage_below_threshold_test()
    stage_holds_gap_test()
    stage_does_not_retrigger_on_same_score_test()
    scroll_culls_offscreen_test()
    print("✓ pipes unit sanity passed")


if __name__ == "__main__":
    main()
