# src/tests/effects_unit.py
"""
Power-up countdowns.

Usage (from repo root):
  python -m src.tests.effects_unit
"""
from src.game.effects import EffectKind, EffectManager


def reapply_resets_test():
    m = EffectManager()
    m.activate(EffectKind.DOUBLE_SCORE, 5.0)
    m.activate(EffectKind.DOUBLE_SCORE, 5.0)
    assert m.remaining(EffectKind.DOUBLE_SCORE) == 5.0, "must not stack to 10"

    m.tick(3.0)
    m.activate(EffectKind.DOUBLE_SCORE, 5.0)
    assert m.remaining(EffectKind.DOUBLE_SCORE) == 5.0, "must reset to the full duration"


def expiry_test():
    m = EffectManager()
    m.activate(EffectKind.PHASE, 5.0)
    m.tick(2.5)
    assert m.is_active(EffectKind.PHASE) and m.remaining(EffectKind.PHASE) == 2.5
    m.tick(2.5)
    assert not m.is_active(EffectKind.PHASE), "removed once the countdown hits zero"
    assert m.remaining(EffectKind.PHASE) == 0.0


def kinds_are_independent_test():
    m = EffectManager()
    m.activate(EffectKind.PHASE, 1.0)
    m.activate(EffectKind.DOUBLE_SCORE, 5.0)
    m.tick(1.5)
    assert not m.is_active(EffectKind.PHASE)
    assert m.is_active(EffectKind.DOUBLE_SCORE) and m.remaining(EffectKind.DOUBLE_SCORE) == 3.5
    m.clear()
    assert not m.is_active(EffectKind.DOUBLE_SCORE)


def main():
    reapply_resets_test()
    expiry_test()
    kinds_are_independent_test()
    print("✓ effects unit sanity passed")


if __name__ == "__main__":
    main()
