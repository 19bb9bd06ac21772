import random

import pytest

from clock_exerciser.core.challenges import generate_target, resolve_mode
from clock_exerciser.core.models import GameMode, TimeOfDay


class ScriptedRandom:
    def __init__(self, *values):
        self.values = list(values)
        self.calls = []

    def randrange(self, start, stop):
        self.calls.append((start, stop))
        return self.values.pop(0)


def test_generate_target_draws_hour_then_minute_slot():
    rng = ScriptedRandom(17, 9)

    assert generate_target(rng) == TimeOfDay(17, 45)
    assert rng.calls == [(0, 24), (0, 12)]


def test_generated_minutes_are_multiples_of_five():
    rng = random.Random(42)
    targets = [generate_target(rng) for _ in range(500)]

    assert all(t.minute % 5 == 0 for t in targets)
    assert {t.hour for t in targets} == set(range(24))
    assert {t.minute for t in targets} == set(range(0, 60, 5))


def test_resolve_mode_keeps_concrete_modes():
    rng = ScriptedRandom()
    assert resolve_mode(GameMode.CLOCK_TO_TIME, rng) == GameMode.CLOCK_TO_TIME
    assert resolve_mode(GameMode.TIME_TO_CLOCK, rng) == GameMode.TIME_TO_CLOCK
    assert rng.calls == []


def test_resolve_random_mode():
    assert resolve_mode(GameMode.RANDOM, ScriptedRandom(0)) == GameMode.CLOCK_TO_TIME
    assert resolve_mode(GameMode.RANDOM, ScriptedRandom(1)) == GameMode.TIME_TO_CLOCK


def test_resolve_mode_rejects_unknown_values():
    with pytest.raises(ValueError):
        resolve_mode("sideways", ScriptedRandom())
