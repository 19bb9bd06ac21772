from __future__ import annotations

import random
from typing import Optional, Protocol

from .models import GameMode, TimeOfDay

MINUTE_STEP = 5
MINUTE_SLOTS = 60 // MINUTE_STEP


class RandomSource(Protocol):
    """The part of :class:`random.Random` the game draws from."""

    def randrange(self, start: int, stop: int) -> int:
        ...


def generate_target(rng: Optional[RandomSource] = None) -> TimeOfDay:
    """Draw a target time: any hour, minutes on a 5-minute boundary."""
    rng = rng or random.Random()
    hour = rng.randrange(0, 24)
    minute = rng.randrange(0, MINUTE_SLOTS) * MINUTE_STEP
    return TimeOfDay(hour=hour, minute=minute)


def resolve_mode(mode: GameMode, rng: Optional[RandomSource] = None) -> GameMode:
    """Pick a concrete mode; RANDOM flips a coin on every call."""
    if mode in (GameMode.CLOCK_TO_TIME, GameMode.TIME_TO_CLOCK):
        return mode
    if mode == GameMode.RANDOM:
        rng = rng or random.Random()
        return GameMode.CLOCK_TO_TIME if rng.randrange(0, 2) == 0 else GameMode.TIME_TO_CLOCK
    raise ValueError(f"Unknown game mode: {mode!r}")
