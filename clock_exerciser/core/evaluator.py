from __future__ import annotations

import logging
import math
from typing import Optional

from .models import EvaluationResult, GameMode, Language, TimeOfDay
from .parser import parse_time

LOGGER = logging.getLogger(__name__)

MINUTE_TOLERANCE = 1


def normalize_hour(hour: int) -> int:
    """Map an hour onto 12-23 so that 0 and 12 compare equal."""
    return hour % 12 + 12


def round_position(value: float) -> int:
    """Round a dial position to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


def hours_match(candidate: TimeOfDay, target: TimeOfDay) -> bool:
    return normalize_hour(candidate.hour) == normalize_hour(target.hour)


def minutes_match(candidate: TimeOfDay, target: TimeOfDay) -> bool:
    # no wraparound across the hour boundary
    return abs(candidate.minute - target.minute) <= MINUTE_TOLERANCE


def matches(candidate: TimeOfDay, target: TimeOfDay) -> bool:
    return hours_match(candidate, target) and minutes_match(candidate, target)


def _explain(candidate: TimeOfDay, target: TimeOfDay, hour_ok: bool, minute_ok: bool) -> str:
    failed = []
    if not hour_ok:
        failed.append(f"hour {candidate.dial_hour} != {target.dial_hour}")
    if not minute_ok:
        failed.append(f"minute off by {abs(candidate.minute - target.minute)}")
    verdict = "; ".join(failed) if failed else "all checks passed"
    return f"answer {candidate} vs target {target}: {verdict}"


def compare(
    candidate: Optional[TimeOfDay],
    target: TimeOfDay,
    mode: GameMode,
    diagnostics: bool = False,
    unparsed: Optional[str] = None,
) -> EvaluationResult:
    if candidate is None:
        explanation = f"could not read {unparsed!r} as a time" if diagnostics else None
        return EvaluationResult(
            success=False,
            mode=mode,
            target=target,
            candidate=None,
            hour_matches=False,
            minute_matches=False,
            explanation=explanation,
        )

    hour_ok = hours_match(candidate, target)
    minute_ok = minutes_match(candidate, target)
    return EvaluationResult(
        success=hour_ok and minute_ok,
        mode=mode,
        target=target,
        candidate=candidate,
        hour_matches=hour_ok,
        minute_matches=minute_ok,
        explanation=_explain(candidate, target, hour_ok, minute_ok) if diagnostics else None,
    )


def evaluate_text(text: str, target: TimeOfDay, language: Language, diagnostics: bool = False) -> EvaluationResult:
    """Judge a typed (or transcribed) phrase against the target time."""
    candidate = parse_time(language, text)
    return compare(candidate, target, GameMode.CLOCK_TO_TIME, diagnostics=diagnostics, unparsed=text)


def evaluate_hands(
    hour_position: float,
    minute_position: float,
    target: TimeOfDay,
    diagnostics: bool = False,
) -> EvaluationResult:
    """Judge hand positions on the dial: hour in 0-12, minute in 0-60."""
    if not (math.isfinite(hour_position) and math.isfinite(minute_position)):
        LOGGER.debug("Ignoring non-finite hand positions %r/%r", hour_position, minute_position)
        return compare(
            None,
            target,
            GameMode.TIME_TO_CLOCK,
            diagnostics=diagnostics,
            unparsed=f"{hour_position}/{minute_position}",
        )

    candidate = TimeOfDay(
        hour=round_position(hour_position) % 12,
        minute=round_position(minute_position) % 60,
    )
    return compare(candidate, target, GameMode.TIME_TO_CLOCK, diagnostics=diagnostics)
