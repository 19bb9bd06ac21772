"""Turns a time of day into the phrase a speaker would use for it.

This is the inverse of :mod:`parser`: every phrase produced here reads back
through the same-language parser to the same position on the 12-hour dial.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from .localization import StringProvider
from .models import Challenge, EvaluationResult, GameMode, Language, TimeOfDay
from .parser import DutchTimeParser, EnglishTimeParser


def _invert(table: Mapping[str, int]) -> Dict[int, str]:
    # first spelling wins, so "een" beats "één"
    inverted: Dict[int, str] = {}
    for word, value in table.items():
        inverted.setdefault(value, word)
    return inverted


DUTCH_HOURS = _invert(DutchTimeParser.hour_words)
DUTCH_MINUTES = _invert(DutchTimeParser.minute_words)
ENGLISH_HOURS = _invert(EnglishTimeParser.hour_words)
ENGLISH_MINUTES = _invert(EnglishTimeParser.minute_words)
ENGLISH_MINUTES.update({20 + value: f"twenty-{word}" for word, value in EnglishTimeParser.ones.items()})


@dataclass(frozen=True)
class Prompt:
    instruction: str
    digital: str
    phrase: str


def format_digital(time: TimeOfDay) -> str:
    return f"{time.hour:02d}:{time.minute:02d}"


def _dutch_phrase(hour: int, next_hour: int, minute: int) -> str:
    def count(value: int) -> str:
        return DUTCH_MINUTES.get(value, str(value))

    hour_word = DUTCH_HOURS[hour]
    next_word = DUTCH_HOURS[next_hour]
    if minute == 0:
        return f"{hour_word} uur"
    if minute == 15:
        return f"kwart over {hour_word}"
    if minute == 30:
        return f"half {next_word}"
    if minute == 45:
        return f"kwart voor {next_word}"
    if minute < 15:
        return f"{count(minute)} over {hour_word}"
    if minute < 30:
        return f"{count(30 - minute)} voor half {next_word}"
    if minute < 45:
        return f"{count(minute - 30)} over half {next_word}"
    return f"{count(60 - minute)} voor {next_word}"


def _english_phrase(hour: int, next_hour: int, minute: int) -> str:
    def count(value: int) -> str:
        return ENGLISH_MINUTES.get(value, str(value))

    hour_word = ENGLISH_HOURS[hour]
    next_word = ENGLISH_HOURS[next_hour]
    if minute == 0:
        return f"{hour_word} o'clock"
    if minute == 15:
        return f"quarter past {hour_word}"
    if minute == 30:
        return f"half past {hour_word}"
    if minute == 45:
        return f"quarter to {next_word}"
    if minute < 30:
        return f"{count(minute)} past {hour_word}"
    return f"{count(60 - minute)} to {next_word}"


def format_phrase(time: TimeOfDay, language: Language) -> str:
    """Render ``time`` as a friendly 12-hour phrase in ``language``."""
    hour = time.dial_hour
    next_hour = hour % 12 + 1
    if language == Language.DUTCH:
        return _dutch_phrase(hour, next_hour, time.minute)
    if language == Language.ENGLISH:
        return _english_phrase(hour, next_hour, time.minute)
    raise ValueError(f"No phrase formatter for language: {language!r}")


def build_prompt(challenge: Challenge, language: Language, strings: StringProvider) -> Prompt:
    if challenge.mode == GameMode.CLOCK_TO_TIME:
        instruction = strings.get_string("ClockToTimeInstruction")
    elif challenge.mode == GameMode.TIME_TO_CLOCK:
        instruction = strings.get_string("TimeToClockInstruction")
    else:
        raise ValueError(f"Challenge mode must be resolved, got {challenge.mode!r}")
    return Prompt(
        instruction=instruction,
        digital=format_digital(challenge.target),
        phrase=format_phrase(challenge.target, language),
    )


def result_message(result: Optional[EvaluationResult], strings: StringProvider) -> str:
    if result is None:
        return ""
    message = strings.get_string("ResultCorrect" if result.success else "ResultIncorrect")
    if result.explanation:
        message = f"{message} ({result.explanation})"
    return message
