from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from random import Random
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .preferences import PreferenceStore


class Language(str, Enum):
    """Languages with a time-expression parser."""

    DUTCH = "nl"
    ENGLISH = "en"

    @property
    def display_name(self) -> str:
        mapping = {
            Language.DUTCH: "Nederlands",
            Language.ENGLISH: "English",
        }
        return mapping[self]

    @property
    def default_locale(self) -> str:
        mapping = {
            Language.DUTCH: "nl-NL",
            Language.ENGLISH: "en-US",
        }
        return mapping[self]


class GameMode(str, Enum):
    """Available game modes."""

    CLOCK_TO_TIME = "clock_to_time"
    TIME_TO_CLOCK = "time_to_clock"
    RANDOM = "random"

    @property
    def string_key(self) -> str:
        mapping = {
            GameMode.CLOCK_TO_TIME: "ModeClockToTime",
            GameMode.TIME_TO_CLOCK: "ModeTimeToClock",
            GameMode.RANDOM: "ModeRandom",
        }
        return mapping[self]


class DifficultyLevel(str, Enum):
    """Difficulty levels; they only govern when the game ends."""

    BEGINNER = "beginner"
    NORMAL = "normal"
    ADVANCED = "advanced"

    @property
    def string_key(self) -> str:
        mapping = {
            DifficultyLevel.BEGINNER: "DifficultyBeginner",
            DifficultyLevel.NORMAL: "DifficultyNormal",
            DifficultyLevel.ADVANCED: "DifficultyAdvanced",
        }
        return mapping[self]


class SessionPhase(str, Enum):
    AWAITING_ANSWER = "awaiting_answer"
    EVALUATING = "evaluating"
    GAME_OVER = "game_over"


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """An hour (0-23) and minute (0-59) pair."""

    hour: int
    minute: int

    def __post_init__(self) -> None:
        if not 0 <= self.hour <= 23:
            raise ValueError(f"hour out of range: {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"minute out of range: {self.minute}")

    @property
    def dial_hour(self) -> int:
        """Hour as shown on a 12-hour dial (1-12)."""
        return self.hour % 12 or 12

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class Challenge:
    """A target time together with the concrete mode it is asked in."""

    number: int
    target: TimeOfDay
    mode: GameMode


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of comparing a user answer with the target.

    ``explanation`` is only filled in when diagnostics are enabled.
    """

    success: bool
    mode: GameMode
    target: TimeOfDay
    candidate: Optional[TimeOfDay]
    hour_matches: bool
    minute_matches: bool
    explanation: Optional[str] = None


@dataclass(frozen=True)
class AnswerRecord:
    """Stores one evaluated submission."""

    challenge: Challenge
    answer: str
    result: EvaluationResult


@dataclass
class GameSession:
    """Mutable state for one activation of the play screen."""

    language: Language
    difficulty: DifficultyLevel
    requested_mode: GameMode = GameMode.CLOCK_TO_TIME
    phase: SessionPhase = SessionPhase.AWAITING_ANSWER
    current_challenge: Optional[Challenge] = None
    correct_answers: int = 0
    wrong_answers: int = 0
    high_score: int = 0
    challenges_issued: int = 0
    history: List[AnswerRecord] = field(default_factory=list)
    diagnostics: bool = False
    rng_seed: Optional[int] = None
    rng: Optional[Random] = field(default=None, repr=False)
    preferences: Optional["PreferenceStore"] = field(default=None, repr=False)

    @property
    def active_mode(self) -> Optional[GameMode]:
        if self.current_challenge is None:
            return None
        return self.current_challenge.mode

    @property
    def target_time(self) -> Optional[TimeOfDay]:
        if self.current_challenge is None:
            return None
        return self.current_challenge.target

    @property
    def last_result(self) -> Optional[EvaluationResult]:
        if not self.history:
            return None
        return self.history[-1].result
