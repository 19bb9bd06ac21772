"""
Game session state machine.

A session is in exactly one of three phases. Answers are only accepted while
AWAITING_ANSWER; during evaluation the phase is EVALUATING so a nested
submission is refused, and once the mistake budget of the difficulty level
is spent the session stays in GAME_OVER until :func:`reset_game`.

All commands are synchronous. Commands that are not allowed in the current
phase return None instead of raising.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, Dict, Optional

from .challenges import generate_target, resolve_mode
from .evaluator import evaluate_hands, evaluate_text
from .localization import StringProvider
from .models import (
    AnswerRecord,
    Challenge,
    DifficultyLevel,
    EvaluationResult,
    GameMode,
    GameSession,
    Language,
    SessionPhase,
    TimeOfDay,
)
from .parser import get_parser
from .phrases import Prompt, build_prompt
from .preferences import DEFAULT_DIFFICULTY, PreferenceStore, coerce_difficulty

LOGGER = logging.getLogger(__name__)

DEFAULT_LANGUAGE = Language.ENGLISH
DEFAULT_MODE = GameMode.CLOCK_TO_TIME

# None means the game never ends.
MAX_WRONG_ANSWERS: Dict[DifficultyLevel, Optional[int]] = {
    DifficultyLevel.BEGINNER: None,
    DifficultyLevel.NORMAL: 5,
    DifficultyLevel.ADVANCED: 3,
}


def max_wrong_answers(difficulty: DifficultyLevel) -> Optional[int]:
    try:
        return MAX_WRONG_ANSWERS[difficulty]
    except KeyError:
        raise ValueError(f"Unknown difficulty level: {difficulty!r}") from None


def create_session(
    language: Language = DEFAULT_LANGUAGE,
    difficulty: Optional[DifficultyLevel] = None,
    mode: GameMode = DEFAULT_MODE,
    preferences: Optional[PreferenceStore] = None,
    seed: Optional[int] = None,
    diagnostics: bool = False,
) -> GameSession:
    """Create a session and issue its first challenge.

    Difficulty and high score come from ``preferences`` when given.
    """
    get_parser(language)
    if difficulty is None:
        difficulty = preferences.get_difficulty() if preferences is not None else DEFAULT_DIFFICULTY

    session = GameSession(
        language=language,
        difficulty=coerce_difficulty(difficulty),
        requested_mode=GameMode(mode),
        diagnostics=diagnostics,
        preferences=preferences,
    )
    if preferences is not None:
        session.high_score = preferences.get_high_score()
    reset_game(session, seed=seed)
    return session


def reset_game(session: GameSession, seed: Optional[int] = None) -> Challenge:
    max_wrong_answers(session.difficulty)

    session.correct_answers = 0
    session.wrong_answers = 0
    session.challenges_issued = 0
    session.history.clear()
    session.current_challenge = None
    if seed is None:
        seed = time.time_ns()
    session.rng_seed = seed
    session.rng = random.Random(seed)
    session.phase = SessionPhase.AWAITING_ANSWER
    return _issue_challenge(session)


def effective_score(session: GameSession) -> int:
    if max_wrong_answers(session.difficulty) is None:
        return max(0, session.correct_answers - session.wrong_answers)
    return session.correct_answers


def is_game_over(session: GameSession) -> bool:
    limit = max_wrong_answers(session.difficulty)
    return limit is not None and session.wrong_answers >= limit


def remaining_mistakes(session: GameSession) -> Optional[int]:
    limit = max_wrong_answers(session.difficulty)
    if limit is None:
        return None
    return max(0, limit - session.wrong_answers)


def next_challenge(session: GameSession) -> Optional[Challenge]:
    """Skip to a new challenge, e.g. after a wrong answer."""
    if session.phase != SessionPhase.AWAITING_ANSWER:
        LOGGER.debug("Not issuing a challenge in phase %s", session.phase.value)
        return None
    return _issue_challenge(session)


def switch_mode(session: GameSession, mode: GameMode) -> Optional[Challenge]:
    mode = GameMode(mode)
    if session.phase != SessionPhase.AWAITING_ANSWER:
        LOGGER.debug("Ignoring switch to %s in phase %s", mode.value, session.phase.value)
        return None
    session.requested_mode = mode
    return _issue_challenge(session)


def change_difficulty(session: GameSession, difficulty: DifficultyLevel) -> Challenge:
    """Store the new difficulty and start over with it."""
    session.difficulty = coerce_difficulty(difficulty)
    if session.preferences is not None:
        session.preferences.set_difficulty(session.difficulty)
    return reset_game(session)


def set_language(session: GameSession, language: Language) -> None:
    get_parser(language)
    session.language = language


def submit_text_answer(session: GameSession, text: str) -> Optional[EvaluationResult]:
    """Evaluate a written answer to a CLOCK_TO_TIME challenge."""
    return _submit(
        session,
        GameMode.CLOCK_TO_TIME,
        text,
        lambda target: evaluate_text(text, target, session.language, diagnostics=session.diagnostics),
    )


def submit_hand_answer(
    session: GameSession,
    hour_position: float,
    minute_position: float,
) -> Optional[EvaluationResult]:
    """Evaluate hand positions for a TIME_TO_CLOCK challenge."""
    return _submit(
        session,
        GameMode.TIME_TO_CLOCK,
        f"hour={hour_position:g} minute={minute_position:g}",
        lambda target: evaluate_hands(hour_position, minute_position, target, diagnostics=session.diagnostics),
    )


def describe_challenge(session: GameSession, strings: StringProvider) -> Optional[Prompt]:
    if session.current_challenge is None:
        return None
    return build_prompt(session.current_challenge, session.language, strings)


def _issue_challenge(session: GameSession) -> Challenge:
    rng = session.rng or random.Random(session.rng_seed)
    session.rng = rng

    mode = resolve_mode(session.requested_mode, rng)
    target = generate_target(rng)
    session.challenges_issued += 1
    challenge = Challenge(number=session.challenges_issued, target=target, mode=mode)
    session.current_challenge = challenge
    LOGGER.debug("Challenge %s: %s (%s)", challenge.number, target, mode.value)
    return challenge


def _submit(
    session: GameSession,
    expected_mode: GameMode,
    answer: str,
    evaluate: Callable[[TimeOfDay], EvaluationResult],
) -> Optional[EvaluationResult]:
    if session.phase != SessionPhase.AWAITING_ANSWER:
        LOGGER.debug("Rejecting answer %r in phase %s", answer, session.phase.value)
        return None

    challenge = session.current_challenge
    if challenge is None or challenge.mode != expected_mode:
        LOGGER.debug("Rejecting %s answer for the current challenge", expected_mode.value)
        return None

    session.phase = SessionPhase.EVALUATING
    try:
        result = evaluate(challenge.target)
    except Exception:
        session.phase = SessionPhase.AWAITING_ANSWER
        raise

    session.history.append(AnswerRecord(challenge=challenge, answer=answer, result=result))
    if result.explanation:
        LOGGER.debug(result.explanation)

    if result.success:
        session.correct_answers += 1
        _update_high_score(session)
        session.phase = SessionPhase.AWAITING_ANSWER
        _issue_challenge(session)
        return result

    session.wrong_answers += 1
    if is_game_over(session):
        session.phase = SessionPhase.GAME_OVER
        LOGGER.info(
            "Game over after %s mistakes (%s correct, difficulty %s).",
            session.wrong_answers,
            session.correct_answers,
            session.difficulty.value,
        )
    else:
        session.phase = SessionPhase.AWAITING_ANSWER
    return result


def _update_high_score(session: GameSession) -> None:
    score = effective_score(session)
    if score <= session.high_score:
        return
    session.high_score = score
    if session.preferences is not None:
        session.preferences.set_high_score(score)
    LOGGER.info("New high score: %s", score)
