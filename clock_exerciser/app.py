from __future__ import annotations

import logging
import os
from pathlib import Path

import streamlit as st

from clock_exerciser.core import engine, phrases
from clock_exerciser.core.localization import LocalizedStrings
from clock_exerciser.core.models import DifficultyLevel, GameMode, GameSession, Language, SessionPhase
from clock_exerciser.core.preferences import PREFERENCES_FILENAME, JsonPreferenceStore

PAGE_TITLE = "Clock Exerciser"

BASE_DIR = Path(__file__).resolve().parent
CACHE_DIR = BASE_DIR / ".cache"
PREFERENCES_PATH = Path(os.environ.get("CLOCK_EXERCISER_PREFS", str(CACHE_DIR / PREFERENCES_FILENAME)))
DIAGNOSTICS = os.environ.get("CLOCK_EXERCISER_DIAGNOSTICS", "0") == "1"

logging.basicConfig(level=logging.DEBUG if DIAGNOSTICS else logging.INFO)


@st.cache_resource
def get_preferences() -> JsonPreferenceStore:
    return JsonPreferenceStore(PREFERENCES_PATH)


def render_sidebar(session: GameSession, strings: LocalizedStrings) -> None:
    language = st.sidebar.radio(
        strings.get_string("LanguageLabel"),
        options=list(Language),
        format_func=lambda lang: lang.display_name,
        index=list(Language).index(session.language),
    )
    if language != session.language:
        engine.set_language(session, language)
        strings.language = language
        st.rerun()

    mode = st.sidebar.radio(
        strings.get_string("ModeLabel"),
        options=list(GameMode),
        format_func=lambda m: strings.get_string(m.string_key),
        index=list(GameMode).index(session.requested_mode),
        disabled=session.phase != SessionPhase.AWAITING_ANSWER,
    )
    if mode != session.requested_mode and engine.switch_mode(session, mode) is not None:
        st.rerun()

    difficulty = st.sidebar.radio(
        strings.get_string("DifficultyLabel"),
        options=list(DifficultyLevel),
        format_func=lambda level: strings.get_string(level.string_key),
        index=list(DifficultyLevel).index(session.difficulty),
    )
    if difficulty != session.difficulty:
        engine.change_difficulty(session, difficulty)
        st.rerun()

    if st.sidebar.button(strings.get_string("NewGame")):
        engine.reset_game(session)
        st.rerun()


def render_scoreboard(session: GameSession, strings: LocalizedStrings) -> None:
    score_col, high_col, wrong_col = st.columns(3)
    score_col.metric(strings.get_string("ScoreLabel"), engine.effective_score(session))
    high_col.metric(strings.get_string("HighScoreLabel"), session.high_score)

    limit = engine.max_wrong_answers(session.difficulty)
    wrong_display = f"{session.wrong_answers}" if limit is None else f"{session.wrong_answers} / {limit}"
    wrong_col.metric(strings.get_string("WrongAnswersLabel"), wrong_display)


def render_feedback(session: GameSession, strings: LocalizedStrings) -> None:
    result = session.last_result
    if result is None:
        return

    message = phrases.result_message(result, strings)
    if result.success:
        st.success(message)
    else:
        st.error(message)


def render_challenge(session: GameSession, strings: LocalizedStrings) -> None:
    prompt = engine.describe_challenge(session, strings)
    challenge = session.current_challenge
    if prompt is None or challenge is None:
        return

    st.markdown(f"**{prompt.instruction}**")

    if challenge.mode == GameMode.CLOCK_TO_TIME:
        st.header(prompt.digital)
        with st.form(key=f"challenge-{challenge.number}"):
            answer = st.text_input(
                prompt.instruction,
                placeholder=strings.get_string("EntryPlaceholder"),
                key=f"answer-{challenge.number}",
                label_visibility="collapsed",
            )
            submitted = st.form_submit_button(strings.get_string("SubmitAnswer"))
        if submitted and answer.strip():
            engine.submit_text_answer(session, answer)
            st.rerun()
    else:
        st.header(prompt.phrase)
        with st.form(key=f"challenge-{challenge.number}"):
            hour = st.slider(strings.get_string("HourLabel"), 0.0, 12.0, 0.0, step=0.5)
            minute = st.slider(strings.get_string("MinuteLabel"), 0, 59, 0)
            submitted = st.form_submit_button(strings.get_string("SubmitAnswer"))
        if submitted:
            engine.submit_hand_answer(session, hour, minute)
            st.rerun()

    if st.button(strings.get_string("NextChallenge")):
        engine.next_challenge(session)
        st.rerun()


def render_game_over(session: GameSession, strings: LocalizedStrings) -> None:
    st.header(strings.get_string("GameOver"))
    target = session.target_time
    if target is not None:
        phrase = phrases.format_phrase(target, session.language)
        st.markdown(f"{strings.get_string('CorrectAnswerWas')}: **{phrase}** ({phrases.format_digital(target)})")

    if st.button(strings.get_string("NewGame"), key="game-over-restart"):
        engine.reset_game(session)
        st.rerun()


def main() -> None:
    st.set_page_config(page_title=PAGE_TITLE)

    preferences = get_preferences()
    if "game_session" not in st.session_state:
        st.session_state.game_session = engine.create_session(
            language=engine.DEFAULT_LANGUAGE,
            preferences=preferences,
            diagnostics=DIAGNOSTICS,
        )

    session: GameSession = st.session_state.game_session
    strings = LocalizedStrings(session.language)
    st.title(strings.get_string("AppTitle"))

    render_sidebar(session, strings)
    render_scoreboard(session, strings)
    render_feedback(session, strings)

    if session.phase == SessionPhase.GAME_OVER:
        render_game_over(session, strings)
        return

    render_challenge(session, strings)


if __name__ == "__main__":
    main()
