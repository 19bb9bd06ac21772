from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Protocol

from .models import Language

LOGGER = logging.getLogger(__name__)

STRINGS: Dict[Language, Dict[str, str]] = {
    Language.ENGLISH: {
        "AppTitle": "Clock Exerciser",
        "LanguageLabel": "Language",
        "ModeLabel": "Game mode",
        "DifficultyLabel": "Difficulty",
        "ModeClockToTime": "Read the clock",
        "ModeTimeToClock": "Set the clock",
        "ModeRandom": "Random",
        "DifficultyBeginner": "Beginner (unlimited tries)",
        "DifficultyNormal": "Normal (5 mistakes allowed)",
        "DifficultyAdvanced": "Advanced (3 mistakes allowed)",
        "ClockToTimeInstruction": "Write down in words what time the clock shows:",
        "TimeToClockInstruction": "Set the hands of the clock to:",
        "EntryPlaceholder": "e.g. quarter past three",
        "HourLabel": "Hour hand",
        "MinuteLabel": "Minute hand",
        "SubmitAnswer": "Check answer",
        "NextChallenge": "Next",
        "NewGame": "New game",
        "ResultCorrect": "Correct!",
        "ResultIncorrect": "Not quite, try again.",
        "ScoreLabel": "Score",
        "HighScoreLabel": "High score",
        "WrongAnswersLabel": "Mistakes",
        "GameOver": "Game over!",
        "CorrectAnswerWas": "The correct time was",
    },
    Language.DUTCH: {
        "AppTitle": "Klokoefenaar",
        "LanguageLabel": "Taal",
        "ModeLabel": "Spelvorm",
        "DifficultyLabel": "Moeilijkheid",
        "ModeClockToTime": "Klok lezen",
        "ModeTimeToClock": "Klok zetten",
        "ModeRandom": "Willekeurig",
        "DifficultyBeginner": "Beginner (onbeperkt proberen)",
        "DifficultyNormal": "Normaal (5 fouten toegestaan)",
        "DifficultyAdvanced": "Gevorderd (3 fouten toegestaan)",
        "ClockToTimeInstruction": "Schrijf in woorden hoe laat de klok aangeeft:",
        "TimeToClockInstruction": "Zet de wijzers van de klok op:",
        "EntryPlaceholder": "bijv. kwart over drie",
        "HourLabel": "Uurwijzer",
        "MinuteLabel": "Minutenwijzer",
        "SubmitAnswer": "Controleer",
        "NextChallenge": "Volgende",
        "NewGame": "Nieuw spel",
        "ResultCorrect": "Goed zo!",
        "ResultIncorrect": "Helaas, probeer het nog eens.",
        "ScoreLabel": "Score",
        "HighScoreLabel": "Hoogste score",
        "WrongAnswersLabel": "Fouten",
        "GameOver": "Spel voorbij!",
        "CorrectAnswerWas": "De juiste tijd was",
    },
}


class StringProvider(Protocol):
    def get_string(self, key: str) -> str:
        ...


class LocalizedStrings:
    """Looks up user-facing strings for the current language.

    Unknown keys come back unchanged so a missing translation shows up in the
    UI instead of failing.
    """

    def __init__(self, language: Language, tables: Optional[Mapping[Language, Mapping[str, str]]] = None) -> None:
        self._tables = tables if tables is not None else STRINGS
        self.language = language

    @property
    def language(self) -> Language:
        return self._language

    @language.setter
    def language(self, language: Language) -> None:
        if language not in self._tables:
            raise ValueError(f"No strings for language: {language!r}")
        self._language = language

    def get_string(self, key: str) -> str:
        value = self._tables[self._language].get(key)
        if value is None:
            LOGGER.debug("Missing %s string for key '%s'", self._language.value, key)
            return key
        return value
