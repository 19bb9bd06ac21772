import pytest

from clock_exerciser.core import engine
from clock_exerciser.core.models import DifficultyLevel, GameMode, Language
from clock_exerciser.core.parser import DutchTimeParser, EnglishTimeParser
from clock_exerciser.core.preferences import InMemoryPreferenceStore


@pytest.fixture()
def dutch():
    return DutchTimeParser()


@pytest.fixture()
def english():
    return EnglishTimeParser()


@pytest.fixture()
def preferences():
    return InMemoryPreferenceStore()


@pytest.fixture()
def make_session(preferences):
    def _make(difficulty=DifficultyLevel.NORMAL, mode=GameMode.CLOCK_TO_TIME, language=Language.ENGLISH, **kwargs):
        kwargs.setdefault("seed", 1234)
        return engine.create_session(
            language=language,
            difficulty=difficulty,
            mode=mode,
            preferences=preferences,
            **kwargs,
        )

    return _make
