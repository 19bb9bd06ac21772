import json

import pytest

from clock_exerciser.core.models import DifficultyLevel, Language
from clock_exerciser.core.preferences import (
    PREFERENCES_VERSION,
    InMemoryPreferenceStore,
    JsonPreferenceStore,
    coerce_difficulty,
)


def test_defaults():
    store = InMemoryPreferenceStore()

    assert store.get_high_score() == 0
    assert store.get_difficulty() == DifficultyLevel.NORMAL
    assert store.get_preferred_locale(Language.DUTCH) == "nl-NL"
    assert store.get_preferred_locale(Language.ENGLISH) == "en-US"


def test_negative_high_score_is_refused():
    with pytest.raises(ValueError):
        InMemoryPreferenceStore().set_high_score(-1)


def test_json_store_round_trip(tmp_path):
    path = tmp_path / "prefs" / "preferences.json"
    store = JsonPreferenceStore(path)
    store.set_high_score(12)
    store.set_difficulty(DifficultyLevel.BEGINNER)
    store.set_preferred_locale(Language.DUTCH, "nl-BE")

    reloaded = JsonPreferenceStore(path)

    assert reloaded.get_high_score() == 12
    assert reloaded.get_difficulty() == DifficultyLevel.BEGINNER
    assert reloaded.get_preferred_locale(Language.DUTCH) == "nl-BE"
    assert json.loads(path.read_text(encoding="utf-8"))["version"] == PREFERENCES_VERSION


def test_json_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "preferences.json"
    path.write_text("{not json", encoding="utf-8")

    store = JsonPreferenceStore(path)

    assert store.get_high_score() == 0


def test_json_store_refuses_unknown_difficulty(tmp_path):
    path = tmp_path / "preferences.json"
    path.write_text(json.dumps({"version": PREFERENCES_VERSION, "difficulty": "expert"}), encoding="utf-8")

    with pytest.raises(ValueError):
        JsonPreferenceStore(path)


def test_coerce_difficulty_accepts_stored_values():
    assert coerce_difficulty("advanced") == DifficultyLevel.ADVANCED
    assert coerce_difficulty(DifficultyLevel.BEGINNER) == DifficultyLevel.BEGINNER


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"version": PREFERENCES_VERSION, "high_score": "lots"},
        {"version": PREFERENCES_VERSION, "high_score": None},
        {"version": PREFERENCES_VERSION, "preferred_locales": ["nl-BE"]},
    ],
)
def test_json_store_falls_back_on_malformed_contents(tmp_path, payload):
    path = tmp_path / "preferences.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    store = JsonPreferenceStore(path)

    assert store.get_high_score() == 0
    assert store.get_difficulty() == DifficultyLevel.NORMAL
    assert store.get_preferred_locale(Language.DUTCH) == "nl-NL"
