from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Protocol

from .models import DifficultyLevel, Language

LOGGER = logging.getLogger(__name__)

PREFERENCES_FILENAME = "preferences.json"
PREFERENCES_VERSION = 1
DEFAULT_DIFFICULTY = DifficultyLevel.NORMAL


class PreferenceStore(Protocol):
    """Values that outlive a single game session."""

    def get_high_score(self) -> int:
        ...

    def set_high_score(self, value: int) -> None:
        ...

    def get_difficulty(self) -> DifficultyLevel:
        ...

    def set_difficulty(self, level: DifficultyLevel) -> None:
        ...

    def get_preferred_locale(self, language: Language) -> str:
        """Voice accent for a language (e.g. "nl-BE"); read by the speech layer, not by the game."""
        ...

    def set_preferred_locale(self, language: Language, locale_code: str) -> None:
        ...


def coerce_difficulty(value: Any) -> DifficultyLevel:
    """Turn a stored value into a DifficultyLevel, refusing anything unknown."""
    if isinstance(value, DifficultyLevel):
        return value
    try:
        return DifficultyLevel(value)
    except ValueError:
        raise ValueError(f"Unknown difficulty level: {value!r}") from None


@dataclass
class InMemoryPreferenceStore:
    high_score: int = 0
    difficulty: DifficultyLevel = DEFAULT_DIFFICULTY
    preferred_locales: Dict[str, str] = field(default_factory=dict)

    def get_high_score(self) -> int:
        return self.high_score

    def set_high_score(self, value: int) -> None:
        if value < 0:
            raise ValueError("High score cannot be negative.")
        self.high_score = value
        self._changed()

    def get_difficulty(self) -> DifficultyLevel:
        return self.difficulty

    def set_difficulty(self, level: DifficultyLevel) -> None:
        self.difficulty = coerce_difficulty(level)
        self._changed()

    def get_preferred_locale(self, language: Language) -> str:
        return self.preferred_locales.get(language.value, language.default_locale)

    def set_preferred_locale(self, language: Language, locale_code: str) -> None:
        self.preferred_locales[language.value] = locale_code
        self._changed()

    def to_json_serializable(self) -> Dict[str, Any]:
        return {
            "version": PREFERENCES_VERSION,
            "high_score": self.high_score,
            "difficulty": self.difficulty.value,
            "preferred_locales": dict(self.preferred_locales),
        }

    def _changed(self) -> None:
        pass


class JsonPreferenceStore(InMemoryPreferenceStore):
    """Preference store backed by a JSON file, rewritten on every change."""

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = path
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return

        try:
            with self.path.open("r", encoding="utf-8") as fh:
                payload = json.load(fh)
            if not isinstance(payload, dict):
                raise ValueError(f"expected a JSON object, found {type(payload).__name__}")
            if payload.get("version") != PREFERENCES_VERSION:
                LOGGER.warning("Ignoring preferences file %s with version %r", self.path, payload.get("version"))
                return
            high_score = max(0, int(payload.get("high_score", 0)))
            locales = payload.get("preferred_locales", {})
            if not isinstance(locales, dict):
                raise ValueError(f"preferred_locales must be an object, found {type(locales).__name__}")
        except (OSError, ValueError, TypeError) as exc:
            LOGGER.warning("Failed to read preferences from %s, using defaults: %s", self.path, exc)
            return

        # an unknown difficulty is refused rather than replaced by the default
        self.difficulty = coerce_difficulty(payload.get("difficulty", DEFAULT_DIFFICULTY.value))
        self.high_score = high_score
        self.preferred_locales = {str(key): str(value) for key, value in locales.items()}
        LOGGER.info("Loaded preferences from %s (high score %s).", self.path, self.high_score)

    def _changed(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as fh:
            json.dump(self.to_json_serializable(), fh, indent=2)
