"""
Free-text time-expression parsers.

Each language gets a parser with a closed vocabulary of number words and an
ordered list of rules. Input is tokenized, then every rule in turn scans the
token stream for a window that matches its pattern; the first rule that
produces a time wins. Several phrasings are lexical subsets of others
("vijf voor half twaalf" contains both "vijf voor ..." and "half twaalf"),
so the order of the rule list is significant.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, List, Optional, Sequence, Tuple, Union

from .models import Language, TimeOfDay

LOGGER = logging.getLogger(__name__)

MINUTES_PER_DIAL = 12 * 60

# Slot markers used inside rule patterns. Any other pattern element is a set
# of literal words.
HOUR = "<hour>"
MINUTE = "<minute>"
CLOCK = "<clock>"

PatternElement = Union[str, FrozenSet[str]]

_DIGITS_RE = re.compile(r"\d{1,2}")
_DIGITAL_RE = re.compile(r"(\d{1,2})[:.](\d{2})")
_TOKEN_TRIM = ",.!?;:\"()"
_APOSTROPHES = str.maketrans({"’": "'", "‘": "'", "`": "'"})


def words(*items: str) -> FrozenSet[str]:
    return frozenset(items)


def on_dial(total_minutes: int) -> TimeOfDay:
    """Wrap a minute offset from 12:00 onto the 12-hour dial (hours 1-12)."""
    total_minutes %= MINUTES_PER_DIAL
    hour, minute = divmod(total_minutes, 60)
    return TimeOfDay(hour=hour or 12, minute=minute)


def tokenize(text: str) -> List[str]:
    cleaned = text.strip().lower().translate(_APOSTROPHES)
    tokens = []
    for raw in cleaned.split():
        token = raw.strip(_TOKEN_TRIM)
        if token:
            tokens.append(token)
    return tokens


def _read_digits(token: str, low: int, high: int) -> Optional[int]:
    if not _DIGITS_RE.fullmatch(token):
        return None
    value = int(token)
    if low <= value <= high:
        return value
    return None


def _read_clock(token: str) -> Optional[TimeOfDay]:
    match = _DIGITAL_RE.fullmatch(token)
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return TimeOfDay(hour=hour, minute=minute)


@dataclass(frozen=True)
class Rule:
    """A pattern of literal word sets and slots, plus how to build the time."""

    name: str
    pattern: Tuple[PatternElement, ...]
    build: Callable[..., Optional[TimeOfDay]]


class TimeExpressionParser(ABC):
    """Base class for the language-specific parsers."""

    language: Language
    hour_words: Dict[str, int] = {}
    minute_words: Dict[str, int] = {}

    def __init__(self) -> None:
        self._rules = self.build_rules()

    @property
    def rules(self) -> Sequence[Rule]:
        return self._rules

    @abstractmethod
    def build_rules(self) -> List[Rule]:
        """Return the rules in priority order."""

    def tokenize(self, text: str) -> List[str]:
        return tokenize(text)

    def parse(self, text: Optional[str]) -> Optional[TimeOfDay]:
        """Return the time described by ``text`` or None if nothing matches."""
        if text is None or not text.strip():
            return None

        tokens = self.tokenize(text)
        for rule in self._rules:
            result = self._apply(rule, tokens)
            if result is not None:
                LOGGER.debug("%s parser: %r matched rule '%s' -> %s", self.language.value, text, rule.name, result)
                return result

        LOGGER.debug("%s parser: no rule matched %r", self.language.value, text)
        return None

    def read_hour(self, token: str) -> Optional[int]:
        value = _read_digits(token, 1, 12)
        if value is not None:
            return value
        return self.hour_words.get(token)

    def read_minute(self, token: str) -> Optional[int]:
        value = _read_digits(token, 0, 59)
        if value is not None:
            return value
        return self.minute_words.get(token)

    def _read_slot(self, slot: str, token: str) -> Optional[object]:
        if slot == HOUR:
            return self.read_hour(token)
        if slot == MINUTE:
            return self.read_minute(token)
        if slot == CLOCK:
            return _read_clock(token)
        raise ValueError(f"Unknown pattern slot: {slot}")

    def _apply(self, rule: Rule, tokens: Sequence[str]) -> Optional[TimeOfDay]:
        width = len(rule.pattern)
        for start in range(len(tokens) - width + 1):
            values = self._match_window(rule.pattern, tokens[start : start + width])
            if values is None:
                continue
            result = rule.build(*values)
            if result is not None:
                return result
        return None

    def _match_window(self, pattern: Sequence[PatternElement], window: Sequence[str]) -> Optional[List[object]]:
        values: List[object] = []
        for element, token in zip(pattern, window):
            if isinstance(element, str):
                value = self._read_slot(element, token)
                if value is None:
                    return None
                values.append(value)
            elif token not in element:
                return None
        return values


def _minutes_before(minutes: int, hour: int) -> Optional[TimeOfDay]:
    if minutes == 0:
        return None
    return on_dial(hour * 60 - minutes)


def _dutch_minute_words() -> Dict[str, int]:
    units = ["een", "twee", "drie", "vier", "vijf", "zes", "zeven", "acht", "negen"]
    table = {word: value for value, word in enumerate(units, start=1)}
    table["één"] = 1
    teens = [
        "tien", "elf", "twaalf", "dertien", "veertien",
        "vijftien", "zestien", "zeventien", "achttien", "negentien",
    ]
    table.update({word: value for value, word in enumerate(teens, start=10)})
    table["twintig"] = 20
    for value, unit in enumerate(units, start=21):
        # tweeëntwintig, drieëntwintig; also accepted without the diaeresis
        joiner = "ën" if unit.endswith("e") else "en"
        table[f"{unit}{joiner}twintig"] = value
        table[f"{unit}entwintig"] = value
    table["dertig"] = 30
    return table


class DutchTimeParser(TimeExpressionParser):
    """Parses phrases such as "kwart over vijf", "half vijf", "tien voor half acht".

    Dutch "half <uur>" points 30 minutes *before* the named hour.
    """

    language = Language.DUTCH
    hour_words = {
        "een": 1, "één": 1, "twee": 2, "drie": 3, "vier": 4,
        "vijf": 5, "zes": 6, "zeven": 7, "acht": 8,
        "negen": 9, "tien": 10, "elf": 11, "twaalf": 12,
    }
    minute_words = _dutch_minute_words()

    def build_rules(self) -> List[Rule]:
        over = words("over", "na")
        voor = words("voor")
        half = words("half")
        kwart = words("kwart")
        return [
            Rule("minutes voor half", (MINUTE, voor, half, HOUR), lambda m, h: on_dial(h * 60 - 30 - m)),
            Rule("minutes over half", (MINUTE, over, half, HOUR), lambda m, h: on_dial(h * 60 - 30 + m)),
            Rule("kwart over", (kwart, over, HOUR), lambda h: on_dial(h * 60 + 15)),
            Rule("kwart voor", (kwart, voor, HOUR), lambda h: on_dial(h * 60 - 15)),
            Rule("half", (half, HOUR), lambda h: on_dial(h * 60 - 30)),
            Rule("minutes over", (MINUTE, over, HOUR), lambda m, h: on_dial(h * 60 + m)),
            Rule("minutes voor", (MINUTE, voor, HOUR), _minutes_before),
            Rule("uur", (HOUR, words("uur")), lambda h: on_dial(h * 60)),
            Rule("digital", (CLOCK,), lambda t: t),
        ]


class EnglishTimeParser(TimeExpressionParser):
    """Parses phrases such as "quarter past three", "ten to four", "half past two"."""

    language = Language.ENGLISH
    hour_words = {
        "one": 1, "two": 2, "three": 3, "four": 4,
        "five": 5, "six": 6, "seven": 7, "eight": 8,
        "nine": 9, "ten": 10, "eleven": 11, "twelve": 12,
    }
    minute_words = {
        "five": 5, "ten": 10, "quarter": 15, "twenty": 20, "twenty-five": 25, "half": 30,
    }
    ones = {word: value for word, value in hour_words.items() if value < 10}

    def tokenize(self, text: str) -> List[str]:
        # "twenty five" is folded into the hyphenated "twenty-five"
        merged: List[str] = []
        for token in tokenize(text):
            if merged and merged[-1] == "twenty" and token in self.ones:
                merged[-1] = f"twenty-{token}"
            else:
                merged.append(token)
        return merged

    def read_minute(self, token: str) -> Optional[int]:
        value = super().read_minute(token)
        if value is not None:
            return value
        tens, sep, unit = token.partition("-")
        if sep and tens == "twenty" and unit in self.ones:
            return 20 + self.ones[unit]
        return None

    def build_rules(self) -> List[Rule]:
        past = words("past", "after")
        to = words("to", "before", "of")
        return [
            Rule("quarter past", (words("quarter"), past, HOUR), lambda h: on_dial(h * 60 + 15)),
            Rule("quarter to", (words("quarter"), to, HOUR), lambda h: on_dial(h * 60 - 15)),
            Rule("half past", (words("half"), past, HOUR), lambda h: on_dial(h * 60 + 30)),
            Rule("half", (words("half"), HOUR), lambda h: on_dial(h * 60 + 30)),
            Rule("minutes past", (MINUTE, past, HOUR), lambda m, h: on_dial(h * 60 + m)),
            Rule("minutes to", (MINUTE, to, HOUR), _minutes_before),
            Rule("o'clock", (HOUR, words("o'clock", "oclock")), lambda h: on_dial(h * 60)),
            Rule("digital", (CLOCK,), lambda t: t),
        ]


_PARSERS: Dict[Language, TimeExpressionParser] = {
    Language.DUTCH: DutchTimeParser(),
    Language.ENGLISH: EnglishTimeParser(),
}


def get_parser(language: Language) -> TimeExpressionParser:
    try:
        return _PARSERS[language]
    except KeyError:
        raise ValueError(f"No time parser for language: {language!r}") from None


def parse_time(language: Language, text: Optional[str]) -> Optional[TimeOfDay]:
    return get_parser(language).parse(text)
