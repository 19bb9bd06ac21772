import pytest

from clock_exerciser.core.localization import LocalizedStrings
from clock_exerciser.core.models import Challenge, EvaluationResult, GameMode, Language, TimeOfDay
from clock_exerciser.core.parser import parse_time
from clock_exerciser.core.phrases import build_prompt, format_digital, format_phrase, result_message

FIVE_MINUTE_TIMES = [TimeOfDay(hour, minute) for hour in range(24) for minute in range(0, 60, 5)]


@pytest.mark.parametrize("language", list(Language))
def test_phrases_read_back_to_the_same_dial_position(language):
    for time in FIVE_MINUTE_TIMES:
        phrase = format_phrase(time, language)
        parsed = parse_time(language, phrase)
        assert parsed is not None, phrase
        assert (parsed.dial_hour, parsed.minute) == (time.dial_hour, time.minute), phrase


@pytest.mark.parametrize(
    "time, dutch, english",
    [
        (TimeOfDay(0, 0), "twaalf uur", "twelve o'clock"),
        (TimeOfDay(3, 5), "vijf over drie", "five past three"),
        (TimeOfDay(15, 15), "kwart over drie", "quarter past three"),
        (TimeOfDay(15, 20), "tien voor half vier", "twenty past three"),
        (TimeOfDay(16, 30), "half vijf", "half past four"),
        (TimeOfDay(13, 35), "vijf over half twee", "twenty-five to two"),
        (TimeOfDay(23, 45), "kwart voor twaalf", "quarter to twelve"),
        (TimeOfDay(11, 55), "vijf voor twaalf", "five to twelve"),
        (TimeOfDay(12, 30), "half een", "half past twelve"),
    ],
)
def test_format_phrase(time, dutch, english):
    assert format_phrase(time, Language.DUTCH) == dutch
    assert format_phrase(time, Language.ENGLISH) == english


def test_format_phrase_uses_digits_outside_the_vocabulary():
    assert format_phrase(TimeOfDay(3, 7), Language.ENGLISH) == "7 past three"
    assert format_phrase(TimeOfDay(3, 7), Language.DUTCH) == "zeven over drie"


def test_format_digital_pads():
    assert format_digital(TimeOfDay(7, 5)) == "07:05"


def test_build_prompt_uses_localized_instruction():
    strings = LocalizedStrings(Language.DUTCH)
    challenge = Challenge(number=1, target=TimeOfDay(16, 30), mode=GameMode.TIME_TO_CLOCK)

    prompt = build_prompt(challenge, Language.DUTCH, strings)

    assert prompt.instruction == strings.get_string("TimeToClockInstruction")
    assert prompt.digital == "16:30"
    assert prompt.phrase == "half vijf"


def test_build_prompt_rejects_unresolved_mode():
    challenge = Challenge(number=1, target=TimeOfDay(1, 0), mode=GameMode.RANDOM)
    with pytest.raises(ValueError):
        build_prompt(challenge, Language.ENGLISH, LocalizedStrings(Language.ENGLISH))


def test_result_message_appends_explanation():
    strings = LocalizedStrings(Language.ENGLISH)
    target = TimeOfDay(3, 0)
    result = EvaluationResult(
        success=False,
        mode=GameMode.CLOCK_TO_TIME,
        target=target,
        candidate=None,
        hour_matches=False,
        minute_matches=False,
        explanation="could not read 'x' as a time",
    )

    assert result_message(result, strings) == "Not quite, try again. (could not read 'x' as a time)"
    assert result_message(None, strings) == ""


def test_missing_string_falls_back_to_key():
    strings = LocalizedStrings(Language.ENGLISH)
    assert strings.get_string("NoSuchKey") == "NoSuchKey"
