import pytest

from wordle_engine.errors import InvalidInputError
from wordle_engine.feedback import (
    LetterFeedback,
    consistent_with,
    int_to_pattern,
    parse_feedback,
    pattern_to_int,
    simulate_pattern,
)

WORDS = ["ALLOT", "TOTAL", "ABBEY", "CABIN", "PRESS", "SPREE", "SPEED", "EERIE", "CRANE"]


@pytest.mark.parametrize(
    "guess, answer, expected",
    [
        ("CRANE", "CRANE", (2, 2, 2, 2, 2)),
        ("ALLOT", "TOTAL", (1, 1, 0, 1, 1)),
        ("ABBEY", "CABIN", (1, 0, 2, 0, 0)),
        ("PRESS", "SPREE", (1, 1, 1, 1, 0)),
        ("SPEED", "ABIDE", (0, 0, 1, 0, 1)),
        ("EERIE", "THREE", (1, 0, 2, 0, 2)),
        ("BLOCK", "DRUNK", (0, 0, 0, 0, 2)),
    ],
)
def test_simulate_pattern_known_cases(guess, answer, expected):
    assert simulate_pattern(guess, answer) == expected


def test_simulate_pattern_empty_words():
    assert simulate_pattern("", "") == ()


def test_simulate_pattern_rejects_unequal_lengths():
    with pytest.raises(InvalidInputError):
        simulate_pattern("CRANE", "CRANES")


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        simulate_pattern("AB", "ABC")


def test_correct_marks_equal_exact_matches_and_counts_are_bounded():
    for g in WORDS:
        for a in WORDS:
            patt = simulate_pattern(g, a)
            assert patt.count(2) == sum(1 for x, y in zip(g, a) if x == y)
            for letter in set(g):
                marked = sum(1 for ch, p in zip(g, patt) if ch == letter and p > 0)
                assert marked <= a.count(letter)


def test_feedback_codes_are_fixed():
    assert LetterFeedback.ABSENT.code == 0
    assert LetterFeedback.PRESENT.code == 1
    assert LetterFeedback.CORRECT.code == 2
    assert LetterFeedback.from_code(2) is LetterFeedback.CORRECT
    with pytest.raises(InvalidInputError):
        LetterFeedback.from_code(3)


def test_pattern_int_encoding():
    assert pattern_to_int([2, 2, 2, 2, 2]) == 242
    assert pattern_to_int([0, 0, 0, 0, 0]) == 0
    assert int_to_pattern(pattern_to_int((1, 0, 2, 0, 1))) == (1, 0, 2, 0, 1)
    assert int_to_pattern(5, length=3) == (0, 1, 2)
    with pytest.raises(InvalidInputError):
        pattern_to_int([0, 3, 0, 0, 0])
    with pytest.raises(InvalidInputError):
        int_to_pattern(243)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("gybby", (2, 1, 0, 0, 1)),
        ("21001", (2, 1, 0, 0, 1)),
        ("[2, 1, 0, 0, 1]", (2, 1, 0, 0, 1)),
        ("  GYBBY ", (2, 1, 0, 0, 1)),
    ],
)
def test_parse_feedback_forms(text, expected):
    assert parse_feedback(text) == expected


@pytest.mark.parametrize("text", ["gyb", "gybbx", "[0, 1, 2]", "3xxxx"])
def test_parse_feedback_rejects_bad_input(text):
    with pytest.raises(InvalidInputError):
        parse_feedback(text)


def test_consistent_with_replays_the_game():
    assert consistent_with("TOTAL", "ALLOT", [1, 1, 0, 1, 1])
    assert consistent_with("TOTAL", "ALLOT", [LetterFeedback.PRESENT] * 2 + [LetterFeedback.ABSENT] + [LetterFeedback.PRESENT] * 2)
    assert not consistent_with("ALLOY", "ALLOT", [1, 1, 0, 1, 1])
    assert not consistent_with("CRANES", "ALLOT", [1, 1, 0, 1, 1])


def test_parser_letters_come_from_feedback_symbols():
    text = "".join(fb.symbol for fb in (LetterFeedback.CORRECT, LetterFeedback.PRESENT,
                                        LetterFeedback.ABSENT, LetterFeedback.ABSENT,
                                        LetterFeedback.PRESENT))
    assert text == "gybby"
    assert parse_feedback(text) == (2, 1, 0, 0, 1)
