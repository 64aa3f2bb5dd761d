import logging

import pytest

from wordle_engine.feedback import simulate_pattern
from wordle_engine.suggest import FALLBACK_WORDS, possible_count, suggest
from wordle_engine.vocab import DictionaryEntry

WORDS = [
    "CRANE", "SLATE", "AUDIO", "BLAST", "SHALT", "TRACE", "GRAPE", "PLANT",
    "ROBOT", "MOUSE", "LEMON", "PIANO", "QUEEN", "FIGHT", "WORLD", "CHAIR",
]


@pytest.fixture
def dictionary():
    return [DictionaryEntry(i, w.lower()) for i, w in enumerate(WORDS)]


def test_empty_dictionary_falls_back():
    result = suggest([], [])
    assert result.words == FALLBACK_WORDS
    assert result.possible_count == 0
    assert result.is_fallback
    assert len(FALLBACK_WORDS) == 5


def test_small_dictionary_is_returned_unscored():
    result = suggest(["CRANE", "SLATE", "AUDIO"], [])
    assert result.words == ("CRANE", "SLATE", "AUDIO")
    assert result.possible_count == 3
    assert result.scored == ()


def test_single_candidate(dictionary):
    # all-absent on CRANE leaves only FIGHT in this pool
    history = [("CRANE", simulate_pattern("CRANE", "FIGHT"))]
    result = suggest(dictionary, history)
    assert result.words == ("FIGHT",)
    assert result.possible_count == 1


def test_unsatisfiable_history_falls_back(dictionary, caplog):
    history = [("CRANE", [2, 2, 2, 2, 2]), ("SLATE", [2, 2, 2, 2, 2])]
    with caplog.at_level(logging.INFO, logger="wordle_engine.suggest"):
        result = suggest(dictionary, history)
    assert result.words == FALLBACK_WORDS
    assert result.possible_count == 0
    assert "No possible words found" in caplog.text
    assert "Guess 2: SLATE" in caplog.text


def test_large_candidate_set_is_scored_and_capped(dictionary):
    result = suggest(dictionary, [])
    assert result.possible_count == len(WORDS)
    assert len(result.words) == 10
    assert set(result.words) <= set(WORDS)
    scores = [s.score for s in result.scored]
    assert scores == sorted(scores, reverse=True)
    assert [s.word for s in result.scored] == list(result.words)


def test_top_n_and_threshold_are_configurable(dictionary):
    result = suggest(dictionary, [], top_n=3)
    assert len(result.words) == 3
    result = suggest(dictionary, [], small_set_threshold=len(WORDS))
    assert result.words == tuple(WORDS)
    assert result.scored == ()


def test_suggestions_stay_within_candidates(dictionary):
    history = [("QUEEN", simulate_pattern("QUEEN", "SHALT"))]
    result = suggest(dictionary, history)
    for word in result.words:
        assert simulate_pattern("QUEEN", word) == simulate_pattern("QUEEN", "SHALT")
    assert result.possible_count == possible_count(dictionary, history)


def test_non_conforming_entries_do_not_count(dictionary):
    dictionary = dictionary + [DictionaryEntry(99, "CRANES"), DictionaryEntry(100, "cr4ne")]
    assert possible_count(dictionary) == len(WORDS)
