"""
suggest.py

Pick the next guesses: filter the dictionary against the history, then rank
what survives.

Outcomes by candidate count:
- empty dictionary or 0 candidates -> FALLBACK_WORDS, count 0
- 1 candidate                     -> that word alone
- <= small_set_threshold           -> all of them, unscored, in dictionary order
- otherwise                       -> top_n by composite score (stable on ties)
"""

from __future__ import annotations

import logging
from typing import Iterable, NamedTuple, Optional, Tuple

from wordle_engine.constraints import filter_candidates
from wordle_engine.history import GuessLike, as_history
from wordle_engine.scoring import ScoredCandidate, ScoringWeights, rank_candidates
from wordle_engine.vocab import normalize_entries

log = logging.getLogger(__name__)

# Strong openers returned whenever no exact suggestion exists.
FALLBACK_WORDS: Tuple[str, ...] = ("SLATE", "CRANE", "AUDIO", "ARISE", "OUTER")


class Suggestion(NamedTuple):
    words: Tuple[str, ...]
    possible_count: int
    scored: Tuple[ScoredCandidate, ...] = ()

    @property
    def is_fallback(self) -> bool:
        return self.possible_count == 0


def _log_empty(history, dictionary, word_length: int) -> None:
    log.info("No possible words found. Guess history:")
    for i, guess in enumerate(history, start=1):
        log.info("  Guess %d: %s -> %s", i, guess.word, list(guess.pattern))
    sample = [e.word for e in normalize_entries(dictionary, word_length)[:10]]
    log.info("Sample %d-letter words in dictionary: %s", word_length, sample)


def suggest(
    dictionary: Iterable,
    history: Iterable[GuessLike] = (),
    *,
    word_length: int = 5,
    top_n: int = 10,
    small_set_threshold: int = 10,
    weights: Optional[ScoringWeights] = None,
    processes: Optional[int] = None,
) -> Suggestion:
    """
    Rank next guesses for `history` over `dictionary`.

    Parameters
    ----------
    dictionary : iterable
        DictionaryEntry values, `(id, word)` pairs or bare words. Treated as a
        snapshot; it is read once.
    history : iterable
        Guess values or `(word, feedback)` pairs.
    top_n : int, default=10
        Number of scored suggestions to return.
    small_set_threshold : int, default=10
        Candidate sets this small are returned whole without scoring.
    processes : int | None
        Worker processes for scoring large candidate sets.

    Never raises for empty dictionaries or unsatisfiable histories.
    """
    dictionary = tuple(dictionary)
    history = as_history(history)
    log.info("Total words in dictionary: %d", len(dictionary))

    if not dictionary:
        log.info("Dictionary is empty, returning fallback words")
        return Suggestion(FALLBACK_WORDS, 0)

    candidates = [e.word for e in filter_candidates(dictionary, history, word_length)]
    log.info("Possible words after filtering: %d", len(candidates))

    if not candidates:
        _log_empty(history, dictionary, word_length)
        return Suggestion(FALLBACK_WORDS, 0)

    if len(candidates) == 1:
        return Suggestion((candidates[0],), 1)

    if len(candidates) <= small_set_threshold:
        return Suggestion(tuple(candidates), len(candidates))

    ranked = rank_candidates(candidates, history, weights, processes=processes)[:top_n]
    return Suggestion(tuple(r.word for r in ranked), len(candidates), tuple(ranked))


def possible_count(dictionary: Iterable, history: Iterable[GuessLike] = (), word_length: int = 5) -> int:
    """Number of dictionary words still consistent with `history`."""
    return len(filter_candidates(dictionary, history, word_length))
