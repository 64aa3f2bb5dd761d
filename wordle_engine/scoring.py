"""
scoring.py

Rank candidate guesses by a composite of letter heuristics and information gain.

Per word:
- diversity: distinct letters, weighted
- frequency: position of each letter in a common-letter ordering
- balance: closeness to a 2 vowel / 3 consonant split (scaled with word length)
- information gain: normalized entropy of the feedback-pattern partition the
  word induces over the remaining candidates
plus phase bonuses for the opening guess and for the late game.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from multiprocessing import Pool
from typing import Iterable, List, NamedTuple, Optional, Sequence

import numpy as np

from wordle_engine.errors import InvalidInputError
from wordle_engine.feedback import pattern_to_int, simulate_pattern
from wordle_engine.history import GuessLike, guess_count

log = logging.getLogger(__name__)

COMMON_LETTERS = "EAIOTRNSLCUDPMHGBFYWKVXZJQ"
VOWELS = "AEIOU"


@dataclass(frozen=True)
class ScoringWeights:
    """
    Tunable weights of the composite score.

    The defaults are empirical; they reproduce the reference ranking and are
    not derived from anything. Use `dataclasses.replace` to derive variants.
    """

    diversity: float = 2.0
    frequency: float = 0.1
    first_guess_diversity: float = 3.0
    late_entropy: float = 2.0
    confidence_bonus: float = 5.0
    confidence_threshold: int = 50
    late_game_after: int = 3
    entropy_scale: float = 10.0


DEFAULT_WEIGHTS = ScoringWeights()


class ScoredCandidate(NamedTuple):
    word: str
    score: float
    info_gain: float


def _check_word(word: str) -> str:
    if not isinstance(word, str):
        raise TypeError("word must be a string")
    w = word.upper()
    if not w or not (w.isascii() and w.isalpha()):
        raise InvalidInputError(f"word must be alphabetic: {word!r}")
    return w


# ---------------------------
# Component terms
# ---------------------------

def diversity_score(word: str, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    return len(set(_check_word(word))) * weights.diversity


def frequency_score(word: str, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    """Sum of (26 - rank) * weight over the letters; unranked letters add nothing."""
    total = 0.0
    for ch in _check_word(word):
        rank = COMMON_LETTERS.find(ch)
        if rank >= 0:
            total += (26 - rank) * weights.frequency
    return total


def balance_score(word: str) -> float:
    """Reward words near 2 vowels / 3 consonants per five letters; never negative."""
    w = _check_word(word)
    n = len(w)
    vowels = sum(1 for ch in w if ch in VOWELS)
    consonants = n - vowels
    score = n - abs(vowels - 2 * n / 5) - abs(consonants - 3 * n / 5)
    return max(0.0, float(score))


def _pattern_codes(guess: str, candidates: Sequence[str]) -> np.ndarray:
    return np.fromiter(
        (pattern_to_int(simulate_pattern(guess, c)) for c in candidates),
        dtype=np.int64,
        count=len(candidates),
    )


def information_gain(
    word: str,
    candidates: Sequence[str],
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> float:
    """
    Normalized entropy of the feedback partition `word` induces over `candidates`.

    Entropy in bits is divided by log2(#distinct patterns) and scaled by
    `weights.entropy_scale`, so the result lies in [0, scale]. A single
    candidate or a single pattern group yields 0.
    """
    w = _check_word(word)
    if len(candidates) <= 1:
        return 0.0
    _, counts = np.unique(_pattern_codes(w, candidates), return_counts=True)
    if len(counts) <= 1:
        return 0.0
    p = counts / counts.sum()
    entropy = float(-(p * np.log2(p)).sum())
    max_entropy = float(np.log2(len(counts)))
    return min(entropy / max_entropy, 1.0) * weights.entropy_scale


# ---------------------------
# Composite score
# ---------------------------

def _score(
    word: str,
    candidates: Sequence[str],
    n_guesses: int,
    weights: ScoringWeights,
) -> ScoredCandidate:
    w = _check_word(word)
    distinct = len(set(w))

    score = distinct * weights.diversity
    score += frequency_score(w, weights)
    score += balance_score(w)

    gain = information_gain(w, candidates, weights)
    score += gain

    if n_guesses == 0:
        score += distinct * weights.first_guess_diversity
    elif n_guesses >= weights.late_game_after:
        score += gain * weights.late_entropy
        if len(candidates) <= weights.confidence_threshold:
            score += weights.confidence_bonus

    return ScoredCandidate(w, score, gain)


def score_word(
    word: str,
    candidates: Sequence[str],
    history: Iterable[GuessLike] = (),
    weights: Optional[ScoringWeights] = None,
) -> float:
    """Composite score of `word` against the candidate set; higher is better."""
    n_guesses = guess_count(history)
    return _score(word, candidates, n_guesses, weights or DEFAULT_WEIGHTS).score


# Worker-side state for the process pool
_POOL_CANDIDATES: List[str] = []
_POOL_GUESS_COUNT: int = 0
_POOL_WEIGHTS: ScoringWeights = DEFAULT_WEIGHTS


def _init_worker(candidates: List[str], n_guesses: int, weights: ScoringWeights) -> None:
    global _POOL_CANDIDATES, _POOL_GUESS_COUNT, _POOL_WEIGHTS
    _POOL_CANDIDATES = candidates
    _POOL_GUESS_COUNT = n_guesses
    _POOL_WEIGHTS = weights


def _score_in_worker(word: str) -> ScoredCandidate:
    return _score(word, _POOL_CANDIDATES, _POOL_GUESS_COUNT, _POOL_WEIGHTS)


def score_candidates(
    candidates: Sequence[str],
    history: Iterable[GuessLike] = (),
    weights: Optional[ScoringWeights] = None,
    *,
    processes: Optional[int] = None,
    parallel_threshold: int = 500,
) -> List[ScoredCandidate]:
    """
    Score every candidate against the whole candidate set.

    Results come back in candidate order. With `processes > 1` and more than
    `parallel_threshold` candidates, the scoring runs on a process pool.
    """
    weights = weights or DEFAULT_WEIGHTS
    words = [_check_word(c) for c in candidates]
    n_guesses = guess_count(history)

    if processes and processes > 1 and len(words) > parallel_threshold:
        log.debug("scoring %d candidates on %d processes", len(words), processes)
        with Pool(
            processes=processes,
            initializer=_init_worker,
            initargs=(words, n_guesses, weights),
        ) as pool:
            chunksize = max(1, len(words) // (processes * 4))
            return pool.map(_score_in_worker, words, chunksize=chunksize)

    return [_score(w, words, n_guesses, weights) for w in words]


def rank_candidates(
    candidates: Sequence[str],
    history: Iterable[GuessLike] = (),
    weights: Optional[ScoringWeights] = None,
    **kwargs,
) -> List[ScoredCandidate]:
    """Scored candidates, best first; equal scores keep candidate order."""
    rows = score_candidates(candidates, history, weights, **kwargs)
    rows.sort(key=lambda r: r.score, reverse=True)
    if rows:
        log.debug("top candidate %s (score=%.3f, info_gain=%.3f)", *rows[0])
    return rows
