"""
constraints.py

Keeps track of Wordle-style constraints and filters candidate words.

Constraints are derived analytically from recorded feedback (the answer is
unknown, so nothing can be re-simulated) and can be combined across guesses.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

from wordle_engine.history import Guess, GuessLike, as_history
from wordle_engine.vocab import DictionaryEntry, normalize_entries

ALPHABET_SIZE = 26


def _li(c: str) -> int:
    """Map an uppercase letter to 0..25."""
    return ord(c) - 65


def _letter(li: int) -> str:
    return chr(li + 65)


class ConstraintState:
    """
    Accumulated per-letter constraints for words of a fixed length.

    - `pos_allowed[i][a]` is True when letter `a` may sit at position `i`
    - `min_counts[a]` / `max_counts[a]` bound how often letter `a` occurs
    - `satisfiable` drops to False on feedback the game can never produce
    """

    def __init__(self, word_length: int = 5, alphabet_size: int = ALPHABET_SIZE):
        # slot-level allowance: True means the letter is possible in that position
        self.word_length = word_length
        self.alphabet_size = alphabet_size
        self.pos_allowed = [[True] * alphabet_size for _ in range(word_length)]
        self.min_counts = [0] * alphabet_size
        self.max_counts = [word_length] * alphabet_size
        self.satisfiable = True

    @classmethod
    def from_guess(cls, guess: Guess) -> "ConstraintState":
        state = cls(word_length=len(guess))
        state.apply_guess(guess)
        return state

    @classmethod
    def from_history(cls, history: Iterable[GuessLike], word_length: int = 5) -> "ConstraintState":
        state = cls(word_length=word_length)
        for guess in as_history(history):
            state.apply_guess(guess)
        return state

    def apply_guess(self, guess: Guess) -> None:
        """
        Tighten the constraints with one recorded guess.
        - Correct = fix the letter at that slot
        - Present = letter must be included but not in that slot
        - Absent  = not in that slot, and the letter is absent OR capped at
          the number of its Correct/Present marks in this guess
        A guess whose length differs from the state's word length makes the
        state unsatisfiable.
        """
        if len(guess) != self.word_length:
            self.satisfiable = False
            return

        # Pass 1: apply slot-level constraints and collect per-letter stats
        marked = [0] * self.alphabet_size      # number of correct+present marks per letter
        saw_absent = [False] * self.alphabet_size

        for i, (ch, p) in enumerate(zip(guess.word, guess.pattern)):
            li = _li(ch)
            if p == 2:
                for a in range(self.alphabet_size):
                    if a != li:
                        self.pos_allowed[i][a] = False
                marked[li] += 1
            elif p == 1:
                if saw_absent[li]:
                    # the game hands out Present marks left to right, so a
                    # Present after an Absent of the same letter is impossible
                    self.satisfiable = False
                self.pos_allowed[i][li] = False
                marked[li] += 1
            else:
                self.pos_allowed[i][li] = False
                saw_absent[li] = True

        # Pass 2: update global min/max counts
        for li in range(self.alphabet_size):
            k = marked[li]
            if k > self.min_counts[li]:
                self.min_counts[li] = k
            if saw_absent[li] and self.max_counts[li] > k:
                self.max_counts[li] = k

    def allows(self, word: str) -> bool:
        """Return True iff `word` satisfies every accumulated constraint."""
        if not self.satisfiable or len(word) != self.word_length:
            return False
        counts = [0] * self.alphabet_size
        for i, ch in enumerate(word):
            li = _li(ch)
            if not 0 <= li < self.alphabet_size or not self.pos_allowed[i][li]:
                return False
            counts[li] += 1
        for li in range(self.alphabet_size):
            if counts[li] < self.min_counts[li] or counts[li] > self.max_counts[li]:
                return False
        return True

    # ---------- Per-letter views ----------

    def min_required(self, letter: str) -> int:
        return self.min_counts[_li(letter.upper())]

    def max_allowed(self, letter: str) -> Optional[int]:
        """Upper bound for `letter`, or None when feedback never capped it."""
        m = self.max_counts[_li(letter.upper())]
        return None if m >= self.word_length else m

    def forbidden_positions(self, letter: str) -> Set[int]:
        li = _li(letter.upper())
        return {i for i in range(self.word_length) if not self.pos_allowed[i][li]}

    def fixed_letter(self, position: int) -> Optional[str]:
        """The only letter allowed at `position`, if feedback pinned one."""
        allowed = [a for a in range(self.alphabet_size) if self.pos_allowed[position][a]]
        return _letter(allowed[0]) if len(allowed) == 1 else None

    def summary(self) -> Dict[str, Dict[str, object]]:
        """Letters with any non-trivial constraint, keyed by letter."""
        out: Dict[str, Dict[str, object]] = {}
        for li in range(self.alphabet_size):
            letter = _letter(li)
            lo = self.min_counts[li]
            hi = self.max_allowed(letter)
            forbidden = {
                i for i in self.forbidden_positions(letter) if self.fixed_letter(i) is None
            }
            if lo or hi is not None or forbidden:
                out[letter] = {"min": lo, "max": hi, "forbidden": sorted(forbidden)}
        return out


def is_consistent(candidate: str, guess: GuessLike) -> bool:
    """True iff `candidate` could be the answer given one recorded guess."""
    guess = as_history([guess])[0]
    return ConstraintState.from_guess(guess).allows(candidate.upper())


def is_consistent_with_history(candidate: str, history: Iterable[GuessLike]) -> bool:
    """True iff `candidate` is consistent with every guess in `history`."""
    candidate = candidate.upper()
    return all(is_consistent(candidate, guess) for guess in as_history(history))


def filter_candidates(
    dictionary: Iterable,
    history: Iterable[GuessLike],
    word_length: int = 5,
) -> List[DictionaryEntry]:
    """
    Keep only dictionary entries that match *all* guesses in history.

    Entries are normalized first (uppercase, alphabetic, `word_length` letters);
    non-conforming entries are dropped. Dictionary order is preserved.
    """
    entries = normalize_entries(dictionary, word_length=word_length)
    history = as_history(history)
    if not history:
        return list(entries)
    state = ConstraintState.from_history(history, word_length=word_length)
    return [e for e in entries if state.allows(e.word)]
