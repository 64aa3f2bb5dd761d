"""
Feedback utilities for Wordle.

Holds the three-valued letter feedback, its stable integer encoding, and the
pattern simulator that reproduces the game's duplicate-aware scoring.
"""

from __future__ import annotations

import re
from collections import Counter
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

from wordle_engine.errors import InvalidInputError


class LetterFeedback(Enum):
    """Per-position outcome of comparing a guess letter to the answer."""

    ABSENT = "absent"
    PRESENT = "present"
    CORRECT = "correct"

    @property
    def code(self) -> int:
        return _CODE_OF[self]

    @property
    def symbol(self) -> str:
        return _SYMBOL_OF[self]

    @classmethod
    def from_code(cls, code: int) -> "LetterFeedback":
        try:
            return _FEEDBACK_OF[code]
        except (KeyError, TypeError):
            raise InvalidInputError(f"feedback code must be 0, 1 or 2, got {code!r}") from None


# Wire encoding; keep these numbers stable, anything persisted depends on them.
_CODE_OF = {
    LetterFeedback.ABSENT: 0,
    LetterFeedback.PRESENT: 1,
    LetterFeedback.CORRECT: 2,
}
_FEEDBACK_OF = {code: fb for fb, code in _CODE_OF.items()}

_SYMBOL_OF = {
    LetterFeedback.ABSENT: "b",
    LetterFeedback.PRESENT: "y",
    LetterFeedback.CORRECT: "g",
}

Pattern = Tuple[int, ...]


def to_codes(feedback: Iterable) -> Pattern:
    """Coerce a sequence of LetterFeedback members or raw ints into a code tuple."""
    out: List[int] = []
    for item in feedback:
        if isinstance(item, LetterFeedback):
            out.append(item.code)
        elif isinstance(item, bool):
            raise InvalidInputError("feedback elements must be LetterFeedback or ints in {0,1,2}")
        else:
            out.append(LetterFeedback.from_code(item).code)
    return tuple(out)


def simulate_pattern(guess: str, answer: str) -> Pattern:
    """
    Compute the feedback the game shows for `guess` when the answer is `answer`.

    Returns a tuple of codes in {0, 1, 2} with the same length as the inputs:
    - 0 = absent  (letter not present OR over-used relative to answer counts)
    - 1 = present (letter present but in a different position)
    - 2 = correct (letter matches the answer at that position)

    Duplicates follow the two-pass rule: exact matches first consume their
    letters, then the remaining answer letters are handed out left to right.

    Raises
    ------
    TypeError
        If either argument is not a string.
    InvalidInputError
        If the words differ in length.
    """
    if not isinstance(guess, str) or not isinstance(answer, str):
        raise TypeError("guess and answer must be strings")
    if len(guess) != len(answer):
        raise InvalidInputError(
            f"guess and answer must have equal length ({len(guess)} != {len(answer)})"
        )

    pattern = [0] * len(guess)

    # Pass 1: mark correct positions
    for i, (g, a) in enumerate(zip(guess, answer)):
        if g == a:
            pattern[i] = 2

    remaining = Counter(a for i, a in enumerate(answer) if pattern[i] != 2)

    # Pass 2: mark present where counts allow (else absent)
    for i, g in enumerate(guess):
        if pattern[i] == 0 and remaining[g] > 0:
            pattern[i] = 1
            remaining[g] -= 1

    return tuple(pattern)


def pattern_to_int(pattern: Sequence[int]) -> int:
    """
    Encode a pattern (each element in {0,1,2}) into a single base-3 integer.

    For five letters the result lies in [0, 242].
    """
    if not isinstance(pattern, (list, tuple)):
        raise TypeError("pattern must be a list or tuple of integers in {0,1,2}")
    value = 0
    for p in pattern:
        if isinstance(p, bool) or not isinstance(p, int) or p not in (0, 1, 2):
            raise InvalidInputError("pattern elements must be integers in {0,1,2}")
        value = value * 3 + p
    return value


def int_to_pattern(value: int, length: int = 5) -> Pattern:
    """Inverse of `pattern_to_int` for a pattern of `length` positions."""
    if value < 0 or value >= 3 ** length:
        raise InvalidInputError(f"value {value} out of range for a length-{length} pattern")
    out = []
    for _ in range(length):
        value, trit = divmod(value, 3)
        out.append(trit)
    return tuple(reversed(out))


def parse_feedback(s: str, length: int = 5) -> Pattern:
    """Parse a feedback string into a tuple of codes.

    Accepted forms:
      - letters: g/y/b  (green/yellow/black)
      - digits:  2/1/0
      - list:   [0, 1, 2, 2, 0]
    Raises InvalidInputError on invalid input.
    """
    s = s.strip().lower()
    # List-like form: [0,1,2,2,0]
    if s.startswith("[") and s.endswith("]"):
        nums = re.findall(r"[012]", s)
        if len(nums) != length:
            raise InvalidInputError(f"list form must contain exactly {length} 0/1/2 values")
        return tuple(int(x) for x in nums)

    mapping = {}
    for fb, code in _CODE_OF.items():
        mapping[fb.symbol] = code
        mapping[str(code)] = code
    if len(s) != length:
        raise InvalidInputError(f"feedback must be {length} characters (gybgy / 21001 / [0,1,2,2,0])")
    try:
        return tuple(mapping[ch] for ch in s)
    except KeyError as e:
        raise InvalidInputError("feedback must use only g/y/b or 2/1/0") from e


def consistent_with(word: str, guess: str, pattern: Sequence[int]) -> bool:
    """
    Check if `word` (as a hypothetical answer) is consistent with `(guess, pattern)`
    by replaying the game.

    This is the reference the analytic matcher in `constraints` must agree with.
    """
    if len(word) != len(guess):
        return False
    return simulate_pattern(guess, word) == to_codes(pattern)
