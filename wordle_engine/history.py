"""
history.py

Recorded guesses and the guess history the engine reads.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple, Union

from wordle_engine.errors import InvalidInputError
from wordle_engine.feedback import LetterFeedback, Pattern, to_codes


@dataclass(frozen=True)
class Guess:
    """
    One confirmed guess: an uppercase word and its per-position feedback.

    `pattern` holds the feedback as codes in {0,1,2}; build instances with
    `Guess.create` to get normalization and validation.
    """

    word: str
    pattern: Pattern

    def __post_init__(self):
        if not isinstance(self.word, str):
            raise TypeError("guess word must be a string")
        if not self.word or not (self.word.isascii() and self.word.isalpha()):
            raise InvalidInputError(f"guess word must be alphabetic: {self.word!r}")
        if not self.word.isupper():
            raise InvalidInputError(f"guess word must be uppercase: {self.word!r}")
        # frozen, so write the normalized tuple through object.__setattr__
        object.__setattr__(self, "pattern", tuple(self.pattern))
        for i, code in enumerate(self.pattern):
            if isinstance(code, bool) or code not in (0, 1, 2):
                raise InvalidInputError(f"pattern[{i}] must be 0, 1 or 2, got {code!r}")
        if len(self.word) != len(self.pattern):
            raise InvalidInputError(
                f"word and feedback lengths differ ({len(self.word)} != {len(self.pattern)})"
            )

    @classmethod
    def create(cls, word: str, feedback: Iterable) -> "Guess":
        if not isinstance(word, str):
            raise TypeError("guess word must be a string")
        return cls(word.upper(), to_codes(feedback))

    @property
    def feedback(self) -> Tuple[LetterFeedback, ...]:
        return tuple(LetterFeedback.from_code(c) for c in self.pattern)

    @property
    def solved(self) -> bool:
        return all(c == 2 for c in self.pattern)

    def __len__(self) -> int:
        return len(self.word)


GuessHistory = Tuple[Guess, ...]
GuessLike = Union[Guess, Tuple[str, Sequence]]


def as_history(guesses: Iterable[GuessLike] | None) -> GuessHistory:
    """
    Snapshot `guesses` as an immutable history.

    Items may be `Guess` instances or `(word, feedback)` pairs, where feedback is
    a sequence of LetterFeedback members or ints.
    """
    if guesses is None:
        return ()
    out = []
    for item in guesses:
        if isinstance(item, Guess):
            out.append(item)
        else:
            word, feedback = item
            out.append(Guess.create(word, feedback))
    return tuple(out)


def guess_count(history: Iterable[GuessLike] | None) -> int:
    """Number of guesses made so far; drives the scoring phase."""
    return len(as_history(history))
