from __future__ import annotations

import logging
from typing import Dict, Iterable, List, NamedTuple, Tuple

import pandas as pd

log = logging.getLogger(__name__)


class DictionaryEntry(NamedTuple):
    """An identifier plus a word, as handed over by the dictionary provider."""

    id: object
    word: str


def normalize_word(word: object, word_length: int = 5) -> str | None:
    """Uppercase `word`, or return None if it is not `word_length` ASCII letters."""
    if not isinstance(word, str):
        return None
    w = word.strip().upper()
    if len(w) != word_length or not (w.isascii() and w.isalpha()):
        return None
    return w


def normalize_entries(dictionary: Iterable, word_length: int = 5) -> Tuple[DictionaryEntry, ...]:
    """
    Normalize raw dictionary items into uppercase DictionaryEntry values.

    Items may be DictionaryEntry values, `(id, word)` pairs or bare strings
    (which get their position as id). Items that are not alphabetic or not
    `word_length` letters long are dropped silently; order is preserved.
    """
    clean: List[DictionaryEntry] = []
    dropped = 0
    for idx, item in enumerate(dictionary):
        if isinstance(item, str):
            ident, raw = idx, item
        else:
            try:
                ident, raw = item
            except (TypeError, ValueError):
                dropped += 1
                continue
        w = normalize_word(raw, word_length)
        if w is None:
            dropped += 1
            continue
        clean.append(DictionaryEntry(ident, w))
    if dropped:
        log.debug("dropped %d non-conforming dictionary entries", dropped)
    return tuple(clean)


class WordVocab:
    def __init__(self, entries: Iterable, word_length: int = 5) -> None:
        self.word_length = word_length
        self._entries: Tuple[DictionaryEntry, ...] = normalize_entries(entries, word_length)
        self._index: Dict[str, int] = {}
        for i, e in enumerate(self._entries):
            # first occurrence wins when duplicates were kept
            self._index.setdefault(e.word, i)

    # ---------- Construction helpers ----------

    @classmethod
    def from_csv(
        cls,
        path: str,
        *,
        id_column: str = "id",
        word_column: str = "word",
        word_length: int = 5,
        dedupe: bool = True,
    ) -> "WordVocab":
        """
        Load a dictionary from a CSV and build a WordVocab.

        Parameters
        ----------
        path : str
            Path to CSV file.
        id_column : str
            Column holding entry identifiers. If it is missing, row numbers are used.
        word_column : str
            Column name containing words.
        word_length : int, default=5
            Required word length.
        dedupe : bool, default=True
            If True, keep the first occurrence of a word and drop later duplicates.

        Raises
        ------
        FileNotFoundError, KeyError
        """
        df = pd.read_csv(path, keep_default_na=False)
        if word_column not in df.columns:
            raise KeyError(f"column '{word_column}' not found in {path}")

        ids = df[id_column].tolist() if id_column in df.columns else list(range(len(df)))
        pairs = list(zip(ids, df[word_column].tolist()))

        if dedupe:
            seen = set()
            unique = []
            for ident, raw in pairs:
                w = normalize_word(raw, word_length)
                if w is None or w in seen:
                    continue
                seen.add(w)
                unique.append((ident, w))
            pairs = unique

        return cls(pairs, word_length=word_length)

    # ---------- Basic protocol ----------

    def __len__(self) -> int:
        """Number of words in the vocabulary."""
        return len(self._entries)

    def entries(self) -> Tuple[DictionaryEntry, ...]:
        """The normalized entries; a tuple so callers get an immutable snapshot."""
        return self._entries

    def words(self) -> List[str]:
        """Return a copy of the word list (to avoid external mutation)."""
        return [e.word for e in self._entries]

    def contains(self, word: str) -> bool:
        """Return True iff `word` exists in the vocabulary (case-insensitive)."""
        return word.upper() in self._index

    def index_of(self, word: str) -> int:
        """Return the index for `word`; raise KeyError if unknown."""
        try:
            return self._index[word.upper()]
        except KeyError:
            raise KeyError(f"unknown word: {word}") from None

    def word_at(self, idx: int) -> str:
        """Return the word at position `idx`; raise IndexError if out of bounds."""
        if idx < 0 or idx >= len(self._entries):
            raise IndexError(f"index out of range: {idx}")
        return self._entries[idx].word
