import logging
from typing import Tuple

import pandas as pd

from wordle_engine.vocab import DictionaryEntry, WordVocab

log = logging.getLogger(__name__)


def load_dictionary(csv_path: str, word_length: int = 5) -> Tuple[DictionaryEntry, ...]:
    """
    Load dictionary entries (`id`, `word` columns) from a CSV file.
    Returns an immutable snapshot suitable for passing to `suggest`.
    """
    return WordVocab.from_csv(csv_path, word_length=word_length).entries()


def load_dictionary_or_empty(csv_path: str, word_length: int = 5) -> Tuple[DictionaryEntry, ...]:
    """Like `load_dictionary`, but a failed load yields an empty dictionary."""
    try:
        return load_dictionary(csv_path, word_length=word_length)
    except (OSError, KeyError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        log.warning("could not load dictionary from %s: %r", csv_path, e)
        return ()
