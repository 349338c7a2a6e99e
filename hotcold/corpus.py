"""Word corpus loading."""

import logging
from pathlib import Path
from typing import Iterable, List, Union

logger = logging.getLogger(__name__)


def dedupe(words: Iterable[str]) -> List[str]:
    """Drop repeated words, keeping the first occurrence so order stays stable."""
    seen = set()
    out = []
    for w in words:
        if w not in seen:
            seen.add(w)
            out.append(w)
    return out


def load_words(filepath: Union[str, Path]) -> List[str]:
    """
    Load a word list, one word per line.

    Surrounding whitespace is stripped, blank lines are skipped and duplicates
    are dropped. Raises FileNotFoundError if the file does not exist.
    """
    path = Path(filepath)
    with open(path, 'r', encoding='utf-8') as f:
        raw = [line.strip() for line in f if line.strip()]
    words = dedupe(raw)
    if len(words) != len(raw):
        logger.info("Dropped %d duplicate words from %s", len(raw) - len(words), path)
    logger.info("Loaded %d words from %s", len(words), path)
    return words
