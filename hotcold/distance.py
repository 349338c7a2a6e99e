"""
Distance Index
==============

Pairwise Levenshtein distances over a fixed word corpus.

The whole n x n matrix is computed once, in parallel, before any game starts
and is read-only afterwards. Every game and every scoring worker shares the
same array.

Layout:
- Words are encoded as a padded (n, max_len) int32 array of code points plus
  a length vector so numba can work on them.
- matrix[i, j] is the edit distance between corpus word i and corpus word j.
"""

import logging
import time
from typing import Iterator, List, Sequence

import numpy as np
from numba import jit, prange

from .errors import UnknownWordError

logger = logging.getLogger(__name__)


# ============================================================================
# NUMBA-ACCELERATED EDIT DISTANCE
# ============================================================================

@jit(nopython=True, cache=True)
def levenshtein(a: np.ndarray, len_a: int, b: np.ndarray, len_b: int) -> int:
    """
    Edit distance between two encoded words.

    Counts single-character insertions, deletions and substitutions, using
    two rolling rows of the classic dynamic programming table.
    """
    if len_a == 0:
        return len_b
    if len_b == 0:
        return len_a

    prev = np.empty(len_b + 1, dtype=np.int32)
    curr = np.empty(len_b + 1, dtype=np.int32)
    for j in range(len_b + 1):
        prev[j] = j

    for i in range(1, len_a + 1):
        curr[0] = i
        ca = a[i - 1]
        for j in range(1, len_b + 1):
            best = prev[j] + 1              # deletion
            ins = curr[j - 1] + 1           # insertion
            if ins < best:
                best = ins
            sub = prev[j - 1]               # substitution / match
            if ca != b[j - 1]:
                sub += 1
            if sub < best:
                best = sub
            curr[j] = best
        prev, curr = curr, prev

    return prev[len_b]


@jit(nopython=True, parallel=True, cache=True)
def compute_distance_matrix(chars: np.ndarray, lengths: np.ndarray, out: np.ndarray) -> None:
    """
    Fill `out` with the edit distance of every pair of words, in parallel.

    Each outer word computes its upper-triangle row and mirrors it, so no two
    workers ever write the same cell.

    Args:
        chars: shape (n, max_len) array of code points
        lengths: shape (n,) word lengths
        out: shape (n, n) matrix to fill
    """
    n = chars.shape[0]
    for i in prange(n):
        out[i, i] = 0
        for j in range(i + 1, n):
            d = levenshtein(chars[i], lengths[i], chars[j], lengths[j])
            out[i, j] = d
            out[j, i] = d


def encode_words(words: Sequence[str]):
    """Convert words to a padded code-point array and a length vector."""
    max_len = max((len(w) for w in words), default=0)
    chars = np.zeros((len(words), max(max_len, 1)), dtype=np.int32)
    lengths = np.zeros(len(words), dtype=np.int32)
    for i, w in enumerate(words):
        lengths[i] = len(w)
        for j, c in enumerate(w):
            chars[i, j] = ord(c)
    return chars, lengths


def edit_distance(a: str, b: str) -> int:
    """Edit distance between two plain strings."""
    chars, lengths = encode_words([a, b])
    return int(levenshtein(chars[0], lengths[0], chars[1], lengths[1]))


# ============================================================================
# BUILDER / INDEX
# ============================================================================

class DistanceIndex:
    """
    Read-only pairwise distance table over a corpus.

    Only DistanceIndexBuilder creates these; the matrix is flagged
    non-writeable so nothing can mutate it after construction.
    """

    def __init__(self, words: Sequence[str], matrix: np.ndarray):
        self._words = tuple(words)
        self._word_to_idx = {w: i for i, w in enumerate(self._words)}
        matrix.flags.writeable = False
        self._matrix = matrix

    @property
    def words(self) -> tuple:
        return self._words

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word) -> bool:
        return word in self._word_to_idx

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def index_of(self, word: str) -> int:
        """Corpus position of `word`; unknown words are a setup bug."""
        try:
            return self._word_to_idx[word]
        except KeyError:
            raise UnknownWordError(word) from None

    def indices_of(self, words: Sequence[str]) -> np.ndarray:
        return np.array([self.index_of(w) for w in words], dtype=np.int32)

    def words_at(self, indices) -> List[str]:
        return [self._words[i] for i in indices]

    def distance(self, a: str, b: str) -> int:
        return int(self._matrix[self.index_of(a), self.index_of(b)])

    def row(self, word: str) -> np.ndarray:
        """Distances from `word` to every corpus word, in corpus order."""
        return self._matrix[self.index_of(word)]


class DistanceIndexBuilder:
    """
    One-shot builder for a DistanceIndex.

    Args:
        words: the corpus; order is kept and defines matrix positions
    """

    def __init__(self, words: Sequence[str]):
        self.words = list(words)
        if len(set(self.words)) != len(self.words):
            raise ValueError("Corpus contains duplicate words")
        self._built = False

    def build(self) -> DistanceIndex:
        if self._built:
            raise RuntimeError("DistanceIndexBuilder.build() may only be called once")
        self._built = True

        n = len(self.words)
        chars, lengths = encode_words(self.words)
        dtype = np.uint8 if chars.shape[1] < 256 else np.uint16
        matrix = np.zeros((n, n), dtype=dtype)

        logger.info("Computing distance matrix (%d x %d)...", n, n)
        start = time.time()
        if n:
            compute_distance_matrix(chars, lengths, matrix)
        elapsed = time.time() - start
        if elapsed > 0:
            logger.info("Done in %.1fs (%.1fM pairs/sec)", elapsed, n * n / elapsed / 1e6)

        return DistanceIndex(self.words, matrix)


def build_index(words: Sequence[str]) -> DistanceIndex:
    """Shorthand for DistanceIndexBuilder(words).build()."""
    return DistanceIndexBuilder(words).build()
