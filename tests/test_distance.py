import itertools
import random

import numpy as np
import pytest

from hotcold.distance import DistanceIndexBuilder, build_index, edit_distance
from hotcold.errors import UnknownWordError


def reference_levenshtein(a, b):
    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        curr = [i]
        for j, cb in enumerate(b, 1):
            curr.append(min(prev[j] + 1, curr[j - 1] + 1, prev[j - 1] + (ca != cb)))
        prev = curr
    return prev[-1]


@pytest.mark.parametrize("a,b,expected", [
    ("kitten", "sitting", 3),
    ("flaw", "lawn", 2),
    ("", "abc", 3),
    ("abc", "", 3),
    ("abc", "abc", 0),
    ("cat", "cot", 1),
    ("cat", "dog", 3),
    ("cat", "dot", 2),
    ("café", "cafe", 1),
])
def test_edit_distance_golden(a, b, expected):
    assert edit_distance(a, b) == expected


def test_matrix_matches_reference():
    rng = random.Random(3)
    words = sorted({"".join(rng.choice("abcd") for _ in range(rng.randint(1, 7))) for _ in range(60)})
    idx = build_index(words)
    for a, b in itertools.product(words, repeat=2):
        assert idx.distance(a, b) == reference_levenshtein(a, b)


def test_symmetry_identity_completeness(index):
    m = index.matrix
    n = len(index)
    assert m.shape == (n, n)
    assert np.array_equal(m, m.T)
    assert not np.any(np.diag(m))
    for a, b in itertools.product(index.words, repeat=2):
        assert index.distance(a, b) == index.distance(b, a)


def test_matrix_is_read_only(index):
    with pytest.raises(ValueError):
        index.matrix[0, 1] = 7
    with pytest.raises(ValueError):
        index.row("cat")[0] = 7


def test_builder_is_single_use():
    builder = DistanceIndexBuilder(["a", "b"])
    builder.build()
    with pytest.raises(RuntimeError):
        builder.build()


def test_duplicate_words_rejected():
    with pytest.raises(ValueError):
        DistanceIndexBuilder(["cat", "dog", "cat"])


def test_unknown_word_is_a_lookup_error(index):
    with pytest.raises(UnknownWordError):
        index.distance("cat", "zebra")
    with pytest.raises(KeyError):
        index.index_of("zebra")
    assert "zebra" not in index
    assert "cat" in index


def test_empty_corpus():
    idx = build_index([])
    assert len(idx) == 0
    assert idx.matrix.shape == (0, 0)


def test_order_is_preserved():
    words = ["dot", "cat", "dog"]
    idx = build_index(words)
    assert list(idx) == words
    assert [idx.index_of(w) for w in words] == [0, 1, 2]
    assert idx.distance("dot", "dog") == idx.matrix[0, 2] == 1
