import pytest

from hotcold.corpus import dedupe, load_words


def test_load_words(tmp_path):
    p = tmp_path / "words.txt"
    p.write_text("cat\n  dog \n\ncat\nCat\ndot\n", encoding="utf-8")
    assert load_words(p) == ["cat", "dog", "Cat", "dot"]


def test_load_words_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_words(tmp_path / "nope.txt")


def test_dedupe_keeps_first_occurrence():
    assert dedupe(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]
