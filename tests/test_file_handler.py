"""Tests for utils.file_handler - local word pool loading."""

from services.word_source import WORD_POOL
from utils.file_handler import load_word_pool


def test_missing_file_uses_builtin(tmp_path):
    assert load_word_pool(tmp_path / "nope.txt") == WORD_POOL


def test_reads_words_and_skips_comments(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("# practice list\nalpha\n\n beta gamma \n", encoding="utf-8")
    assert load_word_pool(path) == ("alpha", "beta", "gamma")


def test_empty_file_uses_builtin(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("\n# only comments\n", encoding="utf-8")
    assert load_word_pool(path) == WORD_POOL
