"""Tests for services.word_source - quote fetch with local fallback."""

import random
from unittest.mock import MagicMock, patch

import pytest
import requests

from app.errors import WordSourceError
from services.word_source import WORD_POOL, WordSource


def _response(payload=None, status_error=None):
    res = MagicMock()
    res.json.return_value = payload
    if status_error is not None:
        res.raise_for_status.side_effect = status_error
    return res


@pytest.fixture
def source():
    return WordSource(rng=random.Random(7))


class TestFetchQuote:
    def test_returns_content(self, source):
        with patch("services.word_source.requests.get", return_value=_response({"content": " Be brave. "})) as get:
            assert source.fetch_quote() == "Be brave."
        params = get.call_args.kwargs["params"]
        assert params == {"minLength": 40, "maxLength": 120}
        assert get.call_args.kwargs["timeout"] == source.timeout

    def test_connection_error(self, source):
        with patch("services.word_source.requests.get", side_effect=requests.exceptions.ConnectionError("down")):
            with pytest.raises(WordSourceError):
                source.fetch_quote()

    def test_http_error(self, source):
        res = _response(status_error=requests.exceptions.HTTPError("503"))
        with patch("services.word_source.requests.get", return_value=res):
            with pytest.raises(WordSourceError):
                source.fetch_quote()

    def test_missing_content(self, source):
        with patch("services.word_source.requests.get", return_value=_response({"author": "x"})):
            with pytest.raises(WordSourceError):
                source.fetch_quote()

    def test_bad_json(self, source):
        res = _response()
        res.json.side_effect = ValueError("not json")
        with patch("services.word_source.requests.get", return_value=res):
            with pytest.raises(WordSourceError):
                source.fetch_quote()


class TestBuildWords:
    def test_offline_uses_pool_only(self):
        src = WordSource(fetch_quotes=False, rng=random.Random(1))
        with patch("services.word_source.requests.get") as get:
            words = src.build_words(10)
        get.assert_not_called()
        assert len(words) == 10
        assert all(w in WORD_POOL for w in words)

    def test_quotes_first_then_pool(self, source):
        res = _response({"content": "Hello brave  new\tworld"})
        with patch("services.word_source.requests.get", return_value=res) as get:
            words = source.build_words(40)
        # min(4, 40 // 20) quote attempts
        assert get.call_count == 2
        assert words[:8] == ["Hello", "brave", "new", "world"] * 2
        assert len(words) == 40

    def test_small_counts_skip_quotes(self, source):
        with patch("services.word_source.requests.get") as get:
            assert len(source.build_words(19)) == 19
        get.assert_not_called()

    def test_at_most_four_quotes(self, source):
        with patch("services.word_source.requests.get", return_value=_response({"content": "a b"})) as get:
            source.build_words(400)
        assert get.call_count == 4

    def test_failed_quote_uses_pool_words(self, source):
        with patch("services.word_source.requests.get", side_effect=requests.exceptions.Timeout()):
            words = source.build_words(20)
        assert len(words) == 20
        assert all(w in WORD_POOL for w in words)

    def test_custom_pool(self):
        src = WordSource(pool=["alpha", "beta"], fetch_quotes=False)
        assert set(src.build_words(30)) <= {"alpha", "beta"}


class TestFetch:
    def test_fails_open(self, source, monkeypatch):
        def boom(n):
            raise RuntimeError("unexpected")
        monkeypatch.setattr(source, "build_words", boom)
        words = source.fetch(15)
        assert len(words) == 15
        assert all(w in WORD_POOL for w in words)

    def test_returns_requested_count(self):
        src = WordSource(fetch_quotes=False)
        assert len(src.fetch(25)) == 25
