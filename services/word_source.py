# services/word_source.py
from __future__ import annotations
from typing import List, Optional, Sequence
import logging
import random
import re

import requests

from app.config import settings
from app.errors import WordSourceError

logger = logging.getLogger(__name__)

WORD_POOL = (
    "practice", "makes", "progress", "speed", "accuracy", "focus", "consistency", "typing", "keyboard",
    "muscle", "memory", "ideas", "flow", "steady", "mindful", "improve", "gradual", "challenge", "repeat",
    "growth", "learn", "effort", "habit", "routine", "small", "steps", "big", "results", "soft", "control",
    "rhythm", "tempo", "fluid", "clean", "sharp", "precision", "timing", "compose", "sentence", "word",
    "random", "quote", "auto", "append", "infinite", "mode", "stability", "quick", "example", "simple",
    "complex", "modern", "design", "aesthetic", "smooth", "fast", "accurate", "patience", "balance", "calm",
)

QUOTE_FALLBACK_WORDS = 12
MAX_QUOTE_TRIES = 4

_WS = re.compile(r"\s+")


class WordSource:
    """
    Supplies the word list for a session: a few random quotes topped up with
    pool words. fetch() never raises.
    """

    def __init__(
        self,
        pool: Optional[Sequence[str]] = None,
        quote_url: str = settings.QUOTE_URL,
        timeout: float = settings.QUOTE_TIMEOUT,
        fetch_quotes: bool = True,
        rng: Optional[random.Random] = None,
    ):
        self.pool = tuple(pool) if pool else WORD_POOL
        self.quote_url = quote_url
        self.timeout = timeout
        self.fetch_quotes = fetch_quotes
        self.rng = rng or random.Random()

    def random_words(self, n: int) -> List[str]:
        return [self.rng.choice(self.pool) for _ in range(max(0, n))]

    def fetch_quote(self) -> str:
        try:
            res = requests.get(
                self.quote_url,
                params={"minLength": settings.QUOTE_MIN_LENGTH, "maxLength": settings.QUOTE_MAX_LENGTH},
                timeout=self.timeout,
            )
            res.raise_for_status()
            content = res.json()["content"]
        except requests.exceptions.RequestException as e:
            raise WordSourceError(f"quote request failed: {e}") from e
        except (ValueError, KeyError, TypeError) as e:
            raise WordSourceError(f"unexpected quote payload: {e}") from e
        if not isinstance(content, str) or not content.strip():
            raise WordSourceError("empty quote")
        return content.strip()

    def _quote_words(self) -> List[str]:
        try:
            return self.fetch_quote().split()
        except WordSourceError as e:
            logger.warning("Quote unavailable, using pool words: %s", e)
            return self.random_words(QUOTE_FALLBACK_WORDS)

    def build_words(self, n: int) -> List[str]:
        out: List[str] = []
        tries = min(MAX_QUOTE_TRIES, n // 20) if self.fetch_quotes else 0
        for _ in range(tries):
            out.extend(self._quote_words())
        while len(out) < n:
            out.append(self.rng.choice(self.pool))
        return [_WS.sub(" ", w).strip() for w in out[:n]]

    def fetch(self, count: int) -> List[str]:
        try:
            return self.build_words(count)
        except Exception:
            logger.exception("Word source failed, falling back to pool")
            return self.random_words(count)
