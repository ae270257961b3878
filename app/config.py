# app/config.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Settings:
    PROJECT_NAME: str = "KeyRush"
    LOG_FILE: str = "keyrush.log"
    TICK_MS: int = 100
    WPM_CEILING: int = 2000
    DEFAULT_DURATION: int = 30
    DEFAULT_WORD_COUNT: int = 400
    DURATION_CHOICES: tuple = (15, 30, 60, 120)
    WORD_COUNT_CHOICES: tuple = (10, 25, 50, 100, 400)
    QUOTE_URL: str = "https://api.quotable.io/random"
    QUOTE_TIMEOUT: float = 4.0
    QUOTE_MIN_LENGTH: int = 40
    QUOTE_MAX_LENGTH: int = 120
    PREFERENCES_FILE: Path = Path("data/preferences.json")
    WORD_POOL_FILE: Path = Path("assets/words.txt")


settings = Settings()


class Mode(str, Enum):
    TIME = "time"
    WORDS = "words"


def _positive_int(value, default: int) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        return default
    return n if n > 0 else default


@dataclass(frozen=True)
class SessionConfig:
    mode: Mode = Mode.TIME
    duration: int = settings.DEFAULT_DURATION
    word_count: int = settings.DEFAULT_WORD_COUNT

    @classmethod
    def parse(cls, mode=None, duration=None, word_count=None) -> "SessionConfig":
        """
        Build a config from loosely typed values (combo box text, CLI args).
        Anything missing, non-numeric or non-positive falls back to the default.
        """
        try:
            m = Mode(str(mode).lower()) if mode is not None else Mode.TIME
        except ValueError:
            m = Mode.TIME
        return cls(
            mode=m,
            duration=_positive_int(duration, settings.DEFAULT_DURATION),
            word_count=_positive_int(word_count, settings.DEFAULT_WORD_COUNT),
        )

    def needs_new_text(self, other: "SessionConfig") -> bool:
        return self.mode != other.mode or self.word_count != other.word_count
