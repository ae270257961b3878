from dataclasses import dataclass
from typing import Optional, Sequence
import math

from app.config import Mode, settings
from services.ledger import CharState, Ledger, compare, count_states

MIN_MINUTES = 1.0 / 60.0


@dataclass(frozen=True)
class MetricsSnapshot:
    wpm: int = 0
    accuracy: int = 100
    mistakes: int = 0
    progress_pct: int = 0
    correct_chars: int = 0


def _clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))


def round_half_up(x: float) -> int:
    # halves round up: 12.5 -> 13
    return int(math.floor(x + 0.5))


def wpm_from(correct_chars: int, elapsed_seconds: float) -> int:
    """
    WPM = (correct chars / 5) / minutes, with minutes floored at one second
    so the first sub-second tick cannot blow up.
    """
    minutes = max(elapsed_seconds / 60.0, MIN_MINUTES)
    raw = (correct_chars / 5.0) / minutes
    if not math.isfinite(raw):
        return 0
    return _clamp(round_half_up(raw), 0, settings.WPM_CEILING)


def accuracy_from(correct_chars: int, typed_len: int) -> int:
    if typed_len == 0:
        return 100
    return _clamp(round_half_up(100.0 * correct_chars / typed_len), 0, 100)


def progress_from(mode: Mode, wall_elapsed: float, duration: float, typed_len: int, ledger_len: int) -> int:
    if mode is Mode.WORDS:
        if ledger_len == 0:
            return 100
        pct = 100.0 * typed_len / ledger_len
    else:
        if duration <= 0:
            return 0
        pct = 100.0 * min(duration, max(0.0, wall_elapsed)) / duration
    return _clamp(round_half_up(pct), 0, 100)


def compute(
    elapsed_seconds: float,
    typed: str,
    ledger: Ledger,
    duration: float,
    mode: Mode = Mode.TIME,
    wall_elapsed: Optional[float] = None,
    states: Optional[Sequence[CharState]] = None,
) -> MetricsSnapshot:
    """
    Pure metrics for one update.
    `elapsed_seconds` drives WPM; `wall_elapsed` (defaults to the same value)
    drives time-mode progress. Pass `states` to reuse an existing comparison.
    """
    if states is None:
        states = compare(ledger, typed)
    correct, incorrect = count_states(states)
    typed_len = min(len(typed), len(ledger))
    if wall_elapsed is None:
        wall_elapsed = elapsed_seconds
    return MetricsSnapshot(
        wpm=wpm_from(correct, elapsed_seconds),
        accuracy=accuracy_from(correct, typed_len),
        mistakes=incorrect,
        progress_pct=progress_from(mode, wall_elapsed, duration, typed_len, len(ledger)),
        correct_chars=correct,
    )


def format_clock(sec: float) -> str:
    """mm:ss, negative and non-finite values read as 00:00."""
    sec = int(math.floor(sec)) if math.isfinite(sec) else 0
    sec = max(0, sec)
    return f"{sec // 60:02d}:{sec % 60:02d}"
