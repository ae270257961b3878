# services/typing_engine.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, List, Optional, Sequence, Tuple
import logging
import math

from app.calculation import (
    MetricsSnapshot,
    accuracy_from,
    compute,
    format_clock,
    wpm_from,
)
from app.config import Mode, SessionConfig
from app.state import Phase, SessionTiming
from app.timer import HighResClock
from services.ledger import CharState, Ledger, build, compare, count_states
from services.word_cursor import locate

logger = logging.getLogger(__name__)

# elapsed time used for the final WPM never drops below one second
MIN_RESULT_SECONDS = 1.0


@dataclass(frozen=True)
class DisplaySnapshot:
    ledger_states: Tuple[CharState, ...]
    current_word_index: int
    completed_words: FrozenSet[int]
    metrics: MetricsSnapshot
    timer_text: str
    phase: Phase
    typed: str = ""


@dataclass(frozen=True)
class ResultReport:
    wpm: int
    accuracy: int
    keystrokes: int
    correct_chars: int
    elapsed_seconds: float = 0.0


@dataclass
class _Trace:
    samples: List[Tuple[float, int]] = field(default_factory=list)

    def add(self, t: float, wpm: int):
        self.samples.append((round(t, 2), wpm))

    def clear(self):
        self.samples.clear()


class SessionController:
    """
    Owns one typing session: the ledger built from the current words, the typed
    buffer and the timing state.

    Collaborators are duck-typed:
      clock     .now() -> float seconds, monotonic
      ticker    .start() / .stop(); calls tick() every ~100 ms while running
      renderer  .display(snapshot)
      on_finish callable(ResultReport), invoked once per finished session
    """

    def __init__(
        self,
        words: Sequence[str] = (),
        config: Optional[SessionConfig] = None,
        clock=None,
        ticker=None,
        renderer=None,
        on_finish: Optional[Callable[[ResultReport], None]] = None,
    ):
        self.config = config or SessionConfig()
        self.clock = clock if clock is not None else HighResClock()
        self.ticker = ticker
        self.renderer = renderer
        self.on_finish = on_finish

        self.timing = SessionTiming(duration=float(self.config.duration))
        self.typed = ""
        self.result: Optional[ResultReport] = None
        self._phase = Phase.IDLE
        self._trace = _Trace()
        self._last: Optional[DisplaySnapshot] = None
        self.ledger: Ledger = build(list(words))
        self.reset()

    # ---------- state ----------
    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def is_started(self) -> bool:
        return self.timing.is_started

    @property
    def history(self) -> List[Tuple[float, int]]:
        return list(self._trace.samples)

    def snapshot(self) -> DisplaySnapshot:
        return self._last

    # ---------- lifecycle ----------
    def load_words(self, words: Sequence[str]) -> DisplaySnapshot:
        """
        Replace the text. The ledger is rebuilt, never patched.
        An empty word list in word mode has nothing left to type, so that
        session finishes straight away.
        """
        self.ledger = build(list(words))
        logger.info("Loaded %d words (%d chars)", len(self.ledger.words), len(self.ledger))
        snap = self.reset()
        if self.config.mode is Mode.WORDS and len(self.ledger) == 0:
            now = self.clock.now()
            self._start(now)
            self.finish(now)
            return self._last
        return snap

    def reset(self) -> DisplaySnapshot:
        if self.ticker is not None:
            self.ticker.stop()
        self.timing.clear()
        self.timing.duration = float(self.config.duration)
        self.typed = ""
        self.result = None
        self._trace.clear()
        if self._phase is not Phase.IDLE:
            logger.info("Session reset")
        self._phase = Phase.IDLE
        return self._push(self._build_snapshot(self.clock.now()))

    def configure(self, config: SessionConfig) -> bool:
        """
        Apply a new configuration and reset. Returns True when the caller must
        supply a new word sequence (mode or word count changed).
        """
        needs_text = self.config.needs_new_text(config)
        self.config = config
        self.reset()
        return needs_text

    # ---------- events ----------
    def update(self, raw_typed: str) -> DisplaySnapshot:
        if self._phase is Phase.FINISHED:
            return self._last

        self.typed = (raw_typed or "")[: len(self.ledger)]
        now = self.clock.now()

        if self._phase is Phase.IDLE and self.typed:
            self._start(now)

        snap = self._push(self._build_snapshot(now))

        if (
            self._phase is Phase.RUNNING
            and self.config.mode is Mode.WORDS
            and len(self.typed) >= len(self.ledger)
        ):
            self.finish(now)
            return self._last
        return snap

    def tick(self) -> Optional[DisplaySnapshot]:
        # a tick can still fire after reset or finish stopped the timer
        if not self.timing.is_started or self.timing.start_time is None:
            return None
        now = self.clock.now()
        snap = self._push(self._build_snapshot(now))
        self._trace.add(self.timing.elapsed(now), snap.metrics.wpm)
        logger.debug("tick elapsed=%.2f wpm=%d", self.timing.elapsed(now), snap.metrics.wpm)

        if self.config.mode is Mode.TIME and self.timing.expired(now):
            self.finish(now)
            return self._last
        return snap

    def finish(self, now: Optional[float] = None) -> Optional[ResultReport]:
        if self._phase is not Phase.RUNNING or self.timing.start_time is None:
            return None
        if now is None:
            now = self.clock.now()
        if self.ticker is not None:
            self.ticker.stop()

        elapsed = max(MIN_RESULT_SECONDS, self.timing.elapsed(now))
        correct, _ = count_states(compare(self.ledger, self.typed))
        report = ResultReport(
            wpm=wpm_from(correct, elapsed),
            accuracy=accuracy_from(correct, len(self.typed)),
            keystrokes=len(self.typed),
            correct_chars=correct,
            elapsed_seconds=elapsed,
        )

        self._phase = Phase.FINISHED
        self._trace.add(self.timing.elapsed(now), report.wpm)
        self._push(self._build_snapshot(now))
        self.timing.clear()
        self.result = report
        logger.info(
            "Session finished: %d WPM, %d%% accuracy, %d keystrokes",
            report.wpm, report.accuracy, report.keystrokes,
        )

        if self.on_finish is not None:
            self.on_finish(report)
        return report

    # ---------- internals ----------
    def _start(self, now: float):
        self.timing.duration = float(self.config.duration)
        self.timing.start(now, timed=self.config.mode is Mode.TIME)
        self._phase = Phase.RUNNING
        logger.info("Session started (%s mode)", self.config.mode.value)
        if self.ticker is not None:
            self.ticker.start()

    def _timer_text(self, now: float) -> str:
        if self.config.mode is Mode.TIME:
            remaining = self.timing.remaining(now)
            if remaining is None:
                return format_clock(self.config.duration)
            return format_clock(math.ceil(remaining))
        return format_clock(self.timing.elapsed(now))

    def _build_snapshot(self, now: float) -> DisplaySnapshot:
        states = compare(self.ledger, self.typed)
        where = locate(len(self.typed), self.ledger.spans, states)
        elapsed = self.timing.elapsed(now)
        metrics = compute(
            elapsed,
            self.typed,
            self.ledger,
            duration=self.config.duration,
            mode=self.config.mode,
            states=states,
        )
        return DisplaySnapshot(
            ledger_states=tuple(states),
            current_word_index=where.current_word_index,
            completed_words=where.completed_words,
            metrics=metrics,
            timer_text=self._timer_text(now),
            phase=self._phase,
            typed=self.typed,
        )

    def _push(self, snap: DisplaySnapshot) -> DisplaySnapshot:
        self._last = snap
        if self.renderer is not None:
            self.renderer.display(snap)
        return snap
