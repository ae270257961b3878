from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Phase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass
class SessionTiming:
    duration: float = 30.0
    is_started: bool = False
    start_time: Optional[float] = None
    end_time: Optional[float] = None

    def start(self, now: float, timed: bool):
        if self.is_started:
            return
        self.is_started = True
        self.start_time = now
        self.end_time = now + self.duration if timed else None

    def clear(self):
        self.is_started = False
        self.start_time = None
        self.end_time = None

    def elapsed(self, now: float) -> float:
        if self.start_time is None:
            return 0.0
        return max(0.0, now - self.start_time)

    def remaining(self, now: float) -> Optional[float]:
        if self.end_time is None:
            return None
        return max(0.0, self.end_time - now)

    def expired(self, now: float) -> bool:
        return self.end_time is not None and now >= self.end_time
