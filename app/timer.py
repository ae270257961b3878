from PySide6.QtCore import QElapsedTimer


class HighResClock:
    """Monotonic seconds since construction."""

    def __init__(self):
        self.t = QElapsedTimer()
        self.t.start()

    def now(self) -> float:
        return self.t.nsecsElapsed() / 1e9
