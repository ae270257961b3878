# core/chrono.py
from PySide6.QtCore import QObject, QTimer, Signal

from app.config import settings


class SessionTicker(QObject):
    """Periodic tick while a session runs. stop() cancels any pending tick."""

    ticked = Signal()

    def __init__(self, tick_ms: int = settings.TICK_MS, parent=None):
        super().__init__(parent)
        self._tick = QTimer(self)
        self._tick.setInterval(tick_ms)
        self._tick.timeout.connect(self._on_tick)

    @property
    def is_active(self) -> bool:
        return self._tick.isActive()

    def start(self):
        if not self.is_active:
            self._tick.start()

    def stop(self):
        self._tick.stop()

    def _on_tick(self):
        self.ticked.emit()
