# core/threads.py
from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal


class WordLoadWorkerSignals(QObject):
    loaded = Signal(int, list)


class WordLoadWorker(QRunnable):
    """Runs WordSource.fetch off the UI thread; the result comes back through a queued signal."""

    def __init__(self, request_id: int, source, count: int):
        super().__init__()
        self.request_id = request_id
        self.source = source
        self.count = count
        self.signals = WordLoadWorkerSignals()

    def run(self):
        # fetch() fails open, so there is no failure signal
        words = self.source.fetch(self.count)
        self.signals.loaded.emit(self.request_id, words)


class Workers:
    pool = QThreadPool.globalInstance()
