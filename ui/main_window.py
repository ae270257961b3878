# ui/main_window.py
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QCheckBox, QLabel,
)
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtCore import Qt, QTimer
import logging

from app.config import SessionConfig, settings
from app.themes import get_theme, load_theme_preference, save_theme_preference
from app.timer import HighResClock
from core.chrono import SessionTicker
from core.threads import WordLoadWorker, Workers
from services.typing_engine import SessionController
from services.word_source import WordSource
from ui.result_dialog import ResultDialog, RETRY, NEW_TEXT
from ui.typing_view import TypingView
from ui.widgets.config_bar import ConfigBar

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, config: SessionConfig, source: WordSource):
        super().__init__()
        self.setWindowTitle(settings.PROJECT_NAME)
        self.resize(1200, 720)
        self.config = config
        self.source = source
        self._request_id = 0
        self.theme_name = load_theme_preference()

        root = QWidget(self)
        root_v = QVBoxLayout(root)
        root_v.setContentsMargins(16, 40, 16, 16)
        root_v.setSpacing(24)
        self._build_top_bar(root_v)

        # --- typing surface + engine ---
        self.view = TypingView(self)
        self.ticker = SessionTicker(parent=self)
        self.controller = SessionController(
            config=config,
            clock=HighResClock(),
            ticker=self.ticker,
            renderer=self.view,
            on_finish=self._on_finished,
        )
        self.ticker.ticked.connect(self.controller.tick)
        self.view.bufferChanged.connect(self.controller.update)

        view_h = QHBoxLayout()
        view_h.addStretch(1)
        view_h.addWidget(self.view, 1)
        view_h.addStretch(1)
        root_v.addLayout(view_h, 1)
        self.setCentralWidget(root)

        QShortcut(QKeySequence("Ctrl+R"), self).activated.connect(self._restart)
        QShortcut(QKeySequence(Qt.Key_Escape), self).activated.connect(self.view.setFocus)

        self._apply_theme(self.theme_name)
        self._generate_new_text()

    # ---------------- Top Bar ----------------
    def _build_top_bar(self, parent_layout):
        bar = QWidget(self)
        bar.setObjectName("TopBar")
        h = QHBoxLayout(bar)
        h.setContentsMargins(14, 16, 14, 16)
        h.setSpacing(10)

        self.config_bar = ConfigBar(self.config, bar)
        self.config_bar.changed.connect(self._on_config_changed)
        h.addWidget(self.config_bar)

        btn_new = QPushButton("New text", bar)
        btn_new.clicked.connect(self._generate_new_text)
        btn_restart = QPushButton("Restart", bar)
        btn_restart.clicked.connect(self._restart)
        for button in (btn_new, btn_restart):
            button.setObjectName("TopBtn")
            button.setFocusPolicy(Qt.NoFocus)   # typing view keeps the keyboard
            h.addWidget(button)

        self.lblLoader = QLabel("Loading…", bar)
        self.lblLoader.setVisible(False)
        h.addWidget(self.lblLoader)

        h.addStretch(1)

        self.chkDark = QCheckBox("Dark", bar)
        self.chkDark.setChecked(self.theme_name == "dark")
        self.chkDark.setFocusPolicy(Qt.NoFocus)
        self.chkDark.toggled.connect(self._on_dark_toggled)
        h.addWidget(self.chkDark)

        parent_layout.addWidget(bar)

        self._topbar_qss = """
        QWidget#TopBar {
            border: 1px solid rgba(127,127,127,0.25);
            border-radius: 14px;
        }
        QPushButton#TopBtn {
            background: transparent;
            border: 1px solid rgba(127,127,127,0.30);
            border-radius: 9px;
            padding: 6px 12px;
        }
        QPushButton#TopBtn:hover { border-color: rgba(127,127,127,0.60); }
        """

    # ---------------- Theme ----------------
    def _on_dark_toggled(self, checked: bool):
        name = "dark" if checked else "light"
        self._apply_theme(name)
        save_theme_preference(name)

    def _apply_theme(self, name: str):
        theme = get_theme(name)
        self.theme_name = theme.name
        self.view.set_theme(theme)
        self.setStyleSheet(
            f"""
            QWidget {{ background: {theme.background}; color: {theme.primary}; }}
            {self._topbar_qss}
            """
        )

    # ---------------- Session ----------------
    def _on_config_changed(self, config: SessionConfig):
        logger.info("Config changed: %s", config)
        needs_text = self.controller.configure(config)
        self.config = config
        if needs_text:
            self._generate_new_text()
        self.view.setFocus()

    def _restart(self):
        self.controller.reset()
        self.view.setFocus()

    def _generate_new_text(self):
        self._request_id += 1
        self.controller.reset()
        self.view.set_loading(True)
        self.lblLoader.setVisible(True)
        worker = WordLoadWorker(self._request_id, self.source, self.config.word_count)
        worker.signals.loaded.connect(self._on_words_loaded)
        Workers.pool.start(worker)

    def _on_words_loaded(self, request_id: int, words: list):
        if request_id != self._request_id:
            logger.debug("Dropping stale word list (request %d)", request_id)
            return
        self.lblLoader.setVisible(False)
        self.controller.load_words(words)
        self.view.set_ledger(self.controller.ledger)
        self.view.set_loading(False)
        self.view.display(self.controller.snapshot())
        self.setWindowTitle(settings.PROJECT_NAME)
        self.view.setFocus()

    # ---------------- Result ----------------
    def _on_finished(self, report):
        self.setWindowTitle(f"{settings.PROJECT_NAME} — {report.wpm} WPM")
        # leave the tick/input handler before opening a modal dialog
        QTimer.singleShot(0, lambda: self._show_result(report))

    def _show_result(self, report):
        if self.controller.result is not report:
            return
        dlg = ResultDialog(report, self.controller.history, get_theme(self.theme_name).accent, self)
        dlg.exec()
        if dlg.choice == RETRY:
            self._restart()
        elif dlg.choice == NEW_TEXT:
            self._generate_new_text()
        else:
            self.view.setFocus()
