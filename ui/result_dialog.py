# ui/result_dialog.py
from __future__ import annotations
from typing import Sequence, Tuple

from PySide6.QtWidgets import QDialog, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel, QPushButton
import pyqtgraph as pg

from utils.graph_helper import setup_wpm_plot, plot_trace

RETRY = "retry"
NEW_TEXT = "new"


class ResultDialog(QDialog):
    """
    Final stats for one finished session plus the WPM trace sampled on each tick.
    After exec(), `choice` is RETRY, NEW_TEXT or None (closed).
    """

    def __init__(self, report, trace: Sequence[Tuple[float, int]], line_color: str = "#eab308", parent=None):
        super().__init__(parent)
        self.setWindowTitle("Result")
        self.resize(640, 420)
        self.choice = None

        root = QVBoxLayout(self)

        grid = QGridLayout()
        cells = [
            ("WPM", str(report.wpm)),
            ("Accuracy", f"{report.accuracy}%"),
            ("Keystrokes", str(report.keystrokes)),
            ("Correct", str(report.correct_chars)),
        ]
        for col, (title, value) in enumerate(cells):
            head = QLabel(title, self)
            val = QLabel(value, self)
            val.setObjectName("resultValue")
            val.setStyleSheet("font-size: 28px;")
            grid.addWidget(head, 0, col)
            grid.addWidget(val, 1, col)
        root.addLayout(grid)

        if len(trace) > 1:
            plot = pg.PlotWidget()
            setup_wpm_plot(plot)
            plot_trace(plot, trace, line_color)
            root.addWidget(plot, stretch=1)

        row = QHBoxLayout()
        btn_retry = QPushButton("Retry", self)
        btn_retry.clicked.connect(lambda: self._choose(RETRY))
        btn_new = QPushButton("New text", self)
        btn_new.clicked.connect(lambda: self._choose(NEW_TEXT))
        row.addStretch(1)
        row.addWidget(btn_retry)
        row.addWidget(btn_new)
        root.addLayout(row)

    def _choose(self, choice: str):
        self.choice = choice
        self.accept()
