from __future__ import annotations
import html

from PySide6.QtCore import Qt, QTimer, Signal
from PySide6.QtWidgets import QWidget, QLabel, QVBoxLayout, QHBoxLayout, QSizePolicy, QProgressBar

from app.state import Phase
from services.ledger import CharState, Ledger, build

# words per rendered page; the window shows the previous page and two ahead
WORD_PAGE = 12


def _get(theme, name, default):
    return getattr(theme, name, default)


class TypingView(QWidget):
    """
    Renders DisplaySnapshots and turns key presses into a typed buffer.
    Emits bufferChanged with the full proposed buffer; the controller clamps it
    and the next display() call brings the clamped value back here.
    """

    bufferChanged = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFocusPolicy(Qt.StrongFocus)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 30, 0, 30)
        root.setSpacing(20)

        stats = QHBoxLayout()
        stats.setSpacing(40)

        self.lblTimer = QLabel("00:30", self)
        self.lblTimer.setObjectName("lblTimer")
        self.lblWPM = QLabel("0 WPM", self)
        self.lblWPM.setObjectName("lblWPM")
        self.lblAcc = QLabel("100%", self)
        self.lblAcc.setObjectName("lblAcc")
        self.lblMistakes = QLabel("0 mistakes", self)
        self.lblMistakes.setObjectName("lblMistakes")

        for lab in (self.lblTimer, self.lblWPM, self.lblAcc, self.lblMistakes):
            lab.setAlignment(Qt.AlignCenter)
            stats.addWidget(lab)
        root.addLayout(stats)

        self.progress = QProgressBar(self)
        self.progress.setRange(0, 100)
        self.progress.setTextVisible(False)
        self.progress.setFixedHeight(4)
        root.addWidget(self.progress)

        self.lblLine = QLabel("", self)
        self.lblLine.setObjectName("lblLine")
        self.lblLine.setTextFormat(Qt.RichText)
        self.lblLine.setWordWrap(True)
        self.lblLine.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.lblLine.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.lblLine.setMinimumWidth(900)
        self.lblLine.setMaximumWidth(1100)
        self.lblLine.setMinimumHeight(160)
        self.lblLine.setStyleSheet("font-size: 30px; line-height: 1.4;")
        root.addWidget(self.lblLine, stretch=1, alignment=Qt.AlignHCenter)

        self.lblHint = QLabel("Start typing to begin · Ctrl+R restarts", self)
        self.lblHint.setObjectName("lblHint")
        self.lblHint.setAlignment(Qt.AlignCenter)
        root.addWidget(self.lblHint)

        self.buffer = ""
        self._ledger: Ledger = build([])
        self._snapshot = None
        self._accepting = True
        self._loading = False

        self._caret_on = True
        self._caret_timer = QTimer(self)
        self._caret_timer.setInterval(500)
        self._caret_timer.timeout.connect(self._toggle_caret)
        self._caret_timer.start()

        self._colors = {
            "ok": "#22c55e",
            "err": "#ef4444",
            "mut": "#9aa1a9",
            "caret": "#eab308",
            "word_bg": "rgba(234,179,8,0.10)",
        }

    # ---------- model ----------
    def set_ledger(self, ledger: Ledger):
        self._ledger = ledger
        self.buffer = ""

    def set_loading(self, loading: bool):
        self._loading = loading
        self._accepting = not loading and (
            self._snapshot is None or self._snapshot.phase is not Phase.FINISHED
        )
        if loading:
            self.lblLine.setText("Loading…")
        else:
            self._render_line()

    # ---------- Renderer ----------
    def display(self, snapshot):
        self._snapshot = snapshot
        self.buffer = snapshot.typed
        # the old text stays hidden until the new ledger arrives
        self._accepting = not self._loading and snapshot.phase is not Phase.FINISHED

        m = snapshot.metrics
        self.lblTimer.setText(snapshot.timer_text)
        self.lblWPM.setText(f"{m.wpm} WPM")
        self.lblAcc.setText(f"{m.accuracy}%")
        self.lblMistakes.setText(f"{m.mistakes} mistakes")
        self.progress.setValue(m.progress_pct)
        self.lblHint.setVisible(snapshot.phase is Phase.IDLE)
        self._render_line()

    @property
    def is_loading(self) -> bool:
        return self._loading

    def set_theme(self, theme):
        self.setStyleSheet(
            f"""
            QLabel#lblLine {{ color: {_get(theme,'primary','#e5e7eb')}; }}
            QLabel#lblTimer {{ color: {_get(theme,'accent','#eab308')}; font-size: 22px; }}
            QLabel#lblWPM, QLabel#lblAcc, QLabel#lblMistakes, QLabel#lblHint {{
                color: {_get(theme,'secondary','#9aa1a9')};
            }}
            QProgressBar {{ border: none; background: transparent; }}
            QProgressBar::chunk {{ background: {_get(theme,'accent','#eab308')}; }}
            """
        )
        self._colors["ok"] = _get(theme, "correct", "#22c55e")
        self._colors["err"] = _get(theme, "error", "#ef4444")
        self._colors["mut"] = _get(theme, "secondary", "#9aa1a9")
        self._colors["caret"] = _get(theme, "accent", "#eab308")
        self._colors["word_bg"] = self._hex_to_rgba(self._colors["caret"], 0.10)
        self._render_line()

    # ---------- rendering ----------
    def _toggle_caret(self):
        self._caret_on = not self._caret_on
        if self._snapshot is not None and self._snapshot.phase is Phase.RUNNING:
            self._render_line()

    def _render_line(self):
        if self._loading:
            return
        snap = self._snapshot
        spans = self._ledger.spans
        if snap is None or not spans or len(snap.ledger_states) != len(self._ledger):
            self.lblLine.setText("")
            return

        cur = snap.current_word_index
        first = max(0, (cur // WORD_PAGE - 1) * WORD_PAGE)
        last = min(len(spans), first + 3 * WORD_PAGE)
        caret = len(snap.typed)
        states = snap.ledger_states

        col_ok = self._colors["ok"]
        col_err = self._colors["err"]
        col_mut = self._colors["mut"]
        col_caret = self._colors["caret"]

        def span(txt: str, color: str | None = None, underline: str | None = None, bg: str | None = None):
            style_bits = []
            if color:
                style_bits.append(f"color:{color}")
            if underline:
                style_bits.append(f"text-decoration:underline; text-decoration-color:{underline}")
            if bg:
                style_bits.append(f"background:{bg}")
            return f'<span style="{";".join(style_bits)}">{txt}</span>'

        caret_html = span("|", col_caret if self._caret_on else "transparent")

        def close_word(wi: int, word_parts: list[str]) -> str:
            body = "".join(word_parts)
            if wi == cur:
                return span(body, bg=self._colors["word_bg"])
            if wi in snap.completed_words and wi < cur:
                return span(body, underline=col_ok)
            return body

        parts: list[str] = []
        word_parts: list[str] = []
        word = first
        for ci in range(spans[first].start_offset, spans[last - 1].end_offset):
            ec = self._ledger[ci]
            if ec.word_index != word:
                parts.append(close_word(word, word_parts))
                word_parts = []
                word = ec.word_index
            if ci == caret and snap.phase is not Phase.FINISHED:
                word_parts.append(caret_html)
            st = states[ci]
            if ec.is_separator:
                # a wrongly typed space is shown as a coloured gap
                word_parts.append(span(" ", bg=col_err) if st is CharState.INCORRECT else " ")
                continue
            ch = html.escape(ec.display)
            if st is CharState.CORRECT:
                word_parts.append(span(ch, col_ok))
            elif st is CharState.INCORRECT:
                word_parts.append(span(ch, col_err, underline=col_err))
            else:
                word_parts.append(span(ch, col_mut))
        parts.append(close_word(word, word_parts))

        self.lblLine.setText("".join(parts))

    # ---------- input ----------
    def keyPressEvent(self, ev):
        if not self._accepting:
            return super().keyPressEvent(ev)

        key = ev.key()
        mods = ev.modifiers()
        if key == Qt.Key_Backspace:
            if mods & Qt.ControlModifier:
                self._delete_word()
            elif self.buffer:
                self.buffer = self.buffer[:-1]
            else:
                return
            self._caret_on = True
            self.bufferChanged.emit(self.buffer)
            return

        if mods & (Qt.ControlModifier | Qt.AltModifier | Qt.MetaModifier):
            return super().keyPressEvent(ev)

        t = ev.text()
        if not t or not t.isprintable():
            return super().keyPressEvent(ev)
        self.buffer += t
        self._caret_on = True
        self.bufferChanged.emit(self.buffer)

    def _delete_word(self):
        b = self.buffer.rstrip(" ")
        i = b.rfind(" ")
        self.buffer = b[: i + 1] if i >= 0 else ""

    @staticmethod
    def _hex_to_rgba(hex_color: str, alpha: float) -> str:
        h = hex_color.lstrip("#")
        if len(h) != 6:
            return "rgba(255,255,255,0.10)"
        r = int(h[0:2], 16)
        g = int(h[2:4], 16)
        b = int(h[4:6], 16)
        return f"rgba({r},{g},{b},{max(0.0, min(alpha, 1.0))})"
