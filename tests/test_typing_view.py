"""Tests for ui.typing_view - key handling and rendering against a live controller."""

import pytest
from PySide6.QtCore import Qt

from app.config import Mode, SessionConfig
from app.state import Phase
from services.typing_engine import SessionController
from ui.typing_view import TypingView


@pytest.fixture
def make_view(qtbot, clock, ticker, reports):
    def _make(words=("cat", "dog"), mode=Mode.TIME, duration=30):
        view = TypingView()
        qtbot.addWidget(view)
        controller = SessionController(
            words=list(words),
            config=SessionConfig(mode=mode, duration=duration),
            clock=clock,
            ticker=ticker,
            renderer=view,
            on_finish=reports.append,
        )
        view.bufferChanged.connect(controller.update)
        view.set_ledger(controller.ledger)
        view.display(controller.snapshot())
        return view, controller
    return _make


class TestKeys:
    def test_typing_starts_session(self, make_view, qtbot):
        view, controller = make_view()
        qtbot.keyClick(view, "c")
        assert view.buffer == "c"
        assert controller.phase is Phase.RUNNING

    def test_view_adopts_clamped_buffer(self, make_view, qtbot):
        view, controller = make_view(words=["cat"])
        qtbot.keyClicks(view, "catdog")
        assert controller.typed == "catd"
        assert view.buffer == "catd"

    def test_backspace_removes_one_char(self, make_view, qtbot):
        view, controller = make_view()
        qtbot.keyClicks(view, "ca")
        qtbot.keyClick(view, Qt.Key_Backspace)
        assert view.buffer == "c"
        assert controller.typed == "c"

    def test_backspace_on_empty_buffer_is_ignored(self, make_view, qtbot):
        view, controller = make_view()
        before = controller.snapshot()
        qtbot.keyClick(view, Qt.Key_Backspace)
        assert controller.snapshot() is before

    def test_ctrl_backspace_deletes_to_previous_word_boundary(self, make_view, qtbot):
        view, controller = make_view()
        qtbot.keyClicks(view, "cat dog")
        qtbot.keyClick(view, Qt.Key_Backspace, Qt.ControlModifier)
        assert view.buffer == "cat "
        assert controller.typed == "cat "
        qtbot.keyClick(view, Qt.Key_Backspace, Qt.ControlModifier)
        assert view.buffer == ""

    def test_ctrl_backspace_skips_trailing_space(self, make_view, qtbot):
        view, _ = make_view(words=["cat", "dog", "emu"])
        qtbot.keyClicks(view, "cat dog ")
        qtbot.keyClick(view, Qt.Key_Backspace, Qt.ControlModifier)
        assert view.buffer == "cat "

    def test_input_ignored_once_finished(self, make_view, qtbot, reports):
        view, controller = make_view(words=["cat"], mode=Mode.WORDS)
        qtbot.keyClicks(view, "cat ")
        assert controller.phase is Phase.FINISHED
        qtbot.keyClick(view, "x")
        qtbot.keyClick(view, Qt.Key_Backspace)
        assert view.buffer == "cat "
        assert controller.typed == "cat "
        assert len(reports) == 1


class TestLoading:
    def test_loading_blocks_input(self, make_view, qtbot):
        view, controller = make_view()
        view.set_loading(True)
        qtbot.keyClick(view, "c")
        assert view.buffer == ""
        assert controller.phase is Phase.IDLE
        assert view.lblLine.text() == "Loading…"

    def test_display_while_loading_keeps_input_blocked(self, make_view, qtbot):
        view, controller = make_view()
        view.set_loading(True)
        controller.reset()
        assert view.is_loading
        assert view.lblLine.text() == "Loading…"
        qtbot.keyClick(view, "c")
        assert controller.phase is Phase.IDLE
        assert controller.typed == ""

    def test_input_resumes_after_loading(self, make_view, qtbot):
        view, controller = make_view()
        view.set_loading(True)
        view.set_loading(False)
        assert view.lblLine.text() != "Loading…"
        qtbot.keyClick(view, "c")
        assert controller.phase is Phase.RUNNING


class TestRendering:
    def test_current_word_is_highlighted_once(self, make_view):
        view, _ = make_view(words=["cat", "dog", "emu"])
        html = view.lblLine.text()
        assert html.count("background:rgba(234,179,8,0.1") == 1

    def test_completed_word_is_underlined(self, make_view, qtbot):
        view, controller = make_view()
        qtbot.keyClicks(view, "cat ")
        assert controller.snapshot().completed_words == frozenset({0})
        assert "text-decoration-color:#22c55e" in view.lblLine.text()

    def test_wrong_char_uses_error_colour(self, make_view, qtbot):
        view, _ = make_view()
        qtbot.keyClick(view, "x")
        assert "color:#ef4444" in view.lblLine.text()

    def test_markup_in_words_is_escaped(self, make_view):
        view, _ = make_view(words=["<b>"])
        assert "&lt;" in view.lblLine.text()
        assert "<b>" not in view.lblLine.text()
