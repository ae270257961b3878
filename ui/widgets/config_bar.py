# ui/widgets/config_bar.py
from PySide6.QtCore import Signal
from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QComboBox

from app.config import Mode, SessionConfig, settings


class ConfigBar(QWidget):
    """Mode / time / word count selectors. Emits `changed` with the parsed config."""

    changed = Signal(object)

    def __init__(self, config: SessionConfig, parent=None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        layout.addWidget(QLabel("Mode:", self))
        self.cmb_mode = QComboBox(self)
        self.cmb_mode.addItems([m.value for m in Mode])
        layout.addWidget(self.cmb_mode)

        layout.addWidget(QLabel("Time:", self))
        self.cmb_time = QComboBox(self)
        self.cmb_time.addItems([str(s) for s in settings.DURATION_CHOICES])
        layout.addWidget(self.cmb_time)

        layout.addWidget(QLabel("Words:", self))
        self.cmb_words = QComboBox(self)
        self.cmb_words.addItems([str(n) for n in settings.WORD_COUNT_CHOICES])
        layout.addWidget(self.cmb_words)

        self.set_config(config)

        for cmb in (self.cmb_mode, self.cmb_time, self.cmb_words):
            cmb.currentTextChanged.connect(self._emit)

    def set_config(self, config: SessionConfig):
        for cmb, text in (
            (self.cmb_mode, config.mode.value),
            (self.cmb_time, str(config.duration)),
            (self.cmb_words, str(config.word_count)),
        ):
            cmb.blockSignals(True)
            if cmb.findText(text) < 0:
                cmb.addItem(text)
            cmb.setCurrentText(text)
            cmb.blockSignals(False)

    @property
    def config(self) -> SessionConfig:
        return SessionConfig.parse(
            mode=self.cmb_mode.currentText(),
            duration=self.cmb_time.currentText(),
            word_count=self.cmb_words.currentText(),
        )

    def _emit(self, _text: str):
        self.changed.emit(self.config)
