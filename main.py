# main.py
from __future__ import annotations
import argparse
import sys
import logging
from pathlib import Path

from PySide6.QtWidgets import QApplication, QMessageBox

from app.config import Mode, SessionConfig, settings
from services.word_source import WordSource
from ui.main_window import MainWindow
from utils.file_handler import ensure_app_files, load_word_pool


def setup_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE, encoding="utf-8"),
        ],
    )

    # Log any uncaught exceptions rather than silently dying
    def excepthook(exctype, value, tb):
        logging.critical("Unhandled exception", exc_info=(exctype, value, tb))
        if QApplication.instance() is not None:
            QMessageBox.critical(None, "Application Error", f"{exctype.__name__}: {value}")
        sys.exit(1)

    sys.excepthook = excepthook


def load_stylesheet(app: QApplication) -> None:
    qss = Path("resources/style.qss")
    if qss.exists():
        try:
            app.setStyleSheet(qss.read_text(encoding="utf-8"))
        except OSError as e:
            logging.warning("Failed to load stylesheet: %s", e)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="keyrush", description="Typing speed test")
    parser.add_argument("--mode", choices=[m.value for m in Mode], default=Mode.TIME.value)
    parser.add_argument("--duration", default=settings.DEFAULT_DURATION,
                        help="seconds per test in time mode")
    parser.add_argument("--words", default=settings.DEFAULT_WORD_COUNT,
                        help="number of words to generate")
    parser.add_argument("--offline", action="store_true",
                        help="skip quote fetching, use the local word pool only")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging()
    ensure_app_files()

    config = SessionConfig.parse(args.mode, args.duration, args.words)
    source = WordSource(pool=load_word_pool(), fetch_quotes=not args.offline)
    logging.info("Starting %s with %s", settings.PROJECT_NAME, config)

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName(settings.PROJECT_NAME)
    app.setOrganizationName(settings.PROJECT_NAME)

    load_stylesheet(app)

    win = MainWindow(config, source)
    win.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
