import logging
import os
from pathlib import Path
from typing import Optional, Tuple

from app.config import settings
from services.word_source import WORD_POOL

logger = logging.getLogger(__name__)


def ensure_app_files():
    # Data dir for preferences
    os.makedirs(settings.PREFERENCES_FILE.parent, exist_ok=True)


def load_word_pool(path: Optional[Path] = None) -> Tuple[str, ...]:
    """
    Practice words from assets/words.txt (one per line, '#' comments allowed).
    Falls back to the built-in pool if the file is missing, unreadable or empty.
    """
    p = Path(path) if path is not None else settings.WORD_POOL_FILE
    if not p.exists():
        return WORD_POOL
    try:
        lines = p.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read word pool %s: %s", p, e)
        return WORD_POOL
    words = []
    for ln in lines:
        ln = ln.strip()
        if not ln or ln.startswith("#"):
            continue
        words.extend(ln.split())
    if not words:
        logger.warning("Word pool %s is empty, using built-in words", p)
        return WORD_POOL
    return tuple(words)
