# app/themes.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional
import json
import logging

from app.config import settings

logger = logging.getLogger(__name__)


@dataclass
class Theme:
    name: str
    background: str
    primary: str
    secondary: str
    accent: str
    correct: str
    error: str


# -------- Built-in themes --------
THEMES: Dict[str, Theme] = {
    "light": Theme(
        name="light",
        background="#fafafa",
        primary="#111111",
        secondary="#6b6b6b",
        accent="#eab308",
        correct="#16a34a",
        error="#dc2626",
    ),
    "dark": Theme(
        name="dark",
        background="#0f1115",
        primary="#e5e7eb",
        secondary="#6b7280",
        accent="#eab308",
        correct="#22c55e",
        error="#ef4444",
    ),
}

DEFAULT_THEME = "light"


def get_theme(name: str) -> Theme:
    return THEMES.get(name, THEMES[DEFAULT_THEME])


# -------- persistence --------
def load_theme_preference(path: Optional[Path] = None) -> str:
    """Saved theme name; anything missing or unreadable reads as light."""
    p = Path(path) if path is not None else settings.PREFERENCES_FILE
    if not p.exists():
        return DEFAULT_THEME
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable preferences %s: %s", p, e)
        return DEFAULT_THEME
    name = data.get("theme") if isinstance(data, dict) else None
    return name if name in THEMES else DEFAULT_THEME


def save_theme_preference(name: str, path: Optional[Path] = None) -> None:
    p = Path(path) if path is not None else settings.PREFERENCES_FILE
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps({"theme": name}, indent=2), encoding="utf-8")
    except OSError as e:
        logger.warning("Failed to save theme preference: %s", e)  # never crash on save
