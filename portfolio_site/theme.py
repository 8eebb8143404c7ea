"""Light/dark theme preference, persisted in a small JSON key-value file."""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

THEME_KEY = "theme"
THEMES = ("light", "dark")


class PreferenceStore:
    """Key-value preferences backed by a JSON file.

    Read and write failures are logged and never raised; callers get the default.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError):
            logger.warning("Error reading preferences from %s", self.path, exc_info=True)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2))
        except OSError:
            logger.warning("Error writing preferences to %s", self.path, exc_info=True)
            return False
        return True

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> bool:
        data = self._read()
        data[key] = value
        return self._write(data)

    def remove(self, key: str) -> bool:
        data = self._read()
        if key not in data:
            return True
        del data[key]
        return self._write(data)


class ThemeController:
    def __init__(self, store: PreferenceStore, prefers_dark: bool = False) -> None:
        self.store = store
        self.current = self.initial_theme(prefers_dark)

    def initial_theme(self, prefers_dark: bool = False) -> str:
        """Saved preference first, then the system preference, then light."""
        saved = self.store.get(THEME_KEY)
        if saved in THEMES:
            return saved
        return "dark" if prefers_dark else "light"

    def set_theme(self, theme: str) -> str:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme!r} (expected one of {', '.join(THEMES)})")
        self.current = theme
        self.store.set(THEME_KEY, theme)
        return theme

    def toggle(self) -> str:
        new_theme = "light" if self.current == "dark" else "dark"
        logger.info("Switched to %s mode", new_theme)
        return self.set_theme(new_theme)

    @property
    def toggle_label(self) -> str:
        return "Switch to light mode" if self.current == "dark" else "Switch to dark mode"
