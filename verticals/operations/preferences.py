"""Theme preference: the only state that outlives a session.

A single ``theme`` key holding ``light`` or ``dark``. When nothing has been
stored, the platform's ambient preference decides.
"""

import json
import logging
import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

THEME_KEY = "theme"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------

class PreferenceBackend(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryPreferences:
    """Dict-backed preferences, forgotten when the process ends."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFilePreferences:
    """Key-value preferences stored as a flat JSON object on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Unreadable preferences file %s; using defaults", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        _atomic_write(self.path, json.dumps(data, indent=4))


def _atomic_write(path: Path, content: str) -> None:
    """Write to a sibling temp file, then rename it over ``path``."""
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


# ---------------------------------------------------------------------------
# Ambient preference
# ---------------------------------------------------------------------------

def env_prefers_dark() -> bool:
    """Read the terminal's ``COLORFGBG`` hint ("fg;bg"); dark backgrounds are 0-6 and 8."""
    raw = os.environ.get("COLORFGBG", "")
    bg = raw.split(";")[-1].strip()
    if not bg.isdigit():
        return False
    return int(bg) in {0, 1, 2, 3, 4, 5, 6, 8}


# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------

class ThemePreference:
    """Resolve, store and toggle the light/dark theme.

    Usage::

        theme = ThemePreference(JsonFilePreferences("~/.opsdash.json"))
        theme.current()   # stored value, else the ambient preference
        theme.toggle()    # flips and stores the explicit choice
    """

    def __init__(
        self,
        backend: PreferenceBackend | None = None,
        system_prefers_dark: Callable[[], bool] = env_prefers_dark,
    ):
        self.backend = backend or MemoryPreferences()
        self.system_prefers_dark = system_prefers_dark

    @property
    def stored(self) -> Theme | None:
        raw = self.backend.get(THEME_KEY)
        if raw is None:
            return None
        try:
            return Theme(raw)
        except ValueError:
            logger.warning("Ignoring unknown stored theme %r", raw)
            return None

    def current(self) -> Theme:
        stored = self.stored
        if stored is not None:
            return stored
        return Theme.DARK if self.system_prefers_dark() else Theme.LIGHT

    def set(self, theme: Theme | str) -> Theme:
        theme = Theme(theme)
        self.backend.set(THEME_KEY, theme.value)
        logger.info("Theme set to %s", theme.value)
        return theme

    def toggle(self) -> Theme:
        return self.set(Theme.LIGHT if self.current() == Theme.DARK else Theme.DARK)
