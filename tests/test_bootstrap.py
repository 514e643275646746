"""Test session bootstrap and logging setup."""
import logging

from core.observability.logging_setup import setup_logging
from patterns.domain_config import DashboardConfig
from verticals.operations.bootstrap import start_session
from verticals.operations.preferences import JsonFilePreferences, Theme

from fakes import FakeClock


def test_start_session_from_env(monkeypatch, tmp_path):
    theme_file = tmp_path / "prefs.json"
    monkeypatch.setenv("OPSDASH_SEED_DEMO_DATA", "yes")
    monkeypatch.setenv("OPSDASH_THEME_FILE", str(theme_file))
    session = start_session(clock=FakeClock(), configure_logging=False)

    assert len(session.dashboard.list_tasks()) == 5
    assert isinstance(session.theme.backend, JsonFilePreferences)
    session.theme.set(Theme.DARK)
    assert theme_file.exists()

    session.close()
    assert session.dashboard.list_personnel() == []


def test_start_session_defaults():
    session = start_session(DashboardConfig(), clock=FakeClock(), configure_logging=False)
    assert session.dashboard.list_tasks() == []
    assert session.theme.stored is None


def test_setup_logging_writes_file(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    log_file = tmp_path / "logs" / "dashboard.log"
    try:
        setup_logging(level="warning", log_file=log_file)
        assert len(root.handlers) == 2
        logging.getLogger("verticals.operations.test").debug("hello file")
        for h in root.handlers:
            h.flush()
        assert "hello file" in log_file.read_text(encoding="utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)
