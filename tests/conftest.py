"""Shared test fixtures for linelog test suite."""

import io
import os
import re
from pathlib import Path
from unittest.mock import patch

import pytest

from linelog import manager as manager_mod
from linelog.levels import Level
from linelog.manager import Manager


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
TIMESTAMP_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3}")


def mask_timestamps(text):
    """Replace every rendered timestamp with TIMESTAMP."""
    return TIMESTAMP_RE.sub("TIMESTAMP", text)


def reset(buf):
    """Empty a StringIO in place."""
    buf.seek(0)
    buf.truncate(0)


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: multi-threaded or subprocess tests")


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the caller's NO_COLOR / LINELOG_* settings out of the tests."""
    for name in ("NO_COLOR", "LINELOG_LEVEL", "LINELOG_FILE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _fresh_process_manager(monkeypatch):
    """Give every test its own process-wide manager state."""
    monkeypatch.setattr(manager_mod, "_manager", None)
    monkeypatch.setattr(manager_mod, "_ref_count", 0)
    yield
    if manager_mod._manager is not None:
        manager_mod._manager.close()


@pytest.fixture
def tmp_config_home(tmp_path):
    """Provide a temporary home directory for ~/.linelog/config.json."""
    home = tmp_path / "home"
    home.mkdir()
    with patch.dict(os.environ, {"HOME": str(home), "USERPROFILE": str(home)}):
        with patch("pathlib.Path.home", return_value=home):
            yield home


# ---------------------------------------------------------------------------
# Manager fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def buf():
    """A StringIO buffer standing in for stdout."""
    return io.StringIO()


@pytest.fixture
def mgr():
    """A private Manager, closed after the test."""
    m = Manager()
    yield m
    m.close()


@pytest.fixture
def console(mgr, buf):
    """Uncolored console worker at TRACE writing to ``buf``.

    The buffer is emptied after registration so tests only see their
    own lines.
    """
    mgr.add_worker("", Level.TRACE, color=False, stream=buf)
    reset(buf)
    return mgr.get_worker("")


@pytest.fixture
def log_path(tmp_path):
    """A log file path inside a directory that does not exist yet."""
    return Path(tmp_path) / "logs" / "nested" / "app.log"
