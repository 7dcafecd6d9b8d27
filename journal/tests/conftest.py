import datetime as dt
import sys
from pathlib import Path

import pytest

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from journal.db import Store
from journal.domain.clock import FixedClock
from journal.logs import ensure_log_schema
from journal.services.config_svc import ensure_default_config


@pytest.fixture()
def clock():
    return FixedClock(dt.datetime(2024, 1, 10, 9, 30, 0))


@pytest.fixture()
def store(tmp_path):
    s = Store.open(str(tmp_path / "journal_test.db"))
    ensure_log_schema(s)
    ensure_default_config(s)
    yield s
    s.close()


@pytest.fixture()
def client(tmp_path, monkeypatch, clock):
    # Point the app at a throwaway DB before startup opens it
    monkeypatch.setenv("JOURNAL_DB_PATH", str(tmp_path / "api_test.db"))
    from fastapi.testclient import TestClient
    from journal.api import app

    with TestClient(app) as c:
        app.state.clock = clock
        yield c
