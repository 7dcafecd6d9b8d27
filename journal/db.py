from __future__ import annotations

# journal/db.py
import logging
import os
import sqlite3
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar

import yaml

from .errors import StorageUnavailable
from .repository import schema

logger = logging.getLogger(__name__)

T = TypeVar("T")

# DB path resolution order:
# 1) env JOURNAL_DB_PATH (highest priority)
# 2) config.yaml test_db_path (when running under tests)
# 3) config.yaml db_path
# 4) fallback: journal.db at the project root
_PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
_ROOT_DB = os.path.join(_PROJECT_ROOT, "journal.db")


def _read_config_yaml() -> dict:
    cfg_path = os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("ignoring unreadable config.yaml: %s", e)
        return {}
    out = {}
    for k in ("db_path", "test_db_path"):
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    return out


def get_db_path() -> str:
    env_path = os.environ.get("JOURNAL_DB_PATH")
    cfg = _read_config_yaml()
    is_test = (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)

    if env_path:
        path = env_path
    elif is_test and cfg.get("test_db_path"):
        path = cfg["test_db_path"]
    elif cfg.get("db_path"):
        path = cfg["db_path"]
    else:
        path = _ROOT_DB

    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


class LockedConnection:
    """The shared connection with every statement taken under the store lock.

    A thread that holds an open `transaction()` keeps the lock until COMMIT or
    ROLLBACK, so another thread's autocommit statement waits instead of
    landing inside that transaction.
    """

    def __init__(self, raw: sqlite3.Connection, lock: threading.RLock):
        self._raw = raw
        self._lock = lock

    def execute(self, sql: str, params=()) -> sqlite3.Cursor:
        with self._lock:
            return self._raw.execute(sql, params)

    def executescript(self, script: str) -> sqlite3.Cursor:
        with self._lock:
            return self._raw.executescript(script)

    @property
    def in_transaction(self) -> bool:
        return self._raw.in_transaction


class Store:
    """Owns the single SQLite connection and the transaction boundaries.

    The connection runs in autocommit mode; `transaction()` opens an explicit
    BEGIN/COMMIT scope and rolls back on any exception, including
    KeyboardInterrupt. Nested scopes join the outer one. All access goes
    through `conn`, which serialises statements across threads.
    """

    def __init__(self, conn: sqlite3.Connection, path: str):
        self._raw: sqlite3.Connection | None = conn
        self.path = path
        self._lock = threading.RLock()
        self._conn = LockedConnection(conn, self._lock)

    @classmethod
    def open(cls, path: str) -> "Store":
        try:
            conn = sqlite3.connect(path, check_same_thread=False, isolation_level=None)
        except sqlite3.Error as e:
            raise StorageUnavailable(f"cannot open {path}: {e}") from e
        try:
            conn.execute("PRAGMA foreign_keys = ON;")
            conn.row_factory = sqlite3.Row
            schema.ensure_schema(conn)
        except sqlite3.Error as e:
            conn.close()
            raise StorageUnavailable(f"cannot initialise {path}: {e}") from e
        logger.info("opened journal store at %s", path)
        return cls(conn, path)

    @property
    def conn(self) -> LockedConnection:
        if self._raw is None:
            raise StorageUnavailable("store is closed")
        return self._conn

    @property
    def closed(self) -> bool:
        return self._raw is None

    def close(self) -> None:
        with self._lock:
            if self._raw is None:
                return
            self._raw.close()
            self._raw = None
        logger.info("closed journal store at %s", self.path)

    @contextmanager
    def transaction(self) -> Iterator[LockedConnection]:
        with self._lock:
            conn = self.conn
            if conn.in_transaction:
                yield conn
                return
            conn.execute("BEGIN")
            try:
                yield conn
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")

    def with_transaction(self, fn: Callable[[LockedConnection], T]) -> T:
        with self.transaction() as conn:
            return fn(conn)

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
