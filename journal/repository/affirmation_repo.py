from __future__ import annotations

from sqlite3 import Connection

_COLS = "id, text, created_at, updated_at"


def insert(conn: Connection, text: str, now: str) -> int:
    cur = conn.execute(
        "INSERT INTO affirmations(text, created_at, updated_at) VALUES(?,?,?)",
        (text, now, now),
    )
    return int(cur.lastrowid)


def get_one(conn: Connection, affirmation_id: int):
    return conn.execute(f"SELECT {_COLS} FROM affirmations WHERE id=?", (affirmation_id,)).fetchone()


def list_all(conn: Connection):
    return conn.execute(f"SELECT {_COLS} FROM affirmations ORDER BY created_at DESC, id DESC").fetchall()


def latest(conn: Connection):
    """The "active" affirmation: most recently created, no explicit flag."""
    return conn.execute(
        f"SELECT {_COLS} FROM affirmations ORDER BY created_at DESC, id DESC LIMIT 1"
    ).fetchone()


def exists(conn: Connection, affirmation_id: int) -> bool:
    return conn.execute("SELECT 1 FROM affirmations WHERE id=?", (affirmation_id,)).fetchone() is not None


def update_text(conn: Connection, affirmation_id: int, text: str, now: str) -> int:
    cur = conn.execute(
        "UPDATE affirmations SET text=?, updated_at=? WHERE id=?",
        (text, now, affirmation_id),
    )
    return cur.rowcount


def delete(conn: Connection, affirmation_id: int) -> int:
    return conn.execute("DELETE FROM affirmations WHERE id=?", (affirmation_id,)).rowcount


def count_all(conn: Connection) -> int:
    return int(conn.execute("SELECT COUNT(1) AS c FROM affirmations").fetchone()["c"])
