from __future__ import annotations

from sqlite3 import Connection

_COLS = "id, prompt_id, text, created_at, updated_at"
# timestamps are stored as local "YYYY-MM-DD HH:MM:SS.ffffff"
_DAY = "substr(created_at, 1, 10)"


def insert(conn: Connection, prompt_id: int, text: str, now: str) -> int:
    cur = conn.execute(
        "INSERT INTO responses(prompt_id, text, created_at, updated_at) VALUES(?,?,?,?)",
        (prompt_id, text, now, now),
    )
    return int(cur.lastrowid)


def get_one(conn: Connection, response_id: int):
    return conn.execute(f"SELECT {_COLS} FROM responses WHERE id=?", (response_id,)).fetchone()


def list_all(conn: Connection):
    return conn.execute(f"SELECT {_COLS} FROM responses ORDER BY created_at DESC, id DESC").fetchall()


def list_for_prompt(conn: Connection, prompt_id: int):
    return conn.execute(
        f"SELECT {_COLS} FROM responses WHERE prompt_id=? ORDER BY created_at DESC, id DESC",
        (prompt_id,),
    ).fetchall()


def list_between(conn: Connection, start_day: str, end_day: str):
    return conn.execute(
        f"SELECT {_COLS} FROM responses WHERE {_DAY} >= ? AND {_DAY} <= ? "
        "ORDER BY created_at DESC, id DESC",
        (start_day, end_day),
    ).fetchall()


def latest_on(conn: Connection, day: str):
    return conn.execute(
        f"SELECT {_COLS} FROM responses WHERE {_DAY} = ? ORDER BY created_at DESC, id DESC LIMIT 1",
        (day,),
    ).fetchone()


def update_text(conn: Connection, response_id: int, text: str, now: str) -> int:
    cur = conn.execute(
        "UPDATE responses SET text=?, updated_at=? WHERE id=?",
        (text, now, response_id),
    )
    return cur.rowcount


def delete(conn: Connection, response_id: int) -> int:
    return conn.execute("DELETE FROM responses WHERE id=?", (response_id,)).rowcount


def delete_for_prompt(conn: Connection, prompt_id: int) -> int:
    return conn.execute("DELETE FROM responses WHERE prompt_id=?", (prompt_id,)).rowcount


def count_all(conn: Connection) -> int:
    return int(conn.execute("SELECT COUNT(1) AS c FROM responses").fetchone()["c"])


def counts_by_day(conn: Connection):
    return conn.execute(
        f"SELECT {_DAY} AS day, COUNT(1) AS n FROM responses GROUP BY day ORDER BY day DESC"
    ).fetchall()
