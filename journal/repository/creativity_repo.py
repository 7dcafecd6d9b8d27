from __future__ import annotations

from sqlite3 import Connection

_COLS = "id, text, entry_date, created_at, updated_at"


def insert(conn: Connection, text: str, entry_date: str, now: str) -> int:
    cur = conn.execute(
        "INSERT INTO creativity_entries(text, entry_date, created_at, updated_at) VALUES(?,?,?,?)",
        (text, entry_date, now, now),
    )
    return int(cur.lastrowid)


def get_one(conn: Connection, entry_id: int):
    return conn.execute(f"SELECT {_COLS} FROM creativity_entries WHERE id=?", (entry_id,)).fetchone()


def get_by_date(conn: Connection, entry_date: str):
    return conn.execute(
        f"SELECT {_COLS} FROM creativity_entries WHERE entry_date=? ORDER BY id LIMIT 1",
        (entry_date,),
    ).fetchone()


def list_all(conn: Connection):
    return conn.execute(
        f"SELECT {_COLS} FROM creativity_entries ORDER BY created_at DESC, id DESC"
    ).fetchall()


def update_text(conn: Connection, entry_id: int, text: str, now: str) -> int:
    cur = conn.execute(
        "UPDATE creativity_entries SET text=?, updated_at=? WHERE id=?",
        (text, now, entry_id),
    )
    return cur.rowcount


def delete(conn: Connection, entry_id: int) -> int:
    return conn.execute("DELETE FROM creativity_entries WHERE id=?", (entry_id,)).rowcount


def count_for_date(conn: Connection, entry_date: str) -> int:
    return int(
        conn.execute("SELECT COUNT(1) AS c FROM creativity_entries WHERE entry_date=?", (entry_date,)).fetchone()["c"]
    )


def distinct_dates(conn: Connection) -> list[str]:
    rows = conn.execute("SELECT DISTINCT entry_date FROM creativity_entries ORDER BY entry_date DESC").fetchall()
    return [r["entry_date"] for r in rows]


def count_all(conn: Connection) -> int:
    return int(conn.execute("SELECT COUNT(1) AS c FROM creativity_entries").fetchone()["c"])


def counts_by_day(conn: Connection):
    return conn.execute(
        "SELECT entry_date AS day, COUNT(1) AS n FROM creativity_entries GROUP BY day ORDER BY day DESC"
    ).fetchall()
