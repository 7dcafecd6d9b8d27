from __future__ import annotations

from sqlite3 import Connection
from typing import Optional

_COLS = "id, text, entry_date, created_at"


def insert(conn: Connection, text: str, entry_date: str, created_at: str) -> int:
    cur = conn.execute(
        "INSERT INTO gratitude_items(text, entry_date, created_at) VALUES(?,?,?)",
        (text, entry_date, created_at),
    )
    return int(cur.lastrowid)


def get_one(conn: Connection, item_id: int):
    return conn.execute(f"SELECT {_COLS} FROM gratitude_items WHERE id=?", (item_id,)).fetchone()


def list_all(conn: Connection):
    return conn.execute(f"SELECT {_COLS} FROM gratitude_items ORDER BY created_at DESC, id DESC").fetchall()


def list_for_date(conn: Connection, entry_date: str):
    return conn.execute(
        f"SELECT {_COLS} FROM gratitude_items WHERE entry_date=? ORDER BY created_at ASC, id ASC",
        (entry_date,),
    ).fetchall()


def count_for_date(conn: Connection, entry_date: str) -> int:
    return int(
        conn.execute("SELECT COUNT(1) AS c FROM gratitude_items WHERE entry_date=?", (entry_date,)).fetchone()["c"]
    )


def distinct_dates(conn: Connection, limit: Optional[int] = None) -> list[str]:
    sql = "SELECT DISTINCT entry_date FROM gratitude_items ORDER BY entry_date DESC"
    params: tuple = ()
    if limit is not None:
        sql += " LIMIT ?"
        params = (limit,)
    return [r["entry_date"] for r in conn.execute(sql, params).fetchall()]


def update_text(conn: Connection, item_id: int, text: str) -> int:
    return conn.execute("UPDATE gratitude_items SET text=? WHERE id=?", (text, item_id)).rowcount


def delete(conn: Connection, item_id: int) -> int:
    return conn.execute("DELETE FROM gratitude_items WHERE id=?", (item_id,)).rowcount


def count_all(conn: Connection) -> int:
    return int(conn.execute("SELECT COUNT(1) AS c FROM gratitude_items").fetchone()["c"])


def counts_by_day(conn: Connection):
    return conn.execute(
        "SELECT entry_date AS day, COUNT(1) AS n FROM gratitude_items GROUP BY day ORDER BY day DESC"
    ).fetchall()
