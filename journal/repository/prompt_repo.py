from __future__ import annotations

from sqlite3 import Connection

_COLS = "id, text, assigned_date, created_at"


def insert(conn: Connection, text: str, created_at: str) -> int:
    cur = conn.execute(
        "INSERT INTO prompts(text, created_at) VALUES(?, ?)",
        (text, created_at),
    )
    return int(cur.lastrowid)


def get_one(conn: Connection, prompt_id: int):
    return conn.execute(f"SELECT {_COLS} FROM prompts WHERE id=?", (prompt_id,)).fetchone()


def list_all(conn: Connection):
    return conn.execute(f"SELECT {_COLS} FROM prompts ORDER BY created_at DESC, id DESC").fetchall()


def count_all(conn: Connection) -> int:
    return int(conn.execute("SELECT COUNT(1) AS c FROM prompts").fetchone()["c"])


def exists(conn: Connection, prompt_id: int) -> bool:
    return conn.execute("SELECT 1 FROM prompts WHERE id=?", (prompt_id,)).fetchone() is not None


def update_text(conn: Connection, prompt_id: int, text: str) -> int:
    cur = conn.execute("UPDATE prompts SET text=? WHERE id=?", (text, prompt_id))
    return cur.rowcount


def delete(conn: Connection, prompt_id: int) -> int:
    cur = conn.execute("DELETE FROM prompts WHERE id=?", (prompt_id,))
    return cur.rowcount


def get_assigned_on(conn: Connection, day: str):
    return conn.execute(
        f"SELECT {_COLS} FROM prompts WHERE assigned_date=? ORDER BY id LIMIT 1",
        (day,),
    ).fetchone()


def pick_random_unassigned(conn: Connection):
    return conn.execute(
        f"SELECT {_COLS} FROM prompts WHERE assigned_date IS NULL ORDER BY RANDOM() LIMIT 1"
    ).fetchone()


def pick_random(conn: Connection):
    return conn.execute(f"SELECT {_COLS} FROM prompts ORDER BY RANDOM() LIMIT 1").fetchone()


def assign_date(conn: Connection, prompt_id: int, day: str) -> int:
    # only ever fills a NULL; an assigned prompt keeps its day forever
    cur = conn.execute(
        "UPDATE prompts SET assigned_date=? WHERE id=? AND assigned_date IS NULL",
        (day, prompt_id),
    )
    return cur.rowcount


def count_unassigned(conn: Connection) -> int:
    return int(conn.execute("SELECT COUNT(1) AS c FROM prompts WHERE assigned_date IS NULL").fetchone()["c"])
