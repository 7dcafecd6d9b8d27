from __future__ import annotations

from sqlite3 import Connection

_COLS = "id, affirmation_id, completed_at"
_DAY = "substr(completed_at, 1, 10)"


def insert(conn: Connection, affirmation_id: int, completed_at: str) -> int:
    cur = conn.execute(
        "INSERT INTO completion_logs(affirmation_id, completed_at) VALUES(?, ?)",
        (affirmation_id, completed_at),
    )
    return int(cur.lastrowid)


def get_one(conn: Connection, log_id: int):
    return conn.execute(f"SELECT {_COLS} FROM completion_logs WHERE id=?", (log_id,)).fetchone()


def list_all(conn: Connection):
    return conn.execute(f"SELECT {_COLS} FROM completion_logs ORDER BY completed_at DESC, id DESC").fetchall()


def list_for_affirmation(conn: Connection, affirmation_id: int):
    return conn.execute(
        f"SELECT {_COLS} FROM completion_logs WHERE affirmation_id=? ORDER BY completed_at DESC, id DESC",
        (affirmation_id,),
    ).fetchall()


def delete(conn: Connection, log_id: int) -> int:
    return conn.execute("DELETE FROM completion_logs WHERE id=?", (log_id,)).rowcount


def delete_for_affirmation(conn: Connection, affirmation_id: int) -> int:
    return conn.execute("DELETE FROM completion_logs WHERE affirmation_id=?", (affirmation_id,)).rowcount


def count_on_day(conn: Connection, day: str) -> int:
    """Completions of any affirmation on `day`."""
    return int(
        conn.execute(f"SELECT COUNT(1) AS c FROM completion_logs WHERE {_DAY} = ?", (day,)).fetchone()["c"]
    )


def distinct_days(conn: Connection) -> list[str]:
    rows = conn.execute(f"SELECT DISTINCT {_DAY} AS day FROM completion_logs ORDER BY day DESC").fetchall()
    return [r["day"] for r in rows]


def count_all(conn: Connection) -> int:
    return int(conn.execute("SELECT COUNT(1) AS c FROM completion_logs").fetchone()["c"])


def counts_by_day(conn: Connection):
    return conn.execute(
        f"SELECT {_DAY} AS day, COUNT(1) AS n FROM completion_logs GROUP BY day ORDER BY day DESC"
    ).fetchall()
