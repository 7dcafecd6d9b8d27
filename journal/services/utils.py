from __future__ import annotations

# journal/services/utils.py
from sqlite3 import Row
from typing import Iterable, Optional

from ..errors import InvalidInput


def require_text(text) -> str:
    """Reject empty or whitespace-only content before any write."""
    if not isinstance(text, str) or not text.strip():
        raise InvalidInput("content must not be empty")
    return text


def require_positive(n, name: str = "n") -> int:
    try:
        value = int(n)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"{name} must be an integer") from e
    if value <= 0:
        raise InvalidInput(f"{name} must be positive")
    return value


def row_to_dict(row: Optional[Row]) -> Optional[dict]:
    return None if row is None else dict(row)


def rows_to_dicts(rows: Iterable[Row]) -> list[dict]:
    return [dict(r) for r in rows]
