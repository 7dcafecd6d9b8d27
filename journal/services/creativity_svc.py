from __future__ import annotations

import logging
from typing import Any, Optional

from ..db import Store
from ..domain.clock import Clock, normalize_date
from ..domain.streak import compute_streak
from ..errors import NotFound
from ..repository import creativity_repo
from .utils import require_text, row_to_dict, rows_to_dicts

logger = logging.getLogger(__name__)


class CreativityService:
    """Creativity journal: one entry per calendar day, saved as an upsert."""

    def __init__(self, store: Store, clock: Optional[Clock] = None):
        self.store = store
        self.clock = clock or Clock()

    def save(self, text: str, entry_date) -> dict[str, Any]:
        """Insert the day's entry, or replace its text if the day already has one.

        created_at is kept on update; only updated_at moves.
        """
        text = require_text(text)
        day = normalize_date(entry_date)
        now = self.clock.timestamp()
        with self.store.transaction() as conn:
            existing = creativity_repo.get_by_date(conn, day)
            if existing is None:
                entry_id = creativity_repo.insert(conn, text, day, now)
            else:
                entry_id = existing["id"]
                creativity_repo.update_text(conn, entry_id, text, now)
            return row_to_dict(creativity_repo.get_one(conn, entry_id))

    def add(self, text: str) -> dict[str, Any]:
        return self.save(text, self.clock.today())

    def get_by_id(self, entry_id: int) -> dict[str, Any]:
        row = creativity_repo.get_one(self.store.conn, entry_id)
        if row is None:
            raise NotFound("creativity_entry", entry_id)
        return dict(row)

    def get_by_date(self, entry_date) -> Optional[dict[str, Any]]:
        return row_to_dict(creativity_repo.get_by_date(self.store.conn, normalize_date(entry_date)))

    def has_entry_for_date(self, entry_date) -> bool:
        return creativity_repo.count_for_date(self.store.conn, normalize_date(entry_date)) > 0

    def list_all(self) -> list[dict[str, Any]]:
        return rows_to_dicts(creativity_repo.list_all(self.store.conn))

    def update(self, entry_id: int, text: str) -> dict[str, Any]:
        text = require_text(text)
        conn = self.store.conn
        if creativity_repo.update_text(conn, entry_id, text, self.clock.timestamp()) == 0:
            raise NotFound("creativity_entry", entry_id)
        return row_to_dict(creativity_repo.get_one(conn, entry_id))

    def delete(self, entry_id: int) -> None:
        if creativity_repo.delete(self.store.conn, entry_id) == 0:
            raise NotFound("creativity_entry", entry_id)

    def streak(self) -> int:
        return compute_streak(creativity_repo.distinct_dates(self.store.conn), self.clock.today())
