from __future__ import annotations

import logging
from typing import Any, Optional

from ..db import Store
from ..domain.clock import Clock, normalize_date
from ..domain.streak import compute_streak
from ..errors import NotFound, QuotaExceeded
from ..repository import gratitude_repo
from .utils import require_positive, require_text, row_to_dict, rows_to_dicts

logger = logging.getLogger(__name__)

DAILY_LIMIT = 5


class GratitudeService:
    """Gratitude journal: up to five short items per calendar day."""

    def __init__(self, store: Store, clock: Optional[Clock] = None):
        self.store = store
        self.clock = clock or Clock()

    def add(self, text: str, entry_date=None) -> dict[str, Any]:
        text = require_text(text)
        day = normalize_date(entry_date) if entry_date is not None else self.clock.today_str()
        with self.store.transaction() as conn:
            if gratitude_repo.count_for_date(conn, day) >= DAILY_LIMIT:
                logger.warning("gratitude quota reached for %s", day)
                raise QuotaExceeded(day, DAILY_LIMIT)
            new_id = gratitude_repo.insert(conn, text, day, self.clock.timestamp())
            return row_to_dict(gratitude_repo.get_one(conn, new_id))

    def get_by_id(self, item_id: int) -> dict[str, Any]:
        row = gratitude_repo.get_one(self.store.conn, item_id)
        if row is None:
            raise NotFound("gratitude_item", item_id)
        return dict(row)

    def list_all(self) -> list[dict[str, Any]]:
        return rows_to_dicts(gratitude_repo.list_all(self.store.conn))

    def update(self, item_id: int, text: str) -> dict[str, Any]:
        text = require_text(text)
        conn = self.store.conn
        if gratitude_repo.update_text(conn, item_id, text) == 0:
            raise NotFound("gratitude_item", item_id)
        return row_to_dict(gratitude_repo.get_one(conn, item_id))

    def delete(self, item_id: int) -> None:
        if gratitude_repo.delete(self.store.conn, item_id) == 0:
            raise NotFound("gratitude_item", item_id)

    def items_for_date(self, day) -> list[dict[str, Any]]:
        return rows_to_dicts(gratitude_repo.list_for_date(self.store.conn, normalize_date(day)))

    def today_items(self) -> list[dict[str, Any]]:
        return self.items_for_date(self.clock.today())

    def count_today(self) -> int:
        return gratitude_repo.count_for_date(self.store.conn, self.clock.today_str())

    def has_today(self) -> bool:
        return self.count_today() > 0

    def entries(self) -> list[dict[str, Any]]:
        """All items grouped by day, newest day first."""
        return self._grouped(gratitude_repo.distinct_dates(self.store.conn))

    def last_n_days(self, n: int) -> list[dict[str, Any]]:
        """The `n` most recent days that have items (not calendar days)."""
        n = require_positive(n, "n")
        return self._grouped(gratitude_repo.distinct_dates(self.store.conn, limit=n))

    def streak(self) -> int:
        return compute_streak(gratitude_repo.distinct_dates(self.store.conn), self.clock.today())

    def _grouped(self, days: list[str]) -> list[dict[str, Any]]:
        conn = self.store.conn
        return [{"date": d, "items": rows_to_dicts(gratitude_repo.list_for_date(conn, d))} for d in days]
