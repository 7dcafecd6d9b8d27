from __future__ import annotations

import logging
from typing import Any, Optional

from ..db import Store
from ..domain.clock import Clock
from ..domain.streak import compute_streak
from ..errors import NotFound
from ..repository import affirmation_repo, completion_repo
from .utils import require_text, row_to_dict, rows_to_dicts

logger = logging.getLogger(__name__)


class AffirmationService:
    """
    Affirmations and their completion log.

    There is no "active" flag: the active affirmation is simply the newest
    row, so saving a new one replaces it while keeping the full history.
    Completions are append-only; several on one day count as one day.
    """

    def __init__(self, store: Store, clock: Optional[Clock] = None):
        self.store = store
        self.clock = clock or Clock()

    def add(self, text: str) -> dict[str, Any]:
        text = require_text(text)
        conn = self.store.conn
        new_id = affirmation_repo.insert(conn, text, self.clock.timestamp())
        return row_to_dict(affirmation_repo.get_one(conn, new_id))

    save = add

    def get_by_id(self, affirmation_id: int) -> dict[str, Any]:
        row = affirmation_repo.get_one(self.store.conn, affirmation_id)
        if row is None:
            raise NotFound("affirmation", affirmation_id)
        return dict(row)

    def list_all(self) -> list[dict[str, Any]]:
        return rows_to_dicts(affirmation_repo.list_all(self.store.conn))

    def active(self) -> Optional[dict[str, Any]]:
        return row_to_dict(affirmation_repo.latest(self.store.conn))

    def update(self, affirmation_id: int, text: str) -> dict[str, Any]:
        text = require_text(text)
        conn = self.store.conn
        if affirmation_repo.update_text(conn, affirmation_id, text, self.clock.timestamp()) == 0:
            raise NotFound("affirmation", affirmation_id)
        return row_to_dict(affirmation_repo.get_one(conn, affirmation_id))

    def delete(self, affirmation_id: int) -> int:
        """Delete the affirmation and its completion logs; returns logs removed."""
        with self.store.transaction() as conn:
            if not affirmation_repo.exists(conn, affirmation_id):
                raise NotFound("affirmation", affirmation_id)
            removed = completion_repo.delete_for_affirmation(conn, affirmation_id)
            affirmation_repo.delete(conn, affirmation_id)
        logger.info("deleted affirmation %s with %d completion logs", affirmation_id, removed)
        return removed

    # completion log

    def log_completion(self, affirmation_id: int) -> dict[str, Any]:
        with self.store.transaction() as conn:
            if not affirmation_repo.exists(conn, affirmation_id):
                raise NotFound("affirmation", affirmation_id)
            log_id = completion_repo.insert(conn, affirmation_id, self.clock.timestamp())
            return row_to_dict(completion_repo.get_one(conn, log_id))

    def completed_today(self, affirmation_id: Optional[int] = None) -> bool:
        """
        True when any completion was logged today.

        The day check is not scoped to `affirmation_id`: completing any
        affirmation marks every affirmation as done for today. The argument
        is accepted so callers can pass the affirmation they display.
        """
        return completion_repo.count_on_day(self.store.conn, self.clock.today_str()) > 0

    def list_logs(self, affirmation_id: Optional[int] = None) -> list[dict[str, Any]]:
        conn = self.store.conn
        if affirmation_id is None:
            return rows_to_dicts(completion_repo.list_all(conn))
        return rows_to_dicts(completion_repo.list_for_affirmation(conn, affirmation_id))

    def delete_log(self, log_id: int) -> None:
        if completion_repo.delete(self.store.conn, log_id) == 0:
            raise NotFound("completion_log", log_id)

    def streak(self) -> int:
        days = completion_repo.distinct_days(self.store.conn)
        return compute_streak(days, self.clock.today())
