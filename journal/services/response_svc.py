from __future__ import annotations

import logging
from typing import Any, Optional

from ..db import Store
from ..domain.clock import Clock, format_date, normalize_date
from ..errors import NotFound
from ..repository import prompt_repo, response_repo
from .utils import require_positive, require_text, row_to_dict, rows_to_dicts

logger = logging.getLogger(__name__)


class ResponseService:
    """Answers to prompts. A prompt keeps every answer ever written (history)."""

    def __init__(self, store: Store, clock: Optional[Clock] = None):
        self.store = store
        self.clock = clock or Clock()

    def add(self, prompt_id: int, text: str) -> dict[str, Any]:
        text = require_text(text)
        with self.store.transaction() as conn:
            if not prompt_repo.exists(conn, prompt_id):
                raise NotFound("prompt", prompt_id)
            new_id = response_repo.insert(conn, prompt_id, text, self.clock.timestamp())
            return row_to_dict(response_repo.get_one(conn, new_id))

    def get_by_id(self, response_id: int) -> dict[str, Any]:
        row = response_repo.get_one(self.store.conn, response_id)
        if row is None:
            raise NotFound("response", response_id)
        return dict(row)

    def list_all(self) -> list[dict[str, Any]]:
        return rows_to_dicts(response_repo.list_all(self.store.conn))

    def update(self, response_id: int, text: str) -> dict[str, Any]:
        text = require_text(text)
        conn = self.store.conn
        if response_repo.update_text(conn, response_id, text, self.clock.timestamp()) == 0:
            raise NotFound("response", response_id)
        return row_to_dict(response_repo.get_one(conn, response_id))

    def delete(self, response_id: int) -> None:
        if response_repo.delete(self.store.conn, response_id) == 0:
            raise NotFound("response", response_id)

    def history_for_prompt(self, prompt_id: int) -> list[dict[str, Any]]:
        return rows_to_dicts(response_repo.list_for_prompt(self.store.conn, prompt_id))

    def recent(self, days: int = 7) -> list[dict[str, Any]]:
        """Responses created within the last `days` calendar days, today included."""
        days = require_positive(days, "days")
        start = format_date(self.clock.days_back(days - 1))
        return rows_to_dicts(response_repo.list_between(self.store.conn, start, self.clock.today_str()))

    def for_date(self, day) -> list[dict[str, Any]]:
        day = normalize_date(day)
        return rows_to_dicts(response_repo.list_between(self.store.conn, day, day))

    def todays_answered(self) -> dict[str, Optional[dict[str, Any]]]:
        conn = self.store.conn
        response = response_repo.latest_on(conn, self.clock.today_str())
        if response is None:
            return {"response": None, "prompt": None}
        prompt = prompt_repo.get_one(conn, response["prompt_id"])
        return {"response": dict(response), "prompt": row_to_dict(prompt)}
