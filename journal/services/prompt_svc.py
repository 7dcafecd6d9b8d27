from __future__ import annotations

import logging
from typing import Any, Optional

from ..db import Store
from ..domain.clock import Clock
from ..errors import NotFound
from ..repository import prompt_repo, response_repo
from .utils import require_text, row_to_dict, rows_to_dicts

logger = logging.getLogger(__name__)


class PromptService:
    """Reflection questions. Deleting a prompt removes its responses first."""

    def __init__(self, store: Store, clock: Optional[Clock] = None):
        self.store = store
        self.clock = clock or Clock()

    def add(self, text: str) -> dict[str, Any]:
        text = require_text(text)
        with self.store.transaction() as conn:
            new_id = prompt_repo.insert(conn, text, self.clock.timestamp())
            return row_to_dict(prompt_repo.get_one(conn, new_id))

    def get_by_id(self, prompt_id: int) -> dict[str, Any]:
        row = prompt_repo.get_one(self.store.conn, prompt_id)
        if row is None:
            raise NotFound("prompt", prompt_id)
        return dict(row)

    def list_all(self) -> list[dict[str, Any]]:
        return rows_to_dicts(prompt_repo.list_all(self.store.conn))

    def count(self) -> int:
        return prompt_repo.count_all(self.store.conn)

    def update(self, prompt_id: int, text: str) -> dict[str, Any]:
        text = require_text(text)
        conn = self.store.conn
        if prompt_repo.update_text(conn, prompt_id, text) == 0:
            raise NotFound("prompt", prompt_id)
        return row_to_dict(prompt_repo.get_one(conn, prompt_id))

    def delete(self, prompt_id: int) -> int:
        """Delete the prompt and all of its responses; returns responses removed."""
        with self.store.transaction() as conn:
            if not prompt_repo.exists(conn, prompt_id):
                raise NotFound("prompt", prompt_id)
            removed = response_repo.delete_for_prompt(conn, prompt_id)
            prompt_repo.delete(conn, prompt_id)
        logger.info("deleted prompt %s with %d responses", prompt_id, removed)
        return removed

    def random(self) -> dict[str, Any]:
        row = prompt_repo.pick_random(self.store.conn)
        if row is None:
            raise NotFound("prompt", "any")
        return dict(row)
