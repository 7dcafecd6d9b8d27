from __future__ import annotations

import logging
from typing import Any, Optional

from ..db import Store
from ..domain.clock import Clock
from ..errors import ExhaustedPool
from ..repository import prompt_repo

logger = logging.getLogger(__name__)


class RotationSelector:
    """
    Picks the prompt of the day.

    A prompt moves Unassigned -> assigned to one day and never changes day
    again. The first call on a day draws one unassigned prompt uniformly at
    random and stamps it with today's date; every later call that day
    returns the same prompt. Draw and stamp run in one transaction.
    """

    def __init__(self, store: Store, clock: Optional[Clock] = None):
        self.store = store
        self.clock = clock or Clock()

    def select_for_today(self) -> dict[str, Any]:
        today = self.clock.today_str()
        with self.store.transaction() as conn:
            row = prompt_repo.get_assigned_on(conn, today)
            if row is not None:
                return dict(row)

            row = prompt_repo.pick_random_unassigned(conn)
            if row is None:
                logger.warning("prompt pool exhausted on %s", today)
                raise ExhaustedPool()
            prompt_repo.assign_date(conn, row["id"], today)
            chosen = prompt_repo.get_one(conn, row["id"])
        logger.info("assigned prompt %s to %s", chosen["id"], today)
        return dict(chosen)

    def remaining(self) -> int:
        """Prompts still available for future days."""
        return prompt_repo.count_unassigned(self.store.conn)
