"""
Activity calendar and dashboard: per-day counts for every journal family
plus the three streaks.
"""
from __future__ import annotations

from typing import Any, Optional

import pandas as pd

from ..db import Store
from ..domain.clock import Clock, normalize_date
from ..repository import (
    affirmation_repo,
    completion_repo,
    creativity_repo,
    gratitude_repo,
    prompt_repo,
    response_repo,
)
from .affirmation_svc import AffirmationService
from .creativity_svc import CreativityService
from .gratitude_svc import GratitudeService

_DAILY_COUNTS = {
    "responses": response_repo.counts_by_day,
    "affirmations": completion_repo.counts_by_day,
    "gratitude": gratitude_repo.counts_by_day,
    "creativity": creativity_repo.counts_by_day,
}


class ActivityService:
    def __init__(self, store: Store, clock: Optional[Clock] = None):
        self.store = store
        self.clock = clock or Clock()

    def daily_activity(self, start=None, end=None) -> list[dict[str, Any]]:
        """One row per day with any activity, newest first, optionally bounded."""
        conn = self.store.conn
        series = {}
        for key, fetch in _DAILY_COUNTS.items():
            rows = fetch(conn)
            index = pd.Index([r["day"] for r in rows], dtype=object)
            series[key] = pd.Series([int(r["n"]) for r in rows], index=index, dtype="int64")
        df = pd.concat(series, axis=1).fillna(0).astype("int64")
        if df.empty:
            return []
        if start is not None:
            df = df[df.index >= normalize_date(start)]
        if end is not None:
            df = df[df.index <= normalize_date(end)]
        df = df.sort_index(ascending=False)
        out = []
        for day, r in df.iterrows():
            item = {"date": day}
            item.update({k: int(r[k]) for k in _DAILY_COUNTS})
            item["total"] = sum(item[k] for k in _DAILY_COUNTS)
            out.append(item)
        return out

    def summary(self) -> dict[str, Any]:
        conn = self.store.conn
        today = self.clock.today_str()
        affirmations = AffirmationService(self.store, self.clock)
        gratitude = GratitudeService(self.store, self.clock)
        creativity = CreativityService(self.store, self.clock)
        return {
            "date": today,
            "streaks": {
                "affirmation": affirmations.streak(),
                "gratitude": gratitude.streak(),
                "creativity": creativity.streak(),
            },
            "totals": {
                "prompts": prompt_repo.count_all(conn),
                "responses": response_repo.count_all(conn),
                "affirmations": affirmation_repo.count_all(conn),
                "completions": completion_repo.count_all(conn),
                "gratitude": gratitude_repo.count_all(conn),
                "creativity": creativity_repo.count_all(conn),
            },
            "today": {
                "answered": response_repo.latest_on(conn, today) is not None,
                "affirmation_completed": affirmations.completed_today(),
                "gratitude_count": gratitude.count_today(),
                "creativity_written": creativity.has_entry_for_date(today),
            },
        }
