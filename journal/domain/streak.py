from __future__ import annotations

import datetime as dt
from typing import Iterable

from .clock import parse_date


def compute_streak(dates: Iterable, today: dt.date) -> int:
    """
    Count consecutive calendar days with activity, ending today or yesterday.

    `dates` are the days on which the activity happened (date objects or
    YYYY-MM-DD strings). Duplicates are collapsed and order is normalised to
    newest first, so raw per-event days can be passed straight in.

    - no dates -> 0
    - newest day older than yesterday -> 0 (the chain is broken)
    - otherwise 1 for the newest day, plus one for each following day that
      equals newest - i, stopping at the first gap
    """
    days = sorted({parse_date(d) for d in dates}, reverse=True)
    if not days:
        return 0

    anchor = days[0]
    if anchor < today - dt.timedelta(days=1):
        return 0

    streak = 1
    for i in range(1, len(days)):
        if days[i] != anchor - dt.timedelta(days=i):
            break
        streak += 1
    return streak
