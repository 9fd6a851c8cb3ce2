"""Read-only views over the persisted daily scores.

Index and daily records can disagree (an interrupted recorder, a partial
store failure), so every view drops index entries whose daily record is
missing instead of failing.
"""

from __future__ import annotations

import asyncio
import math
from datetime import date
from fractions import Fraction
from typing import (
    Awaitable,
    Callable,
    Dict,
    Hashable,
    Iterable,
    List,
    Optional,
    Sequence,
    TypeVar,
    Union,
)

from ..models.scores import DailyScore, DayScore, HeatmapResult, MonthlySummary
from ..utils.dates import day_window, is_day, is_month, months_spanned
from .errors import InputValidationError
from .score_store import ScoreRecordStore

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

MAX_RECENT_DAYS = 90
MAX_HEATMAP_DAYS = 366


async def fan_out(keys: Iterable[K], fetch: Callable[[K], Awaitable[V]]) -> Dict[K, V]:
    """Run ``fetch`` for every distinct key concurrently; results keyed by origin."""

    async def _one(key: K):
        return key, await fetch(key)

    unique = list(dict.fromkeys(keys))
    pairs = await asyncio.gather(*(_one(key) for key in unique))
    return dict(pairs)


def _average(values: Sequence[Union[int, float]]) -> Union[int, float]:
    """Mean rounded half up to 2 decimals, like ``Math.round(x * 100) / 100``.

    Summed exactly, so integer scores beyond float range still average; such
    a mean comes back as a whole ``int``.
    """
    mean = sum(Fraction(v) for v in values) / len(values)
    cents = math.floor(mean * 100 + Fraction(1, 2))
    if abs(cents) > 10 ** 300:
        return cents // 100
    return cents / 100


class ScoreAggregator:
    def __init__(
        self,
        records: ScoreRecordStore,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.records = records
        self._today = today

    async def _fetch_days(self, user_id: str, days: Iterable[str]) -> Dict[str, Optional[DailyScore]]:
        return await fan_out(days, lambda d: self.records.get_daily(user_id, d))

    async def get_daily_score(self, user_id: str, day: str) -> Optional[DailyScore]:
        if not is_day(day):
            raise InputValidationError('"date" must be YYYY-MM-DD')
        return await self.records.get_daily(user_id, day)

    async def get_monthly_summary(self, user_id: str, month: str) -> MonthlySummary:
        if not is_month(month):
            raise InputValidationError('"month" must be YYYY-MM')

        dates = await self.records.get_month_index(user_id, month)
        if not dates:
            return MonthlySummary(month=month)

        fetched = await self._fetch_days(user_id, dates)
        valid = [fetched[d] for d in sorted(fetched) if fetched[d] is not None]
        if not valid:
            return MonthlySummary(month=month)

        values = [s.highest_score for s in valid]
        return MonthlySummary(
            month=month,
            practice_days=len(valid),
            best_score=max(values),
            average_score=_average(values),
            daily_scores=valid,
        )

    async def get_heatmap(
        self, user_id: str, from_day: Optional[str], to_day: Optional[str]
    ) -> HeatmapResult:
        if not from_day or not to_day:
            raise InputValidationError('"from" and "to" query params are required')
        if not is_day(from_day) or not is_day(to_day):
            raise InputValidationError('"from" and "to" must be YYYY-MM-DD')
        if from_day > to_day:
            raise InputValidationError('"from" must be before "to"')
        span = (date.fromisoformat(to_day) - date.fromisoformat(from_day)).days + 1
        if span > MAX_HEATMAP_DAYS:
            raise InputValidationError(f"Heatmap range is limited to {MAX_HEATMAP_DAYS} days")

        months = months_spanned(from_day, to_day)
        indexes = await fan_out(months, lambda m: self.records.get_month_index(user_id, m))

        in_range = [
            d for month in months for d in indexes[month] if from_day <= d <= to_day
        ]
        if not in_range:
            return HeatmapResult(scores={}, from_=from_day, to=to_day)

        fetched = await self._fetch_days(user_id, in_range)
        scores = {
            d: record.highest_score
            for d, record in sorted(fetched.items())
            if record is not None
        }
        return HeatmapResult(scores=scores, from_=from_day, to=to_day)

    async def get_recent_days(
        self, user_id: str, end: Optional[str] = None, days: int = 7
    ) -> List[DayScore]:
        """Best score per day for the ``days``-long window ending at ``end``.

        Days without practice are returned with ``score=None``.
        """
        if not 1 <= days <= MAX_RECENT_DAYS:
            raise InputValidationError(f'"days" must be between 1 and {MAX_RECENT_DAYS}')
        if end is None:
            end_day = self._today()
        elif is_day(end):
            end_day = date.fromisoformat(end)
        else:
            raise InputValidationError('"end" must be YYYY-MM-DD')

        window = day_window(end_day, days)
        fetched = await self._fetch_days(user_id, window)
        return [
            DayScore(date=d, score=None if fetched[d] is None else fetched[d].highest_score)
            for d in window
        ]
