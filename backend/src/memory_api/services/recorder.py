from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from ..models.scores import DailyScore
from ..utils.dates import day_string, is_day, month_of
from ..utils.validators import is_number
from .errors import InputValidationError
from .score_store import ScoreRecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordResult:
    updated: bool


def _now_ms() -> int:
    return int(time.time() * 1000)


class SessionRecorder:
    """Keeps the best score of each day and the per-month list of practiced days."""

    def __init__(
        self,
        records: ScoreRecordStore,
        *,
        today: Callable[[], date] = date.today,
        now_ms: Callable[[], int] = _now_ms,
    ) -> None:
        self.records = records
        self._today = today
        self._now_ms = now_ms

    async def record_session(
        self, user_id: str, score, day: Optional[str] = None
    ) -> RecordResult:
        if not is_number(score):
            raise InputValidationError("Score is required")
        if not day:
            day = day_string(self._today())
        elif not is_day(day):
            raise InputValidationError('"date" must be YYYY-MM-DD')

        existing = await self.records.get_daily(user_id, day)
        if existing is not None and score <= existing.highest_score:
            return RecordResult(updated=False)

        record = DailyScore(date=day, highest_score=score, updated_at=self._now_ms())
        # daily record first, so the index never points at a missing day
        await self.records.set_daily(user_id, day, record)

        if existing is None:
            await self.records.append_month_index(user_id, month_of(day), day)

        logger.debug("Recorded score %s for %s on %s", score, user_id, day)
        return RecordResult(updated=True)
