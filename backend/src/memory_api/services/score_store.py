"""Key naming and record (de)serialization for daily scores and month indexes.

The key layout is shared with data written by earlier deployments and must
not change:

    memory:score:<userId>:<YYYY-MM-DD>        -> {"date", "highestScore", "updatedAt"}
    memory:score-index:<userId>:<YYYY-MM>     -> ["YYYY-MM-DD", ...]
"""

from __future__ import annotations

from typing import List, Optional

from ..core.kv import KeyValueStore
from ..models.scores import DailyScore

DAILY_PREFIX = "memory:score"
INDEX_PREFIX = "memory:score-index"


def daily_key(user_id: str, day: str) -> str:
    return f"{DAILY_PREFIX}:{user_id}:{day}"


def month_index_key(user_id: str, month: str) -> str:
    return f"{INDEX_PREFIX}:{user_id}:{month}"


class ScoreRecordStore:
    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv

    async def get_daily(self, user_id: str, day: str) -> Optional[DailyScore]:
        raw = await self.kv.get(daily_key(user_id, day))
        if not raw:
            return None
        return DailyScore.model_validate(raw)

    async def set_daily(self, user_id: str, day: str, record: DailyScore) -> None:
        await self.kv.set(daily_key(user_id, day), record.to_record())

    async def get_month_index(self, user_id: str, month: str) -> List[str]:
        raw = await self.kv.get(month_index_key(user_id, month))
        return list(raw or [])

    async def append_month_index(self, user_id: str, month: str, day: str) -> None:
        """Read-modify-write; not atomic against concurrent writers.

        A date already present is not appended again, which narrows (but does
        not close) the first-of-day race between two concurrent recorders.
        """
        dates = await self.get_month_index(user_id, month)
        if day in dates:
            return
        dates.append(day)
        await self.kv.set(month_index_key(user_id, month), dates)
