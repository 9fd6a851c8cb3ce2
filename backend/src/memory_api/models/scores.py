from __future__ import annotations

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON field names are camelCase on the wire and in storage."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ----------------------------
# Persisted records
# ----------------------------

class DailyScore(CamelModel):
    date: str
    highest_score: Union[int, float]
    updated_at: int  # ms since epoch

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)


# ----------------------------
# Derived views
# ----------------------------

class MonthlySummary(CamelModel):
    month: str
    practice_days: int = 0
    best_score: Union[int, float] = 0
    average_score: Union[int, float] = 0
    daily_scores: List[DailyScore] = []


class HeatmapResult(BaseModel):
    scores: Dict[str, Union[int, float]] = {}
    from_: str = Field(alias="from")
    to: str

    model_config = ConfigDict(populate_by_name=True)


class DayScore(CamelModel):
    date: str
    score: Optional[Union[int, float]] = None


class RecentDays(CamelModel):
    days: List[DayScore]


# ----------------------------
# Request / response bodies
# ----------------------------

class RecordSessionRequest(CamelModel):
    score: Union[StrictInt, StrictFloat]
    date: Optional[str] = None


class RecordSessionResponse(CamelModel):
    success: bool = True
    updated: bool
