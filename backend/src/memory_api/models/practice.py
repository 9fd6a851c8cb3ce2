from __future__ import annotations

from typing import List

from pydantic import Field

from .scores import CamelModel


class GridResponse(CamelModel):
    rows: int
    cols: int
    words: List[List[str]]


class GradeRequest(CamelModel):
    words: List[List[str]] = Field(min_length=1)
    answers: List[List[str]] = []


class MistakeRead(CamelModel):
    row: int
    col: int
    correct_word: str
    user_answer: str


class GradeResponse(CamelModel):
    correct: int
    total: int
    incorrect: int
    percentage: int
    mistakes: List[MistakeRead]
