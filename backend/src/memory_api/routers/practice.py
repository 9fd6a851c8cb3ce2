# backend/src/memory_api/routers/practice.py

from fastapi import APIRouter, Query

from ..models.practice import GradeRequest, GradeResponse, GridResponse, MistakeRead
from ..utils.words import MAX_GRID_SIDE, generate_grid, grade_recall

router = APIRouter(prefix="/api/practice", tags=["practice"])


@router.get("/grid", response_model=GridResponse, summary="Random word grid to memorize")
def get_grid(
    rows: int = Query(default=4, ge=1, le=MAX_GRID_SIDE),
    cols: int = Query(default=4, ge=1, le=MAX_GRID_SIDE),
):
    return GridResponse(rows=rows, cols=cols, words=generate_grid(rows, cols))


@router.post("/grade", response_model=GradeResponse, summary="Score a recall attempt")
def grade(payload: GradeRequest):
    result = grade_recall(payload.words, payload.answers)
    return GradeResponse(
        correct=result.correct,
        total=result.total,
        incorrect=result.incorrect,
        percentage=result.percentage,
        mistakes=[
            MistakeRead(
                row=m.row,
                col=m.col,
                correct_word=m.correct_word,
                user_answer=m.user_answer,
            )
            for m in result.mistakes
        ],
    )
