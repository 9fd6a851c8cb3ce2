from fastapi import APIRouter

router = APIRouter()


@router.get("/health", summary="Service reachable?")
def health():
    return {"status": "ok"}
