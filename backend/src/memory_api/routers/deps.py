from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request

from ..core.config import Settings
from ..core.kv import KeyValueStore, get_store
from ..models.users import UserRecord
from ..services.accounts import AccountService
from ..services.aggregator import ScoreAggregator
from ..services.recorder import SessionRecorder
from ..services.score_store import ScoreRecordStore

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_accounts(
    store: KeyValueStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> AccountService:
    return AccountService(store, settings)


def get_records(store: KeyValueStore = Depends(get_store)) -> ScoreRecordStore:
    return ScoreRecordStore(store)


def get_recorder(records: ScoreRecordStore = Depends(get_records)) -> SessionRecorder:
    return SessionRecorder(records)


def get_aggregator(records: ScoreRecordStore = Depends(get_records)) -> ScoreAggregator:
    return ScoreAggregator(records)


async def get_current_user(
    authorization: Optional[str] = Header(default=None),
    accounts: AccountService = Depends(get_accounts),
) -> UserRecord:
    try:
        user = await accounts.resolve_user(authorization)
    except Exception:
        logger.exception("Auth lookup error")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    if user is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user
