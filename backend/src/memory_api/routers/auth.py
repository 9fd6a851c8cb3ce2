# backend/src/memory_api/routers/auth.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from ..models.users import AuthResponse, Credentials, PublicUser, VerifyRequest, VerifyResponse
from ..services.accounts import AccountService
from ..services.errors import AccountExistsError, AuthError, InputValidationError
from .deps import INTERNAL_ERROR, get_accounts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: Credentials, accounts: AccountService = Depends(get_accounts)):
    try:
        token, user = await accounts.register(payload.email, payload.password)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AccountExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception:
        logger.exception("Registration error")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    return AuthResponse(token=token, user=PublicUser(user_id=user.user_id, email=user.email))


@router.post("/login", response_model=AuthResponse, response_model_exclude_none=True)
async def login(payload: Credentials, accounts: AccountService = Depends(get_accounts)):
    try:
        token, user = await accounts.authenticate(payload.email, payload.password)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except Exception:
        logger.exception("Login error")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    return AuthResponse(token=token, user=PublicUser(email=user.email))


@router.post("/verify", response_model=VerifyResponse, response_model_exclude_none=True)
async def verify(payload: VerifyRequest, accounts: AccountService = Depends(get_accounts)):
    if not payload.token:
        raise HTTPException(status_code=400, detail="Token is required")
    try:
        email = accounts.verify(payload.token)
    except AuthError as e:
        body = VerifyResponse(valid=False, error=str(e))
        return JSONResponse(status_code=401, content=body.model_dump(by_alias=True, exclude_none=True))
    return VerifyResponse(valid=True, user=PublicUser(email=email))
