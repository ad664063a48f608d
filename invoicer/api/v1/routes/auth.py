# invoicer/api/v1/routes/auth.py
"""
User authentication endpoints: register, login, refresh, profile.

bcrypt for password hashing and jose for JWT (see ``domain.services.auth``).
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from jose import JWTError

from invoicer.config.settings import settings
from invoicer.domain.services.auth import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from invoicer.infrastructure.db.models import User
from invoicer.infrastructure.db.repositories import UserRepository

from invoicer.api.v1.deps import get_current_user, user_repo
from invoicer.api.v1.envelope import ok
from invoicer.api.v1.schemas.auth import (
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserProfile,
)

logger = logging.getLogger("api.v1.auth")

router = APIRouter(prefix="/auth", tags=["Auth"])


def _token_pair(user_id: str) -> dict:
    access_token, expires_in = create_access_token(user_id)
    return TokenResponse(
        access_token=access_token,
        refresh_token=create_refresh_token(user_id),
        expires_in=expires_in,
    ).model_dump()


@router.post("/register", response_model=dict, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, users: UserRepository = Depends(user_repo)):
    """Create an account; the business profile is filled in later via ``/business``."""
    if await users.get_by_email(body.email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )

    user = await users.create(
        email=body.email,
        password_hash=hash_password(body.password),
        name=body.name,
        business_state=settings.DEFAULT_BUSINESS_STATE,
    )
    logger.info("New user registered: %s", user.id)

    return ok(data=_token_pair(str(user.id)), message="Registration successful")


@router.post("/login", response_model=dict)
async def login(body: LoginRequest, users: UserRepository = Depends(user_repo)):
    user = await users.get_by_email(body.email)
    if not user or not verify_password(body.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    return ok(data=_token_pair(str(user.id)))


@router.post("/refresh", response_model=dict)
async def refresh(body: RefreshRequest, users: UserRepository = Depends(user_repo)):
    """Exchange a valid refresh token for a new access + refresh pair."""
    try:
        payload = decode_token(body.refresh_token)
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )

    if payload.get("type") != REFRESH_TOKEN_TYPE:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
        )

    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing subject",
        )

    if await users.get_by_id(user_id) is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return ok(data=_token_pair(str(user_id)))


@router.get("/me", response_model=dict)
async def me(user: User = Depends(get_current_user)):
    profile = UserProfile(
        id=str(user.id),
        email=user.email,
        name=user.name,
        business_name=user.business_name,
        business_state=user.business_state,
        created_at=user.created_at,
    )
    return ok(data=profile.model_dump())
