# invoicer/api/v1/deps.py
"""
FastAPI dependencies for the v1 API layer.

``get_current_user`` reads ``Authorization: Bearer <jwt>`` and returns the
authenticated :class:`User`; the ``*_repo`` helpers bind repositories to the
request's session.
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from invoicer.core.db import get_db
from invoicer.domain.services.auth import ACCESS_TOKEN_TYPE, decode_token
from invoicer.infrastructure.db.models import User
from invoicer.infrastructure.db.repositories import (
    CustomerRepository,
    FrequentlyUsedItemRepository,
    HsnSacRepository,
    InvoiceRepository,
    UserRepository,
)

logger = logging.getLogger("api.v1.deps")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    authorization: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Validate the bearer token and load its user.

    Raises HTTP 401 if the token is missing, invalid, expired, of the wrong
    type, or the user no longer exists.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise _unauthorized("Missing or invalid Authorization header. Expected: Bearer <token>")

    token = authorization[7:]  # strip "Bearer "

    try:
        payload = decode_token(token)
    except JWTError as exc:
        logger.debug("JWT decode failed: %s", exc)
        raise _unauthorized("Invalid or expired token")

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise _unauthorized("Invalid token type")

    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError:
        raise _unauthorized("Token missing subject")

    user = await UserRepository(db).get_by_id(user_id)
    if user is None:
        raise _unauthorized("User not found")

    return user


def user_repo(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def customer_repo(db: AsyncSession = Depends(get_db)) -> CustomerRepository:
    return CustomerRepository(db)


def invoice_repo(db: AsyncSession = Depends(get_db)) -> InvoiceRepository:
    return InvoiceRepository(db)


def hsn_sac_repo(db: AsyncSession = Depends(get_db)) -> HsnSacRepository:
    return HsnSacRepository(db)


def frequent_item_repo(db: AsyncSession = Depends(get_db)) -> FrequentlyUsedItemRepository:
    return FrequentlyUsedItemRepository(db)
