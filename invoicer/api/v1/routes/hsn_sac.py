# invoicer/api/v1/routes/hsn_sac.py
"""HSN/SAC code search, lookup and catalogue additions."""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status

from invoicer.domain.services.hsn_sac import (
    GST_RATE_OPTIONS,
    UNIT_OF_MEASUREMENT_OPTIONS,
    get_hsn_sac_by_code,
    hsn_sac_row_to_dict,
    merge_search_results,
)
from invoicer.infrastructure.db.models import User
from invoicer.infrastructure.db.repositories import HsnSacRepository

from invoicer.api.v1.deps import get_current_user, hsn_sac_repo
from invoicer.api.v1.envelope import ok
from invoicer.api.v1.schemas.hsn_sac import HsnSacCreate

logger = logging.getLogger("api.v1.hsn_sac")

router = APIRouter(prefix="/hsn-sac", tags=["HSN/SAC"])


@router.get("", response_model=dict)
async def search_codes(
    q: str = Query(default="", description="Code, description or category"),
    type_: Literal["HSN", "SAC"] | None = Query(default=None, alias="type"),
    category: str | None = Query(default=None),
    limit: int = Query(default=20, ge=1, le=100),
    user: User = Depends(get_current_user),
    hsn_codes: HsnSacRepository = Depends(hsn_sac_repo),
):
    """Database matches first, then the built-in catalogue, unique by code."""
    rows = await hsn_codes.search(q, type_=type_, category=category, limit=limit)
    results = merge_search_results([hsn_sac_row_to_dict(row) for row in rows], q, type_, limit=limit)
    return ok(
        data={
            "results": results,
            "units": UNIT_OF_MEASUREMENT_OPTIONS,
            "gst_rates": GST_RATE_OPTIONS,
        }
    )


@router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
async def add_code(
    body: HsnSacCreate,
    user: User = Depends(get_current_user),
    hsn_codes: HsnSacRepository = Depends(hsn_sac_repo),
):
    if await hsn_codes.get_by_code(body.code):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="HSN/SAC code already exists")

    row = await hsn_codes.create({**body.model_dump(), "is_active": True})
    logger.info("HSN/SAC code %s added by user %s", row.code, user.id)
    return ok(data=hsn_sac_row_to_dict(row), message="HSN/SAC code added")


@router.get("/{code}", response_model=dict)
async def get_code(
    code: str,
    user: User = Depends(get_current_user),
    hsn_codes: HsnSacRepository = Depends(hsn_sac_repo),
):
    rows = await hsn_codes.get_active_by_codes([code.strip()])
    entry = hsn_sac_row_to_dict(rows[0]) if rows else get_hsn_sac_by_code(code)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="HSN/SAC code not found")
    entry.setdefault("source", "static")
    return ok(data=entry)
