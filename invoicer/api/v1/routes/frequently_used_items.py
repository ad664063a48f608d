# invoicer/api/v1/routes/frequently_used_items.py
"""The user's frequently invoiced items and item suggestions."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from invoicer.domain.services.hsn_sac import build_item_suggestions
from invoicer.infrastructure.db.models import FrequentlyUsedItem, User
from invoicer.infrastructure.db.repositories import FrequentlyUsedItemRepository

from invoicer.api.v1.deps import frequent_item_repo, get_current_user
from invoicer.api.v1.envelope import ok
from invoicer.api.v1.schemas.hsn_sac import FrequentItemCreate

logger = logging.getLogger("api.v1.frequently_used_items")

router = APIRouter(prefix="/frequently-used-items", tags=["Frequently used items"])


def _item_to_dict(item: FrequentlyUsedItem) -> dict:
    return {
        "id": str(item.id),
        "item_name": item.item_name,
        "hsn_sac_code": item.hsn_sac_code,
        "hsn_sac_type": item.hsn_sac_type,
        "default_rate": item.default_rate,
        "default_gst_rate": item.default_gst_rate,
        "unit_of_measurement": item.unit_of_measurement,
        "category": item.category,
        "usage_count": item.usage_count,
        "last_used_at": item.last_used_at,
    }


@router.get("", response_model=dict)
async def list_items(
    search: str | None = Query(default=None),
    limit: int = Query(default=20, ge=1, le=100),
    user: User = Depends(get_current_user),
    items: FrequentlyUsedItemRepository = Depends(frequent_item_repo),
):
    rows = await items.list_for_user(user.id, search=search, limit=limit)
    return ok(data=[_item_to_dict(row) for row in rows])


@router.get("/suggestions", response_model=dict)
async def suggestions(
    q: str = Query(default=""),
    limit: int = Query(default=10, ge=1, le=50),
    user: User = Depends(get_current_user),
    items: FrequentlyUsedItemRepository = Depends(frequent_item_repo),
):
    """Frequently used items first (up to 70% of ``limit``), then catalogue matches."""
    rows = await items.list_for_user(user.id, search=q or None, limit=limit)
    return ok(data=build_item_suggestions(rows, q, limit=limit))


@router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
async def save_item(
    body: FrequentItemCreate,
    user: User = Depends(get_current_user),
    items: FrequentlyUsedItemRepository = Depends(frequent_item_repo),
):
    row = await items.upsert(user.id, body.model_dump())
    return ok(data=_item_to_dict(row), message="Item saved")


@router.delete("/{item_id}", response_model=dict)
async def delete_item(
    item_id: UUID,
    user: User = Depends(get_current_user),
    items: FrequentlyUsedItemRepository = Depends(frequent_item_repo),
):
    row = await items.get_for_user(item_id, user.id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    await items.delete(row)
    return ok(message="Item deleted")
