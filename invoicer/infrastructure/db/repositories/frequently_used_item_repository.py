from datetime import datetime, timezone
from typing import Iterable
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from invoicer.domain.services.gst_calculator import LineItemResult
from invoicer.infrastructure.db.models import FrequentlyUsedItem


class FrequentlyUsedItemRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_user(
        self,
        user_id: UUID,
        *,
        search: str | None = None,
        limit: int = 20,
    ) -> list[FrequentlyUsedItem]:
        """Most used first, ties broken by most recently used."""
        stmt = select(FrequentlyUsedItem).where(FrequentlyUsedItem.user_id == user_id)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    FrequentlyUsedItem.item_name.ilike(pattern),
                    FrequentlyUsedItem.hsn_sac_code.ilike(pattern),
                    FrequentlyUsedItem.category.ilike(pattern),
                )
            )
        stmt = stmt.order_by(
            FrequentlyUsedItem.usage_count.desc(),
            FrequentlyUsedItem.last_used_at.desc(),
        ).limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_for_user(self, item_id: UUID, user_id: UUID) -> FrequentlyUsedItem | None:
        stmt = select(FrequentlyUsedItem).where(
            FrequentlyUsedItem.id == item_id,
            FrequentlyUsedItem.user_id == user_id,
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_name(self, user_id: UUID, item_name: str) -> FrequentlyUsedItem | None:
        stmt = select(FrequentlyUsedItem).where(
            FrequentlyUsedItem.user_id == user_id,
            FrequentlyUsedItem.item_name == item_name,
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(self, user_id: UUID, fields: dict) -> FrequentlyUsedItem:
        """Insert or overwrite the user's item with the same name (no usage bump)."""
        row = await self.get_by_name(user_id, fields["item_name"])
        if row is None:
            row = FrequentlyUsedItem(user_id=user_id, usage_count=0, **fields)
            self.db.add(row)
        else:
            for key, value in fields.items():
                setattr(row, key, value)
        await self.db.commit()
        await self.db.refresh(row)
        return row

    async def record_usage(self, user_id: UUID, items: Iterable[LineItemResult]) -> int:
        """
        Bump usage for every invoiced item that carries an HSN/SAC code,
        creating the entry on first use. Returns the number of items recorded.
        """
        now = datetime.now(timezone.utc)
        recorded = 0
        for item in items:
            if not item.hsn_sac_code or not item.description:
                continue
            row = await self.get_by_name(user_id, item.description)
            if row is None:
                row = FrequentlyUsedItem(user_id=user_id, item_name=item.description, usage_count=0)
                self.db.add(row)
            row.hsn_sac_code = item.hsn_sac_code
            row.hsn_sac_type = item.hsn_sac_type
            row.default_rate = item.rate
            row.default_gst_rate = item.gst_rate
            row.unit_of_measurement = item.unit_of_measurement
            row.category = item.item_category
            row.usage_count = (row.usage_count or 0) + 1
            row.last_used_at = now
            recorded += 1

        if recorded:
            await self.db.commit()
        return recorded

    async def delete(self, row: FrequentlyUsedItem) -> None:
        await self.db.delete(row)
        await self.db.commit()
