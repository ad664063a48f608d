from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from invoicer.infrastructure.db.models import HsnSacCode


class HsnSacRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def search(
        self,
        query: str,
        *,
        type_: str | None = None,
        category: str | None = None,
        limit: int = 20,
    ) -> list[HsnSacCode]:
        pattern = f"%{query}%"
        stmt = select(HsnSacCode).where(
            HsnSacCode.is_active.is_(True),
            or_(
                HsnSacCode.code.ilike(pattern),
                HsnSacCode.description.ilike(pattern),
                HsnSacCode.category.ilike(pattern),
                HsnSacCode.sub_category.ilike(pattern),
            ),
        )
        if type_:
            stmt = stmt.where(HsnSacCode.type == type_)
        if category:
            stmt = stmt.where(HsnSacCode.category.ilike(f"%{category}%"))

        stmt = stmt.order_by(HsnSacCode.code, HsnSacCode.description).limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_code(self, code: str) -> HsnSacCode | None:
        stmt = select(HsnSacCode).where(HsnSacCode.code == code.strip())
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_by_codes(self, codes: list[str]) -> list[HsnSacCode]:
        if not codes:
            return []
        stmt = select(HsnSacCode).where(HsnSacCode.code.in_(codes), HsnSacCode.is_active.is_(True))
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def create(self, fields: dict[str, Any]) -> HsnSacCode:
        row = HsnSacCode(**fields)
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        return row
