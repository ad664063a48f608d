from typing import Any
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from invoicer.infrastructure.db.models import Customer, Invoice


class CustomerRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_user(
        self,
        user_id: UUID,
        *,
        limit: int = 20,
        offset: int = 0,
        search: str | None = None,
    ) -> tuple[list[tuple[Customer, int]], int]:
        """
        Newest first. Returns ``[(customer, invoice_count), ...]`` and the total
        number of matching customers.
        """
        stmt = select(Customer).where(Customer.user_id == user_id)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    Customer.name.ilike(pattern),
                    Customer.gst_number.ilike(pattern),
                    Customer.email.ilike(pattern),
                    Customer.phone.ilike(pattern),
                )
            )

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await self.db.execute(count_stmt)).scalar() or 0

        invoice_count = (
            select(func.count(Invoice.id))
            .where(Invoice.customer_id == Customer.id, Invoice.user_id == user_id)
            .correlate(Customer)
            .scalar_subquery()
        )
        page = (
            stmt.add_columns(invoice_count)
            .order_by(Customer.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(page)
        return [(row[0], row[1] or 0) for row in result.all()], total

    async def get_for_user(self, customer_id: UUID, user_id: UUID) -> Customer | None:
        stmt = select(Customer).where(Customer.id == customer_id, Customer.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_gst_number(self, user_id: UUID, gst_number: str) -> Customer | None:
        stmt = select(Customer).where(Customer.user_id == user_id, Customer.gst_number == gst_number)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def count_for_user(self, user_id: UUID) -> int:
        stmt = select(func.count()).select_from(Customer).where(Customer.user_id == user_id)
        return (await self.db.execute(stmt)).scalar() or 0

    async def count_invoices(self, customer_id: UUID, user_id: UUID) -> int:
        """Invoices of ``user_id`` that link to the customer."""
        stmt = select(func.count()).select_from(Invoice).where(
            Invoice.customer_id == customer_id, Invoice.user_id == user_id
        )
        return (await self.db.execute(stmt)).scalar() or 0

    async def create(self, user_id: UUID, fields: dict[str, Any]) -> Customer:
        customer = Customer(user_id=user_id, **fields)
        self.db.add(customer)
        await self.db.commit()
        await self.db.refresh(customer)
        return customer

    async def update(self, customer: Customer, fields: dict[str, Any]) -> Customer:
        for key, value in fields.items():
            setattr(customer, key, value)
        await self.db.commit()
        await self.db.refresh(customer)
        return customer

    async def delete(self, customer: Customer) -> None:
        await self.db.delete(customer)
        await self.db.commit()
