import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from invoicer.domain.exceptions import DuplicateError
from invoicer.domain.services.gst_calculator import LineItemResult, round_money
from invoicer.infrastructure.db.models import Invoice, InvoiceItem


class InvoiceRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ---------- small helpers ----------

    @staticmethod
    def _item_row(invoice_id: uuid.UUID, position: int, item: LineItemResult) -> InvoiceItem:
        """Persist a calculated line, rounding money columns to paise."""
        return InvoiceItem(
            invoice_id=invoice_id,
            position=position,
            description=item.description,
            hsn_sac_code=item.hsn_sac_code,
            hsn_sac_type=item.hsn_sac_type,
            unit_of_measurement=item.unit_of_measurement,
            quantity=item.quantity,
            rate=item.rate,
            gst_rate=item.gst_rate,
            amount=round_money(item.amount),
            cgst=round_money(item.cgst),
            sgst=round_money(item.sgst),
            igst=round_money(item.igst),
            total_amount=round_money(item.total_amount),
        )

    def _filtered(
        self,
        user_id: uuid.UUID,
        search: str | None = None,
        status: str | None = None,
        customer_id: uuid.UUID | None = None,
    ):
        stmt = select(Invoice).where(Invoice.user_id == user_id)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    Invoice.invoice_number.ilike(pattern),
                    Invoice.customer_name.ilike(pattern),
                )
            )
        if status:
            stmt = stmt.where(Invoice.status == status)
        if customer_id:
            stmt = stmt.where(Invoice.customer_id == customer_id)
        return stmt

    # ---------- numbering ----------

    async def count_invoices_for_user(self, user_id: uuid.UUID) -> int:
        stmt = select(func.count()).select_from(Invoice).where(Invoice.user_id == user_id)
        return (await self.db.execute(stmt)).scalar() or 0

    async def exists_number(self, user_id: uuid.UUID, invoice_number: str) -> bool:
        stmt = select(Invoice.id).where(
            Invoice.user_id == user_id,
            Invoice.invoice_number == invoice_number,
        )
        return (await self.db.execute(stmt)).first() is not None

    # ---------- reads ----------

    async def list_for_user(
        self,
        user_id: uuid.UUID,
        *,
        limit: int = 20,
        offset: int = 0,
        search: str | None = None,
        status: str | None = None,
        customer_id: uuid.UUID | None = None,
    ) -> tuple[list[Invoice], int]:
        """Newest first, with the total count for pagination."""
        stmt = self._filtered(user_id, search, status, customer_id)

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await self.db.execute(count_stmt)).scalar() or 0

        stmt = stmt.order_by(Invoice.created_at.desc()).offset(offset).limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all()), total

    async def get_for_user(self, invoice_id: uuid.UUID, user_id: uuid.UUID) -> Invoice | None:
        stmt = (
            select(Invoice)
            .options(selectinload(Invoice.items))
            .where(Invoice.id == invoice_id, Invoice.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def recent(self, user_id: uuid.UUID, limit: int = 5) -> list[Invoice]:
        stmt = (
            select(Invoice)
            .where(Invoice.user_id == user_id)
            .order_by(Invoice.created_at.desc())
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def recent_for_customer(self, customer_id: uuid.UUID, user_id: uuid.UUID, limit: int = 10) -> list[Invoice]:
        stmt = (
            select(Invoice)
            .where(Invoice.customer_id == customer_id, Invoice.user_id == user_id)
            .order_by(Invoice.created_at.desc())
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    # ---------- aggregates ----------

    async def count_between(self, user_id: uuid.UUID, start: datetime, end: datetime) -> int:
        stmt = select(func.count()).select_from(Invoice).where(
            Invoice.user_id == user_id,
            Invoice.created_at >= start,
            Invoice.created_at < end,
        )
        return (await self.db.execute(stmt)).scalar() or 0

    async def revenue_between(self, user_id: uuid.UUID, start: datetime, end: datetime) -> Decimal:
        stmt = select(func.coalesce(func.sum(Invoice.total_amount), 0)).where(
            Invoice.user_id == user_id,
            Invoice.created_at >= start,
            Invoice.created_at < end,
        )
        return Decimal(str((await self.db.execute(stmt)).scalar() or 0))

    async def total_revenue(self, user_id: uuid.UUID, customer_id: uuid.UUID | None = None) -> Decimal:
        stmt = select(func.coalesce(func.sum(Invoice.total_amount), 0)).where(Invoice.user_id == user_id)
        if customer_id:
            stmt = stmt.where(Invoice.customer_id == customer_id)
        return Decimal(str((await self.db.execute(stmt)).scalar() or 0))

    # ---------- writes ----------

    async def create_with_items(self, fields: dict[str, Any], items: Iterable[LineItemResult]) -> Invoice:
        """Insert the invoice and its line items in one transaction."""
        invoice = Invoice(id=uuid.uuid4(), **fields)
        self.db.add(invoice)
        for position, item in enumerate(items):
            self.db.add(self._item_row(invoice.id, position, item))
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            raise DuplicateError(f"Invoice number {fields.get('invoice_number')} already exists") from exc
        return await self.get_for_user(invoice.id, invoice.user_id)

    async def update(
        self,
        invoice: Invoice,
        fields: dict[str, Any],
        items: Iterable[LineItemResult] | None = None,
    ) -> Invoice:
        """Apply field changes; when ``items`` is given the line items are replaced."""
        for key, value in fields.items():
            setattr(invoice, key, value)

        if items is not None:
            await self.db.execute(delete(InvoiceItem).where(InvoiceItem.invoice_id == invoice.id))
            for position, item in enumerate(items):
                self.db.add(self._item_row(invoice.id, position, item))

        await self.db.commit()
        return await self.get_for_user(invoice.id, invoice.user_id)

    async def delete(self, invoice: Invoice) -> None:
        await self.db.delete(invoice)
        await self.db.commit()
