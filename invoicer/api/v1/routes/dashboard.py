# invoicer/api/v1/routes/dashboard.py
"""Dashboard statistics for the authenticated user."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from invoicer.domain.services.dashboard import build_dashboard_stats
from invoicer.infrastructure.db.models import User
from invoicer.infrastructure.db.repositories import CustomerRepository, InvoiceRepository

from invoicer.api.v1.deps import customer_repo, get_current_user, invoice_repo
from invoicer.api.v1.envelope import ok

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=dict)
async def stats(
    user: User = Depends(get_current_user),
    invoices: InvoiceRepository = Depends(invoice_repo),
    customers: CustomerRepository = Depends(customer_repo),
):
    return ok(data=await build_dashboard_stats(user.id, invoices=invoices, customers=customers))
