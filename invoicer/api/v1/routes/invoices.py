# invoicer/api/v1/routes/invoices.py
"""
Invoice CRUD, status changes, totals preview and PDF download.
"""

from __future__ import annotations

import io
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse

from invoicer.config.settings import settings
from invoicer.domain.services import invoice_service
from invoicer.domain.services.amount_words import number_to_words
from invoicer.domain.services.gst_calculator import process_invoice_items, round_money, to_decimal
from invoicer.domain.services.gstin_pan_validation import get_gst_type
from invoicer.domain.services.invoice_pdf import generate_invoice_pdf
from invoicer.infrastructure.db.models import Invoice, User
from invoicer.infrastructure.db.repositories import (
    CustomerRepository,
    FrequentlyUsedItemRepository,
    HsnSacRepository,
    InvoiceRepository,
)

from invoicer.api.v1.deps import (
    customer_repo,
    frequent_item_repo,
    get_current_user,
    hsn_sac_repo,
    invoice_repo,
)
from invoicer.api.v1.envelope import ok, paginated
from invoicer.api.v1.schemas.invoices import (
    CalculateRequest,
    InvoiceCreate,
    InvoiceDetail,
    InvoiceItemDetail,
    InvoiceStatus,
    InvoiceSummary,
    InvoiceUpdate,
    StatusChange,
)

logger = logging.getLogger("api.v1.invoices")

router = APIRouter(prefix="/invoices", tags=["Invoices"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _summary_fields(inv: Invoice) -> dict:
    return dict(
        id=str(inv.id),
        invoice_number=inv.invoice_number,
        status=inv.status,
        payment_status=inv.payment_status,
        invoice_date=inv.invoice_date,
        due_date=inv.due_date,
        customer_id=str(inv.customer_id) if inv.customer_id else None,
        customer_name=inv.customer_name,
        customer_gst=inv.customer_gst,
        is_inter_state=inv.is_inter_state,
        subtotal=inv.subtotal,
        cgst=inv.cgst,
        sgst=inv.sgst,
        igst=inv.igst,
        total_amount=inv.total_amount,
        created_at=inv.created_at,
    )


def invoice_to_summary(inv: Invoice) -> dict:
    return InvoiceSummary(**_summary_fields(inv)).model_dump()


def invoice_to_detail(inv: Invoice) -> dict:
    """Full invoice with items; ``inv.items`` must already be loaded."""
    return InvoiceDetail(
        **_summary_fields(inv),
        customer_address=inv.customer_address,
        customer_phone=inv.customer_phone,
        customer_email=inv.customer_email,
        customer_state=inv.customer_state,
        terms_conditions=inv.terms_conditions,
        notes=inv.notes,
        amount_in_words=number_to_words(inv.total_amount or 0),
        items=[
            InvoiceItemDetail(
                id=str(item.id),
                description=item.description,
                hsn_sac_code=item.hsn_sac_code,
                hsn_sac_type=item.hsn_sac_type,
                unit_of_measurement=item.unit_of_measurement,
                quantity=item.quantity,
                rate=item.rate,
                gst_rate=item.gst_rate,
                amount=item.amount,
                cgst=item.cgst,
                sgst=item.sgst,
                igst=item.igst,
                total_amount=item.total_amount,
            )
            for item in inv.items
        ],
    ).model_dump()


# ---------------------------------------------------------------------------
# List / read
# ---------------------------------------------------------------------------

@router.get("", response_model=dict)
async def list_invoices(
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    search: str | None = Query(default=None, description="Invoice number or customer name"),
    status_filter: InvoiceStatus | None = Query(default=None, alias="status"),
    customer_id: UUID | None = Query(default=None),
    user: User = Depends(get_current_user),
    invoices: InvoiceRepository = Depends(invoice_repo),
):
    """List the authenticated user's invoices, newest first."""
    rows, total = await invoices.list_for_user(
        user.id,
        limit=limit,
        offset=offset,
        search=search,
        status=status_filter,
        customer_id=customer_id,
    )
    return paginated(
        items=[invoice_to_summary(inv) for inv in rows],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.post("/calculate", response_model=dict)
async def calculate(body: CalculateRequest, user: User = Depends(get_current_user)):
    """
    Preview totals without saving. Jurisdiction comes from ``is_inter_state``
    or, failing that, from comparing seller and buyer states.
    """
    if body.is_inter_state is not None:
        inter_state = body.is_inter_state
    else:
        seller = body.seller_state or invoice_service.seller_state(user)
        inter_state = bool(body.buyer_state) and get_gst_type(seller, body.buyer_state) == "inter"

    totals = process_invoice_items(
        [item.model_dump() for item in body.items],
        inter_state,
        default_gst_rate=to_decimal(settings.DEFAULT_GST_RATE),
    )
    data = totals.to_dict()
    data["is_inter_state"] = inter_state
    data["total_tax"] = round_money(totals.total_tax)
    data["amount_in_words"] = number_to_words(round_money(totals.total_amount))
    return ok(data=data)


@router.get("/{invoice_id}", response_model=dict)
async def get_invoice(
    invoice_id: UUID,
    user: User = Depends(get_current_user),
    invoices: InvoiceRepository = Depends(invoice_repo),
):
    inv = await invoice_service.get_invoice(user.id, invoice_id, invoices=invoices)
    return ok(data=invoice_to_detail(inv))


# ---------------------------------------------------------------------------
# Create / update / delete
# ---------------------------------------------------------------------------

@router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    body: InvoiceCreate,
    user: User = Depends(get_current_user),
    invoices: InvoiceRepository = Depends(invoice_repo),
    hsn_codes: HsnSacRepository = Depends(hsn_sac_repo),
    frequent_items: FrequentlyUsedItemRepository = Depends(frequent_item_repo),
    customers: CustomerRepository = Depends(customer_repo),
):
    inv = await invoice_service.create_invoice(
        user,
        body.model_dump(),
        invoices=invoices,
        hsn_codes=hsn_codes,
        frequent_items=frequent_items,
        customers=customers,
    )
    return ok(data=invoice_to_detail(inv), message="Invoice created successfully")


@router.patch("/{invoice_id}", response_model=dict)
async def update_invoice(
    invoice_id: UUID,
    body: InvoiceUpdate,
    user: User = Depends(get_current_user),
    invoices: InvoiceRepository = Depends(invoice_repo),
    hsn_codes: HsnSacRepository = Depends(hsn_sac_repo),
    customers: CustomerRepository = Depends(customer_repo),
):
    """Draft invoices only, except for a bare ``status`` change."""
    inv = await invoice_service.update_invoice(
        user,
        invoice_id,
        body.model_dump(exclude_unset=True),
        invoices=invoices,
        hsn_codes=hsn_codes,
        customers=customers,
    )
    return ok(data=invoice_to_detail(inv), message="Invoice updated successfully")


@router.post("/{invoice_id}/status", response_model=dict)
async def change_status(
    invoice_id: UUID,
    body: StatusChange,
    user: User = Depends(get_current_user),
    invoices: InvoiceRepository = Depends(invoice_repo),
):
    inv = await invoice_service.change_status(user.id, invoice_id, body.status, invoices=invoices)
    return ok(data=invoice_to_detail(inv), message=f"Invoice marked {inv.status}")


@router.delete("/{invoice_id}", response_model=dict)
async def delete_invoice(
    invoice_id: UUID,
    user: User = Depends(get_current_user),
    invoices: InvoiceRepository = Depends(invoice_repo),
):
    await invoice_service.delete_invoice(user.id, invoice_id, invoices=invoices)
    return ok(message="Invoice deleted successfully")


# ---------------------------------------------------------------------------
# PDF
# ---------------------------------------------------------------------------

@router.get("/{invoice_id}/pdf")
async def download_pdf(
    invoice_id: UUID,
    user: User = Depends(get_current_user),
    invoices: InvoiceRepository = Depends(invoice_repo),
):
    inv = await invoice_service.get_invoice(user.id, invoice_id, invoices=invoices)
    pdf_bytes = generate_invoice_pdf(invoice_service.invoice_print_context(inv, user))

    filename = f"{inv.invoice_number}.pdf"
    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
