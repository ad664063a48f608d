# invoicer/domain/services/invoice_pdf.py
"""
Render a GST tax invoice to PDF with ReportLab.

Input is the dict built by ``invoice_service.invoice_print_context``: amounts
arrive pre-formatted, so this module only lays them out. Intra-state invoices
get CGST/SGST columns, inter-state invoices a single IGST column.
"""

from __future__ import annotations

import io
import logging
from typing import Any
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

logger = logging.getLogger("invoice_pdf")

HEADER_BG = colors.Color(0.2, 0.3, 0.5)
LABEL_BG = colors.Color(0.95, 0.95, 0.95)
TOTAL_BG = colors.Color(0.9, 0.95, 1.0)
GRID = colors.Color(0.8, 0.8, 0.8)


def _party_block(title: str, party: dict[str, Any], style: ParagraphStyle) -> Paragraph:
    lines = [f"<b>{title}</b>", f"<b>{escape(party.get('name') or '')}</b>"]
    if party.get("address"):
        lines.append(escape(str(party["address"])).replace("\n", "<br/>"))
    if party.get("state"):
        lines.append(f"State: {party['state']}")
    if party.get("gst"):
        lines.append(f"GSTIN: {party['gst']}")
    if party.get("phone"):
        lines.append(f"Phone: {party['phone']}")
    if party.get("email"):
        lines.append(f"Email: {escape(party['email'])}")
    return Paragraph("<br/>".join(lines), style)


def _grid_style(extra: list[tuple] | None = None) -> TableStyle:
    commands = [
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_BG),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("GRID", (0, 0), (-1, -1), 0.5, GRID),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ("LEFTPADDING", (0, 0), (-1, -1), 4),
        ("RIGHTPADDING", (0, 0), (-1, -1), 4),
    ]
    return TableStyle(commands + (extra or []))


def generate_invoice_pdf(context: dict[str, Any]) -> bytes:
    """
    Build the tax invoice PDF.

    Args:
        context: print context with ``seller``, ``buyer``, ``items``,
                 ``hsn_summary``, formatted totals and ``amount_in_words``.

    Returns:
        PDF file as bytes.
    """
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=12 * mm,
        rightMargin=12 * mm,
        topMargin=12 * mm,
        bottomMargin=12 * mm,
        title=f"Invoice {context.get('invoice_number') or ''}",
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "InvoiceTitle",
        parent=styles["Heading1"],
        fontSize=16,
        alignment=1,  # center
        spaceAfter=8,
    )
    party_style = ParagraphStyle("Party", parent=styles["Normal"], fontSize=9, leading=12)
    small_style = ParagraphStyle("Small", parent=styles["Normal"], fontSize=8, leading=10)
    cell_style = ParagraphStyle("Cell", parent=styles["Normal"], fontSize=8, leading=10)

    inter_state = bool(context.get("is_inter_state"))
    elements: list = [Paragraph("TAX INVOICE", title_style)]

    if context.get("status") == "CANCELLED":
        elements.append(
            Paragraph(
                "CANCELLED",
                ParagraphStyle("Cancelled", parent=title_style, fontSize=12, textColor=colors.red),
            )
        )

    # Invoice meta
    meta = [
        ["Invoice Number", context.get("invoice_number") or "", "Invoice Date", context.get("invoice_date") or ""],
        ["Supply Type", "Inter-state (IGST)" if inter_state else "Intra-state (CGST + SGST)",
         "Due Date", context.get("due_date") or "-"],
    ]
    meta_table = Table(meta, colWidths=[90, 160, 80, 156])
    meta_table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (0, -1), LABEL_BG),
                ("BACKGROUND", (2, 0), (2, -1), LABEL_BG),
                ("TEXTCOLOR", (0, 0), (0, -1), colors.grey),
                ("TEXTCOLOR", (2, 0), (2, -1), colors.grey),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("GRID", (0, 0), (-1, -1), 0.5, GRID),
                ("TOPPADDING", (0, 0), (-1, -1), 5),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
            ]
        )
    )
    elements.append(meta_table)
    elements.append(Spacer(1, 8))

    # Seller / buyer
    parties = Table(
        [[
            _party_block("Seller", context.get("seller") or {}, party_style),
            _party_block("Bill To", context.get("buyer") or {}, party_style),
        ]],
        colWidths=[243, 243],
    )
    parties.setStyle(
        TableStyle(
            [
                ("GRID", (0, 0), (-1, -1), 0.5, GRID),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
            ]
        )
    )
    elements.append(parties)
    elements.append(Spacer(1, 10))

    # Line items
    if inter_state:
        header = ["#", "Description", "HSN/SAC", "Qty", "Rate", "GST %", "Taxable", "IGST", "Total"]
        col_widths = [18, 140, 48, 40, 50, 36, 56, 50, 48]
    else:
        header = ["#", "Description", "HSN/SAC", "Qty", "Rate", "GST %", "Taxable", "CGST", "SGST", "Total"]
        col_widths = [18, 120, 44, 36, 46, 34, 52, 44, 44, 48]

    rows = [header]
    for idx, item in enumerate(context.get("items") or [], start=1):
        qty = f"{item['quantity']} {item.get('unit_of_measurement') or ''}".strip()
        row = [
            str(idx),
            Paragraph(escape(item.get("description") or ""), cell_style),
            item.get("hsn_sac_code") or "",
            qty,
            item["rate"],
            item["gst_rate"],
            item["amount"],
        ]
        row += [item["igst"]] if inter_state else [item["cgst"], item["sgst"]]
        row.append(item["total_amount"])
        rows.append(row)

    items_table = Table(rows, colWidths=col_widths, repeatRows=1)
    items_table.setStyle(_grid_style([("ALIGN", (3, 1), (-1, -1), "RIGHT")]))
    elements.append(items_table)
    elements.append(Spacer(1, 10))

    # Totals
    total_rows = [["Description", "Amount (Rs)"], ["Taxable Value", context.get("subtotal", "")]]
    if inter_state:
        total_rows.append(["IGST", context.get("igst", "")])
    else:
        total_rows.append(["CGST", context.get("cgst", "")])
        total_rows.append(["SGST", context.get("sgst", "")])
    total_rows.append(["Total Tax", context.get("total_tax", "")])
    total_rows.append(["TOTAL AMOUNT", context.get("total_amount", "")])

    totals_table = Table(total_rows, colWidths=[326, 160])
    totals_table.setStyle(
        _grid_style(
            [
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("BACKGROUND", (0, -1), (-1, -1), TOTAL_BG),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ("ALIGN", (1, 0), (1, -1), "RIGHT"),
            ]
        )
    )
    elements.append(totals_table)
    elements.append(Spacer(1, 6))
    elements.append(
        Paragraph(f"<b>Amount in words:</b> {context.get('amount_in_words') or ''}", party_style)
    )
    elements.append(Spacer(1, 10))

    # HSN/SAC summary
    summary = context.get("hsn_summary") or []
    if summary:
        if inter_state:
            s_rows = [["HSN/SAC", "GST %", "Taxable", "IGST", "Total Tax"]]
            s_rows += [
                [r["hsn_sac_code"] or "-", r["gst_rate"], r["taxable_amount"], r["igst"], r["total_tax"]]
                for r in summary
            ]
            s_widths = [110, 60, 110, 100, 106]
        else:
            s_rows = [["HSN/SAC", "GST %", "Taxable", "CGST", "SGST", "Total Tax"]]
            s_rows += [
                [r["hsn_sac_code"] or "-", r["gst_rate"], r["taxable_amount"], r["cgst"], r["sgst"], r["total_tax"]]
                for r in summary
            ]
            s_widths = [90, 50, 90, 85, 85, 86]
        summary_table = Table(s_rows, colWidths=s_widths)
        summary_table.setStyle(_grid_style([("ALIGN", (1, 1), (-1, -1), "RIGHT")]))
        elements.append(summary_table)
        elements.append(Spacer(1, 10))

    if context.get("terms_conditions"):
        elements.append(Paragraph(f"<b>Terms &amp; Conditions:</b> {escape(context['terms_conditions'])}", small_style))
        elements.append(Spacer(1, 4))
    if context.get("notes"):
        elements.append(Paragraph(f"<b>Notes:</b> {escape(context['notes'])}", small_style))
        elements.append(Spacer(1, 4))

    elements.append(Spacer(1, 10))
    elements.append(
        Paragraph(
            "This is a computer-generated invoice.",
            ParagraphStyle(
                "Footer",
                parent=styles["Normal"],
                fontSize=8,
                textColor=colors.grey,
                alignment=1,
            ),
        )
    )

    doc.build(elements)
    logger.debug("Rendered PDF for invoice %s", context.get("invoice_number"))
    return buf.getvalue()
