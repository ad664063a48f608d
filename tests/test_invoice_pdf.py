from invoicer.domain.services.invoice_pdf import generate_invoice_pdf
from invoicer.domain.services.invoice_service import invoice_print_context


def test_intra_state_pdf(seller, invoice_row):
    pdf = generate_invoice_pdf(invoice_print_context(invoice_row, seller))
    assert pdf.startswith(b"%PDF")


def test_cancelled_inter_state_pdf_with_markup_in_text(seller, invoice_factory):
    row = invoice_factory(
        status="CANCELLED",
        is_inter_state=True,
        customer_name="R&D <Labs>",
        customer_state="Kerala",
        notes="Paid via UPI & cash",
    )
    pdf = generate_invoice_pdf(invoice_print_context(row, seller))
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000
