"""
PDF download endpoint.

GET /api/invoices/{invoice_id}/pdf — download the printable invoice.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from .. import models
from ..database import get_db
from ..pdf_generator import generate_invoice_pdf
from ..preview import build_invoice_preview

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invoices", tags=["pdf"])


@router.get("/{invoice_id}/pdf")
def download_pdf(invoice_id: int, db: Session = Depends(get_db)):
    """
    Generate and download a PDF invoice document.

    Returns: application/pdf
    """
    invoice = db.query(models.Invoice).filter(models.Invoice.id == invoice_id).first()
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")

    # Convert bytearray to bytes for Response compatibility
    pdf_bytes = bytes(generate_invoice_pdf(build_invoice_preview(invoice)))
    logger.info("Rendered PDF for invoice %s (%d bytes)", invoice.invoice_no, len(pdf_bytes))

    filename = f"Invoice-{invoice.invoice_no or invoice_id}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
        },
    )
