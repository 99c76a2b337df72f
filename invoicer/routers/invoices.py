from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session
import logging
from .. import models, schemas
from ..analytics import TimeRange, range_start
from ..config import settings
from ..csv_export import generate_materials_csv, has_materials, materials_csv_filename
from ..database import get_db
from ..preview import build_invoice_preview, item_to_dict
from ..pricing_engine import PricingEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invoices", tags=["invoices"])


def _get_invoice_or_404(invoice_id: int, db: Session) -> models.Invoice:
    invoice = db.query(models.Invoice).filter(models.Invoice.id == invoice_id).first()
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice


def upsert_client(client: schemas.ClientBase, db: Session):
    """Match an existing client by email and refresh their details, or create one."""
    if client is None or not (client.name or client.email):
        return None

    data = client.model_dump()
    data["email"] = data.get("email") or None

    db_client = None
    if data["email"]:
        db_client = db.query(models.Client).filter(models.Client.email == data["email"]).first()

    if db_client:
        for field, value in data.items():
            if field != "email":
                setattr(db_client, field, value)
    else:
        db_client = models.Client(**data)
        db.add(db_client)
    db.flush()
    return db_client


@router.post("/")
def save_invoice(payload: schemas.InvoiceSave, db: Session = Depends(get_db)):
    """
    Save the invoice form.

    An invoice with the same invoice number is updated in place: its items
    are replaced and its status goes back to draft.
    """
    vat_rate = payload.vat_rate if payload.vat_rate is not None else settings.VAT_RATE_DEFAULT
    items = [i.model_dump() for i in payload.items]
    totals = PricingEngine.calculate_totals(items, payload.discount, vat_rate)

    db_client = upsert_client(payload.client, db)

    invoice = db.query(models.Invoice).filter(
        models.Invoice.invoice_no == payload.meta.invoice_no
    ).first()
    created = invoice is None
    if created:
        invoice = models.Invoice(invoice_no=payload.meta.invoice_no)
        db.add(invoice)
    else:
        invoice.items.clear()

    invoice.client_id = db_client.id if db_client else None
    invoice.project_name = payload.meta.project_name
    invoice.invoice_date = payload.meta.invoice_date
    invoice.due_date = payload.meta.due_date
    invoice.order_class = payload.meta.order_class
    invoice.subtotal = totals["subtotal"]
    invoice.discount = totals["discount"]
    invoice.vat_rate = vat_rate
    invoice.vat_amount = totals["vat_amount"]
    invoice.total = totals["total"]
    invoice.notes = payload.notes
    invoice.status = models.InvoiceStatus.DRAFT
    db.flush()

    for index, item_data in enumerate(payload.items):
        db_item = models.InvoiceItem(
            category=item_data.category,
            code=item_data.code,
            description=item_data.description,
            dimensions=item_data.dimensions,
            qty=item_data.qty,
            unit_price=item_data.unit_price,
            line_total=round(item_data.qty * item_data.unit_price, 2),
            image_url=item_data.image_url,
            sort_order=index,
        )
        materials = PricingEngine.scale_materials(
            [m.model_dump() for m in item_data.materials], item_data.qty)
        db_item.materials = [models.ItemMaterial(**m) for m in materials]
        invoice.items.append(db_item)

    db.commit()
    db.refresh(invoice)
    logger.info("%s invoice %s (%d items, total %.2f)",
                "Created" if created else "Updated", invoice.invoice_no,
                len(invoice.items), invoice.total)
    return _invoice_to_dict(invoice)


@router.get("/")
def list_invoices(range: TimeRange = TimeRange.ALL, skip: int = 0, limit: int = 100,
                  db: Session = Depends(get_db)):
    query = db.query(models.Invoice)
    start = range_start(range)
    if start:
        query = query.filter(models.Invoice.invoice_date >= start)
    invoices = query.order_by(models.Invoice.invoice_date.desc(), models.Invoice.id.desc()) \
        .offset(skip).limit(limit).all()
    return [
        {
            "id": inv.id,
            "invoice_no": inv.invoice_no,
            "project_name": inv.project_name,
            "invoice_date": inv.invoice_date.isoformat(),
            "due_date": inv.due_date.isoformat() if inv.due_date else None,
            "order_class": inv.order_class,
            "status": inv.status.value if inv.status else "draft",
            "total": inv.total,
            "client_name": inv.client.name if inv.client else None,
        }
        for inv in invoices
    ]


@router.get("/{invoice_id}")
def get_invoice(invoice_id: int, db: Session = Depends(get_db)):
    return _invoice_to_dict(_get_invoice_or_404(invoice_id, db))


@router.patch("/{invoice_id}/status")
def update_status(invoice_id: int, update: schemas.InvoiceStatusUpdate,
                  db: Session = Depends(get_db)):
    allowed = [s.value for s in models.InvoiceStatus]
    if update.status not in allowed:
        raise HTTPException(
            status_code=400,
            detail=f"status must be one of {allowed}, got {update.status}",
        )
    invoice = _get_invoice_or_404(invoice_id, db)
    invoice.status = models.InvoiceStatus(update.status)
    db.commit()
    logger.info("Invoice %s marked %s", invoice.invoice_no, update.status)
    return {"id": invoice.id, "invoice_no": invoice.invoice_no, "status": update.status}


@router.delete("/{invoice_id}")
def delete_invoice(invoice_id: int, db: Session = Depends(get_db)):
    invoice = _get_invoice_or_404(invoice_id, db)
    db.delete(invoice)
    db.commit()
    logger.info("Deleted invoice %s", invoice.invoice_no)
    return {"ok": True}


@router.get("/{invoice_id}/preview")
def preview_invoice(invoice_id: int, db: Session = Depends(get_db)):
    return build_invoice_preview(_get_invoice_or_404(invoice_id, db))


@router.get("/{invoice_id}/materials.csv")
def export_materials_csv(invoice_id: int, db: Session = Depends(get_db)):
    invoice = _get_invoice_or_404(invoice_id, db)
    if not has_materials(invoice):
        raise HTTPException(status_code=404, detail="No material breakdown found on items.")
    return Response(
        content=generate_materials_csv(invoice),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{materials_csv_filename(invoice)}"',
        },
    )


def _invoice_to_dict(inv: models.Invoice) -> dict:
    return {
        "id": inv.id,
        "invoice_no": inv.invoice_no,
        "status": inv.status.value if inv.status else "draft",
        "project_name": inv.project_name,
        "invoice_date": inv.invoice_date.isoformat() if inv.invoice_date else None,
        "due_date": inv.due_date.isoformat() if inv.due_date else None,
        "order_class": inv.order_class,
        "subtotal": inv.subtotal,
        "discount": inv.discount,
        "vat_rate": inv.vat_rate,
        "vat_amount": inv.vat_amount,
        "total": inv.total,
        "notes": inv.notes,
        "created_at": inv.created_at.isoformat() if inv.created_at else None,
        "updated_at": inv.updated_at.isoformat() if inv.updated_at else None,
        "client": {
            "id": inv.client.id,
            "name": inv.client.name,
            "company": inv.client.company,
            "address": inv.client.address,
            "phone": inv.client.phone,
            "email": inv.client.email,
            "site_address": inv.client.site_address,
        } if inv.client else None,
        "client_id": inv.client_id,
        "items": [item_to_dict(i) for i in inv.items],
    }
