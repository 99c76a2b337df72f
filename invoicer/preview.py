"""
Invoice preview payload.

Everything the printable invoice shows: company header, client block,
invoice meta, items, and the totals rows that apply. The PDF is rendered
from this same payload.

Totals rows: Subtotal and Taxable Amount only appear when a discount or
VAT row does. Discount shows when > 0, VAT when both rate and amount are > 0.
"""

from . import models
from .config import settings
from .pricing_engine import PricingEngine


def company_info() -> dict:
    return {
        "name": settings.COMPANY_NAME,
        "address": settings.COMPANY_ADDRESS,
        "phone": settings.COMPANY_PHONE,
        "email": settings.COMPANY_EMAIL,
        "logo_url": settings.COMPANY_LOGO_URL,
    }


def client_info(client) -> dict:
    if client is None:
        return {"name": "", "company": "", "address": "", "phone": "", "email": "",
                "site_address": ""}
    return {
        "name": client.name or "",
        "company": client.company or "",
        "address": client.address or "",
        "phone": client.phone or "",
        "email": client.email or "",
        "site_address": client.site_address or "",
    }


def item_to_dict(item: models.InvoiceItem) -> dict:
    return {
        "id": item.id,
        "category": item.category,
        "code": item.code,
        "description": item.description,
        "dimensions": item.dimensions,
        "qty": item.qty,
        "unit_price": item.unit_price,
        "line_total": item.line_total,
        "image_url": item.image_url,
        "sort_order": item.sort_order,
        "materials": [
            {
                "id": m.id,
                "material_name": m.material_name,
                "unit": m.unit,
                "qty_per_item": m.qty_per_item,
                "total_qty": m.total_qty,
                "unit_cost": m.unit_cost,
                "total_cost": m.total_cost,
            }
            for m in item.materials
        ],
    }


def totals_rows(totals: dict) -> list:
    """The (label, amount) rows of the totals box, in display order."""
    show_discount = totals["discount"] > 0
    show_vat = totals["vat_rate"] > 0 and totals["vat_amount"] > 0
    rows = []
    if show_discount or show_vat:
        rows.append(("Subtotal", totals["subtotal"]))
    if show_discount:
        rows.append(("Discount", -totals["discount"]))
    if show_discount or show_vat:
        rows.append(("Taxable Amount", totals["taxable_amount"]))
    if show_vat:
        rows.append(("VAT (%s%%)" % _fmt_rate(totals["vat_rate"]), totals["vat_amount"]))
    rows.append(("Grand Total", totals["total"]))
    return rows


def _fmt_rate(rate: float) -> str:
    return str(int(rate)) if float(rate).is_integer() else str(rate)


def build_invoice_preview(invoice: models.Invoice) -> dict:
    items = [item_to_dict(i) for i in invoice.items]
    totals = PricingEngine.calculate_totals(items, invoice.discount or 0, invoice.vat_rate or 0)
    return {
        "company": company_info(),
        "client": client_info(invoice.client),
        "meta": {
            "invoice_no": invoice.invoice_no,
            "invoice_date": invoice.invoice_date.isoformat() if invoice.invoice_date else None,
            "due_date": invoice.due_date.isoformat() if invoice.due_date else None,
            "project_name": invoice.project_name or "",
            "order_class": invoice.order_class or "",
            "status": invoice.status.value if invoice.status else "draft",
        },
        "currency": settings.CURRENCY,
        "items": items,
        "totals": totals,
        "totals_rows": [{"label": label, "amount": amount} for label, amount in totals_rows(totals)],
        "notes": invoice.notes or "",
    }
