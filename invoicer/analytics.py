"""
Sales analytics over saved invoices.

Every report takes a time range (last 7 / 30 / 90 days, or all) applied to
the invoice date. Aggregation is done in SQL where it groups cleanly and in
Python where rows need merging (materials by name + unit).
"""

import enum
import logging
from collections import OrderedDict
from datetime import date, timedelta
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from . import models

logger = logging.getLogger(__name__)

TOP_CATEGORIES = 5
TOP_MATERIALS = 10
TOP_CLIENTS = 5


class TimeRange(str, enum.Enum):
    DAYS_7 = "7days"
    DAYS_30 = "30days"
    DAYS_90 = "90days"
    ALL = "all"


class Interval(str, enum.Enum):
    DAILY = "daily"
    MONTHLY = "monthly"


RANGE_DAYS = {
    TimeRange.DAYS_7: 7,
    TimeRange.DAYS_30: 30,
    TimeRange.DAYS_90: 90,
}


def range_start(time_range: TimeRange, today: Optional[date] = None) -> Optional[date]:
    """First invoice date inside the range, or None for all time."""
    days = RANGE_DAYS.get(TimeRange(time_range))
    if days is None:
        return None
    return (today or date.today()) - timedelta(days=days)


def _invoices_in_range(db: Session, time_range: TimeRange):
    query = db.query(models.Invoice)
    start = range_start(time_range)
    if start:
        query = query.filter(models.Invoice.invoice_date >= start)
    return query


def get_summary(db: Session, time_range: TimeRange = TimeRange.ALL) -> dict:
    invoices = _invoices_in_range(db, time_range).all()
    invoice_ids = [inv.id for inv in invoices]

    total_items = 0.0
    if invoice_ids:
        total_items = db.query(func.coalesce(func.sum(models.InvoiceItem.qty), 0.0)).filter(
            models.InvoiceItem.invoice_id.in_(invoice_ids)
        ).scalar()

    total_revenue = sum(inv.total or 0 for inv in invoices)
    count = len(invoices)
    logger.debug("Summary over %s: %d invoices", TimeRange(time_range).value, count)
    by_status = {status: 0 for status in models.InvoiceStatus}
    for inv in invoices:
        if inv.status in by_status:
            by_status[inv.status] += 1

    return {
        "total_invoices": count,
        "total_revenue": round(total_revenue, 2),
        "avg_invoice_value": round(total_revenue / count, 2) if count else 0.0,
        "total_items_sold": float(total_items or 0),
        "draft_count": by_status[models.InvoiceStatus.DRAFT],
        "sent_count": by_status[models.InvoiceStatus.SENT],
        "paid_count": by_status[models.InvoiceStatus.PAID],
    }


def get_timeseries(db: Session, time_range: TimeRange = TimeRange.ALL,
                   interval: Interval = Interval.DAILY,
                   date_from: Optional[date] = None, date_to: Optional[date] = None) -> list:
    """Invoice count and revenue per day (or per month, keyed YYYY-MM-01), oldest first."""
    query = _invoices_in_range(db, time_range)
    if date_from:
        query = query.filter(models.Invoice.invoice_date >= date_from)
    if date_to:
        query = query.filter(models.Invoice.invoice_date <= date_to)

    grouped = OrderedDict()
    for inv in query.order_by(models.Invoice.invoice_date).all():
        if Interval(interval) == Interval.MONTHLY:
            period = inv.invoice_date.replace(day=1).isoformat()
        else:
            period = inv.invoice_date.isoformat()
        bucket = grouped.setdefault(period, {"period": period, "invoice_count": 0, "revenue": 0.0})
        bucket["invoice_count"] += 1
        bucket["revenue"] += inv.total or 0

    return [
        {**bucket, "revenue": round(bucket["revenue"], 2)}
        for bucket in sorted(grouped.values(), key=lambda b: b["period"])
    ]


def get_categories(db: Session, time_range: TimeRange = TimeRange.ALL) -> list:
    """Top item categories by revenue (qty × unit price)."""
    revenue = func.sum(models.InvoiceItem.qty * models.InvoiceItem.unit_price)
    query = (
        db.query(
            models.InvoiceItem.category,
            func.sum(models.InvoiceItem.qty),
            revenue,
        )
        .join(models.Invoice, models.InvoiceItem.invoice_id == models.Invoice.id)
        .group_by(models.InvoiceItem.category)
    )
    start = range_start(time_range)
    if start:
        query = query.filter(models.Invoice.invoice_date >= start)

    rows = [
        {
            "category": category or "Other",
            "item_count": float(item_count or 0),
            "revenue": round(float(total or 0), 2),
        }
        for category, item_count, total in query.all()
    ]
    rows.sort(key=lambda r: r["revenue"], reverse=True)
    return rows[:TOP_CATEGORIES]


def _group_materials(materials) -> list:
    grouped = OrderedDict()
    for mat in materials:
        key = (mat.material_name, mat.unit)
        if key not in grouped:
            grouped[key] = {
                "material_name": mat.material_name,
                "unit": mat.unit,
                "total_qty": 0.0,
                "usage_count": 0,
                "unit_cost": mat.unit_cost or 0.0,
                "total_cost": 0.0,
            }
        row = grouped[key]
        row["total_qty"] += mat.total_qty or 0
        row["total_cost"] += mat.total_cost or 0
        row["usage_count"] += 1

    rows = list(grouped.values())
    for row in rows:
        row["total_qty"] = round(row["total_qty"], 3)
        row["total_cost"] = round(row["total_cost"], 2)
    rows.sort(key=lambda r: r["total_cost"], reverse=True)
    return rows


def get_material_breakdown(db: Session, time_range: TimeRange = TimeRange.ALL) -> list:
    """Top materials by total cost, merged by name + unit."""
    query = (
        db.query(models.ItemMaterial)
        .join(models.InvoiceItem, models.ItemMaterial.invoice_item_id == models.InvoiceItem.id)
        .join(models.Invoice, models.InvoiceItem.invoice_id == models.Invoice.id)
    )
    start = range_start(time_range)
    if start:
        query = query.filter(models.Invoice.invoice_date >= start)
    return _group_materials(query.all())[:TOP_MATERIALS]


def get_invoice_materials(db: Session, invoice_id: int) -> list:
    """All materials of one invoice, merged by name + unit."""
    materials = (
        db.query(models.ItemMaterial)
        .join(models.InvoiceItem, models.ItemMaterial.invoice_item_id == models.InvoiceItem.id)
        .filter(models.InvoiceItem.invoice_id == invoice_id)
        .all()
    )
    return _group_materials(materials)


def get_top_clients(db: Session, time_range: TimeRange = TimeRange.ALL) -> list:
    grouped = OrderedDict()
    for inv in _invoices_in_range(db, time_range).all():
        name = inv.client.name if inv.client else "Unknown"
        row = grouped.setdefault(name, {"client_name": name, "invoice_count": 0,
                                        "total_revenue": 0.0})
        row["invoice_count"] += 1
        row["total_revenue"] += inv.total or 0

    rows = list(grouped.values())
    for row in rows:
        row["total_revenue"] = round(row["total_revenue"], 2)
    rows.sort(key=lambda r: r["total_revenue"], reverse=True)
    return rows[:TOP_CLIENTS]
