from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from .. import analytics, models
from ..analytics import Interval, TimeRange
from ..database import get_db

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/summary")
def summary(range: TimeRange = TimeRange.ALL, db: Session = Depends(get_db)):
    return analytics.get_summary(db, range)


@router.get("/timeseries")
def timeseries(
    range: TimeRange = TimeRange.ALL,
    interval: Interval = Interval.DAILY,
    date_from: Optional[date] = Query(None, alias="from"),
    date_to: Optional[date] = Query(None, alias="to"),
    db: Session = Depends(get_db),
):
    return analytics.get_timeseries(db, range, interval, date_from, date_to)


@router.get("/categories")
def categories(range: TimeRange = TimeRange.ALL, db: Session = Depends(get_db)):
    return analytics.get_categories(db, range)


@router.get("/materials")
def materials(range: TimeRange = TimeRange.ALL, db: Session = Depends(get_db)):
    return analytics.get_material_breakdown(db, range)


@router.get("/invoices/{invoice_id}/materials")
def invoice_materials(invoice_id: int, db: Session = Depends(get_db)):
    if not db.query(models.Invoice).filter(models.Invoice.id == invoice_id).first():
        raise HTTPException(status_code=404, detail="Invoice not found")
    return analytics.get_invoice_materials(db, invoice_id)


@router.get("/top-clients")
def top_clients(range: TimeRange = TimeRange.ALL, db: Session = Depends(get_db)):
    return analytics.get_top_clients(db, range)
