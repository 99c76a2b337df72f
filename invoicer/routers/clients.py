from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from typing import List, Optional
import logging
from .. import models, schemas
from ..database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["clients"])


def _get_client_or_404(client_id: int, db: Session) -> models.Client:
    client = db.query(models.Client).filter(models.Client.id == client_id).first()
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.post("/", response_model=schemas.Client)
def create_client(client: schemas.ClientCreate, db: Session = Depends(get_db)):
    data = client.model_dump()
    data["email"] = data.get("email") or None
    if data["email"]:
        existing = db.query(models.Client).filter(models.Client.email == data["email"]).first()
        if existing:
            raise HTTPException(status_code=409, detail="A client with this email already exists")
    db_client = models.Client(**data)
    db.add(db_client)
    db.commit()
    db.refresh(db_client)
    logger.info("Created client %s (%s)", db_client.id, db_client.name)
    return db_client


@router.get("/", response_model=List[schemas.ClientWithStats])
def list_clients(q: Optional[str] = None, skip: int = 0, limit: int = 100,
                 db: Session = Depends(get_db)):
    """Clients with their invoice count and total revenue, optionally filtered by `q`."""
    query = (
        db.query(
            models.Client,
            func.count(models.Invoice.id),
            func.coalesce(func.sum(models.Invoice.total), 0.0),
        )
        .outerjoin(models.Invoice, models.Invoice.client_id == models.Client.id)
        .group_by(models.Client.id)
    )
    if q:
        pattern = f"%{q}%"
        query = query.filter(or_(
            models.Client.name.ilike(pattern),
            models.Client.company.ilike(pattern),
            models.Client.email.ilike(pattern),
            models.Client.phone.ilike(pattern),
        ))
    rows = query.order_by(models.Client.name).offset(skip).limit(limit).all()

    results = []
    for client, invoice_count, total_revenue in rows:
        data = schemas.Client.model_validate(client).model_dump()
        data["invoice_count"] = invoice_count
        data["total_revenue"] = round(float(total_revenue or 0), 2)
        results.append(data)
    return results


@router.get("/{client_id}", response_model=schemas.Client)
def get_client(client_id: int, db: Session = Depends(get_db)):
    return _get_client_or_404(client_id, db)


@router.patch("/{client_id}", response_model=schemas.Client)
def update_client(client_id: int, update: schemas.ClientUpdate, db: Session = Depends(get_db)):
    client = _get_client_or_404(client_id, db)
    changes = update.model_dump(exclude_unset=True)
    if "name" in changes and not (changes["name"] or "").strip():
        raise HTTPException(status_code=422, detail="Client name cannot be blank")
    if "email" in changes:
        changes["email"] = changes["email"] or None
    if changes.get("email") and changes["email"] != client.email:
        taken = db.query(models.Client).filter(models.Client.email == changes["email"]).first()
        if taken:
            raise HTTPException(status_code=409, detail="A client with this email already exists")
    for field, value in changes.items():
        setattr(client, field, value)
    db.commit()
    db.refresh(client)
    return client


@router.delete("/{client_id}")
def delete_client(client_id: int, db: Session = Depends(get_db)):
    """Delete a client. Their invoices are kept, detached from the client."""
    client = _get_client_or_404(client_id, db)
    for invoice in client.invoices:
        invoice.client_id = None
    db.delete(client)
    db.commit()
    logger.info("Deleted client %s", client_id)
    return {"ok": True}
