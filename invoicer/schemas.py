from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime


# --- Clients ---

class ClientBase(BaseModel):
    name: str
    company: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    site_address: Optional[str] = None

class ClientCreate(ClientBase):
    pass

class ClientUpdate(BaseModel):
    name: Optional[str] = None
    company: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    site_address: Optional[str] = None

class Client(ClientBase):
    id: int
    created_at: datetime
    class Config:
        from_attributes = True

class ClientWithStats(Client):
    invoice_count: int = 0
    total_revenue: float = 0.0


# --- Invoice lines ---

class MaterialRowIn(BaseModel):
    name: str
    unit: str = ""
    quantity: float = 0.0
    cost: float = 0.0

class InvoiceItemBase(BaseModel):
    category: str = "Custom furniture"
    code: Optional[str] = None
    description: Optional[str] = None
    dimensions: Optional[str] = None
    qty: float = 1.0
    unit_price: float = 0.0
    image_url: Optional[str] = None

class InvoiceItemCreate(InvoiceItemBase):
    materials: List[MaterialRowIn] = []


# --- Invoices ---

class InvoiceMeta(BaseModel):
    invoice_no: str = Field(min_length=1)
    invoice_date: date
    due_date: Optional[date] = None
    project_name: Optional[str] = None
    order_class: Optional[str] = None

class InvoiceSave(BaseModel):
    """Full invoice form — saved by invoice number (update in place when it exists)."""
    client: Optional[ClientBase] = None
    meta: InvoiceMeta
    items: List[InvoiceItemCreate] = []
    vat_rate: Optional[float] = None
    discount: float = 0.0
    notes: Optional[str] = None

class InvoiceStatusUpdate(BaseModel):
    status: str


# --- Costing ---

class CostingRequest(BaseModel):
    fields: dict = {}
    rates: Optional[dict] = None

class ApplyCostingRequest(BaseModel):
    item: InvoiceItemCreate
    fields: dict = {}
    rates: Optional[dict] = None
