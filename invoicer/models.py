from sqlalchemy import Column, Integer, String, Float, Date, DateTime, Text, ForeignKey, Enum, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from .database import Base
import enum


class InvoiceStatus(str, enum.Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    company = Column(String)
    address = Column(Text)
    phone = Column(String)
    email = Column(String, unique=True, nullable=True, index=True)
    site_address = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

    invoices = relationship("Invoice", back_populates="client")


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    invoice_no = Column(String, unique=True, nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True)
    project_name = Column(String)
    invoice_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=True)
    order_class = Column(String, nullable=True)
    status = Column(Enum(InvoiceStatus), default=InvoiceStatus.DRAFT)
    # Totals
    subtotal = Column(Float, default=0.0)
    discount = Column(Float, default=0.0)
    vat_rate = Column(Float, default=14.0)
    vat_amount = Column(Float, default=0.0)
    total = Column(Float, default=0.0)
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    client = relationship("Client", back_populates="invoices")
    items = relationship("InvoiceItem", back_populates="invoice",
                         cascade="all, delete-orphan", order_by="InvoiceItem.sort_order")


class InvoiceItem(Base):
    __tablename__ = "invoice_items"

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False)
    category = Column(String, default="Custom furniture")
    code = Column(String)
    description = Column(Text)
    dimensions = Column(String)
    qty = Column(Float, default=1.0)
    unit_price = Column(Float, default=0.0)
    line_total = Column(Float, default=0.0)
    image_url = Column(String, nullable=True)
    sort_order = Column(Integer, default=0)

    invoice = relationship("Invoice", back_populates="items")
    materials = relationship("ItemMaterial", back_populates="item", cascade="all, delete-orphan",
                             order_by="ItemMaterial.id")


class ItemMaterial(Base):
    """One materials-bill row of an invoice line, scaled by the line quantity."""
    __tablename__ = "item_materials"

    id = Column(Integer, primary_key=True, index=True)
    invoice_item_id = Column(Integer, ForeignKey("invoice_items.id"), nullable=False)
    material_name = Column(String, nullable=False)
    unit = Column(String)
    qty_per_item = Column(Float, default=0.0)
    total_qty = Column(Float, default=0.0)
    unit_cost = Column(Float, default=0.0)
    total_cost = Column(Float, default=0.0)

    item = relationship("InvoiceItem", back_populates="materials")


class PricingSetting(Base):
    """The shop's rate table. A single row, edited through the pricing API."""
    __tablename__ = "pricing_settings"

    id = Column(Integer, primary_key=True, index=True)
    rates_json = Column(JSON, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
