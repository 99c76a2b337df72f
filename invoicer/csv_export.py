"""
Materials CSV export — one row per materials-bill row of every invoice line.
"""

import csv
import io

from . import models

CSV_HEADER = [
    "Invoice No",
    "Project",
    "Client",
    "Item #",
    "Item Name",
    "Category",
    "Material",
    "Unit",
    "Qty per Item",
    "Item Qty",
    "Total Material Qty",
]


def materials_csv_filename(invoice: models.Invoice) -> str:
    if invoice.invoice_no:
        return f"{invoice.invoice_no}_materials.csv"
    return "invoice-materials.csv"


def has_materials(invoice: models.Invoice) -> bool:
    return any(item.materials for item in invoice.items)


def generate_materials_csv(invoice: models.Invoice) -> str:
    """CSV text (CRLF line endings) for an invoice's materials."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\r\n")
    writer.writerow(CSV_HEADER)

    client_name = invoice.client.name if invoice.client else ""
    for index, item in enumerate(invoice.items, start=1):
        for material in item.materials:
            writer.writerow([
                invoice.invoice_no or "",
                invoice.project_name or "",
                client_name or "",
                index,
                item.code or "Item",
                item.category,
                material.material_name,
                material.unit,
                _num(material.qty_per_item),
                _num(item.qty),
                _num(material.qty_per_item * item.qty),
            ])
    return buffer.getvalue()


def _num(value: float):
    value = float(value or 0)
    return int(value) if value.is_integer() else round(value, 4)
