"""
Invoice pricing.

Runs the category calculators against the shop's rate table, applies a
costing result onto an invoice line, and totals an invoice.
Pure math — no database access.

Totals:
    subtotal = Σ qty × unit_price
    taxable  = max(subtotal − discount, 0)
    vat      = taxable × vat_rate / 100
    total    = taxable + vat
"""

import logging
import math

from .calculators.base import CostResult
from .calculators.rates import DEFAULT_RATES, RateTable
from .calculators.registry import (
    NO_CALCULATOR_MESSAGE, category_fields, get_calculator, has_calculator,
)

logger = logging.getLogger(__name__)

DIMENSIONS_REQUIRED_MESSAGE = "Please enter item dimensions first (H × W × T cm)."


def round_half_up(value: float) -> int:
    """Round to whole currency, halves up (6.5 -> 7)."""
    return int(math.floor(value + 0.5))


class PricingEngine:
    """Costs invoice lines and totals invoices against one rate table."""

    def __init__(self, rates: RateTable = DEFAULT_RATES):
        self.rates = rates

    def cost_item(self, category: str, fields: dict) -> CostResult:
        """Run the calculator for an item category. Raises ValueError for
        categories without a calculator."""
        calculator = get_calculator(category)
        return calculator.calculate(category_fields(category, fields), self.rates)

    @staticmethod
    def validate_dimensions(dimensions) -> None:
        """An invoice line must carry a dimensions string before it is costed."""
        if dimensions is None or not str(dimensions).strip():
            raise ValueError(DIMENSIONS_REQUIRED_MESSAGE)

    def apply_to_item(self, item: dict, fields: dict) -> tuple:
        """Validate, cost and apply onto an invoice line.

        Returns (updated item, CostResult).
        """
        self.validate_dimensions(item.get("dimensions"))
        category = item.get("category") or ""
        if not has_calculator(category):
            raise ValueError(NO_CALCULATOR_MESSAGE)
        result = self.cost_item(category, fields)
        return self.apply_costing(item, result), result

    @staticmethod
    def apply_costing(item: dict, result: CostResult) -> dict:
        """
        Price is rounded to whole currency, halves up. The description is replaced;
        dimensions and materials only when the calculator produced them.
        """
        updated = dict(item)
        updated["unit_price"] = round_half_up(result.price)
        updated["description"] = result.description
        updated["dimensions"] = result.dimensions or item.get("dimensions", "")
        if result.materials is not None:
            updated["materials"] = [m.to_dict() for m in result.materials]
        logger.info("Applied costing to %s line: unit price %s",
                    item.get("category"), updated["unit_price"])
        return updated

    @staticmethod
    def calculate_totals(items: list, discount: float = 0.0, vat_rate: float = 0.0) -> dict:
        """Invoice totals from line items ({qty, unit_price} dicts)."""
        subtotal = sum(
            float(i.get("qty") or 0) * float(i.get("unit_price") or 0) for i in items
        )
        taxable = max(subtotal - (discount or 0), 0)
        vat_amount = taxable * (vat_rate or 0) / 100
        return {
            "subtotal": round(subtotal, 2),
            "discount": round(discount or 0, 2),
            "taxable_amount": round(taxable, 2),
            "vat_rate": vat_rate or 0,
            "vat_amount": round(vat_amount, 2),
            "total": round(taxable + vat_amount, 2),
        }

    @staticmethod
    def scale_materials(materials: list, item_qty: float) -> list:
        """Materials-bill rows of one item scaled by the line quantity."""
        scaled = []
        for row in materials or []:
            qty_per_item = float(row.get("quantity", row.get("qty", 0)) or 0)
            cost = float(row.get("cost", 0) or 0)
            unit_cost = cost / qty_per_item if qty_per_item else cost
            scaled.append({
                "material_name": row.get("name", ""),
                "unit": row.get("unit", ""),
                "qty_per_item": qty_per_item,
                "total_qty": qty_per_item * item_qty,
                "unit_cost": round(unit_cost, 2),
                "total_cost": round(cost * item_qty, 2),
            })
        return scaled
