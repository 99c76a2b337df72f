"""
Abstract base class for all furniture costing calculators.

Input: the item's costing fields (dict, straight from the costing form)
       + the RateTable in effect.
Output: CostResult — price, description, dimensions, optional materials bill.

Every category follows the same shape: geometry → named cost components →
material cost → profit margin → selling price. CostBreakdown carries that
shape so the calculators only decide which components exist.
"""

import enum
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from .rates import RateTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CostComponent:
    name: str
    amount: float


@dataclass
class CostBreakdown:
    """Ordered named cost components folded into material cost + selling price."""

    profit_margin_pct: float = 0.0
    components: list = field(default_factory=list)

    def add(self, name: str, amount: float) -> float:
        self.components.append(CostComponent(name, amount))
        return amount

    def get(self, name: str) -> float:
        for component in self.components:
            if component.name == name:
                return component.amount
        return 0.0

    @property
    def material_cost(self) -> float:
        return sum(c.amount for c in self.components)

    @property
    def profit(self) -> float:
        return self.material_cost * self.profit_margin_pct / 100

    @property
    def selling_price(self) -> float:
        return self.material_cost * (1 + self.profit_margin_pct / 100)

    def to_dict(self) -> dict:
        return {
            "components": [
                {"name": c.name, "amount": round(c.amount, 2)} for c in self.components
            ],
            "material_cost": round(self.material_cost, 2),
            "profit_margin_pct": self.profit_margin_pct,
            "profit": round(self.profit, 2),
            "selling_price": round(self.selling_price, 2),
        }


@dataclass(frozen=True)
class MaterialRow:
    name: str
    unit: str
    quantity: float
    cost: float = 0.0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "unit": self.unit,
            "quantity": self.quantity,
            "cost": round(self.cost, 2),
        }


@dataclass
class CostResult:
    price: float
    description: str
    dimensions: str
    breakdown: CostBreakdown
    materials: Optional[list] = None
    details: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        result = {
            "price": round(self.price, 2),
            "description": self.description,
            "dimensions": self.dimensions,
            "breakdown": self.breakdown.to_dict(),
            "details": self.details,
        }
        if self.materials is not None:
            result["materials"] = [m.to_dict() for m in self.materials]
        return result


class BaseCalculator(ABC):
    """All furniture category calculators inherit from this."""

    category = ""

    @abstractmethod
    def calculate(self, fields: dict, rates: RateTable) -> CostResult:
        """
        Takes the costing form fields and the rate table.
        Never raises for nonsensical numbers — blanks coerce to zero.
        """
        pass

    # --- Input coercion ---

    def parse_number(self, value, default: float = 0.0) -> float:
        """Parse a numeric form value. Blank, garbage and NaN become zero."""
        if value is None:
            return default
        if isinstance(value, bool):
            return float(value)
        try:
            text = str(value).strip()
            if not text:
                return 0.0
            number = float(text)
        except (ValueError, TypeError):
            return 0.0
        if math.isnan(number) or math.isinf(number):
            return 0.0
        return number

    def parse_int(self, value, default: int = 0) -> int:
        """Parse a count (doors, shelves, drawers)."""
        return int(self.parse_number(value, default=default))

    def parse_bool(self, value, default: bool = False) -> bool:
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in ("yes", "true", "1", "on", "y")

    def parse_choice(self, value, choices: type, default: enum.Enum) -> enum.Enum:
        """Map a form selection onto an enum. Unknown values fall back to default."""
        if value is None or value == "":
            return default
        if isinstance(value, choices):
            return value
        text = str(value).strip()
        for member in choices:
            if text == member.value or text.lower() == member.value.lower():
                return member
        # Numeric selections (ply thickness) may arrive as 8.0 instead of "8"
        try:
            number = float(text)
            for member in choices:
                if float(member.value) == number:
                    return member
        except ValueError:
            pass
        logger.warning("Unknown %s selection %r — using %s",
                       choices.__name__, value, default.value)
        return default

    # --- Shared pieces ---

    def start_breakdown(self, fields: dict, rates: RateTable) -> CostBreakdown:
        margin = self.parse_number(fields.get("profit_margin"),
                                   default=rates.default_profit_margin)
        return CostBreakdown(profit_margin_pct=margin)

    def finish_result(self, breakdown: CostBreakdown, description: str,
                      dimensions: str = "", materials: list = None,
                      details: dict = None) -> CostResult:
        logger.debug("%s costed: material=%.2f price=%.2f",
                     self.category or type(self).__name__,
                     breakdown.material_cost, breakdown.selling_price)
        return CostResult(
            price=breakdown.selling_price,
            description=description,
            dimensions=dimensions,
            breakdown=breakdown,
            materials=materials,
            details=details or {},
        )


def fmt_num(value: float) -> str:
    """Render a form number the way it was typed: 220 not 220.0, 2.5 stays 2.5."""
    if float(value).is_integer():
        return str(int(value))
    return ("%.4f" % value).rstrip("0").rstrip(".")


def fmt_dims(*values: float) -> str:
    return "×".join(fmt_num(v) for v in values) + " cm"


def join_parts(parts: list) -> str:
    return " – ".join(parts)
