"""
Calculator registry — maps invoice item categories to calculator classes.

Several categories share a calculator (every chair type goes through the
seating calculator); the category then pre-fills the selection it implies.
"""

from .base import BaseCalculator
from .cabinet import CabinetCalculator
from .door import DoorCalculator
from .seating import SeatingCalculator
from .sofa import SofaCalculator
from .table import TableCalculator

ITEM_CATEGORIES = [
    "Door",
    "Dining chair",
    "Arm chair",
    "Bar stool",
    "Bench",
    "Dining table",
    "Coffee table",
    "Side table",
    "Console table",
    "Sofa straight",
    "Sofa curved",
    "Cabinet",
    "Custom furniture",
]

# category -> (calculator class, fields implied by the category)
CATEGORY_REGISTRY: dict[str, tuple] = {
    "Door": (DoorCalculator, {}),
    "Dining chair": (SeatingCalculator, {"item_type": "Dining chair"}),
    "Arm chair": (SeatingCalculator, {"item_type": "Arm chair"}),
    "Bar stool": (SeatingCalculator, {"item_type": "Bar stool"}),
    "Bench": (SeatingCalculator, {"item_type": "Bench"}),
    "Dining table": (TableCalculator, {}),
    "Coffee table": (TableCalculator, {}),
    "Side table": (TableCalculator, {}),
    "Console table": (TableCalculator, {}),
    "Sofa straight": (SofaCalculator, {"sofa_type": "Straight"}),
    "Sofa curved": (SofaCalculator, {"sofa_type": "Curved"}),
    "Cabinet": (CabinetCalculator, {}),
}

NO_CALCULATOR_MESSAGE = (
    "Costing is available for doors, seating, tables, sofas and cabinets."
)


def get_calculator(category: str) -> BaseCalculator:
    """Returns an instance of the calculator for an item category, or raises ValueError."""
    if category not in CATEGORY_REGISTRY:
        raise ValueError(
            f"No calculator registered for category: {category}. "
            f"{NO_CALCULATOR_MESSAGE}"
        )
    return CATEGORY_REGISTRY[category][0]()


def category_fields(category: str, fields: dict) -> dict:
    """Category presets overlaid by the explicitly entered fields."""
    presets = CATEGORY_REGISTRY[category][1] if category in CATEGORY_REGISTRY else {}
    return {**presets, **{k: v for k, v in fields.items() if v is not None}}


def has_calculator(category: str) -> bool:
    """Check if a calculator exists for an item category."""
    return category in CATEGORY_REGISTRY


def list_categories() -> list[str]:
    """List all item categories that can be costed."""
    return list(CATEGORY_REGISTRY.keys())
