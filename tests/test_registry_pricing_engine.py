"""
Calculator registry + pricing engine tests.

Tests:
1-4.  Registry (category lookup, presets, unknown categories)
5.    Selling price = material cost × (1 + margin) for every category
6-10. Applying a costing onto an invoice line
11-13. Invoice totals + material scaling
"""

import pytest

from invoicer.calculators.cabinet import CabinetCalculator
from invoicer.calculators.rates import DEFAULT_RATES
from invoicer.calculators.registry import (
    ITEM_CATEGORIES, NO_CALCULATOR_MESSAGE, category_fields, get_calculator,
    has_calculator, list_categories,
)
from invoicer.calculators.seating import SeatingCalculator
from invoicer.calculators.base import CostBreakdown, CostResult
from invoicer.pricing_engine import DIMENSIONS_REQUIRED_MESSAGE, PricingEngine, round_half_up


def _sample_item(**overrides):
    item = {
        "category": "Cabinet",
        "code": "CB-01",
        "description": "",
        "dimensions": "220×80×40 cm",
        "qty": 1,
        "unit_price": 0,
    }
    item.update(overrides)
    return item


# ============================================================
# Registry
# ============================================================

def test_every_costable_category_is_an_item_category():
    for category in list_categories():
        assert category in ITEM_CATEGORIES
    assert not has_calculator("Custom furniture")
    assert "Custom furniture" in ITEM_CATEGORIES


def test_get_calculator():
    assert isinstance(get_calculator("Cabinet"), CabinetCalculator)
    assert isinstance(get_calculator("Bar stool"), SeatingCalculator)


def test_unknown_category_raises():
    with pytest.raises(ValueError, match="No calculator registered"):
        get_calculator("Custom furniture")


def test_category_presets_are_overlaid():
    assert category_fields("Sofa curved", {"length_m": 3}) == {
        "sofa_type": "Curved", "length_m": 3}
    # Explicit selection wins; blanks (None) do not clear the preset
    assert category_fields("Bench", {"item_type": "Arm chair"})["item_type"] == "Arm chair"
    assert category_fields("Bench", {"item_type": None})["item_type"] == "Bench"


@pytest.mark.parametrize("category", list_categories())
@pytest.mark.parametrize("margin", ["0", "30", "47.5"])
def test_selling_price_applies_margin(category, margin):
    result = PricingEngine().cost_item(category, {"profit_margin": margin})
    b = result.breakdown
    assert b.material_cost == sum(c.amount for c in b.components)
    assert b.selling_price == b.material_cost * (1 + float(margin) / 100)
    assert result.price == b.selling_price
    assert all(c.amount >= 0 for c in b.components)


def test_category_preset_reaches_calculator():
    result = PricingEngine().cost_item("Arm chair", {"detail_level": "Heavy"})
    assert result.details["item_type"] == "Arm chair"
    assert result.details["solid_volume_m3"] == 0.06


# ============================================================
# Apply costing onto an invoice line
# ============================================================

def test_apply_rounds_price_and_sets_materials():
    engine = PricingEngine()
    updated, result = engine.apply_to_item(_sample_item(), {"width_cm": 80})
    assert updated["unit_price"] == round_half_up(result.price)
    assert isinstance(updated["unit_price"], int)
    assert updated["description"] == result.description
    assert updated["dimensions"] == "220×80×40 cm"
    assert updated["materials"][-1]["name"] == "Profit"
    assert updated["code"] == "CB-01"


def test_apply_rounds_halves_up():
    breakdown = CostBreakdown(profit_margin_pct=30)
    breakdown.add("Overhead", 5)
    result = CostResult(price=breakdown.selling_price, description="Overhead only",
                        dimensions="", breakdown=breakdown)
    assert result.price == pytest.approx(6.5)

    updated = PricingEngine.apply_costing(_sample_item(), result)
    assert updated["unit_price"] == 7
    assert round_half_up(2.5) == 3
    assert round_half_up(6.49) == 6
    assert round_half_up(0) == 0


def test_apply_keeps_dimensions_when_calculator_has_none():
    updated, result = PricingEngine().apply_to_item(
        _sample_item(category="Dining chair", dimensions="90×45×50 cm"), {})
    assert result.dimensions == ""
    assert updated["dimensions"] == "90×45×50 cm"
    assert "materials" not in updated


@pytest.mark.parametrize("dimensions", [None, "", "   "])
def test_apply_requires_dimensions(dimensions):
    with pytest.raises(ValueError, match="dimensions"):
        PricingEngine().apply_to_item(_sample_item(dimensions=dimensions), {})
    assert "H × W × T" in DIMENSIONS_REQUIRED_MESSAGE


def test_apply_checks_dimensions_before_category():
    with pytest.raises(ValueError) as exc:
        PricingEngine().apply_to_item(
            _sample_item(category="Custom furniture", dimensions=""), {})
    assert str(exc.value) == DIMENSIONS_REQUIRED_MESSAGE

    with pytest.raises(ValueError) as exc:
        PricingEngine().apply_to_item(_sample_item(category="Custom furniture"), {})
    assert str(exc.value) == NO_CALCULATOR_MESSAGE


def test_engine_uses_its_rate_table():
    cheap = PricingEngine(DEFAULT_RATES.with_rates(door_hinge_rate=0))
    result = cheap.cost_item("Cabinet", {})
    assert result.breakdown.get("Hinges") == 0


# ============================================================
# Totals + material scaling
# ============================================================

def test_calculate_totals():
    items = [{"qty": 2, "unit_price": 10000}, {"qty": 1, "unit_price": 5000}]
    totals = PricingEngine.calculate_totals(items, discount=1000, vat_rate=14)
    assert totals == {
        "subtotal": 25000,
        "discount": 1000,
        "taxable_amount": 24000,
        "vat_rate": 14,
        "vat_amount": 3360,
        "total": 27360,
    }


def test_totals_clamp_taxable_at_zero():
    totals = PricingEngine.calculate_totals([{"qty": 1, "unit_price": 500}],
                                            discount=800, vat_rate=14)
    assert totals["taxable_amount"] == 0
    assert totals["vat_amount"] == 0
    assert totals["total"] == 0


def test_scale_materials():
    rows = [
        {"name": "Door hinges", "unit": "pcs", "quantity": 10, "cost": 890},
        {"name": "Profit", "unit": "EGP", "quantity": 0, "cost": 0},
    ]
    scaled = PricingEngine.scale_materials(rows, 2)
    assert scaled[0] == {
        "material_name": "Door hinges",
        "unit": "pcs",
        "qty_per_item": 10.0,
        "total_qty": 20.0,
        "unit_cost": 89.0,
        "total_cost": 1780.0,
    }
    assert scaled[1]["unit_cost"] == 0
