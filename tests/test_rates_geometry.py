"""
Rate table + geometry helper tests.

Tests:
1-4.  Rate table (defaults, typed updates, rejection of unknown names)
5-8.  Geometry (areas, fractional sheets, reference scaling)
9-12. Input coercion shared by every calculator
"""

import logging

import pytest
from pydantic import ValidationError

from invoicer.calculators.base import BaseCalculator, CostBreakdown, fmt_dims, fmt_num
from invoicer.calculators.geometry import (
    SHEET_AREA_M2, area_m2, cm_to_m, scale_reference, sheets_needed,
)
from invoicer.calculators.rates import (
    DEFAULT_RATES, FinishType, PlyThickness, RateTable, VeneerType, WoodType, rate_names,
)
from invoicer.calculators.door import DoorCalculator


# ============================================================
# Rate table
# ============================================================

def test_default_rates():
    assert DEFAULT_RATES.mouski_rate == 24000
    assert DEFAULT_RATES.mdf10_rate_per_sheet == 650
    assert DEFAULT_RATES.door_hinge_rate == 89
    assert DEFAULT_RATES.default_accessories == 1500
    assert DEFAULT_RATES.default_profit_margin == 30
    assert "labor_rate_per_hour" in rate_names()


def test_with_rates_returns_new_table():
    updated = DEFAULT_RATES.with_rates(mouski_rate=30000, door_hinge_rate="95")
    assert updated.mouski_rate == 30000
    assert updated.door_hinge_rate == 95
    # Source table is untouched
    assert DEFAULT_RATES.mouski_rate == 24000
    assert updated.oak_veneer_rate_per_m2 == DEFAULT_RATES.oak_veneer_rate_per_m2


def test_with_rates_rejects_unknown_name_and_bad_value():
    with pytest.raises(ValidationError):
        DEFAULT_RATES.with_rates(teak_rate=1000)
    with pytest.raises(ValidationError):
        DEFAULT_RATES.with_rates(mouski_rate="expensive")
    with pytest.raises(ValidationError):
        DEFAULT_RATES.with_rates(mouski_rate=float("nan"))
    with pytest.raises(ValidationError):
        DEFAULT_RATES.with_rates(door_hinge_rate="inf")


def test_rate_table_is_frozen():
    with pytest.raises(ValidationError):
        DEFAULT_RATES.mouski_rate = 1


def test_selection_lookups():
    rates = RateTable()
    assert rates.wood_rate(WoodType.ARO) == 85000
    assert rates.veneer_rate(VeneerType.WALNUT) == 310
    assert rates.veneer_rate(VeneerType.HPL) == 0.0
    assert rates.laminate_rate(VeneerType.LPL) == 350
    assert rates.finish_rate(FinishType.NC) == 280
    assert rates.ply_rate(PlyThickness.MM_12) == 1450


# ============================================================
# Geometry
# ============================================================

def test_area_in_square_meters():
    assert cm_to_m(220) == pytest.approx(2.2)
    assert area_m2(220, 90) == pytest.approx(1.98)


def test_sheets_are_fractional():
    assert SHEET_AREA_M2 == pytest.approx(2.9768)
    assert sheets_needed(SHEET_AREA_M2) == pytest.approx(1.0)
    assert sheets_needed(SHEET_AREA_M2 / 3) == pytest.approx(1 / 3)
    assert sheets_needed(0) == 0


def test_scale_reference():
    assert scale_reference(0.045, 1.0, 1.0) == pytest.approx(0.045)
    assert scale_reference(0.35, 0.5, 2.0, 1.0) == pytest.approx(0.35)
    assert scale_reference(0.35, 0.5) == pytest.approx(0.175)


def test_number_formatting():
    assert fmt_num(220.0) == "220"
    assert fmt_num(2.5) == "2.5"
    assert fmt_dims(220, 90, 4) == "220×90×4 cm"


# ============================================================
# Input coercion
# ============================================================

def test_parse_number_coerces_garbage_to_zero():
    calc = DoorCalculator()
    assert calc.parse_number("12.5") == 12.5
    assert calc.parse_number("") == 0.0
    assert calc.parse_number("abc") == 0.0
    assert calc.parse_number("nan") == 0.0
    assert calc.parse_number(None, default=7) == 7


def test_parse_choice_falls_back_and_logs(caplog):
    calc = DoorCalculator()
    assert calc.parse_choice("oak", VeneerType, VeneerType.NONE) == VeneerType.OAK
    assert calc.parse_choice(8.0, PlyThickness, PlyThickness.MM_2_7) == PlyThickness.MM_8
    with caplog.at_level(logging.WARNING):
        choice = calc.parse_choice("Teak", WoodType, WoodType.MOUSKI)
    assert choice == WoodType.MOUSKI
    assert "Teak" in caplog.text


def test_breakdown_folds_components():
    breakdown = CostBreakdown(profit_margin_pct=25)
    breakdown.add("Wood", 100)
    breakdown.add("Labor", 300)
    assert breakdown.material_cost == 400
    assert breakdown.profit == 100
    assert breakdown.selling_price == 500
    assert breakdown.get("Labor") == 300
    assert breakdown.get("Glass") == 0.0
    assert issubclass(DoorCalculator, BaseCalculator)
