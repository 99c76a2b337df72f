"""
Door + seating calculator tests.

Tests:
1-6.   Door (reference scenario, laminate facing, face areas, glass, chassis)
7-11.  Seating (lookup table, overrides, plywood, upholstery, fabric)
"""

import pytest

from invoicer.calculators.door import DoorCalculator
from invoicer.calculators.geometry import SHEET_AREA_M2
from invoicer.calculators.rates import DEFAULT_RATES
from invoicer.calculators.seating import (
    DetailLevel, SeatItemType, SeatingCalculator, seating_defaults,
)


# --- Test fixtures ---

def _sample_door_fields(**overrides):
    """220×90×4 Mouski door, oak veneer, PU matte, nothing extra."""
    fields = {
        "height_cm": "220",
        "width_cm": "90",
        "thickness_cm": "4",
        "wood_type": "Mouski",
        "veneer_type": "Oak",
        "finish_type": "PU matte",
        "glass_type": "None",
        "glass_area_m2": "0",
        "has_steel_chassis": False,
        "accessories_cost": "0",
        "overhead_cost": "0",
        "labor_hours": "0",
        "profit_margin": "30",
    }
    fields.update(overrides)
    return fields


def _sample_chair_fields(**overrides):
    fields = {
        "item_type": "Dining chair",
        "detail_level": "Light",
        "wood_type": "Mouski",
        "area_m2": "1.2",
        "veneer_type": "None",
        "finish_type": "PU matte",
        "upholstery_type": "Seat only",
        "fabric_grade": "Low",
        "fabric_meters": "1.5",
        "overhead_cost": "350",
        "profit_margin": "30",
    }
    fields.update(overrides)
    return fields


# ============================================================
# Door
# ============================================================

def test_door_reference_scenario():
    result = DoorCalculator().calculate(_sample_door_fields(), DEFAULT_RATES)
    b = result.breakdown

    both_faces = 2 * 2.2 * 0.9
    frame = 0.045 * 24000
    mdf = both_faces / SHEET_AREA_M2 * 650
    veneer = both_faces * 210
    finish = both_faces * 350

    assert b.get("Natural wood cost") == pytest.approx(frame)
    assert b.get("MDF 10mm both faces") == pytest.approx(mdf)
    assert b.get("Veneer cost") == pytest.approx(veneer)
    assert b.get("Finish cost") == pytest.approx(finish)
    for name in ("Glass cost", "Steel chassis", "Accessories", "Overhead", "Labor"):
        assert b.get(name) == 0

    assert b.material_cost == pytest.approx(frame + mdf + veneer + finish)
    assert result.price == pytest.approx(b.material_cost * 1.30)
    assert result.dimensions == "220×90×4 cm"
    assert result.materials is None


@pytest.mark.parametrize("laminate", ["HPL", "LPL"])
@pytest.mark.parametrize("finish", ["PU matte", "PU high gloss", "NC", "Oil / stain"])
def test_door_laminate_has_no_finish(laminate, finish):
    result = DoorCalculator().calculate(
        _sample_door_fields(veneer_type=laminate, finish_type=finish), DEFAULT_RATES)
    assert result.breakdown.get("Finish cost") == 0
    sheet_rate = 650 if laminate == "HPL" else 350
    assert result.breakdown.get("Veneer cost") == pytest.approx(3.96 / SHEET_AREA_M2 * sheet_rate)
    assert f"Veneer: {laminate} facing" in result.description
    assert "Finish: none (HPL / LPL)" in result.description


def test_door_faces_and_mdf_scale_linearly():
    small = DoorCalculator().calculate(_sample_door_fields(width_cm="45"), DEFAULT_RATES)
    full = DoorCalculator().calculate(_sample_door_fields(), DEFAULT_RATES)
    assert small.details["both_faces_area_m2"] == pytest.approx(2 * small.details["leaf_area_m2"])
    assert full.details["both_faces_area_m2"] == pytest.approx(3.96)
    assert full.breakdown.get("MDF 10mm both faces") == pytest.approx(
        2 * small.breakdown.get("MDF 10mm both faces"))
    assert full.details["volume_m3"] == pytest.approx(1.98 * 0.04)


def test_door_glass_chassis_and_defaults():
    fields = _sample_door_fields(glass_type="Glass10", glass_area_m2="0.5",
                                 has_steel_chassis="Yes", labor_hours="2")
    del fields["accessories_cost"]
    result = DoorCalculator().calculate(fields, DEFAULT_RATES)
    b = result.breakdown
    assert b.get("Glass cost") == pytest.approx(0.5 * 1750)
    assert b.get("Steel chassis") == 1500
    assert b.get("Accessories") == DEFAULT_RATES.default_accessories
    assert b.get("Labor") == pytest.approx(2 * 160)
    assert "Glass: 10mm white, 0.50 m²" in result.description
    assert result.description.endswith("Steel chassis: yes")


def test_door_description_fragments():
    result = DoorCalculator().calculate(_sample_door_fields(), DEFAULT_RATES)
    assert result.description == (
        "Wood: Mouski – Veneer: Oak veneer – Finish: PU matte – Glass: none")


def test_door_blank_inputs_do_not_raise():
    result = DoorCalculator().calculate(
        {"height_cm": "", "width_cm": "abc", "veneer_type": "Teak"}, DEFAULT_RATES)
    assert result.details["leaf_area_m2"] == 0
    assert result.breakdown.get("Natural wood cost") == 0
    assert result.price >= 0


# ============================================================
# Seating
# ============================================================

@pytest.mark.parametrize("item_type,level,volume,hours", [
    ("Dining chair", "Light", 0.025, 3),
    ("Dining chair", "Heavy", 0.035, 4),
    ("Bar stool", "Light", 0.03, 3),
    ("Bar stool", "Heavy", 0.04, 4.5),
    ("Bench", "Light", 0.035, 3.5),
    ("Bench", "Heavy", 0.05, 5),
    ("Arm chair", "Light", 0.04, 4),
    ("Arm chair", "Heavy", 0.06, 5.5),
])
def test_seating_lookup_table(item_type, level, volume, hours):
    assert seating_defaults(SeatItemType(item_type), DetailLevel(level)) == (volume, hours)
    result = SeatingCalculator().calculate(
        _sample_chair_fields(item_type=item_type, detail_level=level), DEFAULT_RATES)
    assert result.details["solid_volume_m3"] == volume
    assert result.details["labor_hours"] == hours
    assert result.breakdown.get("Natural wood cost") == pytest.approx(volume * 24000)
    assert result.breakdown.get("Labor") == pytest.approx(hours * 160)


def test_seating_explicit_overrides():
    result = SeatingCalculator().calculate(
        _sample_chair_fields(solid_volume_m3="0.1", labor_hours="10"), DEFAULT_RATES)
    assert result.details["solid_volume_m3"] == 0.1
    assert result.breakdown.get("Labor") == pytest.approx(1600)


def test_seating_plywood_and_veneer():
    result = SeatingCalculator().calculate(
        _sample_chair_fields(has_ply=True, ply_thickness="12", ply_sheets="2",
                             veneer_type="Walnut"), DEFAULT_RATES)
    b = result.breakdown
    assert b.get("Plywood") == pytest.approx(2 * 1450)
    assert b.get("Veneer cost") == pytest.approx(1.2 * 310)
    assert b.get("Finish cost") == pytest.approx(1.2 * 350)
    assert "Veneer: Walnut veneer" in result.description


def test_seating_upholstery_none_zeroes_fabric():
    result = SeatingCalculator().calculate(
        _sample_chair_fields(upholstery_type="None", fabric_meters="5"), DEFAULT_RATES)
    assert result.breakdown.get("Upholstery labor") == 0
    assert result.breakdown.get("Fabric cost") == 0
    assert result.description.endswith("Fabric: none")


def test_seating_fabric_and_description():
    result = SeatingCalculator().calculate(
        _sample_chair_fields(upholstery_type="Full arm chair", fabric_grade="High",
                             fabric_meters="2"), DEFAULT_RATES)
    b = result.breakdown
    assert b.get("Upholstery labor") == 900
    assert b.get("Fabric cost") == pytest.approx(2 * 450)
    assert b.get("Overhead") == 350
    assert result.dimensions == ""
    assert result.description == (
        "Wood: Mouski – Veneer: none – Finish: PU matte – "
        "Fabric: High grade (450 EGP/m, 2.00 m)")
