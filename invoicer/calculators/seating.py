"""
Seating calculator — dining chairs, bar stools, benches, arm chairs.

Solid-wood volume and base labor hours are not derived from geometry: they
come from a fixed table keyed by item type and detail level. Either can be
overridden explicitly on the form.
"""

import enum

from .base import BaseCalculator, CostResult, fmt_num, join_parts
from .rates import (
    VENEER_LABELS, VENEER_SPECIES, WOOD_LABELS,
    FabricGrade, FinishType, PlyThickness, RateTable, VeneerType, WoodType,
)


class SeatItemType(str, enum.Enum):
    DINING_CHAIR = "Dining chair"
    BAR_STOOL = "Bar stool"
    BENCH = "Bench"
    ARM_CHAIR = "Arm chair"


class DetailLevel(str, enum.Enum):
    LIGHT = "Light"
    HEAVY = "Heavy"


class UpholsteryType(str, enum.Enum):
    NONE = "None"
    SEAT_ONLY = "Seat only"
    FULL = "Full"
    FULL_ARM_CHAIR = "Full arm chair"


# (solid volume m³, labor hours)
SEATING_TABLE = {
    (SeatItemType.DINING_CHAIR, DetailLevel.LIGHT): (0.025, 3.0),
    (SeatItemType.DINING_CHAIR, DetailLevel.HEAVY): (0.035, 4.0),
    (SeatItemType.BAR_STOOL, DetailLevel.LIGHT): (0.03, 3.0),
    (SeatItemType.BAR_STOOL, DetailLevel.HEAVY): (0.04, 4.5),
    (SeatItemType.BENCH, DetailLevel.LIGHT): (0.035, 3.5),
    (SeatItemType.BENCH, DetailLevel.HEAVY): (0.05, 5.0),
    (SeatItemType.ARM_CHAIR, DetailLevel.LIGHT): (0.04, 4.0),
    (SeatItemType.ARM_CHAIR, DetailLevel.HEAVY): (0.06, 5.5),
}


def seating_defaults(item_type: SeatItemType, level: DetailLevel) -> tuple:
    """(solid volume m³, labor hours) for an item type at a detail level."""
    return SEATING_TABLE[(item_type, level)]


class SeatingCalculator(BaseCalculator):

    category = "Seating"

    def calculate(self, fields: dict, rates: RateTable) -> CostResult:
        item_type = self.parse_choice(fields.get("item_type"), SeatItemType,
                                      SeatItemType.DINING_CHAIR)
        level = self.parse_choice(fields.get("detail_level"), DetailLevel,
                                  DetailLevel.LIGHT)
        table_volume, table_hours = seating_defaults(item_type, level)

        solid_volume = self.parse_number(fields.get("solid_volume_m3"), default=table_volume)
        labor_hours = self.parse_number(fields.get("labor_hours"), default=table_hours)

        wood = self.parse_choice(fields.get("wood_type"), WoodType, WoodType.MOUSKI)

        has_ply = self.parse_bool(fields.get("has_ply"))
        ply_thickness = self.parse_choice(fields.get("ply_thickness"), PlyThickness,
                                          PlyThickness.MM_2_7)
        ply_sheets = self.parse_number(fields.get("ply_sheets"), default=2)

        area = self.parse_number(fields.get("area_m2"), default=1.2)
        veneer = self.parse_choice(fields.get("veneer_type"), VeneerType, VeneerType.NONE)
        finish = self.parse_choice(fields.get("finish_type"), FinishType, FinishType.PU_MATTE)

        upholstery = self.parse_choice(fields.get("upholstery_type"), UpholsteryType,
                                       UpholsteryType.SEAT_ONLY)
        fabric_grade = self.parse_choice(fields.get("fabric_grade"), FabricGrade,
                                         FabricGrade.LOW)
        fabric_meters = self.parse_number(fields.get("fabric_meters"), default=1.5)

        has_steel_chassis = self.parse_bool(fields.get("has_steel_chassis"))
        overhead = self.parse_number(fields.get("overhead_cost"), default=350)

        breakdown = self.start_breakdown(fields, rates)

        breakdown.add("Natural wood cost", solid_volume * rates.wood_rate(wood))
        breakdown.add("Plywood", ply_sheets * rates.ply_rate(ply_thickness) if has_ply else 0.0)
        breakdown.add("Veneer cost",
                      area * rates.veneer_rate(veneer) if veneer in VENEER_SPECIES else 0.0)
        breakdown.add("Finish cost", area * rates.finish_rate(finish))
        breakdown.add("Upholstery labor", self._upholstery_labor(upholstery, rates))

        fabric_rate = rates.fabric_rate(fabric_grade)
        breakdown.add("Fabric cost",
                      0.0 if upholstery == UpholsteryType.NONE else fabric_meters * fabric_rate)
        breakdown.add("Overhead", overhead)
        breakdown.add("Labor", labor_hours * rates.labor_rate_per_hour)
        breakdown.add("Steel chassis",
                      rates.steel_chassis_cost_per_piece if has_steel_chassis else 0.0)

        parts = [
            "Wood: %s" % WOOD_LABELS[wood],
            "Veneer: %s" % VENEER_LABELS.get(veneer, "none"),
            "Finish: %s" % finish.value,
        ]
        if upholstery == UpholsteryType.NONE:
            parts.append("Fabric: none")
        else:
            grade_label = "Low grade" if fabric_grade == FabricGrade.LOW else "High grade"
            parts.append("Fabric: %s (%s EGP/m, %.2f m)" % (
                grade_label, fmt_num(fabric_rate), fabric_meters))

        return self.finish_result(
            breakdown,
            description=join_parts(parts),
            details={
                "item_type": item_type.value,
                "detail_level": level.value,
                "solid_volume_m3": solid_volume,
                "labor_hours": labor_hours,
            },
        )

    def _upholstery_labor(self, upholstery: UpholsteryType, rates: RateTable) -> float:
        return {
            UpholsteryType.SEAT_ONLY: rates.upholstery_seat_only,
            UpholsteryType.FULL: rates.upholstery_full,
            UpholsteryType.FULL_ARM_CHAIR: rates.upholstery_arm_full,
        }.get(upholstery, 0.0)
