"""
Sofa calculator — priced per linear meter.

Frame wood is length × a per-meter volume (0.06 m³/m straight, 0.08 m³/m
curved). Veneer and finish follow a separately entered veneered area.
"""

import enum

from .base import BaseCalculator, CostResult, fmt_num, join_parts
from .rates import (
    VENEER_LABELS, VENEER_SPECIES, WOOD_LABELS,
    FabricGrade, FinishType, RateTable, VeneerType, WoodType,
)


class SofaType(str, enum.Enum):
    STRAIGHT = "Straight"
    CURVED = "Curved"


class UpholsteryQuality(str, enum.Enum):
    LOW = "Low"
    HIGH = "High"
    NONE = "None"


SOLID_VOLUME_PER_METER = {
    SofaType.STRAIGHT: 0.06,
    SofaType.CURVED: 0.08,
}


class SofaCalculator(BaseCalculator):

    category = "Sofa"

    def calculate(self, fields: dict, rates: RateTable) -> CostResult:
        sofa_type = self.parse_choice(fields.get("sofa_type"), SofaType, SofaType.STRAIGHT)
        length_m = self.parse_number(fields.get("length_m"), default=2.5)
        wood = self.parse_choice(fields.get("wood_type"), WoodType, WoodType.MOUSKI)
        volume_per_m = self.parse_number(fields.get("solid_volume_per_m"),
                                         default=SOLID_VOLUME_PER_METER[sofa_type])

        veneer = self.parse_choice(fields.get("veneer_type"), VeneerType, VeneerType.NONE)
        veneer_area = self.parse_number(fields.get("veneer_area_m2"), default=4)
        finish = self.parse_choice(fields.get("finish_type"), FinishType, FinishType.PU_MATTE)

        quality = self.parse_choice(fields.get("upholstery_quality"), UpholsteryQuality,
                                    UpholsteryQuality.LOW)
        fabric_grade = self.parse_choice(fields.get("fabric_grade"), FabricGrade,
                                         FabricGrade.LOW)
        fabric_meters = self.parse_number(fields.get("fabric_meters"), default=8)

        overhead = self.parse_number(fields.get("overhead_cost"))
        labor_hours = self.parse_number(fields.get("labor_hours"))

        wood_volume = length_m * volume_per_m
        veneered = veneer in VENEER_SPECIES
        upholstered = quality != UpholsteryQuality.NONE

        breakdown = self.start_breakdown(fields, rates)

        breakdown.add("Natural wood cost", wood_volume * rates.wood_rate(wood))
        breakdown.add("Veneer cost",
                      veneer_area * rates.veneer_rate(veneer) if veneered else 0.0)
        breakdown.add("Finish cost",
                      veneer_area * rates.finish_rate(finish) if veneered else 0.0)

        per_meter = 0.0
        if quality == UpholsteryQuality.LOW:
            per_meter = rates.upholstery_sofa_low_per_m
        elif quality == UpholsteryQuality.HIGH:
            per_meter = rates.upholstery_sofa_high_per_m
        breakdown.add("Upholstery", length_m * per_meter)

        fabric_rate = rates.fabric_rate(fabric_grade)
        breakdown.add("Fabric cost", fabric_meters * fabric_rate if upholstered else 0.0)
        breakdown.add("Overhead", overhead)
        breakdown.add("Labor", labor_hours * rates.labor_rate_per_hour)

        parts = [
            "Wood: %s" % WOOD_LABELS[wood],
            "Veneer: %s" % VENEER_LABELS.get(veneer, "none"),
            "Finish: %s" % (finish.value if veneered else "none"),
        ]
        if upholstered:
            grade_label = "Low grade" if fabric_grade == FabricGrade.LOW else "High grade"
            parts.append("Fabric: %s (%s EGP/m, %.2f m)" % (
                grade_label, fmt_num(fabric_rate), fabric_meters))
        else:
            parts.append("Fabric: none")

        return self.finish_result(
            breakdown,
            description=join_parts(parts),
            details={
                "sofa_type": sofa_type.value,
                "length_m": length_m,
                "wood_volume_m3": wood_volume,
            },
        )
