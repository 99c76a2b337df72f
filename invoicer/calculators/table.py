"""
Table calculator — dining, coffee, side and console tables.

Legs: reference volume 0.35 m³ at 220×110×74 cm, scaled by all three
dimension ratios. Steel legs carry no wood cost.
Top: board cores priced per sheet fraction, marble and glass per m².
Only board cores take veneer + finish.
"""

import enum

from .base import BaseCalculator, CostResult, fmt_dims, join_parts
from .geometry import area_m2, scale_reference, sheets_needed
from .rates import (
    VENEER_LABELS, VENEER_SPECIES, WOOD_LABELS,
    FinishType, RateTable, TopMaterial, VeneerType, WoodType,
)

REFERENCE_LEGS_VOLUME_M3 = 0.35
REFERENCE_LENGTH_CM = 220
REFERENCE_WIDTH_CM = 110
REFERENCE_HEIGHT_CM = 74

WOOD_CORE_TOPS = (TopMaterial.MDF16, TopMaterial.MDF21, TopMaterial.BLOCKBOARD18)

TOP_LABELS = {
    TopMaterial.MDF16: "MDF 16mm",
    TopMaterial.MDF21: "MDF 21mm",
    TopMaterial.BLOCKBOARD18: "Blockboard 18mm",
    TopMaterial.MARBLE: "Marble top",
    TopMaterial.GLASS6: "Glass 6mm top",
    TopMaterial.GLASS10: "Glass 10mm top",
}


class LegMaterial(str, enum.Enum):
    WOOD = "Wood"
    STEEL = "Steel"


class TableCalculator(BaseCalculator):

    category = "Table"

    def calculate(self, fields: dict, rates: RateTable) -> CostResult:
        length_cm = self.parse_number(fields.get("length_cm"), default=220)
        width_cm = self.parse_number(fields.get("width_cm"), default=110)
        height_cm = self.parse_number(fields.get("height_cm"), default=74)

        legs = self.parse_choice(fields.get("leg_material"), LegMaterial, LegMaterial.WOOD)
        wood = self.parse_choice(fields.get("wood_type"), WoodType, WoodType.MOUSKI)
        top = self.parse_choice(fields.get("top_material"), TopMaterial, TopMaterial.MARBLE)
        veneer = self.parse_choice(fields.get("veneer_type"), VeneerType, VeneerType.NONE)
        finish = self.parse_choice(fields.get("finish_type"), FinishType, FinishType.PU_MATTE)

        overhead = self.parse_number(fields.get("overhead_cost"))
        labor_hours = self.parse_number(fields.get("labor_hours"))

        top_area = area_m2(length_cm, width_cm)

        legs_volume = 0.0
        if legs == LegMaterial.WOOD:
            legs_volume = scale_reference(
                REFERENCE_LEGS_VOLUME_M3,
                length_cm / REFERENCE_LENGTH_CM,
                width_cm / REFERENCE_WIDTH_CM,
                height_cm / REFERENCE_HEIGHT_CM,
            )

        breakdown = self.start_breakdown(fields, rates)

        breakdown.add("Legs wood cost", legs_volume * rates.wood_rate(wood))

        top_core = marble = glass = 0.0
        if top == TopMaterial.MDF16:
            top_core = sheets_needed(top_area) * rates.mdf16_rate_per_sheet
        elif top == TopMaterial.MDF21:
            top_core = sheets_needed(top_area) * rates.mdf21_rate_per_sheet
        elif top == TopMaterial.BLOCKBOARD18:
            top_core = sheets_needed(top_area) * rates.blockboard18_rate_per_sheet
        elif top == TopMaterial.MARBLE:
            marble = top_area * rates.marble_rate_per_m2
        elif top == TopMaterial.GLASS6:
            glass = top_area * rates.glass6_rate_per_m2
        elif top == TopMaterial.GLASS10:
            glass = top_area * rates.glass10_rate_per_m2
        breakdown.add("Top core", top_core)
        breakdown.add("Marble cost", marble)
        breakdown.add("Glass cost", glass)

        veneered = top in WOOD_CORE_TOPS and veneer in VENEER_SPECIES
        breakdown.add("Veneer cost", top_area * rates.veneer_rate(veneer) if veneered else 0.0)
        breakdown.add("Finish cost", top_area * rates.finish_rate(finish) if veneered else 0.0)

        breakdown.add("Overhead", overhead)
        breakdown.add("Labor", labor_hours * rates.labor_rate_per_hour)

        legs_label = WOOD_LABELS[wood] if legs == LegMaterial.WOOD else "Steel"
        parts = ["Top: %s" % TOP_LABELS[top], "Legs: %s" % legs_label]
        if veneered:
            parts.append("Veneer: %s" % VENEER_LABELS[veneer])
            parts.append("Finish: %s" % finish.value)

        return self.finish_result(
            breakdown,
            description=join_parts(parts),
            dimensions=fmt_dims(length_cm, width_cm, height_cm),
            details={"top_area_m2": top_area, "legs_volume_m3": legs_volume},
        )
