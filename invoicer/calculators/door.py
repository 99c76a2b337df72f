"""
Door calculator.

Solid-wood frame + MDF 10mm skin on both faces + facing (veneer or HPL/LPL)
+ finish + optional glass panel + optional steel chassis.

The frame volume is a reference door (220 × 90 cm → 0.045 m³) scaled by
height and width. Facing and finish cover both faces of the leaf.
"""

from .base import BaseCalculator, CostResult, fmt_dims, join_parts
from .geometry import area_m2, cm_to_m, scale_reference, sheets_needed
from .rates import (
    LAMINATES, VENEER_LABELS, VENEER_SPECIES, WOOD_LABELS,
    FinishType, GlassType, RateTable, VeneerType, WoodType,
)

REFERENCE_FRAME_VOLUME_M3 = 0.045
REFERENCE_HEIGHT_CM = 220
REFERENCE_WIDTH_CM = 90

GLASS_LABELS = {
    GlassType.GLASS6: "6mm white",
    GlassType.GLASS10: "10mm white",
}


class DoorCalculator(BaseCalculator):

    category = "Door"

    def calculate(self, fields: dict, rates: RateTable) -> CostResult:
        height_cm = self.parse_number(fields.get("height_cm"), default=220)
        width_cm = self.parse_number(fields.get("width_cm"), default=90)
        thickness_cm = self.parse_number(fields.get("thickness_cm"), default=4)

        wood = self.parse_choice(fields.get("wood_type"), WoodType, WoodType.MOUSKI)
        veneer = self.parse_choice(fields.get("veneer_type"), VeneerType, VeneerType.OAK)
        finish = self.parse_choice(fields.get("finish_type"), FinishType, FinishType.PU_MATTE)
        glass = self.parse_choice(fields.get("glass_type"), GlassType, GlassType.NONE)
        glass_area_m2 = self.parse_number(fields.get("glass_area_m2"))
        has_steel_chassis = self.parse_bool(fields.get("has_steel_chassis"))

        accessories = self.parse_number(fields.get("accessories_cost"),
                                        default=rates.default_accessories)
        overhead = self.parse_number(fields.get("overhead_cost"))
        labor_hours = self.parse_number(fields.get("labor_hours"))

        # Leaf geometry
        leaf_area = area_m2(height_cm, width_cm)
        both_faces_area = leaf_area * 2
        volume_m3 = leaf_area * cm_to_m(thickness_cm)

        frame_volume = scale_reference(
            REFERENCE_FRAME_VOLUME_M3,
            height_cm / REFERENCE_HEIGHT_CM,
            width_cm / REFERENCE_WIDTH_CM,
        )

        breakdown = self.start_breakdown(fields, rates)

        breakdown.add("Natural wood cost", frame_volume * rates.wood_rate(wood))
        breakdown.add("MDF 10mm both faces",
                      sheets_needed(both_faces_area) * rates.mdf10_rate_per_sheet)

        # Veneer by m², laminates by sheet with no finish layer
        if veneer in VENEER_SPECIES:
            facing_cost = both_faces_area * rates.veneer_rate(veneer)
            finish_cost = both_faces_area * rates.finish_rate(finish)
        elif veneer in LAMINATES:
            facing_cost = sheets_needed(both_faces_area) * rates.laminate_rate(veneer)
            finish_cost = 0.0
        else:
            facing_cost = 0.0
            finish_cost = 0.0
        breakdown.add("Veneer cost", facing_cost)
        breakdown.add("Finish cost", finish_cost)

        breakdown.add("Glass cost", glass_area_m2 * rates.glass_rate(glass))
        breakdown.add("Steel chassis",
                      rates.steel_chassis_cost_per_piece if has_steel_chassis else 0.0)
        breakdown.add("Accessories", accessories)
        breakdown.add("Overhead", overhead)
        breakdown.add("Labor", labor_hours * rates.labor_rate_per_hour)

        description = self._build_description(
            wood, veneer, finish, glass, glass_area_m2, has_steel_chassis)

        return self.finish_result(
            breakdown,
            description=description,
            dimensions=fmt_dims(height_cm, width_cm, thickness_cm),
            details={
                "leaf_area_m2": leaf_area,
                "both_faces_area_m2": both_faces_area,
                "volume_m3": volume_m3,
                "frame_volume_m3": frame_volume,
            },
        )

    def _build_description(self, wood, veneer, finish, glass, glass_area_m2,
                           has_steel_chassis) -> str:
        parts = ["Wood: %s" % WOOD_LABELS[wood]]

        if veneer in VENEER_SPECIES:
            parts.append("Veneer: %s" % VENEER_LABELS[veneer])
            parts.append("Finish: %s" % finish.value)
        elif veneer in LAMINATES:
            parts.append("Veneer: %s facing" % veneer.value)
            parts.append("Finish: none (HPL / LPL)")
        else:
            parts.append("Veneer: none")
            parts.append("Finish: none")

        if glass in GLASS_LABELS:
            parts.append("Glass: %s, %.2f m²" % (GLASS_LABELS[glass], glass_area_m2))
        else:
            parts.append("Glass: none")

        if has_steel_chassis:
            parts.append("Steel chassis: yes")

        return join_parts(parts)
