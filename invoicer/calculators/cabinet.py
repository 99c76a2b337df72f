"""
Cabinet calculator.

Board sheets for body, back and face; shelves; drawer boxes and runners;
hinges by cabinet height; facing (veneer + finish, or HPL/LPL laminate).

The only calculator that also returns a materials bill: one row per cost
line with a unit and a rounded quantity, used for per-invoice material
reporting and the materials CSV.
"""

from .base import BaseCalculator, CostResult, MaterialRow, fmt_num, join_parts
from .geometry import cm_to_m, sheets_needed
from .rates import (
    BOARD_LABELS, LAMINATES, VENEER_LABELS, VENEER_SPECIES,
    BoardMaterial, FinishType, RateTable, VeneerType,
)

# Internal divider estimate, as a share of the front (w × h)
DIVIDER_SHARE = 0.3
# Visible carcass share of the body area that gets faced
FACING_BODY_SHARE = 0.4

# Per drawer: 40×30×18 cm box in 12mm ply, 40×30 cm bottom in 10mm MDF
DRAWER_PLY_AREA_M2 = 2 * (0.4 * 0.18) + 2 * (0.3 * 0.18)
DRAWER_BOTTOM_AREA_M2 = 0.4 * 0.3


def hinges_per_door(height_cm: float) -> int:
    """2 up to 60 cm, 3 up to 120, 4 up to 200, 5 up to 300.

    Taller than 300 cm falls back to 2 per door.
    """
    if 60 < height_cm <= 120:
        return 3
    if 120 < height_cm <= 200:
        return 4
    if 200 < height_cm <= 300:
        return 5
    return 2


class CabinetCalculator(BaseCalculator):

    category = "Cabinet"

    def calculate(self, fields: dict, rates: RateTable) -> CostResult:
        width_cm = self.parse_number(fields.get("width_cm"), default=80)
        height_cm = self.parse_number(fields.get("height_cm"), default=220)
        depth_cm = self.parse_number(fields.get("depth_cm"), default=40)

        body_material = self.parse_choice(fields.get("body_material"), BoardMaterial,
                                          BoardMaterial.MDF16)
        face_material = self.parse_choice(fields.get("face_material"), BoardMaterial,
                                          BoardMaterial.MDF16)

        doors = self.parse_int(fields.get("doors_count"), default=2)
        shelves = self.parse_int(fields.get("shelves_count"), default=4)
        drawers = self.parse_int(fields.get("drawers_count"), default=0)

        veneer = self.parse_choice(fields.get("veneer_type"), VeneerType, VeneerType.NONE)
        finish = self.parse_choice(fields.get("finish_type"), FinishType, FinishType.PU_MATTE)

        accessories = self.parse_number(fields.get("accessories_cost"),
                                        default=rates.default_accessories)
        overhead = self.parse_number(fields.get("overhead_cost"))
        labor_hours = self.parse_number(fields.get("labor_hours"))

        w = cm_to_m(width_cm)
        h = cm_to_m(height_cm)
        d = cm_to_m(depth_cm)

        # Carcass without the back
        body_area = 2 * h * d + 2 * w * d + DIVIDER_SHARE * w * h
        shelves_area = shelves * w * d
        core_area = body_area + shelves_area
        back_area = w * h
        face_area = back_area
        facing_area = w * h + FACING_BODY_SHARE * body_area

        core_sheets = sheets_needed(core_area)
        back_sheets = sheets_needed(back_area)
        face_sheets = sheets_needed(face_area)
        drawer_ply_sheets = sheets_needed(drawers * DRAWER_PLY_AREA_M2)
        drawer_mdf_sheets = sheets_needed(drawers * DRAWER_BOTTOM_AREA_M2)
        total_hinges = doors * hinges_per_door(height_cm)

        breakdown = self.start_breakdown(fields, rates)

        core_cost = breakdown.add("Body core", core_sheets * rates.board_rate(body_material))
        back_cost = breakdown.add("Back MDF 10mm", back_sheets * rates.mdf10_rate_per_sheet)
        face_cost = breakdown.add("Face panel", face_sheets * rates.board_rate(face_material))

        ply_cost = breakdown.add("Drawer boxes", drawer_ply_sheets * rates.ply12_rate_per_sheet)
        bottoms_cost = breakdown.add("Drawer bottoms",
                                     drawer_mdf_sheets * rates.mdf10_rate_per_sheet)
        runners_cost = breakdown.add("Drawer runners", drawers * rates.drawer_runner_rate)

        veneer_cost = finish_cost = 0.0
        laminate_sheets = 0.0
        if veneer in VENEER_SPECIES:
            veneer_cost = facing_area * rates.veneer_rate(veneer)
            finish_cost = facing_area * rates.finish_rate(finish)
        elif veneer in LAMINATES:
            laminate_sheets = sheets_needed(facing_area)
            veneer_cost = laminate_sheets * rates.laminate_rate(veneer)
        breakdown.add("Veneer cost", veneer_cost)
        breakdown.add("Finish cost", finish_cost)

        hinges_cost = breakdown.add("Hinges", total_hinges * rates.door_hinge_rate)
        breakdown.add("Accessories", accessories)
        breakdown.add("Overhead", overhead)
        labor_cost = breakdown.add("Labor", labor_hours * rates.labor_rate_per_hour)

        # Materials bill
        materials = []
        if core_sheets > 0:
            materials.append(MaterialRow(
                "Cabinet body core (%s)" % BOARD_LABELS[body_material], "sheet",
                round(core_sheets, 3), core_cost))
        if back_sheets > 0:
            materials.append(MaterialRow(
                "Back (MDF 10mm)", "sheet", round(back_sheets, 3), back_cost))
        if face_sheets > 0:
            materials.append(MaterialRow(
                "Face panel (%s)" % BOARD_LABELS[face_material], "sheet",
                round(face_sheets, 3), face_cost))
        if drawers > 0:
            materials.append(MaterialRow(
                "Drawer boxes PLY 12mm", "sheet", round(drawer_ply_sheets, 3), ply_cost))
            materials.append(MaterialRow(
                "Drawer bottoms MDF 10mm", "sheet", round(drawer_mdf_sheets, 3), bottoms_cost))
            materials.append(MaterialRow("Drawer runners", "pair", drawers, runners_cost))
        if veneer in VENEER_SPECIES:
            materials.append(MaterialRow(
                "Veneer (%s)" % veneer.value, "m²", round(facing_area, 2), veneer_cost))
            materials.append(MaterialRow(
                "Finish (%s)" % finish.value, "m²", round(facing_area, 2), finish_cost))
        elif veneer in LAMINATES:
            materials.append(MaterialRow(
                "Laminate (%s)" % veneer.value, "sheet", round(laminate_sheets, 3), veneer_cost))
        if total_hinges > 0:
            materials.append(MaterialRow("Door hinges", "pcs", total_hinges, hinges_cost))
        if accessories > 0:
            materials.append(MaterialRow(
                "Accessories (handles, screws, etc.)", "EGP", round(accessories), accessories))
        if overhead > 0:
            materials.append(MaterialRow("Overhead", "EGP", round(overhead), overhead))
        if labor_cost > 0:
            materials.append(MaterialRow("Labor", "EGP", round(labor_cost), labor_cost))
        materials.append(MaterialRow(
            "Profit", "EGP", round(breakdown.profit), breakdown.profit))

        description = self._build_description(
            body_material, face_material, doors, shelves, drawers, veneer, finish,
            total_hinges)

        return self.finish_result(
            breakdown,
            description=description,
            dimensions="%s×%s×%s cm" % (fmt_num(height_cm), fmt_num(width_cm),
                                        fmt_num(depth_cm)),
            materials=materials,
            details={
                "body_area_m2": body_area,
                "core_area_m2": core_area,
                "back_area_m2": back_area,
                "face_area_m2": face_area,
                "facing_area_m2": facing_area,
                "hinges_per_door": hinges_per_door(height_cm),
                "total_hinges": total_hinges,
            },
        )

    def _build_description(self, body_material, face_material, doors, shelves,
                           drawers, veneer, finish, total_hinges) -> str:
        parts = [
            "Body: %s" % BOARD_LABELS[body_material],
            "Back: MDF 10mm",
            "Face: %s" % BOARD_LABELS[face_material],
            "Doors: %d pcs" % doors,
            "Shelves: %d pcs" % shelves,
            "Drawers: %d pcs" % drawers,
        ]

        if veneer in VENEER_SPECIES:
            parts.append("Facing: %s" % VENEER_LABELS[veneer])
            parts.append("Finish: %s" % finish.value)
        elif veneer in LAMINATES:
            parts.append("Facing: %s laminate" % veneer.value)
            parts.append("Finish: integrated (HPL/LPL)")
        else:
            parts.append("Facing: none")
            parts.append("Finish: none")

        parts.append("Hinges: %d pcs" % total_hinges)
        return join_parts(parts)
