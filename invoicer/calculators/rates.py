"""
Pricing rate table + material selection vocabulary.

The rate table is a flat, immutable record of per-unit prices shared by every
calculator. It is passed explicitly into each calculation; edits produce a new
validated table through RateTable.with_rates().

Units:
- Natural solid wood: currency / m³
- MDF, blockboard, plywood, foamboard, HPL, LPL: currency / sheet 122×244
- Veneer, finish, glass, marble: currency / m²
- Fabric: currency / meter; sofa upholstery: currency / linear meter
- Chair upholstery, steel chassis, runners, hinges: currency / piece

compliance_per_item is kept on the table so the settings form can edit it,
but no calculator reads it.
"""

import enum

from pydantic import BaseModel, ConfigDict


CURRENCY = "EGP"


# --- Material selections ---

class WoodType(str, enum.Enum):
    MOUSKI = "Mouski"
    ZAN = "Zan"
    ARO = "Aro"
    BEECH_PINE = "BeechPine"


class VeneerType(str, enum.Enum):
    NONE = "None"
    WALNUT = "Walnut"
    OAK = "Oak"
    BEECH = "Beech"
    HPL = "HPL"
    LPL = "LPL"


class FinishType(str, enum.Enum):
    PU_MATTE = "PU matte"
    PU_HIGH_GLOSS = "PU high gloss"
    NC = "NC"
    OIL_STAIN = "Oil / stain"


class GlassType(str, enum.Enum):
    NONE = "None"
    GLASS6 = "Glass6"
    GLASS10 = "Glass10"


class BoardMaterial(str, enum.Enum):
    MDF16 = "MDF16"
    MDF21 = "MDF21"
    BLOCKBOARD18 = "Blockboard18"
    PLY18 = "Ply18"
    FOAMBOARD = "Foamboard"


class TopMaterial(str, enum.Enum):
    MDF16 = "MDF16"
    MDF21 = "MDF21"
    BLOCKBOARD18 = "Blockboard18"
    MARBLE = "Marble"
    GLASS6 = "Glass6"
    GLASS10 = "Glass10"


class PlyThickness(str, enum.Enum):
    MM_2_5 = "2.5"
    MM_2_7 = "2.7"
    MM_8 = "8"
    MM_12 = "12"
    MM_18 = "18"


class FabricGrade(str, enum.Enum):
    LOW = "Low"
    HIGH = "High"


VENEER_SPECIES = (VeneerType.WALNUT, VeneerType.OAK, VeneerType.BEECH)
LAMINATES = (VeneerType.HPL, VeneerType.LPL)

WOOD_LABELS = {
    WoodType.MOUSKI: "Mouski",
    WoodType.ZAN: "Zan (Beech)",
    WoodType.ARO: "Aro (Oak)",
    WoodType.BEECH_PINE: "Beech pine",
}

VENEER_LABELS = {
    VeneerType.WALNUT: "Walnut veneer",
    VeneerType.OAK: "Oak veneer",
    VeneerType.BEECH: "Beech veneer",
}

BOARD_LABELS = {
    BoardMaterial.MDF16: "MDF 16mm",
    BoardMaterial.MDF21: "MDF 21mm",
    BoardMaterial.BLOCKBOARD18: "Blockboard 18mm",
    BoardMaterial.PLY18: "Plywood 18mm",
    BoardMaterial.FOAMBOARD: "Foamboard 18mm",
}


class RateTable(BaseModel):
    """Per-unit prices used by every calculator. Immutable."""

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    # Natural solid wood (per m³)
    mouski_rate: float = 24000
    zan_rate: float = 36000
    aro_rate: float = 85000
    beech_pine_rate: float = 78000

    # MDF panels (per sheet)
    mdf10_rate_per_sheet: float = 650
    mdf16_rate_per_sheet: float = 1050
    mdf21_rate_per_sheet: float = 1350

    # Blockboard (per sheet)
    blockboard18_rate_per_sheet: float = 1650

    # Veneer (per m²)
    walnut_veneer_rate_per_m2: float = 310
    oak_veneer_rate_per_m2: float = 210
    beech_veneer_rate_per_m2: float = 210

    # HPL / LPL (per sheet)
    hpl_rate_per_sheet: float = 650
    lpl_rate_per_sheet: float = 350

    # Finish (per m² per face)
    finish_pu_matte_rate_per_m2: float = 350
    finish_pu_high_gloss_rate_per_m2: float = 420
    finish_nc_rate_per_m2: float = 280
    finish_oil_rate_per_m2: float = 250

    # Glass + marble (per m²)
    glass6_rate_per_m2: float = 1350
    glass10_rate_per_m2: float = 1750
    marble_rate_per_m2: float = 4500

    # Plywood + foamboard (per sheet)
    ply25_rate_per_sheet: float = 200
    ply27_rate_per_sheet: float = 390
    ply8_rate_per_sheet: float = 1050
    ply12_rate_per_sheet: float = 1450
    ply18_rate_per_sheet: float = 2050
    foamboard_rate_per_sheet: float = 2100

    # Upholstery: chairs / benches (per piece)
    upholstery_seat_only: float = 500
    upholstery_full: float = 700
    upholstery_arm_full: float = 900

    # Upholstery: sofas (per linear meter)
    upholstery_sofa_low_per_m: float = 1250
    upholstery_sofa_high_per_m: float = 1750

    # Fabric (per meter)
    fabric_low_rate: float = 220
    fabric_high_rate: float = 450

    steel_chassis_cost_per_piece: float = 1500
    labor_rate_per_hour: float = 160

    # Hardware (per piece)
    drawer_runner_rate: float = 310
    door_hinge_rate: float = 89

    compliance_per_item: float = 80

    # Defaults pre-filled into every costing form
    default_accessories: float = 1500
    default_profit_margin: float = 30

    def with_rates(self, **changes) -> "RateTable":
        """Return a new table with the named rates replaced.

        Unknown rate names and non-numeric values raise a pydantic
        ValidationError.
        """
        return RateTable.model_validate({**self.model_dump(), **changes})

    # --- Lookups by selection ---

    def wood_rate(self, wood: WoodType) -> float:
        return {
            WoodType.MOUSKI: self.mouski_rate,
            WoodType.ZAN: self.zan_rate,
            WoodType.ARO: self.aro_rate,
            WoodType.BEECH_PINE: self.beech_pine_rate,
        }[wood]

    def veneer_rate(self, veneer: VeneerType) -> float:
        """Per-m² rate for veneer species; 0 for None and laminates."""
        return {
            VeneerType.WALNUT: self.walnut_veneer_rate_per_m2,
            VeneerType.OAK: self.oak_veneer_rate_per_m2,
            VeneerType.BEECH: self.beech_veneer_rate_per_m2,
        }.get(veneer, 0.0)

    def laminate_rate(self, veneer: VeneerType) -> float:
        """Per-sheet rate for HPL / LPL; 0 for anything else."""
        return {
            VeneerType.HPL: self.hpl_rate_per_sheet,
            VeneerType.LPL: self.lpl_rate_per_sheet,
        }.get(veneer, 0.0)

    def finish_rate(self, finish: FinishType) -> float:
        return {
            FinishType.PU_MATTE: self.finish_pu_matte_rate_per_m2,
            FinishType.PU_HIGH_GLOSS: self.finish_pu_high_gloss_rate_per_m2,
            FinishType.NC: self.finish_nc_rate_per_m2,
            FinishType.OIL_STAIN: self.finish_oil_rate_per_m2,
        }[finish]

    def glass_rate(self, glass: GlassType) -> float:
        return {
            GlassType.GLASS6: self.glass6_rate_per_m2,
            GlassType.GLASS10: self.glass10_rate_per_m2,
        }.get(glass, 0.0)

    def board_rate(self, board: BoardMaterial) -> float:
        return {
            BoardMaterial.MDF16: self.mdf16_rate_per_sheet,
            BoardMaterial.MDF21: self.mdf21_rate_per_sheet,
            BoardMaterial.BLOCKBOARD18: self.blockboard18_rate_per_sheet,
            BoardMaterial.PLY18: self.ply18_rate_per_sheet,
            BoardMaterial.FOAMBOARD: self.foamboard_rate_per_sheet,
        }[board]

    def ply_rate(self, thickness: PlyThickness) -> float:
        return {
            PlyThickness.MM_2_5: self.ply25_rate_per_sheet,
            PlyThickness.MM_2_7: self.ply27_rate_per_sheet,
            PlyThickness.MM_8: self.ply8_rate_per_sheet,
            PlyThickness.MM_12: self.ply12_rate_per_sheet,
            PlyThickness.MM_18: self.ply18_rate_per_sheet,
        }[thickness]

    def fabric_rate(self, grade: FabricGrade) -> float:
        if grade == FabricGrade.HIGH:
            return self.fabric_high_rate
        return self.fabric_low_rate


DEFAULT_RATES = RateTable()


def rate_names() -> list[str]:
    """All editable rate names, in declaration order."""
    return list(RateTable.model_fields.keys())
