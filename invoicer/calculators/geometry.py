"""
Geometry helpers shared by all calculators.

Board materials are priced per standard sheet (1.22 m × 2.44 m). Sheet counts
are fractional: a part that uses a third of a sheet pays a third of the sheet
price, nothing is rounded up to whole panels.
"""

SHEET_WIDTH_M = 1.22
SHEET_LENGTH_M = 2.44
SHEET_AREA_M2 = SHEET_WIDTH_M * SHEET_LENGTH_M


def cm_to_m(value_cm: float) -> float:
    return value_cm / 100


def area_m2(length_cm: float, width_cm: float) -> float:
    """Area in m² of a rectangle given in centimeters."""
    return cm_to_m(length_cm) * cm_to_m(width_cm)


def sheets_needed(area: float) -> float:
    """Fraction of a standard sheet covering `area` m². Not rounded."""
    return area / SHEET_AREA_M2


def scale_reference(reference: float, *ratios: float) -> float:
    """Scale a reference quantity linearly by each dimension ratio."""
    result = reference
    for ratio in ratios:
        result *= ratio
    return result
