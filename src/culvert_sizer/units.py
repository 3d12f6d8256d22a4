"""Unit conversion helpers shared across the culvert-sizer domain."""

HECTARES_PER_SQUARE_KILOMETRE = 100.0
MM_PER_METRE = 1000.0
PERCENT = 100.0


def hectares_to_square_kilometres(value: float) -> float:
    """Convert hectares into square kilometres."""
    return value / HECTARES_PER_SQUARE_KILOMETRE


def millimetres_to_metres(value: float) -> float:
    """Convert millimetres into metres."""
    return value / MM_PER_METRE


def metres_to_millimetres(value: float) -> float:
    """Convert metres into millimetres."""
    return value * MM_PER_METRE


def percent_to_decimal(value: float) -> float:
    """Convert a slope in percent into a decimal fraction (m/m)."""
    return value / PERCENT
