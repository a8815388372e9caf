"""Calculators for irrigation decision support.

This package contains pure functions for the soil, crop water and irrigation
sizing steps. All calculators are stateless; lookup tables are passed in.
"""

from irrigation_dss.calculators.compatibility import analyze_soil_crop_compatibility
from irrigation_dss.calculators.evapotranspiration import (
    calculate_etc,
    calculate_etc_default,
    match_kc_period,
)
from irrigation_dss.calculators.irrigation import calculate_irrigation_requirement
from irrigation_dss.calculators.rounding import format_amount, round_half_away, round_int
from irrigation_dss.calculators.schedule import (
    generate_irrigation_schedule,
    generate_recommendations,
)

__all__ = [
    "analyze_soil_crop_compatibility",
    "calculate_etc",
    "calculate_etc_default",
    "match_kc_period",
    "calculate_irrigation_requirement",
    "generate_irrigation_schedule",
    "generate_recommendations",
    "format_amount",
    "round_half_away",
    "round_int",
]
