"""FAO-56 crop evapotranspiration with regional Kc adjustments.

ETc = ET0 x Kc, where Kc starts from the crop's growth-period coefficient and
is multiplied by the climate zone, irrigation method and soil compatibility
factors, then by optional environmental boosts.
"""

from collections.abc import Sequence

from irrigation_dss.calculators.rounding import round_half_away
from irrigation_dss.config import ClimateAdjustmentTable, SystemCatalog
from irrigation_dss.models.domain import CropProfile, EnvironmentalConditions, KcPeriod
from irrigation_dss.models.enums import SuitabilityRating, TextureClass
from irrigation_dss.models.results import (
    ClimateAdjustmentApplied,
    CompatibilityResult,
    EnvironmentalAdjustments,
    ETcResult,
    IrrigationAdjustmentApplied,
)

DEFAULT_KC = 1.0
DEFAULT_ET0_MM_DAY = 5.0

HIGH_TEMPERATURE_C = 35.0
HIGH_WIND_SPEED_MS = 5.0
LOW_HUMIDITY_PCT = 20.0
TEMPERATURE_BOOST = 1.05
WIND_SPEED_BOOST = 1.03
HUMIDITY_BOOST = 1.08


def match_kc_period(periods: Sequence[KcPeriod], growth_stage: str) -> KcPeriod | None:
    """Find the Kc period for a growth stage.

    Returns the first period whose name contains ``growth_stage``
    (case-insensitive), else the first period, else None when there are no
    periods. An empty growth stage matches the first period.
    """
    if not periods:
        return None
    stage = growth_stage.lower()
    for period in periods:
        if stage in period.period_name.lower():
            return period
    return periods[0]


def _environmental_boosts(environment: EnvironmentalConditions) -> EnvironmentalAdjustments:
    # Boosts only apply when all three readings are present and non-zero
    if not (environment.temperature and environment.wind_speed and environment.relative_humidity):
        return EnvironmentalAdjustments()

    return EnvironmentalAdjustments(
        temperature_boost=TEMPERATURE_BOOST if environment.temperature > HIGH_TEMPERATURE_C else 1.0,
        wind_speed_boost=WIND_SPEED_BOOST if environment.wind_speed > HIGH_WIND_SPEED_MS else 1.0,
        humidity_boost=HUMIDITY_BOOST if environment.relative_humidity < LOW_HUMIDITY_PCT else 1.0,
    )


def calculate_etc(
    environment: EnvironmentalConditions,
    crop: CropProfile,
    compatibility: CompatibilityResult,
    climate_table: ClimateAdjustmentTable,
    systems: SystemCatalog,
    default_et0: float = DEFAULT_ET0_MM_DAY,
) -> ETcResult:
    """Calculate crop evapotranspiration (ETc).

    Formula:
        Kc = base_Kc x climate_multiplier x method_factor x compatibility
             x temperature_boost x wind_boost x humidity_boost
        ETc = ET0 x Kc

    Missing inputs degrade to fallbacks (Kc 1.0, temperate climate, neutral
    method factor, ET0 of ``default_et0``); this never raises.

    Args:
        environment: ET0, climate zone, irrigation method, growth stage and
            optional temperature / wind speed / relative humidity
        crop: Crop profile with Kc periods
        compatibility: Soil-crop compatibility result
        climate_table: Per-zone Kc multipliers
        systems: System catalog providing irrigation method Kc factors
        default_et0: ET0 used when the provider supplies none (or zero)

    Returns:
        ETcResult with etc, kc_used and base_kc rounded to 2 dp.
    """
    period = match_kc_period(crop.kc_periods, environment.growth_stage)
    base_kc = period.kc_value if period else DEFAULT_KC

    climate = climate_table.lookup(environment.climate_zone)
    method_factor = systems.kc_factor(environment.irrigation_method)
    boosts = _environmental_boosts(environment)

    adjusted_kc = base_kc * climate.kc_multiplier
    adjusted_kc *= method_factor
    adjusted_kc *= compatibility.adjustment_factor
    adjusted_kc *= boosts.temperature_boost * boosts.wind_speed_boost * boosts.humidity_boost

    et0 = environment.et0 or default_et0
    etc = et0 * adjusted_kc

    return ETcResult(
        etc=round_half_away(etc, 2),
        et0_used=et0,
        kc_used=round_half_away(adjusted_kc, 2),
        base_kc=round_half_away(base_kc, 2),
        kc_period_used=period.period_name if period else "default",
        climate_adjustment=ClimateAdjustmentApplied(
            zone=environment.climate_zone, multiplier=climate.kc_multiplier
        ),
        irrigation_adjustment=IrrigationAdjustmentApplied(
            method=environment.irrigation_method, factor=method_factor
        ),
        compatibility_adjustment=compatibility.adjustment_factor,
        environmental_adjustments=boosts,
    )


def calculate_etc_default(
    environment: EnvironmentalConditions,
    crop: CropProfile,
    climate_table: ClimateAdjustmentTable,
    systems: SystemCatalog,
) -> ETcResult:
    """ETc with a neutral (1.0) soil compatibility, for callers without soil data."""
    neutral = CompatibilityResult(
        soil_texture=TextureClass.LOAMY,
        compatibility_score=1.0,
        suitability_rating=SuitabilityRating.GOOD,
        adjustment_factor=1.0,
    )
    return calculate_etc(environment, crop, neutral, climate_table, systems)
