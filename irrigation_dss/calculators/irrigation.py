"""Irrigation requirement sizing from soil water retention and ETc."""

from irrigation_dss.calculators.rounding import round_half_away
from irrigation_dss.config import CONSTANTS
from irrigation_dss.errors import DomainError
from irrigation_dss.models.domain import SoilProfile
from irrigation_dss.models.results import ETcResult, IrrigationRequirement


def calculate_irrigation_requirement(
    soil: SoilProfile,
    etc_result: ETcResult,
    depletion_fraction: float,
    max_application_rate_cap: float,
    root_depth_mm: float = CONSTANTS.ROOT_DEPTH_MM,
) -> IrrigationRequirement:
    """Derive irrigation depth, interval and application rate.

    Formula:
        PAW (%) = field_capacity - wilting_point
        TAW (mm) = PAW / 100 x root_depth
        depth (mm) = TAW x depletion_fraction
        frequency (days) = max(1, round(depth / ETc))
        rate (mm/hr) = min(Ks, cap)
        time (hr) = depth / rate

    The interval uses the rounded ETc from the ETc stage.

    Args:
        soil: Soil water retention and saturated conductivity
        etc_result: ETc stage output
        depletion_fraction: Fraction of available water depleted between irrigations
        max_application_rate_cap: Upper bound on application rate (mm/hr)
        root_depth_mm: Effective root depth

    Returns:
        IrrigationRequirement rounded to 1 dp (frequency is an integer).

    Raises:
        DomainError: If ETc or saturated conductivity is not positive, since the
            interval or application time would be undefined.
    """
    if etc_result.etc <= 0:
        msg = f"ETc must be positive to derive an irrigation interval, got {etc_result.etc}"
        raise DomainError(msg)
    if soil.saturated_conductivity <= 0:
        msg = (
            "Saturated conductivity must be positive to derive an application time, "
            f"got {soil.saturated_conductivity}"
        )
        raise DomainError(msg)

    paw = soil.field_capacity - soil.wilting_point
    total_available_water = (paw / 100) * root_depth_mm
    irrigation_depth = total_available_water * depletion_fraction

    frequency = max(1, int(round_half_away(irrigation_depth / etc_result.etc)))
    max_application_rate = min(soil.saturated_conductivity, max_application_rate_cap)
    application_time = irrigation_depth / max_application_rate

    return IrrigationRequirement(
        irrigation_depth=round_half_away(irrigation_depth, 1),
        frequency=frequency,
        max_application_rate=round_half_away(max_application_rate, 1),
        application_time=round_half_away(application_time, 1),
        total_available_water=round_half_away(total_available_water, 1),
        paw_used=round_half_away(paw, 1),
        root_depth_used=root_depth_mm,
    )
