"""Salt management: leaching requirement, drainage assessment and salt balance.

Leaching follows FAO-29 (LF = ECw / (5 x ECt - ECw)) with Gulf climate,
seasonal and environmental adjustments. Drainage is assessed from saturated
conductivity, clay content and water table depth. The salt mass balance
accounts salt inputs and outputs of the root zone for a period.

All EC values are dS/m; salt masses are kg/ha.
"""

import hashlib
import json
import logging
from collections.abc import Sequence

from irrigation_dss.calculators.rounding import round_half_away, round_int
from irrigation_dss.config import CONSTANTS, SaltConfig
from irrigation_dss.models.domain import (
    EnvironmentalConditions,
    FertilizerInput,
    FieldConfig,
    SoilProfile,
)
from irrigation_dss.models.enums import (
    AssessmentStatus,
    BalanceStatus,
    BalanceTrend,
    DrainageClass,
    DrainageSystemType,
    LeachingFrequency,
    RiskLevel,
    TimePeriod,
    UrgencyLevel,
)
from irrigation_dss.models.results import (
    DrainageAssessment,
    DrainageEconomics,
    DrainageImplementation,
    DrainagePhase,
    DrainageSpecifications,
    DrainageSystem,
    IrrigationRequirement,
    LeachingCalculation,
    LeachingEconomics,
    LeachingResult,
    QualityFlag,
    SaltAssessment,
    SaltBalance,
    SaltEconomicImpact,
    SaltInputs,
    SaltOutputs,
    SaltRecommendation,
    SaltSummary,
)
from irrigation_dss.validation import LeachingInputError, LeachingInputValidator

logger = logging.getLogger(__name__)

# Environmental leaching factors; these stack multiplicatively
HIGH_TEMPERATURE_C = 35.0
LOW_HUMIDITY_PCT = 20.0
HIGH_EVAPORATION_MM_DAY = 8.0
TEMPERATURE_FACTOR = 1.1
HUMIDITY_FACTOR = 1.05
EVAPORATION_FACTOR = 1.15

# Fraction of the EC-derived salt mass carried out by each output path
LEACHING_EFFICIENCY = 0.8
DRAINAGE_EFFICIENCY = 0.9
RUNOFF_FRACTION = 0.1
DEFAULT_FERTILIZER_SALT_INDEX = 0.1
CAPILLARY_RISE_DEPTH_M = 2.0
CAPILLARY_SALT_FACTOR = 0.3
MAX_CAPILLARY_DEPTH_M = 3.0

MAX_SALT_DAMAGE_RISK = 0.8
MAX_PRIORITY_ACTIONS = 5

DRAINAGE_DEPTH_TRIGGER_M = 2.0
HIGH_URGENCY_DEPTH_M = 1.0
DRAINAGE_LF_TRIGGER = 0.25
LOW_CONDUCTIVITY_MM_HR = 2.0

BALANCE_STATUS_THRESHOLDS: dict[TimePeriod, tuple[float, float]] = {
    TimePeriod.MONTHLY: (10, 25),
    TimePeriod.SEASONAL: (30, 75),
    TimePeriod.ANNUAL: (120, 300),
}

BALANCE_INTERPRETATION_THRESHOLDS: dict[TimePeriod, tuple[float, float, float]] = {
    TimePeriod.MONTHLY: (5, 15, 30),
    TimePeriod.SEASONAL: (15, 45, 90),
    TimePeriod.ANNUAL: (60, 180, 360),
}

MONTHS_PER_PERIOD: dict[TimePeriod, int] = {
    TimePeriod.MONTHLY: 1,
    TimePeriod.SEASONAL: 3,
    TimePeriod.ANNUAL: 12,
}

FREQUENCY_DESCRIPTIONS: dict[LeachingFrequency, str] = {
    LeachingFrequency.EVERY_IRRIGATION: "Apply leaching water with every irrigation cycle",
    LeachingFrequency.EVERY_2_IRRIGATIONS: "Apply leaching water every second irrigation",
    LeachingFrequency.EVERY_3_IRRIGATIONS: "Apply leaching water every third irrigation",
    LeachingFrequency.EVERY_5_IRRIGATIONS: "Apply leaching water every fifth irrigation",
}

DRAINAGE_LAYOUTS: dict[DrainageSystemType, tuple[str, str, str]] = {
    # spacing, depth, material
    DrainageSystemType.SUBSURFACE_TILE: ("15-25m", "1.2-1.5m", "perforated_pvc"),
    DrainageSystemType.SURFACE: ("50-100m", "0.3-0.5m", "graded_channels"),
    DrainageSystemType.MOLE: ("20-40m", "0.8-1.0m", "mole_channels"),
    DrainageSystemType.COMBINATION: ("30-50m", "1.0-1.2m", "tile_and_surface"),
}

INSTALLATION_TIMEFRAMES: dict[DrainageSystemType, str] = {
    DrainageSystemType.SUBSURFACE_TILE: "6-8 weeks",
    DrainageSystemType.SURFACE: "3-4 weeks",
    DrainageSystemType.MOLE: "2-3 weeks",
    DrainageSystemType.COMBINATION: "8-10 weeks",
    DrainageSystemType.NONE: "N/A",
}

SPECIAL_REQUIREMENTS: dict[DrainageSystemType, str] = {
    DrainageSystemType.SUBSURFACE_TILE: "Laser leveling required for proper gradient",
    DrainageSystemType.SURFACE: "Proper grading essential for water flow",
}

DRAINAGE_PHASES = (
    DrainagePhase(phase=1, description="Site survey and design", duration="1-2 weeks"),
    DrainagePhase(phase=2, description="Material procurement", duration="1 week"),
    DrainagePhase(phase=3, description="Installation", duration="2-4 weeks"),
    DrainagePhase(phase=4, description="Testing and commissioning", duration="1 week"),
)


def input_hash(params: dict) -> str:
    """Short deterministic fingerprint of the calculation inputs."""
    payload = json.dumps(params, sort_keys=True, default=str)
    return hashlib.md5(payload.encode("utf-8"), usedforsecurity=False).hexdigest()[:8]


def _fmt(value: float) -> str:
    return f"{value:g}"


# --- Leaching ----------------------------------------------------------------


def determine_leaching_frequency(leaching_fraction: float) -> LeachingFrequency:
    if leaching_fraction < 0.1:
        return LeachingFrequency.EVERY_5_IRRIGATIONS
    if leaching_fraction < 0.2:
        return LeachingFrequency.EVERY_3_IRRIGATIONS
    if leaching_fraction < 0.3:
        return LeachingFrequency.EVERY_2_IRRIGATIONS
    return LeachingFrequency.EVERY_IRRIGATION


def calculation_confidence(water_ec: float, crop_threshold_ec: float) -> str:
    if water_ec < 4 and crop_threshold_ec > 2:
        return "high"
    if water_ec < 8 and crop_threshold_ec > 1:
        return "medium"
    return "low"


def _leaching_recommendations(
    adjusted_lf: float,
    soil_ec: float,
    crop_threshold_ec: float,
    season: str,
    economics: LeachingEconomics,
) -> tuple[SaltRecommendation, ...]:
    recommendations = []
    extra_pct = round_int(adjusted_lf * 100)

    if adjusted_lf > 0.3:
        recommendations.append(
            SaltRecommendation(
                priority="HIGH",
                category="leaching",
                action="Implement intensive leaching program",
                details=f"Apply {extra_pct}% extra water every irrigation",
                sample_action=(
                    "Increase leaching fraction to 0.35 if EC rises above "
                    f"{_fmt(round_half_away(soil_ec * 1.1, 1))} dS/m"
                ),
                timing="immediate",
                expected_outcome="Reduce soil salinity by 15-25% within 2-3 irrigation cycles",
            )
        )
    elif adjusted_lf > 0.15:
        recommendations.append(
            SaltRecommendation(
                priority="MEDIUM",
                category="leaching",
                action="Regular leaching schedule",
                details=f"Apply {extra_pct}% extra water every 2-3 irrigations",
                sample_action=(
                    "Monitor soil EC weekly; apply leaching if EC exceeds "
                    f"{_fmt(round_half_away(crop_threshold_ec * 1.2, 1))} dS/m"
                ),
                timing="within_week",
                expected_outcome="Maintain soil salinity within acceptable range",
            )
        )

    if season == "summer":
        recommendations.append(
            SaltRecommendation(
                priority="HIGH",
                category="timing",
                action="Optimize leaching timing for summer conditions",
                details="Apply leaching water during early morning (4-6 AM) to minimize evaporation",
                sample_action=(
                    "Schedule leaching irrigations between 4-6 AM when evaporation rate is <6 mm/day"
                ),
                timing="daily",
                expected_outcome="Reduce water loss by 20-30% compared to midday application",
            )
        )

    if economics.benefit_cost_ratio < 1.5:
        recommendations.append(
            SaltRecommendation(
                priority="MEDIUM",
                category="economic",
                action="Consider cost-effective alternatives",
                details="Evaluate crop switching or water treatment options",
                sample_action=(
                    "Switch to salt-tolerant crops (barley, date palm) or install water treatment system"
                ),
                timing="next_season",
                expected_outcome="Improve economic viability by 25-40%",
            )
        )

    return tuple(recommendations)


def _leaching_quality_flags(adjusted_lf: float, economics: LeachingEconomics) -> tuple[QualityFlag, ...]:
    flags = []
    if adjusted_lf > 0.4:
        flags.append(
            QualityFlag(
                type="warning",
                message="Very high leaching requirement - consider crop alternatives",
                code="HIGH_LF",
            )
        )
    if economics.benefit_cost_ratio < 1.0:
        flags.append(
            QualityFlag(
                type="caution",
                message="Leaching may not be economically viable",
                code="LOW_BCR",
            )
        )
    return tuple(flags)


# --- Drainage ----------------------------------------------------------------


def classify_drainage(saturated_conductivity: float, clay: float) -> DrainageClass:
    """Natural drainage class from Ks (mm/hr) and clay (%)."""
    if saturated_conductivity > 25 and clay < 20:
        return DrainageClass.WELL_DRAINED
    if saturated_conductivity > 10 and clay < 35:
        return DrainageClass.MODERATELY_DRAINED
    if saturated_conductivity > 2 and clay < 50:
        return DrainageClass.SOMEWHAT_POORLY_DRAINED
    return DrainageClass.POORLY_DRAINED


def assess_urgency(
    drainage_required: bool,
    groundwater_depth: float | None,
    seasonal_water_table: bool,
) -> UrgencyLevel:
    if not drainage_required:
        return UrgencyLevel.NONE
    if seasonal_water_table or (groundwater_depth is not None and groundwater_depth < HIGH_URGENCY_DEPTH_M):
        return UrgencyLevel.HIGH
    if groundwater_depth is not None and groundwater_depth < DRAINAGE_DEPTH_TRIGGER_M:
        return UrgencyLevel.MEDIUM
    return UrgencyLevel.LOW


def _drainage_suitability(system_type: DrainageSystemType, clay: float, saturated_conductivity: float) -> str:
    if system_type == DrainageSystemType.SUBSURFACE_TILE:
        return "excellent" if clay > 30 else "good"
    if system_type == DrainageSystemType.SURFACE:
        return "excellent" if saturated_conductivity < 5 else "moderate"
    if system_type == DrainageSystemType.MOLE:
        return "excellent" if 20 < clay < 50 else "moderate"
    return "good"


def _drainage_reasoning(system_type: DrainageSystemType, clay: float, field_slope: float) -> str:
    if system_type == DrainageSystemType.SUBSURFACE_TILE:
        return f"Heavy clay soil ({_fmt(clay)}% clay) with low permeability requires subsurface drainage"
    if system_type == DrainageSystemType.SURFACE:
        return f"Field slope ({_fmt(field_slope)}%) allows effective surface drainage system"
    if system_type == DrainageSystemType.MOLE:
        return "Moderate clay content suitable for mole drainage channels"
    return "Mixed soil conditions require combination drainage approach"


def choose_drainage_system(
    clay: float,
    saturated_conductivity: float,
    field_slope: float,
) -> DrainageSystemType:
    """Drainage system type for a field that needs drainage; first match wins."""
    if clay > 40 and saturated_conductivity < LOW_CONDUCTIVITY_MM_HR:
        return DrainageSystemType.SUBSURFACE_TILE
    if field_slope > 2:
        return DrainageSystemType.SURFACE
    if saturated_conductivity < 5:
        return DrainageSystemType.MOLE
    return DrainageSystemType.COMBINATION


# --- Salt balance ------------------------------------------------------------


def assess_balance_status(net_balance: float, period: TimePeriod) -> tuple[BalanceStatus, BalanceTrend]:
    """Status and trend from the net balance (kg/ha per period).

    Negative balances are improving; below the period's warning threshold is
    stable; below its critical threshold is warning; otherwise critical.
    """
    warning, critical = BALANCE_STATUS_THRESHOLDS[period]
    if net_balance < 0:
        return BalanceStatus.IMPROVING, BalanceTrend.DECREASING
    if net_balance < warning:
        return BalanceStatus.STABLE, BalanceTrend.STABLE
    if net_balance < critical:
        return BalanceStatus.WARNING, BalanceTrend.INCREASING
    return BalanceStatus.CRITICAL, BalanceTrend.RAPIDLY_INCREASING


def interpret_net_balance(net_balance: float, period: TimePeriod) -> str:
    low, moderate, high = BALANCE_INTERPRETATION_THRESHOLDS[period]
    if net_balance < 0:
        return "Salt levels decreasing - good management"
    if net_balance < low:
        return "Acceptable salt accumulation rate"
    if net_balance < moderate:
        return "Moderate salt accumulation - monitor closely"
    if net_balance < high:
        return "High salt accumulation - action required"
    return "Critical salt accumulation - immediate intervention needed"


def _balance_recommendations(status: BalanceStatus) -> tuple[SaltRecommendation, ...]:
    if status == BalanceStatus.CRITICAL:
        return (
            SaltRecommendation(
                priority="URGENT",
                action="Immediate leaching required",
                details="Apply 150% normal irrigation depth to flush accumulated salts",
                sample_action="Apply 75mm leaching irrigation within 24 hours if normal irrigation is 50mm",
                timing="within_24_hours",
                expected_outcome="Reduce soil salinity by 30-40% within one week",
            ),
        )
    if status == BalanceStatus.WARNING:
        return (
            SaltRecommendation(
                priority="HIGH",
                action="Increase leaching frequency",
                details="Apply leaching irrigation every 2-3 normal irrigations",
                sample_action=(
                    "Schedule leaching every Tuesday and Friday if normal irrigation is "
                    "Monday/Wednesday/Friday"
                ),
                timing="within_week",
                expected_outcome="Stabilize salt accumulation within 2-3 weeks",
            ),
        )
    if status == BalanceStatus.IMPROVING:
        return (
            SaltRecommendation(
                priority="LOW",
                action="Continue current management",
                details="Salt balance is improving, maintain current practices",
                sample_action="Monitor soil EC monthly and maintain current irrigation schedule",
                timing="ongoing",
                expected_outcome="Continued improvement in soil salinity levels",
            ),
        )
    return ()


class SaltManagementEngine:
    """Leaching, drainage and salt balance calculations.

    Factor tables, costs and the default field assumptions used by
    :meth:`assess` come from SaltConfig.
    """

    def __init__(self, config: SaltConfig, validator: LeachingInputValidator | None = None):
        self.config = config
        self.validator = validator or LeachingInputValidator()

    # --- leaching ---

    def _environmental_factor(
        self,
        temperature: float | None,
        humidity: float | None,
        evaporation_rate: float | None,
    ) -> float:
        factor = 1.0
        if temperature is not None and temperature > HIGH_TEMPERATURE_C:
            factor *= TEMPERATURE_FACTOR
        if humidity is not None and humidity < LOW_HUMIDITY_PCT:
            factor *= HUMIDITY_FACTOR
        if evaporation_rate is not None and evaporation_rate > HIGH_EVAPORATION_MM_DAY:
            factor *= EVAPORATION_FACTOR
        return factor

    def _leaching_economics(
        self, total_water_need: float, irrigation_depth: float, water_ec: float
    ) -> LeachingEconomics:
        extra_water = total_water_need - irrigation_depth
        price = self.config.water_costs_per_m3[self.config.leaching_water_source]
        extra_water_cost = extra_water * price

        salt_damage_risk = min(water_ec / 10, MAX_SALT_DAMAGE_RISK)
        potential_loss = self.config.average_crop_value_per_ha * salt_damage_risk
        net_benefit = potential_loss - extra_water_cost

        return LeachingEconomics(
            extra_water_cost=round_int(extra_water_cost),
            potential_salt_damage=round_int(potential_loss),
            net_benefit=round_int(net_benefit),
            benefit_cost_ratio=round_half_away(potential_loss / max(extra_water_cost, 1), 1),
            recommendation="economically_beneficial" if net_benefit > 0 else "monitor_closely",
        )

    def calculate_leaching_requirement(
        self,
        soil_ec: float,
        water_ec: float,
        crop_threshold_ec: float,
        climate_zone: str = "gcc_arid",
        season: str = "summer",
        temperature: float | None = None,
        humidity: float | None = None,
        evaporation_rate: float | None = None,
    ) -> LeachingResult:
        """Leaching requirement per irrigation event (FAO-29, Gulf-adjusted).

        Formula:
            base_LF = ECw / (5 x ECt - ECw)
            LF = min(base_LF x climate x season x environment, 0.5)
            irrigation_depth = 25 mm x max(1, ECe / ECt)
            leaching_depth = irrigation_depth x LF

        Unknown climate zones and seasons use a factor of 1.0.

        Args:
            soil_ec: Soil salinity ECe
            water_ec: Irrigation water salinity ECw
            crop_threshold_ec: Crop salinity threshold ECt
            climate_zone: Climate zone for the climate factor
            season: summer, winter or transition
            temperature: Air temperature (C), optional
            humidity: Relative humidity (%), optional
            evaporation_rate: Evaporation rate (mm/day), optional

        Raises:
            LeachingInputError: If an EC value is out of range or
                ECw >= 5 x ECt (crop unsuitable for this water).
        """
        errors = self.validator.validate(soil_ec, water_ec, crop_threshold_ec)
        if errors:
            raise LeachingInputError(errors)

        config = self.config
        base_lf = water_ec / (5 * crop_threshold_ec - water_ec)
        climate_factor = config.climate_factors.get(climate_zone, 1.0)
        seasonal_factor = config.seasonal_factors.get(season, 1.0)
        environmental_factor = self._environmental_factor(temperature, humidity, evaporation_rate)

        adjusted_lf = min(
            base_lf * climate_factor * seasonal_factor * environmental_factor,
            config.max_leaching_fraction,
        )

        irrigation_depth = config.base_irrigation_depth_mm * max(1.0, soil_ec / crop_threshold_ec)
        leaching_depth = irrigation_depth * adjusted_lf
        total_water_need = irrigation_depth + leaching_depth
        frequency = determine_leaching_frequency(adjusted_lf)

        economics = self._leaching_economics(total_water_need, irrigation_depth, water_ec)

        params = {
            "soilEC": soil_ec,
            "waterEC": water_ec,
            "cropThresholdEC": crop_threshold_ec,
            "climateZone": climate_zone,
            "season": season,
            "temperature": temperature,
            "humidity": humidity,
            "evaporationRate": evaporation_rate,
        }

        return LeachingResult(
            leaching_fraction=adjusted_lf,
            leaching_depth=round_half_away(leaching_depth, 1),
            irrigation_depth=round_half_away(irrigation_depth, 1),
            total_water_need=round_half_away(total_water_need, 1),
            frequency=frequency,
            frequency_description=FREQUENCY_DESCRIPTIONS[frequency],
            water_increase_pct=round_int((total_water_need / irrigation_depth - 1) * 100),
            calculations=LeachingCalculation(
                base_lf=round_half_away(base_lf, 3),
                climate_factor=climate_factor,
                seasonal_factor=seasonal_factor,
                environmental_factor=round_half_away(environmental_factor, 2),
                adjusted_lf=round_half_away(adjusted_lf, 3),
            ),
            economics=economics,
            recommendations=_leaching_recommendations(
                adjusted_lf, soil_ec, crop_threshold_ec, season, economics
            ),
            quality_flags=_leaching_quality_flags(adjusted_lf, economics),
            confidence=calculation_confidence(water_ec, crop_threshold_ec),
            input_hash=input_hash(params),
        )

    # --- drainage ---

    def _drainage_economics(
        self, system_type: DrainageSystemType, field_area: float, drainage_required: bool
    ) -> DrainageEconomics:
        if not drainage_required:
            return DrainageEconomics(
                installation_cost=0,
                annual_maintenance=0,
                annual_benefit=0,
                payback_period=0,
                benefit_cost_ratio=0,
                recommendation="no_drainage_needed",
            )

        config = self.config
        base_cost = config.drainage_costs_per_ha.get(system_type.value, config.fallback_drainage_cost_per_ha)
        installation_cost = base_cost * field_area
        annual_maintenance = installation_cost * config.drainage_maintenance_rate
        annual_benefit = config.average_crop_value_per_ha * config.drainage_yield_protection

        # Installation cost is spread over a 10-year analysis period
        benefit_cost_ratio = annual_benefit / (installation_cost / 10 + annual_maintenance)

        return DrainageEconomics(
            installation_cost=round_int(installation_cost),
            annual_maintenance=round_int(annual_maintenance),
            annual_benefit=round_int(annual_benefit),
            payback_period=round_half_away(installation_cost / annual_benefit, 1),
            benefit_cost_ratio=round_half_away(benefit_cost_ratio, 1),
            recommendation="highly_recommended" if benefit_cost_ratio > 1.5 else "consider_alternatives",
        )

    def assess_drainage(
        self,
        saturated_conductivity: float,
        clay: float,
        field_area: float,
        field_slope: float = 0.0,
        groundwater_depth: float | None = None,
        seasonal_water_table: bool = False,
        leaching: LeachingResult | None = None,
    ) -> DrainageAssessment:
        """Drainage need, urgency, system choice, economics and plan.

        Drainage is required when there is a seasonal water table, groundwater
        shallower than 2 m, a poorly drained soil, Ks below 2 mm/hr, or a
        leaching fraction above 0.25.
        """
        drainage_class = classify_drainage(saturated_conductivity, clay)

        base_capacity = 5.0
        if leaching is not None:
            base_capacity += leaching.total_water_need * 0.1
        capacity = base_capacity * min(saturated_conductivity / 10, 2.0)

        required = (
            seasonal_water_table
            or (groundwater_depth is not None and groundwater_depth < DRAINAGE_DEPTH_TRIGGER_M)
            or drainage_class == DrainageClass.POORLY_DRAINED
            or saturated_conductivity < LOW_CONDUCTIVITY_MM_HR
            or (leaching is not None and leaching.leaching_fraction > DRAINAGE_LF_TRIGGER)
        )

        if required:
            system_type = choose_drainage_system(clay, saturated_conductivity, field_slope)
            spacing, depth, material = DRAINAGE_LAYOUTS[system_type]
            specifications = DrainageSpecifications(
                spacing=spacing,
                depth=depth,
                material=material,
                suitability=_drainage_suitability(system_type, clay, saturated_conductivity),
            )
            reasoning = _drainage_reasoning(system_type, clay, field_slope)
        else:
            system_type = DrainageSystemType.NONE
            specifications = None
            reasoning = "Adequate natural drainage"

        economics = self._drainage_economics(system_type, field_area, required)

        params = {
            "saturatedConductivity": saturated_conductivity,
            "clay": clay,
            "fieldArea": field_area,
            "fieldSlope": field_slope,
            "groundwaterDepth": groundwater_depth,
            "seasonalWaterTable": seasonal_water_table,
            "leachingFraction": leaching.leaching_fraction if leaching else None,
        }

        return DrainageAssessment(
            required=required,
            urgency_level=assess_urgency(required, groundwater_depth, seasonal_water_table),
            drainage_class=drainage_class,
            drainage_capacity=round_half_away(capacity, 2),
            system=DrainageSystem(
                system_type=system_type,
                reasoning=reasoning,
                specifications=specifications,
                cost_estimate=economics.installation_cost,
                timeframe=INSTALLATION_TIMEFRAMES.get(system_type, "4-6 weeks"),
            ),
            economics=economics,
            implementation=DrainageImplementation(
                phases=DRAINAGE_PHASES,
                total_duration="5-8 weeks",
                seasonal_considerations="Install during dry season for optimal conditions",
                maintenance_schedule="Annual inspection and cleaning required",
                special_requirements=SPECIAL_REQUIREMENTS.get(system_type),
            ),
            input_hash=input_hash(params),
        )

    # --- salt balance ---

    def groundwater_salt(self, groundwater_depth: float, groundwater_ec: float) -> float:
        """Capillary-rise salt from a shallow water table (zero below 3 m)."""
        if groundwater_depth > MAX_CAPILLARY_DEPTH_M:
            return 0.0
        capillary_rise = max(0.0, CAPILLARY_RISE_DEPTH_M - groundwater_depth)
        return capillary_rise * groundwater_ec * CAPILLARY_SALT_FACTOR

    def calculate_salt_balance(
        self,
        irrigation_volume: float,
        irrigation_ec: float,
        fertilizer_inputs: Sequence[FertilizerInput] = (),
        precipitation_volume: float = 0.0,
        leaching_volume: float = 0.0,
        drainage_volume: float = 0.0,
        crop_uptake: float = 0.0,
        period: TimePeriod = TimePeriod.MONTHLY,
        groundwater_depth: float = 5.0,
        groundwater_ec: float | None = None,
    ) -> SaltBalance:
        """Root-zone salt mass balance for one accounting period.

        Formula (volumes in mm, EC in dS/m, 0.64 converts to kg/ha):
            irrigation = volume x EC x 0.64
            fertilizer = sum(amount x salt_index)
            atmospheric = 4.2 kg/ha per month of the period
            leaching = volume x EC x 0.8 x 0.64
            drainage = volume x EC x 0.9 x 0.64
            runoff = precipitation x 0.1 x EC x 0.64
            net = inputs - outputs

        Status uses the unrounded net balance; reported values are 1 dp.
        """
        factor = CONSTANTS.EC_TO_SALT_FACTOR
        if groundwater_ec is None:
            groundwater_ec = self.config.groundwater_ec

        fertilizer = sum(
            item.amount * (item.salt_index or DEFAULT_FERTILIZER_SALT_INDEX) for item in fertilizer_inputs
        )
        inputs = {
            "irrigation": irrigation_volume * irrigation_ec * factor,
            "fertilizer": fertilizer,
            "atmospheric": self.config.monthly_atmospheric_deposition_kg_ha * MONTHS_PER_PERIOD[period],
            "groundwater": self.groundwater_salt(groundwater_depth, groundwater_ec),
        }
        outputs = {
            "leaching": leaching_volume * irrigation_ec * LEACHING_EFFICIENCY * factor,
            "drainage": drainage_volume * irrigation_ec * DRAINAGE_EFFICIENCY * factor,
            "crop_uptake": crop_uptake,
            "surface_runoff": precipitation_volume * RUNOFF_FRACTION * irrigation_ec * factor,
        }

        total_inputs = sum(inputs.values())
        total_outputs = sum(outputs.values())
        net_balance = total_inputs - total_outputs
        status, trend = assess_balance_status(net_balance, period)

        input_flags = []
        if total_inputs > 0 and inputs["fertilizer"] / total_inputs > 0.25:
            input_flags.append(
                QualityFlag(
                    type="warning",
                    message="Fertilizer salts contributing >25% of total salt input",
                    recommendation=(
                        "Consider reducing fertilizer application or switching to low-salt alternatives"
                    ),
                )
            )
        output_flags = []
        if outputs["crop_uptake"] < 1.0:
            output_flags.append(
                QualityFlag(
                    type="caution",
                    message="Crop uptake unusually low - verify crop growth stage",
                    recommendation="Monitor crop health and adjust uptake estimates based on growth stage",
                )
            )

        return SaltBalance(
            period=period,
            inputs=SaltInputs(**{k: round_half_away(v, 1) for k, v in inputs.items()}),
            outputs=SaltOutputs(**{k: round_half_away(v, 1) for k, v in outputs.items()}),
            total_inputs=round_half_away(total_inputs, 1),
            total_outputs=round_half_away(total_outputs, 1),
            net_balance=round_half_away(net_balance, 1),
            status=status,
            trend=trend,
            interpretation=interpret_net_balance(net_balance, period),
            recommendations=_balance_recommendations(status),
            input_flags=tuple(input_flags),
            output_flags=tuple(output_flags),
        )

    # --- summary ---

    @staticmethod
    def overall_risk(
        leaching: LeachingResult, drainage: DrainageAssessment, balance: SaltBalance
    ) -> RiskLevel:
        score = 0
        lf = leaching.leaching_fraction
        if lf > 0.3:
            score += 3
        elif lf > 0.2:
            score += 2
        elif lf > 0.1:
            score += 1

        score += {UrgencyLevel.HIGH: 3, UrgencyLevel.MEDIUM: 2, UrgencyLevel.LOW: 1}.get(
            drainage.urgency_level, 0
        )
        score += {BalanceStatus.CRITICAL: 3, BalanceStatus.WARNING: 2}.get(balance.status, 0)

        if score >= 7:
            return RiskLevel.HIGH
        if score >= 4:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    @staticmethod
    def priority_actions(
        leaching: LeachingResult, drainage: DrainageAssessment, balance: SaltBalance
    ) -> tuple[str, ...]:
        actions = []
        if drainage.urgency_level == UrgencyLevel.HIGH:
            actions.append("Install drainage system immediately")
        if leaching.leaching_fraction > DRAINAGE_LF_TRIGGER:
            actions.append("Implement intensive leaching program")
        if balance.status == BalanceStatus.CRITICAL:
            actions.append("Apply emergency salt flushing irrigation")
        actions.append("Monitor soil EC monthly")
        actions.append("Test irrigation water quality quarterly")
        return tuple(actions[:MAX_PRIORITY_ACTIONS])

    @staticmethod
    def economic_impact(
        leaching: LeachingResult, drainage: DrainageAssessment, field_area: float
    ) -> SaltEconomicImpact:
        total_cost = leaching.economics.extra_water_cost + drainage.economics.installation_cost
        total_benefit = leaching.economics.net_benefit + drainage.economics.annual_benefit
        return SaltEconomicImpact(
            total_cost=total_cost,
            total_benefit=total_benefit,
            net_benefit=total_benefit - total_cost,
            cost_per_hectare=round_half_away(total_cost / field_area, 2),
            benefit_cost_ratio=round_half_away(total_benefit / max(total_cost, 1), 2),
        )

    def assess(
        self,
        soil: SoilProfile,
        irrigation: IrrigationRequirement,
        environment: EnvironmentalConditions,
        field: FieldConfig,
    ) -> SaltAssessment:
        """Full salt management assessment for a calculation run.

        Measurements missing from the soil and environmental inputs are filled
        from the SaltConfig defaults (water EC, crop threshold, season,
        temperature, humidity, evaporation, groundwater depth).
        """
        config = self.config

        def pick(value, default):
            return default if value is None else value

        groundwater_depth = pick(environment.groundwater_depth, config.default_groundwater_depth_m)
        water_ec = pick(environment.irrigation_water_ec, config.irrigation_water_ec)

        leaching = self.calculate_leaching_requirement(
            soil_ec=pick(soil.electrical_conductivity, config.default_soil_ec),
            water_ec=water_ec,
            crop_threshold_ec=pick(environment.crop_threshold_ec, config.crop_threshold_ec),
            climate_zone=environment.climate_zone or config.default_climate_zone,
            season=environment.season or config.default_season,
            temperature=pick(environment.temperature, config.default_temperature_c),
            humidity=pick(environment.relative_humidity, config.default_humidity_pct),
            evaporation_rate=pick(environment.evaporation_rate, config.default_evaporation_rate_mm_day),
        )

        drainage = self.assess_drainage(
            saturated_conductivity=soil.saturated_conductivity,
            clay=soil.clay,
            field_area=field.area,
            field_slope=field.slope,
            groundwater_depth=groundwater_depth,
            seasonal_water_table=bool(environment.seasonal_water_table),
            leaching=leaching,
        )

        balance = self.calculate_salt_balance(
            irrigation_volume=irrigation.irrigation_depth,
            irrigation_ec=water_ec,
            fertilizer_inputs=(
                FertilizerInput(
                    amount=config.fertilizer_amount_kg_ha, salt_index=config.fertilizer_salt_index
                ),
            ),
            precipitation_volume=config.precipitation_mm,
            leaching_volume=leaching.leaching_depth,
            drainage_volume=config.drainage_volume_mm,
            crop_uptake=config.crop_uptake_kg_ha,
            period=TimePeriod(config.balance_period),
            groundwater_depth=groundwater_depth,
        )

        logger.info(
            f"Salt assessment: LF={leaching.leaching_fraction:.3f}, "
            f"drainage={drainage.system.system_type.value}, balance={balance.status.value} "
            f"({balance.net_balance} kg/ha {balance.period.value})"
        )

        return SaltAssessment(
            status=AssessmentStatus.COMPUTED,
            leaching_required=leaching.leaching_fraction > config.leaching_required_above_fraction,
            drainage_required=drainage.required,
            balance_status=balance.status,
            summary=SaltSummary(
                overall_risk=self.overall_risk(leaching, drainage, balance),
                priority_actions=self.priority_actions(leaching, drainage, balance),
                economic_impact=self.economic_impact(leaching, drainage, field.area),
            ),
            leaching=leaching,
            drainage=drainage,
            salt_balance=balance,
        )
