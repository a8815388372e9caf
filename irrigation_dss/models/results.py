"""Result value objects produced by the calculation pipeline.

Each stage of the pipeline returns one of these immutable models; the
orchestrator composes them into a single DSSResult. Field aliases are the
camelCase names consumed by the report layer (``model_dump(by_alias=True)``).
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from irrigation_dss.models.enums import (
    AssessmentStatus,
    BalanceStatus,
    BalanceTrend,
    DrainageClass,
    DrainageSystemType,
    LeachingFrequency,
    RiskLevel,
    SuitabilityRating,
    SystemType,
    TextureClass,
    TimePeriod,
    UrgencyLevel,
)


class ResultModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# --- Soil-crop compatibility -------------------------------------------------


class Recommendation(ResultModel):
    """Prioritised advisory message with optional concrete suggestions."""

    type: str
    priority: str
    message: str
    suggestions: tuple[str, ...] = ()


class CompatibilityResult(ResultModel):
    """Soil texture x crop type fit.

    ``adjustment_factor`` equals ``compatibility_score`` and is applied
    multiplicatively to Kc downstream.
    """

    soil_texture: TextureClass
    compatibility_score: float = Field(ge=0, le=1)
    suitability_rating: SuitabilityRating
    recommendations: tuple[Recommendation, ...] = ()
    adjustment_factor: float = Field(ge=0, le=1)


# --- Evapotranspiration ------------------------------------------------------


class ClimateAdjustmentApplied(ResultModel):
    zone: str | None
    multiplier: float


class IrrigationAdjustmentApplied(ResultModel):
    method: str | None
    factor: float


class EnvironmentalAdjustments(ResultModel):
    temperature_boost: float = 1.0
    wind_speed_boost: float = 1.0
    humidity_boost: float = 1.0


class ETcResult(ResultModel):
    """FAO-56 crop evapotranspiration with the full Kc adjustment trail.

    Attributes:
        etc: Crop evapotranspiration (mm/day, 2 dp)
        et0_used: Reference ET used (mm/day)
        kc_used: Final adjusted Kc (2 dp)
        base_kc: Kc from the matched growth period (2 dp)
        kc_period_used: Name of the matched period, "default" when none
    """

    etc: float
    et0_used: float
    kc_used: float
    base_kc: float
    kc_period_used: str
    climate_adjustment: ClimateAdjustmentApplied
    irrigation_adjustment: IrrigationAdjustmentApplied
    compatibility_adjustment: float
    environmental_adjustments: EnvironmentalAdjustments
    methodology: str = "FAO-56 (Allen et al., 1998) with GCC/MENA regional adjustments"


# --- Irrigation requirement and schedule -------------------------------------


class IrrigationRequirement(ResultModel):
    """Irrigation depth and timing derived from soil water retention and ETc."""

    irrigation_depth: float = Field(description="mm per event")
    frequency: int = Field(ge=1, description="days between irrigations")
    max_application_rate: float = Field(description="mm/hr")
    application_time: float = Field(description="hours per event")
    total_available_water: float = Field(description="mm in root zone")
    paw_used: float = Field(description="plant available water (% vol)")
    root_depth_used: float = Field(description="mm")


class ScheduleEntry(ResultModel):
    week: int
    irrigation_day: int = Field(ge=1, le=7)
    day_name: str
    depth: float
    duration_minutes: int
    notes: str


class IrrigationSchedule(ResultModel):
    entries: tuple[ScheduleEntry, ...]
    frequency: str
    optimal_timing: str
    seasonal_adjustments: str


class ActionRecommendation(ResultModel):
    """Headline management recommendation shown on the report summary."""

    category: str
    priority: str
    title: str
    description: str
    implementation: str


# --- Rule-based system recommendation and legacy water economics -------------


class AlternativeSystem(ResultModel):
    type: SystemType
    efficiency: float
    estimated_cost: float
    suitability: str


class RuleBasedRecommendation(ResultModel):
    recommended_system: SystemType
    efficiency: float
    estimated_cost: int
    cost_per_hectare: float
    reasoning: tuple[str, ...]
    alternatives: tuple[AlternativeSystem, ...]


class WaterEconomics(ResultModel):
    """Volume-based water economics for the rule-based system.

    ``payback_period`` is None when annual savings are not positive.
    """

    annual_water_savings: int = Field(description="m3/year")
    annual_cost_savings: int
    payback_period: float | None
    roi: int = Field(description="10-year ROI (%)")
    water_cost_savings: int
    yield_value_increase: int
    annual_water_use: int = Field(description="m3/year")


# --- Multi-criteria system scoring -------------------------------------------


class SystemAnalysis(ResultModel):
    type: SystemType
    efficiency: float
    cost_per_hectare: float
    total_cost: float
    suitability_score: float = Field(ge=0, le=100)
    advantages: tuple[str, ...]
    disadvantages: tuple[str, ...]
    technical_specs: dict[str, str]


class ScoreCriteria(ResultModel):
    """Weighted contribution of each criterion to the total score."""

    suitability: float
    efficiency: float
    cost_effectiveness: float
    maintenance: float


class SystemScore(ResultModel):
    type: SystemType
    total_score: int = Field(ge=0, le=100)
    criteria: ScoreCriteria
    ranking: int = Field(ge=1)
    recommendation: str


class SelectedSystem(ResultModel):
    type: SystemType
    score: SystemScore
    confidence: str
    reasoning: tuple[str, ...]


class ComparisonEntry(ResultModel):
    type: SystemType
    score: int
    ranking: int
    recommendation: str
    efficiency: float
    cost_per_hectare: float
    total_cost: float
    suitability_score: float
    pros: tuple[str, ...]
    cons: tuple[str, ...]
    best_for: str
    investment_level: str


class ComparisonRecommendation(ResultModel):
    type: str
    title: str
    description: str
    reasoning: str
    criteria: ScoreCriteria | None = None


class ComparisonSummary(ResultModel):
    total_systems: int
    best_system: SystemType
    highest_score: int
    lowest_score: int


class SystemComparison(ResultModel):
    summary: ComparisonSummary
    detailed_comparison: dict[str, ComparisonEntry]
    recommendations: tuple[ComparisonRecommendation, ...]


class ImplementationPhase(ResultModel):
    phase: int
    title: str
    duration: str
    tasks: tuple[str, ...]
    cost: float
    deliverables: tuple[str, ...]


class ImplementationPlan(ResultModel):
    phases: tuple[ImplementationPhase, ...]
    total_duration: str
    total_cost: int
    critical_path: str
    risk_factors: tuple[str, ...]


class MaintenanceSchedule(ResultModel):
    daily: tuple[str, ...]
    weekly: tuple[str, ...]
    monthly: tuple[str, ...]
    seasonal: tuple[str, ...]
    annual: tuple[str, ...]


class PerformanceMetrics(ResultModel):
    water_use_efficiency: int
    application_efficiency: int
    distribution_uniformity: float
    energy_efficiency: float
    labor_efficiency: float
    overall_score: int


class SystemRecommendation(ResultModel):
    """Full three-system analysis, ranking and plan for the winning system."""

    recommended_system: SystemType
    recommended_details: SelectedSystem
    system_analysis: dict[str, SystemAnalysis]
    system_scores: dict[str, SystemScore]
    system_comparison: SystemComparison
    implementation_plan: ImplementationPlan
    maintenance_schedule: MaintenanceSchedule
    performance_metrics: PerformanceMetrics


# --- Economics ---------------------------------------------------------------


class BreakdownPercentages(ResultModel):
    water: int
    yield_increase: int
    labor: int


class ROICalculation(ResultModel):
    total_investment: float
    annual_savings: int
    water_savings: int
    yield_increase: int
    labor_savings: int
    roi_1_year: int = Field(alias="roi1Year")
    roi_5_year: int = Field(alias="roi5Year")
    roi_10_year: int = Field(alias="roi10Year")
    breakdown_percentages: BreakdownPercentages


class CashFlowPoint(ResultModel):
    year: int
    annual_savings: float
    cumulative_cash_flow: int
    break_even: bool


class PaybackAnalysis(ResultModel):
    """Payback metrics.

    ``payback_period`` and ``months_to_payback`` are None when the investment
    never pays back (annual savings <= 0).
    """

    payback_period: float | None
    discounted_payback: int
    months_to_payback: int | None
    payback_rating: str
    cash_flow_projection: tuple[CashFlowPoint, ...]


class WaterProjectionPoint(ResultModel):
    year: int
    water_saved: int
    cost_per_m3: float
    annual_savings: int
    cumulative_savings: int


class WaterCostSavings(ResultModel):
    annual_water_saved: int = Field(description="m3/year")
    annual_cost_savings: int
    cumulative_savings_10_year: int = Field(alias="cumulativeSavings10Year")
    efficiency_improvement: int = Field(description="percentage points over baseline")
    yearly_projection: tuple[WaterProjectionPoint, ...]
    daily_water_saved: int
    percentage_reduction: int
    environmental_benefit: str = "Reduced groundwater depletion and energy consumption"


class BenefitLine(ResultModel):
    annual: int
    percentage: int


class CostBenefitAnalysis(ResultModel):
    total_investment: float
    annual_savings: int
    payback_period: float | None
    roi_10_year: int = Field(alias="roi10Year")
    water_savings: BenefitLine
    yield_increase: BenefitLine
    labor_savings: BenefitLine
    payback_risk: str
    water_price_risk: str = "Medium - subject to inflation"
    yield_risk: str = "Low - conservative estimates used"


class EconomicSummary(ResultModel):
    total_investment: float
    annual_savings: int
    payback_years: float | None
    roi_10_year: int = Field(alias="roi10Year")
    recommendation: str


class EconomicResult(ResultModel):
    roi_calculation: ROICalculation
    payback_analysis: PaybackAnalysis
    water_savings: WaterCostSavings
    cost_benefit_analysis: CostBenefitAnalysis
    summary: EconomicSummary


# --- Salt management ---------------------------------------------------------


class SaltRecommendation(ResultModel):
    priority: str
    action: str
    details: str
    timing: str
    category: str | None = None
    sample_action: str | None = None
    expected_outcome: str | None = None


class QualityFlag(ResultModel):
    type: str
    message: str
    code: str | None = None
    recommendation: str | None = None


class LeachingCalculation(ResultModel):
    base_lf: float
    climate_factor: float
    seasonal_factor: float
    environmental_factor: float
    adjusted_lf: float


class LeachingEconomics(ResultModel):
    """Leaching cost vs. avoided salt damage ($/ha/season)."""

    extra_water_cost: int
    potential_salt_damage: int
    net_benefit: int
    benefit_cost_ratio: float
    recommendation: str


class LeachingResult(ResultModel):
    """FAO-29 leaching requirement per irrigation event.

    ``leaching_fraction`` is the unrounded adjusted LF, clamped to <= 0.5.
    """

    leaching_fraction: float = Field(ge=0, le=0.5)
    leaching_depth: float = Field(description="mm per irrigation event")
    irrigation_depth: float = Field(description="mm per irrigation event")
    total_water_need: float = Field(description="mm per irrigation event")
    frequency: LeachingFrequency
    frequency_description: str
    water_increase_pct: int
    calculations: LeachingCalculation
    economics: LeachingEconomics
    recommendations: tuple[SaltRecommendation, ...]
    quality_flags: tuple[QualityFlag, ...]
    confidence: str
    input_hash: str


class DrainageSpecifications(ResultModel):
    spacing: str
    depth: str
    material: str
    suitability: str


class DrainageSystem(ResultModel):
    system_type: DrainageSystemType
    reasoning: str
    specifications: DrainageSpecifications | None = None
    cost_estimate: int = 0
    timeframe: str = "N/A"


class DrainageEconomics(ResultModel):
    installation_cost: int
    annual_maintenance: int
    annual_benefit: int
    payback_period: float
    benefit_cost_ratio: float
    recommendation: str


class DrainagePhase(ResultModel):
    phase: int
    description: str
    duration: str


class DrainageImplementation(ResultModel):
    phases: tuple[DrainagePhase, ...]
    total_duration: str
    seasonal_considerations: str
    maintenance_schedule: str
    special_requirements: str | None = None


class DrainageAssessment(ResultModel):
    required: bool
    urgency_level: UrgencyLevel
    drainage_class: DrainageClass
    drainage_capacity: float = Field(description="mm/day")
    system: DrainageSystem
    economics: DrainageEconomics
    implementation: DrainageImplementation
    input_hash: str


class SaltInputs(ResultModel):
    """Salt entering the root zone (kg/ha per period)."""

    irrigation: float
    fertilizer: float
    atmospheric: float
    groundwater: float


class SaltOutputs(ResultModel):
    """Salt leaving the root zone (kg/ha per period)."""

    leaching: float
    drainage: float
    crop_uptake: float
    surface_runoff: float


class SaltBalance(ResultModel):
    period: TimePeriod
    inputs: SaltInputs
    outputs: SaltOutputs
    total_inputs: float
    total_outputs: float
    net_balance: float = Field(description="kg/ha per period")
    status: BalanceStatus
    trend: BalanceTrend
    interpretation: str
    recommendations: tuple[SaltRecommendation, ...]
    input_flags: tuple[QualityFlag, ...] = ()
    output_flags: tuple[QualityFlag, ...] = ()


class SaltEconomicImpact(ResultModel):
    total_cost: float = 0
    total_benefit: float = 0
    net_benefit: float = 0
    cost_per_hectare: float = 0
    benefit_cost_ratio: float = 0


class SaltSummary(ResultModel):
    overall_risk: RiskLevel
    priority_actions: tuple[str, ...]
    economic_impact: SaltEconomicImpact


class SaltAssessment(ResultModel):
    """Salt management outcome for a run.

    Either a fully computed assessment (``status == computed``) or the safe
    default substituted when the salt sub-pipeline fails
    (``status == degraded``, with ``error`` describing the cause).
    """

    status: AssessmentStatus
    leaching_required: bool
    drainage_required: bool
    balance_status: BalanceStatus
    summary: SaltSummary
    leaching: LeachingResult | None = None
    drainage: DrainageAssessment | None = None
    salt_balance: SaltBalance | None = None
    error: str | None = None

    @classmethod
    def degraded(cls, error: str) -> "SaltAssessment":
        """Safe default: nothing required, stable balance, low risk."""
        return cls(
            status=AssessmentStatus.DEGRADED,
            leaching_required=False,
            drainage_required=False,
            balance_status=BalanceStatus.STABLE,
            summary=SaltSummary(
                overall_risk=RiskLevel.LOW,
                priority_actions=("Monitor soil salinity regularly",),
                economic_impact=SaltEconomicImpact(),
            ),
            error=error,
        )

    @property
    def is_degraded(self) -> bool:
        return self.status == AssessmentStatus.DEGRADED


# --- Aggregate ---------------------------------------------------------------


class DSSResult(ResultModel):
    """Complete decision support result for one calculation run.

    Headline fields mirror what the report layer reads; the nested models carry
    the full breakdown for traceability. Nothing here is recomputed downstream.
    """

    etc_calculated: float
    irrigation_depth: float
    irrigation_frequency: int
    max_application_rate: float

    system_recommendation: SystemType
    system_efficiency: float
    system_cost: int

    economic_roi: int = Field(alias="economicROI")
    payback_period: float | None
    annual_water_savings: int
    annual_cost_savings: int

    system_recommendations_enhanced: SystemType
    economic_analysis_basic: EconomicSummary
    roi_calculation: ROICalculation
    payback_analysis: PaybackAnalysis
    water_savings_analysis: WaterCostSavings
    cost_benefit_analysis: CostBenefitAnalysis

    salt_management: SaltAssessment

    compatibility: CompatibilityResult
    etc_breakdown: ETcResult
    irrigation_breakdown: IrrigationRequirement
    system_breakdown: RuleBasedRecommendation
    economic_breakdown: WaterEconomics
    system_recommendations_detailed: SystemRecommendation
    economic_analysis_detailed: EconomicResult

    recommendations: tuple[ActionRecommendation, ...]
    schedule_data: IrrigationSchedule

    def to_report_dict(self) -> dict:
        """Plain JSON-compatible mapping keyed by the report layer's field names."""
        return self.model_dump(mode="json", by_alias=True)
