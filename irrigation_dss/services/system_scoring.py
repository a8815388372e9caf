"""Multi-criteria irrigation system scoring and ranking.

Analyses drip, sprinkler and surface irrigation for the field, scores each on
soil/field suitability, water use efficiency, cost-effectiveness and
maintenance, ranks them and builds the comparison, implementation plan,
maintenance schedule and performance metrics for the winner.
"""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

from irrigation_dss.calculators.rounding import format_amount, round_int
from irrigation_dss.config import DssConfig, SystemCatalog
from irrigation_dss.models.domain import FieldConfig, SoilProfile
from irrigation_dss.models.enums import SystemType
from irrigation_dss.models.results import (
    AlternativeSystem,
    ComparisonEntry,
    ComparisonRecommendation,
    ComparisonSummary,
    ImplementationPhase,
    ImplementationPlan,
    IrrigationRequirement,
    MaintenanceSchedule,
    PerformanceMetrics,
    RuleBasedRecommendation,
    ScoreCriteria,
    SelectedSystem,
    SystemAnalysis,
    SystemComparison,
    SystemRecommendation,
    SystemScore,
)

logger = logging.getLogger(__name__)

SUITABILITY_WEIGHT = 0.3
EFFICIENCY_WEIGHT = 0.25
COST_EFFECTIVENESS_WEIGHT = 0.25
MAINTENANCE_WEIGHT = 0.2

ALTERNATIVE_SCORE_GAP = 10
TOP_N_PROS_CONS = 3
LARGE_FIELD_HA = 20
PHASE_OVERLAP = 0.8


@dataclass(frozen=True)
class SystemDescription:
    """Static descriptive text and planning parameters for one system type."""

    advantages: tuple[str, ...]
    disadvantages: tuple[str, ...]
    technical_specs: dict[str, str]
    best_for: str
    site_preparation_weeks: tuple[int, int]
    site_preparation_tasks: tuple[str, ...]
    installation_base_weeks: int
    installation_tasks: tuple[str, ...]
    risk_factors: tuple[str, ...]
    maintenance: MaintenanceSchedule


SYSTEM_DESCRIPTIONS: dict[SystemType, SystemDescription] = {
    SystemType.DRIP: SystemDescription(
        advantages=(
            "Highest water use efficiency (90%)",
            "Precise water application",
            "Reduced weed growth",
            "Lower labor requirements",
            "Suitable for irregular terrain",
        ),
        disadvantages=(
            "Higher initial investment",
            "Requires filtration system",
            "Potential for clogging",
            "Limited to row crops",
        ),
        technical_specs={
            "emitterSpacing": "30-60 cm",
            "operatingPressure": "1.0-2.5 bar",
            "flowRate": "2-8 L/hr per emitter",
            "filterRequirement": "Essential (120-200 mesh)",
        },
        best_for="Small to medium fields with high-value crops",
        site_preparation_weeks=(1, 3),
        site_preparation_tasks=("Filtration system installation", "Main line trenching"),
        installation_base_weeks=2,
        installation_tasks=(
            "Drip line installation",
            "Emitter placement and testing",
            "Control valve installation",
            "System pressure testing",
        ),
        risk_factors=("Water quality and filtration requirements", "Emitter clogging potential"),
        maintenance=MaintenanceSchedule(
            daily=("Visual inspection of emitters",),
            weekly=("Filter cleaning check", "Pressure monitoring"),
            monthly=("System flushing", "Emitter flow rate check"),
            seasonal=("Complete filter replacement", "Line inspection"),
            annual=("System overhaul", "Component replacement planning"),
        ),
    ),
    SystemType.SPRINKLER: SystemDescription(
        advantages=(
            "Good water distribution uniformity",
            "Suitable for most crops",
            "Moderate investment cost",
            "Easy automation",
            "Good for large areas",
        ),
        disadvantages=(
            "Wind affects distribution",
            "Higher energy requirements",
            "Water loss to evaporation",
            "Not suitable for very sandy soils",
        ),
        technical_specs={
            "sprinklerSpacing": "12-18 m",
            "operatingPressure": "2.5-4.0 bar",
            "applicationRate": "10-25 mm/hr",
            "windLimitation": "Max 15 km/hr",
        },
        best_for="Medium to large fields with uniform terrain",
        site_preparation_weeks=(2, 4),
        site_preparation_tasks=("Pump station preparation", "Main pipeline installation"),
        installation_base_weeks=3,
        installation_tasks=(
            "Sprinkler head installation",
            "Lateral line connection",
            "Control system setup",
            "Coverage pattern testing",
        ),
        risk_factors=("Wind interference with distribution", "Energy cost fluctuations"),
        maintenance=MaintenanceSchedule(
            daily=("Visual inspection of sprinklers",),
            weekly=("Pressure check", "Coverage pattern verification"),
            monthly=("Nozzle cleaning", "Timer programming check"),
            seasonal=("Winterization/startup", "Sprinkler head adjustment"),
            annual=("Pump maintenance", "System efficiency audit"),
        ),
    ),
    SystemType.SURFACE: SystemDescription(
        advantages=(
            "Lowest initial investment",
            "Simple operation",
            "No energy requirements",
            "Suitable for large fields",
            "Good for clay soils",
        ),
        disadvantages=(
            "Lowest water use efficiency",
            "High labor requirements",
            "Uneven water distribution",
            "Requires land leveling",
            "Water logging risk",
        ),
        technical_specs={
            "fieldSlope": "0.1-2.0%",
            "furrowLength": "100-400 m",
            "infiltrationRate": "5-50 mm/hr",
            "landLeveling": "Required (±2 cm)",
        },
        best_for="Large fields with clay soils and low slopes",
        site_preparation_weeks=(3, 6),
        site_preparation_tasks=("Land leveling and grading", "Channel construction"),
        installation_base_weeks=4,
        installation_tasks=(
            "Channel lining installation",
            "Gate and control structure installation",
            "Drainage system setup",
            "Flow measurement setup",
        ),
        risk_factors=("Soil erosion and runoff", "Uneven water distribution"),
        maintenance=MaintenanceSchedule(
            daily=("Channel inspection",),
            weekly=("Gate operation check", "Flow measurement"),
            monthly=("Channel cleaning", "Structure maintenance"),
            seasonal=("Major repairs", "Sediment removal"),
            annual=("System redesign evaluation", "Efficiency improvement planning"),
        ),
    ),
}

COMMON_SITE_PREPARATION_TASKS = ("Site survey and marking", "Utility location and marking")


# --- Suitability rules -------------------------------------------------------


def _drip_suitability(soil: SoilProfile, field: FieldConfig, irrigation: IrrigationRequirement) -> float:
    score = 70.0
    if soil.sand > 60:
        score += 15
    if soil.clay > 40:
        score -= 10
    if field.area < 5:
        score += 10
    if field.area > 20:
        score -= 5
    if field.slope > 5:
        score += 5
    return score


def _sprinkler_suitability(
    soil: SoilProfile, field: FieldConfig, irrigation: IrrigationRequirement
) -> float:
    score = 75.0
    if soil.sand > 70:
        score -= 15
    if 30 < soil.clay < 50:
        score += 10
    if 5 < field.area < 50:
        score += 15
    if irrigation.max_application_rate < 10:
        score -= 10
    return score


def _surface_suitability(
    soil: SoilProfile, field: FieldConfig, irrigation: IrrigationRequirement
) -> float:
    score = 50.0
    if soil.clay > 40:
        score += 20
    if soil.sand > 60:
        score -= 20
    if field.area > 10:
        score += 15
    if field.slope > 2:
        score -= 15
    if field.slope < 0.5:
        score += 10
    return score


SuitabilityRule = Callable[[SoilProfile, FieldConfig, IrrigationRequirement], float]

SUITABILITY_RULES: dict[SystemType, SuitabilityRule] = {
    SystemType.DRIP: _drip_suitability,
    SystemType.SPRINKLER: _sprinkler_suitability,
    SystemType.SURFACE: _surface_suitability,
}


# --- Label helpers -----------------------------------------------------------


def cost_effectiveness_score(cost_per_hectare: float, efficiency: float) -> int:
    """Bucket cost per efficiency point: lower cost gives a higher score."""
    cost_per_efficiency = cost_per_hectare / (efficiency * 100)
    if cost_per_efficiency < 50:
        return 100
    if cost_per_efficiency < 100:
        return 80
    if cost_per_efficiency < 200:
        return 60
    if cost_per_efficiency < 300:
        return 40
    return 20


def score_recommendation(score: float) -> str:
    if score >= 80:
        return "Highly Recommended"
    if score >= 70:
        return "Recommended"
    if score >= 60:
        return "Suitable"
    if score >= 50:
        return "Consider with Caution"
    return "Not Recommended"


def score_confidence(score: float) -> str:
    if score >= 85:
        return "Very High"
    if score >= 75:
        return "High"
    if score >= 65:
        return "Medium"
    if score >= 55:
        return "Low"
    return "Very Low"


def investment_level(cost_per_hectare: float) -> str:
    if cost_per_hectare < 2000:
        return "Low"
    if cost_per_hectare < 5000:
        return "Medium"
    if cost_per_hectare < 8000:
        return "High"
    return "Very High"


def selection_reasoning(criteria: ScoreCriteria) -> tuple[str, ...]:
    reasons = []
    if criteria.suitability > 25:
        reasons.append("Excellent soil-system compatibility")
    if criteria.efficiency > 20:
        reasons.append("High water use efficiency")
    if criteria.cost_effectiveness > 20:
        reasons.append("Good cost-effectiveness ratio")
    if criteria.maintenance > 15:
        reasons.append("Low maintenance requirements")
    return tuple(reasons) or ("Selected based on overall performance",)


def _title(system_type: SystemType) -> str:
    return system_type.value.capitalize()


def _weeks(low: int, high: int) -> str:
    return f"{low}-{high} weeks"


class IrrigationSystemScorer:
    """Scores and ranks drip, sprinkler and surface irrigation for a field.

    Ties in the rounded total score keep the catalog order (drip, sprinkler,
    surface), so the ranking is deterministic.
    """

    def __init__(self, config: DssConfig):
        self.config = config
        self.catalog = config.systems

    def _system_types(self) -> list[SystemType]:
        return [SystemType(name) for name in self.catalog.priority]

    def analyze_systems(
        self,
        soil: SoilProfile,
        irrigation: IrrigationRequirement,
        field: FieldConfig,
    ) -> dict[SystemType, SystemAnalysis]:
        """Build the SystemAnalysis for every system, in catalog order."""
        analyses = {}
        for system_type in self._system_types():
            profile = self.catalog.get(system_type.value)
            description = SYSTEM_DESCRIPTIONS[system_type]
            raw_score = SUITABILITY_RULES[system_type](soil, field, irrigation)
            analyses[system_type] = SystemAnalysis(
                type=system_type,
                efficiency=profile.efficiency,
                cost_per_hectare=profile.cost_per_hectare,
                total_cost=profile.cost_per_hectare * field.area,
                suitability_score=min(100.0, max(0.0, raw_score)),
                advantages=description.advantages,
                disadvantages=description.disadvantages,
                technical_specs=description.technical_specs,
            )
        return analyses

    def score_systems(
        self, analyses: dict[SystemType, SystemAnalysis]
    ) -> dict[SystemType, SystemScore]:
        """Weighted multi-criteria score and 1-based ranking for each system.

        Formula:
            total = 0.3 x suitability + 0.25 x (efficiency x 100)
                    + 0.25 x cost_effectiveness + 0.2 x maintenance

        The total is rounded half away from zero to an integer before ranking.
        """
        criteria_by_type = {}
        totals = {}
        for system_type, analysis in analyses.items():
            profile = self.catalog.get(system_type.value)
            criteria = ScoreCriteria(
                suitability=analysis.suitability_score * SUITABILITY_WEIGHT,
                efficiency=analysis.efficiency * 100 * EFFICIENCY_WEIGHT,
                cost_effectiveness=cost_effectiveness_score(
                    analysis.cost_per_hectare, analysis.efficiency
                )
                * COST_EFFECTIVENESS_WEIGHT,
                maintenance=profile.maintenance_score * MAINTENANCE_WEIGHT,
            )
            criteria_by_type[system_type] = criteria
            totals[system_type] = (
                criteria.suitability
                + criteria.efficiency
                + criteria.cost_effectiveness
                + criteria.maintenance
            )

        rounded = {system_type: round_int(total) for system_type, total in totals.items()}
        # sorted() is stable, so equal scores keep catalog order
        order = sorted(rounded, key=lambda system_type: -rounded[system_type])
        rankings = {system_type: index + 1 for index, system_type in enumerate(order)}

        return {
            system_type: SystemScore(
                type=system_type,
                total_score=rounded[system_type],
                criteria=criteria_by_type[system_type],
                ranking=rankings[system_type],
                recommendation=score_recommendation(totals[system_type]),
            )
            for system_type in analyses
        }

    @staticmethod
    def _ranked(scores: dict[SystemType, SystemScore]) -> list[SystemScore]:
        return sorted(scores.values(), key=lambda score: score.ranking)

    def select_optimal_system(self, scores: dict[SystemType, SystemScore]) -> SelectedSystem:
        best = self._ranked(scores)[0]
        return SelectedSystem(
            type=best.type,
            score=best,
            confidence=score_confidence(best.total_score),
            reasoning=selection_reasoning(best.criteria),
        )

    def compare_systems(
        self,
        analyses: dict[SystemType, SystemAnalysis],
        scores: dict[SystemType, SystemScore],
    ) -> SystemComparison:
        ranked = self._ranked(scores)
        totals = [score.total_score for score in ranked]

        detailed = {}
        for system_type, analysis in analyses.items():
            score = scores[system_type]
            detailed[system_type.value] = ComparisonEntry(
                type=system_type,
                score=score.total_score,
                ranking=score.ranking,
                recommendation=score.recommendation,
                efficiency=analysis.efficiency,
                cost_per_hectare=analysis.cost_per_hectare,
                total_cost=analysis.total_cost,
                suitability_score=analysis.suitability_score,
                pros=analysis.advantages[:TOP_N_PROS_CONS],
                cons=analysis.disadvantages[:TOP_N_PROS_CONS],
                best_for=SYSTEM_DESCRIPTIONS[system_type].best_for,
                investment_level=investment_level(analysis.cost_per_hectare),
            )

        return SystemComparison(
            summary=ComparisonSummary(
                total_systems=len(analyses),
                best_system=ranked[0].type,
                highest_score=max(totals),
                lowest_score=min(totals),
            ),
            detailed_comparison=detailed,
            recommendations=self._comparison_recommendations(analyses, ranked),
        )

    @staticmethod
    def _comparison_recommendations(
        analyses: dict[SystemType, SystemAnalysis],
        ranked: list[SystemScore],
    ) -> tuple[ComparisonRecommendation, ...]:
        best = ranked[0]
        recommendations = [
            ComparisonRecommendation(
                type="primary",
                title=f"{_title(best.type)} System Recommended",
                description=f"Score: {best.total_score}/100 - {best.recommendation}",
                reasoning=", ".join(selection_reasoning(best.criteria)),
                criteria=best.criteria,
            )
        ]

        if len(ranked) > 1:
            runner_up = ranked[1]
            difference = best.total_score - runner_up.total_score
            if difference < ALTERNATIVE_SCORE_GAP:
                recommendations.append(
                    ComparisonRecommendation(
                        type="alternative",
                        title=f"Consider {_title(runner_up.type)} as Alternative",
                        description=(
                            f"Score: {runner_up.total_score}/100 - "
                            f"Only {difference} points difference"
                        ),
                        reasoning="Close scoring suggests both systems are viable options",
                    )
                )

        # min() returns the first minimum, so cost ties keep catalog order
        cheapest = min(analyses.values(), key=lambda analysis: analysis.total_cost)
        if cheapest.type != best.type:
            recommendations.append(
                ComparisonRecommendation(
                    type="budget",
                    title=f"Budget Option: {_title(cheapest.type)}",
                    description=f"Lowest cost: ${format_amount(cheapest.total_cost)}",
                    reasoning="Consider if budget constraints are primary concern",
                )
            )

        return tuple(recommendations)

    def implementation_plan(self, selected: SelectedSystem, field: FieldConfig) -> ImplementationPlan:
        """Four-phase plan: planning, site preparation, installation, commissioning.

        Total duration assumes 20 % overlap between phases:
        ``round(0.8 x sum_of_upper_bounds)-sum_of_upper_bounds weeks``.
        """
        description = SYSTEM_DESCRIPTIONS[selected.type]
        area = field.area

        prep_low, prep_high = description.site_preparation_weeks
        if area > 10:
            prep_low, prep_high = prep_low + 1, prep_high + 1
        install_low = description.installation_base_weeks + math.floor(area / 5)
        install_high = install_low + 2

        phase_weeks = [(2, 4), (prep_low, prep_high), (install_low, install_high), (1, 2)]
        phases = (
            ImplementationPhase(
                phase=1,
                title="Planning and Design",
                duration=_weeks(*phase_weeks[0]),
                tasks=(
                    "Detailed site survey and soil analysis",
                    "System design and component specification",
                    "Permit applications and approvals",
                    "Contractor selection and quotes",
                ),
                cost=selected.score.criteria.cost_effectiveness * 100,
                deliverables=(
                    "System design drawings",
                    "Component specifications",
                    "Installation timeline",
                ),
            ),
            ImplementationPhase(
                phase=2,
                title="Site Preparation",
                duration=_weeks(*phase_weeks[1]),
                tasks=COMMON_SITE_PREPARATION_TASKS + description.site_preparation_tasks,
                cost=area * self.config.site_preparation_cost_per_ha,
                deliverables=("Prepared installation site", "Infrastructure ready"),
            ),
            ImplementationPhase(
                phase=3,
                title="System Installation",
                duration=_weeks(*phase_weeks[2]),
                tasks=description.installation_tasks,
                cost=selected.score.total_score * 50,
                deliverables=("Installed irrigation system", "Initial system testing"),
            ),
            ImplementationPhase(
                phase=4,
                title="Testing and Commissioning",
                duration=_weeks(*phase_weeks[3]),
                tasks=(
                    "System pressure testing",
                    "Flow rate calibration",
                    "Automation setup and testing",
                    "Operator training",
                ),
                cost=self.config.commissioning_cost,
                deliverables=(
                    "Commissioned system",
                    "Training documentation",
                    "Warranty activation",
                ),
            ),
        )

        total_weeks = sum(high for _, high in phase_weeks)
        risks = list(description.risk_factors)
        if area > LARGE_FIELD_HA:
            risks.append("Large scale coordination challenges")

        return ImplementationPlan(
            phases=phases,
            total_duration=_weeks(round_int(total_weeks * PHASE_OVERLAP), total_weeks),
            total_cost=round_int(sum(phase.cost for phase in phases)),
            critical_path=" → ".join(phase.title for phase in phases),
            risk_factors=tuple(risks),
        )

    @staticmethod
    def maintenance_schedule(system_type: SystemType) -> MaintenanceSchedule:
        return SYSTEM_DESCRIPTIONS[system_type].maintenance

    def performance_metrics(self, analysis: SystemAnalysis) -> PerformanceMetrics:
        """Expected operating performance of the selected system.

        Application efficiency is taken as 95 % of the water use efficiency;
        the overall score averages water use efficiency with the catalog's
        uniformity, energy and labour ratings.
        """
        profile = self.catalog.get(analysis.type.value)
        efficiency_pct = analysis.efficiency * 100
        overall = (
            efficiency_pct
            + profile.distribution_uniformity
            + profile.energy_efficiency
            + profile.labor_efficiency
        ) / 4
        return PerformanceMetrics(
            water_use_efficiency=round_int(efficiency_pct),
            application_efficiency=round_int(analysis.efficiency * 95),
            distribution_uniformity=profile.distribution_uniformity,
            energy_efficiency=profile.energy_efficiency,
            labor_efficiency=profile.labor_efficiency,
            overall_score=round_int(overall),
        )

    def recommend(
        self,
        soil: SoilProfile,
        irrigation: IrrigationRequirement,
        field: FieldConfig,
    ) -> SystemRecommendation:
        """Analyse, score and rank all systems and plan the winner."""
        analyses = self.analyze_systems(soil, irrigation, field)
        scores = self.score_systems(analyses)
        selected = self.select_optimal_system(scores)

        ranking = ", ".join(f"{s.type.value}={s.total_score}" for s in self._ranked(scores))
        logger.info(
            f"Recommended {selected.type.value} irrigation "
            f"(confidence {selected.confidence}; scores: {ranking})"
        )

        return SystemRecommendation(
            recommended_system=selected.type,
            recommended_details=selected,
            system_analysis={t.value: a for t, a in analyses.items()},
            system_scores={t.value: s for t, s in scores.items()},
            system_comparison=self.compare_systems(analyses, scores),
            implementation_plan=self.implementation_plan(selected, field),
            maintenance_schedule=self.maintenance_schedule(selected.type),
            performance_metrics=self.performance_metrics(analyses[selected.type]),
        )


def _rule_suitability(system_type: SystemType, area: float) -> str:
    if system_type == SystemType.DRIP:
        if area < 5:
            return "High"
        return "Medium" if area < 20 else "Low"
    if system_type == SystemType.SPRINKLER:
        return "High" if area > 2 else "Medium"
    return "Medium" if area > 10 else "Low"


def recommend_system_by_rules(
    soil: SoilProfile,
    field: FieldConfig,
    catalog: SystemCatalog,
) -> RuleBasedRecommendation:
    """Quick rule-based system recommendation.

    Rules, first match wins:
        sandy texture label and Ks > 25 -> drip (efficiency 0.90)
        Ks < 5                          -> surface (0.60)
        area > 10 ha                    -> sprinkler (0.75)
        otherwise                       -> drip (0.85, moderate conditions)

    Args:
        soil: Soil profile; ``texture_class`` label and saturated conductivity are used
        field: Field geometry
        catalog: System costs and efficiencies

    Returns:
        RuleBasedRecommendation with the other two systems as alternatives.
    """
    ks = soil.saturated_conductivity
    if "sand" in soil.texture_class.lower() and ks > 25:
        system_type, efficiency = SystemType.DRIP, catalog.get("drip").efficiency
        reason = "Sandy soil with high infiltration rate - drip irrigation recommended"
    elif ks < 5:
        system_type, efficiency = SystemType.SURFACE, catalog.get("surface").efficiency
        reason = "Low infiltration rate - surface irrigation suitable"
    elif field.area > 10:
        system_type, efficiency = SystemType.SPRINKLER, catalog.get("sprinkler").efficiency
        reason = "Large field area - sprinkler system efficient"
    else:
        system_type, efficiency = SystemType.DRIP, 0.85
        reason = "Medium field with moderate infiltration - drip system optimal"

    cost_per_hectare = catalog.get(system_type.value).cost_per_hectare
    alternatives = tuple(
        AlternativeSystem(
            type=SystemType(name),
            efficiency=catalog.get(name).efficiency,
            estimated_cost=catalog.get(name).cost_per_hectare * field.area,
            suitability=_rule_suitability(SystemType(name), field.area),
        )
        for name in catalog.priority
        if name != system_type.value
    )

    return RuleBasedRecommendation(
        recommended_system=system_type,
        efficiency=efficiency,
        estimated_cost=round_int(cost_per_hectare * field.area),
        cost_per_hectare=cost_per_hectare,
        reasoning=(reason,),
        alternatives=alternatives,
    )
