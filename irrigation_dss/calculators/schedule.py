"""Four-week irrigation calendar and headline management recommendations."""

from irrigation_dss.calculators.rounding import format_amount, round_int
from irrigation_dss.models.results import (
    ActionRecommendation,
    IrrigationRequirement,
    IrrigationSchedule,
    RuleBasedRecommendation,
    ScheduleEntry,
    WaterEconomics,
)

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
SCHEDULE_WEEKS = 4
# Duration assumes a nominal 10 mm/hr application rate
NOMINAL_RATE_MM_HR = 10.0
ECONOMIC_HIGHLIGHT_ROI = 50


def _fmt(value: float) -> str:
    return f"{value:g}"


def generate_irrigation_schedule(irrigation: IrrigationRequirement) -> IrrigationSchedule:
    """Lay out one irrigation per week for four weeks.

    The irrigation day for week ``n`` is ``round(frequency x (n - 1)) mod 7``,
    with 0 mapped to 7 (Saturday); days are numbered 1 = Sunday.
    """
    depth = irrigation.irrigation_depth
    entries = []
    for week in range(1, SCHEDULE_WEEKS + 1):
        irrigation_day = round_int(irrigation.frequency * (week - 1)) % 7 or 7
        entries.append(
            ScheduleEntry(
                week=week,
                irrigation_day=irrigation_day,
                day_name=DAY_NAMES[irrigation_day - 1],
                depth=depth,
                duration_minutes=round_int(depth / NOMINAL_RATE_MM_HR * 60),
                notes=f"Apply {_fmt(depth)}mm irrigation",
            )
        )

    return IrrigationSchedule(
        entries=tuple(entries),
        frequency=f"Every {irrigation.frequency} days",
        optimal_timing="Early morning (6-8 AM) for best efficiency",
        seasonal_adjustments="Increase frequency by 20% in summer, decrease by 30% in winter",
    )


def generate_recommendations(
    irrigation: IrrigationRequirement,
    system: RuleBasedRecommendation,
    economics: WaterEconomics,
) -> tuple[ActionRecommendation, ...]:
    """Headline recommendations: irrigation management, system design and,
    when the 10-year ROI exceeds 50 %, an economic highlight."""
    recommendations = [
        ActionRecommendation(
            category="Irrigation Management",
            priority="High",
            title=f"Apply {_fmt(irrigation.irrigation_depth)}mm every {irrigation.frequency} days",
            description=(
                "Based on soil water holding capacity and crop water requirements, "
                "irrigate when 50% of available water is depleted."
            ),
            implementation="Monitor soil moisture and adjust timing based on weather conditions.",
        ),
        ActionRecommendation(
            category="System Design",
            priority="High",
            title=f"{system.recommended_system.value.capitalize()} irrigation system recommended",
            description=(
                f"This system offers {round_int(system.efficiency * 100)}% efficiency "
                "and is optimal for your soil conditions."
            ),
            implementation=f"Estimated investment: ${format_amount(system.estimated_cost)}",
        ),
    ]

    if economics.roi > ECONOMIC_HIGHLIGHT_ROI:
        payback = _fmt(economics.payback_period) if economics.payback_period is not None else "n/a"
        recommendations.append(
            ActionRecommendation(
                category="Economic",
                priority="Medium",
                title=f"Excellent ROI potential: {economics.roi}%",
                description=(
                    f"Investment will pay back in {payback} years with annual savings "
                    f"of ${format_amount(economics.annual_cost_savings)}."
                ),
                implementation="Consider financing options to accelerate implementation.",
            )
        )

    return tuple(recommendations)
