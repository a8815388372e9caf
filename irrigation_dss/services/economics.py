"""Economic analysis of the recommended irrigation system.

ROI over 1/5/10 years, simple and discounted payback, cash-flow projection,
volume-based water cost savings and the summary recommendation label.
"""

import logging

import numpy as np

from irrigation_dss.calculators.rounding import round_half_away, round_int
from irrigation_dss.config import CONSTANTS, DssConfig
from irrigation_dss.models.domain import FieldConfig
from irrigation_dss.models.results import (
    BenefitLine,
    BreakdownPercentages,
    CashFlowPoint,
    CostBenefitAnalysis,
    EconomicResult,
    EconomicSummary,
    IrrigationRequirement,
    PaybackAnalysis,
    ROICalculation,
    RuleBasedRecommendation,
    SystemAnalysis,
    WaterCostSavings,
    WaterEconomics,
    WaterProjectionPoint,
)

logger = logging.getLogger(__name__)


def payback_rating(payback_years: float | None) -> str:
    if payback_years is None:
        return "Poor"
    if payback_years < 3:
        return "Excellent"
    if payback_years < 5:
        return "Good"
    if payback_years < 8:
        return "Fair"
    return "Poor"


def economic_recommendation(roi_10_year: float, payback_years: float | None) -> str:
    """Summary label from 10-year ROI and simple payback.

    An investment that never pays back (``payback_years`` None) always falls
    through to the last band.
    """
    if payback_years is not None:
        if roi_10_year > 100 and payback_years < 5:
            return "Highly Recommended - Excellent financial returns"
        if roi_10_year > 50 and payback_years < 7:
            return "Recommended - Good financial returns"
        if roi_10_year > 20 and payback_years < 10:
            return "Consider - Moderate financial returns"
    return "Evaluate Carefully - Limited financial returns"


def _irrigations_per_year(frequency_days: int) -> int:
    return round_int(CONSTANTS.DAYS_PER_YEAR / frequency_days)


def _annual_volume_m3(irrigation: IrrigationRequirement, area_ha: float) -> float:
    annual_depth_mm = irrigation.irrigation_depth * _irrigations_per_year(irrigation.frequency)
    return annual_depth_mm / CONSTANTS.MILLIMETRES_PER_METRE * area_ha * CONSTANTS.SQUARE_METRES_PER_HECTARE


class EconomicAnalyzer:
    """Economic analysis for an irrigation system investment.

    All baselines (water cost, yield value, labour cost, discount rate, water
    price and inflation) come from DssConfig.
    """

    def __init__(self, config: DssConfig):
        self.config = config

    def calculate_roi(self, system: SystemAnalysis, area: float) -> ROICalculation:
        """Annual savings breakdown and ROI over 1, 5 and 10 years.

        Formula:
            water_savings = area x water_cost_baseline x (efficiency - 0.6) / 0.6
            yield_increase = area x yield_value x 0.10
            labour_savings = area x labour_cost x labour_fraction[system]
            ROI_N = (savings x N - investment) / investment x 100

        Water savings are negative for systems less efficient than the
        baseline and are kept negative.
        """
        config = self.config
        investment = system.total_cost
        profile = config.systems.get(system.type.value)

        savings_fraction = (system.efficiency - config.baseline_efficiency) / config.baseline_efficiency
        water_savings = area * config.water_cost_baseline_per_ha * savings_fraction
        yield_increase = area * config.yield_value_per_ha * config.yield_improvement
        labor_savings = area * config.labor_cost_per_ha * profile.labor_savings_fraction
        total_savings = water_savings + yield_increase + labor_savings

        years = np.array([1, 5, 10])
        rois = (total_savings * years - investment) / investment * 100

        if total_savings == 0:
            breakdown = BreakdownPercentages(water=0, yield_increase=0, labor=0)
        else:
            breakdown = BreakdownPercentages(
                water=round_int(water_savings / total_savings * 100),
                yield_increase=round_int(yield_increase / total_savings * 100),
                labor=round_int(labor_savings / total_savings * 100),
            )

        return ROICalculation(
            total_investment=investment,
            annual_savings=round_int(total_savings),
            water_savings=round_int(water_savings),
            yield_increase=round_int(yield_increase),
            labor_savings=round_int(labor_savings),
            roi_1_year=round_int(float(rois[0])),
            roi_5_year=round_int(float(rois[1])),
            roi_10_year=round_int(float(rois[2])),
            breakdown_percentages=breakdown,
        )

    def cash_flow_projection(self, investment: float, annual_savings: float) -> tuple[CashFlowPoint, ...]:
        """Cumulative undiscounted cash flow, starting from -investment."""
        years = np.arange(1, self.config.projection_years + 1)
        cumulative = -investment + annual_savings * years
        return tuple(
            CashFlowPoint(
                year=int(year),
                annual_savings=annual_savings,
                cumulative_cash_flow=round_int(float(flow)),
                break_even=bool(flow >= 0),
            )
            for year, flow in zip(years, cumulative, strict=True)
        )

    def discounted_payback(self, investment: float, annual_savings: float) -> int:
        """First year whose cumulative discounted savings cover the investment.

        Searches years 1..payback_horizon_years; returns the horizon when the
        investment is never recovered.
        """
        horizon = self.config.payback_horizon_years
        if annual_savings <= 0:
            return horizon
        years = np.arange(1, horizon + 1)
        cumulative = np.cumsum(annual_savings / (1 + self.config.discount_rate) ** years)
        recovered = np.nonzero(cumulative >= investment)[0]
        return int(years[recovered[0]]) if recovered.size else horizon

    def calculate_payback(self, system: SystemAnalysis, roi: ROICalculation) -> PaybackAnalysis:
        """Simple and discounted payback on the rounded annual savings.

        When annual savings are not positive the investment never pays back:
        simple payback and months are None and the rating is "Poor".
        """
        investment = system.total_cost
        savings = roi.annual_savings

        if savings > 0:
            simple = investment / savings
            payback_period = round_half_away(simple, 1)
            months = round_int(simple * CONSTANTS.MONTHS_PER_YEAR)
        else:
            simple = payback_period = months = None

        return PaybackAnalysis(
            payback_period=payback_period,
            discounted_payback=self.discounted_payback(investment, savings),
            months_to_payback=months,
            payback_rating=payback_rating(simple),
            cash_flow_projection=self.cash_flow_projection(investment, savings),
        )

    def calculate_water_cost_savings(
        self,
        system: SystemAnalysis,
        irrigation: IrrigationRequirement,
        area: float,
    ) -> WaterCostSavings:
        """Volume-based water savings against the baseline-efficiency system.

        Formula:
            volume (m3/yr) = depth x round(365 / frequency) / 1000 x area x 10000
            baseline volume = volume x efficiency / baseline_efficiency
            (the volume a baseline-efficiency system needs to deliver the same water;
            the inverse ratio would report savings for a less efficient system)
            saved = baseline volume - volume
            year-N price = price x (1 + inflation)^(N - 1)
        """
        config = self.config
        volume = _annual_volume_m3(irrigation, area)
        baseline_volume = volume * system.efficiency / config.baseline_efficiency
        saved = baseline_volume - volume

        years = np.arange(1, config.projection_years + 1)
        prices = config.water_price_per_m3 * (1 + config.water_price_inflation) ** (years - 1)
        yearly = saved * prices
        cumulative = np.cumsum(yearly)

        projection = tuple(
            WaterProjectionPoint(
                year=int(year),
                water_saved=round_int(saved),
                cost_per_m3=round_half_away(float(price), 2),
                annual_savings=round_int(float(amount)),
                cumulative_savings=round_int(float(total)),
            )
            for year, price, amount, total in zip(years, prices, yearly, cumulative, strict=True)
        )

        reduction = saved / baseline_volume * 100 if baseline_volume else 0.0

        return WaterCostSavings(
            annual_water_saved=round_int(saved),
            annual_cost_savings=round_int(saved * config.water_price_per_m3),
            cumulative_savings_10_year=round_int(float(cumulative[-1])),
            efficiency_improvement=round_int((system.efficiency - config.baseline_efficiency) * 100),
            yearly_projection=projection,
            daily_water_saved=round_int(saved / CONSTANTS.DAYS_PER_YEAR),
            percentage_reduction=round_int(reduction),
        )

    @staticmethod
    def cost_benefit(
        roi: ROICalculation,
        water: WaterCostSavings,
        payback: PaybackAnalysis,
    ) -> CostBenefitAnalysis:
        breakdown = roi.breakdown_percentages
        return CostBenefitAnalysis(
            total_investment=roi.total_investment,
            annual_savings=roi.annual_savings,
            payback_period=payback.payback_period,
            roi_10_year=roi.roi_10_year,
            water_savings=BenefitLine(annual=water.annual_cost_savings, percentage=breakdown.water),
            yield_increase=BenefitLine(annual=roi.yield_increase, percentage=breakdown.yield_increase),
            labor_savings=BenefitLine(annual=roi.labor_savings, percentage=breakdown.labor),
            payback_risk=payback.payback_rating,
        )

    def analyze(
        self,
        system: SystemAnalysis,
        irrigation: IrrigationRequirement,
        field: FieldConfig,
    ) -> EconomicResult:
        """Full economic analysis for the selected system."""
        roi = self.calculate_roi(system, field.area)
        payback = self.calculate_payback(system, roi)
        water = self.calculate_water_cost_savings(system, irrigation, field.area)

        logger.info(
            f"Economics for {system.type.value}: investment {system.total_cost:.0f}, "
            f"annual savings {roi.annual_savings}, 10-year ROI {roi.roi_10_year}%"
        )

        return EconomicResult(
            roi_calculation=roi,
            payback_analysis=payback,
            water_savings=water,
            cost_benefit_analysis=self.cost_benefit(roi, water, payback),
            summary=EconomicSummary(
                total_investment=system.total_cost,
                annual_savings=roi.annual_savings,
                payback_years=payback.payback_period,
                roi_10_year=roi.roi_10_year,
                recommendation=economic_recommendation(roi.roi_10_year, payback.payback_period),
            ),
        )


def calculate_water_economics(
    system: RuleBasedRecommendation,
    irrigation: IrrigationRequirement,
    field: FieldConfig,
    config: DssConfig,
) -> WaterEconomics:
    """Volume-based economics for the rule-based system recommendation.

    Formula:
        use (m3/yr) = depth / 1000 x area x 10000 x round(365 / frequency)
        water saved = use x (1 - 0.6) x (efficiency - 0.6)
        savings = water saved x price + area x yield_value x 0.10
        payback = cost / savings
        ROI (10 yr) = (savings x 10 - cost) / cost x 100

    ``payback_period`` is None when savings are not positive.
    """
    baseline = config.baseline_efficiency
    annual_use = _annual_volume_m3(irrigation, field.area)
    water_saved = annual_use * (1 - baseline) * (system.efficiency - baseline)
    water_cost_savings = water_saved * config.water_price_per_m3
    yield_increase = field.area * config.yield_value_per_ha * config.yield_improvement
    total_savings = water_cost_savings + yield_increase

    cost = system.estimated_cost
    payback = round_half_away(cost / total_savings, 1) if total_savings > 0 else None
    roi = (total_savings * config.projection_years - cost) / cost * 100 if cost else 0.0

    return WaterEconomics(
        annual_water_savings=round_int(water_saved),
        annual_cost_savings=round_int(total_savings),
        payback_period=payback,
        roi=round_int(roi),
        water_cost_savings=round_int(water_cost_savings),
        yield_value_increase=round_int(yield_increase),
        annual_water_use=round_int(annual_use),
    )
