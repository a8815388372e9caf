"""End-to-end tests running the full decision support chain.

The loam and clay fields exercise the two main branches of the rule-based
recommendation (drip for moderate conditions, surface for slow infiltration)
and the multi-criteria ranking that can disagree with it.
"""

import json

import pandas as pd
import pytest

from irrigation_dss import DSSOrchestrator
from irrigation_dss.models.enums import AssessmentStatus, BalanceStatus, RiskLevel, SystemType
from irrigation_dss.outputs import CsvOutput


@pytest.fixture
def loam_result(loam_soil, tomato_crop, field_5ha, temperate_environment):
    return DSSOrchestrator().calculate_irrigation_recommendations(
        loam_soil, tomato_crop, field_5ha, temperate_environment
    )


@pytest.fixture
def clay_result(clay_soil, tomato_crop, field_5ha, temperate_environment):
    return DSSOrchestrator().calculate_irrigation_recommendations(
        clay_soil, tomato_crop, field_5ha, temperate_environment
    )


class TestLoamField:
    """Loam soil, 5 ha, temperate zone, drip method."""

    def test_water_requirement(self, loam_result):
        assert loam_result.etc_calculated == pytest.approx(6.73, abs=0.01)
        assert loam_result.etc_breakdown.kc_used == pytest.approx(1.04)
        assert loam_result.irrigation_depth == 60.0
        assert loam_result.irrigation_frequency == 9
        assert loam_result.irrigation_breakdown.application_time == 5.0

    def test_rule_based_recommendation(self, loam_result):
        assert loam_result.system_recommendation == SystemType.DRIP
        assert loam_result.system_efficiency == 0.85
        assert loam_result.system_cost == 17500
        assert loam_result.annual_water_savings == 12300
        assert loam_result.annual_cost_savings == 31750
        assert loam_result.payback_period == 0.6
        assert loam_result.economic_roi == 1714

    def test_scoring_prefers_sprinkler(self, loam_result):
        """Test the weighted scoring ranks sprinkler above the rule-based choice."""
        detailed = loam_result.system_recommendations_detailed
        scores = {name: score.total_score for name, score in detailed.system_scores.items()}

        assert detailed.recommended_system == SystemType.SPRINKLER
        assert scores == {"drip": 79, "sprinkler": 80, "surface": 73}
        assert detailed.recommended_details.confidence == "High"

    def test_economic_analysis(self, loam_result):
        summary = loam_result.economic_analysis_basic
        roi = loam_result.roi_calculation

        assert summary.total_investment == 10000
        assert summary.annual_savings == 1925
        assert (roi.roi_1_year, roi.roi_5_year, roi.roi_10_year) == (-81, -4, 93)
        assert loam_result.payback_analysis.payback_period == 5.2
        assert loam_result.payback_analysis.discounted_payback == 7
        assert summary.recommendation == "Recommended - Good financial returns"

    def test_water_savings(self, loam_result):
        water = loam_result.water_savings_analysis
        assert water.annual_water_saved == 30750
        assert water.annual_cost_savings == 76875
        assert water.percentage_reduction == 20

    def test_schedule(self, loam_result):
        days = [entry.irrigation_day for entry in loam_result.schedule_data.entries]
        assert days == [7, 2, 4, 6]
        assert loam_result.schedule_data.frequency == "Every 9 days"

    def test_salt_management(self, loam_result):
        salt = loam_result.salt_management

        assert salt.status == AssessmentStatus.COMPUTED
        assert salt.leaching.leaching_fraction == pytest.approx(0.2195, abs=1e-4)
        assert salt.drainage_required is False
        assert salt.balance_status == BalanceStatus.CRITICAL
        assert salt.summary.overall_risk == RiskLevel.MEDIUM

    def test_investment_is_consistent(self, loam_result):
        investment = loam_result.roi_calculation.total_investment
        assert loam_result.economic_analysis_basic.total_investment == investment
        assert loam_result.cost_benefit_analysis.total_investment == investment

    def test_repeated_runs_are_identical(
        self, loam_result, loam_soil, tomato_crop, field_5ha, temperate_environment
    ):
        again = DSSOrchestrator().calculate_irrigation_recommendations(
            loam_soil, tomato_crop, field_5ha, temperate_environment
        )
        assert again.to_report_dict() == loam_result.to_report_dict()

    def test_report_is_json_serialisable(self, loam_result):
        report = loam_result.to_report_dict()

        decoded = json.loads(json.dumps(report))

        assert decoded["systemRecommendationsEnhanced"] == "sprinkler"
        assert decoded["paybackAnalysis"]["discountedPayback"] == 7
        assert len(decoded["paybackAnalysis"]["cashFlowProjection"]) == 10


class TestClayField:
    """Clay soil with slow infiltration on the same field."""

    def test_rule_based_recommends_surface(self, clay_result):
        assert clay_result.system_recommendation == SystemType.SURFACE
        assert clay_result.system_efficiency == 0.6
        assert clay_result.system_cost == 4000
        assert clay_result.max_application_rate == 1.5

    def test_surface_has_no_water_savings(self, clay_result):
        """Test the baseline-efficiency system saves no water and pays back on yield alone."""
        assert clay_result.annual_water_savings == 0
        assert clay_result.annual_cost_savings == 1000
        assert clay_result.payback_period == 4.0
        assert clay_result.economic_roi == 150

    def test_scoring_ranks_surface_first(self, clay_result):
        detailed = clay_result.system_recommendations_detailed
        scores = {name: score.total_score for name, score in detailed.system_scores.items()}

        assert detailed.recommended_system == SystemType.SURFACE
        assert scores == {"drip": 76, "sprinkler": 77, "surface": 79}

    def test_economic_analysis(self, clay_result):
        roi = clay_result.roi_calculation

        assert roi.annual_savings == 1150
        assert roi.water_savings == 0
        assert roi.roi_10_year == 188
        assert clay_result.payback_analysis.payback_period == 3.5
        assert clay_result.payback_analysis.months_to_payback == 42
        assert clay_result.payback_analysis.discounted_payback == 4
        assert clay_result.economic_analysis_basic.recommendation == (
            "Highly Recommended - Excellent financial returns"
        )

    def test_salt_management_computed(self, clay_result):
        assert clay_result.salt_management.status == AssessmentStatus.COMPUTED


class TestCsvExport:
    """Writing a full result to CSV."""

    def test_writes_comparison_and_cash_flow(self, loam_result, tmp_path):
        output_path = tmp_path / "reports" / "loam.csv"

        CsvOutput().write(loam_result, output_path)

        comparison = pd.read_csv(output_path)
        cash_flow = pd.read_csv(tmp_path / "reports" / "loam_cash_flow.csv")
        assert comparison["system"].tolist() == ["sprinkler", "drip", "surface"]
        assert len(cash_flow) == 10
        assert cash_flow["cumulative_cash_flow"].iloc[0] == -8075
