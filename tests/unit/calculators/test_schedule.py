"""Unit tests for the irrigation calendar and headline recommendations."""

import pytest

from irrigation_dss.calculators.schedule import generate_irrigation_schedule, generate_recommendations
from irrigation_dss.models.enums import SystemType
from irrigation_dss.models.results import (
    IrrigationRequirement,
    RuleBasedRecommendation,
    WaterEconomics,
)


def _requirement(depth: float = 60.0, frequency: int = 9) -> IrrigationRequirement:
    return IrrigationRequirement(
        irrigation_depth=depth,
        frequency=frequency,
        max_application_rate=12.0,
        application_time=5.0,
        total_available_water=120.0,
        paw_used=12.0,
        root_depth_used=1000.0,
    )


def _system() -> RuleBasedRecommendation:
    return RuleBasedRecommendation(
        recommended_system=SystemType.DRIP,
        efficiency=0.85,
        estimated_cost=17500,
        cost_per_hectare=3500,
        reasoning=("Medium field with moderate infiltration - drip system optimal",),
        alternatives=(),
    )


def _economics(roi: int, payback: float | None = 0.6) -> WaterEconomics:
    return WaterEconomics(
        annual_water_savings=12300,
        annual_cost_savings=31750,
        payback_period=payback,
        roi=roi,
        water_cost_savings=30750,
        yield_value_increase=1000,
        annual_water_use=123000,
    )


class TestIrrigationSchedule:
    """Tests for the four-week calendar."""

    def test_nine_day_interval(self):
        """Test day = round(9 x (week - 1)) mod 7, with 0 mapped to Saturday."""
        schedule = generate_irrigation_schedule(_requirement())

        assert [e.irrigation_day for e in schedule.entries] == [7, 2, 4, 6]
        assert [e.day_name for e in schedule.entries] == ["Saturday", "Monday", "Wednesday", "Friday"]
        assert [e.week for e in schedule.entries] == [1, 2, 3, 4]

    def test_entry_details(self):
        """Test depth, duration at 10 mm/hr and notes."""
        entry = generate_irrigation_schedule(_requirement()).entries[0]

        assert entry.depth == 60.0
        assert entry.duration_minutes == 360
        assert entry.notes == "Apply 60mm irrigation"

    def test_fractional_depth_notes(self):
        """Test fractional depths are kept in the notes."""
        schedule = generate_irrigation_schedule(_requirement(depth=37.5, frequency=7))

        assert schedule.entries[0].notes == "Apply 37.5mm irrigation"
        assert schedule.entries[0].duration_minutes == 225
        assert {e.irrigation_day for e in schedule.entries} == {7}

    def test_schedule_labels(self):
        """Test the frequency and timing guidance."""
        schedule = generate_irrigation_schedule(_requirement())

        assert schedule.frequency == "Every 9 days"
        assert schedule.optimal_timing.startswith("Early morning")


class TestRecommendations:
    """Tests for headline text recommendations."""

    def test_high_roi_adds_economic_highlight(self):
        """Test three recommendations when ROI exceeds 50%."""
        recommendations = generate_recommendations(_requirement(), _system(), _economics(1714))

        assert [r.category for r in recommendations] == [
            "Irrigation Management",
            "System Design",
            "Economic",
        ]
        assert recommendations[0].title == "Apply 60mm every 9 days"
        assert recommendations[1].title == "Drip irrigation system recommended"
        assert recommendations[1].implementation == "Estimated investment: $17,500"
        assert "85% efficiency" in recommendations[1].description
        assert recommendations[2].title == "Excellent ROI potential: 1714%"
        assert "pay back in 0.6 years" in recommendations[2].description
        assert "$31,750" in recommendations[2].description

    @pytest.mark.parametrize("roi", [50, 12, -40])
    def test_low_roi_omits_economic_highlight(self, roi):
        """Test the economic highlight needs ROI strictly above 50%."""
        recommendations = generate_recommendations(_requirement(), _system(), _economics(roi))
        assert len(recommendations) == 2
