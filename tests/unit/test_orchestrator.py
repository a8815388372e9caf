"""Unit tests for the decision support orchestrator."""

import logging

import pytest

from irrigation_dss import DSSCalculationError, DomainError, calculate_irrigation_recommendations
from irrigation_dss.models import CropProfile, EnvironmentalConditions, KcPeriod, SoilProfile
from irrigation_dss.models.enums import AssessmentStatus, SystemType
from irrigation_dss.orchestrator import DSSOrchestrator
from irrigation_dss.repositories import InMemoryCropDataSource
from irrigation_dss.validation import LeachingInputError


@pytest.fixture
def orchestrator() -> DSSOrchestrator:
    return DSSOrchestrator()


class TestCalculateIrrigationRecommendations:
    """Tests for the main calculation chain."""

    def test_headline_fields(self, orchestrator, loam_soil, tomato_crop, field_5ha, temperate_environment):
        """Test headline fields come from the stage results."""
        result = orchestrator.calculate_irrigation_recommendations(
            loam_soil, tomato_crop, field_5ha, temperate_environment
        )

        assert result.etc_calculated == pytest.approx(6.73, abs=0.01)
        assert result.irrigation_depth == 60.0
        assert result.irrigation_frequency == 9
        assert result.max_application_rate == 12.0
        assert result.system_recommendation == SystemType.DRIP
        assert result.system_efficiency == 0.85
        assert result.system_cost == 17500
        assert result.economic_roi == 1714
        assert result.payback_period == 0.6
        assert result.system_recommendations_enhanced == SystemType.SPRINKLER
        assert result.economic_analysis_basic.total_investment == 10000
        assert result.salt_management.status == AssessmentStatus.COMPUTED
        assert len(result.recommendations) == 3
        assert len(result.schedule_data.entries) == 4

    def test_dict_inputs(self, orchestrator, loam_request):
        """Test camelCase dict payloads are validated into models."""
        result = orchestrator.calculate_irrigation_recommendations(
            loam_request["soil"], loam_request["crop"], loam_request["field"], loam_request["environment"]
        )

        assert result.etc_calculated == pytest.approx(6.73, abs=0.01)
        assert result.etc_breakdown.kc_period_used == "mid-season"

    def test_invalid_input_raises(self, orchestrator, loam_request):
        """Test invalid payloads fail in the validation stage."""
        soil = dict(loam_request["soil"], wiltingPoint=40)

        with pytest.raises(DSSCalculationError) as exc_info:
            orchestrator.calculate_irrigation_recommendations(
                soil, loam_request["crop"], loam_request["field"], loam_request["environment"]
            )

        assert exc_info.value.stage == "validate_inputs"
        assert str(exc_info.value).startswith("DSS calculation failed:")

    def test_zero_conductivity_raises(self, orchestrator, tomato_crop, field_5ha, temperate_environment):
        """Test a domain failure is wrapped with its stage and cause."""
        soil = SoilProfile(
            sand=10, clay=60, field_capacity=40, wilting_point=25, saturated_conductivity=0
        )

        with pytest.raises(DSSCalculationError) as exc_info:
            orchestrator.calculate_irrigation_recommendations(
                soil, tomato_crop, field_5ha, temperate_environment
            )

        error = exc_info.value
        assert error.stage == "irrigation_requirement"
        assert isinstance(error.__cause__, DomainError)
        assert "Saturated conductivity must be positive" in str(error)

    def test_zero_etc_raises(self, orchestrator, loam_soil, field_5ha, temperate_environment):
        """Test a zero crop coefficient cannot produce an irrigation interval."""
        crop = CropProfile(kc_periods=(KcPeriod(period_name="mid", kc_value=0),))

        with pytest.raises(DSSCalculationError, match="ETc must be positive"):
            orchestrator.calculate_irrigation_recommendations(
                loam_soil, crop, field_5ha, temperate_environment
            )

    def test_salt_failure_degrades(self, orchestrator, loam_soil, tomato_crop, field_5ha, caplog):
        """Test a salt management failure keeps the irrigation result."""
        environment = EnvironmentalConditions(
            et0=6.5, climate_zone="temperate", irrigation_method="drip", growth_stage="mid",
            irrigation_water_ec=20, crop_threshold_ec=2,
        )

        with caplog.at_level(logging.ERROR, logger="irrigation_dss"):
            result = orchestrator.calculate_irrigation_recommendations(
                loam_soil, tomato_crop, field_5ha, environment
            )

        salt = result.salt_management
        assert salt.is_degraded
        assert salt.leaching is None
        assert salt.summary.priority_actions == ("Monitor soil salinity regularly",)
        assert "Water EC too high" in salt.error
        assert result.irrigation_depth == 60.0
        assert "Salt management calculation failed" in caplog.text

    def test_salt_engine_errors_are_not_raised(
        self, orchestrator, loam_soil, tomato_crop, field_5ha, monkeypatch
    ):
        """Test unexpected salt engine errors are also degraded."""

        def fail(*args):
            raise LeachingInputError([])

        monkeypatch.setattr(orchestrator.salt_engine, "assess", fail)
        result = orchestrator.calculate_irrigation_recommendations(
            loam_soil, tomato_crop, field_5ha, EnvironmentalConditions(et0=5)
        )

        assert result.salt_management.status == AssessmentStatus.DEGRADED

    def test_stage_timings_logged(
        self, orchestrator, loam_soil, tomato_crop, field_5ha, temperate_environment, caplog
    ):
        """Test each stage logs its timing."""
        with caplog.at_level(logging.INFO, logger="irrigation_dss"):
            orchestrator.calculate_irrigation_recommendations(
                loam_soil, tomato_crop, field_5ha, temperate_environment
            )

        assert "[timing] evapotranspiration" in caplog.text
        assert "[timing] salt_management" in caplog.text

    def test_report_dict(self, orchestrator, loam_soil, tomato_crop, field_5ha, temperate_environment):
        """Test the report mapping uses the report layer's camelCase keys."""
        report = orchestrator.calculate_irrigation_recommendations(
            loam_soil, tomato_crop, field_5ha, temperate_environment
        ).to_report_dict()

        assert report["economicROI"] == 1714
        assert report["etcCalculated"] == pytest.approx(6.73, abs=0.01)
        assert report["systemRecommendation"] == "drip"
        assert report["saltManagement"]["status"] == "computed"
        assert report["roiCalculation"]["roi10Year"] == 93
        assert report["waterSavingsAnalysis"]["cumulativeSavings10Year"] > 0
        assert "sprinkler" in report["systemRecommendationsDetailed"]["systemScores"]


class TestCalculateForCrop:
    """Tests for crop lookup through the data source."""

    def test_resolves_crop(self, tomato_crop, loam_soil, field_5ha, temperate_environment):
        """Test the crop is resolved before running."""
        orchestrator = DSSOrchestrator(crop_source=InMemoryCropDataSource([tomato_crop]))

        result = orchestrator.calculate_for_crop("tomato", loam_soil, field_5ha, temperate_environment)

        assert result.etc_breakdown.base_kc == 1.15

    def test_narrows_kc_periods(self, loam_soil, field_5ha, temperate_environment):
        """Test zone and method specific periods are preferred."""
        crop = CropProfile(
            id="cucumber",
            kc_periods=(
                KcPeriod(period_name="mid", kc_value=1.2, climate_zone="gcc_arid"),
                KcPeriod(period_name="mid", kc_value=1.0, climate_zone="temperate", irrigation_method="drip"),
            ),
        )
        orchestrator = DSSOrchestrator(crop_source=InMemoryCropDataSource([crop]))

        result = orchestrator.calculate_for_crop("cucumber", loam_soil, field_5ha, temperate_environment)

        assert result.etc_breakdown.base_kc == 1.0

    def test_requires_source(self, orchestrator, loam_soil, field_5ha, temperate_environment):
        """Test a missing data source is reported."""
        with pytest.raises(ValueError, match="No crop data source configured"):
            orchestrator.calculate_for_crop("tomato", loam_soil, field_5ha, temperate_environment)

    def test_unknown_crop(self, loam_soil, field_5ha, temperate_environment):
        """Test unknown crops raise KeyError."""
        orchestrator = DSSOrchestrator(crop_source=InMemoryCropDataSource())

        with pytest.raises(KeyError):
            orchestrator.calculate_for_crop("tomato", loam_soil, field_5ha, temperate_environment)


def test_module_level_function(loam_soil, tomato_crop, field_5ha, temperate_environment):
    """Test the convenience function uses the default configuration."""
    result = calculate_irrigation_recommendations(loam_soil, tomato_crop, field_5ha, temperate_environment)
    assert result.irrigation_frequency == 9
