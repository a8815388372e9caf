"""Unit tests for input and result models."""

import pytest


def test_soil_profile_validation():
    """Test SoilProfile validates ranges and water retention consistency."""
    from irrigation_dss.models import SoilProfile

    soil = SoilProfile(
        sand=40, clay=20, field_capacity=25, wilting_point=12, saturated_conductivity=15
    )
    assert soil.silt is None
    assert soil.electrical_conductivity is None

    # Wilting point above field capacity
    with pytest.raises(ValueError, match="cannot exceed field capacity"):
        SoilProfile(sand=40, clay=20, field_capacity=10, wilting_point=12, saturated_conductivity=15)

    # Negative conductivity
    with pytest.raises(ValueError):
        SoilProfile(sand=40, clay=20, field_capacity=25, wilting_point=12, saturated_conductivity=-1)


def test_soil_texture_must_sum_to_100():
    """Test sand + clay + silt must be close to 100% when silt is given."""
    from irrigation_dss.models import SoilProfile

    with pytest.raises(ValueError, match="must sum to ~100%"):
        SoilProfile(
            sand=40, clay=20, silt=10, field_capacity=25, wilting_point=12, saturated_conductivity=15
        )


def test_models_accept_camel_case_keys():
    """Test input models accept the camelCase API payload keys."""
    from irrigation_dss.models import CropProfile, SoilProfile

    soil = SoilProfile.model_validate(
        {
            "sand": 45,
            "clay": 25,
            "fieldCapacity": 22,
            "wiltingPoint": 10,
            "saturatedConductivity": 12,
            "electricalConductivity": 3.1,
        }
    )
    assert soil.saturated_conductivity == 12
    assert soil.electrical_conductivity == 3.1

    crop = CropProfile.model_validate({"name": "Wheat", "kcPeriods": [{"periodName": "mid", "kcValue": 1.1}]})
    assert crop.kc_periods[0].kc_value == 1.1


def test_field_area_must_be_positive():
    """Test FieldConfig rejects a zero area."""
    from irrigation_dss.models import FieldConfig

    assert FieldConfig(area=2).slope == 0.0
    with pytest.raises(ValueError):
        FieldConfig(area=0)


def test_models_are_frozen(loam_soil):
    """Test input models are immutable."""
    from pydantic import ValidationError

    with pytest.raises(ValidationError):
        loam_soil.sand = 10


def test_degraded_salt_assessment():
    """Test the degraded salt assessment carries the safe defaults."""
    from irrigation_dss.models import SaltAssessment
    from irrigation_dss.models.enums import AssessmentStatus, BalanceStatus, RiskLevel

    assessment = SaltAssessment.degraded("boom")

    assert assessment.is_degraded
    assert assessment.status == AssessmentStatus.DEGRADED
    assert assessment.leaching_required is False
    assert assessment.drainage_required is False
    assert assessment.balance_status == BalanceStatus.STABLE
    assert assessment.summary.overall_risk == RiskLevel.LOW
    assert assessment.summary.priority_actions == ("Monitor soil salinity regularly",)
    assert assessment.summary.economic_impact.total_cost == 0
    assert assessment.leaching is None
    assert assessment.error == "boom"


def test_result_models_dump_camel_case():
    """Test result models serialize with camelCase aliases."""
    from irrigation_dss.models.results import BreakdownPercentages, ROICalculation

    roi = ROICalculation(
        total_investment=10000,
        annual_savings=1925,
        water_savings=625,
        yield_increase=1000,
        labor_savings=300,
        roi_1_year=-81,
        roi_5_year=-4,
        roi_10_year=93,
        breakdown_percentages=BreakdownPercentages(water=32, yield_increase=52, labor=16),
    )
    dumped = roi.model_dump(by_alias=True)

    assert dumped["roi1Year"] == -81
    assert dumped["roi10Year"] == 93
    assert dumped["totalInvestment"] == 10000
    assert dumped["breakdownPercentages"]["yieldIncrease"] == 52
