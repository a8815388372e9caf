"""Shared fixtures for decision support tests.

The loam scenario is the reference field used across the suite: a loam soil
under a mid-season vegetable crop in a temperate zone with drip irrigation.
"""

import pytest

from irrigation_dss.config import DssConfig, SaltConfig
from irrigation_dss.models import (
    CropProfile,
    EnvironmentalConditions,
    FieldConfig,
    KcPeriod,
    SoilProfile,
)


@pytest.fixture
def dss_config() -> DssConfig:
    return DssConfig()


@pytest.fixture
def salt_config() -> SaltConfig:
    return SaltConfig()


@pytest.fixture
def loam_soil() -> SoilProfile:
    return SoilProfile(
        sand=45,
        clay=25,
        silt=30,
        texture_class="Loam",
        saturated_conductivity=12,
        field_capacity=22,
        wilting_point=10,
    )


@pytest.fixture
def clay_soil() -> SoilProfile:
    return SoilProfile(
        sand=20,
        clay=55,
        silt=25,
        texture_class="Clay",
        saturated_conductivity=1.5,
        field_capacity=38,
        wilting_point=22,
    )


@pytest.fixture
def tomato_crop() -> CropProfile:
    return CropProfile(
        id="tomato",
        name="Tomato",
        type="vegetables",
        kc_periods=(
            KcPeriod(period_name="initial", kc_value=0.6),
            KcPeriod(period_name="development", kc_value=0.85),
            KcPeriod(period_name="mid-season", kc_value=1.15),
            KcPeriod(period_name="late-season", kc_value=0.8),
        ),
    )


@pytest.fixture
def field_5ha() -> FieldConfig:
    return FieldConfig(area=5, slope=1.5)


@pytest.fixture
def temperate_environment() -> EnvironmentalConditions:
    return EnvironmentalConditions(
        et0=6.5,
        climate_zone="temperate",
        irrigation_method="drip",
        growth_stage="mid",
        temperature=28,
        wind_speed=3,
        relative_humidity=45,
    )


@pytest.fixture
def loam_request() -> dict:
    """Camel-case request payload for the loam scenario."""
    return {
        "soil": {
            "sand": 45,
            "clay": 25,
            "silt": 30,
            "textureClass": "Loam",
            "saturatedConductivity": 12,
            "fieldCapacity": 22,
            "wiltingPoint": 10,
        },
        "crop": {
            "id": "tomato",
            "name": "Tomato",
            "type": "vegetables",
            "kcPeriods": [
                {"periodName": "initial", "kcValue": 0.6},
                {"periodName": "mid-season", "kcValue": 1.15},
            ],
        },
        "field": {"area": 5, "slope": 1.5},
        "environment": {
            "et0": 6.5,
            "climateZone": "temperate",
            "irrigationMethod": "drip",
            "growthStage": "mid",
            "temperature": 28,
            "windSpeed": 3,
            "relativeHumidity": 45,
        },
    }
