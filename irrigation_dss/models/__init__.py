"""Domain models for irrigation decision support."""

from irrigation_dss.models.domain import (
    CropProfile,
    EnvironmentalConditions,
    FertilizerInput,
    FieldConfig,
    KcPeriod,
    SoilProfile,
)
from irrigation_dss.models.results import (
    CompatibilityResult,
    DSSResult,
    EconomicResult,
    ETcResult,
    IrrigationRequirement,
    SaltAssessment,
    SystemRecommendation,
)

__all__ = [
    "SoilProfile",
    "KcPeriod",
    "CropProfile",
    "FieldConfig",
    "EnvironmentalConditions",
    "FertilizerInput",
    "CompatibilityResult",
    "ETcResult",
    "IrrigationRequirement",
    "SystemRecommendation",
    "EconomicResult",
    "SaltAssessment",
    "DSSResult",
]
