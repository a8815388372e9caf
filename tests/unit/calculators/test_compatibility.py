"""Unit tests for soil-crop compatibility scoring."""

import pytest

from irrigation_dss.calculators.compatibility import (
    analyze_soil_crop_compatibility,
    classify_texture,
    rate_compatibility,
)
from irrigation_dss.config import CompatibilityMatrix
from irrigation_dss.models import CropProfile, SoilProfile
from irrigation_dss.models.enums import SuitabilityRating, TextureClass


def _soil(sand: float, clay: float) -> SoilProfile:
    return SoilProfile(
        sand=sand, clay=clay, field_capacity=25, wilting_point=10, saturated_conductivity=10
    )


class TestClassifyTexture:
    """Tests for texture grouping."""

    @pytest.mark.parametrize(
        ("sand", "clay", "expected"),
        [
            (80, 10, TextureClass.SANDY),
            (75, 45, TextureClass.SANDY),  # sand test runs before clay test
            (30, 45, TextureClass.CLAYEY),
            (55, 15, TextureClass.SANDY),
            (55, 25, TextureClass.LOAMY),
            (40, 40, TextureClass.LOAMY),
        ],
    )
    def test_texture_groups(self, sand, clay, expected):
        """Test texture classification thresholds and ordering."""
        assert classify_texture(sand, clay) == expected


@pytest.mark.parametrize(
    ("score", "expected"),
    [
        (1.0, SuitabilityRating.EXCELLENT),
        (0.9, SuitabilityRating.EXCELLENT),
        (0.8, SuitabilityRating.GOOD),
        (0.7, SuitabilityRating.FAIR),
        (0.6, SuitabilityRating.POOR),
    ],
)
def test_rate_compatibility(score, expected):
    """Test rating bands."""
    assert rate_compatibility(score) == expected


class TestAnalyzeCompatibility:
    """Tests for the compatibility analysis."""

    def test_loam_vegetables_is_excellent(self, loam_soil, tomato_crop):
        """Test loam with vegetables scores 1.0 with no amendments."""
        result = analyze_soil_crop_compatibility(loam_soil, tomato_crop, CompatibilityMatrix())

        assert result.soil_texture == TextureClass.LOAMY
        assert result.compatibility_score == 1.0
        assert result.adjustment_factor == 1.0
        assert result.suitability_rating == SuitabilityRating.EXCELLENT
        assert result.recommendations == ()

    def test_sandy_cereals_gets_amendment(self):
        """Test a poor fit produces a high-priority amendment recommendation."""
        crop = CropProfile(name="Wheat", type="Cereals")
        result = analyze_soil_crop_compatibility(_soil(80, 5), crop, CompatibilityMatrix())

        assert result.compatibility_score == 0.6
        assert result.suitability_rating == SuitabilityRating.POOR
        assert len(result.recommendations) == 1
        recommendation = result.recommendations[0]
        assert recommendation.type == "soil_amendment"
        assert recommendation.priority == "high"
        assert recommendation.message == "Consider soil amendments to improve cereals compatibility"
        assert recommendation.suggestions == (
            "Add organic matter",
            "Use mulching",
            "Consider drip irrigation",
        )

    def test_missing_crop_type_uses_vegetables(self):
        """Test a crop without a type is scored as vegetables."""
        result = analyze_soil_crop_compatibility(_soil(30, 45), CropProfile(), CompatibilityMatrix())

        assert result.soil_texture == TextureClass.CLAYEY
        assert result.compatibility_score == 0.7
        assert result.suitability_rating == SuitabilityRating.FAIR

    def test_unknown_crop_type_falls_back(self):
        """Test an unknown crop category uses the vegetables column."""
        crop = CropProfile(type="orchard")
        result = analyze_soil_crop_compatibility(_soil(30, 45), crop, CompatibilityMatrix())

        assert result.compatibility_score == 0.7


class TestCompatibilityMatrixSweep:
    """Every texture and crop category in the default matrix."""

    @pytest.mark.parametrize(
        ("sand", "clay", "crop_type", "score", "rating"),
        [
            (80, 10, "vegetables", 0.8, SuitabilityRating.GOOD),
            (80, 10, "cereals", 0.6, SuitabilityRating.POOR),
            (80, 10, "legumes", 0.7, SuitabilityRating.FAIR),
            (40, 25, "vegetables", 1.0, SuitabilityRating.EXCELLENT),
            (40, 25, "cereals", 1.0, SuitabilityRating.EXCELLENT),
            (40, 25, "legumes", 1.0, SuitabilityRating.EXCELLENT),
            (20, 55, "vegetables", 0.7, SuitabilityRating.FAIR),
            (20, 55, "cereals", 0.9, SuitabilityRating.EXCELLENT),
            (20, 55, "legumes", 0.8, SuitabilityRating.GOOD),
        ],
    )
    def test_score_and_rating(self, sand, clay, crop_type, score, rating):
        """Test the score stays in [0, 1] and maps to the expected rating."""
        result = analyze_soil_crop_compatibility(
            _soil(sand, clay), CropProfile(type=crop_type), CompatibilityMatrix()
        )

        assert 0 <= result.compatibility_score <= 1
        assert result.compatibility_score == score
        assert result.adjustment_factor == score
        assert result.suitability_rating == rating
        assert bool(result.recommendations) == (score < 0.8)
