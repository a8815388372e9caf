"""Soil-crop compatibility scoring.

Classifies the soil into a coarse texture group and scores how well that
texture suits the crop category. The score feeds the ETc engine as a Kc
multiplier.
"""

from irrigation_dss.config import CompatibilityMatrix
from irrigation_dss.models.domain import CropProfile, SoilProfile
from irrigation_dss.models.enums import SuitabilityRating, TextureClass
from irrigation_dss.models.results import CompatibilityResult, Recommendation

DEFAULT_CROP_TYPE = "vegetables"
AMENDMENT_THRESHOLD = 0.8


def classify_texture(sand: float, clay: float) -> TextureClass:
    """Classify soil into sandy, loamy or clayey.

    The sand > 70 test runs first, so a soil with sand > 70 and clay > 40 is
    sandy. The (sand > 50 and clay < 20) sandy test runs after the clay test.
    """
    if sand > 70:
        return TextureClass.SANDY
    if clay > 40:
        return TextureClass.CLAYEY
    if sand > 50 and clay < 20:
        return TextureClass.SANDY
    return TextureClass.LOAMY


def rate_compatibility(score: float) -> SuitabilityRating:
    if score >= 0.9:
        return SuitabilityRating.EXCELLENT
    if score >= 0.8:
        return SuitabilityRating.GOOD
    if score >= 0.7:
        return SuitabilityRating.FAIR
    return SuitabilityRating.POOR


def analyze_soil_crop_compatibility(
    soil: SoilProfile,
    crop: CropProfile,
    matrix: CompatibilityMatrix,
) -> CompatibilityResult:
    """Score the fit between soil texture and crop category.

    Unknown crop categories fall back to the "vegetables" column and unknown
    textures to the loamy row, so this never fails.

    Args:
        soil: Soil analysis (sand and clay percentages are used)
        crop: Crop profile; ``type`` is matched case-insensitively
        matrix: Texture x crop type compatibility table

    Returns:
        CompatibilityResult with adjustment_factor equal to the score.
    """
    crop_type = crop.type.lower() if crop.type else DEFAULT_CROP_TYPE
    texture = classify_texture(soil.sand, soil.clay)
    score = matrix.score(texture.value, crop_type)

    recommendations = []
    if score < AMENDMENT_THRESHOLD:
        recommendations.append(
            Recommendation(
                type="soil_amendment",
                priority="high",
                message=f"Consider soil amendments to improve {crop_type} compatibility",
                suggestions=tuple(matrix.suggestions(texture.value)),
            )
        )

    return CompatibilityResult(
        soil_texture=texture,
        compatibility_score=score,
        suitability_rating=rate_compatibility(score),
        recommendations=tuple(recommendations),
        adjustment_factor=score,
    )
