"""Enumerations for categorical inputs and result labels.

String-valued so results serialise to the plain labels the report layer reads.
"""

from enum import Enum


class SystemType(str, Enum):
    """Irrigation system / method types."""

    DRIP = "drip"
    SPRINKLER = "sprinkler"
    SURFACE = "surface"


class TextureClass(str, Enum):
    """Coarse texture grouping used for soil-crop compatibility."""

    SANDY = "sandy"
    LOAMY = "loamy"
    CLAYEY = "clayey"


class SuitabilityRating(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


class TimePeriod(str, Enum):
    """Accounting period for the salt mass balance."""

    MONTHLY = "monthly"
    SEASONAL = "seasonal"
    ANNUAL = "annual"


class BalanceStatus(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    WARNING = "warning"
    CRITICAL = "critical"


class BalanceTrend(str, Enum):
    DECREASING = "decreasing"
    STABLE = "stable"
    INCREASING = "increasing"
    RAPIDLY_INCREASING = "rapidly_increasing"


class DrainageClass(str, Enum):
    """Natural drainage adequacy, ordered from best to worst."""

    WELL_DRAINED = "well_drained"
    MODERATELY_DRAINED = "moderately_drained"
    SOMEWHAT_POORLY_DRAINED = "somewhat_poorly_drained"
    POORLY_DRAINED = "poorly_drained"


class UrgencyLevel(str, Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DrainageSystemType(str, Enum):
    NONE = "none"
    SUBSURFACE_TILE = "subsurface_tile"
    SURFACE = "surface"
    MOLE = "mole"
    COMBINATION = "combination"


class LeachingFrequency(str, Enum):
    EVERY_IRRIGATION = "every_irrigation"
    EVERY_2_IRRIGATIONS = "every_2_irrigations"
    EVERY_3_IRRIGATIONS = "every_3_irrigations"
    EVERY_5_IRRIGATIONS = "every_5_irrigations"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AssessmentStatus(str, Enum):
    """Whether a salt assessment was computed or replaced by the safe default."""

    COMPUTED = "computed"
    DEGRADED = "degraded"
