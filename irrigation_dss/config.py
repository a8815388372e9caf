"""Configuration and constants for the irrigation decision support core.

This module defines all business rules, lookup tables and constants used by
the calculation pipeline.

Includes configuration for:
- Irrigation and economic calculations (DssConfig with DSS_ prefix)
- Salt management and its default field assumptions (SaltConfig with SALT_ prefix)

Configuration can be overridden via:
1. Environment variables (e.g., DSS_DEPLETION_FRACTION=0.4, SALT_IRRIGATION_WATER_EC=2.0)
2. .env file in the current directory
3. Default values in code

Lookup tables are frozen pydantic models whose mappings are read-only views,
so one configuration can be shared between runs and threads. Components
receive them at construction time, so tests can inject alternative tables
without touching module state.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class PhysicalConstants:
    """Physical constants and unit conversions used in the calculations.

    These are NOT configurable - they represent fixed conversion factors
    that should never vary between runs.
    """

    ROOT_DEPTH_MM: float = 1000.0
    SQUARE_METRES_PER_HECTARE: float = 10_000.0
    MILLIMETRES_PER_METRE: float = 1000.0
    DAYS_PER_YEAR: int = 365
    MONTHS_PER_YEAR: int = 12

    # dS/m x mm of water -> kg/ha of dissolved salt
    EC_TO_SALT_FACTOR: float = 0.64


CONSTANTS = PhysicalConstants()


def _read_only(value):
    """Wrap a mapping, and any mappings nested in it, as a read-only view."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _read_only(item) for key, item in value.items()})
    return value


class ClimateAdjustment(BaseModel):
    """Regional climate adjustment for one climate zone."""

    model_config = ConfigDict(frozen=True)

    kc_multiplier: float = Field(gt=0, description="Multiplier applied to the crop coefficient")
    et_adjustment: float = Field(gt=0, description="Reference ET adjustment (informational)")


class ClimateAdjustmentTable(BaseModel):
    """Per-zone climate multipliers (GCC/MENA regional adjustments).

    Unknown zones resolve to the ``fallback_zone`` entry.
    """

    model_config = ConfigDict(frozen=True)

    zones: Mapping[str, ClimateAdjustment] = Field(
        validate_default=True,
        default_factory=lambda: {
            "gcc_arid": ClimateAdjustment(kc_multiplier=1.15, et_adjustment=1.2),
            "mena_mediterranean": ClimateAdjustment(kc_multiplier=1.05, et_adjustment=1.1),
            "gulf_coastal": ClimateAdjustment(kc_multiplier=1.1, et_adjustment=1.15),
            "temperate": ClimateAdjustment(kc_multiplier=1.0, et_adjustment=1.0),
            "arid": ClimateAdjustment(kc_multiplier=1.05, et_adjustment=1.1),
            "humid": ClimateAdjustment(kc_multiplier=0.95, et_adjustment=0.9),
        }
    )
    fallback_zone: str = "temperate"

    @field_validator("zones")
    @classmethod
    def _freeze(cls, value):
        return _read_only(value)

    def lookup(self, zone: str | None) -> ClimateAdjustment:
        """Return the adjustment for ``zone``, falling back to the default zone."""
        if zone is not None and zone in self.zones:
            return self.zones[zone]
        return self.zones[self.fallback_zone]


class CompatibilityMatrix(BaseModel):
    """Soil texture x crop type compatibility scores (0-1)."""

    model_config = ConfigDict(frozen=True)

    scores: Mapping[str, Mapping[str, float]] = Field(
        validate_default=True,
        default_factory=lambda: {
            "sandy": {"vegetables": 0.8, "cereals": 0.6, "legumes": 0.7},
            "loamy": {"vegetables": 1.0, "cereals": 1.0, "legumes": 1.0},
            "clayey": {"vegetables": 0.7, "cereals": 0.9, "legumes": 0.8},
        }
    )
    fallback_texture: str = "loamy"
    fallback_crop_type: str = "vegetables"
    amendment_suggestions: Mapping[str, tuple[str, ...]] = Field(
        validate_default=True,
        default_factory=lambda: {
            "sandy": ("Add organic matter", "Use mulching", "Consider drip irrigation"),
            "clayey": ("Improve drainage", "Add sand/compost", "Raised beds recommended"),
            "loamy": ("Maintain organic matter", "Regular soil testing"),
        }
    )

    @field_validator("scores", "amendment_suggestions")
    @classmethod
    def _freeze(cls, value):
        return _read_only(value)

    def score(self, texture: str, crop_type: str) -> float:
        row = self.scores.get(texture, self.scores[self.fallback_texture])
        return row.get(crop_type, row[self.fallback_crop_type])

    def suggestions(self, texture: str) -> list[str]:
        return list(
            self.amendment_suggestions.get(
                texture, self.amendment_suggestions[self.fallback_texture]
            )
        )


class SystemProfile(BaseModel):
    """Fixed characteristics of one irrigation system type."""

    model_config = ConfigDict(frozen=True)

    efficiency: float = Field(gt=0, le=1)
    cost_per_hectare: float = Field(ge=0)
    maintenance_score: float = Field(ge=0, le=100)
    labor_savings_fraction: float = Field(ge=0, le=1)
    kc_factor: float = Field(gt=0, description="Irrigation method factor applied to Kc")
    distribution_uniformity: float = Field(ge=0, le=100)
    energy_efficiency: float = Field(ge=0, le=100)
    labor_efficiency: float = Field(ge=0, le=100)


class SystemCatalog(BaseModel):
    """Fixed efficiency, cost and maintenance tables for drip/sprinkler/surface.

    Insertion order of ``systems`` is the tie-break priority used when ranking
    systems with equal scores.
    """

    model_config = ConfigDict(frozen=True)

    systems: Mapping[str, SystemProfile] = Field(
        validate_default=True,
        default_factory=lambda: {
            "drip": SystemProfile(
                efficiency=0.9,
                cost_per_hectare=3500,
                maintenance_score=50,
                labor_savings_fraction=0.3,
                kc_factor=0.9,
                distribution_uniformity=90,
                energy_efficiency=85,
                labor_efficiency=90,
            ),
            "sprinkler": SystemProfile(
                efficiency=0.75,
                cost_per_hectare=2000,
                maintenance_score=70,
                labor_savings_fraction=0.2,
                kc_factor=1.0,
                distribution_uniformity=85,
                energy_efficiency=70,
                labor_efficiency=80,
            ),
            "surface": SystemProfile(
                efficiency=0.6,
                cost_per_hectare=800,
                maintenance_score=90,
                labor_savings_fraction=0.1,
                kc_factor=1.05,
                distribution_uniformity=70,
                energy_efficiency=95,
                labor_efficiency=60,
            ),
        }
    )

    @field_validator("systems")
    @classmethod
    def _freeze(cls, value):
        return _read_only(value)

    def get(self, system_type: str) -> SystemProfile:
        return self.systems[system_type]

    def kc_factor(self, irrigation_method: str | None) -> float:
        """Irrigation method Kc factor; unknown methods are neutral (1.0)."""
        profile = self.systems.get(irrigation_method) if irrigation_method else None
        return profile.kc_factor if profile else 1.0

    @property
    def priority(self) -> list[str]:
        return list(self.systems)


class DssConfig(BaseSettings):
    """Main configuration for irrigation sizing and economic analysis.

    Can be overridden via environment variables with DSS_ prefix:
    - DSS_DEPLETION_FRACTION
    - DSS_MAX_APPLICATION_RATE_MM_HR
    - DSS_DISCOUNT_RATE
    - ...

    Attributes:
        depletion_fraction: Fraction of available water depleted before irrigating
        max_application_rate_mm_hr: Upper bound on application rate
        default_et0_mm_day: ET0 used when the provider supplies none
        baseline_efficiency: Efficiency of the reference (surface) system
        water_cost_baseline_per_ha: Annual water cost baseline ($/ha)
        yield_value_per_ha: Annual yield value baseline ($/ha)
        yield_improvement: Fractional yield increase from improved irrigation
        labor_cost_per_ha: Annual labour cost baseline ($/ha)
        discount_rate: Annual discount rate for discounted payback
        payback_horizon_years: Maximum years searched for discounted payback
        projection_years: Length of cash-flow projections
        water_price_per_m3: Water price used for volume-based savings
        water_price_inflation: Annual water price inflation
    """

    model_config = SettingsConfigDict(
        env_prefix="DSS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    depletion_fraction: float = Field(default=0.5, gt=0, le=1)
    max_application_rate_mm_hr: float = Field(default=25.0, gt=0)
    default_et0_mm_day: float = Field(default=5.0, gt=0)

    baseline_efficiency: float = Field(default=0.6, gt=0, le=1)
    water_cost_baseline_per_ha: float = Field(default=500.0, ge=0)
    yield_value_per_ha: float = Field(default=2000.0, ge=0)
    yield_improvement: float = Field(default=0.1, ge=0)
    labor_cost_per_ha: float = Field(default=300.0, ge=0)
    discount_rate: float = Field(default=0.05, ge=0)
    payback_horizon_years: int = Field(default=20, ge=1)
    projection_years: int = Field(default=10, ge=1)
    water_price_per_m3: float = Field(default=2.5, ge=0)
    water_price_inflation: float = Field(default=0.03, ge=0)
    site_preparation_cost_per_ha: float = Field(default=200.0, ge=0)
    commissioning_cost: float = Field(default=1000.0, ge=0)

    climate: ClimateAdjustmentTable = Field(default_factory=ClimateAdjustmentTable)
    compatibility: CompatibilityMatrix = Field(default_factory=CompatibilityMatrix)
    systems: SystemCatalog = Field(default_factory=SystemCatalog)


class SaltConfig(BaseSettings):
    """Configuration for salt leaching, drainage and salt balance.

    Can be overridden via environment variables with SALT_ prefix:
    - SALT_IRRIGATION_WATER_EC
    - SALT_CROP_THRESHOLD_EC
    - SALT_DEFAULT_SEASON
    - ...

    The ``default_*`` assumptions are used by the orchestrator when the
    environmental inputs do not carry the corresponding measurement.
    """

    model_config = SettingsConfigDict(
        env_prefix="SALT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    climate_factors: Mapping[str, float] = Field(
        validate_default=True,
        default_factory=lambda: {
            "gcc_arid": 1.3,
            "mena_mediterranean": 1.1,
            "temperate": 1.0,
        }
    )
    seasonal_factors: Mapping[str, float] = Field(
        validate_default=True,
        default_factory=lambda: {"summer": 1.4, "winter": 0.8, "transition": 1.0}
    )
    water_costs_per_m3: Mapping[str, float] = Field(
        validate_default=True,
        default_factory=lambda: {
            "desalinated": 2.5,
            "treated_wastewater": 0.8,
            "brackish_groundwater": 0.5,
        }
    )
    drainage_costs_per_ha: Mapping[str, float] = Field(
        validate_default=True,
        default_factory=lambda: {
            "subsurface_tile": 3500,
            "surface": 1000,
            "mole": 800,
            "combination": 2500,
        }
    )

    @field_validator(
        "climate_factors", "seasonal_factors", "water_costs_per_m3", "drainage_costs_per_ha"
    )
    @classmethod
    def _freeze(cls, value):
        return _read_only(value)

    leaching_water_source: str = "desalinated"
    fallback_drainage_cost_per_ha: float = 2000.0
    max_leaching_fraction: float = Field(default=0.5, gt=0, le=1)
    base_irrigation_depth_mm: float = Field(default=25.0, gt=0)
    average_crop_value_per_ha: float = Field(default=5000.0, ge=0)
    drainage_yield_protection: float = Field(default=0.25, ge=0, le=1)
    drainage_maintenance_rate: float = Field(default=0.05, ge=0)
    monthly_atmospheric_deposition_kg_ha: float = Field(default=4.2, ge=0)

    default_soil_ec: float = Field(default=2.0, ge=0)
    irrigation_water_ec: float = Field(default=1.5, ge=0)
    crop_threshold_ec: float = Field(default=2.5, ge=0)
    default_climate_zone: str = "gcc_arid"
    default_season: str = "summer"
    default_temperature_c: float = 42.0
    default_humidity_pct: float = 25.0
    default_evaporation_rate_mm_day: float = 12.0
    default_groundwater_depth_m: float = 3.0
    groundwater_ec: float = Field(default=8.0, ge=0)
    fertilizer_amount_kg_ha: float = 200.0
    fertilizer_salt_index: float = 0.15
    precipitation_mm: float = 5.0
    drainage_volume_mm: float = 5.0
    crop_uptake_kg_ha: float = 2.0
    balance_period: str = "monthly"
    leaching_required_above_fraction: float = 0.1


DEFAULT_CONFIG = DssConfig()
DEFAULT_SALT_CONFIG = SaltConfig()
