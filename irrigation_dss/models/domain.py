"""Input domain models for a decision support calculation run.

These models are immutable value objects. They accept either snake_case field
names or the camelCase keys used by the upstream API payloads
(``saturatedConductivity``, ``kcPeriods``, ``et0`` ...).
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

TEXTURE_SUM_TOLERANCE = 2.0


class InputModel(BaseModel):
    """Base for frozen input models accepting camelCase or snake_case keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class SoilProfile(InputModel):
    """Soil analysis for the field.

    Attributes:
        sand: Sand content (% by mass)
        clay: Clay content (% by mass)
        silt: Silt content (% by mass), optional
        organic_matter: Organic matter (%)
        bulk_density: Bulk density (g/cm3)
        field_capacity: Volumetric water content at field capacity (%)
        wilting_point: Volumetric water content at wilting point (%)
        saturated_conductivity: Saturated hydraulic conductivity Ks (mm/hr)
        electrical_conductivity: Soil salinity ECe (dS/m), None if not measured
        texture_class: USDA texture label (e.g. "Sandy Loam")
    """

    sand: float = Field(ge=0, le=100, description="Sand (%)")
    clay: float = Field(ge=0, le=100, description="Clay (%)")
    silt: float | None = Field(default=None, ge=0, le=100, description="Silt (%)")
    organic_matter: float | None = Field(default=None, ge=0, le=100)
    bulk_density: float | None = Field(default=None, gt=0)
    field_capacity: float = Field(ge=0, le=100, description="Field capacity (% vol)")
    wilting_point: float = Field(ge=0, le=100, description="Wilting point (% vol)")
    saturated_conductivity: float = Field(ge=0, description="Ks (mm/hr)")
    electrical_conductivity: float | None = Field(default=None, ge=0, description="ECe (dS/m)")
    texture_class: str = Field(default="", description="Texture class label")

    @model_validator(mode="after")
    def _check_consistency(self) -> "SoilProfile":
        if self.wilting_point > self.field_capacity:
            msg = (
                f"Wilting point ({self.wilting_point}%) cannot exceed "
                f"field capacity ({self.field_capacity}%)"
            )
            raise ValueError(msg)
        if self.silt is not None:
            total = self.sand + self.clay + self.silt
            if abs(total - 100) > TEXTURE_SUM_TOLERANCE:
                msg = f"Sand, clay and silt must sum to ~100%, got {total:.1f}%"
                raise ValueError(msg)
        return self


class KcPeriod(InputModel):
    """Crop coefficient for one growth period."""

    period_name: str
    kc_value: float = Field(ge=0)
    climate_zone: str | None = None
    irrigation_method: str | None = None


class CropProfile(InputModel):
    """Crop reference data injected per run.

    ``type`` is the free-text crop category (vegetables, cereals, legumes, ...)
    used for soil compatibility; matching is case-insensitive.
    """

    id: str | None = None
    name: str | None = None
    type: str | None = None
    kc_periods: tuple[KcPeriod, ...] = ()


class FieldConfig(InputModel):
    """Field geometry."""

    area: float = Field(gt=0, description="Field area (ha)")
    slope: float = Field(default=0.0, ge=0, description="Slope (%)")
    elevation: float = Field(default=0.0, description="Elevation (m)")


class EnvironmentalConditions(InputModel):
    """Environmental inputs supplied by the ET0 provider and the caller.

    Salt-related fields are optional; when absent the salt management step
    uses the defaults in SaltConfig.
    """

    et0: float | None = Field(default=None, ge=0, description="Reference ET (mm/day)")
    climate_zone: str | None = None
    irrigation_method: str | None = None
    growth_stage: str = ""
    temperature: float | None = Field(default=None, description="Air temperature (C)")
    wind_speed: float | None = Field(default=None, ge=0, description="Wind speed (m/s)")
    relative_humidity: float | None = Field(default=None, ge=0, le=100, description="RH (%)")
    location: str | None = None

    season: str | None = None
    evaporation_rate: float | None = Field(default=None, ge=0, description="mm/day")
    irrigation_water_ec: float | None = Field(default=None, ge=0, description="dS/m")
    crop_threshold_ec: float | None = Field(default=None, ge=0, description="dS/m")
    groundwater_depth: float | None = Field(default=None, ge=0, description="m")
    seasonal_water_table: bool | None = None


class FertilizerInput(InputModel):
    """Fertilizer application contributing salt to the root zone.

    ``salt_index`` is the salt fraction of the applied amount; None uses 0.1.
    """

    amount: float = Field(ge=0, description="kg/ha per period")
    salt_index: float | None = Field(default=None, ge=0, le=1)
