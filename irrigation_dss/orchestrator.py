"""Decision support orchestrator - sequences the calculation stages into a DSSResult."""

import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel

from irrigation_dss.calculators import (
    analyze_soil_crop_compatibility,
    calculate_etc,
    calculate_irrigation_requirement,
    generate_irrigation_schedule,
    generate_recommendations,
)
from irrigation_dss.config import DEFAULT_CONFIG, DEFAULT_SALT_CONFIG, DssConfig, SaltConfig
from irrigation_dss.errors import DSSCalculationError
from irrigation_dss.models.domain import (
    CropProfile,
    EnvironmentalConditions,
    FieldConfig,
    SoilProfile,
)
from irrigation_dss.models.results import DSSResult, IrrigationRequirement, SaltAssessment
from irrigation_dss.repositories.crops import CropDataSource
from irrigation_dss.services.economics import EconomicAnalyzer, calculate_water_economics
from irrigation_dss.services.salt_management import SaltManagementEngine
from irrigation_dss.services.system_scoring import IrrigationSystemScorer, recommend_system_by_rules

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


def _coerce(model: type[M], value: M | dict) -> M:
    return value if isinstance(value, model) else model.model_validate(value)


class DSSOrchestrator:
    """Runs the full decision support chain for one field.

    Pipeline:
    1. Soil-crop compatibility
    2. Crop evapotranspiration (ETc)
    3. Irrigation requirement
    4. Rule-based system recommendation and its water economics
    5. Multi-criteria system scoring and full economic analysis
    6. Salt management (leaching, drainage, salt balance)
    7. Schedule and headline recommendations

    A failure in any stage except salt management raises DSSCalculationError.
    Salt management failures are logged and reported as a degraded
    SaltAssessment so the irrigation result is still returned.
    """

    def __init__(
        self,
        config: DssConfig = DEFAULT_CONFIG,
        salt_config: SaltConfig = DEFAULT_SALT_CONFIG,
        crop_source: CropDataSource | None = None,
    ):
        self.config = config
        self.salt_config = salt_config
        self.crop_source = crop_source
        self.scorer = IrrigationSystemScorer(config)
        self.economics = EconomicAnalyzer(config)
        self.salt_engine = SaltManagementEngine(salt_config)

    def _stage(self, stage: str, func: Callable[..., T], *args: Any) -> T:
        t0 = time.perf_counter()
        try:
            result = func(*args)
        except Exception as e:
            logger.error(f"Stage {stage} failed: {e}")
            raise DSSCalculationError(stage, e) from e
        logger.info(f"[timing] {stage}: {time.perf_counter() - t0:.3f}s")
        return result

    def _salt_management(
        self,
        soil: SoilProfile,
        irrigation: IrrigationRequirement,
        environment: EnvironmentalConditions,
        field: FieldConfig,
    ) -> SaltAssessment:
        t0 = time.perf_counter()
        try:
            assessment = self.salt_engine.assess(soil, irrigation, environment, field)
        except Exception as e:
            logger.exception(f"Salt management calculation failed, using safe defaults: {e}")
            return SaltAssessment.degraded(str(e))
        logger.info(f"[timing] salt_management: {time.perf_counter() - t0:.3f}s")
        return assessment

    def calculate_irrigation_recommendations(
        self,
        soil: SoilProfile | dict,
        crop: CropProfile | dict,
        field: FieldConfig | dict,
        environment: EnvironmentalConditions | dict,
    ) -> DSSResult:
        """Run every stage and assemble the DSSResult.

        Inputs may be models or plain dicts with camelCase or snake_case keys.

        Raises:
            DSSCalculationError: If input validation or any non-salt stage fails;
                ``stage`` names the failing step.
        """
        start_time = time.perf_counter()
        soil, crop, field, environment = self._stage(
            "validate_inputs",
            lambda: (
                _coerce(SoilProfile, soil),
                _coerce(CropProfile, crop),
                _coerce(FieldConfig, field),
                _coerce(EnvironmentalConditions, environment),
            ),
        )
        logger.info(
            f"Calculating recommendations for crop {crop.name or crop.id or 'unknown'} "
            f"on {field.area} ha"
        )
        config = self.config

        compatibility = self._stage(
            "soil_crop_compatibility",
            analyze_soil_crop_compatibility,
            soil,
            crop,
            config.compatibility,
        )
        etc = self._stage(
            "evapotranspiration",
            lambda: calculate_etc(
                environment,
                crop,
                compatibility,
                config.climate,
                config.systems,
                default_et0=config.default_et0_mm_day,
            ),
        )
        irrigation = self._stage(
            "irrigation_requirement",
            calculate_irrigation_requirement,
            soil,
            etc,
            config.depletion_fraction,
            config.max_application_rate_mm_hr,
        )

        rule_based = self._stage(
            "system_recommendation", recommend_system_by_rules, soil, field, config.systems
        )
        water_economics = self._stage(
            "water_economics", calculate_water_economics, rule_based, irrigation, field, config
        )

        enhanced = self._stage("system_scoring", self.scorer.recommend, soil, irrigation, field)
        selected_analysis = enhanced.system_analysis[enhanced.recommended_system.value]
        economic = self._stage(
            "economic_analysis", self.economics.analyze, selected_analysis, irrigation, field
        )

        salt = self._salt_management(soil, irrigation, environment, field)

        schedule = self._stage("schedule", generate_irrigation_schedule, irrigation)
        recommendations = self._stage(
            "recommendations", generate_recommendations, irrigation, rule_based, water_economics
        )

        logger.info(f"DSS calculation completed in {time.perf_counter() - start_time:.3f}s")

        return DSSResult(
            etc_calculated=etc.etc,
            irrigation_depth=irrigation.irrigation_depth,
            irrigation_frequency=irrigation.frequency,
            max_application_rate=irrigation.max_application_rate,
            system_recommendation=rule_based.recommended_system,
            system_efficiency=rule_based.efficiency,
            system_cost=rule_based.estimated_cost,
            economic_roi=water_economics.roi,
            payback_period=water_economics.payback_period,
            annual_water_savings=water_economics.annual_water_savings,
            annual_cost_savings=water_economics.annual_cost_savings,
            system_recommendations_enhanced=enhanced.recommended_system,
            economic_analysis_basic=economic.summary,
            roi_calculation=economic.roi_calculation,
            payback_analysis=economic.payback_analysis,
            water_savings_analysis=economic.water_savings,
            cost_benefit_analysis=economic.cost_benefit_analysis,
            salt_management=salt,
            compatibility=compatibility,
            etc_breakdown=etc,
            irrigation_breakdown=irrigation,
            system_breakdown=rule_based,
            economic_breakdown=water_economics,
            system_recommendations_detailed=enhanced,
            economic_analysis_detailed=economic,
            recommendations=recommendations,
            schedule_data=schedule,
        )

    def calculate_for_crop(
        self,
        crop_id: str,
        soil: SoilProfile | dict,
        field: FieldConfig | dict,
        environment: EnvironmentalConditions | dict,
    ) -> DSSResult:
        """Resolve the crop from the data source, then run the full chain.

        Kc periods are narrowed to the environment's climate zone and
        irrigation method when any match; otherwise all periods are kept.

        Raises:
            ValueError: If no crop data source was configured
            KeyError: If the crop is unknown to the data source
        """
        if self.crop_source is None:
            msg = "No crop data source configured"
            raise ValueError(msg)

        environment = _coerce(EnvironmentalConditions, environment)
        crop = self.crop_source.get_crop(crop_id)
        periods = self.crop_source.get_kc_periods(
            crop_id, environment.climate_zone, environment.irrigation_method
        )
        if periods:
            crop = crop.model_copy(update={"kc_periods": tuple(periods)})

        return self.calculate_irrigation_recommendations(soil, crop, field, environment)


def calculate_irrigation_recommendations(
    soil: SoilProfile | dict,
    crop: CropProfile | dict,
    field: FieldConfig | dict,
    environment: EnvironmentalConditions | dict,
) -> DSSResult:
    """Run the decision support chain with the default configuration."""
    return DSSOrchestrator().calculate_irrigation_recommendations(soil, crop, field, environment)
