"""Crop reference data sources.

The calculation core never loads crop data itself; a ``CropDataSource`` is
injected into the orchestrator and resolves crops and their Kc periods.
"""

import logging
from collections.abc import Iterable
from typing import Protocol

from irrigation_dss.models.domain import CropProfile, KcPeriod

logger = logging.getLogger(__name__)


class CropDataSource(Protocol):
    """Protocol for crop and Kc period lookups (database, API, fixtures ...)."""

    def get_crop(self, crop_id: str) -> CropProfile:
        """Return the crop with all its Kc periods.

        Raises:
            KeyError: If the crop is unknown
        """
        ...

    def get_kc_periods(
        self,
        crop_id: str,
        climate_zone: str | None = None,
        irrigation_method: str | None = None,
    ) -> list[KcPeriod]:
        """Return Kc periods for the crop, filtered by zone and method."""
        ...


class InMemoryCropDataSource:
    """Crop data source backed by a dict of CropProfile keyed by crop id."""

    def __init__(self, crops: Iterable[CropProfile] = ()):
        self._crops: dict[str, CropProfile] = {}
        for crop in crops:
            self.add(crop)

    def add(self, crop: CropProfile) -> None:
        if not crop.id:
            msg = f"Crop {crop.name!r} has no id"
            raise ValueError(msg)
        self._crops[crop.id] = crop

    def get_crop(self, crop_id: str) -> CropProfile:
        try:
            return self._crops[crop_id]
        except KeyError:
            msg = f"Unknown crop: {crop_id}"
            raise KeyError(msg) from None

    def get_kc_periods(
        self,
        crop_id: str,
        climate_zone: str | None = None,
        irrigation_method: str | None = None,
    ) -> list[KcPeriod]:
        """Kc periods matching the zone and method.

        A period without a zone (or method) applies to every zone (or method).
        """
        periods = [
            period
            for period in self.get_crop(crop_id).kc_periods
            if (climate_zone is None or period.climate_zone in (None, climate_zone))
            and (irrigation_method is None or period.irrigation_method in (None, irrigation_method))
        ]
        logger.debug(f"Resolved {len(periods)} Kc periods for crop {crop_id}")
        return periods

    def __len__(self) -> int:
        return len(self._crops)
