"""Crop reference data sources."""

from irrigation_dss.repositories.crops import CropDataSource, InMemoryCropDataSource

__all__ = ["CropDataSource", "InMemoryCropDataSource"]
