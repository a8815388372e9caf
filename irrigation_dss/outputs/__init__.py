"""Output strategies for decision support results."""

from irrigation_dss.outputs.base import OutputStrategy
from irrigation_dss.outputs.csv import CsvOutput

__all__ = ["OutputStrategy", "CsvOutput"]
