"""Irrigation decision support core.

Typical use::

    from irrigation_dss import DSSOrchestrator

    result = DSSOrchestrator().calculate_irrigation_recommendations(soil, crop, field, environment)
    payload = result.to_report_dict()
"""

from irrigation_dss.errors import DomainError, DSSCalculationError
from irrigation_dss.orchestrator import DSSOrchestrator, calculate_irrigation_recommendations

__all__ = [
    "DSSOrchestrator",
    "calculate_irrigation_recommendations",
    "DSSCalculationError",
    "DomainError",
]
