"""Services composing the calculators into system, economic and salt analyses."""

from irrigation_dss.services.economics import EconomicAnalyzer, calculate_water_economics
from irrigation_dss.services.salt_management import SaltManagementEngine
from irrigation_dss.services.system_scoring import IrrigationSystemScorer, recommend_system_by_rules

__all__ = [
    "EconomicAnalyzer",
    "IrrigationSystemScorer",
    "SaltManagementEngine",
    "calculate_water_economics",
    "recommend_system_by_rules",
]
