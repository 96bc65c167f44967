"""
Analysis module - energy profile estimation and renovation scenarios.
"""

from .epc import (
    EPC_ORDER,
    EPC_THRESHOLDS,
    calculate_comfort_index,
    calculate_energy_mix,
    calculate_flexibility_index,
    epc_index,
    estimate_energy_cost,
    get_epc_class,
)
from .energy_profile import EnergyProfileEstimator, area_scale_factor
from .scenarios import RenovationScenarioEvaluator

__all__ = [
    "EPC_ORDER",
    "EPC_THRESHOLDS",
    "calculate_comfort_index",
    "calculate_energy_mix",
    "calculate_flexibility_index",
    "epc_index",
    "estimate_energy_cost",
    "get_epc_class",
    "EnergyProfileEstimator",
    "area_scale_factor",
    "RenovationScenarioEvaluator",
]
