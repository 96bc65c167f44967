"""Forecasting service client and response schemas."""

from .forecasting import ForecastingClient
from .schemas import (
    ArchetypeRecord,
    SimulationResults,
    SimulateResponse,
    ECMScenarioRecord,
    ECMApplicationResponse,
    ArchetypeDetailsResponse,
)

__all__ = [
    "ForecastingClient",
    "ArchetypeRecord",
    "SimulationResults",
    "SimulateResponse",
    "ECMScenarioRecord",
    "ECMApplicationResponse",
    "ArchetypeDetailsResponse",
]
