"""
Pydantic schemas for forecasting-service responses.

Only the fields the advisor reads are declared; everything else the
service returns is kept via ``extra="allow"``.
"""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field


# Row format: [{"timestamp": ..., "Q_H": ..., "Q_C": ...}, ...]
# Columnar format: {"timestamp": [...], "Q_H": [...], ...}
HourlyRecords = Union[list[dict[str, Any]], dict[str, Any]]


class ArchetypeRecord(BaseModel):
    """Entry of GET /building/available."""

    model_config = ConfigDict(extra="allow")

    category: str
    country: str
    name: str


class SimulationResults(BaseModel):
    model_config = ConfigDict(extra="allow")

    hourly_building: HourlyRecords


class SimulateResponse(BaseModel):
    """Response of POST /simulate."""

    model_config = ConfigDict(extra="allow")

    source: str | None = None
    name: str | None = None
    category: str | None = None
    country: str | None = None
    weather_source: str | None = None
    results: SimulationResults
    building_area: float | None = Field(default=None, gt=0)


class ECMScenarioRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    scenario_id: str | None = None
    description: str | None = None
    elements: list[str] = Field(default_factory=list)
    results: SimulationResults


class ECMApplicationResponse(BaseModel):
    """Response of POST /ecm_application."""

    model_config = ConfigDict(extra="allow")

    source: str | None = None
    n_scenarios: int | None = None
    scenarios: list[ECMScenarioRecord]


class ArchetypeDetailsResponse(BaseModel):
    """Response of POST /building?archetype=true."""

    model_config = ConfigDict(extra="allow")

    source: str | None = None
    name: str
    category: str
    country: str
    bui: dict[str, Any]
    system: dict[str, Any] = Field(default_factory=dict)
