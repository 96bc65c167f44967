"""
Pytest configuration and fixtures for renovation advisor tests.

Provides reusable test fixtures for:
- User buildings
- Archetype catalogues
- Hourly simulation series
- A mocked forecasting client (no network)
"""

import pytest
from pathlib import Path
from unittest.mock import MagicMock

# Add project root to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from renovation_advisor.api.forecasting import ForecastingClient
from renovation_advisor.api.schemas import (
    ArchetypeDetailsResponse,
    ECMApplicationResponse,
    SimulateResponse,
)
from renovation_advisor.baseline.archetypes import ArchetypeCatalogue
from renovation_advisor.core.models import (
    ArchetypeInfo,
    BuildingInfo,
    EnergyMix,
    EnergyMixBreakdown,
    EstimationResult,
    RenovationScenario,
    ScenarioId,
)


# =============================================================================
# HELPERS
# =============================================================================

def hourly_rows(heating_kwh: float, cooling_kwh: float, hours: int = 100) -> list:
    """Row-format hourly records (Wh) summing to the given annual kWh."""
    q_h = heating_kwh * 1000 / hours
    q_c = cooling_kwh * 1000 / hours
    return [{"timestamp": f"h{i}", "Q_H": q_h, "Q_C": q_c, "Q_HC": q_h + q_c} for i in range(hours)]


def hourly_columns(heating_kwh: float, cooling_kwh: float, hours: int = 100) -> dict:
    """Columnar hourly data using the signed Q_HC convention."""
    heating_hours = hours // 2
    cooling_hours = hours - heating_hours
    q_hc = [heating_kwh * 1000 / heating_hours] * heating_hours
    q_hc += [-cooling_kwh * 1000 / cooling_hours] * cooling_hours
    return {"Q_HC": q_hc, "T_op": [20.0] * hours}


def simulate_response(hourly, building_area=None) -> SimulateResponse:
    payload = {
        "source": "archetype",
        "name": "SFH_Italy_1946_1969",
        "category": "Single Family House",
        "country": "Italy",
        "weather_source": "pvgis",
        "results": {"hourly_building": hourly},
    }
    if building_area is not None:
        payload["building_area"] = building_area
    return SimulateResponse.model_validate(payload)


def ecm_response(hourly) -> ECMApplicationResponse:
    return ECMApplicationResponse.model_validate({
        "source": "archetype",
        "n_scenarios": 1,
        "scenarios": [{
            "scenario_id": "wall+window",
            "description": "Combined",
            "elements": ["wall", "window"],
            "results": {"hourly_building": hourly},
        }],
    })


# =============================================================================
# ARCHETYPE FIXTURES
# =============================================================================

@pytest.fixture
def italy_sfh() -> ArchetypeInfo:
    return ArchetypeInfo("Single Family House", "Italy", "SFH_Italy_1946_1969")


@pytest.fixture
def archetypes(italy_sfh) -> list:
    """Small catalogue spanning several countries and categories."""
    return [
        ArchetypeInfo("Multi family House", "Greece", "MFH_Greece_1980_2000"),
        italy_sfh,
        ArchetypeInfo("Multi family House", "Italy", "MFH_Italy_1970_1990"),
        ArchetypeInfo("Single Family House", "Austria", "SFH_Austria_1960_1980"),
        ArchetypeInfo("Multi family House", "Germany", "MFH_Germany_1950_1970"),
    ]


@pytest.fixture
def bui_payload() -> dict:
    """Minimal BUI payload of a 100 m² archetype."""
    return {
        "building": {
            "name": "SFH_Italy_1946_1969",
            "net_floor_area": 100.0,
            "n_floors": 2,
            "height": 6.0,
            "exposed_perimeter": 40.0,
            "latitude": 41.9,
            "longitude": 12.5,
        },
        "building_surface": [
            {"name": "Roof", "type": "opaque", "area": 60.0, "u_value": 1.8},
            {"name": "Wall North", "type": "opaque", "area": 50.0, "u_value": 1.2},
            {"name": "Wall South", "type": "opaque", "area": 50.0, "u_value": 1.2},
            {"name": "Slab to ground", "type": "opaque", "area": 60.0, "u_value": 1.5},
            {"name": "Window South", "type": "transparent", "area": 12.0, "u_value": 4.9},
            {"name": "Window North", "type": "transparent", "area": 6.0, "u_value": 4.9},
        ],
        "building_parameters": {
            "temperature_setpoints": {
                "heating_setpoint": 20.0,
                "heating_setback": 17.0,
                "cooling_setpoint": 26.0,
                "cooling_setback": 30.0,
            }
        },
    }


@pytest.fixture
def details_response(bui_payload) -> ArchetypeDetailsResponse:
    return ArchetypeDetailsResponse.model_validate({
        "source": "archetype",
        "name": "SFH_Italy_1946_1969",
        "category": "Single Family House",
        "country": "Italy",
        "bui": bui_payload,
        "system": {"heat_emission": {"type": "radiator"}},
    })


# =============================================================================
# CLIENT FIXTURES
# =============================================================================

@pytest.fixture
def mock_client(archetypes, details_response) -> MagicMock:
    """Forecasting client stub: 100 m² archetype, 8000 kWh heating + 2000 kWh cooling."""
    client = MagicMock(spec=ForecastingClient)
    client.list_archetypes.return_value = archetypes
    client.get_archetype_details.return_value = details_response
    client.simulate_archetype.return_value = simulate_response(hourly_rows(8000, 2000), building_area=100.0)
    client.simulate_custom.return_value = simulate_response(hourly_rows(8000, 2000))
    client.apply_ecm.return_value = ecm_response(hourly_columns(4000, 1000))
    return client


@pytest.fixture
def catalogue(mock_client) -> ArchetypeCatalogue:
    return ArchetypeCatalogue(mock_client)


# =============================================================================
# BUILDING FIXTURES
# =============================================================================

@pytest.fixture
def italian_house() -> BuildingInfo:
    """Detached 120 m² house in Italy with a gas boiler."""
    return BuildingInfo(
        country="IT",
        building_type="detached",
        construction_period="1971-1990",
        floor_area=120.0,
        lat=41.9,
        lng=12.5,
        heating_technology="gas-boiler",
        cooling_technology="split-ac",
        hot_water_technology="electric-boiler",
        glazing_technology="double-pvc",
    )


@pytest.fixture
def estimation(italy_sfh) -> EstimationResult:
    """Baseline estimation for the Italian house (12000 kWh, class C)."""
    return EstimationResult(
        epc_class="C",
        annual_energy_needs=12000,
        annual_energy_cost=3000,
        heating_cooling_needs=12000,
        energy_mix=EnergyMixBreakdown(
            heating=EnergyMix(2880, 6720),
            cooling=EnergyMix(2400, 0),
            overall=EnergyMix(5280, 6720),
        ),
        comfort_index=73,
        flexibility_index=50,
        archetype=italy_sfh,
        archetype_floor_area=100.0,
        energy_intensity=100.0,
    )


@pytest.fixture
def scenarios() -> list:
    """Current and renovated scenarios."""
    return [
        RenovationScenario(
            id=ScenarioId.CURRENT,
            label="Current Status",
            epc_class="C",
            annual_energy_needs=12000,
            annual_energy_cost=3000,
            heating_cooling_needs=12000,
            comfort_index=73,
            flexibility_index=50,
        ),
        RenovationScenario(
            id=ScenarioId.RENOVATED,
            label="After Renovation",
            epc_class="A",
            annual_energy_needs=6000,
            annual_energy_cost=1500,
            heating_cooling_needs=6000,
            comfort_index=78,
            flexibility_index=50,
            measures=["Wall Insulation", "Windows"],
        ),
    ]
