"""
Energy profile estimation for a user building.

Matches the building to a reference archetype, simulates the archetype
(or a user-modified copy of it), aggregates the hourly loads and scales
them to the user's floor area.

Usage:
    from renovation_advisor.analysis.energy_profile import EnergyProfileEstimator

    estimator = EnergyProfileEstimator()
    result = estimator.estimate(building)
    print(result.epc_class, result.annual_energy_needs)
"""

import logging
from typing import Optional

from ..api.forecasting import ForecastingClient
from ..api.schemas import SimulateResponse
from ..baseline.archetypes import ArchetypeCatalogue, ArchetypeMatcher, get_default_catalogue
from ..baseline.modifier import apply_all_modifications, summarize_details
from ..core.config import settings
from ..core.models import ArchetypeInfo, BuildingInfo, EstimationResult
from ..simulation.results import AnnualTotals, calculate_annual_totals
from ..utils.validation import validate_floor_area
from .epc import (
    calculate_comfort_index,
    calculate_energy_mix,
    calculate_flexibility_index,
    estimate_energy_cost,
    get_epc_class,
    round_energy_mix,
)

logger = logging.getLogger(__name__)


def area_scale_factor(user_floor_area: float, archetype_floor_area: float) -> float:
    """Ratio used to scale archetype loads to the user's building."""
    return user_floor_area / archetype_floor_area


class EnergyProfileEstimator:
    """
    Estimate current energy performance from an archetype simulation.

    Args:
        client: Forecasting client (default: the catalogue's client)
        catalogue: Archetype catalogue (default: process-wide catalogue,
            or a fresh one around ``client`` when only a client is given)
        energy_price: Tariff in EUR/kWh (default: settings)
        default_floor_area: Fallback floor area in m² (default: settings)
        weather_source: Weather selector (default: client default)
    """

    def __init__(
        self,
        client: Optional[ForecastingClient] = None,
        catalogue: Optional[ArchetypeCatalogue] = None,
        energy_price: Optional[float] = None,
        default_floor_area: Optional[float] = None,
        weather_source: Optional[str] = None,
    ):
        if catalogue is None:
            catalogue = ArchetypeCatalogue(client) if client is not None else get_default_catalogue()
        self.catalogue = catalogue
        self.client = client or catalogue.client
        self.matcher = ArchetypeMatcher(catalogue)
        self.energy_price = energy_price if energy_price is not None else settings.energy_price_eur_per_kwh
        self.default_floor_area = validate_floor_area(
            default_floor_area if default_floor_area is not None else settings.default_floor_area_m2
        )
        self.weather_source = weather_source

    def estimate(self, building: BuildingInfo) -> EstimationResult:
        """
        Estimate EPC class, energy need and cost, energy mix and indices.

        Raises:
            ArchetypeNotAvailableError: No archetype for the country/region
            APIConnectionError: Simulation service unreachable or failing
            APIResponseError: Simulation returned malformed or empty data
            ValidationError: Invalid archetype modifications
        """
        match = self.matcher.match(building)
        archetype = match.archetype

        response = self._simulate(building, archetype)
        totals = calculate_annual_totals(response.results.hourly_building)

        archetype_area = response.building_area or self.default_floor_area
        user_area = building.floor_area or self.default_floor_area
        result = self.build_result(building, totals, user_area, archetype_area)
        result.archetype = archetype

        logger.info(
            f"Estimated EPC {result.epc_class} at {result.energy_intensity:.1f} kWh/m²/yr",
            extra={"archetype_name": archetype.name},
        )
        return result

    def _simulate(self, building: BuildingInfo, archetype: ArchetypeInfo) -> SimulateResponse:
        modifications = building.modifications
        if building.is_modified and modifications is not None and not modifications.is_empty():
            details = summarize_details(self.catalogue.details(archetype))
            bui, system = apply_all_modifications(details, modifications)
            return self.client.simulate_custom(bui, system, weather_source=self.weather_source)
        return self.client.simulate_archetype(archetype, weather_source=self.weather_source)

    def build_result(
        self,
        building: BuildingInfo,
        totals: AnnualTotals,
        user_area: float,
        archetype_area: float,
    ) -> EstimationResult:
        """Scale archetype totals to the building and derive the profile."""
        scaled = totals.scaled(area_scale_factor(user_area, archetype_area))
        intensity = scaled.hvac_kwh / user_area

        return EstimationResult(
            epc_class=get_epc_class(intensity),
            annual_energy_needs=round(scaled.hvac_kwh),
            annual_energy_cost=round(estimate_energy_cost(scaled.hvac_kwh, self.energy_price)),
            heating_cooling_needs=round(scaled.hvac_kwh),
            energy_mix=round_energy_mix(
                calculate_energy_mix(scaled.heating_kwh, scaled.cooling_kwh, building.heating_technology)
            ),
            comfort_index=round(calculate_comfort_index(building)),
            flexibility_index=round(calculate_flexibility_index(building)),
            archetype_floor_area=archetype_area,
            energy_intensity=intensity,
        )
