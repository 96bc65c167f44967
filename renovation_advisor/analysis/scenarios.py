"""
Renovation scenario evaluation.

Compares the current building against the archetype simulated with the
selected envelope measures applied. Results are scaled with the same
archetype floor area as the baseline estimation so the two scenarios are
directly comparable.
"""

import logging
from typing import List, Optional, Sequence

from ..api.forecasting import ForecastingClient
from ..core.config import settings
from ..core.errors import APIResponseError
from ..core.models import (
    SCENARIO_LABELS,
    BuildingInfo,
    EstimationResult,
    RenovationScenario,
    ScenarioId,
)
from ..ecm.catalog import supported_selection
from ..simulation.results import calculate_annual_totals
from ..utils.validation import ValidationError, validate_floor_area
from .energy_profile import area_scale_factor
from .epc import calculate_energy_mix, estimate_energy_cost, get_epc_class, round_energy_mix

logger = logging.getLogger(__name__)

# Fixed heuristic applied to the renovated scenario
RENOVATION_COMFORT_BONUS = 5


class RenovationScenarioEvaluator:
    """
    Build "current" and "renovated" scenarios for a measure selection.

    Usage:
        evaluator = RenovationScenarioEvaluator(client)
        scenarios = evaluator.evaluate_scenarios(building, estimation, ["wall-insulation"])
    """

    def __init__(
        self,
        client: Optional[ForecastingClient] = None,
        energy_price: Optional[float] = None,
        default_floor_area: Optional[float] = None,
        weather_source: Optional[str] = None,
    ):
        self.client = client or ForecastingClient()
        self.energy_price = energy_price if energy_price is not None else settings.energy_price_eur_per_kwh
        self.default_floor_area = validate_floor_area(
            default_floor_area if default_floor_area is not None else settings.default_floor_area_m2
        )
        self.weather_source = weather_source

    def evaluate_scenarios(
        self,
        building: BuildingInfo,
        estimation: EstimationResult,
        selected_measures: Sequence[str],
    ) -> List[RenovationScenario]:
        """
        Evaluate the selected measures against the baseline.

        Returns:
            [current] when no selected measure can be simulated,
            otherwise [current, renovated]

        Raises:
            ValidationError: The estimation carries no archetype
            APIConnectionError: Simulation service unreachable or failing
            APIResponseError: No scenario or malformed hourly data returned
        """
        current = RenovationScenario.from_estimation(estimation)
        measures = supported_selection(selected_measures)

        if not measures:
            logger.info(f"No simulated measure among {list(selected_measures)}; returning baseline only")
            return [current]

        if estimation.archetype is None:
            raise ValidationError(
                "Missing archetype on baseline estimation result",
                field="archetype",
                suggestions=["Run the energy estimation before evaluating renovation scenarios"],
            )
        archetype = estimation.archetype

        elements = [m.element for m in measures]
        u_values = {m.element: m.target_u_value for m in measures}
        response = self.client.apply_ecm(archetype, elements, u_values, weather_source=self.weather_source)

        if not response.scenarios:
            logger.error("ECM simulation returned no scenarios", extra={"archetype_name": archetype.name})
            raise APIResponseError("ECM API did not return a renovated scenario")

        totals = calculate_annual_totals(response.scenarios[0].results.hourly_building)

        user_area = building.floor_area or self.default_floor_area
        archetype_area = estimation.archetype_floor_area or self.default_floor_area
        scaled = totals.scaled(area_scale_factor(user_area, archetype_area))
        intensity = scaled.hvac_kwh / user_area

        renovated = RenovationScenario(
            id=ScenarioId.RENOVATED,
            label=SCENARIO_LABELS[ScenarioId.RENOVATED],
            epc_class=get_epc_class(intensity),
            annual_energy_needs=round(scaled.hvac_kwh),
            annual_energy_cost=round(estimate_energy_cost(scaled.hvac_kwh, self.energy_price)),
            heating_cooling_needs=round(scaled.hvac_kwh),
            comfort_index=min(100, estimation.comfort_index + RENOVATION_COMFORT_BONUS),
            flexibility_index=estimation.flexibility_index,
            measures=[m.name for m in measures],
            energy_mix=round_energy_mix(
                calculate_energy_mix(scaled.heating_kwh, scaled.cooling_kwh, building.heating_technology)
            ),
        )

        logger.info(
            f"Renovated scenario {current.epc_class} -> {renovated.epc_class} "
            f"({current.annual_energy_needs:.0f} -> {renovated.annual_energy_needs:.0f} kWh/yr)",
            extra={"scenario_id": renovated.id.value, "archetype_name": archetype.name},
        )
        return [current, renovated]
