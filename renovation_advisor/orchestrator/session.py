"""
AdvisorSession - one homeowner's pass through the decision pipeline.

Stages run in order: estimate -> evaluate -> rank. Each stage's output is
cached on the session and cleared when any of its inputs change:

    building                     -> estimation, scenarios, financial results, ranking
    measures / funding / capex   -> scenarios, financial results, ranking
    persona                      -> ranking

Building and funding objects edited in place are compared against the
copies the last stage used, so stale results are dropped on the next call.

Usage:
    session = AdvisorSession()
    session.building = building
    session.estimate()
    session.selected_measures = ["wall-insulation", "windows"]
    session.capex = 30000
    session.evaluate()
    session.persona_id = "cost-optimization"
    ranking = session.rank()
"""

import copy
import logging
from typing import Dict, List, Optional, Sequence

from ..analysis.energy_profile import EnergyProfileEstimator
from ..analysis.scenarios import RenovationScenarioEvaluator
from ..core.models import (
    BuildingInfo,
    EstimationResult,
    FinancialResult,
    FundingOptions,
    MCDARankingResult,
    RenovationScenario,
    ScenarioId,
)
from ..mcda.ranker import MCDARanker
from ..roi.calculator import FinancialEvaluator
from ..utils.validation import ValidationError, validate_finite

logger = logging.getLogger(__name__)


class AdvisorSession:
    """
    Holds pipeline inputs and cached stage outputs.

    Args:
        estimator: Baseline estimator (default: EnergyProfileEstimator())
        evaluator: Scenario evaluator (default: shares the estimator's client)
        financial: Financial evaluator (default: FinancialEvaluator())
        ranker: MCDA ranker (default: MCDARanker())
    """

    def __init__(
        self,
        estimator: Optional[EnergyProfileEstimator] = None,
        evaluator: Optional[RenovationScenarioEvaluator] = None,
        financial: Optional[FinancialEvaluator] = None,
        ranker: Optional[MCDARanker] = None,
    ):
        self.estimator = estimator or EnergyProfileEstimator()
        self.evaluator = evaluator or RenovationScenarioEvaluator(self.estimator.client)
        self.financial = financial or FinancialEvaluator()
        self.ranker = ranker or MCDARanker()

        # Inputs
        self._building: Optional[BuildingInfo] = None
        self._selected_measures: List[str] = []
        self._funding = FundingOptions()
        self._capex: Optional[float] = None
        self._annual_maintenance_cost = 0.0
        self._persona_id: Optional[str] = None

        # Snapshots of mutable inputs as last used by a stage
        self._estimated_building: Optional[BuildingInfo] = None
        self._evaluated_funding: Optional[FundingOptions] = None

        # Derived
        self.estimation: Optional[EstimationResult] = None
        self.scenarios: List[RenovationScenario] = []
        self.financial_results: Dict[ScenarioId, FinancialResult] = {}
        self.ranking: List[MCDARankingResult] = []

    # =========================================================================
    # Invalidation
    # =========================================================================

    def _clear_ranking(self) -> None:
        self.ranking = []

    def _clear_scenarios(self) -> None:
        self.scenarios = []
        self.financial_results = {}
        self._clear_ranking()

    def _clear_estimation(self) -> None:
        self.estimation = None
        self._clear_scenarios()

    def _sync_inputs(self) -> None:
        """Drop results computed from a building or funding that was since edited in place."""
        if self.estimation is not None and self._building != self._estimated_building:
            logger.info("Building changed since estimation; clearing results")
            self._clear_estimation()
        if self.scenarios and self._funding != self._evaluated_funding:
            logger.info("Funding changed since evaluation; clearing scenarios")
            self._clear_scenarios()

    # =========================================================================
    # Inputs
    # =========================================================================

    @property
    def building(self) -> Optional[BuildingInfo]:
        return self._building

    @building.setter
    def building(self, value: BuildingInfo) -> None:
        self._building = value
        self._clear_estimation()

    @property
    def selected_measures(self) -> List[str]:
        return list(self._selected_measures)

    @selected_measures.setter
    def selected_measures(self, value: Sequence[str]) -> None:
        self._selected_measures = list(value)
        self._clear_scenarios()

    @property
    def funding(self) -> FundingOptions:
        return self._funding

    @funding.setter
    def funding(self, value: FundingOptions) -> None:
        self._funding = value
        self._clear_scenarios()

    @property
    def capex(self) -> Optional[float]:
        return self._capex

    @capex.setter
    def capex(self, value: Optional[float]) -> None:
        if value is not None and validate_finite(value, "capex") < 0:
            raise ValidationError(f"CAPEX must be non-negative, got {value}", field="capex")
        self._capex = None if value is None else float(value)
        self._clear_scenarios()

    @property
    def annual_maintenance_cost(self) -> float:
        return self._annual_maintenance_cost

    @annual_maintenance_cost.setter
    def annual_maintenance_cost(self, value: float) -> None:
        self._annual_maintenance_cost = validate_finite(value, "annual_maintenance_cost")
        self._clear_scenarios()

    @property
    def persona_id(self) -> Optional[str]:
        return self._persona_id

    @persona_id.setter
    def persona_id(self, value: str) -> None:
        self._persona_id = value
        self._clear_ranking()

    # =========================================================================
    # Stages
    # =========================================================================

    def estimate(self) -> EstimationResult:
        """Estimate the building's current energy profile."""
        if self._building is None:
            raise ValidationError("Building information is required before estimation", field="building")
        self._sync_inputs()
        if self.estimation is None:
            snapshot = copy.deepcopy(self._building)
            self.estimation = self.estimator.estimate(snapshot)
            self._estimated_building = snapshot
        return self.estimation

    def evaluate(self) -> List[RenovationScenario]:
        """
        Build scenarios for the selected measures and their financial results.

        Financial results are only computed when a CAPEX is set. Nothing is
        stored unless both steps succeed.
        """
        self._sync_inputs()
        if self.estimation is None:
            raise ValidationError("Run the energy estimation before evaluating scenarios", field="estimation")
        if not self.scenarios:
            funding = copy.deepcopy(self._funding)
            scenarios = self.evaluator.evaluate_scenarios(
                self._estimated_building, self.estimation, self._selected_measures
            )
            financial_results: Dict[ScenarioId, FinancialResult] = {}
            if self._capex is not None:
                financial_results = self.financial.evaluate(
                    scenarios,
                    capex=self._capex,
                    funding=funding,
                    annual_maintenance_cost=self._annual_maintenance_cost,
                )
            else:
                logger.info("No CAPEX set; skipping financial evaluation")
            self.scenarios = scenarios
            self.financial_results = financial_results
            self._evaluated_funding = funding
        return self.scenarios

    def rank(self) -> List[MCDARankingResult]:
        """Rank the renovation scenarios for the current persona."""
        self._sync_inputs()
        if not self.scenarios:
            raise ValidationError("Evaluate renovation scenarios before ranking", field="scenarios")
        if self._persona_id is None:
            raise ValidationError("Select a persona before ranking", field="persona_id")
        if not self.ranking:
            self.ranking = self.ranker.rank(self.scenarios, self.financial_results, self._persona_id)
        return self.ranking
