"""
MCDA ranking of renovation scenarios.

Turns each renovation alternative into a criteria vector (all on [0, 1],
higher is better) and ranks the alternatives with TOPSIS under a persona's
weights. The "current" baseline is only used as the energy reference and
is never ranked.

Usage:
    ranker = MCDARanker()
    ranking = ranker.rank(scenarios, financial_results, "cost-optimization")
"""

import logging
import math
from typing import Dict, List, Optional

from ..analysis.epc import EPC_ORDER, epc_index
from ..core.models import (
    CriteriaValues,
    FinancialResult,
    MCDARankingResult,
    RenovationScenario,
    ScenarioId,
)
from .personas import get_persona
from .topsis import rank_by_score, topsis_scores

logger = logging.getLogger(__name__)

# ROI fraction that maps to a full score (2.0 = 200 %)
MAX_ROI_NORMALIZATION = 2.0
NPV_NORMALIZATION_EUR = 50000.0


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def financial_score(financial: Optional[FinancialResult]) -> float:
    """Mean of the ROI score and a tanh-squashed NPV score; 0 without results."""
    if financial is None:
        return 0.0
    roi_score = _clamp01(financial.return_on_investment / MAX_ROI_NORMALIZATION)
    squashed = math.tanh(financial.net_present_value / NPV_NORMALIZATION_EUR)
    npv_score = 0.5 + 0.5 * squashed if financial.net_present_value > 0 else 0.5 * squashed
    return (roi_score + npv_score) / 2


def extract_criteria(
    scenario: RenovationScenario,
    financial: Optional[FinancialResult],
    baseline_energy: float,
) -> CriteriaValues:
    """Criteria vector for one scenario, each value clamped to [0, 1]."""
    energy_efficiency = 1 - scenario.annual_energy_needs / baseline_energy if baseline_energy > 0 else 0.0
    res_integration = epc_index(scenario.epc_class) / (len(EPC_ORDER) - 1)
    sustainability = (energy_efficiency + res_integration) / 2

    return CriteriaValues(
        financial=_clamp01(financial_score(financial)),
        energy_efficiency=_clamp01(energy_efficiency),
        user_comfort=_clamp01(scenario.comfort_index / 100),
        sustainability=_clamp01(sustainability),
        res_integration=_clamp01(res_integration),
    )


class MCDARanker:
    """Rank renovation alternatives for a persona."""

    def rank(
        self,
        scenarios: List[RenovationScenario],
        financial_results: Dict[ScenarioId, FinancialResult],
        persona_id: str,
    ) -> List[MCDARankingResult]:
        """
        Rank every non-baseline scenario, best first.

        Scores are rounded to 2 decimals in the result; ordering uses the
        unrounded scores.

        Raises:
            ValidationError: If persona_id is unknown
        """
        persona = get_persona(persona_id)

        alternatives = [s for s in scenarios if s.id is not ScenarioId.CURRENT]
        if not alternatives:
            logger.info("No renovation alternatives to rank", extra={"persona_id": persona_id})
            return []

        baseline = next((s for s in scenarios if s.id is ScenarioId.CURRENT), alternatives[0])
        matrix = [
            extract_criteria(s, financial_results.get(s.id), baseline.annual_energy_needs).as_vector()
            for s in alternatives
        ]
        scores = topsis_scores(matrix, persona.weights.as_vector())

        ranking = [
            MCDARankingResult(
                scenario_id=alternatives[index].id,
                rank=rank,
                closeness_score=round(float(scores[index]), 2),
            )
            for index, rank in rank_by_score(scores)
        ]
        logger.info(
            f"Ranked {len(ranking)} alternative(s) for {persona.name}",
            extra={"persona_id": persona_id},
        )
        return ranking
