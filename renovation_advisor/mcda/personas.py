"""
MCDA personas - weighting profiles over the five decision criteria.

Each persona's weights sum to 1.0 (±0.01); this is checked when the
module is imported.
"""

from typing import Dict, List

from ..core.models import CriteriaValues, MCDAPersona
from ..utils.validation import ValidationError

MCDA_PERSONAS: Dict[str, MCDAPersona] = {
    "environmentally-conscious": MCDAPersona(
        id="environmentally-conscious",
        name="Environmentally Conscious",
        description="Prioritizes sustainability and renewable energy integration",
        weights=CriteriaValues(
            sustainability=0.333,
            res_integration=0.267,
            energy_efficiency=0.2,
            user_comfort=0.133,
            financial=0.067,
        ),
    ),
    "comfort-driven": MCDAPersona(
        id="comfort-driven",
        name="Comfort-Driven",
        description="Prioritizes indoor comfort and energy efficiency",
        weights=CriteriaValues(
            user_comfort=0.333,
            energy_efficiency=0.267,
            financial=0.2,
            sustainability=0.133,
            res_integration=0.067,
        ),
    ),
    "cost-optimization": MCDAPersona(
        id="cost-optimization",
        name="Cost-Optimization Oriented",
        description="Prioritizes financial returns and cost savings",
        weights=CriteriaValues(
            financial=0.333,
            energy_efficiency=0.267,
            res_integration=0.2,
            user_comfort=0.133,
            sustainability=0.067,
        ),
    ),
}


def get_personas() -> List[MCDAPersona]:
    return list(MCDA_PERSONAS.values())


def get_persona(persona_id: str) -> MCDAPersona:
    """
    Look up a persona by id.

    Raises:
        ValidationError: If the id is unknown
    """
    try:
        return MCDA_PERSONAS[persona_id]
    except KeyError:
        raise ValidationError(
            f"Unknown persona: {persona_id}",
            field="persona_id",
            suggestions=sorted(MCDA_PERSONAS),
        )
