"""
MCDA module - persona-weighted TOPSIS ranking of renovation scenarios.
"""

from .personas import MCDA_PERSONAS, get_persona, get_personas
from .topsis import rank_by_score, topsis_scores
from .ranker import MCDARanker, extract_criteria, financial_score

__all__ = [
    "MCDA_PERSONAS",
    "get_persona",
    "get_personas",
    "rank_by_score",
    "topsis_scores",
    "MCDARanker",
    "extract_criteria",
    "financial_score",
]
