"""
ROI module - financial metrics for renovation investments.

Features:
- NPV, IRR, ROI
- Simple and discounted payback period
- Loan / self-funded cost split
- Per-scenario evaluation against the baseline
"""

from .calculator import (
    MAX_YEARS_PROXY,
    FinancialEvaluator,
    FundingSplit,
    annual_cost_savings,
    apply_funding_reduction,
    calculate_discounted_payback,
    calculate_irr,
    calculate_npv,
    calculate_roi,
    calculate_simple_payback,
)

__all__ = [
    "MAX_YEARS_PROXY",
    "FinancialEvaluator",
    "FundingSplit",
    "annual_cost_savings",
    "apply_funding_reduction",
    "calculate_discounted_payback",
    "calculate_irr",
    "calculate_npv",
    "calculate_roi",
    "calculate_simple_payback",
]
