"""
ROI Calculator - financial viability of a renovation investment.

Metrics:
- Net Present Value (NPV)
- Internal Rate of Return (IRR, Newton-Raphson)
- Simple and discounted payback period
- Return on Investment (ROI)
- Funding split (capital expenditure vs. loan amount)

All functions are pure and deterministic. Inputs are checked before any
calculation; non-finite numbers raise ValidationError.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence
import logging

from ..core.config import settings
from ..core.models import (
    FinancialResult,
    FinancingType,
    FundingOptions,
    RenovationScenario,
    ScenarioId,
)
from ..utils.validation import (
    ValidationError,
    validate_discount_rate,
    validate_energy_arrays,
    validate_finite,
    validate_funding_options,
    validate_period,
    validate_project_lifetime,
)

logger = logging.getLogger(__name__)


IRR_INITIAL_GUESS = 0.1
IRR_TOLERANCE = 1e-4
IRR_MAX_ITERATIONS = 100

# Stands in for "never pays back"
MAX_YEARS_PROXY = 999.0
DISCOUNTED_PAYBACK_MAX_YEARS = 50


# =============================================================================
# CORE METRICS
# =============================================================================


def calculate_npv(initial_investment: float, annual_cash_flow: float, discount_rate: float, years: int) -> float:
    """
    NPV = -I + Σ_{t=1..years} A / (1 + r)^t
    """
    initial_investment = validate_finite(initial_investment, "initial_investment")
    annual_cash_flow = validate_finite(annual_cash_flow, "annual_cash_flow")
    discount_rate = validate_discount_rate(discount_rate)
    years = validate_period(years)

    npv = -initial_investment
    for year in range(1, years + 1):
        npv += annual_cash_flow / (1 + discount_rate) ** year
    return npv


def calculate_irr(initial_investment: float, annual_cash_flow: float, years: int) -> float:
    """
    Internal rate of return by Newton-Raphson.

    Starts at 10%, stops when the derivative or the step falls below the
    tolerance, and never reports a negative rate (returns 0 instead).
    Non-positive cash flows have no meaningful rate and also give 0.
    """
    initial_investment = validate_finite(initial_investment, "initial_investment")
    annual_cash_flow = validate_finite(annual_cash_flow, "annual_cash_flow")
    years = validate_period(years)
    if annual_cash_flow <= 0:
        return 0.0

    irr = IRR_INITIAL_GUESS
    for _ in range(IRR_MAX_ITERATIONS):
        if irr <= -1:
            break

        npv = -initial_investment
        derivative = 0.0
        for year in range(1, years + 1):
            npv += annual_cash_flow / (1 + irr) ** year
            derivative -= year * annual_cash_flow / (1 + irr) ** (year + 1)

        if abs(derivative) < IRR_TOLERANCE:
            break

        new_irr = irr - npv / derivative
        if abs(new_irr - irr) < IRR_TOLERANCE:
            irr = new_irr
            break
        irr = new_irr

    return max(0.0, irr)


def calculate_simple_payback(investment: float, annual_savings: float) -> float:
    """Years to recover the investment, capped at MAX_YEARS_PROXY."""
    investment = validate_finite(investment, "investment")
    annual_savings = validate_finite(annual_savings, "annual_savings")
    if annual_savings <= 0:
        return MAX_YEARS_PROXY
    if investment <= 0:
        return 0.0
    return min(MAX_YEARS_PROXY, investment / annual_savings)


def calculate_discounted_payback(
    investment: float,
    annual_savings: float,
    discount_rate: float,
    max_years: int = DISCOUNTED_PAYBACK_MAX_YEARS,
) -> float:
    """
    Years until discounted savings cover the investment.

    The crossing year is interpolated linearly; MAX_YEARS_PROXY if it is
    not reached within ``max_years``.
    """
    investment = validate_finite(investment, "investment")
    annual_savings = validate_finite(annual_savings, "annual_savings")
    discount_rate = validate_discount_rate(discount_rate)
    max_years = validate_period(max_years, "max_years")
    if annual_savings <= 0:
        return MAX_YEARS_PROXY
    if investment <= 0:
        return 0.0

    cumulative = 0.0
    for year in range(1, max_years + 1):
        discounted = annual_savings / (1 + discount_rate) ** year
        previous = cumulative
        cumulative += discounted
        if cumulative >= investment:
            return year - 1 + (investment - previous) / discounted
    return MAX_YEARS_PROXY


def calculate_roi(investment: float, total_savings: float) -> float:
    """(savings - investment) / investment as a fraction; 0 for no investment."""
    investment = validate_finite(investment, "investment")
    total_savings = validate_finite(total_savings, "total_savings")
    if investment <= 0:
        return 0.0
    return (total_savings - investment) / investment


@dataclass
class FundingSplit:
    effective_cost: float
    loan_amount: float


def apply_funding_reduction(total_cost: float, funding: FundingOptions) -> FundingSplit:
    """
    Split a renovation cost into capital expenditure and loan amount.

    The loan finances part of the same cost; it does not reduce it, so the
    effective cost is always the total cost.
    """
    total_cost = validate_finite(total_cost, "total_cost")
    validate_funding_options(funding)

    loan_amount = 0.0
    if funding.financing_type is FinancingType.LOAN:
        loan_amount = total_cost * (funding.loan.percentage / 100)
    return FundingSplit(effective_cost=total_cost, loan_amount=loan_amount)


def annual_cost_savings(energy_mix: Sequence[float], energy_prices: Sequence[float]) -> float:
    """
    Annual cost of energy per carrier: Σ mix_i · price_i (EUR/yr).

    Raises:
        ValidationError: On mismatched lengths or invalid values
    """
    mix, prices = validate_energy_arrays(energy_mix, energy_prices)
    return sum(m * p for m, p in zip(mix, prices))


# =============================================================================
# PER-SCENARIO EVALUATION
# =============================================================================


class FinancialEvaluator:
    """
    Point-forecast financial metrics for each renovation scenario.

    Usage:
        evaluator = FinancialEvaluator()
        results = evaluator.evaluate(scenarios, capex=30000, funding=FundingOptions())
        print(results[ScenarioId.RENOVATED].net_present_value)
    """

    def __init__(self, discount_rate: Optional[float] = None, project_lifetime: Optional[int] = None):
        self.discount_rate = discount_rate if discount_rate is not None else settings.discount_rate
        self.project_lifetime = project_lifetime if project_lifetime is not None else settings.project_lifetime_years

    def evaluate(
        self,
        scenarios: List[RenovationScenario],
        capex: float,
        funding: FundingOptions,
        annual_maintenance_cost: float = 0.0,
        project_lifetime: Optional[int] = None,
        discount_rate: Optional[float] = None,
    ) -> Dict[ScenarioId, FinancialResult]:
        """
        Evaluate every scenario against the "current" baseline.

        The baseline itself gets all-zero metrics.

        Raises:
            ValidationError: Missing baseline or invalid numeric input
        """
        lifetime = validate_project_lifetime(project_lifetime if project_lifetime is not None else self.project_lifetime)
        rate = validate_discount_rate(discount_rate if discount_rate is not None else self.discount_rate)
        maintenance = validate_finite(annual_maintenance_cost, "annual_maintenance_cost")
        if validate_finite(capex, "capex") < 0:
            raise ValidationError(f"CAPEX must be non-negative, got {capex}", field="capex")
        split = apply_funding_reduction(capex, funding)

        baseline = next((s for s in scenarios if s.id is ScenarioId.CURRENT), None)
        if baseline is None:
            raise ValidationError("Scenario list has no current baseline", field="scenarios")

        results: Dict[ScenarioId, FinancialResult] = {}
        for scenario in scenarios:
            if scenario.id is ScenarioId.CURRENT:
                results[scenario.id] = FinancialResult(
                    net_present_value=0.0,
                    internal_rate_of_return=0.0,
                    return_on_investment=0.0,
                    payback_period=0.0,
                    discounted_payback_period=0.0,
                    capital_expenditure=0.0,
                )
                continue

            savings = baseline.annual_energy_cost - scenario.annual_energy_cost - maintenance
            investment = split.effective_cost
            results[scenario.id] = FinancialResult(
                net_present_value=calculate_npv(investment, savings, rate, lifetime),
                internal_rate_of_return=calculate_irr(investment, savings, lifetime),
                return_on_investment=calculate_roi(investment, savings * lifetime),
                payback_period=calculate_simple_payback(investment, savings),
                discounted_payback_period=calculate_discounted_payback(investment, savings, rate),
                capital_expenditure=investment,
                loan_amount=split.loan_amount,
                annual_savings=savings,
            )
            logger.info(
                f"NPV {results[scenario.id].net_present_value:,.0f} EUR over {lifetime} years "
                f"(savings {savings:,.0f} EUR/yr)",
                extra={"scenario_id": scenario.id.value},
            )

        return results
