"""
Tests for the financial metrics calculator.
"""

import math

import pytest

from renovation_advisor.core.models import (
    FinancingType,
    FundingOptions,
    LoanDetails,
    ScenarioId,
)
from renovation_advisor.roi.calculator import (
    MAX_YEARS_PROXY,
    FinancialEvaluator,
    annual_cost_savings,
    apply_funding_reduction,
    calculate_discounted_payback,
    calculate_irr,
    calculate_npv,
    calculate_roi,
    calculate_simple_payback,
)
from renovation_advisor.utils.validation import ValidationError


def loan(percentage=80.0, duration=10, interest_rate=0.05) -> FundingOptions:
    return FundingOptions(
        financing_type=FinancingType.LOAN,
        loan=LoanDetails(percentage=percentage, duration=duration, interest_rate=interest_rate),
    )


class TestNPV:
    """Tests for net present value."""

    def test_zero_rate(self):
        """Test undiscounted NPV is savings minus investment."""
        assert calculate_npv(10000, 1500, 0.0, 10) == pytest.approx(5000)

    def test_known_value(self):
        """Test NPV against the annuity formula."""
        annuity = (1 - 1.04 ** -20) / 0.04
        assert calculate_npv(30000, 1500, 0.04, 20) == pytest.approx(-30000 + 1500 * annuity)

    def test_decreasing_in_rate(self):
        """Test a higher discount rate lowers NPV for positive savings."""
        values = [calculate_npv(10000, 1500, r, 15) for r in (0.0, 0.02, 0.05, 0.1)]
        assert values == sorted(values, reverse=True)

    def test_invalid_rate(self):
        """Test rates at or below -100% are rejected."""
        with pytest.raises(ValidationError):
            calculate_npv(1000, 100, -1.0, 10)

    @pytest.mark.parametrize("years", [0, -3, 2.5])
    def test_invalid_years(self, years):
        """Test the horizon must be a whole number of years, at least one."""
        with pytest.raises(ValidationError):
            calculate_npv(1000, 100, 0.04, years)

    @pytest.mark.parametrize("bad", [math.nan, math.inf, "x", None, True])
    def test_non_finite(self, bad):
        """Test non-finite inputs are rejected before calculating."""
        with pytest.raises(ValidationError):
            calculate_npv(bad, 100, 0.04, 10)


class TestIRR:
    """Tests for internal rate of return."""

    def test_fixed_point(self):
        """Test NPV at the returned rate is zero."""
        irr = calculate_irr(10000, 1500, 10)
        assert 0.07 < irr < 0.09
        assert calculate_npv(10000, 1500, irr, 10) == pytest.approx(0, abs=1.0)

    def test_negative_return_clamped(self):
        """Test investments that never pay back report 0%."""
        assert calculate_irr(10000, 500, 10) == 0.0

    def test_no_savings(self):
        """Test zero savings stops the solver and reports 0%."""
        assert calculate_irr(10000, 0, 10) == 0.0

    @pytest.mark.parametrize("years", [0, -1])
    def test_invalid_years(self, years):
        """Test an empty horizon is rejected instead of returning the initial guess."""
        with pytest.raises(ValidationError):
            calculate_irr(1000, 100, years)


class TestPayback:
    """Tests for payback periods."""

    def test_simple(self):
        """Test simple payback is investment over savings."""
        assert calculate_simple_payback(30000, 1500) == pytest.approx(20)

    def test_no_savings(self):
        """Test non-positive savings never pay back."""
        assert calculate_simple_payback(30000, 0) == MAX_YEARS_PROXY
        assert calculate_discounted_payback(30000, -10, 0.04) == MAX_YEARS_PROXY

    def test_capped(self):
        """Test very long paybacks are capped."""
        assert calculate_simple_payback(1e9, 1) == MAX_YEARS_PROXY

    def test_no_investment(self):
        """Test free measures pay back immediately."""
        assert calculate_simple_payback(0, 100) == 0.0
        assert calculate_discounted_payback(0, 100, 0.04) == 0.0

    @pytest.mark.parametrize("rate", [0.01, 0.04, 0.08])
    def test_discounted_not_shorter(self, rate):
        """Test discounting can only delay payback."""
        assert calculate_discounted_payback(10000, 1500, rate) >= calculate_simple_payback(10000, 1500)

    def test_discounted_zero_rate_matches_simple(self):
        """Test interpolation gives the simple payback without discounting."""
        assert calculate_discounted_payback(10000, 1500, 0.0) == pytest.approx(10000 / 1500)

    def test_discounted_never_reached(self):
        """Test payback beyond the horizon returns the proxy."""
        assert calculate_discounted_payback(30000, 1000, 0.05) == MAX_YEARS_PROXY

    @pytest.mark.parametrize("rate", [-1.0, -1.5])
    def test_discounted_invalid_rate(self, rate):
        """Test rates at or below -100% are rejected."""
        with pytest.raises(ValidationError):
            calculate_discounted_payback(1000, 100, rate)

    def test_discounted_invalid_max_years(self):
        """Test the search horizon must be at least one year."""
        with pytest.raises(ValidationError):
            calculate_discounted_payback(1000, 100, 0.04, max_years=0)


class TestROIAndFunding:
    """Tests for ROI and the funding split."""

    def test_roi(self):
        """Test ROI as a fraction."""
        assert calculate_roi(10000, 15000) == pytest.approx(0.5)
        assert calculate_roi(0, 15000) == 0.0

    def test_loan_split(self):
        """Test an 80% loan on 30000 EUR."""
        split = apply_funding_reduction(30000, loan())
        assert split.effective_cost == 30000
        assert split.loan_amount == pytest.approx(24000)

    def test_self_funded(self):
        """Test self funding has no loan."""
        split = apply_funding_reduction(30000, FundingOptions())
        assert split.loan_amount == 0

    @pytest.mark.parametrize("funding", [
        loan(percentage=120),
        loan(duration=0),
        loan(interest_rate=5),
    ])
    def test_invalid_loan(self, funding):
        """Test out-of-range loan terms are rejected."""
        with pytest.raises(ValidationError):
            apply_funding_reduction(30000, funding)

    def test_invalid_loan_ignored_when_self_funded(self):
        """Test loan terms are not checked for self funding."""
        funding = FundingOptions(loan=LoanDetails(percentage=500))
        assert apply_funding_reduction(1000, funding).loan_amount == 0

    def test_financing_type_from_string(self):
        """Test financing types are coerced from their values."""
        assert FundingOptions(financing_type="loan").financing_type is FinancingType.LOAN


class TestEnergyCost:
    """Tests for the per-carrier cost sum."""

    def test_cost(self):
        """Test cost is the dot product of mix and prices."""
        assert annual_cost_savings([2000, 1500], [0.15, 0.12]) == pytest.approx(480)

    def test_length_mismatch(self):
        """Test a price per carrier is required."""
        with pytest.raises(ValidationError, match="Got 3 energy sources but 2 prices"):
            annual_cost_savings([1, 2, 3], [0.1, 0.2])

    def test_negative_price(self):
        """Test negative prices are rejected."""
        with pytest.raises(ValidationError):
            annual_cost_savings([1000], [-0.1])


class TestFinancialEvaluator:
    """Tests for per-scenario evaluation."""

    @pytest.fixture
    def evaluator(self):
        return FinancialEvaluator(discount_rate=0.04, project_lifetime=20)

    def test_current_is_zero(self, evaluator, scenarios):
        """Test the baseline gets all-zero metrics."""
        results = evaluator.evaluate(scenarios, capex=30000, funding=FundingOptions())
        current = results[ScenarioId.CURRENT]
        assert current.net_present_value == 0
        assert current.capital_expenditure == 0
        assert current.payback_period == 0

    def test_renovated(self, evaluator, scenarios):
        """Test metrics from 1500 EUR/yr savings on 30000 EUR."""
        result = evaluator.evaluate(scenarios, capex=30000, funding=FundingOptions())[ScenarioId.RENOVATED]
        assert result.annual_savings == pytest.approx(1500)
        assert result.payback_period == pytest.approx(20)
        assert result.return_on_investment == pytest.approx(0)
        assert result.net_present_value == pytest.approx(calculate_npv(30000, 1500, 0.04, 20))
        assert 20 < result.discounted_payback_period < 50
        assert result.capital_expenditure == 30000
        assert result.loan_amount == 0

    def test_loan(self, evaluator, scenarios):
        """Test the loan amount is reported and the full cost is invested."""
        result = evaluator.evaluate(scenarios, capex=30000, funding=loan())[ScenarioId.RENOVATED]
        assert result.loan_amount == pytest.approx(24000)
        assert result.capital_expenditure == 30000

    def test_maintenance_reduces_savings(self, evaluator, scenarios):
        """Test annual maintenance is deducted from savings."""
        result = evaluator.evaluate(
            scenarios, capex=30000, funding=FundingOptions(), annual_maintenance_cost=500
        )[ScenarioId.RENOVATED]
        assert result.annual_savings == pytest.approx(1000)
        assert result.payback_period == pytest.approx(30)

    def test_overrides(self, evaluator, scenarios):
        """Test lifetime and rate can be overridden per call."""
        result = evaluator.evaluate(
            scenarios, capex=10000, funding=FundingOptions(), project_lifetime=10, discount_rate=0.0
        )[ScenarioId.RENOVATED]
        assert result.net_present_value == pytest.approx(5000)

    def test_missing_baseline(self, evaluator, scenarios):
        """Test scenarios without a baseline are rejected."""
        with pytest.raises(ValidationError):
            evaluator.evaluate(scenarios[1:], capex=30000, funding=FundingOptions())

    @pytest.mark.parametrize("kwargs", [
        {"capex": -1},
        {"capex": math.nan},
        {"capex": 1000, "project_lifetime": 31},
        {"capex": 1000, "project_lifetime": 2.5},
    ])
    def test_invalid_inputs(self, evaluator, scenarios, kwargs):
        """Test invalid CAPEX and lifetimes are rejected."""
        with pytest.raises(ValidationError):
            evaluator.evaluate(scenarios, funding=FundingOptions(), **kwargs)

    def test_zero_lifetime_not_replaced_by_default(self, scenarios):
        """Test an explicit zero lifetime is rejected rather than defaulted."""
        with pytest.raises(ValidationError):
            FinancialEvaluator(project_lifetime=0).evaluate(scenarios, capex=1000, funding=FundingOptions())
        with pytest.raises(ValidationError):
            FinancialEvaluator().evaluate(scenarios, capex=1000, funding=FundingOptions(), project_lifetime=0)

    def test_zero_rate_override_is_used(self, scenarios):
        """Test an explicit zero discount rate is honoured."""
        evaluator = FinancialEvaluator(discount_rate=0.0, project_lifetime=10)
        result = evaluator.evaluate(scenarios, capex=10000, funding=FundingOptions())[ScenarioId.RENOVATED]
        assert result.net_present_value == pytest.approx(5000)

    def test_deterministic(self, evaluator, scenarios):
        """Test repeated evaluation gives identical results."""
        first = evaluator.evaluate(scenarios, capex=30000, funding=loan())
        second = evaluator.evaluate(scenarios, capex=30000, funding=loan())
        assert first == second
