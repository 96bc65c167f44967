"""Hourly simulation results aggregation."""

from .results import AnnualTotals, calculate_annual_totals, to_row_records

__all__ = ["AnnualTotals", "calculate_annual_totals", "to_row_records"]
