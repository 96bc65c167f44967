"""
Hourly results aggregation.

The simulator reports hourly loads in Wh, either as row records
(``/simulate``) or as columns of equal-length arrays (``/ecm_application``).
Heating and cooling come from ``Q_H``/``Q_C`` when both are present;
otherwise ``Q_HC`` is split by sign (positive = heating, negative = cooling).
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Union
import logging

import numpy as np

from ..core.errors import APIResponseError

logger = logging.getLogger(__name__)

WH_PER_KWH = 1000.0
HOURS_PER_YEAR = 8760


@dataclass
class AnnualTotals:
    """Annual load totals (kWh)."""
    heating_kwh: float
    cooling_kwh: float
    hvac_kwh: float
    hours: int

    def scaled(self, factor: float) -> "AnnualTotals":
        return AnnualTotals(
            heating_kwh=self.heating_kwh * factor,
            cooling_kwh=self.cooling_kwh * factor,
            hvac_kwh=self.hvac_kwh * factor,
            hours=self.hours,
        )


def to_row_records(hourly: Union[Sequence[Mapping[str, Any]], Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Normalise hourly data to a list of row records.

    Columnar input ``{"Q_H": [..], "Q_C": [..]}`` is transposed; the row
    count is the length of the first column.

    Raises:
        APIResponseError: If a column is not an array
    """
    if not isinstance(hourly, Mapping):
        return [dict(record) for record in hourly]

    keys = list(hourly.keys())
    if not keys:
        return []

    for key in keys:
        if not isinstance(hourly[key], (list, tuple, np.ndarray)):
            raise APIResponseError(
                f"Invalid columnar hourly data: {key} is not an array "
                f"(got {type(hourly[key]).__name__})"
            )

    n_hours = len(hourly[keys[0]])
    return [
        {key: hourly[key][i] for key in keys if i < len(hourly[key])}
        for i in range(n_hours)
    ]


def _column(records: Sequence[Mapping[str, Any]], key: str) -> np.ndarray:
    """Column as float array with NaN where the value is missing."""
    return np.array(
        [np.nan if record.get(key) is None else float(record[key]) for record in records],
        dtype=float,
    )


def calculate_annual_totals(hourly: Union[Sequence[Mapping[str, Any]], Mapping[str, Any]]) -> AnnualTotals:
    """
    Sum hourly heating, cooling and HVAC loads into annual kWh.

    Args:
        hourly: Row records or columnar arrays of hourly loads in Wh

    Returns:
        AnnualTotals in kWh

    Raises:
        APIResponseError: If the data is empty or not numeric
    """
    records = to_row_records(hourly)
    if not records:
        raise APIResponseError("Simulation response has empty hourly building data")

    try:
        q_h = _column(records, "Q_H")
        q_c = _column(records, "Q_C")
        q_hc = np.nan_to_num(_column(records, "Q_HC"), nan=0.0)
    except (TypeError, ValueError) as e:
        raise APIResponseError(f"Non-numeric hourly load values: {e}") from e

    separate = ~np.isnan(q_h) & ~np.isnan(q_c)
    heating = np.where(separate, np.nan_to_num(q_h), np.where(q_hc > 0, q_hc, 0.0))
    cooling = np.where(separate, np.abs(np.nan_to_num(q_c)), np.where(q_hc < 0, -q_hc, 0.0))

    if len(records) != HOURS_PER_YEAR:
        logger.debug(f"Hourly series has {len(records)} records (expected {HOURS_PER_YEAR})")

    heating_kwh = float(heating.sum()) / WH_PER_KWH
    cooling_kwh = float(cooling.sum()) / WH_PER_KWH
    return AnnualTotals(
        heating_kwh=heating_kwh,
        cooling_kwh=cooling_kwh,
        hvac_kwh=heating_kwh + cooling_kwh,
        hours=len(records),
    )
