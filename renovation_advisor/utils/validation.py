"""
Input validation utilities for the renovation advisor.

Provides validation for building data, coordinates, funding terms and the
numeric inputs of the financial calculators. Every check raises
``ValidationError`` before any calculation proceeds.

Usage:
    from renovation_advisor.utils.validation import (
        validate_floor_area,
        validate_energy_arrays,
        ValidationError,
    )

    area = validate_floor_area(120.0)
    validate_energy_arrays([2000, 1500], [0.15, 0.12])
"""

import math
from typing import List, Optional, Sequence, Tuple
import logging

from ..core.errors import AdvisorError, ErrorKind

logger = logging.getLogger(__name__)


class ValidationError(AdvisorError, ValueError):
    """Raised when input validation fails."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, field: str = "", suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field = field
        self.suggestions = suggestions or []


# Floor area range accepted by the input forms (m²)
BUILDING_AREA_MIN = 10
BUILDING_AREA_MAX = 1000

PROJECT_LIFETIME_MIN = 1
PROJECT_LIFETIME_MAX = 30


def validate_finite(value: float, field: str = "value") -> float:
    """
    Check that a value is a real, finite number.

    Args:
        value: Number to check
        field: Field name used in the error message

    Returns:
        The value as float

    Raises:
        ValidationError: If value is not numeric, NaN or infinite
    """
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number, got a boolean", field=field)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(
            f"Invalid numeric input for {field}: {value!r}",
            field=field,
            suggestions=["Please ensure all fields contain valid numbers."],
        )
    if not math.isfinite(number):
        raise ValidationError(
            f"{field} must be finite, got {number}",
            field=field,
            suggestions=["Please ensure all fields contain valid numbers."],
        )
    return number


def validate_floor_area(area: float) -> float:
    """
    Validate building floor area.

    Areas outside the form range are accepted but logged; only
    non-positive or non-finite values are rejected.

    Raises:
        ValidationError: If area is not strictly positive
    """
    area = validate_finite(area, "floor_area")
    if area <= 0:
        raise ValidationError(
            f"Floor area must be positive, got {area}",
            field="floor_area",
            suggestions=[f"Enter a floor area between {BUILDING_AREA_MIN} and {BUILDING_AREA_MAX} m²"],
        )
    if area < BUILDING_AREA_MIN or area > BUILDING_AREA_MAX:
        logger.warning(f"Unusual floor area {area} m² (expected {BUILDING_AREA_MIN}-{BUILDING_AREA_MAX})")
    return area


def validate_coordinates(lat: float, lng: float) -> Tuple[float, float]:
    """
    Validate WGS84 coordinates.

    Returns:
        Tuple of (lat, lng) as floats

    Raises:
        ValidationError: If coordinates are out of range
    """
    lat = validate_finite(lat, "lat")
    lng = validate_finite(lng, "lng")
    if not -90 <= lat <= 90:
        raise ValidationError(f"Latitude {lat} out of range [-90, 90]", field="lat")
    if not -180 <= lng <= 180:
        raise ValidationError(f"Longitude {lng} out of range [-180, 180]", field="lng")
    return lat, lng


def validate_project_lifetime(years: int) -> int:
    """Validate project lifetime in years (1-30)."""
    value = validate_finite(years, "project_lifetime")
    if value != int(value) or not PROJECT_LIFETIME_MIN <= value <= PROJECT_LIFETIME_MAX:
        raise ValidationError(
            f"Project lifetime must be a whole number of years between "
            f"{PROJECT_LIFETIME_MIN} and {PROJECT_LIFETIME_MAX}, got {years}",
            field="project_lifetime",
        )
    return int(value)


def validate_period(years: int, field: str = "years") -> int:
    """Validate a whole number of years, at least 1."""
    value = validate_finite(years, field)
    if value != int(value) or value < 1:
        raise ValidationError(f"{field} must be a whole number of years of at least 1, got {years}", field=field)
    return int(value)


def validate_discount_rate(rate: float, field: str = "discount_rate") -> float:
    """Validate a fractional discount rate; must be greater than -1."""
    rate = validate_finite(rate, field)
    if rate <= -1:
        raise ValidationError(f"Discount rate must be greater than -1, got {rate}", field=field)
    return rate


def validate_funding_options(funding) -> None:
    """
    Validate loan terms on a FundingOptions instance.

    Self-funded options are always valid; loan terms are only checked when
    the financing type is a loan.

    Raises:
        ValidationError: If loan percentage, duration or rate is out of range
    """
    from ..core.models import FinancingType

    if funding.financing_type is not FinancingType.LOAN:
        return

    loan = funding.loan
    percentage = validate_finite(loan.percentage, "loan.percentage")
    if not 0 <= percentage <= 100:
        raise ValidationError(
            f"Loan percentage must be between 0 and 100, got {percentage}",
            field="loan.percentage",
        )
    duration = validate_finite(loan.duration, "loan.duration")
    if duration < 1:
        raise ValidationError(f"Loan duration must be at least 1 year, got {duration}", field="loan.duration")
    rate = validate_finite(loan.interest_rate, "loan.interest_rate")
    if not 0 <= rate <= 1:
        raise ValidationError(
            f"Loan interest rate must be a fraction between 0 and 1, got {rate}",
            field="loan.interest_rate",
            suggestions=["Enter 0.05 for a 5% annual rate"],
        )


def validate_energy_arrays(
    energy_mix: Sequence[float],
    energy_prices: Sequence[float],
) -> Tuple[List[float], List[float]]:
    """
    Validate paired energy-mix and energy-price arrays.

    Args:
        energy_mix: Annual energy per carrier (kWh)
        energy_prices: Price per carrier (EUR/kWh)

    Returns:
        Both arrays as lists of floats

    Raises:
        ValidationError: On length mismatch or non-finite/negative entries
    """
    if len(energy_mix) != len(energy_prices):
        raise ValidationError(
            "Energy mix and energy prices must have the same number of values. "
            f"Got {len(energy_mix)} energy sources but {len(energy_prices)} prices.",
            field="energy_mix",
        )

    mix = [validate_finite(v, "energy_mix") for v in energy_mix]
    prices = [validate_finite(v, "energy_prices") for v in energy_prices]

    for name, values in (("energy_mix", mix), ("energy_prices", prices)):
        if any(v < 0 for v in values):
            raise ValidationError(f"{name} values must be non-negative", field=name)

    return mix, prices

