"""Utility modules."""

from .logging_config import (
    get_logger,
    setup_logging,
    ensure_logging,
    AdvisorFormatter,
    FileFormatter,
)
from .validation import (
    validate_finite,
    validate_floor_area,
    validate_coordinates,
    validate_project_lifetime,
    validate_funding_options,
    validate_energy_arrays,
    validate_period,
    validate_discount_rate,
    ValidationError,
)

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    "ensure_logging",
    "AdvisorFormatter",
    "FileFormatter",
    # Validation
    "validate_finite",
    "validate_floor_area",
    "validate_coordinates",
    "validate_project_lifetime",
    "validate_funding_options",
    "validate_energy_arrays",
    "validate_period",
    "validate_discount_rate",
    "ValidationError",
]
