"""
Error taxonomy for the renovation advisor.

Every failure raised by the core carries an ``ErrorKind`` tag so callers can
branch on ``exc.kind`` instead of on concrete exception classes:

- ARCHETYPE_NOT_AVAILABLE: no reference building for the country/category
- API_CONNECTION: transport failure or error status from a collaborator
- API_RESPONSE: collaborator answered with a body we cannot parse
- VALIDATION: malformed user or numeric input (see utils.validation)

Usage:
    try:
        result = estimator.estimate(building)
    except AdvisorError as exc:
        if exc.kind is ErrorKind.API_CONNECTION:
            ...
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Tag identifying the class of failure."""
    ARCHETYPE_NOT_AVAILABLE = "archetype_not_available"
    API_CONNECTION = "api_connection"
    API_RESPONSE = "api_response"
    VALIDATION = "validation"


class AdvisorError(Exception):
    """Base class for all errors raised by the advisor core."""

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ArchetypeNotAvailableError(AdvisorError):
    """No archetype matches the building's country or climate region."""

    kind = ErrorKind.ARCHETYPE_NOT_AVAILABLE

    def __init__(self, country: str, building_type: str):
        super().__init__(
            f"Energy estimation is not yet available for {country} ({building_type}). "
            "This feature is coming soon."
        )
        self.country = country
        self.building_type = building_type


class APIConnectionError(AdvisorError):
    """A collaborator could not be reached or returned an error status."""

    kind = ErrorKind.API_CONNECTION

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(
            message
            or "Unable to connect to the energy service. Please check your connection and try again."
        )
        self.status_code = status_code


class APIResponseError(AdvisorError):
    """A collaborator returned data the core cannot interpret."""

    kind = ErrorKind.API_RESPONSE

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "Received unexpected data from the energy service. Please try again later."
        )
