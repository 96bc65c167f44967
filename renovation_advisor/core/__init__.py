"""Core errors and configuration. Domain models live in ``core.models``."""

from .errors import (
    ErrorKind,
    AdvisorError,
    ArchetypeNotAvailableError,
    APIConnectionError,
    APIResponseError,
)
from .config import Settings, settings

__all__ = [
    "ErrorKind",
    "AdvisorError",
    "ArchetypeNotAvailableError",
    "APIConnectionError",
    "APIResponseError",
    "Settings",
    "settings",
]
