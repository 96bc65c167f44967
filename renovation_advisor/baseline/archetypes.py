"""
Archetype catalogue and matching.

Maps a user building onto one of the simulator's reference buildings.
Matching priority (first hit wins):

1. Same country + matching category
2. Same country, any category
3. Same climate region + matching category
4. Same climate region, any category
5. Nothing -> ArchetypeNotAvailableError

Rules 2-4 are fallbacks and log a warning.

The catalogue is fetched once per process and kept for its lifetime; there
is no expiry. ``get_default_catalogue()`` returns the shared instance.

Usage:
    from renovation_advisor.baseline.archetypes import ArchetypeMatcher

    matcher = ArchetypeMatcher()
    match = matcher.match(building)
    print(match.archetype.name, match.rule)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, TYPE_CHECKING

from ..core.errors import ArchetypeNotAvailableError
from ..core.models import ArchetypeInfo, BuildingInfo

if TYPE_CHECKING:
    from ..api.forecasting import ForecastingClient
    from ..api.schemas import ArchetypeDetailsResponse

logger = logging.getLogger(__name__)


# =============================================================================
# REFERENCE TABLES
# =============================================================================

SINGLE_FAMILY_HOUSE = "Single Family House"
MULTI_FAMILY_HOUSE = "Multi family House"

BUILDING_TYPE_TO_CATEGORY: Dict[str, str] = {
    "apartment": MULTI_FAMILY_HOUSE,
    "terraced": MULTI_FAMILY_HOUSE,
    "semi-detached": SINGLE_FAMILY_HOUSE,
    "detached": SINGLE_FAMILY_HOUSE,
}

COUNTRY_CODES: Dict[str, str] = {
    "AT": "Austria",
    "BE": "Belgium",
    "DE": "Germany",
    "ES": "Spain",
    "FR": "France",
    "GR": "Greece",
    "IT": "Italy",
    "NL": "Netherlands",
    "PT": "Portugal",
    "FI": "Finland",
    "SE": "Sweden",
    "NO": "Norway",
    "DK": "Denmark",
    "PL": "Poland",
    "CZ": "Czech Republic",
    "HU": "Hungary",
    "RO": "Romania",
}

# Countries grouped by similar climate
CLIMATE_REGIONS: Dict[str, List[str]] = {
    "mediterranean": ["Greece", "Italy", "Spain", "Portugal"],
    "central": ["Germany", "Austria", "Netherlands", "Belgium", "France"],
    "northern": ["Finland", "Sweden", "Norway", "Denmark"],
    "eastern": ["Poland", "Czech Republic", "Hungary", "Romania"],
}


def country_name(code: str) -> str:
    """Simulator country name for an ISO code; unknown codes pass through."""
    return COUNTRY_CODES.get(code.upper(), code)


def category_for(building_type: str) -> str:
    return BUILDING_TYPE_TO_CATEGORY.get(building_type, SINGLE_FAMILY_HOUSE)


def get_climate_region(country: str) -> Optional[str]:
    for region, countries in CLIMATE_REGIONS.items():
        if country in countries:
            return region
    return None


# =============================================================================
# CATALOGUE
# =============================================================================


class ArchetypeCatalogue:
    """
    Memoized archetype list and per-archetype details.

    Both caches live as long as the instance. Fetches go through the
    forecasting client; failures propagate and leave the cache empty so
    the next call tries again.
    """

    def __init__(self, client: Optional["ForecastingClient"] = None):
        if client is None:
            from ..api.forecasting import ForecastingClient
            client = ForecastingClient()
        self.client = client
        self._archetypes: Optional[List[ArchetypeInfo]] = None
        self._details: Dict[ArchetypeInfo, "ArchetypeDetailsResponse"] = {}
        self._lock = threading.Lock()

    def list(self) -> List[ArchetypeInfo]:
        """All archetypes, fetched on first call."""
        with self._lock:
            if self._archetypes is None:
                self._archetypes = self.client.list_archetypes()
            return list(self._archetypes)

    def details(self, archetype: ArchetypeInfo) -> "ArchetypeDetailsResponse":
        """BUI/system payloads of one archetype, fetched on first call."""
        with self._lock:
            if archetype not in self._details:
                self._details[archetype] = self.client.get_archetype_details(archetype)
            return self._details[archetype]

    def clear(self) -> None:
        with self._lock:
            self._archetypes = None
            self._details.clear()


_default_catalogue: Optional[ArchetypeCatalogue] = None
_default_lock = threading.Lock()


def get_default_catalogue() -> ArchetypeCatalogue:
    """Process-wide catalogue backed by a default ForecastingClient."""
    global _default_catalogue
    with _default_lock:
        if _default_catalogue is None:
            _default_catalogue = ArchetypeCatalogue()
        return _default_catalogue


# =============================================================================
# MATCHING
# =============================================================================


class MatchRule(Enum):
    """Which priority rule produced a match."""
    SELECTED = "selected"
    EXACT = "country_and_category"
    COUNTRY = "country"
    REGION_CATEGORY = "region_and_category"
    REGION = "region"


@dataclass
class ArchetypeMatch:
    archetype: ArchetypeInfo
    rule: MatchRule
    country: str
    category: str

    @property
    def is_fallback(self) -> bool:
        return self.rule in (MatchRule.COUNTRY, MatchRule.REGION_CATEGORY, MatchRule.REGION)


def find_matching_archetype(
    archetypes: List[ArchetypeInfo],
    building: BuildingInfo,
) -> ArchetypeMatch:
    """
    Pick the archetype for a building from a catalogue list.

    A ``building.selected_archetype`` present in the list wins outright.

    Raises:
        ArchetypeNotAvailableError: If no rule matches
    """
    country = country_name(building.country)
    category = category_for(building.building_type)

    if building.selected_archetype is not None and building.selected_archetype in archetypes:
        return ArchetypeMatch(building.selected_archetype, MatchRule.SELECTED, country, category)

    for archetype in archetypes:
        if archetype.country == country and archetype.category == category:
            return ArchetypeMatch(archetype, MatchRule.EXACT, country, category)

    for archetype in archetypes:
        if archetype.country == country:
            logger.warning(
                f"No exact archetype match for {country}/{category}, using {archetype.category} instead",
                extra={"archetype_name": archetype.name},
            )
            return ArchetypeMatch(archetype, MatchRule.COUNTRY, country, category)

    region = get_climate_region(country)
    if region is not None:
        region_countries = CLIMATE_REGIONS[region]
        for archetype in archetypes:
            if archetype.country in region_countries and archetype.category == category:
                logger.warning(
                    f"No archetype for {country}, using similar climate: {archetype.country}",
                    extra={"archetype_name": archetype.name},
                )
                return ArchetypeMatch(archetype, MatchRule.REGION_CATEGORY, country, category)

        for archetype in archetypes:
            if archetype.country in region_countries:
                logger.warning(
                    f"No archetype for {country}, using {archetype.country}/{archetype.category}",
                    extra={"archetype_name": archetype.name},
                )
                return ArchetypeMatch(archetype, MatchRule.REGION, country, category)

    logger.error(f"No archetype available for {country} ({building.building_type})")
    raise ArchetypeNotAvailableError(country, building.building_type)


class ArchetypeMatcher:
    """Match buildings against a (memoized) archetype catalogue."""

    def __init__(self, catalogue: Optional[ArchetypeCatalogue] = None):
        self.catalogue = catalogue or get_default_catalogue()

    def match(self, building: BuildingInfo) -> ArchetypeMatch:
        result = find_matching_archetype(self.catalogue.list(), building)
        logger.info(
            f"Matched archetype {result.archetype.name} ({result.rule.value})",
            extra={"archetype_name": result.archetype.name, "country": result.country},
        )
        return result
