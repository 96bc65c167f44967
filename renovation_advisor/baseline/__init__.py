"""
Baseline module - archetype catalogue, matching and modification.
"""

from .archetypes import (
    ArchetypeCatalogue,
    ArchetypeMatch,
    ArchetypeMatcher,
    MatchRule,
    BUILDING_TYPE_TO_CATEGORY,
    CLIMATE_REGIONS,
    COUNTRY_CODES,
    category_for,
    country_name,
    find_matching_archetype,
    get_climate_region,
    get_default_catalogue,
)
from .modifier import (
    apply_all_modifications,
    extract_u_value,
    summarize_details,
    validate_modifications,
)

__all__ = [
    "ArchetypeCatalogue",
    "ArchetypeMatch",
    "ArchetypeMatcher",
    "MatchRule",
    "BUILDING_TYPE_TO_CATEGORY",
    "CLIMATE_REGIONS",
    "COUNTRY_CODES",
    "category_for",
    "country_name",
    "find_matching_archetype",
    "get_climate_region",
    "get_default_catalogue",
    "apply_all_modifications",
    "extract_u_value",
    "summarize_details",
    "validate_modifications",
]
