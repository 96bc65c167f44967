"""
Archetype modifier - apply user overrides to archetype BUI payloads.

The simulator describes a building as a BUI payload::

    {
        "building": {"net_floor_area": ..., "n_floors": ..., "height": ...,
                     "exposed_perimeter": ..., "latitude": ..., "longitude": ...},
        "building_surface": [{"name": ..., "type": "opaque" | "transparent",
                              "area": ..., "u_value": ...}, ...],
        "building_parameters": {"temperature_setpoints": {...}},
    }

Supported overrides:
- Floor area (scales every surface area and the exposed perimeter by √factor)
- Wall / roof / window U-values (matched by surface type and name)
- Heating / cooling set-points (set-backs follow at -3 °C / +4 °C)

Payloads are never modified in place.
"""

import copy
import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from ..api.schemas import ArchetypeDetailsResponse
from ..core.errors import APIResponseError
from ..core.models import ArchetypeDetails, ArchetypeInfo, BuildingModifications
from ..utils.validation import ValidationError

logger = logging.getLogger(__name__)


# Modification limits
FLOOR_AREA_RANGE = (10.0, 1000.0)        # m²
FLOORS_RANGE = (1, 20)
U_VALUE_RANGE = (0.1, 5.0)               # W/m²K
HEATING_SETPOINT_RANGE = (15.0, 22.0)    # °C
COOLING_SETPOINT_RANGE = (24.0, 30.0)    # °C
MAX_WINDOW_TO_WALL = 0.4

HEATING_SETBACK_OFFSET = -3.0
COOLING_SETBACK_OFFSET = 4.0

WALL_NAME_TOKENS = ("wall", "north", "south", "east", "west")
NON_WALL_NAME_TOKENS = ("roof", "slab", "ground")


def _surfaces(bui: Dict[str, Any]) -> List[Dict[str, Any]]:
    return bui.get("building_surface") or []


def _setpoints(bui: Dict[str, Any]) -> Dict[str, Any]:
    return bui.get("building_parameters", {}).get("temperature_setpoints", {})


def extract_u_value(bui: Dict[str, Any], element: str) -> float:
    """
    U-value of the first surface representing an element.

    Windows are the first transparent surface; other elements the first
    opaque surface whose name contains the element. 0 when nothing matches.
    """
    for surface in _surfaces(bui):
        if element == "window":
            if surface.get("type") == "transparent":
                return float(surface.get("u_value", 0.0))
        elif surface.get("type") == "opaque" and element in surface.get("name", "").lower():
            return float(surface.get("u_value", 0.0))
    return 0.0


def total_wall_area(bui: Dict[str, Any]) -> float:
    """Opaque area excluding roof, slab and ground surfaces (m²)."""
    return sum(
        float(s.get("area", 0.0))
        for s in _surfaces(bui)
        if s.get("type") == "opaque"
        and not any(token in s.get("name", "").lower() for token in NON_WALL_NAME_TOKENS)
    )


def summarize_details(response: ArchetypeDetailsResponse) -> ArchetypeDetails:
    """
    Build an ArchetypeDetails summary from the raw service response.

    Raises:
        APIResponseError: If the BUI payload lacks the building block
    """
    bui = response.bui
    building = bui.get("building")
    if not isinstance(building, dict) or "net_floor_area" not in building:
        raise APIResponseError(f"Archetype {response.name} has no building block in its BUI payload")

    setpoints = _setpoints(bui)
    return ArchetypeDetails(
        archetype=ArchetypeInfo(category=response.category, country=response.country, name=response.name),
        bui=bui,
        system=response.system,
        floor_area=float(building["net_floor_area"]),
        number_of_floors=int(building.get("n_floors", 1)),
        building_height=float(building.get("height", 0.0)),
        total_window_area=sum(
            float(s.get("area", 0.0)) for s in _surfaces(bui) if s.get("type") == "transparent"
        ),
        wall_u_value=extract_u_value(bui, "wall"),
        roof_u_value=extract_u_value(bui, "roof"),
        window_u_value=extract_u_value(bui, "window"),
        heating_setpoint=float(setpoints.get("heating_setpoint", 20.0)),
        cooling_setpoint=float(setpoints.get("cooling_setpoint", 26.0)),
        lat=building.get("latitude"),
        lng=building.get("longitude"),
    )


# =============================================================================
# VALIDATION
# =============================================================================


def _check_range(errors: List[str], label: str, value: Optional[float], bounds: Tuple[float, float], unit: str):
    if value is not None and not bounds[0] <= value <= bounds[1]:
        errors.append(f"{label} must be between {bounds[0]:g}-{bounds[1]:g}{unit}")


def validate_modifications(modifications: BuildingModifications, details: ArchetypeDetails) -> None:
    """
    Check modifications against the editable limits.

    Raises:
        ValidationError: With every violated limit listed in ``suggestions``
    """
    errors: List[str] = []
    m = modifications

    _check_range(errors, "Floor area", m.floor_area, FLOOR_AREA_RANGE, " m²")
    _check_range(errors, "Number of floors", m.number_of_floors, FLOORS_RANGE, "")
    _check_range(errors, "Wall U-value", m.wall_u_value, U_VALUE_RANGE, " W/m²K")
    _check_range(errors, "Roof U-value", m.roof_u_value, U_VALUE_RANGE, " W/m²K")
    _check_range(errors, "Window U-value", m.window_u_value, U_VALUE_RANGE, " W/m²K")
    _check_range(errors, "Heating setpoint", m.heating_setpoint, HEATING_SETPOINT_RANGE, " °C")
    _check_range(errors, "Cooling setpoint", m.cooling_setpoint, COOLING_SETPOINT_RANGE, " °C")

    if m.window_area is not None:
        max_window_area = total_wall_area(details.bui) * MAX_WINDOW_TO_WALL
        if m.window_area > max_window_area:
            errors.append(f"Window area cannot exceed 40% of wall area ({max_window_area:.1f} m²)")

    if m.cooling_setpoint is not None:
        heating = m.heating_setpoint if m.heating_setpoint is not None else details.heating_setpoint
        if m.cooling_setpoint <= heating:
            errors.append("Cooling setpoint must be higher than heating setpoint")

    if errors:
        logger.warning(f"Rejected {len(errors)} archetype modification(s)")
        raise ValidationError(
            f"Invalid building modifications: {'; '.join(errors)}",
            field="modifications",
            suggestions=errors,
        )


# =============================================================================
# MODIFICATIONS
# =============================================================================


def apply_floor_area(bui: Dict[str, Any], floor_area: float) -> Dict[str, Any]:
    modified = copy.deepcopy(bui)
    factor = floor_area / modified["building"]["net_floor_area"]

    modified["building"]["net_floor_area"] = floor_area
    for surface in _surfaces(modified):
        surface["area"] = surface["area"] * factor
    if "exposed_perimeter" in modified["building"]:
        modified["building"]["exposed_perimeter"] *= math.sqrt(factor)
    return modified


def apply_u_values(
    bui: Dict[str, Any],
    wall: Optional[float] = None,
    roof: Optional[float] = None,
    window: Optional[float] = None,
) -> Dict[str, Any]:
    modified = copy.deepcopy(bui)
    for surface in _surfaces(modified):
        name = surface.get("name", "").lower()
        if surface.get("type") == "opaque":
            if "roof" in name:
                if roof is not None:
                    surface["u_value"] = roof
            elif any(token in name for token in WALL_NAME_TOKENS) and wall is not None:
                surface["u_value"] = wall
        elif surface.get("type") == "transparent" and window is not None:
            surface["u_value"] = window
    return modified


def apply_setpoints(
    bui: Dict[str, Any],
    heating: Optional[float] = None,
    cooling: Optional[float] = None,
) -> Dict[str, Any]:
    modified = copy.deepcopy(bui)
    setpoints = modified.setdefault("building_parameters", {}).setdefault("temperature_setpoints", {})
    if heating is not None:
        setpoints["heating_setpoint"] = heating
        setpoints["heating_setback"] = heating + HEATING_SETBACK_OFFSET
    if cooling is not None:
        setpoints["cooling_setpoint"] = cooling
        setpoints["cooling_setback"] = cooling + COOLING_SETBACK_OFFSET
    return modified


def apply_all_modifications(
    details: ArchetypeDetails,
    modifications: BuildingModifications,
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Validate and apply every override to copies of the archetype payloads.

    Returns:
        (bui, system) ready for a custom simulation
    """
    validate_modifications(modifications, details)
    m = modifications

    bui = copy.deepcopy(details.bui)
    if m.floor_area is not None:
        bui = apply_floor_area(bui, m.floor_area)
    if any(v is not None for v in (m.wall_u_value, m.roof_u_value, m.window_u_value)):
        bui = apply_u_values(bui, m.wall_u_value, m.roof_u_value, m.window_u_value)
    if m.heating_setpoint is not None or m.cooling_setpoint is not None:
        bui = apply_setpoints(bui, m.heating_setpoint, m.cooling_setpoint)

    logger.debug(
        f"Applied modifications to {details.archetype.name}",
        extra={"archetype_name": details.archetype.name},
    )
    return bui, copy.deepcopy(details.system)
