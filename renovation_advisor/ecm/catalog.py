"""
Renovation measure catalogue.

Defines the eight measures a homeowner can select, grouped into envelope,
systems and renewable categories. Only envelope measures that change a
U-value can currently be simulated; the others are listed for display and
costing but produce no simulated savings.

Costs and savings are not defined here: CAPEX is user supplied and savings
come from the building simulation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence


class MeasureCategory(Enum):
    """Measure categories."""
    ENVELOPE = "envelope"
    SYSTEMS = "systems"
    RENEWABLE = "renewable"


@dataclass(frozen=True)
class MeasureCategoryInfo:
    category: MeasureCategory
    label: str
    description: str


@dataclass(frozen=True)
class RenovationMeasure:
    """A selectable renovation measure."""
    id: str
    name: str
    category: MeasureCategory
    description: str

    # Simulator element and target U-value (W/m²K); None if not simulated
    element: Optional[str] = None
    target_u_value: Optional[float] = None

    @property
    def is_supported(self) -> bool:
        return self.element is not None


MEASURE_CATEGORIES: Dict[MeasureCategory, MeasureCategoryInfo] = {
    MeasureCategory.ENVELOPE: MeasureCategoryInfo(
        MeasureCategory.ENVELOPE,
        "Building Envelope",
        "Insulation and glazing upgrades that cut heat loss",
    ),
    MeasureCategory.SYSTEMS: MeasureCategoryInfo(
        MeasureCategory.SYSTEMS,
        "Heating & Cooling Systems",
        "More efficient heat generation and cooling equipment",
    ),
    MeasureCategory.RENEWABLE: MeasureCategoryInfo(
        MeasureCategory.RENEWABLE,
        "Renewable Energy",
        "On-site solar generation",
    ),
}


# =============================================================================
# CATALOGUE
# =============================================================================

RENOVATION_MEASURES: Dict[str, RenovationMeasure] = {

    # Envelope
    "wall-insulation": RenovationMeasure(
        id="wall-insulation",
        name="Wall Insulation",
        category=MeasureCategory.ENVELOPE,
        description="Exterior or interior insulation layer on the external walls.",
        element="wall",
        target_u_value=0.25,
    ),
    "roof-insulation": RenovationMeasure(
        id="roof-insulation",
        name="Roof Insulation",
        category=MeasureCategory.ENVELOPE,
        description="Insulation of the roof or attic floor.",
        element="roof",
        target_u_value=0.2,
    ),
    "floor-insulation": RenovationMeasure(
        id="floor-insulation",
        name="Floor Insulation",
        category=MeasureCategory.ENVELOPE,
        description="Insulation of the ground floor or basement ceiling.",
    ),
    "windows": RenovationMeasure(
        id="windows",
        name="Windows",
        category=MeasureCategory.ENVELOPE,
        description="Replacement with double or triple glazed units.",
        element="window",
        target_u_value=1.4,
    ),

    # Systems
    "air-water-heat-pump": RenovationMeasure(
        id="air-water-heat-pump",
        name="Air-Water Heat Pump",
        category=MeasureCategory.SYSTEMS,
        description="Outdoor-air heat pump feeding the hydronic heating and hot water.",
    ),
    "condensing-boiler": RenovationMeasure(
        id="condensing-boiler",
        name="Condensing Boiler",
        category=MeasureCategory.SYSTEMS,
        description="Gas boiler recovering latent heat from the flue gases.",
    ),

    # Renewables
    "pv": RenovationMeasure(
        id="pv",
        name="PV Panels",
        category=MeasureCategory.RENEWABLE,
        description="Rooftop photovoltaic generation for self-consumption.",
    ),
    "solar-thermal": RenovationMeasure(
        id="solar-thermal",
        name="Solar Thermal Panels",
        category=MeasureCategory.RENEWABLE,
        description="Solar collectors for domestic hot water.",
    ),
}

# measure id -> simulator element
MEASURE_TO_ELEMENT: Dict[str, str] = {
    m.id: m.element for m in RENOVATION_MEASURES.values() if m.element is not None
}

# simulator element -> target U-value (W/m²K)
U_VALUE_TARGETS: Dict[str, float] = {
    m.element: m.target_u_value for m in RENOVATION_MEASURES.values() if m.element is not None
}


def get_all_measures() -> List[RenovationMeasure]:
    return list(RENOVATION_MEASURES.values())


def get_measure(measure_id: str) -> Optional[RenovationMeasure]:
    return RENOVATION_MEASURES.get(measure_id)


def get_measures_by_category(category: MeasureCategory) -> List[RenovationMeasure]:
    return [m for m in RENOVATION_MEASURES.values() if m.category == category]


def get_supported_measures() -> List[RenovationMeasure]:
    """Measures the simulator can apply."""
    return [m for m in RENOVATION_MEASURES.values() if m.is_supported]


def get_category_info(category: MeasureCategory) -> MeasureCategoryInfo:
    return MEASURE_CATEGORIES[category]


def supported_selection(measure_ids: Sequence[str]) -> List[RenovationMeasure]:
    """
    Supported measures among a selection, in selection order.

    Unknown ids and duplicates are ignored.
    """
    seen = set()
    result = []
    for measure_id in measure_ids:
        measure = RENOVATION_MEASURES.get(measure_id)
        if measure is not None and measure.is_supported and measure.id not in seen:
            seen.add(measure.id)
            result.append(measure)
    return result
