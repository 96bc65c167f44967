"""
Domain models for renovation decision support.

Covers the user's building description, the archetype reference it is
matched to, the estimated energy profile, renovation scenarios, financing
terms, financial results and the MCDA ranking output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..utils.validation import ValidationError, validate_coordinates, validate_floor_area


# =============================================================================
# ENUMS
# =============================================================================


class ScenarioId(str, Enum):
    CURRENT = "current"
    RENOVATED = "renovated"


class FinancingType(str, Enum):
    SELF_FUNDED = "self-funded"
    LOAN = "loan"


# Display labels per scenario
SCENARIO_LABELS = {
    ScenarioId.CURRENT: "Current Status",
    ScenarioId.RENOVATED: "After Renovation",
}


# =============================================================================
# BUILDING INPUT
# =============================================================================


@dataclass(frozen=True)
class ArchetypeInfo:
    """Reference building identified by (category, country, name)."""
    category: str
    country: str
    name: str


@dataclass
class BuildingModifications:
    """User overrides applied on top of archetype defaults. None = keep default."""
    floor_area: Optional[float] = None
    number_of_floors: Optional[int] = None
    building_height: Optional[float] = None
    window_area: Optional[float] = None
    wall_u_value: Optional[float] = None
    roof_u_value: Optional[float] = None
    window_u_value: Optional[float] = None
    heating_setpoint: Optional[float] = None
    cooling_setpoint: Optional[float] = None

    def is_empty(self) -> bool:
        return all(value is None for value in self.__dict__.values())


@dataclass
class BuildingInfo:
    """Building characteristics supplied by the user."""
    country: str
    building_type: str
    construction_period: str = ""
    floor_area: Optional[float] = None
    number_of_floors: Optional[int] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    heating_technology: str = ""
    cooling_technology: str = ""
    hot_water_technology: str = ""
    glazing_technology: str = ""
    selected_archetype: Optional[ArchetypeInfo] = None
    is_modified: bool = False
    modifications: Optional[BuildingModifications] = None

    def __post_init__(self):
        if self.floor_area is not None:
            self.floor_area = validate_floor_area(self.floor_area)
        if self.lat is not None or self.lng is not None:
            if self.lat is None or self.lng is None:
                raise ValidationError("Coordinates need both lat and lng", field="lat" if self.lat is None else "lng")
            self.lat, self.lng = validate_coordinates(self.lat, self.lng)


# =============================================================================
# ENERGY PROFILE
# =============================================================================


@dataclass
class EnergyMix:
    """Share of a load per energy carrier (kWh/yr)."""
    electricity: float = 0.0
    other_fuel: float = 0.0

    @property
    def total(self) -> float:
        return self.electricity + self.other_fuel


@dataclass
class EnergyMixBreakdown:
    heating: EnergyMix = field(default_factory=EnergyMix)
    cooling: EnergyMix = field(default_factory=EnergyMix)
    overall: EnergyMix = field(default_factory=EnergyMix)


def _clamp_index(value: float) -> float:
    return max(0.0, min(100.0, value))


def _check_non_negative(owner: str, **values: float) -> None:
    for name, value in values.items():
        if value < 0:
            raise ValidationError(f"{owner}.{name} must be non-negative, got {value}", field=name)


@dataclass
class EstimationResult:
    """
    Estimated current energy performance of a building.

    Indices are clamped to [0, 100] on construction. ``archetype`` and
    ``archetype_floor_area`` record the reference used so renovation
    deltas can be scaled identically.
    """
    epc_class: str
    annual_energy_needs: float
    annual_energy_cost: float
    heating_cooling_needs: float
    energy_mix: EnergyMixBreakdown
    comfort_index: float
    flexibility_index: float
    archetype: Optional[ArchetypeInfo] = None
    archetype_floor_area: Optional[float] = None
    energy_intensity: float = 0.0

    def __post_init__(self):
        _check_non_negative(
            "EstimationResult",
            annual_energy_needs=self.annual_energy_needs,
            annual_energy_cost=self.annual_energy_cost,
            heating_cooling_needs=self.heating_cooling_needs,
        )
        self.comfort_index = _clamp_index(self.comfort_index)
        self.flexibility_index = _clamp_index(self.flexibility_index)


@dataclass
class RenovationScenario:
    """A "current" or "renovated" state of the building."""
    id: ScenarioId
    label: str
    epc_class: str
    annual_energy_needs: float
    annual_energy_cost: float
    heating_cooling_needs: float
    comfort_index: float
    flexibility_index: float
    measures: List[str] = field(default_factory=list)
    energy_mix: Optional[EnergyMixBreakdown] = None

    def __post_init__(self):
        self.id = ScenarioId(self.id)
        _check_non_negative(
            "RenovationScenario",
            annual_energy_needs=self.annual_energy_needs,
            annual_energy_cost=self.annual_energy_cost,
            heating_cooling_needs=self.heating_cooling_needs,
        )
        self.comfort_index = _clamp_index(self.comfort_index)
        self.flexibility_index = _clamp_index(self.flexibility_index)

    @classmethod
    def from_estimation(cls, estimation: EstimationResult) -> "RenovationScenario":
        """Baseline scenario copied from an estimation."""
        return cls(
            id=ScenarioId.CURRENT,
            label=SCENARIO_LABELS[ScenarioId.CURRENT],
            epc_class=estimation.epc_class,
            annual_energy_needs=estimation.annual_energy_needs,
            annual_energy_cost=estimation.annual_energy_cost,
            heating_cooling_needs=estimation.heating_cooling_needs,
            comfort_index=estimation.comfort_index,
            flexibility_index=estimation.flexibility_index,
            measures=[],
            energy_mix=estimation.energy_mix,
        )


# =============================================================================
# FINANCING
# =============================================================================


@dataclass
class LoanDetails:
    percentage: float = 80.0     # share of cost financed (0-100)
    duration: int = 10           # years
    interest_rate: float = 0.05  # annual, fractional


@dataclass
class FundingOptions:
    financing_type: FinancingType = FinancingType.SELF_FUNDED
    loan: LoanDetails = field(default_factory=LoanDetails)

    def __post_init__(self):
        self.financing_type = FinancingType(self.financing_type)


@dataclass
class FinancialResult:
    """Point-forecast financial metrics for one scenario."""
    net_present_value: float
    internal_rate_of_return: float
    return_on_investment: float
    payback_period: float
    discounted_payback_period: float
    capital_expenditure: float
    loan_amount: float = 0.0
    annual_savings: float = 0.0


# =============================================================================
# ARCHETYPE DETAILS
# =============================================================================


@dataclass
class ArchetypeDetails:
    """Archetype BUI/system payloads and a summary of the editable parameters."""
    archetype: ArchetypeInfo
    bui: Dict[str, Any]
    system: Dict[str, Any]
    floor_area: float
    number_of_floors: int
    building_height: float
    total_window_area: float
    wall_u_value: float
    roof_u_value: float
    window_u_value: float
    heating_setpoint: float
    cooling_setpoint: float
    lat: Optional[float] = None
    lng: Optional[float] = None


# =============================================================================
# MCDA
# =============================================================================


CRITERIA = ("financial", "energy_efficiency", "user_comfort", "sustainability", "res_integration")


@dataclass
class CriteriaValues:
    """Criterion scores for one alternative, each in [0, 1], higher is better."""
    financial: float = 0.0
    energy_efficiency: float = 0.0
    user_comfort: float = 0.0
    sustainability: float = 0.0
    res_integration: float = 0.0

    def as_vector(self) -> List[float]:
        return [getattr(self, name) for name in CRITERIA]


@dataclass
class MCDAPersona:
    id: str
    name: str
    description: str
    weights: CriteriaValues

    def __post_init__(self):
        total = sum(self.weights.as_vector())
        if abs(total - 1.0) > 0.01:
            raise ValidationError(
                f"Persona '{self.id}' weights must sum to 1.0, got {total:.3f}",
                field="weights",
            )


@dataclass
class MCDARankingResult:
    scenario_id: ScenarioId
    rank: int
    closeness_score: float
