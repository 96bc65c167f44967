"""
Energy performance utilities shared by baseline and renovation analysis.

- EPC class from energy intensity (kWh/m²/yr)
- Energy cost from annual need
- Energy mix per carrier from heating technology
- Comfort and flexibility indices from building characteristics
"""

from typing import Dict, List, Tuple

from ..core.models import BuildingInfo, EnergyMix, EnergyMixBreakdown

# Upper bound (inclusive) of each class, best first
EPC_THRESHOLDS: List[Tuple[str, float]] = [
    ("A+", 30),
    ("A", 50),
    ("B", 90),
    ("C", 150),
    ("D", 230),
    ("E", 330),
    ("F", 450),
]
WORST_EPC_CLASS = "G"

# Worst to best
EPC_ORDER: List[str] = ["G", "F", "E", "D", "C", "B", "A", "A+"]

ELECTRIC_HEATING = ("heat-pump-air", "heat-pump-ground", "electric-resistance")
OIL_HEATING = "oil-boiler"

# Electricity share of heating per technology; the rest is other fuel
OIL_ELECTRIC_SHARE = 0.1
DEFAULT_ELECTRIC_SHARE = 0.3

BASE_COMFORT_INDEX = 70
BASE_FLEXIBILITY_INDEX = 50
HEAT_PUMP_COMFORT_BONUS = 5
ELECTRIC_FLEXIBILITY_BONUS = 20
SOLAR_THERMAL_FLEXIBILITY_BONUS = 10

GLAZING_COMFORT_BONUS: Dict[str, int] = {
    "triple-pvc": 15,
    "triple-wood": 12,
    "double-pvc": 8,
    "double-wood": 5,
    "double-aluminium": 3,
    "single-wood": -10,
}

PERIOD_COMFORT_BONUS: Dict[str, int] = {
    "post-2010": 10,
    "2001-2010": 5,
    "1991-2000": 0,
    "1971-1990": -5,
    "1945-1970": -10,
    "pre-1945": -15,
}

PERIOD_FLEXIBILITY_BONUS: Dict[str, int] = {
    "post-2010": 15,
    "2001-2010": 10,
    "1991-2000": 5,
    "1971-1990": 0,
    "1945-1970": -5,
    "pre-1945": -10,
}


def get_epc_class(energy_intensity: float) -> str:
    """
    EPC class for an energy intensity.

    Boundaries are inclusive: 50.0 is "A", 50.0001 is "B".
    """
    for epc_class, max_value in EPC_THRESHOLDS:
        if energy_intensity <= max_value:
            return epc_class
    return WORST_EPC_CLASS


def epc_index(epc_class: str) -> int:
    """Position of a class in EPC_ORDER (G=0 ... A+=7); unknown classes rank as G."""
    try:
        return EPC_ORDER.index(epc_class)
    except ValueError:
        return 0


def estimate_energy_cost(annual_energy_kwh: float, price_eur_per_kwh: float) -> float:
    return annual_energy_kwh * price_eur_per_kwh


def calculate_energy_mix(heating_kwh: float, cooling_kwh: float, heating_technology: str) -> EnergyMixBreakdown:
    """
    Split heating and cooling loads across electricity and other fuel.

    Cooling is always electric.
    """
    if heating_technology in ELECTRIC_HEATING:
        electric_share = 1.0
    elif heating_technology == OIL_HEATING:
        electric_share = OIL_ELECTRIC_SHARE
    else:
        electric_share = DEFAULT_ELECTRIC_SHARE

    heating = EnergyMix(
        electricity=heating_kwh * electric_share,
        other_fuel=heating_kwh * (1.0 - electric_share),
    )
    cooling = EnergyMix(electricity=cooling_kwh, other_fuel=0.0)
    overall = EnergyMix(
        electricity=heating.electricity + cooling.electricity,
        other_fuel=heating.other_fuel + cooling.other_fuel,
    )
    return EnergyMixBreakdown(heating=heating, cooling=cooling, overall=overall)


def round_energy_mix(mix: EnergyMixBreakdown) -> EnergyMixBreakdown:
    def _round(m: EnergyMix) -> EnergyMix:
        return EnergyMix(electricity=round(m.electricity), other_fuel=round(m.other_fuel))

    return EnergyMixBreakdown(
        heating=_round(mix.heating),
        cooling=_round(mix.cooling),
        overall=_round(mix.overall),
    )


def _clamp(value: float) -> float:
    return max(0, min(100, value))


def calculate_comfort_index(building: BuildingInfo) -> float:
    comfort = BASE_COMFORT_INDEX
    comfort += GLAZING_COMFORT_BONUS.get(building.glazing_technology, 0)
    comfort += PERIOD_COMFORT_BONUS.get(building.construction_period, 0)
    if "heat-pump" in building.heating_technology:
        comfort += HEAT_PUMP_COMFORT_BONUS
    return _clamp(comfort)


def calculate_flexibility_index(building: BuildingInfo) -> float:
    flexibility = BASE_FLEXIBILITY_INDEX
    if building.heating_technology in ELECTRIC_HEATING:
        flexibility += ELECTRIC_FLEXIBILITY_BONUS
    if building.hot_water_technology == "solar-thermal":
        flexibility += SOLAR_THERMAL_FLEXIBILITY_BONUS
    flexibility += PERIOD_FLEXIBILITY_BONUS.get(building.construction_period, 0)
    return _clamp(flexibility)
