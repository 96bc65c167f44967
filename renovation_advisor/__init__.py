"""
Renovation advisor - decision support for residential energy renovation.

Estimates a building's current energy performance from a reference
archetype, evaluates renovation measures, computes financial metrics and
ranks scenarios with persona-weighted TOPSIS.
"""

__version__ = "0.1.0"
