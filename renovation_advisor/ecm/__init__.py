"""Renovation measure catalogue."""

from .catalog import (
    MeasureCategory,
    MeasureCategoryInfo,
    RenovationMeasure,
    MEASURE_CATEGORIES,
    RENOVATION_MEASURES,
    MEASURE_TO_ELEMENT,
    U_VALUE_TARGETS,
    get_all_measures,
    get_measure,
    get_measures_by_category,
    get_supported_measures,
    get_category_info,
    supported_selection,
)

__all__ = [
    "MeasureCategory",
    "MeasureCategoryInfo",
    "RenovationMeasure",
    "MEASURE_CATEGORIES",
    "RENOVATION_MEASURES",
    "MEASURE_TO_ELEMENT",
    "U_VALUE_TARGETS",
    "get_all_measures",
    "get_measure",
    "get_measures_by_category",
    "get_supported_measures",
    "get_category_info",
    "supported_selection",
]
