"""
Validation — field-scoped checks a caller runs before starting a simulation.
"""

from .validators import (
    find_overlapping_ranges,
    review_params,
    validate_auto_params,
    validate_custom_params,
    validate_fixed_params,
    validate_params,
)

__all__ = [
    "find_overlapping_ranges",
    "review_params",
    "validate_auto_params",
    "validate_custom_params",
    "validate_fixed_params",
    "validate_params",
]
