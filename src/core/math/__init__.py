"""
Core math modules для матричного движка.

Численные пороги и защитные примитивы. Операции ядра импортируются
напрямую из src.core.math.linalg.
"""

from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_PIVOT,
    EPS_SINGULAR,
    # Size ceilings
    MAX_COFACTOR_DIM,
    MAX_EIGEN_DIM,
    MIN_EIGEN_DIM,
    # Scheduler defaults
    DEBOUNCE_SECONDS_DEFAULT,
    SCALAR_DEFAULT,
    # NaN/Inf sanitization
    is_valid_float,
    sanitize_float,
    # Epsilon thresholds
    is_near_zero,
    # Validation
    validate_non_negative,
)

__all__ = [
    "EPS_PIVOT",
    "EPS_SINGULAR",
    "MAX_COFACTOR_DIM",
    "MAX_EIGEN_DIM",
    "MIN_EIGEN_DIM",
    "DEBOUNCE_SECONDS_DEFAULT",
    "SCALAR_DEFAULT",
    "is_valid_float",
    "sanitize_float",
    "is_near_zero",
    "validate_non_negative",
]
