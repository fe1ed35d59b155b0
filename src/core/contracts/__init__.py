"""
Contract Validation Module

Модуль для валидации JSON контрактов матричного движка.
"""

from .validators import (
    ContractValidator,
    MatrixValidator,
    ResultValidator,
    SchemaLoader,
    validate_matrix,
    validate_result,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "MatrixValidator",
    "ResultValidator",
    # Functions
    "validate_matrix",
    "validate_result",
]
