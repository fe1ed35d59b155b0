"""
Domain models and value objects.

Contains the dense Matrix container and the tagged Result returned by every
linear-algebra operation.
"""

from src.core.domain.matrix import EXAMPLE_MATRICES, Matrix, format_number, load_example
from src.core.domain.result import (
    ErrorKind,
    ErrorResult,
    MatrixResult,
    Result,
    ScalarResult,
    VectorResult,
    error,
    matrix_result,
    parse_result,
    scalar,
    vector,
)

__all__ = [
    # Matrix model
    "Matrix",
    "EXAMPLE_MATRICES",
    "load_example",
    "format_number",
    # Result model
    "Result",
    "ScalarResult",
    "MatrixResult",
    "VectorResult",
    "ErrorResult",
    "ErrorKind",
    "scalar",
    "matrix_result",
    "vector",
    "error",
    "parse_result",
]
