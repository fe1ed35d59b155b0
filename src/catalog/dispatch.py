"""Dispatch — вызов ядра по имени операции каталога.

Два режима:
- run_operation: единичный вызов ядра, используется планировщиком для
  автоматического пересчёта. Любой исход (включая непредвиденное исключение)
  возвращается как Result.
- perform_operation: явный расчёт выбранной операции. Сначала проверяются
  ограничения каталога, затем вызывается ядро и формируется пошаговое описание.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Final, Optional

from src.core.domain.matrix import Matrix, format_number
from src.core.domain.result import ErrorKind, ErrorResult, Result, error
from src.core.math import linalg
from src.core.math.numerical_safeguards import SCALAR_DEFAULT

from .operations import OPERATION_NAMES, get_operation

logger = logging.getLogger(__name__)


_UNARY_KERNELS: Final[dict[str, Callable[[Matrix], Result]]] = {
    "determinant": linalg.determinant,
    "inverse": linalg.inverse,
    "transpose": linalg.transpose,
    "trace": linalg.trace,
    "rank": linalg.rank,
    "eigenvalues": linalg.eigenvalues,
}

_BINARY_KERNELS: Final[dict[str, Callable[[Matrix, Matrix], Result]]] = {
    "add": linalg.add,
    "subtract": linalg.subtract,
    "multiply": linalg.multiply,
}


# =============================================================================
# RUN OPERATION
# =============================================================================


def run_operation(
    name: str,
    matrix: Matrix,
    operand: Optional[Matrix] = None,
    scalar: float = SCALAR_DEFAULT,
) -> Result:
    """Вызов ядра для операции каталога.

    Args:
        name: имя операции из каталога
        matrix: матрица A
        operand: матрица B (только для add / subtract / multiply)
        scalar: множитель для scalar_multiply

    Returns:
        Result ядра; UNSUPPORTED_OPERATION для неизвестного имени,
        MISSING_OPERAND для бинарной операции без B,
        INTERNAL если ядро бросило исключение
    """
    try:
        if name == "scalar_multiply":
            return linalg.scalar_multiply(matrix, scalar)
        if name in _UNARY_KERNELS:
            return _UNARY_KERNELS[name](matrix)
        if name in _BINARY_KERNELS:
            if operand is None:
                return error(
                    ErrorKind.MISSING_OPERAND,
                    f"Operation '{name}' requires a second matrix",
                )
            return _BINARY_KERNELS[name](matrix, operand)
    except Exception as exc:
        logger.exception("Kernel call '%s' failed on %dx%d matrix", name, matrix.rows, matrix.cols)
        return error(ErrorKind.INTERNAL, str(exc) or type(exc).__name__)

    return error(
        ErrorKind.UNSUPPORTED_OPERATION,
        f"Operation '{name}' is not supported, expected one of {list(OPERATION_NAMES)}",
    )


# =============================================================================
# PERFORM OPERATION (с пошаговым описанием)
# =============================================================================


@dataclass(frozen=True)
class CalculationReport:
    """Результат явного расчёта одной операции."""

    operation: str
    result: Result
    steps: tuple[str, ...] = ()

    @property
    def succeeded(self) -> bool:
        return not self.result.is_error


def _validate_constraints(
    name: str, matrix: Matrix, operand: Optional[Matrix]
) -> Optional[ErrorResult]:
    """Проверка ограничений каталога перед вызовом ядра."""
    try:
        op = get_operation(name)
    except KeyError:
        return error(ErrorKind.UNSUPPORTED_OPERATION, f"Unknown operation '{name}'")

    if op.max_size is not None and max(matrix.rows, matrix.cols) > op.max_size:
        return error(
            ErrorKind.SIZE_EXCEEDED,
            f"{op.description} is only supported for matrices up to {op.max_size}x{op.max_size}",
        )
    if op.requires_square and not matrix.is_square:
        return error(ErrorKind.NOT_SQUARE, f"{op.description} requires a square matrix")

    if op.is_binary:
        if operand is None:
            return error(ErrorKind.MISSING_OPERAND, f"{op.description} requires a second matrix")
        if name == "multiply" and matrix.cols != operand.rows:
            return error(
                ErrorKind.SHAPE_MISMATCH,
                "For matrix multiplication, the number of columns in Matrix A "
                "must equal the number of rows in Matrix B",
            )
        if name in ("add", "subtract") and matrix.shape != operand.shape:
            return error(
                ErrorKind.SHAPE_MISMATCH,
                "For addition/subtraction, both matrices must have the same dimensions",
            )
    return None


def _dims(matrix: Matrix) -> str:
    return f"{matrix.rows}x{matrix.cols}"


def _result_dims(result: Result) -> str:
    return _dims(result.value)


def _describe_steps(
    name: str,
    matrix: Matrix,
    operand: Optional[Matrix],
    scalar: float,
    result: Result,
) -> tuple[str, ...]:
    """Пошаговое описание успешного расчёта."""
    dims = _dims(matrix)

    if name == "determinant":
        return (
            f"Calculating determinant of {dims} matrix",
            "Using cofactor expansion method",
            f"Result: {format_number(result.value)}",
        )
    if name == "inverse":
        return (
            f"Calculating inverse of {dims} matrix",
            "Step 1: Calculate determinant",
            "Step 2: Calculate adjoint matrix",
            "Step 3: Divide adjoint by determinant",
            "Result: Inverse matrix calculated",
        )
    if name == "transpose":
        return (
            f"Transposing {dims} matrix",
            "Swapping rows and columns",
            f"Result: {_result_dims(result)} matrix",
        )
    if name == "trace":
        return (
            f"Calculating trace of {dims} matrix",
            "Sum of diagonal elements",
            f"Result: {format_number(result.value)}",
        )
    if name == "rank":
        return (
            f"Calculating rank of {dims} matrix",
            "Using Gaussian elimination",
            f"Result: Rank = {format_number(result.value)}",
        )
    if name == "eigenvalues":
        listed = ", ".join(f"{v:.4f}" for v in result.values)
        return (
            f"Calculating eigenvalues of {dims} matrix",
            "Using characteristic polynomial",
            f"Result: [{listed}]",
        )
    if name == "add":
        return (
            f"Adding {dims} matrices",
            "Element-wise addition",
            f"Result: {_result_dims(result)} matrix",
        )
    if name == "subtract":
        return (
            f"Subtracting {dims} matrices",
            "Element-wise subtraction",
            f"Result: {_result_dims(result)} matrix",
        )
    if name == "multiply":
        return (
            f"Multiplying {dims} and {_dims(operand)} matrices",
            "Using matrix multiplication formula",
            f"Result: {_result_dims(result)} matrix",
        )
    if name == "scalar_multiply":
        return (
            f"Multiplying {dims} matrix by scalar {format_number(scalar)}",
            "Element-wise multiplication",
            f"Result: {_result_dims(result)} matrix",
        )
    return ()


def perform_operation(
    name: str,
    matrix: Matrix,
    operand: Optional[Matrix] = None,
    scalar: float = SCALAR_DEFAULT,
) -> CalculationReport:
    """Явный расчёт выбранной операции с пошаговым описанием.

    Порядок:
    1. Ограничения каталога (размер, квадратность, совместимость с B)
    2. Вызов ядра
    3. Пошаговое описание (только для успешного расчёта)
    """
    failure = _validate_constraints(name, matrix, operand)
    if failure is not None:
        logger.debug("Operation '%s' rejected: %s", name, failure.message)
        return CalculationReport(operation=name, result=failure)

    result = run_operation(name, matrix, operand=operand, scalar=scalar)
    if result.is_error:
        if result.kind == ErrorKind.SINGULAR:
            result = error(
                ErrorKind.SINGULAR,
                "Matrix is singular (determinant = 0), inverse does not exist",
            )
        return CalculationReport(operation=name, result=result)

    return CalculationReport(
        operation=name,
        result=result,
        steps=_describe_steps(name, matrix, operand, scalar, result),
    )
