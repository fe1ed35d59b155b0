"""Operation Catalog — статические метаданные матричных операций.

Каждый дескриптор описывает:
- arity (unary / binary)
- требование квадратной матрицы
- максимальную размерность (для алгоритмов O(n!))

Бинарные операции (add / subtract / multiply) проверяют совместимость форм
в момент вызова ядра, а не на уровне каталога.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional

from src.core.domain.matrix import Matrix
from src.core.math.numerical_safeguards import MAX_COFACTOR_DIM, MAX_EIGEN_DIM


class Arity(str, Enum):
    """Количество матриц-операндов."""

    UNARY = "UNARY"
    BINARY = "BINARY"


@dataclass(frozen=True)
class OperationDescriptor:
    """Дескриптор операции каталога."""

    name: str
    description: str
    arity: Arity = Arity.UNARY
    requires_square: bool = False
    max_size: Optional[int] = None

    @property
    def is_binary(self) -> bool:
        return self.arity == Arity.BINARY

    def is_applicable(self, rows: int, cols: int) -> bool:
        """Предикат применимости к матрице формы rows x cols."""
        if self.max_size is not None and max(rows, cols) > self.max_size:
            return False
        if self.requires_square and rows != cols:
            return False
        return True


OPERATION_CATALOG: Final[tuple[OperationDescriptor, ...]] = (
    OperationDescriptor(
        name="determinant",
        description="Calculate determinant",
        requires_square=True,
        max_size=MAX_COFACTOR_DIM,
    ),
    OperationDescriptor(
        name="inverse",
        description="Find matrix inverse",
        requires_square=True,
        max_size=MAX_COFACTOR_DIM,
    ),
    OperationDescriptor(name="transpose", description="Transpose matrix"),
    OperationDescriptor(
        name="trace",
        description="Calculate trace (sum of diagonal)",
        requires_square=True,
    ),
    OperationDescriptor(name="rank", description="Calculate matrix rank"),
    OperationDescriptor(
        name="eigenvalues",
        description="Find eigenvalues",
        requires_square=True,
        max_size=MAX_EIGEN_DIM,
    ),
    OperationDescriptor(name="add", description="Matrix addition (A + B)", arity=Arity.BINARY),
    OperationDescriptor(
        name="subtract", description="Matrix subtraction (A - B)", arity=Arity.BINARY
    ),
    OperationDescriptor(
        name="multiply", description="Matrix multiplication (A × B)", arity=Arity.BINARY
    ),
    OperationDescriptor(name="scalar_multiply", description="Scalar multiplication"),
)

_BY_NAME: Final[dict[str, OperationDescriptor]] = {op.name: op for op in OPERATION_CATALOG}

OPERATION_NAMES: Final[tuple[str, ...]] = tuple(_BY_NAME)


def get_operation(name: str) -> OperationDescriptor:
    """Дескриптор по имени.

    Raises:
        KeyError: неизвестная операция
    """
    try:
        return _BY_NAME[name]
    except KeyError:
        raise KeyError(f"Unknown operation '{name}'") from None


def get_applicable_operations(matrix: Matrix) -> list[OperationDescriptor]:
    """Операции каталога, применимые к текущей форме матрицы (порядок каталога)."""
    return [op for op in OPERATION_CATALOG if op.is_applicable(matrix.rows, matrix.cols)]
