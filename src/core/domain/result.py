"""
Result — тегированный результат матричной операции

Каждая функция ядра (src.core.math.linalg) возвращает ровно один из вариантов:
- ScalarResult  ("number") — determinant, trace, rank
- MatrixResult  ("matrix") — inverse, transpose, add, subtract, multiply, scalar_multiply
- VectorResult  ("array")  — eigenvalues
- ErrorResult   ("error")  — нарушение предусловий, вырожденность

Ошибки — это данные, а не исключения: одна некорректная операция
не прерывает пакет параллельных вычислений.

Полная совместимость с JSON Schema (contracts/schema/result.json).
"""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from .matrix import Matrix


# =============================================================================
# ENUMS
# =============================================================================


class ErrorKind(str, Enum):
    """Таксономия ошибок ядра."""

    SHAPE_MISMATCH = "SHAPE_MISMATCH"  # бинарная операция на несовместимых формах
    NOT_SQUARE = "NOT_SQUARE"  # операция только для квадратных матриц
    SIZE_EXCEEDED = "SIZE_EXCEEDED"  # размер вне поддерживаемого диапазона
    SINGULAR = "SINGULAR"  # |det| < EPS_SINGULAR для inverse
    UNSUPPORTED_OPERATION = "UNSUPPORTED_OPERATION"  # неизвестное имя операции
    MISSING_OPERAND = "MISSING_OPERAND"  # бинарная операция без второй матрицы
    INTERNAL = "INTERNAL"  # непредвиденное исключение, превращённое в данные


# =============================================================================
# RESULT VARIANTS
# =============================================================================


class ScalarResult(BaseModel):
    """Скалярный результат (determinant, trace, rank)."""

    type: Literal["number"] = "number"
    value: float

    model_config = {"frozen": True}

    @property
    def is_error(self) -> bool:
        return False

    def to_contract(self) -> dict[str, Any]:
        return {"type": self.type, "value": self.value}


class MatrixResult(BaseModel):
    """Матричный результат."""

    type: Literal["matrix"] = "matrix"
    value: Matrix

    model_config = {"frozen": True}

    @property
    def is_error(self) -> bool:
        return False

    def to_contract(self) -> dict[str, Any]:
        return {"type": self.type, "value": self.value.to_lists()}


class VectorResult(BaseModel):
    """
    Вектор значений (eigenvalues).

    Пустой вектор — допустимый результат: комплексные корни не представлены.
    """

    type: Literal["array"] = "array"
    values: tuple[float, ...]

    model_config = {"frozen": True}

    @property
    def is_error(self) -> bool:
        return False

    def to_contract(self) -> dict[str, Any]:
        return {"type": self.type, "value": list(self.values)}


class ErrorResult(BaseModel):
    """Ошибка операции, представленная как данные."""

    type: Literal["error"] = "error"
    kind: ErrorKind
    message: str = Field(..., min_length=1)

    model_config = {"frozen": True}

    @property
    def is_error(self) -> bool:
        return True

    def to_contract(self) -> dict[str, Any]:
        return {"type": self.type, "kind": self.kind.value, "message": self.message}


Result = Annotated[
    Union[ScalarResult, MatrixResult, VectorResult, ErrorResult],
    Field(discriminator="type"),
]

_RESULT_ADAPTER: TypeAdapter = TypeAdapter(Result)


# =============================================================================
# CONVENIENCE CONSTRUCTORS
# =============================================================================


def scalar(value: float) -> ScalarResult:
    return ScalarResult(value=value)


def matrix_result(data: list[list[float]]) -> MatrixResult:
    return MatrixResult(value=Matrix.from_rows(data))


def vector(values: list[float]) -> VectorResult:
    return VectorResult(values=tuple(values))


def error(kind: ErrorKind, message: str) -> ErrorResult:
    return ErrorResult(kind=kind, message=message)


def parse_result(payload: dict[str, Any]) -> Union[ScalarResult, MatrixResult, VectorResult, ErrorResult]:
    """
    Восстановление Result из контрактного dict (обратное к to_contract).

    Raises:
        pydantic.ValidationError: неизвестный тег или некорректные поля
    """
    kind = payload.get("type")
    if kind == "matrix":
        payload = {"type": "matrix", "value": Matrix.from_rows(payload["value"])}
    elif kind == "array":
        payload = {"type": "array", "values": payload["value"]}
    return _RESULT_ADAPTER.validate_python(payload)
