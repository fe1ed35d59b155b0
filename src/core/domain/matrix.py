"""
Matrix — плотная числовая матрица

Immutable Pydantic модель: rows × cols float значений.
Любая правка (ячейка, размер, очистка) создаёт новый экземпляр,
поэтому структурное сравнение (==) дёшево определяет, изменилась ли матрица.

Полная совместимость с JSON Schema (contracts/schema/matrix.json).
"""

import random
from typing import Final, Optional, Sequence

from pydantic import BaseModel, Field, model_validator

from src.core.math.numerical_safeguards import sanitize_float


# =============================================================================
# MATRIX MODEL
# =============================================================================


class Matrix(BaseModel):
    """
    Плотная матрица rows × cols.

    Инварианты:
    - rows > 0, cols > 0
    - len(data) == rows, каждая строка содержит ровно cols ячеек

    Immutable модель (frozen=True), строки хранятся как tuple.
    """

    rows: int = Field(..., gt=0, description="Количество строк")
    cols: int = Field(..., gt=0, description="Количество столбцов")
    data: tuple[tuple[float, ...], ...] = Field(..., description="Ячейки по строкам")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_shape(self) -> "Matrix":
        """Проверка соответствия data объявленной форме."""
        if len(self.data) != self.rows:
            raise ValueError(f"data has {len(self.data)} rows, expected {self.rows}")
        for i, row in enumerate(self.data):
            if len(row) != self.cols:
                raise ValueError(f"row {i} has {len(row)} cells, expected {self.cols}")
        return self

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def zeros(cls, rows: int, cols: int) -> "Matrix":
        """Нулевая матрица заданного размера."""
        return cls(rows=rows, cols=cols, data=[[0.0] * max(cols, 0) for _ in range(max(rows, 0))])

    @classmethod
    def from_rows(cls, data: Sequence[Sequence[float]]) -> "Matrix":
        """
        Матрица из вложенных последовательностей; форма выводится из data.

        Raises:
            pydantic.ValidationError: пустые данные или рваные строки
        """
        rows = len(data)
        cols = len(data[0]) if rows else 0
        return cls(rows=rows, cols=cols, data=data)

    @classmethod
    def identity(cls, n: int) -> "Matrix":
        """Единичная матрица n × n."""
        return cls(
            rows=n,
            cols=n,
            data=[[1.0 if i == j else 0.0 for j in range(n)] for i in range(n)],
        )

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    def to_lists(self) -> list[list[float]]:
        """Изменяемая копия ячеек (для алгоритмов, работающих in-place)."""
        return [list(row) for row in self.data]

    # -------------------------------------------------------------------------
    # Правки (каждая возвращает новую матрицу)
    # -------------------------------------------------------------------------

    def resize(self, rows: int, cols: int) -> "Matrix":
        """
        Изменение размера матрицы.

        Пересекающийся левый верхний блок сохраняется,
        новые ячейки заполняются нулями.

        Examples:
            [[1, 2], [3, 4]] → resize(3, 3) → [[1, 2, 0], [3, 4, 0], [0, 0, 0]]
        """
        keep_rows = min(self.rows, rows)
        keep_cols = min(self.cols, cols)
        data = [
            [
                self.data[i][j] if i < keep_rows and j < keep_cols else 0.0
                for j in range(max(cols, 0))
            ]
            for i in range(max(rows, 0))
        ]
        return Matrix(rows=rows, cols=cols, data=data)

    def with_value(self, row: int, col: int, value: float) -> "Matrix":
        """
        Замена одной ячейки. NaN записывается как 0.0.

        Raises:
            IndexError: если (row, col) вне матрицы
        """
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(
                f"cell ({row}, {col}) is outside {self.rows}x{self.cols} matrix"
            )
        cell = sanitize_float(value, fallback=0.0)
        data = [
            [cell if (i == row and j == col) else v for j, v in enumerate(r)]
            for i, r in enumerate(self.data)
        ]
        return Matrix(rows=self.rows, cols=self.cols, data=data)

    def cleared(self) -> "Matrix":
        """Нулевая матрица того же размера."""
        return Matrix.zeros(self.rows, self.cols)

    def filled_random(self, rng: Optional[random.Random] = None) -> "Matrix":
        """
        Матрица того же размера со случайными значениями.

        Значения: round((u - 0.5) * 20) / 2, u ∈ [0, 1) — диапазон [-5, 5], шаг 0.5.
        """
        rng = rng or random.Random()
        data = [
            [round((rng.random() - 0.5) * 20) / 2 for _ in range(self.cols)]
            for _ in range(self.rows)
        ]
        return Matrix(rows=self.rows, cols=self.cols, data=data)

    # -------------------------------------------------------------------------
    # Экспорт
    # -------------------------------------------------------------------------

    def to_text(self) -> str:
        """Текстовый экспорт: ячейки через TAB, строки через перевод строки."""
        return "\n".join("\t".join(format_number(v) for v in row) for row in self.data)

    def to_contract(self) -> dict:
        """Сериализация в контракт contracts/schema/matrix.json."""
        return {"rows": self.rows, "cols": self.cols, "data": self.to_lists()}


def format_number(value: float) -> str:
    """Число без ".0" для целых значений: 1.0 → "1", 0.5 → "0.5"."""
    if float(value).is_integer():
        return str(int(value))
    return repr(value)


# =============================================================================
# ПРИМЕРЫ
# =============================================================================


EXAMPLE_MATRICES: Final[dict[str, Matrix]] = {
    "identity": Matrix.identity(3),
    "random": Matrix.from_rows([[2, 1, 3], [1, 4, 2], [3, 2, 1]]),
    "singular": Matrix.from_rows([[1, 2, 3], [2, 4, 6], [3, 6, 9]]),
}


def load_example(name: str) -> Matrix:
    """
    Загрузка именованного примера (identity / random / singular).

    Raises:
        KeyError: неизвестное имя примера
    """
    try:
        return EXAMPLE_MATRICES[name]
    except KeyError:
        raise KeyError(
            f"Unknown example matrix '{name}', expected one of {sorted(EXAMPLE_MATRICES)}"
        ) from None
