"""
Linear Algebra Kernel — чистые функции над Matrix

Каждая операция: (Matrix[, Matrix | float]) -> Result.
Функции никогда не бросают исключений: нарушение предусловий
(форма, размер, вырожденность) возвращается как ErrorResult.

Алгоритмы намеренно учебные:
- determinant / inverse: рекурсивное разложение по первой строке, O(n!)
- rank: Gaussian elimination in-place на приватной копии
- multiply: тройной цикл, O(n³)
- eigenvalues: закрытые формы для 2x2 и 3x3

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Входная Matrix никогда не изменяется (immutable + копия для rank)
2. inverse → SINGULAR ⇔ |det| < EPS_SINGULAR
3. determinant / inverse не выполняются для n > MAX_COFACTOR_DIM
4. rank(A) <= min(rows, cols)
"""

import math
from typing import Optional, Sequence

from src.core.domain.matrix import Matrix
from src.core.domain.result import (
    ErrorKind,
    ErrorResult,
    MatrixResult,
    Result,
    ScalarResult,
    error,
    matrix_result,
    scalar,
    vector,
)
from src.core.math.numerical_safeguards import (
    EPS_PIVOT,
    EPS_SINGULAR,
    MAX_COFACTOR_DIM,
    MAX_EIGEN_DIM,
    MIN_EIGEN_DIM,
    is_near_zero,
)

Rows = Sequence[Sequence[float]]


# =============================================================================
# COFACTOR PRIMITIVES
# =============================================================================


def minor(data: Rows, row: int, col: int) -> list[list[float]]:
    """Подматрица без строки row и столбца col."""
    return [
        [v for j, v in enumerate(r) if j != col]
        for i, r in enumerate(data)
        if i != row
    ]


def cofactor_determinant(data: Rows) -> float:
    """
    Определитель квадратных данных через cofactor expansion по первой строке.

    det = Σ_i (−1)^i · a[0][i] · det(minor(a, 0, i))

    Определитель пустой (0x0) матрицы равен 1: это нужно adjugate для 1x1.
    """
    n = len(data)
    if n == 0:
        return 1.0
    if n == 1:
        return data[0][0]
    if n == 2:
        return data[0][0] * data[1][1] - data[0][1] * data[1][0]

    det = 0.0
    for i in range(n):
        det += (-1) ** i * data[0][i] * cofactor_determinant(minor(data, 0, i))
    return det


def adjugate(data: Rows) -> list[list[float]]:
    """
    Присоединённая матрица: adj[j][i] = (−1)^(i+j) · det(minor(a, i, j)).

    Индексы переставлены: это транспонированная матрица алгебраических дополнений.
    """
    n = len(data)
    adj = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(n):
            adj[j][i] = (-1) ** (i + j) * cofactor_determinant(minor(data, i, j))
    return adj


# =============================================================================
# PRECONDITIONS
# =============================================================================


def _require_square(matrix: Matrix, operation: str) -> Optional[ErrorResult]:
    if matrix.is_square:
        return None
    return error(
        ErrorKind.NOT_SQUARE,
        f"{operation} requires a square matrix, got {matrix.rows}x{matrix.cols}",
    )


def _require_max_size(matrix: Matrix, operation: str, max_size: int) -> Optional[ErrorResult]:
    if max(matrix.rows, matrix.cols) <= max_size:
        return None
    return error(
        ErrorKind.SIZE_EXCEEDED,
        f"{operation} is only supported for matrices up to {max_size}x{max_size}, "
        f"got {matrix.rows}x{matrix.cols}",
    )


def _require_same_shape(a: Matrix, b: Matrix, operation: str) -> Optional[ErrorResult]:
    if a.shape == b.shape:
        return None
    return error(
        ErrorKind.SHAPE_MISMATCH,
        f"{operation} requires matrices of the same dimensions, "
        f"got {a.rows}x{a.cols} and {b.rows}x{b.cols}",
    )


# =============================================================================
# UNARY OPERATIONS
# =============================================================================


def determinant(matrix: Matrix) -> Result:
    """Определитель квадратной матрицы до MAX_COFACTOR_DIM x MAX_COFACTOR_DIM."""
    failure = _require_square(matrix, "Determinant") or _require_max_size(
        matrix, "Determinant", MAX_COFACTOR_DIM
    )
    if failure is not None:
        return failure
    return scalar(cofactor_determinant(matrix.data))


def inverse(matrix: Matrix) -> Result:
    """
    Обратная матрица через adjugate / det.

    Returns:
        MatrixResult, либо ErrorResult(SINGULAR) если |det| < EPS_SINGULAR
    """
    failure = _require_square(matrix, "Inverse") or _require_max_size(
        matrix, "Inverse", MAX_COFACTOR_DIM
    )
    if failure is not None:
        return failure

    det = cofactor_determinant(matrix.data)
    if is_near_zero(det, EPS_SINGULAR):
        return error(ErrorKind.SINGULAR, "Matrix is singular (determinant = 0)")

    adj = adjugate(matrix.data)
    return matrix_result([[v / det for v in row] for row in adj])


def transpose(matrix: Matrix) -> MatrixResult:
    """T[j][i] = A[i][j]; определено для любой формы, результат cols x rows."""
    return matrix_result(
        [[matrix.data[i][j] for i in range(matrix.rows)] for j in range(matrix.cols)]
    )


def trace(matrix: Matrix) -> Result:
    """Сумма диагональных элементов квадратной матрицы."""
    failure = _require_square(matrix, "Trace")
    if failure is not None:
        return failure
    return scalar(sum(matrix.data[i][i] for i in range(matrix.rows)))


def rank(matrix: Matrix) -> ScalarResult:
    """
    Ранг через Gaussian elimination на приватной копии.

    Если ведущий элемент близок к нулю:
    - ищется строка ниже с ненулевым элементом в том же столбце → swap
    - иначе рабочий ранг уменьшается, столбец [rank] копируется на место
      текущего, и текущий столбец проверяется заново
    """
    work = matrix.to_lists()
    rows, cols = matrix.rows, matrix.cols
    result_rank = min(rows, cols)

    i = 0
    while i < result_rank:
        if is_near_zero(work[i][i], EPS_PIVOT):
            swapped = False
            for k in range(i + 1, rows):
                if abs(work[k][i]) > EPS_PIVOT:
                    work[i], work[k] = work[k], work[i]
                    swapped = True
                    break
            if not swapped:
                result_rank -= 1
                for k in range(rows):
                    work[k][i] = work[k][result_rank]
            continue

        pivot_row = work[i]
        for k in range(i + 1, rows):
            factor = work[k][i] / pivot_row[i]
            for j in range(i, cols):
                work[k][j] -= factor * pivot_row[j]
        i += 1

    return scalar(float(result_rank))


def eigenvalues(matrix: Matrix) -> Result:
    """
    Собственные значения в закрытой форме (только 2x2 и 3x3).

    2x2: корни λ² − tλ + d = 0. При отрицательном дискриминанте
         возвращается пустой вектор (комплексные корни не поддерживаются).
    3x3: приближение [trace/3, √|det|, −√|det|], а не корни
         характеристического многочлена.
    """
    failure = _require_square(matrix, "Eigenvalues")
    if failure is not None:
        return failure

    n = matrix.rows
    if not MIN_EIGEN_DIM <= n <= MAX_EIGEN_DIM:
        return error(
            ErrorKind.SIZE_EXCEEDED,
            f"Eigenvalues are only supported for 2x2 and 3x3 matrices, got {n}x{n}",
        )

    data = matrix.data
    if n == 2:
        t = data[0][0] + data[1][1]
        d = data[0][0] * data[1][1] - data[0][1] * data[1][0]
        discriminant = t * t - 4 * d
        if discriminant < 0:
            return vector([])
        sqrt_disc = math.sqrt(discriminant)
        return vector([(t + sqrt_disc) / 2, (t - sqrt_disc) / 2])

    t = sum(data[i][i] for i in range(n))
    root = math.sqrt(abs(cofactor_determinant(data)))
    return vector([t / 3, root, -root])


def scalar_multiply(matrix: Matrix, k: float) -> MatrixResult:
    """Поэлементное умножение на скаляр."""
    return matrix_result([[v * k for v in row] for row in matrix.data])


# =============================================================================
# BINARY OPERATIONS
# =============================================================================


def add(a: Matrix, b: Matrix) -> Result:
    """A + B поэлементно; формы должны совпадать."""
    failure = _require_same_shape(a, b, "Addition")
    if failure is not None:
        return failure
    return matrix_result(
        [[x + y for x, y in zip(row_a, row_b)] for row_a, row_b in zip(a.data, b.data)]
    )


def subtract(a: Matrix, b: Matrix) -> Result:
    """A − B поэлементно; формы должны совпадать."""
    failure = _require_same_shape(a, b, "Subtraction")
    if failure is not None:
        return failure
    return matrix_result(
        [[x - y for x, y in zip(row_a, row_b)] for row_a, row_b in zip(a.data, b.data)]
    )


def multiply(a: Matrix, b: Matrix) -> Result:
    """A × B (A.cols == B.rows), результат A.rows x B.cols."""
    if a.cols != b.rows:
        return error(
            ErrorKind.SHAPE_MISMATCH,
            f"Multiplication requires A.cols == B.rows, got {a.rows}x{a.cols} and {b.rows}x{b.cols}",
        )

    out = [[0.0] * b.cols for _ in range(a.rows)]
    for i in range(a.rows):
        for j in range(b.cols):
            for k in range(a.cols):
                out[i][j] += a.data[i][k] * b.data[k][j]
    return matrix_result(out)


__all__ = [
    "minor",
    "cofactor_determinant",
    "adjugate",
    "determinant",
    "inverse",
    "transpose",
    "trace",
    "rank",
    "eigenvalues",
    "scalar_multiply",
    "add",
    "subtract",
    "multiply",
]
