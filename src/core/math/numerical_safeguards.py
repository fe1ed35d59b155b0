"""
Numerical Safeguards — пороги и защитные примитивы для матричных вычислений

Модуль собирает в одном месте все численные константы движка:
- Epsilon для детекции вырожденной матрицы (inverse)
- Epsilon для выбора ведущего элемента (rank, Gaussian elimination)
- Потолки размеров для алгоритмов с экспоненциальной сложностью
- Параметры по умолчанию для планировщика (debounce, scalar)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. |det| < EPS_SINGULAR ⇔ матрица считается вырожденной
2. Cofactor expansion не вызывается для n > MAX_COFACTOR_DIM
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Порог вырожденности: inverse возвращает SINGULAR при |det| < EPS_SINGULAR
EPS_SINGULAR: Final[float] = 1e-10

# Порог ведущего элемента в Gaussian elimination (rank)
EPS_PIVOT: Final[float] = 1e-10


# =============================================================================
# ПОТОЛКИ РАЗМЕРОВ
# =============================================================================

# Cofactor expansion — O(n!), determinant/inverse ограничены 4x4
MAX_COFACTOR_DIM: Final[int] = 4

# Eigenvalues поддерживаются только в закрытой форме для 2x2 и 3x3
MIN_EIGEN_DIM: Final[int] = 2
MAX_EIGEN_DIM: Final[int] = 3


# =============================================================================
# ПАРАМЕТРЫ ПЛАНИРОВЩИКА ПО УМОЛЧАНИЮ
# =============================================================================

# Окно debounce между правками матрицы (секунды)
DEBOUNCE_SECONDS_DEFAULT: Final[float] = 0.5

# Множитель для scalar_multiply
SCALAR_DEFAULT: Final[float] = 2.0


# =============================================================================
# NaN/Inf САНИТИЗАЦИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def sanitize_float(value: float, fallback: float = 0.0) -> float:
    """
    Замена NaN на fallback значение.

    Ввод ячейки матрицы: NaN трактуется как пустая ячейка (0.0).
    Inf пропускается как есть, операции его не валидируют.

    Examples:
        >>> sanitize_float(10.0)
        10.0
        >>> sanitize_float(float('nan'))
        0.0
    """
    if math.isnan(value):
        return fallback
    return value


# =============================================================================
# EPSILON-ПОРОГИ
# =============================================================================


def is_near_zero(value: float, eps: float) -> bool:
    """
    Строгая проверка близости к нулю: abs(value) < eps.

    Используется для singularity / pivot порогов, где граница eps
    уже считается ненулевой.
    """
    return abs(value) < eps


# =============================================================================
# ВАЛИДАЦИЯ ПАРАМЕТРОВ
# =============================================================================


def validate_non_negative(value: float, name: str) -> None:
    """
    Валидация: значение должно быть неотрицательным и конечным.

    Raises:
        ValueError: Если value < 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be finite, got {value}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
