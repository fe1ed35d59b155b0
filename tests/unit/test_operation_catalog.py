"""
Тесты Operation Catalog

Проверяет:
- Состав и порядок каталога
- Предикаты применимости для разных форм матрицы
- Поиск дескриптора по имени
"""

import pytest

from src.catalog import (
    OPERATION_CATALOG,
    OPERATION_NAMES,
    Arity,
    get_applicable_operations,
    get_operation,
)
from src.core.domain import Matrix

UNARY_ALWAYS = {"transpose", "rank", "scalar_multiply"}
BINARY = {"add", "subtract", "multiply"}


def _names(matrix: Matrix) -> set[str]:
    return {op.name for op in get_applicable_operations(matrix)}


class TestCatalogContents:
    """Тесты состава каталога"""

    def test_catalog_order(self) -> None:
        assert OPERATION_NAMES == (
            "determinant",
            "inverse",
            "transpose",
            "trace",
            "rank",
            "eigenvalues",
            "add",
            "subtract",
            "multiply",
            "scalar_multiply",
        )

    def test_binary_operations(self) -> None:
        binary = {op.name for op in OPERATION_CATALOG if op.arity == Arity.BINARY}
        assert binary == BINARY

    def test_descriptor_constraints(self) -> None:
        det = get_operation("determinant")
        assert det.requires_square
        assert det.max_size == 4
        assert get_operation("eigenvalues").max_size == 3
        assert get_operation("trace").max_size is None
        assert not get_operation("rank").requires_square

    def test_unknown_operation(self) -> None:
        with pytest.raises(KeyError, match="Unknown operation 'lu'"):
            get_operation("lu")


class TestApplicability:
    """Тесты предикатов применимости"""

    @pytest.mark.parametrize("n", [2, 3])
    def test_small_square_gets_every_unary(self, n: int) -> None:
        names = _names(Matrix.identity(n))
        assert names == UNARY_ALWAYS | BINARY | {"determinant", "inverse", "trace", "eigenvalues"}

    def test_4x4_has_no_eigenvalues(self) -> None:
        names = _names(Matrix.identity(4))
        assert "eigenvalues" not in names
        assert {"determinant", "inverse", "trace"} <= names

    def test_5x5_drops_cofactor_operations(self) -> None:
        names = _names(Matrix.identity(5))
        assert names.isdisjoint({"determinant", "inverse", "eigenvalues"})
        assert "trace" in names

    def test_rectangular(self) -> None:
        """2x3: только операции без требования квадратности"""
        assert _names(Matrix.zeros(2, 3)) == UNARY_ALWAYS | BINARY

    def test_1x1_eigenvalues_listed(self) -> None:
        """Предикат каталога не проверяет нижнюю границу размера"""
        assert "eigenvalues" in _names(Matrix.identity(1))

    def test_catalog_order_preserved(self) -> None:
        ops = get_applicable_operations(Matrix.identity(3))
        assert [op.name for op in ops] == list(OPERATION_NAMES)

    def test_is_applicable_uses_larger_dimension(self) -> None:
        """Потолок размера сравнивается с max(rows, cols)"""
        det = get_operation("determinant")
        assert det.is_applicable(4, 4)
        assert not det.is_applicable(5, 5)
        assert not get_operation("transpose").is_binary
