"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей и типов
- Детекция нарушений constraints (minimum / enum / minLength)
- Интеграция с Pydantic моделями (to_contract → schema)
"""

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    MatrixValidator,
    ResultValidator,
    SchemaLoader,
    validate_matrix,
    validate_result,
)
from src.core.domain import ErrorKind, Matrix, error, load_example, matrix_result, scalar, vector
from src.core.math.linalg import eigenvalues, inverse, rank


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_matrix():
    """Валидная матрица 2x2."""
    return {"rows": 2, "cols": 2, "data": [[1, 2], [3, 4.5]]}


@pytest.fixture
def valid_results():
    """По одному валидному результату каждого варианта."""
    return [
        {"type": "number", "value": -2},
        {"type": "matrix", "value": [[0.6, -0.7], [-0.2, 0.4]]},
        {"type": "array", "value": [3.0, 2.0]},
        {"type": "array", "value": []},
        {"type": "error", "kind": "SINGULAR", "message": "Matrix is singular (determinant = 0)"},
    ]


# =============================================================================
# SCHEMA LOADING
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузки схем"""

    @pytest.mark.parametrize("name", ["matrix", "result"])
    def test_schemas_load_and_pass_meta_validation(self, name: str) -> None:
        schema = SchemaLoader().load_schema(name)
        assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"

    def test_schema_cached(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("matrix") is loader.load_schema("matrix")

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("tensor")


# =============================================================================
# MATRIX CONTRACT
# =============================================================================


class TestMatrixContract:
    """Тесты matrix.json"""

    def test_valid(self, valid_matrix) -> None:
        validate_matrix(valid_matrix)
        assert MatrixValidator().is_valid(valid_matrix)

    @pytest.mark.parametrize("field", ["rows", "cols", "data"])
    def test_required_fields(self, valid_matrix, field: str) -> None:
        del valid_matrix[field]
        with pytest.raises(ValidationError):
            validate_matrix(valid_matrix)

    def test_zero_rows_rejected(self, valid_matrix) -> None:
        valid_matrix["rows"] = 0
        assert not MatrixValidator().is_valid(valid_matrix)

    def test_non_numeric_cell_rejected(self, valid_matrix) -> None:
        valid_matrix["data"][0][1] = "2"
        errors = list(MatrixValidator().iter_errors(valid_matrix))
        assert len(errors) == 1

    def test_extra_field_rejected(self, valid_matrix) -> None:
        valid_matrix["name"] = "A"
        assert not MatrixValidator().is_valid(valid_matrix)

    def test_model_export_is_valid(self) -> None:
        """Matrix.to_contract() соответствует схеме"""
        for name in ("identity", "random", "singular"):
            validate_matrix(load_example(name).to_contract())
        validate_matrix(Matrix.zeros(1, 5).to_contract())


# =============================================================================
# RESULT CONTRACT
# =============================================================================


class TestResultContract:
    """Тесты result.json"""

    def test_valid(self, valid_results) -> None:
        validator = ResultValidator()
        for payload in valid_results:
            validator.validate(payload)

    def test_unknown_type(self) -> None:
        with pytest.raises(ValidationError):
            validate_result({"type": "complex", "value": 1})

    def test_unknown_error_kind(self) -> None:
        payload = {"type": "error", "kind": "OVERFLOW", "message": "too big"}
        assert not ResultValidator().is_valid(payload)

    def test_empty_error_message(self) -> None:
        payload = {"type": "error", "kind": "INTERNAL", "message": ""}
        assert not ResultValidator().is_valid(payload)

    def test_number_with_matrix_value(self) -> None:
        assert not ResultValidator().is_valid({"type": "number", "value": [[1]]})

    def test_every_error_kind_is_valid(self) -> None:
        for kind in ErrorKind:
            validate_result(error(kind, "message").to_contract())

    def test_model_export_is_valid(self) -> None:
        """Result.to_contract() соответствует схеме"""
        singular = load_example("singular")
        for result in (
            scalar(0.0),
            vector([]),
            matrix_result([[1.0]]),
            rank(singular),
            inverse(singular),
            inverse(load_example("random")),
            eigenvalues(load_example("random")),
        ):
            validate_result(result.to_contract())
