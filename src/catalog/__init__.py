"""Catalog — каталог матричных операций и их диспетчеризация в ядро.

- operations: дескрипторы операций и предикаты применимости
- dispatch: вызов ядра по имени операции, расчёт с пошаговым описанием
"""

from .operations import (
    OPERATION_CATALOG,
    OPERATION_NAMES,
    Arity,
    OperationDescriptor,
    get_applicable_operations,
    get_operation,
)
from .dispatch import CalculationReport, perform_operation, run_operation

__all__ = [
    "OPERATION_CATALOG",
    "OPERATION_NAMES",
    "Arity",
    "OperationDescriptor",
    "get_applicable_operations",
    "get_operation",
    "CalculationReport",
    "perform_operation",
    "run_operation",
]
