"""Scheduler — debounced параллельный пересчёт матричных операций.

- Пересчёт всех применимых операций при правке матрицы
- Debounce серии правок (last edit wins)
- Атомарное обновление записи каждой операции PENDING → DONE
"""

from .debounce import Debouncer
from .evaluation_scheduler import (
    EvaluationEntry,
    EvaluationScheduler,
    EvaluationStatus,
    SchedulerConfig,
)

__all__ = [
    "Debouncer",
    "EvaluationEntry",
    "EvaluationScheduler",
    "EvaluationStatus",
    "SchedulerConfig",
]
