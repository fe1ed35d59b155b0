"""Evaluation Scheduler — параллельный пересчёт всех применимых операций.

Поведение при правке матрицы:
1. Пересчёт набора применимых операций каталога для новой формы
2. Все применимые операции помечаются PENDING (новое поколение таблицы)
3. Одна задача на операцию в ThreadPoolExecutor, без порядка между задачами
4. Каждая завершённая задача атомарно переводит свою запись в DONE,
   частичные результаты видны до завершения всего пакета
5. Debounce: серия быстрых правок запускает только последнюю;
   результаты устаревших пакетов отбрасываются (last edit wins)

Состояния записи: PENDING → DONE.
"""

import functools
import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from src.catalog.dispatch import run_operation
from src.catalog.operations import get_applicable_operations
from src.core.domain.matrix import Matrix
from src.core.domain.result import ErrorKind, Result, error
from src.core.math.numerical_safeguards import (
    DEBOUNCE_SECONDS_DEFAULT,
    SCALAR_DEFAULT,
    is_valid_float,
    validate_non_negative,
)

from .debounce import Debouncer

logger = logging.getLogger(__name__)


class EvaluationStatus(str, Enum):
    """Состояние записи операции."""

    PENDING = "PENDING"
    DONE = "DONE"


@dataclass(frozen=True)
class EvaluationEntry:
    """Запись таблицы результатов для одной операции.

    generation — номер правки матрицы, для которой запись создана.
    Запись не изменяется: переход PENDING → DONE создаёт новую запись.
    """

    operation_name: str
    status: EvaluationStatus
    generation: int
    result: Optional[Result] = None

    @property
    def is_done(self) -> bool:
        return self.status == EvaluationStatus.DONE


@dataclass(frozen=True)
class SchedulerConfig:
    """Конфигурация планировщика.

    - debounce_seconds: окно тишины между правками (default 0.5s)
    - max_workers: размер пула потоков (None — значение ThreadPoolExecutor)
    - scalar: множитель для scalar_multiply
    - auto_calculate: False — submit() только запоминает матрицу
    """

    debounce_seconds: float = DEBOUNCE_SECONDS_DEFAULT
    max_workers: Optional[int] = None
    scalar: float = SCALAR_DEFAULT
    auto_calculate: bool = True

    def __post_init__(self) -> None:
        validate_non_negative(self.debounce_seconds, "debounce_seconds")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if not is_valid_float(self.scalar):
            raise ValueError(f"scalar must be finite, got {self.scalar}")


class EvaluationScheduler:
    """Планировщик пересчёта операций для редактируемой матрицы.

    Usage:
        with EvaluationScheduler(on_update=render) as scheduler:
            scheduler.submit(matrix)          # debounced
            scheduler.wait_until_idle(1.0)
            results = scheduler.results()

    Единственное разделяемое изменяемое состояние — таблица записей,
    она обновляется под self._condition по одной записи за раз.
    """

    def __init__(
        self,
        config: Optional[SchedulerConfig] = None,
        on_update: Optional[Callable[[EvaluationEntry], None]] = None,
        executor: Optional[Executor] = None,
    ):
        """
        Args:
            config: конфигурация (default: SchedulerConfig())
            on_update: вызывается после каждого применённого DONE-результата
            executor: внешний пул (не закрывается в close())
        """
        self.config = config or SchedulerConfig()
        self._on_update = on_update

        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=self.config.max_workers,
            thread_name_prefix="matrix-eval",
        )
        self._debouncer = Debouncer(self.config.debounce_seconds)

        self._condition = threading.Condition()
        self._entries: dict[str, EvaluationEntry] = {}
        self._generation = 0
        self._latest_edit = 0
        self._debounce_pending = False
        self._current_matrix: Optional[Matrix] = None
        self._current_operand: Optional[Matrix] = None
        self._closed = False

    # -------------------------------------------------------------------------
    # Правки
    # -------------------------------------------------------------------------

    def submit(self, matrix: Matrix, operand: Optional[Matrix] = None) -> bool:
        """Зарегистрировать правку матрицы; пересчёт после debounce окна.

        Args:
            matrix: новое значение матрицы A
            operand: матрица B для бинарных операций (None — бинарные пропускаются)

        Returns:
            True если пересчёт запланирован, False если матрица не изменилась
            или auto_calculate выключен

        Raises:
            RuntimeError: планировщик закрыт
        """
        with self._condition:
            self._ensure_open()
            if matrix == self._current_matrix and operand == self._current_operand:
                return False
            self._current_matrix = matrix
            self._current_operand = operand
            self._latest_edit += 1
            edit_id = self._latest_edit
            if not self.config.auto_calculate:
                self._debounce_pending = False
                self._debouncer.cancel()
                return False
            self._debounce_pending = True
            # Под тем же локом: отложенный вызов всегда соответствует _latest_edit
            self._debouncer.call(self._start_batch, matrix, operand, edit_id)
        return True

    def evaluate_now(self, matrix: Matrix, operand: Optional[Matrix] = None) -> int:
        """Немедленный пересчёт без debounce (отменяет ожидающую правку).

        Returns:
            Номер поколения запущенного пакета

        Raises:
            RuntimeError: планировщик закрыт
        """
        with self._condition:
            self._ensure_open()
            self._debouncer.cancel()
            self._current_matrix = matrix
            self._current_operand = operand
            self._latest_edit += 1
            edit_id = self._latest_edit

        self._start_batch(matrix, operand, edit_id)
        return edit_id

    def flush(self) -> bool:
        """Запустить ожидающий debounce пересчёт немедленно."""
        return self._debouncer.flush()

    # -------------------------------------------------------------------------
    # Запросы
    # -------------------------------------------------------------------------

    @property
    def generation(self) -> int:
        """Поколение текущей таблицы записей (0 — пересчётов ещё не было)."""
        with self._condition:
            return self._generation

    @property
    def current_matrix(self) -> Optional[Matrix]:
        with self._condition:
            return self._current_matrix

    def snapshot(self) -> dict[str, EvaluationEntry]:
        """Копия таблицы записей текущего поколения."""
        with self._condition:
            return dict(self._entries)

    def get_entry(self, operation_name: str) -> Optional[EvaluationEntry]:
        with self._condition:
            return self._entries.get(operation_name)

    def pending_operations(self) -> list[str]:
        with self._condition:
            return [name for name, entry in self._entries.items() if not entry.is_done]

    def results(self) -> dict[str, Result]:
        """Результаты завершённых операций текущего поколения."""
        with self._condition:
            return {
                name: entry.result
                for name, entry in self._entries.items()
                if entry.is_done and entry.result is not None
            }

    def is_idle(self) -> bool:
        """True если нет ожидающей правки и все записи в DONE."""
        with self._condition:
            return self._is_idle_locked()

    def wait_until_idle(self, timeout: Optional[float] = None) -> bool:
        """Ожидание завершения текущего пакета.

        Returns:
            True если планировщик простаивает, False по таймауту
        """
        with self._condition:
            return self._condition.wait_for(self._is_idle_locked, timeout=timeout)

    # -------------------------------------------------------------------------
    # Жизненный цикл
    # -------------------------------------------------------------------------

    def close(self, wait: bool = True) -> None:
        """Отменить ожидающую правку и остановить собственный пул потоков.

        Незавершённые записи текущего поколения удаляются: после close()
        планировщик простаивает, а results() содержит только готовые записи.
        """
        with self._condition:
            if self._closed:
                return
            self._closed = True
            self._debouncer.cancel()
            self._debounce_pending = False
            self._entries = {
                name: entry for name, entry in self._entries.items() if entry.is_done
            }
            self._condition.notify_all()
        if self._owns_executor:
            self._executor.shutdown(wait=wait, cancel_futures=True)

    def __enter__(self) -> "EvaluationScheduler":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Внутреннее
    # -------------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("EvaluationScheduler is closed")

    def _is_idle_locked(self) -> bool:
        if self._debounce_pending:
            return False
        return all(entry.is_done for entry in self._entries.values())

    def _start_batch(self, matrix: Matrix, operand: Optional[Matrix], edit_id: int) -> None:
        """Шаги 1-3: применимые операции → PENDING → задачи в пул."""
        with self._condition:
            if self._closed or edit_id != self._latest_edit:
                logger.debug("Skipping superseded edit %d (latest=%d)", edit_id, self._latest_edit)
                return

            operations = [
                op
                for op in get_applicable_operations(matrix)
                if not op.is_binary or operand is not None
            ]
            self._generation = edit_id
            self._entries = {
                op.name: EvaluationEntry(
                    operation_name=op.name,
                    status=EvaluationStatus.PENDING,
                    generation=edit_id,
                )
                for op in operations
            }
            self._debounce_pending = False
            self._condition.notify_all()

        logger.debug(
            "Generation %d: dispatching %d operations for %dx%d matrix",
            edit_id,
            len(operations),
            matrix.rows,
            matrix.cols,
        )

        for op in operations:
            try:
                future = self._executor.submit(
                    run_operation, op.name, matrix, operand, self.config.scalar
                )
            except RuntimeError:
                # Пул остановлен в close() между проверкой и отправкой
                logger.debug("Executor shut down, generation %d not dispatched", edit_id)
                return
            future.add_done_callback(functools.partial(self._complete, op.name, edit_id))

    def _complete(self, operation_name: str, generation: int, future: Future) -> None:
        """Шаг 4: атомарная замена одной записи на DONE."""
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            result: Result = error(ErrorKind.INTERNAL, str(exc) or type(exc).__name__)
        else:
            result = future.result()

        with self._condition:
            if generation != self._generation or operation_name not in self._entries:
                logger.debug(
                    "Discarding stale '%s' result of generation %d (current=%d)",
                    operation_name,
                    generation,
                    self._generation,
                )
                return
            entry = EvaluationEntry(
                operation_name=operation_name,
                status=EvaluationStatus.DONE,
                generation=generation,
                result=result,
            )
            self._entries[operation_name] = entry
            self._condition.notify_all()

        if self._on_update is not None:
            self._on_update(entry)
