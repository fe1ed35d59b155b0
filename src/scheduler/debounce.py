"""Debouncer — отложенный вызов с перезапуском таймера на каждое событие.

Один threading.Timer на экземпляр: каждый call() отменяет предыдущий
отложенный вызов и запускает таймер заново. Выполняется только последний
вызов, после которого прошло delay_seconds без новых событий.
"""

import threading
from typing import Any, Callable, Optional

from src.core.math.numerical_safeguards import DEBOUNCE_SECONDS_DEFAULT, validate_non_negative


class Debouncer:
    """Debounce с одним таймером.

    Usage:
        debouncer = Debouncer(0.5)
        debouncer.call(recalculate, matrix)   # перезапускает окно
        debouncer.flush()                     # выполнить немедленно
        debouncer.cancel()                    # отменить
    """

    def __init__(self, delay_seconds: float = DEBOUNCE_SECONDS_DEFAULT):
        """
        Args:
            delay_seconds: окно тишины перед выполнением (>= 0)

        Raises:
            ValueError: отрицательная или нечисловая задержка
        """
        validate_non_negative(delay_seconds, "delay_seconds")
        self.delay_seconds = delay_seconds

        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending_call: Optional[tuple[Callable[..., Any], tuple, dict]] = None
        # Токен текущего таймера: сработавший устаревший таймер ничего не делает
        self._token = 0

    @property
    def pending(self) -> bool:
        """True если есть отложенный вызов."""
        with self._lock:
            return self._pending_call is not None

    def call(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        """Запланировать fn(*args, **kwargs), отменив предыдущий отложенный вызов."""
        with self._lock:
            self._cancel_locked()
            self._token += 1
            self._pending_call = (fn, args, kwargs)
            timer = threading.Timer(self.delay_seconds, self._fire, args=(self._token,))
            timer.daemon = True
            self._timer = timer
        timer.start()

    def flush(self) -> bool:
        """Выполнить отложенный вызов немедленно.

        Returns:
            True если вызов был выполнен, False если ничего не ожидало
        """
        with self._lock:
            pending = self._take_locked()
        if pending is None:
            return False
        fn, args, kwargs = pending
        fn(*args, **kwargs)
        return True

    def cancel(self) -> None:
        """Отменить отложенный вызов (если есть)."""
        with self._lock:
            self._take_locked()

    def _fire(self, token: int) -> None:
        with self._lock:
            if token != self._token:
                return
            pending = self._take_locked()
        if pending is None:
            return
        fn, args, kwargs = pending
        fn(*args, **kwargs)

    def _take_locked(self) -> Optional[tuple[Callable[..., Any], tuple, dict]]:
        pending = self._pending_call
        self._cancel_locked()
        self._token += 1
        return pending

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._pending_call = None
