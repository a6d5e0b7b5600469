"""Busy/idle resource watchers.

A watcher counts outstanding units of asynchronous work for one named
resource. Two independent variants share the :class:`ResourceWatcher`
protocol:

``OperatingResourceWatcher``
    Tracks a lock-guarded busy counter, raises on unbalanced ``idle()`` and
    notifies its listener once per busy -> idle transition.
``NoOpResourceWatcher``
    Ignores every call and always reports idle, so production code pays no
    bookkeeping cost.

Use :func:`create_resource_watcher` to pick the variant for the current mode.
"""

from __future__ import annotations

import functools
import inspect
import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager, nullcontext
from enum import Enum
from typing import Any, Protocol, TypeVar, runtime_checkable

from .errors.internal import UnbalancedIdleError
from .logs.logger import logger

F = TypeVar("F", bound=Callable[..., Any])

IdleListener = Callable[[], None]


class WatcherState(Enum):
    """Watcher states."""

    IDLE = "idle"
    BUSY = "busy"


class WatcherKind(Enum):
    """Which watcher variant a factory call produced."""

    OPERATING = "operating"
    NOOP = "noop"


@runtime_checkable
class ResourceWatcher(Protocol):  # minimal structural typing
    @property
    def name(self) -> str: ...  # noqa: D401,E701
    @property
    def kind(self) -> WatcherKind: ...  # noqa: D401,E701
    @property
    def state(self) -> WatcherState: ...  # noqa: D401,E701
    @property
    def busy_count(self) -> int: ...  # noqa: D401,E701
    def busy(self) -> None: ...  # noqa: D401,E701
    def idle(self) -> None: ...  # noqa: D401,E701
    def is_idle_now(self) -> bool: ...  # noqa: D401,E701
    def set_listener(self, listener: IdleListener | None) -> None: ...  # noqa: E701
    def tracking(self) -> AbstractContextManager[None]: ...  # noqa: E701


class OperatingResourceWatcher:
    """Watcher that really tracks busy/idle transitions.

    IDLE: busy_count == 0
    BUSY: busy_count > 0

    ``busy()`` calls nest; the watcher returns to IDLE only once every
    ``busy()`` has been matched by an ``idle()``.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._busy_count = 0
        self._listener: IdleListener | None = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"OperatingResourceWatcher(name={self._name!r}, busy_count={self._busy_count})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def kind(self) -> WatcherKind:
        return WatcherKind.OPERATING

    @property
    def busy_count(self) -> int:
        return self._busy_count

    @property
    def state(self) -> WatcherState:
        return WatcherState.IDLE if self._busy_count == 0 else WatcherState.BUSY

    @property
    def listener(self) -> IdleListener | None:
        return self._listener

    def set_listener(self, listener: IdleListener | None) -> None:
        """Attach the single idle listener; the last one attached wins."""
        with self._lock:
            self._listener = listener

    def busy(self) -> None:
        """Mark one more unit of work as in flight."""
        with self._lock:
            self._busy_count += 1
            became_busy = self._busy_count == 1
        if became_busy:
            logger.log_event("watcher", "busy", level=logging.DEBUG, name=self._name)

    def idle(self) -> None:
        """Mark one unit of work as finished.

        Raises:
            UnbalancedIdleError: If the watcher is already idle. The count
                stays at zero.
        """
        with self._lock:
            if self._busy_count == 0:
                unbalanced = True
                became_idle = False
                listener = None
            else:
                unbalanced = False
                self._busy_count -= 1
                became_idle = self._busy_count == 0
                listener = self._listener if became_idle else None

        if unbalanced:
            logger.log_event(
                "watcher", "unbalanced_idle", level=logging.WARNING, name=self._name
            )
            raise UnbalancedIdleError(self._name)
        if not became_idle:
            return

        logger.log_event("watcher", "idle", level=logging.DEBUG, name=self._name)
        # Called outside the lock so listeners may query the watcher.
        if listener is not None:
            try:
                listener()
            except Exception as e:
                logger.log_event(
                    "watcher",
                    "listener_error",
                    level=logging.ERROR,
                    name=self._name,
                    error=str(e),
                )
                raise

    def is_idle_now(self) -> bool:
        return self._busy_count == 0

    @contextmanager
    def tracking(self) -> Iterator[None]:
        """Hold the watcher busy for the duration of a ``with`` block."""
        self.busy()
        try:
            yield
        finally:
            self.idle()


class NoOpResourceWatcher:
    """Production watcher: every call is inert and it is always idle."""

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return f"NoOpResourceWatcher(name={self._name!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def kind(self) -> WatcherKind:
        return WatcherKind.NOOP

    @property
    def busy_count(self) -> int:
        return 0

    @property
    def state(self) -> WatcherState:
        return WatcherState.IDLE

    def set_listener(self, listener: IdleListener | None) -> None:
        pass

    def busy(self) -> None:
        pass

    def idle(self) -> None:
        pass

    def is_idle_now(self) -> bool:
        return True

    def tracking(self) -> AbstractContextManager[None]:
        return nullcontext()


_WATCHER_TYPES: dict[WatcherKind, Callable[[str], ResourceWatcher]] = {
    WatcherKind.OPERATING: OperatingResourceWatcher,
    WatcherKind.NOOP: NoOpResourceWatcher,
}


def watcher_kind_for(testing: bool) -> WatcherKind:
    return WatcherKind.OPERATING if testing else WatcherKind.NOOP


def create_resource_watcher(name: str, *, testing: bool) -> ResourceWatcher:
    """Build the watcher variant matching the given mode.

    Args:
        name: Name the watcher reports in logs and errors.
        testing: True for an operating watcher, False for a no-op one.

    Returns:
        A fresh, idle watcher.
    """
    kind = watcher_kind_for(testing)
    watcher = _WATCHER_TYPES[kind](name)
    logger.log_event(
        "watcher", "created", level=logging.DEBUG, name=name, kind=kind.value
    )
    return watcher


def watch_busy(watcher: ResourceWatcher) -> Callable[[F], F]:
    """Decorator keeping ``watcher`` busy while the wrapped callable runs.

    Works for plain functions and ``async def`` coroutine functions; for the
    latter the busy region spans the awaited body, not just coroutine
    creation.
    """

    def decorator(func: F) -> F:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with watcher.tracking():
                    return await func(*args, **kwargs)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with watcher.tracking():
                return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


__all__ = [
    "IdleListener",
    "NoOpResourceWatcher",
    "OperatingResourceWatcher",
    "ResourceWatcher",
    "WatcherKind",
    "WatcherState",
    "create_resource_watcher",
    "watch_busy",
    "watcher_kind_for",
]
