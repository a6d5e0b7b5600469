"""Test harness boundary.

:class:`Harness` is what the registry hands idling adapters to. Any external
test framework can satisfy it with two methods. :class:`IdlingHarness` is an
in-process implementation for suites without such a framework: it tracks
registered adapters and blocks in :meth:`IdlingHarness.wait_for_idle` until
all of them report idle.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import Protocol, runtime_checkable

from .adapter import IdlingAdapter
from .constants import BUSYWATCH_POLL_INTERVAL, BUSYWATCH_WAIT_TIMEOUT
from .errors.internal import IdleTimeoutError
from .logs.logger import logger


@runtime_checkable
class Harness(Protocol):  # minimal structural typing
    def register_idling_adapters(self, *adapters: IdlingAdapter) -> None: ...  # noqa: E701
    def unregister_idling_adapters(self, *adapters: IdlingAdapter) -> None: ...  # noqa: E701


def _resolve_timeout(timeout: float | None) -> float | None:
    if timeout is None:
        timeout = BUSYWATCH_WAIT_TIMEOUT
    return timeout if timeout > 0 else None


class IdlingHarness:
    """Polls registered idling adapters until they are all idle.

    Waiting has no default deadline: adapters stuck busy make
    :meth:`wait_for_idle` hang, which surfaces stuck work as a hung test.
    Pass ``timeout`` (or set ``BUSYWATCH_WAIT_TIMEOUT``) to fail instead.
    """

    def __init__(self) -> None:
        self._adapters: dict[str, IdlingAdapter] = {}
        self._lock = threading.Lock()
        self._transition = threading.Event()

    def register_idling_adapters(self, *adapters: IdlingAdapter) -> None:
        for adapter in adapters:
            adapter.register_idle_transition_callback(self._transition.set)
            with self._lock:
                self._adapters[adapter.get_name()] = adapter
            logger.log_event(
                "harness", "registered", level=logging.DEBUG, name=adapter.get_name()
            )

    def unregister_idling_adapters(self, *adapters: IdlingAdapter) -> None:
        for adapter in adapters:
            name = adapter.get_name()
            with self._lock:
                if self._adapters.get(name) is not adapter:
                    continue
                del self._adapters[name]
            adapter.register_idle_transition_callback(None)
            logger.log_event("harness", "unregistered", level=logging.DEBUG, name=name)

    def registered_names(self) -> list[str]:
        with self._lock:
            return sorted(self._adapters)

    def busy_names(self) -> list[str]:
        with self._lock:
            adapters = list(self._adapters.values())
        return sorted(a.get_name() for a in adapters if not a.is_idle_now())

    def is_idle_now(self) -> bool:
        return not self.busy_names()

    def clear(self) -> None:
        with self._lock:
            adapters = list(self._adapters.values())
            self._adapters.clear()
        for adapter in adapters:
            adapter.register_idle_transition_callback(None)

    def wait_for_idle(
        self, timeout: float | None = None, poll_interval: float | None = None
    ) -> None:
        """Block until every registered adapter reports idle.

        Args:
            timeout: Seconds to wait; None uses ``BUSYWATCH_WAIT_TIMEOUT``,
                where 0 means wait indefinitely.
            poll_interval: Upper bound between checks. Idle transitions wake
                the loop early.

        Raises:
            IdleTimeoutError: If adapters are still busy after ``timeout``.
        """
        deadline_after = _resolve_timeout(timeout)
        interval = poll_interval if poll_interval is not None else BUSYWATCH_POLL_INTERVAL
        start = time.monotonic()
        while True:
            self._transition.clear()
            busy = self.busy_names()
            if not busy:
                return
            self._check_deadline(start, deadline_after, busy)
            logger.log_event(
                "harness", "poll", level=logging.DEBUG, busy=", ".join(busy)
            )
            self._transition.wait(interval)

    async def wait_for_idle_async(
        self, timeout: float | None = None, poll_interval: float | None = None
    ) -> None:
        """Async variant of :meth:`wait_for_idle` polling with ``asyncio.sleep``."""
        deadline_after = _resolve_timeout(timeout)
        interval = poll_interval if poll_interval is not None else BUSYWATCH_POLL_INTERVAL
        start = time.monotonic()
        while True:
            busy = self.busy_names()
            if not busy:
                return
            self._check_deadline(start, deadline_after, busy)
            logger.log_event(
                "harness", "poll", level=logging.DEBUG, busy=", ".join(busy)
            )
            await asyncio.sleep(interval)

    @staticmethod
    def _check_deadline(
        start: float, deadline_after: float | None, busy: list[str]
    ) -> None:
        if deadline_after is None:
            return
        if time.monotonic() - start >= deadline_after:
            logger.log_event(
                "harness",
                "wait_timeout",
                level=logging.WARNING,
                timeout=deadline_after,
                busy=", ".join(busy),
            )
            raise IdleTimeoutError(deadline_after, busy)


_DEFAULT_HARNESS: IdlingHarness | None = None


def get_default_harness() -> IdlingHarness:
    """Return the process-wide reference harness, creating it on first use"""
    global _DEFAULT_HARNESS  # noqa: PLW0603
    if _DEFAULT_HARNESS is None:
        _DEFAULT_HARNESS = IdlingHarness()
    return _DEFAULT_HARNESS


__all__ = ["Harness", "IdlingHarness", "get_default_harness"]
