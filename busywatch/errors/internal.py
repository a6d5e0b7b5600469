"""Centralized error hierarchy for watcher bookkeeping.

Every error here is a programming-contract violation: the caller did
something the registry or a watcher cannot honour. Nothing is retried
internally and nothing is swallowed.

Classes:
  WatcherError          – Base for all busywatch errors.
  WatcherNotFoundError  – Lookup of a name with no watcher / adapter.
  UnbalancedIdleError   – ``idle()`` without a matching ``busy()``.
  InvalidInputError     – ``None`` or empty name / target.
  IdleTimeoutError      – Reference harness gave up waiting for idle.
"""

from __future__ import annotations

from collections.abc import Mapping


class WatcherError(Exception):
    """Base class for all busywatch errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class WatcherNotFoundError(WatcherError, LookupError):
    """Raised when no watcher or idling adapter exists under a name.

    Lookups never auto-create; a missing entry usually means the test
    setup forgot a ``create_watcher`` / ``register_idling_adapter`` call.
    """

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(
            f"There is no {kind} associated with the name {name}",
            data={"kind": kind, "name": name},
        )
        self.kind = kind
        self.name = name


class UnbalancedIdleError(WatcherError, RuntimeError):
    """Raised when ``idle()`` is called on a watcher that is already idle."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"idle() called more times than busy() on watcher {name}",
            data={"name": name},
        )
        self.name = name


class InvalidInputError(WatcherError, ValueError):
    """Raised for a ``None`` / empty name or target at the call boundary."""


class IdleTimeoutError(WatcherError, TimeoutError):
    """Raised by the reference harness when adapters stay busy too long.

    Attributes:
        busy_names: Names of the adapters still busy at timeout.
    """

    def __init__(self, timeout: float, busy_names: list[str]) -> None:
        super().__init__(
            f"Still busy after {timeout:.2f}s: {', '.join(busy_names)}",
            data={"timeout": timeout, "busy_names": list(busy_names)},
        )
        self.timeout = timeout
        self.busy_names = list(busy_names)


__all__ = [
    "WatcherError",
    "WatcherNotFoundError",
    "UnbalancedIdleError",
    "InvalidInputError",
    "IdleTimeoutError",
]
