"""Error hierarchy package."""

from .internal import (  # noqa: F401
    IdleTimeoutError,
    InvalidInputError,
    UnbalancedIdleError,
    WatcherError,
    WatcherNotFoundError,
)

__all__ = [
    "WatcherError",
    "WatcherNotFoundError",
    "UnbalancedIdleError",
    "InvalidInputError",
    "IdleTimeoutError",
]
