"""Busy/idle resource watchers for synchronising test harnesses with async work.

Typical use::

    import busywatch

    watcher = busywatch.create_watcher("image-loader")
    watcher.busy()
    ...  # background work
    watcher.idle()

and in test setup::

    busywatch.register_idling_adapter("image-loader")
    busywatch.get_default_harness().wait_for_idle()
"""

from .adapter import IdlingAdapter
from .errors.internal import (
    IdleTimeoutError,
    InvalidInputError,
    UnbalancedIdleError,
    WatcherError,
    WatcherNotFoundError,
)
from .harness import Harness, IdlingHarness, get_default_harness
from .mode import ModeSwitch, get_mode_switch, is_testing, reset_mode, set_testing
from .registry import (
    WatcherRegistry,
    create_watcher,
    get_registry,
    get_watcher,
    register_idling_adapter,
    remove_watcher,
    reset,
    unregister_idling_adapter,
)
from .utils.naming import name_of
from .watcher import (
    NoOpResourceWatcher,
    OperatingResourceWatcher,
    ResourceWatcher,
    WatcherKind,
    WatcherState,
    create_resource_watcher,
    watch_busy,
)

__all__ = [
    "Harness",
    "IdleTimeoutError",
    "IdlingAdapter",
    "IdlingHarness",
    "InvalidInputError",
    "ModeSwitch",
    "NoOpResourceWatcher",
    "OperatingResourceWatcher",
    "ResourceWatcher",
    "UnbalancedIdleError",
    "WatcherError",
    "WatcherKind",
    "WatcherNotFoundError",
    "WatcherRegistry",
    "WatcherState",
    "create_resource_watcher",
    "create_watcher",
    "get_default_harness",
    "get_mode_switch",
    "get_registry",
    "get_watcher",
    "is_testing",
    "name_of",
    "register_idling_adapter",
    "remove_watcher",
    "reset",
    "reset_mode",
    "set_testing",
    "unregister_idling_adapter",
    "watch_busy",
]
