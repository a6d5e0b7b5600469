"""Name-keyed registry of resource watchers and idling adapters.

The registry owns every watcher and adapter it hands out. Targets are either
a name or any object, whose name is derived from its runtime type via
:func:`busywatch.utils.naming.name_of`.

Entries are never evicted automatically; :meth:`WatcherRegistry.remove_watcher`
and :meth:`WatcherRegistry.reset` are the only ways to drop them.
"""

from __future__ import annotations

import logging
import threading
from typing import NoReturn

from .adapter import IdlingAdapter
from .errors.internal import WatcherNotFoundError
from .harness import Harness, get_default_harness
from .logs.logger import logger
from .mode import ModeSwitch, get_mode_switch
from .utils.naming import resolve_name
from .watcher import ResourceWatcher, create_resource_watcher

_WATCHER = "ResourceWatcher"
_ADAPTER = "IdlingAdapter"


class WatcherRegistry:
    """Process-wide (or test-local) owner of watchers and idling adapters."""

    _watchers: dict[str, ResourceWatcher]
    _adapters: dict[str, IdlingAdapter]
    _lock: threading.Lock

    def __init__(
        self, mode: ModeSwitch | None = None, harness: Harness | None = None
    ) -> None:
        self.mode = mode if mode is not None else get_mode_switch()
        self._harness = harness
        self._watchers = {}
        self._adapters = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._watchers)

    def __contains__(self, target: object) -> bool:
        return self.has_watcher(target)

    @property
    def harness(self) -> Harness:
        # Resolved lazily so registries without adapters never build one.
        if self._harness is None:
            self._harness = get_default_harness()
        return self._harness

    # --------------------------- Watchers --------------------------- #
    def create_watcher(self, target: object) -> ResourceWatcher:
        """Create a watcher for ``target`` and store it, replacing any previous one.

        The variant follows the mode switch at this moment: operating while
        testing, no-op in production.

        Args:
            target: Watcher name, or an object to derive the name from.

        Returns:
            The new watcher.

        Raises:
            InvalidInputError: If ``target`` is None or an empty name.
        """
        name = resolve_name(target)
        watcher = create_resource_watcher(name, testing=self.mode.is_testing())
        with self._lock:
            self._watchers[name] = watcher
            adapter = self._adapters.get(name)
        if adapter is not None:
            adapter.bind(watcher)
            logger.log_event("registry", "adapter_rebound", level=logging.DEBUG, name=name)
        logger.log_event(
            "registry",
            "watcher_created",
            level=logging.DEBUG,
            name=name,
            kind=watcher.kind.value,
        )
        return watcher

    def get_watcher(self, target: object) -> ResourceWatcher:
        """Return the watcher stored for ``target``.

        Raises:
            WatcherNotFoundError: If no watcher was created under that name.
            InvalidInputError: If ``target`` is None or an empty name.
        """
        name = resolve_name(target)
        with self._lock:
            watcher = self._watchers.get(name)
        if watcher is None:
            self._not_found(_WATCHER, name)
        return watcher

    def has_watcher(self, target: object) -> bool:
        name = resolve_name(target)
        with self._lock:
            return name in self._watchers

    def remove_watcher(self, target: object) -> ResourceWatcher:
        """Drop the watcher stored for ``target`` and return it.

        An idling adapter registered under the same name stays registered and
        keeps reporting the removed watcher's state.

        Raises:
            WatcherNotFoundError: If no watcher exists under that name.
        """
        name = resolve_name(target)
        with self._lock:
            watcher = self._watchers.pop(name, None)
        if watcher is None:
            self._not_found(_WATCHER, name)
        logger.log_event("registry", "watcher_removed", level=logging.DEBUG, name=name)
        return watcher

    def watcher_names(self) -> list[str]:
        with self._lock:
            return list(self._watchers)

    # ------------------------ Idling adapters ----------------------- #
    def register_idling_adapter(self, target: object) -> IdlingAdapter:
        """Create an idling adapter for ``target`` and hand it to the harness.

        A previous adapter under the same name is unregistered from the
        harness first.

        Raises:
            WatcherNotFoundError: If no watcher exists under that name.
        """
        name = resolve_name(target)
        watcher = self.get_watcher(name)
        adapter = IdlingAdapter(name, watcher)
        with self._lock:
            previous = self._adapters.get(name)
            self._adapters[name] = adapter
        if previous is not None:
            self.harness.unregister_idling_adapters(previous)
        self.harness.register_idling_adapters(adapter)
        logger.log_event("registry", "adapter_registered", level=logging.DEBUG, name=name)
        return adapter

    def get_idling_adapter(self, target: object) -> IdlingAdapter:
        name = resolve_name(target)
        with self._lock:
            adapter = self._adapters.get(name)
        if adapter is None:
            self._not_found(_ADAPTER, name)
        return adapter

    def unregister_idling_adapter(self, target: object) -> None:
        """Hand the adapter for ``target`` to the harness for unregistration, then drop it.

        Raises:
            WatcherNotFoundError: If no adapter is registered under that name.
        """
        adapter = self.get_idling_adapter(target)
        self.harness.unregister_idling_adapters(adapter)
        with self._lock:
            if self._adapters.get(adapter.name) is adapter:
                del self._adapters[adapter.name]
        adapter.unbind()
        logger.log_event(
            "registry", "adapter_unregistered", level=logging.DEBUG, name=adapter.name
        )

    # --------------------------- Lifecycle -------------------------- #
    def reset(self) -> None:
        """Clear both maps and restore testing mode, for test teardown.

        Adapters still registered are unregistered from the harness so it
        stops polling them.
        """
        with self._lock:
            adapters = list(self._adapters.values())
            watcher_count = len(self._watchers)
            self._watchers.clear()
            self._adapters.clear()
        if adapters:
            self.harness.unregister_idling_adapters(*adapters)
            for adapter in adapters:
                adapter.unbind()
        self.mode.reset()
        logger.log_event(
            "registry",
            "reset",
            level=logging.DEBUG,
            watchers=watcher_count,
            adapters=len(adapters),
        )

    @staticmethod
    def _not_found(kind: str, name: str) -> NoReturn:
        logger.log_event(
            "registry", "watcher_not_found", level=logging.DEBUG, kind=kind, name=name
        )
        raise WatcherNotFoundError(kind, name)


# Global registry instance
_DEFAULT_REGISTRY: WatcherRegistry | None = None


def get_registry() -> WatcherRegistry:
    """Return the process-wide registry, creating it on first use.

    It shares the process-wide mode switch and reference harness.
    """
    global _DEFAULT_REGISTRY  # noqa: PLW0603
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = WatcherRegistry()
    return _DEFAULT_REGISTRY


def create_watcher(target: object) -> ResourceWatcher:
    return get_registry().create_watcher(target)


def get_watcher(target: object) -> ResourceWatcher:
    return get_registry().get_watcher(target)


def remove_watcher(target: object) -> ResourceWatcher:
    return get_registry().remove_watcher(target)


def register_idling_adapter(target: object) -> IdlingAdapter:
    return get_registry().register_idling_adapter(target)


def unregister_idling_adapter(target: object) -> None:
    get_registry().unregister_idling_adapter(target)


def reset() -> None:
    """Reset the process-wide registry and mode switch"""
    get_registry().reset()


__all__ = [
    "WatcherRegistry",
    "create_watcher",
    "get_registry",
    "get_watcher",
    "register_idling_adapter",
    "remove_watcher",
    "reset",
    "unregister_idling_adapter",
]
