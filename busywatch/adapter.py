"""
Idling-callback adapter handed to a test harness
"""

from __future__ import annotations

import threading

from .watcher import IdleListener, ResourceWatcher


class IdlingAdapter:
    """Exposes one watcher's idle state to a polling harness.

    The harness polls :meth:`is_idle_now` and may install a single
    "became idle" callback through :meth:`register_idle_transition_callback`.
    The adapter is the watcher's listener and forwards each busy -> idle
    transition to that callback.
    """

    def __init__(self, name: str, watcher: ResourceWatcher) -> None:
        self._name = name
        self._callback: IdleListener | None = None
        self._lock = threading.Lock()
        self._watcher = watcher
        self.bind(watcher)

    def __repr__(self) -> str:
        return f"IdlingAdapter(name={self._name!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def watcher(self) -> ResourceWatcher:
        return self._watcher

    def get_name(self) -> str:
        """Stable identity used by the harness in its own logging"""
        return self._name

    def bind(self, watcher: ResourceWatcher) -> None:
        """Track ``watcher`` from now on, detaching from the previous one."""
        with self._lock:
            previous = self._watcher
            self._watcher = watcher
        if previous is not watcher:
            previous.set_listener(None)
        watcher.set_listener(self._on_transition_to_idle)

    def unbind(self) -> None:
        """Stop listening to the bound watcher."""
        self._watcher.set_listener(None)

    def is_idle_now(self) -> bool:
        return self._watcher.is_idle_now()

    def register_idle_transition_callback(self, callback: IdleListener | None) -> None:
        with self._lock:
            self._callback = callback

    def _on_transition_to_idle(self) -> None:
        with self._lock:
            callback = self._callback
        if callback is not None:
            callback()
