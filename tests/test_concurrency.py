"""Concurrent busy/idle traffic against shared watchers and the registry.

Validates that counters and registry maps lose no updates when many threads
hit them at once.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from busywatch.watcher import OperatingResourceWatcher


class TestConcurrentWatchers:
    """Thread-safety of the busy counter and registry maps."""

    def test_two_producers_then_one_consumer(self, registry):
        """2 x 1000 busy() then 2000 idle() ends idle with no unbalanced idle."""
        watcher = registry.create_watcher("shared")
        errors: list[BaseException] = []

        def run(action, times):
            try:
                for _ in range(times):
                    action()
            except BaseException as e:  # noqa: BLE001
                errors.append(e)

        producers = [
            threading.Thread(target=run, args=(watcher.busy, 1000)) for _ in range(2)
        ]
        for t in producers:
            t.start()
        for t in producers:
            t.join()
        assert watcher.busy_count == 2000

        consumer = threading.Thread(target=run, args=(watcher.idle, 2000))
        consumer.start()
        consumer.join()

        assert errors == []
        assert watcher.is_idle_now()
        assert watcher.busy_count == 0

    def test_interleaved_busy_idle_pairs(self):
        """Each worker does balanced busy/idle pairs; the result is idle."""
        watcher = OperatingResourceWatcher("pairs")
        transitions = []
        lock = threading.Lock()

        def on_idle():
            with lock:
                transitions.append(1)

        watcher.set_listener(on_idle)

        def worker():
            for _ in range(500):
                watcher.busy()
                watcher.idle()

        with ThreadPoolExecutor(max_workers=8) as pool:
            for f in [pool.submit(worker) for _ in range(8)]:
                f.result()

        assert watcher.is_idle_now()
        # Every notification corresponds to a real busy -> idle transition.
        assert 1 <= len(transitions) <= 8 * 500

    def test_concurrent_registry_creation(self, registry):
        """Parallel create_watcher calls on distinct names all land."""
        names = [f"w{i}" for i in range(200)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(registry.create_watcher, names))
        assert sorted(registry.watcher_names()) == sorted(names)
        for name in names:
            assert registry.get_watcher(name).is_idle_now()
