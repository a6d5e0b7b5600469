import logging
from unittest.mock import MagicMock

import pytest

from busywatch.harness import IdlingHarness
from busywatch.mode import ModeSwitch
from busywatch.registry import WatcherRegistry


@pytest.fixture
def mode() -> ModeSwitch:
    return ModeSwitch()


@pytest.fixture
def harness() -> IdlingHarness:
    return IdlingHarness()


@pytest.fixture
def registry(mode: ModeSwitch, harness: IdlingHarness) -> WatcherRegistry:
    """Isolated registry with its own mode switch and reference harness."""
    return WatcherRegistry(mode=mode, harness=harness)


@pytest.fixture
def mock_harness() -> MagicMock:
    return MagicMock(spec=["register_idling_adapters", "unregister_idling_adapters"])


@pytest.fixture
def mocked_registry(mode: ModeSwitch, mock_harness: MagicMock) -> WatcherRegistry:
    return WatcherRegistry(mode=mode, harness=mock_harness)


@pytest.fixture
def debug_caplog(caplog):
    """caplog capturing DEBUG events from the busywatch logger."""
    caplog.set_level(logging.DEBUG, logger="busywatch")
    return caplog
