"""
Tests for mode.py module
"""

import logging

from busywatch.mode import (
    ModeSwitch,
    get_mode_switch,
    is_testing,
    reset_mode,
    set_testing,
)


class TestModeSwitch:
    """Test ModeSwitch instances"""

    def test_defaults_to_testing(self):
        assert ModeSwitch().is_testing() is True

    def test_set_testing(self):
        switch = ModeSwitch()
        switch.set_testing(False)
        assert switch.is_testing() is False
        switch.set_testing(True)
        assert switch.is_testing() is True

    def test_truthy_values_coerced(self):
        switch = ModeSwitch()
        switch.set_testing(0)
        assert switch.is_testing() is False
        switch.set_testing("yes")
        assert switch.is_testing() is True

    def test_reset_restores_testing(self):
        switch = ModeSwitch(testing=False)
        assert switch.is_testing() is False
        switch.reset()
        assert switch.is_testing() is True

    def test_changes_logged(self, debug_caplog):
        switch = ModeSwitch()
        switch.set_testing(False)
        switch.reset()
        messages = [r.getMessage() for r in debug_caplog.records]
        assert any("Watcher mode set to production" in m for m in messages)
        assert any("Watcher mode reset to testing" in m for m in messages)
        assert all(r.levelno == logging.DEBUG for r in debug_caplog.records)


class TestProcessWideMode:
    """Test the module-level helpers bound to the default switch"""

    def test_module_helpers_share_default_switch(self):
        set_testing(False)
        assert is_testing() is False
        assert get_mode_switch().is_testing() is False
        reset_mode()
        assert is_testing() is True

    def test_default_switch_is_singleton(self):
        assert get_mode_switch() is get_mode_switch()
