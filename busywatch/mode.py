"""
Process-wide testing/production switch consulted when watchers are created
"""

from __future__ import annotations

import logging

from .logs.logger import logger


class ModeSwitch:
    """Boolean flag selecting operating (testing) or no-op (production) watchers.

    Read only at watcher creation time; flipping it leaves existing watchers
    untouched. A plain attribute, no lock.
    """

    def __init__(self, testing: bool = True) -> None:
        self._testing = bool(testing)

    def set_testing(self, testing: bool) -> None:
        """Set to True while testing / debugging, False in production."""
        self._testing = bool(testing)
        logger.log_event(
            "mode",
            "changed",
            level=logging.DEBUG,
            mode="testing" if self._testing else "production",
        )

    def is_testing(self) -> bool:
        return self._testing

    def reset(self) -> None:
        """Restore testing mode, for teardown between independent test runs."""
        self._testing = True
        logger.log_event("mode", "reset", level=logging.DEBUG)


_DEFAULT_SWITCH = ModeSwitch()


def get_mode_switch() -> ModeSwitch:
    """Return the process-wide switch"""
    return _DEFAULT_SWITCH


def set_testing(testing: bool) -> None:
    """Set the process-wide mode flag"""
    _DEFAULT_SWITCH.set_testing(testing)


def is_testing() -> bool:
    """Return the process-wide mode flag"""
    return _DEFAULT_SWITCH.is_testing()


def reset_mode() -> None:
    """Reset the process-wide mode flag to testing"""
    _DEFAULT_SWITCH.reset()
