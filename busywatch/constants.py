"""
Configuration constants for busywatch

Each constant can be overridden by setting an environment variable with the
same name. The testing/production mode flag is intentionally not among them:
it only changes through explicit calls.
"""

import os


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Attempts to parse the environment variable as a float. If the variable
    is not set or cannot be parsed, warns and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# Reference harness polling
BUSYWATCH_POLL_INTERVAL = _get_env_float(
    "BUSYWATCH_POLL_INTERVAL", 0.05
)  # Seconds between idle checks while waiting
BUSYWATCH_WAIT_TIMEOUT = _get_env_float(
    "BUSYWATCH_WAIT_TIMEOUT", 0.0
)  # Default wait_for_idle timeout in seconds; 0 waits indefinitely
