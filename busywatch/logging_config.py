r"""
Logging configuration for applications and test suites using busywatch.

Provides an opt-in colorlog setup; the library itself never configures the
root logger.
"""

import logging
import os
import sys

import colorlog


class HarnessNoiseFilter(logging.Filter):
    """Filter to suppress per-poll harness chatter below INFO."""

    def filter(self, record):
        """Return False for DEBUG records from the harness poll loop."""
        if record.levelno >= logging.INFO:
            return True
        msg = record.getMessage()
        return "harness_poll" not in msg and "Polling idling adapters" not in msg


class LoggerConfigurator:
    """Handles logging configuration cleanly using colorlog.

    Supports environment variable configuration for log levels.
    """

    def __init__(self, config=None):
        """Initialize the configurator.

        Args:
            config: Optional config dict. Recognised keys: ``stream``
                (defaults to ``sys.stderr``) and ``level`` (overrides DEBUG).
        """
        self.config = config or {}

    def resolve_level(self) -> int:
        """Return the configured level, falling back to the DEBUG env var."""
        if "level" in self.config:
            return int(self.config["level"])
        debug_env = os.environ.get("DEBUG", "").lower()
        return logging.DEBUG if debug_env in ("true", "1", "yes") else logging.INFO

    def build_formatter(self) -> colorlog.ColoredFormatter:
        return colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "magenta",
            },
            secondary_log_colors={
                "message": {
                    "ERROR": "red",
                    "CRITICAL": "magenta",
                }
            },
            reset=True,
        )

    def configure(self) -> logging.Handler:
        """Configure root logging with colored output using colorlog.

        Uses environment variables:
        - DEBUG: Set to 'true', '1', or 'yes' for DEBUG level, otherwise INFO

        Returns:
            The installed handler, so callers can remove it again.
        """
        log_level = self.resolve_level()
        formatter = self.build_formatter()

        handler = logging.StreamHandler(self.config.get("stream", sys.stderr))
        handler.setFormatter(formatter)
        handler.addFilter(HarnessNoiseFilter())

        root_logger = logging.getLogger()
        root_logger.addHandler(handler)
        root_logger.setLevel(log_level)

        # The event logger carries its own console handler; keep levels in step.
        logging.getLogger("busywatch").setLevel(log_level)
        return handler
