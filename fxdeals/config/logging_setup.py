"""Root logger configuration for API and command-line runtimes."""

from __future__ import annotations

import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from .settings import AppSettings

_CONFIG_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


class _EnvironmentFilter(logging.Filter):
    """Attach the runtime environment label to every record."""

    def __init__(self, environment_name: str):
        super().__init__()
        self._environment_name = environment_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.environment = self._environment_name
        return True


def config_setup_logging(settings: AppSettings) -> None:
    """Configure the root logger once for the current process.

    Existing root handlers are replaced so repeated bootstrap calls do not
    duplicate output.

    Args:
        settings: Validated runtime settings.

    Returns:
        None: Logging configuration is applied as a side effect.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        root_logger.handlers.clear()
    root_logger.setLevel(settings.log_level)

    handler = logging.StreamHandler(sys.stdout)
    if settings.log_json:
        handler.setFormatter(
            JsonFormatter(
                f"{_CONFIG_LOG_FORMAT} %(environment)s",
                rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
            )
        )
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    handler.addFilter(_EnvironmentFilter(settings.environment_name))
    root_logger.addHandler(handler)
