"""
Configuration loader for commit_body.

The tool has no configuration file. Defaults that users want to set once,
such as a header and footer added to every generated body, are read from
environment variables:

``AUTOCOMMIT_HEADER`` / ``AUTOCOMMIT_FOOTER``
    Text placed before / after the group lines.
``AUTOCOMMIT_LOG_LEVEL``
    Name of the logging level, ``INFO`` by default.
``AUTOCOMMIT_WORKERS``
    Number of threads used to classify files; unset means sequential.

Invalid values raise :class:`ConfigError`.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Mapping, Optional


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings or logging errors in
# environments where the root logger may be closed.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


ENV_PREFIX = "AUTOCOMMIT_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when a configuration value is invalid."""

    pass


def load_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Read the configuration from the environment and return it.

    Args:
        environ: Mapping to read from, ``os.environ`` when omitted.

    Returns:
        A dictionary with the keys:
        - header (str or None)
        - footer (str or None)
        - log_level (str): one of ``LOG_LEVELS``
        - workers (int or None)

    Raises:
        ConfigError: If a variable holds an invalid value.
    """
    if environ is None:
        environ = os.environ

    config: Dict[str, Any] = {
        "header": environ.get(ENV_PREFIX + "HEADER") or None,
        "footer": environ.get(ENV_PREFIX + "FOOTER") or None,
        "log_level": "INFO",
        "workers": None,
    }

    level = environ.get(ENV_PREFIX + "LOG_LEVEL")
    if level:
        level = level.strip().upper()
        if level not in LOG_LEVELS:
            raise ConfigError(
                f"{ENV_PREFIX}LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {level!r}"
            )
        config["log_level"] = level

    workers = environ.get(ENV_PREFIX + "WORKERS")
    if workers:
        try:
            count = int(workers)
        except ValueError as exc:
            raise ConfigError(f"{ENV_PREFIX}WORKERS must be an integer, got {workers!r}") from exc
        if count < 1:
            raise ConfigError(f"{ENV_PREFIX}WORKERS must be at least 1, got {count}")
        config["workers"] = count

    logger.debug("Configuration data: %s", config)
    return config
