"""
Configuration loading for commit_body.

Settings are read from ``AUTOCOMMIT_*`` environment variables. See
:mod:`commit_body.config.loader` for implementation details.
"""

from .loader import ConfigError, load_config  # noqa: F401
