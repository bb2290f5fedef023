"""
Configuration loading for gcauto.

Provides a loader for the optional user configuration file. See
:mod:`gcauto.config.loader` for details.
"""

from .loader import ConfigError, load_config  # noqa: F401
