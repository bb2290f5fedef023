"""
Top-level package for gcauto.

gcauto drafts a conventional commit message for the staged changes of a
Git repository with an external AI command-line tool and commits it after
confirmation. The command line entry point lives in :mod:`gcauto.cli`.
"""

import logging

__all__ = ["__version__", "__base_version__"]

# Major version - controlled manually by the programmer
__base_version__ = "0"

from gcauto._version import get_version  # noqa: E402

__version__ = get_version(__base_version__)

logging.getLogger(__name__).addHandler(logging.NullHandler())
