"""
Language model integration for gcauto.

This package contains the command-line AI backends that generate a
commit message from a diff, and the prompt they are given.
"""

from .backends import (  # noqa: F401
    BACKENDS,
    DEFAULT_BACKEND,
    BackendError,
    CommitBackend,
    UnknownBackendError,
    create_backend,
)
