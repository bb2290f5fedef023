"""
Exception hierarchy shared by the gcauto modules.

Every failure that ends a run derives from :class:`GcautoError` so the
command line interface can report it and exit with a failure status.
Module specific errors (``GitError``, ``BackendError``, ``ConfigError``)
live next to the code that raises them and subclass the classes below.
"""

from __future__ import annotations

from typing import Optional


class GcautoError(Exception):
    """Base class for all errors raised by gcauto."""

    pass


class ToolInvocationError(GcautoError):
    """Raised when an external program cannot be started or exits non-zero.

    Attributes
    ----------
    returncode : Optional[int]
        Exit status of the program, or ``None`` if it could not be started.
    stderr : str
        Diagnostic output captured from the program, if any.
    """

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class EmptyResultError(GcautoError):
    """Raised when a backend produced an empty commit message."""

    pass


class InputError(GcautoError):
    """Raised when the confirmation answer cannot be read."""

    pass
