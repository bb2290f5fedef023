"""
Process runner used to launch external programs.

Both the Git client and the AI backends start programs through a
:class:`ProcessRunner` instance that is passed to them. Tests substitute
an object with the same ``run`` method so no real executables are
spawned.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class ProcessRunner:
    """Run external commands with :func:`subprocess.run`."""

    def run(
        self,
        args: List[str],
        cwd: Optional[Path] = None,
        capture_output: bool = True,
    ) -> subprocess.CompletedProcess:
        """Run ``args`` and wait for it to finish.

        Parameters
        ----------
        args : List[str]
            Program name followed by its arguments.
        cwd : Path, optional
            Working directory for the child process.
        capture_output : bool, optional
            If True, stdout and stderr are captured as text. Otherwise the
            child writes directly to this process's standard streams.

        Returns
        -------
        subprocess.CompletedProcess
            The finished process. A non-zero ``returncode`` is not an error
            here; callers decide how to react.

        Raises
        ------
        OSError
            If the program cannot be started (e.g. it is not installed).
        """
        logger.debug("Executing command: %s (cwd=%s)", " ".join(args[:2]), cwd)
        if capture_output:
            return subprocess.run(
                args,
                cwd=cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",  # Replace invalid characters instead of failing
            )
        return subprocess.run(args, cwd=cwd)
