"""
Git client implementation for gcauto.

This module wraps the two Git operations the commit assistant needs:
reading the staged diff and creating a commit. All commands go through
a :class:`~gcauto.process.ProcessRunner` so that unit tests can replace
it easily.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from gcauto.errors import ToolInvocationError
from gcauto.process import ProcessRunner


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class GitError(ToolInvocationError):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Client for interacting with a Git repository.

    Parameters
    ----------
    repo_root : Path
        Directory the Git commands run in.
    runner : ProcessRunner, optional
        Runner used to launch ``git``. Defaults to a new :class:`ProcessRunner`.
    """

    def __init__(self, repo_root: Path, runner: Optional[ProcessRunner] = None) -> None:
        self.repo_root = repo_root
        self.runner = runner if runner is not None else ProcessRunner()

    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                # reached filesystem root
                return None
            current = current.parent

    def _run(self, args: List[str], capture_output: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If ``git`` cannot be started or exits with a non-zero status.
        """
        full_cmd = ["git"] + args
        try:
            result = self.runner.run(full_cmd, cwd=self.repo_root, capture_output=capture_output)
        except OSError as exc:
            logger.debug("Failed to start git: %s", exc)
            raise GitError(f"failed to run git command: {exc}") from exc

        if result.returncode != 0:
            stderr = (result.stderr or "").strip() if capture_output else ""
            logger.debug(
                "Git command failed: %s\nSTDERR: %s",
                " ".join(full_cmd[:2]),
                stderr,
            )
            message = f"git {args[0]} exited with status {result.returncode}"
            if stderr:
                message = f"{message}: {stderr}"
            raise GitError(message, returncode=result.returncode, stderr=stderr)
        return result

    def get_staged_diff(self) -> str:
        """Return the diff of the changes staged for the next commit.

        Returns
        -------
        str
            Unified diff text. An empty string means nothing is staged.

        Raises
        ------
        GitError
            If the diff command fails.
        """
        result = self._run(["diff", "--staged"])
        return result.stdout

    def commit(self, message: str) -> None:
        """Create a commit with the given message.

        Git's own output is shown to the user as the commit runs.
        Multi-line commit messages are supported.
        """
        self._run(["commit", "-m", message], capture_output=False)
