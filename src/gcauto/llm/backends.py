"""
AI command-line backends that turn a staged diff into a commit message.

Each backend runs an external program (``claude`` or ``gemini``) with
the prompt from :func:`gcauto.llm.prompt.build_prompt` and returns what
the program printed, minus known noise lines and surrounding
whitespace. The backend does not check the commit type prefix; that is
left to the caller.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Optional, Tuple, Type

from gcauto.config.loader import DEFAULT_MODEL, ConfigError
from gcauto.errors import ToolInvocationError
from gcauto.llm.prompt import build_prompt
from gcauto.process import ProcessRunner


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


DEFAULT_BACKEND = DEFAULT_MODEL


class BackendError(ToolInvocationError):
    """Raised when the AI program cannot be started or exits non-zero."""

    pass


class UnknownBackendError(ConfigError):
    """Raised when a backend name does not match any registered backend."""

    pass


class CommitBackend(ABC):
    """Anything that can turn a diff into a proposed commit message."""

    name: str = ""

    @abstractmethod
    def generate_commit_message(self, diff: str) -> str:
        """Return a commit message describing ``diff``.

        An empty string is a valid result; the caller decides how to react.
        """


class CommandLineBackend(CommitBackend):
    """Backend that runs an AI program as ``<executable> -p <prompt>``.

    Subclasses set :attr:`name` and :attr:`executable`, and may list
    substrings in :attr:`noise_markers`. Output lines containing any of
    them are removed before the message is returned.

    Parameters
    ----------
    runner : ProcessRunner, optional
        Runner used to launch the program.
    executable : str, optional
        Program to run instead of the default :attr:`executable`.
    """

    executable: str = ""
    noise_markers: Tuple[str, ...] = ()

    def __init__(self, runner: Optional[ProcessRunner] = None, executable: Optional[str] = None) -> None:
        self.runner = runner if runner is not None else ProcessRunner()
        if executable:
            self.executable = executable

    def command(self, prompt: str) -> List[str]:
        """Return the argument list used to run the program with ``prompt``."""
        return [self.executable, "-p", prompt]

    def clean_output(self, output: str) -> str:
        """Remove noise lines and surrounding whitespace from program output."""
        lines = output.split("\n")
        kept = [line for line in lines if not any(marker in line for marker in self.noise_markers)]
        if len(kept) != len(lines):
            logger.debug("Dropped %d noise line(s) from %s output", len(lines) - len(kept), self.name)
        return "\n".join(kept).strip()

    def generate_commit_message(self, diff: str) -> str:
        """Ask the program for a commit message describing ``diff``.

        Returns
        -------
        str
            The cleaned message. May be empty if the program printed
            nothing useful.

        Raises
        ------
        BackendError
            If the program cannot be started or exits with a non-zero status.
        """
        prompt = build_prompt(diff)
        logger.debug("Sending prompt of %d characters to %s", len(prompt), self.name)
        try:
            result = self.runner.run(self.command(prompt))
        except OSError as exc:
            raise BackendError(f"failed to run {self.name} command: {exc}") from exc

        if result.returncode != 0:
            stderr = result.stderr or ""
            raise BackendError(
                f"{self.name} execution failed: exit status {result.returncode}: {stderr}",
                returncode=result.returncode,
                stderr=stderr,
            )
        return self.clean_output(result.stdout or "")


class ClaudeBackend(CommandLineBackend):
    """Backend using the Claude command-line tool."""

    name = "claude"
    executable = "claude"


class GeminiBackend(CommandLineBackend):
    """Backend using the Gemini command-line tool.

    The Gemini CLI prints a notice when it reuses cached credentials;
    that line is not part of the message.
    """

    name = "gemini"
    executable = "gemini"
    noise_markers = ("Loaded cached credentials.",)


BACKENDS: Dict[str, Type[CommandLineBackend]] = {
    ClaudeBackend.name: ClaudeBackend,
    GeminiBackend.name: GeminiBackend,
}


def create_backend(
    name: str,
    runner: Optional[ProcessRunner] = None,
    commands: Optional[Mapping[str, str]] = None,
) -> CommitBackend:
    """Create the backend registered under ``name``.

    Parameters
    ----------
    name : str
        Backend name, e.g. ``"claude"`` or ``"gemini"``.
    runner : ProcessRunner, optional
        Runner passed to the backend.
    commands : Mapping[str, str], optional
        Executable overrides keyed by backend name.

    Raises
    ------
    UnknownBackendError
        If no backend is registered under ``name``.
    """
    backend_cls = BACKENDS.get(name)
    if backend_cls is None:
        raise UnknownBackendError(f"invalid model specified: {name}")
    executable = (commands or {}).get(name)
    return backend_cls(runner=runner, executable=executable)
