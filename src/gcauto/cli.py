"""
Command line interface for gcauto.

This module defines the ``main`` function which is used as the entry
point when executing the ``gcauto`` command, and
:func:`run_commit_flow`, which drives one commit attempt: resolve the
backend, read the staged diff, generate the message, ask the user and
commit. Every fatal error ends the run with ``EXIT_FAILURE``; an empty
diff and a declined commit both end with ``EXIT_SUCCESS``.
"""

from __future__ import annotations

import functools
import logging
import time
from pathlib import Path
from typing import Callable, Optional

import click

from gcauto import __version__
from gcauto.config.loader import ConfigError, load_config
from gcauto.conventional import COMMIT_TYPES, has_conventional_prefix
from gcauto.errors import EmptyResultError, GcautoError, InputError
from gcauto.llm.backends import BACKENDS, CommitBackend, create_backend
from gcauto.process import ProcessRunner
from gcauto.vcs.git_client import GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_FAILURE = 1

CONFIRM_PROMPT = "\nDo you want to commit with this message? [y/N]"
AFFIRMATIVE_ANSWERS = {"y", "yes"}
RULE = "=" * 35


# ---------------------------------------------------------------------------
# Progress and status display utilities
# ---------------------------------------------------------------------------

class ProgressIndicator:
    """Simple progress indicator for user feedback."""

    def __init__(self, message: str):
        self.message = message
        self.start_time = None

    def __enter__(self):
        self.start_time = time.time()
        click.echo(f"⠋ {self.message}...", nl=False)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.time() - self.start_time
        if exc_type is None:
            click.echo(f"\r✓ {self.message} (took {elapsed:.1f}s)")
        else:
            click.echo(f"\r✗ {self.message} (failed after {elapsed:.1f}s)")
        return False


def print_info(message: str):
    """Print an info message."""
    click.echo(f"ℹ {message}")


def print_success(message: str):
    """Print a success message."""
    click.echo(f"✓ {message}")


def print_warning(message: str):
    """Print a warning message."""
    click.echo(f"⚠ {message}")


def print_error(message: str):
    """Print an error message."""
    click.echo(f"✗ {message}", err=True)


def display_message(message: str) -> None:
    """Show the generated commit message between rule lines."""
    click.echo("\n📝 Generated Commit Message:")
    click.echo(RULE)
    click.echo(message)
    click.echo(RULE)


def read_confirmation() -> bool:
    """Ask whether to commit and return True for a "y" or "yes" answer.

    Raises
    ------
    InputError
        If no complete line can be read (e.g. standard input is closed
        before a newline arrives).
    """
    click.echo(f"{CONFIRM_PROMPT}: ", nl=False)
    try:
        answer = click.get_text_stream("stdin").readline()
    except OSError as exc:
        raise InputError(f"Failed to read input: {exc}") from exc
    if not answer.endswith("\n"):
        raise InputError("Failed to read input: end of input")
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def run_commit_flow(
    model: str,
    diff_source: GitClient,
    backend_factory: Callable[[str], CommitBackend],
) -> int:
    """Generate a commit message for the staged changes and commit it.

    Parameters
    ----------
    model : str
        Name of the backend to use.
    diff_source : GitClient
        Provides ``get_staged_diff()`` and ``commit(message)``.
    backend_factory : Callable[[str], CommitBackend]
        Returns the backend for a name, raising a :class:`ConfigError`
        for unknown names.

    Returns
    -------
    int
        The process exit status.
    """
    print_info(f"gcauto: Starting automatic commit process using {model}...")

    try:
        backend = backend_factory(model)
    except ConfigError as exc:
        print_error(f"Error: {exc}")
        return EXIT_FAILURE

    try:
        diff = diff_source.get_staged_diff()
    except GcautoError as exc:
        print_error(f"Error: Failed to get git diff: {exc}")
        return EXIT_FAILURE

    if diff == "":
        print_success("No changes staged for commit. Nothing to do.")
        return EXIT_SUCCESS
    logger.debug("Staged diff has %d line(s)", len(diff.splitlines()))

    try:
        with ProgressIndicator(f"Generating commit message with {model}"):
            message = backend.generate_commit_message(diff)
        if not message:
            raise EmptyResultError("Commit message is empty")
    except EmptyResultError as exc:
        print_error(f"Error: {exc}")
        return EXIT_FAILURE
    except GcautoError as exc:
        print_error(f"Error: Failed to generate commit message: {exc}")
        return EXIT_FAILURE

    display_message(message)
    if not has_conventional_prefix(message):
        print_warning(f"Message does not start with a recognized type ({', '.join(COMMIT_TYPES)})")

    try:
        confirmed = read_confirmation()
    except InputError as exc:
        print_error(f"Error: {exc}")
        return EXIT_FAILURE

    if not confirmed:
        click.echo("\n⏹ Commit cancelled.")
        return EXIT_SUCCESS

    click.echo("")
    try:
        diff_source.commit(message)
    except GcautoError as exc:
        print_error(f"Commit failed: {exc}")
        return EXIT_FAILURE

    print_success("Commit completed successfully!")
    return EXIT_SUCCESS


@click.command(context_settings={"help_option_names": ["-h", "-help", "--help"]})
@click.option(
    "-m",
    "-model",
    "--model",
    "model",
    metavar="NAME",
    default=None,
    help=f"AI model to use ({' or '.join(BACKENDS)}). Defaults to the configured model or claude.",
)
@click.option("-verbose", "--verbose", "verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(
    __version__,
    "-version",
    "--version",
    prog_name="gcauto",
    message="%(prog)s version %(version)s",
    help="Show version information and exit.",
)
def main(model: Optional[str], verbose: bool) -> None:
    """gcauto: AI-powered git commit message generator.

    Drafts a Conventional Commits message for the staged changes with an
    AI command-line tool and commits it after confirmation.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    try:
        try:
            config = load_config()
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_FAILURE)

        selected = model if model is not None else config["model"]
        runner = ProcessRunner()
        cwd = Path.cwd()
        repo_root = GitClient.find_repo_root(cwd) or cwd
        logger.debug("Running git in %s", repo_root)

        backend_factory = functools.partial(create_backend, runner=runner, commands=config["commands"])
        code = run_commit_flow(selected, GitClient(repo_root, runner=runner), backend_factory)
        raise click.exceptions.Exit(code)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        raise click.exceptions.Exit(EXIT_FAILURE)
