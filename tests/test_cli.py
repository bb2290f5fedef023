import json
import unittest
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

import gcauto.cli as cli
from gcauto import __version__
from gcauto.llm.backends import BackendError, UnknownBackendError
from gcauto.vcs.git_client import GitError


class DummyGitClient:
    """Stands in for GitClient: canned diff, records commits."""

    def __init__(self, root=None, runner=None, diff="fake diff", diff_error=None, commit_error=None):
        self.root = root
        self.diff = diff
        self.diff_error = diff_error
        self.commit_error = commit_error
        self.diff_calls = 0
        self.commit_called = []

    @staticmethod
    def find_repo_root(start):
        return Path("/repo")

    def get_staged_diff(self):
        self.diff_calls += 1
        if self.diff_error is not None:
            raise self.diff_error
        return self.diff

    def commit(self, message):
        if self.commit_error is not None:
            raise self.commit_error
        self.commit_called.append(message)


class DummyBackend:
    def __init__(self, message="test: テスト用のコミットメッセージ", error=None):
        self.message = message
        self.error = error
        self.diffs = []

    def generate_commit_message(self, diff):
        self.diffs.append(diff)
        if self.error is not None:
            raise self.error
        return self.message


class BackendFactory:
    """Records requested names and hands out a single backend."""

    def __init__(self, backend):
        self.backend = backend
        self.names = []

    def __call__(self, name, runner=None, commands=None):
        self.names.append(name)
        self.commands = commands
        if name not in ("claude", "gemini"):
            raise UnknownBackendError(f"invalid model specified: {name}")
        return self.backend


def invoke(args, input=None, git=None, backend=None):
    """Run ``gcauto`` with patched collaborators and return (result, git, factory)."""
    git = git if git is not None else DummyGitClient()
    factory = BackendFactory(backend if backend is not None else DummyBackend())
    runner = CliRunner()
    with patch.object(cli, "GitClient", side_effect=lambda root, runner=None: git) as git_cls:
        git_cls.find_repo_root = DummyGitClient.find_repo_root
        with patch.object(cli, "create_backend", factory):
            result = runner.invoke(cli.main, args, input=input)
    return result, git, factory


class TestConfirmation(unittest.TestCase):
    def test_user_cancels_with_n(self) -> None:
        result, git, _ = invoke([], input="n\n")
        self.assertEqual(result.exit_code, cli.EXIT_SUCCESS)
        self.assertEqual(git.commit_called, [])
        self.assertIn("Commit cancelled", result.output)

    def test_user_cancels_with_upper_n(self) -> None:
        result, git, _ = invoke([], input="N\n")
        self.assertEqual(result.exit_code, cli.EXIT_SUCCESS)
        self.assertEqual(git.commit_called, [])

    def test_user_cancels_with_empty_input(self) -> None:
        result, git, _ = invoke([], input="\n")
        self.assertEqual(result.exit_code, cli.EXIT_SUCCESS)
        self.assertEqual(git.commit_called, [])

    def test_other_answers_cancel(self) -> None:
        result, git, _ = invoke([], input="maybe\n")
        self.assertEqual(result.exit_code, cli.EXIT_SUCCESS)
        self.assertEqual(git.commit_called, [])

    def test_user_confirms_with_y(self) -> None:
        result, git, _ = invoke([], input="y\n")
        self.assertEqual(result.exit_code, cli.EXIT_SUCCESS)
        self.assertEqual(git.commit_called, ["test: テスト用のコミットメッセージ"])
        self.assertIn("Commit completed successfully!", result.output)

    def test_user_confirms_with_padded_yes(self) -> None:
        result, git, _ = invoke([], input="  YES \n")
        self.assertEqual(result.exit_code, cli.EXIT_SUCCESS)
        self.assertEqual(len(git.commit_called), 1)

    def test_closed_input_is_fatal(self) -> None:
        result, git, _ = invoke([], input="")
        self.assertEqual(result.exit_code, cli.EXIT_FAILURE)
        self.assertEqual(git.commit_called, [])
        self.assertIn("Failed to read input", result.output)

    def test_message_is_shown_between_rules(self) -> None:
        result, _, _ = invoke([], input="n\n")
        self.assertIn(f"{cli.RULE}\ntest: テスト用のコミットメッセージ\n{cli.RULE}", result.output)
        self.assertIn("Do you want to commit with this message? [y/N]: ", result.output)


class TestFailures(unittest.TestCase):
    def test_invalid_model(self) -> None:
        result, git, _ = invoke(["-m", "invalid"])
        self.assertEqual(result.exit_code, cli.EXIT_FAILURE)
        self.assertIn("invalid model specified: invalid", result.output)
        self.assertEqual(git.diff_calls, 0)

    def test_diff_failure(self) -> None:
        git = DummyGitClient(diff_error=GitError("git diff exited with status 128"))
        result, _, _ = invoke([], git=git)
        self.assertEqual(result.exit_code, cli.EXIT_FAILURE)
        self.assertIn("Failed to get git diff", result.output)

    def test_backend_failure(self) -> None:
        backend = DummyBackend(error=BackendError("claude execution failed: exit status 1: boom"))
        result, git, _ = invoke([], input="y\n", backend=backend)
        self.assertEqual(result.exit_code, cli.EXIT_FAILURE)
        self.assertIn("Failed to generate commit message", result.output)
        self.assertEqual(git.commit_called, [])

    def test_empty_message(self) -> None:
        result, git, _ = invoke([], input="y\n", backend=DummyBackend(message=""))
        self.assertEqual(result.exit_code, cli.EXIT_FAILURE)
        self.assertIn("Commit message is empty", result.output)
        self.assertEqual(git.commit_called, [])

    def test_commit_failure(self) -> None:
        git = DummyGitClient(commit_error=GitError("git commit exited with status 1"))
        result, _, _ = invoke([], input="y\n", git=git)
        self.assertEqual(result.exit_code, cli.EXIT_FAILURE)
        self.assertIn("Commit failed", result.output)

    def test_unexpected_error(self) -> None:
        git = DummyGitClient(diff_error=RuntimeError("kaboom"))
        result, _, _ = invoke([], git=git)
        self.assertEqual(result.exit_code, cli.EXIT_FAILURE)
        self.assertIn("Unexpected error: kaboom", result.output)


def test_empty_diff_is_nothing_to_do():
    backend = DummyBackend()
    result, git, _ = invoke([], git=DummyGitClient(diff=""), backend=backend)
    assert result.exit_code == cli.EXIT_SUCCESS
    assert "Nothing to do" in result.output
    assert backend.diffs == []
    assert git.commit_called == []


def test_unrecognized_prefix_warns_but_continues():
    result, git, _ = invoke([], input="y\n", backend=DummyBackend(message="Update stuff"))
    assert result.exit_code == cli.EXIT_SUCCESS
    assert "does not start with a recognized type" in result.output
    assert git.commit_called == ["Update stuff"]


@pytest.mark.parametrize("args", [[], ["-m", "claude"], ["-model", "claude"], ["--model", "claude"]])
def test_claude_is_default_and_selectable(args):
    _, _, factory = invoke(args, input="n\n")
    assert factory.names == ["claude"]


@pytest.mark.parametrize("args", [["-m", "gemini"], ["-model", "gemini"], ["--model=gemini"]])
def test_gemini_selection(args):
    _, _, factory = invoke(args, input="n\n")
    assert factory.names == ["gemini"]


def test_config_sets_default_model(isolate_user_config):
    (isolate_user_config / "config.json").write_text(
        json.dumps({"model": "gemini", "commands": {"gemini": "/opt/gemini"}}), encoding="utf-8"
    )
    _, _, factory = invoke([], input="n\n")
    assert factory.names == ["gemini"]
    assert factory.commands == {"gemini": "/opt/gemini"}


def test_flag_overrides_config_model(isolate_user_config):
    (isolate_user_config / "config.json").write_text(json.dumps({"model": "gemini"}), encoding="utf-8")
    _, _, factory = invoke(["-m", "claude"], input="n\n")
    assert factory.names == ["claude"]


def test_invalid_config_is_fatal(isolate_user_config):
    (isolate_user_config / "config.json").write_text("{invalid", encoding="utf-8")
    result, git, _ = invoke([])
    assert result.exit_code == cli.EXIT_FAILURE
    assert "Configuration error" in result.output
    assert git.diff_calls == 0


@pytest.mark.parametrize("flag", ["-h", "-help", "--help"])
def test_help(flag):
    result = CliRunner().invoke(cli.main, [flag])
    assert result.exit_code == 0
    assert "Usage:" in result.output
    assert "-model" in result.output


@pytest.mark.parametrize("flag", ["-version", "--version"])
def test_version(flag):
    result = CliRunner().invoke(cli.main, [flag])
    assert result.exit_code == 0
    assert result.output == f"gcauto version {__version__}\n"


class TestRunCommitFlow(unittest.TestCase):
    """Drive the orchestrator directly with injected collaborators."""

    def test_unknown_backend_stops_before_diff(self) -> None:
        git = DummyGitClient()
        code = cli.run_commit_flow("invalid", git, BackendFactory(DummyBackend()))
        self.assertEqual(code, cli.EXIT_FAILURE)
        self.assertEqual(git.diff_calls, 0)

    def test_confirmed_commit(self) -> None:
        git = DummyGitClient(diff="+line")
        backend = DummyBackend(message="feat: add line")
        with patch.object(cli, "read_confirmation", return_value=True):
            code = cli.run_commit_flow("claude", git, BackendFactory(backend))
        self.assertEqual(code, cli.EXIT_SUCCESS)
        self.assertEqual(backend.diffs, ["+line"])
        self.assertEqual(git.commit_called, ["feat: add line"])

    def test_declined_commit(self) -> None:
        git = DummyGitClient()
        with patch.object(cli, "read_confirmation", return_value=False):
            code = cli.run_commit_flow("gemini", git, BackendFactory(DummyBackend()))
        self.assertEqual(code, cli.EXIT_SUCCESS)
        self.assertEqual(git.commit_called, [])


@pytest.mark.parametrize("args", [["-model", ""], ["-m", ""]])
def test_empty_model_name_is_rejected(args):
    result, git, factory = invoke(args, input="y\n")
    assert result.exit_code == cli.EXIT_FAILURE
    assert factory.names == [""]
    assert "invalid model specified" in result.output
    assert git.diff_calls == 0
    assert git.commit_called == []


def test_empty_model_name_is_not_replaced_by_config(isolate_user_config):
    (isolate_user_config / "config.json").write_text(json.dumps({"model": "gemini"}), encoding="utf-8")
    result, git, factory = invoke(["-model", ""], input="y\n")
    assert result.exit_code == cli.EXIT_FAILURE
    assert factory.names == [""]
    assert git.diff_calls == 0


@pytest.mark.parametrize("answer", ["y", "yes", "n"])
def test_answer_without_newline_is_fatal(answer):
    result, git, _ = invoke([], input=answer)
    assert result.exit_code == cli.EXIT_FAILURE
    assert "Failed to read input" in result.output
    assert git.commit_called == []
