"""
Version control system (VCS) integration.

Contains the Git client used to read the staged diff and create the
commit.
"""

from .git_client import GitClient, GitError  # noqa: F401
