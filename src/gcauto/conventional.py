"""
Conventional Commit types recognized by gcauto.

The backends are asked to start the message with one of these types.
Checking the prefix is informational only; a message with another
prefix is still offered to the user.
"""

from __future__ import annotations

from typing import Optional

COMMIT_TYPES = ("feat", "fix", "docs", "style", "refactor", "test", "chore")


def commit_type_of(message: str) -> Optional[str]:
    """Return the recognized commit type that ``message`` starts with.

    >>> commit_type_of("fix: handle empty diff")
    'fix'
    >>> commit_type_of("Update readme") is None
    True
    """
    for commit_type in COMMIT_TYPES:
        if message.startswith(f"{commit_type}:"):
            return commit_type
    return None


def has_conventional_prefix(message: str) -> bool:
    """Return True if ``message`` starts with a recognized ``type:`` prefix."""
    return commit_type_of(message) is not None
