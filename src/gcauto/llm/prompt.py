"""
Prompt construction for the AI backends.

Every backend receives the same instruction: the staged diff, the
expected Conventional Commit layout, and the list of things the model
must leave out of its answer.
"""

from __future__ import annotations

from textwrap import dedent

from gcauto.conventional import COMMIT_TYPES

# Language the commit message is written in.
MESSAGE_LANGUAGE = "Japanese"

# Attribution footers some tools append on their own.
FORBIDDEN_FOOTERS = ("🤖", "Co-Authored-By")

_TEMPLATE = dedent(
    """
    Write a commit message in {language} using the Conventional Commits format,
    based on the following git diff.

    ---
    {diff}
    ---

    Output the message directly in this format:
    type: short summary of the change

    - concrete change 1
    - concrete change 2
    - concrete change 3

    Rules:
    - Do not include any preamble or explanatory text
    - Output only the commit message itself
    - Do not include {footers} or similar attribution
    - Choose the type from {types}
    """
).strip()


def build_prompt(diff: str) -> str:
    """Return the instruction asking a backend for a commit message for ``diff``."""
    return _TEMPLATE.format(
        language=MESSAGE_LANGUAGE,
        diff=diff,
        footers=" or ".join(FORBIDDEN_FOOTERS),
        types="/".join(COMMIT_TYPES),
    )
