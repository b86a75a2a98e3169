"""Turn free text (issue summaries) into ref-safe branch name fragments."""

from __future__ import annotations

import string

_ALLOWED = frozenset(string.ascii_lowercase + string.digits)
_SEPARATOR = "-"


def normalize(text: str) -> str:
    """Return a lowercase ``[a-z0-9-]`` slug for ``text``.

    Every character that does not lower-case to an ASCII letter or digit is a
    separator; runs of separators collapse to a single hyphen. Edge hyphens are
    kept, so ``"Fix: "`` becomes ``"fix-"``.
    """

    out: list[str] = []
    for char in text:
        lowered = char.lower()
        if lowered in _ALLOWED:
            out.append(lowered)
        elif not out or out[-1] != _SEPARATOR:
            out.append(_SEPARATOR)
    return "".join(out)


def default_branch_name(issue_key: str, summary: str) -> str:
    """Branch name proposed for an issue: ``{key}-{slug(summary)}``."""

    return f"{issue_key}-{normalize(summary)}"
