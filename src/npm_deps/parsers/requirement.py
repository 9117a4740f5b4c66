"""Classify raw requirement strings as registry, git or path references.

Recognised prefixes are authoritative; anything not matching a git or path
shape is treated as a registry range.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TypeAlias

GIT_PREFIXES = (
    "git:",
    "git+ssh:",
    "git+https:",
    "git+http:",
    "git+file:",
    "github:",
    "gitlab:",
    "bitbucket:",
    "gist:",
)
PATH_PREFIXES = ("file:", "link:", "workspace:", "./", "../", "/", "~/")

# "owner/repo" or "owner/repo#ref" is npm's GitHub shorthand
_GITHUB_SHORTHAND = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+(?:#.*)?$")
_GIT_URL = re.compile(r"^https?://\S+\.git(?:#.*)?$")


@dataclass(frozen=True)
class RegistryRequirement:
    range: str


@dataclass(frozen=True)
class GitRequirement:
    url: str
    ref: str | None = None


@dataclass(frozen=True)
class PathRequirement:
    path: str


RequirementKind: TypeAlias = RegistryRequirement | GitRequirement | PathRequirement


def _git(raw: str) -> GitRequirement:
    url, sep, ref = raw.partition("#")
    return GitRequirement(url=url, ref=ref if sep and ref else None)


def classify(raw: str) -> RequirementKind:
    text = raw.strip()
    lowered = text.lower()
    if lowered.startswith(GIT_PREFIXES) or _GIT_URL.match(text):
        return _git(text)
    if lowered.startswith(PATH_PREFIXES):
        for prefix in ("file:", "link:", "workspace:"):
            if lowered.startswith(prefix):
                return PathRequirement(path=text[len(prefix):])
        return PathRequirement(path=text)
    if _GITHUB_SHORTHAND.match(text):
        return _git(text)
    return RegistryRequirement(range=text)


def is_registry(raw: str) -> bool:
    return isinstance(classify(raw), RegistryRequirement)
