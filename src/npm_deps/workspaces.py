"""Workspace member selection over an already-supplied file set."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from fnmatch import fnmatchcase

from .models import DependencyFile

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"


def _normalise(pattern: str) -> tuple[str, ...]:
    pattern = pattern.strip()
    while pattern.startswith("./"):
        pattern = pattern[2:]
    pattern = pattern.strip("/")
    if pattern == MANIFEST_NAME:
        pattern = ""
    elif pattern.endswith("/" + MANIFEST_NAME):
        pattern = pattern[: -len(MANIFEST_NAME) - 1]
    return tuple(part for part in pattern.split("/") if part and part != ".")


def _match(pattern: tuple[str, ...], parts: tuple[str, ...]) -> bool:
    """Match path segments; ``*`` stays within one segment, ``**`` spans any number."""
    if not pattern:
        return not parts
    head, rest = pattern[0], pattern[1:]
    if head == "**":
        return any(_match(rest, parts[i:]) for i in range(len(parts) + 1))
    if not parts:
        return False
    return fnmatchcase(parts[0], head) and _match(rest, parts[1:])


def matches(pattern: str, file: DependencyFile) -> bool:
    if file.basename != MANIFEST_NAME or file.is_root:
        return False
    parts = file.path.parent.parts
    return _match(_normalise(pattern), parts)


def workspace_members(
    patterns: Sequence[str],
    files: Sequence[DependencyFile],
) -> list[DependencyFile]:
    """Return the manifests selected by the root's workspace patterns.

    Order is pattern order, then input order within a pattern. Patterns
    starting with ``!`` exclude what they match. The root manifest and files
    matching no pattern are never returned.
    """
    includes = [p for p in patterns if not p.strip().startswith("!")]
    excludes = [p.strip()[1:] for p in patterns if p.strip().startswith("!")]

    members: list[DependencyFile] = []
    seen: set[str] = set()
    for pattern in includes:
        for file in files:
            if file.name in seen or not matches(pattern, file):
                continue
            if any(matches(ex, file) for ex in excludes):
                logger.debug("Excluding %s from workspace", file.name)
                continue
            seen.add(file.name)
            members.append(file)
            logger.debug("Workspace pattern %r includes %s", pattern, file.name)
    return members
