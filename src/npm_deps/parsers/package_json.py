"""Parse package.json and extract dependencies across groups."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from ..errors import DependencyFileNotParseable
from ..models import DependencyFile

logger = logging.getLogger(__name__)

DEPENDENCY_GROUPS = (
    "dependencies",
    "devDependencies",
    "optionalDependencies",
)


@dataclass(frozen=True)
class ManifestDocument:
    """Declared requirements of one package.json, keyed by group."""

    file: str
    groups: dict[str, dict[str, str]] = field(default_factory=dict)
    workspaces: tuple[str, ...] = ()

    def declarations(
        self, group_order: tuple[str, ...] = DEPENDENCY_GROUPS
    ) -> list[tuple[str, str, str]]:
        """Return (group, name, requirement) triples in group then insertion order."""
        triples: list[tuple[str, str, str]] = []
        for group in group_order:
            for name, requirement in self.groups.get(group, {}).items():
                triples.append((group, name, requirement))
        return triples


def _coerce_requirement(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _workspace_patterns(data: dict[str, Any]) -> tuple[str, ...]:
    workspaces = data.get("workspaces")
    if isinstance(workspaces, dict):
        workspaces = workspaces.get("packages")
    if not isinstance(workspaces, list):
        return ()
    return tuple(p for p in workspaces if isinstance(p, str) and p.strip())


def parse(file: DependencyFile) -> ManifestDocument:
    """Return the grouped requirement declarations of a package.json.

    Groups: dependencies, devDependencies, optionalDependencies. Unknown
    groups are ignored and numeric requirements are coerced to strings.
    """
    try:
        data = json.loads(file.content)
    except json.JSONDecodeError as exc:
        raise DependencyFileNotParseable(file.name, str(exc)) from exc
    if not isinstance(data, dict):
        raise DependencyFileNotParseable(file.name, "top level is not a JSON object")

    groups: dict[str, dict[str, str]] = {}
    for group in DEPENDENCY_GROUPS:
        deps = data.get(group) or {}
        if not isinstance(deps, dict):
            logger.warning("Ignoring %s in %s: not an object", group, file.name)
            continue
        declared: dict[str, str] = {}
        for name, value in deps.items():
            requirement = _coerce_requirement(value)
            if requirement is None:
                logger.debug("Ignoring %s in %s: unsupported requirement %r", name, file.name, value)
                continue
            declared[name] = requirement
        if declared:
            groups[group] = declared

    return ManifestDocument(file=file.name, groups=groups, workspaces=_workspace_patterns(data))
