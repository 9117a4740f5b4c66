"""Parse npm package-lock.json into resolved packages."""

from __future__ import annotations

import json
import logging
from typing import Any

from ..errors import DependencyFileNotParseable
from ..models import DependencyFile, ResolvedPackage

logger = logging.getLogger(__name__)


def _walk_tree(deps: dict[str, Any], out: list[ResolvedPackage], seen: set[tuple[str, str]]) -> None:
    # level by level, so hoisted copies precede nested ones
    level = [deps]
    while level:
        nested_levels: list[dict[str, Any]] = []
        for tree in level:
            for name, meta in tree.items():
                if not isinstance(meta, dict):
                    continue
                _add_entry(name, meta, out, seen)
                nested = meta.get("dependencies")
                if isinstance(nested, dict):
                    nested_levels.append(nested)
        level = nested_levels


def _add_entry(name: str, meta: dict[str, Any], out: list[ResolvedPackage], seen: set[tuple[str, str]]) -> None:
    version = meta.get("version")
    if version:
        key = (name, str(version))
        if key not in seen:
            seen.add(key)
            resolved = meta.get("resolved")
            out.append(
                ResolvedPackage(
                    name=name,
                    version=str(version),
                    origin_url=resolved if isinstance(resolved, str) else None,
                )
            )
    else:
        logger.warning("Skipping lockfile entry %s without a version", name)


def _walk_packages(packages: dict[str, Any], out: list[ResolvedPackage], seen: set[tuple[str, str]]) -> None:
    # shallower install paths first, so hoisted copies precede nested ones
    entries = [
        (key, meta)
        for key, meta in packages.items()
        if isinstance(meta, dict) and "node_modules/" in key and not meta.get("link")
    ]
    entries.sort(key=lambda kv: kv[0].count("node_modules/"))
    for key, meta in entries:
        name = meta.get("name") or key.rsplit("node_modules/", 1)[1]
        version = meta.get("version")
        if not version:
            logger.warning("Skipping lockfile entry %s without a version", key)
            continue
        pair = (name, str(version))
        if pair in seen:
            continue
        seen.add(pair)
        resolved = meta.get("resolved")
        out.append(
            ResolvedPackage(
                name=name,
                version=str(version),
                origin_url=resolved if isinstance(resolved, str) else None,
            )
        )


def parse(file: DependencyFile) -> list[ResolvedPackage]:
    """Return resolved packages from a package-lock.json.

    Supports npm v1 ("dependencies" tree, flattened level by level) and v2+
    ("packages" map). When both are present the tree is used.
    """
    try:
        data = json.loads(file.content)
    except json.JSONDecodeError as exc:
        raise DependencyFileNotParseable(file.name, str(exc)) from exc
    if not isinstance(data, dict):
        raise DependencyFileNotParseable(file.name, "top level is not a JSON object")

    resolved: list[ResolvedPackage] = []
    seen: set[tuple[str, str]] = set()

    deps = data.get("dependencies")
    packages = data.get("packages")
    if isinstance(deps, dict):
        _walk_tree(deps, resolved, seen)
    elif isinstance(packages, dict):
        _walk_packages(packages, resolved, seen)

    logger.debug("Read %d resolved packages from %s", len(resolved), file.name)
    return resolved
