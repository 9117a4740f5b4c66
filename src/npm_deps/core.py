"""Core parsing entrypoints.

This module performs no I/O: callers read the manifest and lockfile contents
and pass them in as :class:`DependencyFile` records.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .config import Settings
from .errors import MissingManifestError
from .lockfile import LockfileIndex, find_lockfile, load_lockfile
from .models import Dependency, DependencyFile, Requirement
from .parsers import package_json
from .parsers.package_json import ManifestDocument
from .parsers.requirement import RegistryRequirement, classify
from . import sources
from .workspaces import MANIFEST_NAME, workspace_members

logger = logging.getLogger(__name__)


class _Entry:
    """Working-set record for one dependency name."""

    __slots__ = ("name", "version", "requirements")

    def __init__(self, name: str, version: str | None) -> None:
        self.name = name
        self.version = version
        self.requirements: list[Requirement] = []

    def add(self, requirement: Requirement) -> None:
        for i, existing in enumerate(self.requirements):
            if existing.file == requirement.file:
                self.requirements[i] = existing.with_groups(requirement.groups)
                return
        self.requirements.append(requirement)

    def freeze(self) -> Dependency:
        return Dependency(
            name=self.name,
            version=self.version,
            requirements=tuple(self.requirements),
        )


class NpmAndYarnParser:
    """Reconcile package.json manifests with an optional lockfile."""

    def __init__(
        self,
        dependency_files: Sequence[DependencyFile],
        settings: Settings | None = None,
    ) -> None:
        self.dependency_files = list(dependency_files)
        self.settings = settings or Settings()

    def root_manifest(self) -> DependencyFile:
        for file in self.dependency_files:
            if file.is_root and file.basename == MANIFEST_NAME:
                return file
        raise MissingManifestError("No package.json found in the supplied files")

    def lockfile(self) -> LockfileIndex | None:
        file = find_lockfile(self.dependency_files)
        if file is None:
            logger.debug("No lockfile supplied; versions will be unresolved")
            return None
        return load_lockfile(file)

    def manifests(self) -> list[ManifestDocument]:
        """Return the root manifest followed by its workspace members."""
        root = package_json.parse(self.root_manifest())
        documents = [root]
        for member in workspace_members(root.workspaces, self.dependency_files):
            documents.append(package_json.parse(member))
        return documents

    def parse(self) -> list[Dependency]:
        manifests = self.manifests()
        index = self.lockfile()

        working: dict[str, _Entry] = {}
        for manifest in manifests:
            for group, name, raw in manifest.declarations(self.settings.dependency_groups):
                kind = classify(raw)
                if not isinstance(kind, RegistryRequirement):
                    logger.debug("Skipping %s in %s: %s", name, manifest.file, type(kind).__name__)
                    continue

                resolved = index.lookup(name, raw) if index is not None else None
                if index is not None and resolved is None:
                    logger.warning("%s from %s not found in %s", name, manifest.file, index.file_name)
                source = sources.classify(resolved, self.settings.default_registry_hosts)

                entry = working.get(name)
                if entry is None:
                    entry = _Entry(name, resolved.version if resolved is not None else None)
                    working[name] = entry
                entry.add(
                    Requirement(requirement=raw, file=manifest.file, groups=(group,), source=source)
                )

        return [entry.freeze() for entry in working.values()]


def parse(
    files: Sequence[DependencyFile],
    settings: Settings | None = None,
) -> list[Dependency]:
    """Return the declared dependencies of a project.

    Params:
        files: the root package.json, an optional root lockfile
            (package-lock.json, npm-shrinkwrap.json or yarn.lock), workspace
            member manifests and any other files; files outside the
            workspace are ignored
        settings: registry hosts and groups to read; defaults when None

    Raises:
        MissingManifestError: no root package.json was supplied
        DependencyFileNotParseable: a manifest in scope or the lockfile is corrupt
        UnsupportedLockfileFormat: the only root lockfile is not npm or yarn
    """
    return NpmAndYarnParser(files, settings).parse()
