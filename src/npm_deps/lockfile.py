"""Uniform index over resolved packages from either lockfile format."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from typing import overload

from .errors import UnsupportedLockfileFormat
from .models import DependencyFile, ResolvedPackage
from .parsers import package_lock, semver, yarn_lock

logger = logging.getLogger(__name__)

NPM_LOCKFILES = ("package-lock.json", "npm-shrinkwrap.json")
YARN_LOCKFILES = ("yarn.lock",)
# preference when a project ships more than one lockfile
LOCKFILE_PRECEDENCE = ("yarn.lock", "package-lock.json", "npm-shrinkwrap.json")
# names other package managers give their lockfiles
_LOCKFILE_LIKE = re.compile(r"^(?:.+-lock\.[A-Za-z0-9]+|.+\.lockb?)$")


class LockfileIndex:
    """Resolved packages keyed by name, in lockfile order.

    Several versions of one name may coexist. Exact ``(name, range)``
    selectors recorded by the lockfile win over semver matching.
    """

    def __init__(
        self,
        file_name: str,
        packages: Iterable[ResolvedPackage] = (),
    ) -> None:
        self.file_name = file_name
        self._by_name: dict[str, list[ResolvedPackage]] = {}
        self._by_selector: dict[tuple[str, str], ResolvedPackage] = {}
        for package in packages:
            self.add(package)

    def add(self, package: ResolvedPackage) -> ResolvedPackage:
        variants = self._by_name.setdefault(package.name, [])
        for existing in variants:
            if existing.version == package.version:
                return existing
        variants.append(package)
        return package

    def add_selector(self, name: str, requirement: str, package: ResolvedPackage) -> None:
        """Record that the lockfile answers ``name@requirement`` with ``package``."""
        self._by_selector.setdefault((name, requirement), package)

    def __len__(self) -> int:
        return sum(len(v) for v in self._by_name.values())

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._by_name)

    @overload
    def lookup(self, name: str) -> tuple[ResolvedPackage, ...]: ...

    @overload
    def lookup(self, name: str, requirement: str) -> ResolvedPackage | None: ...

    def lookup(self, name, requirement=None):
        variants = tuple(self._by_name.get(name, ()))
        if requirement is None:
            return variants
        exact = self._by_selector.get((name, requirement))
        if exact is not None:
            return exact
        if not variants:
            return None
        for variant in variants:
            if semver.satisfies(variant.version, requirement):
                return variant
        logger.debug(
            "No %s entry for %s satisfies %r; using %s",
            self.file_name,
            name,
            requirement,
            variants[0].version,
        )
        return variants[0]


def is_lockfile_name(name: str) -> bool:
    return name in NPM_LOCKFILES or name in YARN_LOCKFILES


def looks_like_lockfile(name: str) -> bool:
    """True for supported lockfiles and for names such as pnpm-lock.yaml or bun.lockb."""
    return is_lockfile_name(name) or bool(_LOCKFILE_LIKE.match(name))


def load_lockfile(file: DependencyFile) -> LockfileIndex:
    """Parse a lockfile into a :class:`LockfileIndex`, dispatching on its name."""
    if file.basename in NPM_LOCKFILES:
        return LockfileIndex(file.name, package_lock.parse(file))
    if file.basename in YARN_LOCKFILES:
        index = LockfileIndex(file.name)
        for package, answered in yarn_lock.parse_with_selectors(file):
            kept = index.add(package)
            for name, requirement in answered:
                index.add_selector(name, requirement, kept)
        return index
    raise UnsupportedLockfileFormat(file.name)


def find_lockfile(files: Sequence[DependencyFile]) -> DependencyFile | None:
    """Return the root lockfile to use, or None when there is none.

    When no supported lockfile is at the root but another lockfile is, that
    file is returned so that loading it raises UnsupportedLockfileFormat.
    """
    roots = {f.basename: f for f in files if f.is_root and is_lockfile_name(f.basename)}
    for name in LOCKFILE_PRECEDENCE:
        if name in roots:
            logger.debug("Using lockfile %s", roots[name].name)
            return roots[name]
    for file in files:
        if file.is_root and looks_like_lockfile(file.basename):
            logger.debug("Found unsupported lockfile %s", file.name)
            return file
    return None
