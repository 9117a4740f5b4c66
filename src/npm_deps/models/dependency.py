"""Dependency and requirement models."""

from __future__ import annotations

from dataclasses import dataclass, replace
from collections.abc import Iterable

PRIVATE_REGISTRY = "private_registry"


@dataclass(frozen=True)
class SourceInfo:
    """Where a dependency is fetched from when it is not the default registry."""

    url: str
    type: str = PRIVATE_REGISTRY

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("Source url must be provided")

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "url": self.url}


@dataclass(frozen=True)
class Requirement:
    """A single declared constraint, scoped to the manifest that declared it."""

    requirement: str
    file: str
    groups: tuple[str, ...]
    source: SourceInfo | None = None

    def __post_init__(self) -> None:
        if not self.file:
            raise ValueError("Requirement file must be provided")
        if not self.groups:
            raise ValueError("Requirement must belong to at least one group")
        if len(set(self.groups)) != len(self.groups):
            raise ValueError("Requirement groups must be unique")

    def with_groups(self, groups: Iterable[str]) -> Requirement:
        """Return a copy whose groups are the union with ``groups``."""
        merged = list(self.groups)
        for group in groups:
            if group not in merged:
                merged.append(group)
        return replace(self, groups=tuple(merged))

    def to_dict(self) -> dict[str, object]:
        return {
            "requirement": self.requirement,
            "file": self.file,
            "groups": list(self.groups),
            "source": self.source.to_dict() if self.source is not None else None,
        }


@dataclass(frozen=True)
class Dependency:
    """A named dependency with every requirement that declares it."""

    name: str
    version: str | None
    requirements: tuple[Requirement, ...]

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Dependency name must be non-empty")
        if not self.requirements:
            raise ValueError("Dependency must have at least one requirement")

    @property
    def files(self) -> tuple[str, ...]:
        return tuple(req.file for req in self.requirements)

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "version": self.version,
            "requirements": [req.to_dict() for req in self.requirements],
        }
