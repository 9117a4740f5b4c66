"""Resolved package model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResolvedPackage:
    """One resolved name/version pair taken from a lockfile."""

    name: str
    version: str
    origin_url: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Resolved package name must be non-empty")
        if not self.version:
            raise ValueError("Resolved package version must be non-empty")

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "version": self.version,
            "resolved": self.origin_url,
        }
