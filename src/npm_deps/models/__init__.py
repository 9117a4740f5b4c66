"""Data models for parsed npm dependencies."""

from __future__ import annotations

from .dependency import Dependency, Requirement, SourceInfo
from .dependency_file import DependencyFile
from .resolved_package import ResolvedPackage

__all__ = [
    "Dependency",
    "DependencyFile",
    "Requirement",
    "ResolvedPackage",
    "SourceInfo",
]
