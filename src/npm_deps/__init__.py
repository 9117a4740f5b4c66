"""npm-deps core package.

Extracts a normalised, de-duplicated list of declared dependencies from
package.json manifests and an optional package-lock.json or yarn.lock.
"""

from .core import NpmAndYarnParser, parse
from .errors import (
    DependencyFileNotParseable,
    MissingManifestError,
    NpmDepsError,
    UnsupportedLockfileFormat,
)
from .models import Dependency, DependencyFile, Requirement, ResolvedPackage, SourceInfo

__all__ = [
    "Dependency",
    "DependencyFile",
    "DependencyFileNotParseable",
    "MissingManifestError",
    "NpmAndYarnParser",
    "NpmDepsError",
    "Requirement",
    "ResolvedPackage",
    "SourceInfo",
    "UnsupportedLockfileFormat",
    "parse",
]
