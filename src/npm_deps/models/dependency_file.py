"""Dependency file model."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath


@dataclass(frozen=True)
class DependencyFile:
    """A named file supplied by the caller, already read into memory."""

    name: str
    content: str = field(compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Dependency file name must be non-empty")

    @property
    def path(self) -> PurePosixPath:
        return PurePosixPath(self.name.lstrip("/"))

    @property
    def basename(self) -> str:
        return self.path.name

    @property
    def directory(self) -> str:
        """Return the containing directory, ``""`` for files at the root."""
        parent = str(self.path.parent)
        return "" if parent == "." else parent

    @property
    def is_root(self) -> bool:
        return self.directory == ""
