"""Error types raised while parsing dependency files."""

from __future__ import annotations


class NpmDepsError(RuntimeError):
    """Base error for all npm-deps failures."""


class DependencyFileNotParseable(NpmDepsError):
    """Raised when a manifest or lockfile cannot be decoded."""

    def __init__(self, file_name: str, reason: str = "") -> None:
        self.file_name = file_name
        self.reason = reason
        message = f"{file_name} not parseable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnsupportedLockfileFormat(NpmDepsError):
    """Raised when a file claimed as a lockfile matches no known format."""

    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(f"Unsupported lockfile format: {file_name}")


class MissingManifestError(NpmDepsError):
    """Raised when no root package.json is supplied."""


class ConfigError(NpmDepsError):
    """Raised when the settings file cannot be loaded or is invalid."""
