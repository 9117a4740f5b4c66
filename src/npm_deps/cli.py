"""CLI entrypoint to list the declared dependencies of a project directory.

Usage:
  npm-deps --root . [--format json|markdown] [--validate] [--config settings.json]

Reads package.json files and root lockfiles under ``--root`` and passes them
to the same core ``parse`` used by library callers.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import load_settings
from .core import parse
from .errors import DependencyFileNotParseable, NpmDepsError
from .lockfile import is_lockfile_name, looks_like_lockfile
from .models import DependencyFile
from .report import aggregate
from .summary import render_summary
from .validators.output_schema import validate_report
from .workspaces import MANIFEST_NAME

logger = logging.getLogger(__name__)

EXCLUDES = {"node_modules", ".git", ".venv"}


def _read(path: Path, name: str) -> str:
    if not is_lockfile_name(path.name) and looks_like_lockfile(path.name):
        # only the name of an unsupported lockfile matters
        return path.read_text(encoding="utf-8", errors="replace")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DependencyFileNotParseable(name, f"not valid UTF-8: {exc}") from exc


def collect_files(root: Path) -> list[DependencyFile]:
    """Read manifests and root lockfiles under root (excluding vendor dirs)."""
    root = root.resolve()
    found: list[DependencyFile] = []

    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        rel = path.relative_to(root)
        if any(part in EXCLUDES for part in rel.parts):
            continue
        is_root = len(rel.parts) == 1
        if path.name == MANIFEST_NAME or (is_root and looks_like_lockfile(path.name)):
            found.append(DependencyFile(name=rel.as_posix(), content=_read(path, rel.as_posix())))

    logger.debug("Collected %d dependency files under %s", len(found), root)
    return found


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--root", type=Path, default=Path("."), help="Project directory")
    parser.add_argument(
        "--format",
        choices=("json", "markdown"),
        default="json",
        help="Output format",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate the JSON report against its schema before printing",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to a settings JSON file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.config)
        files = collect_files(args.root)
        report = aggregate(parse(files, settings))
        if args.validate:
            validate_report(report)
    except OSError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except NpmDepsError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if args.format == "markdown":
        print(render_summary(report), end="")
    else:
        print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
