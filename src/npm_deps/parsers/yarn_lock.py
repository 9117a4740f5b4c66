"""Parse yarn.lock (v1 syntax) into resolved packages."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..errors import DependencyFileNotParseable
from ..models import DependencyFile, ResolvedPackage

logger = logging.getLogger(__name__)


@dataclass
class YarnBlock:
    """One lockfile block: the selectors it answers and what they resolve to."""

    selectors: list[tuple[str, str]]
    line: int
    fields: dict[str, str] = field(default_factory=dict)


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def split_selector(selector: str) -> tuple[str, str]:
    """Split ``name@range`` into its parts, honouring ``@scope/`` names."""
    selector = _unquote(selector)
    idx = selector.find("@", 1)
    if idx <= 0:
        raise ValueError(f"Selector without a range: {selector}")
    return selector[:idx], selector[idx + 1:]


def _field(line: str) -> tuple[str, str]:
    stripped = line.strip()
    if ":" in stripped and not stripped.startswith('"') and " " not in stripped.split(":", 1)[0]:
        key, _, value = stripped.partition(":")
        if value.strip():
            return key, _unquote(value)
    key, _, value = stripped.partition(" ")
    return _unquote(key), _unquote(value)


def parse_blocks(file: DependencyFile) -> list[YarnBlock]:
    blocks: list[YarnBlock] = []
    current: YarnBlock | None = None

    for lineno, raw in enumerate(file.content.splitlines(), start=1):
        line = raw.rstrip()
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        indent = len(line) - len(line.lstrip(" "))

        if indent == 0:
            if not line.endswith(":"):
                raise DependencyFileNotParseable(file.name, f"line {lineno}: expected a block header")
            try:
                selectors = [split_selector(s) for s in line[:-1].split(",") if s.strip()]
            except ValueError as exc:
                raise DependencyFileNotParseable(file.name, f"line {lineno}: {exc}") from exc
            if not selectors:
                raise DependencyFileNotParseable(file.name, f"line {lineno}: empty block header")
            current = YarnBlock(selectors=selectors, line=lineno)
            blocks.append(current)
            continue

        if current is None:
            raise DependencyFileNotParseable(file.name, f"line {lineno}: field outside of a block")
        # only direct fields of a block; nested sections such as dependencies are skipped
        if indent != 2 or line.endswith(":"):
            continue
        key, value = _field(line)
        current.fields[key] = value

    return blocks


def parse_with_selectors(file: DependencyFile) -> list[tuple[ResolvedPackage, list[tuple[str, str]]]]:
    """Return each resolved package together with the selectors it answers."""
    results: list[tuple[ResolvedPackage, list[tuple[str, str]]]] = []
    for block in parse_blocks(file):
        version = block.fields.get("version")
        if not version:
            raise DependencyFileNotParseable(
                file.name, f"line {block.line}: block has no version"
            )
        resolved = block.fields.get("resolved") or None
        names: dict[str, list[tuple[str, str]]] = {}
        for name, requirement in block.selectors:
            names.setdefault(name, []).append((name, requirement))
        for name, selectors in names.items():
            results.append(
                (ResolvedPackage(name=name, version=version, origin_url=resolved), selectors)
            )
    logger.debug("Read %d resolved packages from %s", len(results), file.name)
    return results


def parse(file: DependencyFile) -> list[ResolvedPackage]:
    """Return resolved packages from a yarn lock file."""
    return [package for package, _ in parse_with_selectors(file)]
