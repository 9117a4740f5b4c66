"""Human-readable Markdown rendering of a dependency report."""

from __future__ import annotations

from typing import Any


def _source_label(source: dict[str, Any] | None) -> str:
    if not source:
        return "default"
    return f"{source.get('type', '')}: {source.get('url', '')}"


def render_summary(report: dict[str, Any]) -> str:
    """Return a Markdown string with totals and one table row per requirement."""
    totals = report.get("totals", {})
    dependencies = report.get("dependencies", [])

    lines = []
    lines.append("# npm-deps Summary")
    lines.append("")
    lines.append(
        f"Dependencies: {totals.get('dependencies', 0)} | "
        f"Requirements: {totals.get('requirements', 0)} | "
        f"Unresolved: {totals.get('unresolved', 0)}"
    )
    lines.append("")
    lines.append("| Dependency | Version | Requirement | File | Groups | Source |")
    lines.append("| --- | --- | --- | --- | --- | --- |")

    for dep in dependencies:
        name = dep.get("name", "")
        version = dep.get("version") or "n/a"
        for req in dep.get("requirements") or []:
            groups = ",".join(req.get("groups", []) or [])
            lines.append(
                f"| {name} | {version} | {req.get('requirement', '')} | "
                f"{req.get('file', '')} | {groups} | {_source_label(req.get('source'))} |"
            )

    if not dependencies:
        lines.append("| (no dependencies declared) | n/a | n/a | n/a | n/a | n/a |")

    return "\n".join(lines) + "\n"
