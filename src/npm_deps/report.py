"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .models import Dependency

REPORT_VERSION = "1"


def aggregate(dependencies: Sequence[Dependency]) -> dict[str, Any]:
    """Aggregate parsed dependencies into a single schema-compatible report.

    Dependencies are passed through in parse order; totals count distinct
    dependencies, requirement records, resolved/unresolved versions and
    dependencies with at least one private-registry requirement.
    """

    total_requirements = sum(len(d.requirements) for d in dependencies)
    resolved = sum(1 for d in dependencies if d.version is not None)
    private = sum(
        1 for d in dependencies if any(r.source is not None for r in d.requirements)
    )

    report: dict[str, Any] = {
        "version": REPORT_VERSION,
        "dependencies": [d.to_dict() for d in dependencies],
        "totals": {
            "dependencies": len(dependencies),
            "requirements": total_requirements,
            "resolved": resolved,
            "unresolved": len(dependencies) - resolved,
            "privateRegistry": private,
        },
    }

    return report
