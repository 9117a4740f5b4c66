"""JSON Schema for the dependency report and a validator for it."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from jsonschema import Draft202012Validator

from ..errors import NpmDepsError

REPORT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "npm-deps report",
    "type": "object",
    "required": ["version", "dependencies", "totals"],
    "properties": {
        "version": {"type": "string"},
        "dependencies": {
            "type": "array",
            "items": {"$ref": "#/$defs/dependency"},
        },
        "totals": {
            "type": "object",
            "required": ["dependencies", "requirements", "resolved", "unresolved", "privateRegistry"],
            "additionalProperties": {"type": "integer", "minimum": 0},
        },
    },
    "$defs": {
        "source": {
            "type": "object",
            "required": ["type", "url"],
            "properties": {
                "type": {"const": "private_registry"},
                "url": {"type": "string", "minLength": 1},
            },
            "additionalProperties": False,
        },
        "requirement": {
            "type": "object",
            "required": ["requirement", "file", "groups", "source"],
            "properties": {
                "requirement": {"type": "string"},
                "file": {"type": "string", "minLength": 1},
                "groups": {
                    "type": "array",
                    "minItems": 1,
                    "uniqueItems": True,
                    "items": {
                        "enum": ["dependencies", "devDependencies", "optionalDependencies"]
                    },
                },
                "source": {"anyOf": [{"type": "null"}, {"$ref": "#/$defs/source"}]},
            },
            "additionalProperties": False,
        },
        "dependency": {
            "type": "object",
            "required": ["name", "version", "requirements"],
            "properties": {
                "name": {"type": "string", "minLength": 1},
                "version": {"type": ["string", "null"]},
                "requirements": {
                    "type": "array",
                    "minItems": 1,
                    "items": {"$ref": "#/$defs/requirement"},
                },
            },
            "additionalProperties": False,
        },
    },
}


class ReportValidationError(NpmDepsError):
    """Raised when a report does not conform to REPORT_SCHEMA."""


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_report(report: dict[str, Any]) -> None:
    validator = Draft202012Validator(REPORT_SCHEMA)
    errors = sorted(validator.iter_errors(report), key=lambda e: [str(p) for p in e.path])
    if errors:
        raise ReportValidationError("\n" + _format_errors(errors))
