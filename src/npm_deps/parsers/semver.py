"""npm semver range handling built atop packaging.version.

Supported expressions:
- exact versions (e.g., "1.2.3", "=1.2.3", "v1.2.3")
- caret ranges ^x.y.z → >=x.y.z,<x+1.0.0 (npm 0.x rules: ^0.2.3 → <0.3.0)
- tilde ranges ~x.y.z → >=x.y.z,<x.y+1.0
- x-ranges: "*", "", "1.x", "1.2.*", "1", "1.2"
- hyphen ranges "1.2.3 - 2.3.4"
- comparator sets split by spaces, e.g., ">=1.0.0 <2.0.0"
- unions split by "||"

Prerelease versions only satisfy a comparator set that names a prerelease on
the same major.minor.patch, as npm does.
"""

from __future__ import annotations

import re

from packaging.version import InvalidVersion, Version

Comparator = tuple[str, Version]

_PARTIAL = re.compile(
    r"^v?(?P<major>\d+|[xX*])"
    r"(?:\.(?P<minor>\d+|[xX*]))?"
    r"(?:\.(?P<patch>\d+|[xX*]))?"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?"
    r"(?:\+[0-9A-Za-z.-]+)?$"
)
_HYPHEN = re.compile(r"^(?P<low>\S+)\s+-\s+(?P<high>\S+)$")
_OPERATOR = re.compile(r"^(>=|<=|>|<|=|\^|~>|~)?\s*(.*)$")
# npm "1.0.0-1" is a prerelease; packaging would read it as a post-release
_NUMERIC_PRE = re.compile(r"^(\d+\.\d+\.\d+)-(\d+)((?:\+.*)?)$")


class _Unsatisfiable(Exception):
    pass


def _to_pep440(text: str) -> str:
    return _NUMERIC_PRE.sub(r"\1.dev\2\3", text)


def _parse_version(v: str) -> Version | None:
    try:
        return Version(_to_pep440(v.strip().lstrip("=v")))
    except InvalidVersion:
        return None


def _number(part: str | None) -> int | None:
    if part is None or part in {"x", "X", "*"}:
        return None
    return int(part)


def _partial(text: str) -> tuple[int | None, int | None, int | None, str | None]:
    m = _PARTIAL.match(text)
    if not m:
        raise ValueError(f"Invalid version in range: {text}")
    major = _number(m.group("major"))
    minor = _number(m.group("minor")) if major is not None else None
    patch = _number(m.group("patch")) if minor is not None else None
    return major, minor, patch, m.group("pre")


def _version(major: int, minor: int = 0, patch: int = 0, pre: str | None = None) -> Version:
    text = f"{major}.{minor}.{patch}"
    if pre:
        text = f"{text}-{pre}"
    try:
        return Version(_to_pep440(text))
    except InvalidVersion as exc:
        raise ValueError(f"Unsupported version: {text}") from exc


def _next_major(major: int) -> Version:
    return _version(major + 1)


def _next_minor(major: int, minor: int) -> Version:
    return _version(major, minor + 1)


def _caret(major, minor, patch, pre) -> list[Comparator]:
    if major is None:
        return []
    lower = _version(major, minor or 0, patch or 0, pre)
    if major > 0 or minor is None:
        upper = _next_major(major)
    elif minor > 0 or patch is None:
        upper = _next_minor(major, minor)
    else:
        upper = _version(major, minor, patch + 1)
    return [(">=", lower), ("<", upper)]


def _tilde(major, minor, patch, pre) -> list[Comparator]:
    if major is None:
        return []
    lower = _version(major, minor or 0, patch or 0, pre)
    if minor is None:
        return [(">=", lower), ("<", _next_major(major))]
    return [(">=", lower), ("<", _next_minor(major, minor))]


def _plain(op: str, major, minor, patch, pre) -> list[Comparator]:
    if major is None:
        if op in {">", "<"}:
            raise _Unsatisfiable(op)
        return []
    if minor is None:
        low, high = _version(major), _next_major(major)
    elif patch is None:
        low, high = _version(major, minor), _next_minor(major, minor)
    else:
        exact = _version(major, minor, patch, pre)
        return [("==" if op == "=" else op, exact)]

    if op == "=":
        return [(">=", low), ("<", high)]
    if op == ">":
        return [(">=", high)]
    if op == ">=":
        return [(">=", low)]
    if op == "<":
        return [("<", low)]
    return [("<", high)]  # "<="


def _expand(token: str) -> list[Comparator]:
    m = _OPERATOR.match(token)
    op = m.group(1) or "="
    parts = _partial(m.group(2))
    if op == "^":
        return _caret(*parts)
    if op in {"~", "~>"}:
        return _tilde(*parts)
    return _plain(op, *parts)


def _hyphen(low: str, high: str) -> list[Comparator]:
    comparators = _plain(">=", *_partial(low))
    major, minor, patch, pre = _partial(high)
    if major is not None and minor is not None and patch is not None:
        comparators.append(("<=", _version(major, minor, patch, pre)))
    else:
        comparators.extend(_plain("<=", major, minor, patch, pre))
    return comparators


def _comparator_set(expr: str) -> list[Comparator]:
    expr = expr.strip()
    hyphen = _HYPHEN.match(expr)
    if hyphen:
        return _hyphen(hyphen.group("low"), hyphen.group("high"))
    # glue operators to their versions: ">= 1.0.0" -> ">=1.0.0"
    expr = re.sub(r"(>=|<=|>|<|=|\^|~>|~)\s+", r"\1", expr)
    comparators: list[Comparator] = []
    for token in expr.split():
        comparators.extend(_expand(token))
    return comparators


def _test(v: Version, comparators: list[Comparator]) -> bool:
    for op, bound in comparators:
        if op == "==" and not v == bound:
            return False
        if op == ">=" and not v >= bound:
            return False
        if op == ">" and not v > bound:
            return False
        if op == "<=" and not v <= bound:
            return False
        if op == "<" and not v < bound:
            return False
    if v.is_prerelease:
        return any(
            bound.is_prerelease and bound.release[:3] == v.release[:3]
            for _, bound in comparators
        )
    return True


def satisfies(installed: str, expr: str) -> bool:
    v = _parse_version(installed)
    if v is None:
        return False

    for alternative in expr.split("||"):
        try:
            comparators = _comparator_set(alternative)
        except (_Unsatisfiable, ValueError):
            continue
        if _test(v, comparators):
            return True
    return False
