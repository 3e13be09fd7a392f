# Compiler version helpers: read `pragma solidity` constraints.

from __future__ import annotations

import re
from typing import Optional

from solaudit.errors import NumericParseError

Version = tuple[int, int, int]

_VERSION_RE = re.compile(r"(?P<op>\^|~|>=|<=|>|<|=)?\s*v?(?P<version>\d+(?:\.[\dxX*]+){0,2})")
_WILDCARD_PART_RE = re.compile(r"(?<=\.)[xX*]")
_SOLIDITY_PRAGMA_RE = re.compile(r"pragma\s+solidity\s+(?P<constraint>[^;]+);?")


def solidity_constraint(pragma_text: str) -> Optional[str]:
    """Return the version constraint of a ``pragma solidity`` directive, or None for other pragmas."""
    m = _SOLIDITY_PRAGMA_RE.search(pragma_text)
    if m is None:
        return None
    return m.group("constraint").strip()


def parse_version(text: str) -> Version:
    """
    Parse ``0.8.20`` style text into an integer triple; missing parts are 0.

    Raises:
        NumericParseError: a component is not an integer (e.g. ``0.8.x``).
    """
    parts = text.strip().lstrip("v").split(".")
    if not 1 <= len(parts) <= 3:
        raise NumericParseError(text, "expected major[.minor[.patch]]")
    numbers = []
    for part in parts:
        try:
            numbers.append(int(part))
        except ValueError as e:
            raise NumericParseError(text, str(e)) from e
    while len(numbers) < 3:
        numbers.append(0)
    return numbers[0], numbers[1], numbers[2]


def minimum_version(constraint: str) -> Optional[Version]:
    """
    Lowest compiler version a constraint admits.

    Upper bounds (``<``, ``<=``) are ignored; with several lower bounds the
    highest wins (``>=0.6.0 >=0.8.0`` starts at 0.8.0). Alternatives joined
    by ``||`` take the smallest branch minimum. Wildcard parts (``0.8.*``,
    ``0.8.x``) count as 0.
    """
    branches = []
    for branch in constraint.split("||"):
        lower: Optional[Version] = None
        for m in _VERSION_RE.finditer(branch):
            op = m.group("op") or "="
            if op in ("<", "<="):
                continue
            version = parse_version(_WILDCARD_PART_RE.sub("0", m.group("version")))
            if lower is None or version > lower:
                lower = version
        if lower is not None:
            branches.append(lower)
    return min(branches) if branches else None
