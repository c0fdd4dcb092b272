from __future__ import annotations

import re

from .exceptions import ExclusionConfigError

GHSA_PATTERN = re.compile(r"^GHSA(-[a-z0-9]{4}){3}$")
_NUMERIC_PATTERN = re.compile(r"^\d+$")
_SEPARATORS = re.compile(r"[,\s]+")


def is_valid_exclusion(token: str) -> bool:
    return bool(_NUMERIC_PATTERN.match(token) or GHSA_PATTERN.match(token))


def parse_exclusions(text: str, source: str = "--exclude") -> frozenset[str]:
    """Parse a CSV list of advisory ids and GHSA codes.

    Numeric ids are normalised (``007`` becomes ``7``) so they compare equal to
    the advisory id rendered as text.

    Raises:
        ExclusionConfigError: If a token is neither a number nor a GHSA code
    """
    exclusions: set[str] = set()
    for token in _SEPARATORS.split(text.strip()):
        if not token:
            continue
        if not is_valid_exclusion(token):
            raise ExclusionConfigError(source, token)
        exclusions.add(str(int(token)) if token.isdigit() else token)
    return frozenset(exclusions)
