from __future__ import annotations

import re
from typing import Iterable

from .models import Advisory


class DevDependencyMatcher:
    """Matches dependency paths that start at a declared dev dependency.

    A path such as ``jest>micromatch>braces`` starts at ``jest``; it matches when
    ``jest`` is one of the project's ``devDependencies``.
    """

    def __init__(self, pattern: re.Pattern[str]) -> None:
        self._pattern = pattern

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "DevDependencyMatcher | None":
        """Build a matcher, or return None when there are no dev dependencies."""
        unique = sorted({n for n in names if n})
        if not unique:
            return None
        alternatives = "|".join(re.escape(n) for n in unique)
        return cls(re.compile(rf"^(?:{alternatives})(?:>|$)"))

    def matches_path(self, path: str) -> bool:
        return self._pattern.match(path) is not None

    def is_dev_advisory(self, advisory: Advisory) -> bool:
        """True iff every path of every finding goes through a dev dependency."""
        paths = advisory.paths
        if not paths:
            return False
        return all(self.matches_path(p) for p in paths)
