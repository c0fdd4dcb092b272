from __future__ import annotations

from typing import Iterable

from ..domain.exceptions import MissingExclusionsError
from ..domain.models import Advisory
from ..ports import LoggerPort


class ExclusionAuditor:
    """Detects configured exclusions that no longer match any advisory."""

    def __init__(
        self,
        *,
        exclusions: frozenset[str],
        fail_on_missing: bool,
        logger: LoggerPort,
    ) -> None:
        self._exclusions = exclusions
        self._fail_on_missing = fail_on_missing
        self._logger = logger

    def find_missing(self, advisories: Iterable[Advisory]) -> list[str]:
        seen: set[str] = set()
        for advisory in advisories:
            seen.update(advisory.identifiers)
        return sorted(e for e in self._exclusions if e not in seen)

    def check_for_missing_exclusions(self, advisories: Iterable[Advisory]) -> list[str]:
        """Warn about (or fail on) exclusions matching none of ``advisories``.

        Returns:
            The missing exclusions, sorted

        Raises:
            MissingExclusionsError: If any are missing and fail_on_missing is set
        """
        if not self._exclusions:
            return []

        missing = self.find_missing(advisories)
        if not missing:
            return []

        self._logger.warning(
            "Exclusions no longer match any advisory and can be removed: " + ", ".join(missing),
            missing_exclusions=missing,
        )
        if self._fail_on_missing:
            raise MissingExclusionsError(missing)
        return missing
