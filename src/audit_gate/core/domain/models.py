from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Advisory severity, ordered from least to most severe."""

    INFO = "info"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self)

    @classmethod
    def parse(cls, value: str) -> "Severity":
        """Parse a severity name case-insensitively.

        Raises:
            ValueError: If the name is not a known severity
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            names = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown severity '{value}' (expected one of: {names})") from None

    def is_below(self, threshold: "Severity") -> bool:
        return self.rank < threshold.rank


class ReportFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    NDJSON = "ndjson"


_SEVERITY_ORDER = (
    Severity.INFO,
    Severity.LOW,
    Severity.MODERATE,
    Severity.HIGH,
    Severity.CRITICAL,
)


@dataclass(frozen=True)
class Finding:
    """One vulnerable package version and the dependency paths reaching it."""
    paths: tuple[str, ...]
    version: str | None = None


@dataclass(frozen=True)
class Resolution:
    """Resolution metadata reported next to an advisory."""
    id: int
    path: str | None = None
    dev: bool = False
    optional: bool = False
    bundled: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "path": self.path,
            "dev": self.dev,
            "optional": self.optional,
            "bundled": self.bundled,
        }


@dataclass(frozen=True)
class Advisory:
    """Core advisory domain model.

    Built from one ``auditAdvisory`` record. ``raw`` keeps the advisory object
    exactly as the audit tool emitted it so JSON reports can re-emit it.
    """
    id: int
    severity: Severity
    url: str
    findings: tuple[Finding, ...]
    resolution: Resolution
    github_advisory_id: str | None = None
    module_name: str | None = None
    title: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, hash=False, repr=False)

    @property
    def paths(self) -> list[str]:
        """All dependency paths across all findings, in order."""
        return [p for finding in self.findings for p in finding.paths]

    @property
    def first_path(self) -> str | None:
        for finding in self.findings:
            if finding.paths:
                return finding.paths[0]
        return None

    @property
    def identifiers(self) -> frozenset[str]:
        """Names an exclusion may use for this advisory: its id and GHSA code."""
        if self.github_advisory_id:
            return frozenset((str(self.id), self.github_advisory_id))
        return frozenset((str(self.id),))


@dataclass
class ClassificationResult:
    """Buckets produced by one classification pass over the audit output."""
    all_advisories: list[Advisory] = field(default_factory=list)
    reportable: list[Advisory] = field(default_factory=list)
    severity_ignored: list[Advisory] = field(default_factory=list)
    exclusion_ignored: list[Advisory] = field(default_factory=list)
    dev_advisories: list[Advisory] = field(default_factory=list)
    dev_ids: list[int] = field(default_factory=list)
    summary: dict[str, Any] | None = None
    record_count: int = 0


def count_by_severity(advisories: list[Advisory]) -> dict[str, int]:
    """Count advisories per severity, with every severity present."""
    counts = {s.value: 0 for s in _SEVERITY_ORDER}
    for advisory in advisories:
        counts[advisory.severity.value] += 1
    return counts
