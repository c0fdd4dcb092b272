from __future__ import annotations

from typing import Any, Iterable

from ..domain.matchers import DevDependencyMatcher
from ..domain.models import Advisory, ClassificationResult, Severity
from ..domain.records import AdvisoryRecord, decode_record
from ..ports import LoggerPort


class RecordClassifier:
    """Sorts the advisories of an audit output stream into report buckets.

    A single pass over the lines produces every bucket plus the run summary
    record, so the output never has to be held in memory or re-read.
    """

    def __init__(
        self,
        *,
        threshold: Severity,
        exclusions: frozenset[str],
        dev_matcher: DevDependencyMatcher | None,
        ignore_dev_dependencies: bool,
        logger: LoggerPort,
        debug: bool = False,
    ) -> None:
        self._threshold = threshold
        self._exclusions = exclusions
        self._dev_matcher = dev_matcher
        self._ignore_dev = ignore_dev_dependencies
        self._logger = logger
        self._debug = debug

    def is_excluded(self, advisory: Advisory) -> bool:
        return not self._exclusions.isdisjoint(advisory.identifiers)

    def classify(self, lines: Iterable[str]) -> ClassificationResult:
        """Classify every advisory record in ``lines``.

        Raises:
            MalformedRecordError: If a non-blank line is not a valid record
        """
        result = ClassificationResult()
        audit_summary: dict[str, Any] | None = None
        fallback_summary: dict[str, Any] | None = None

        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue

            record = decode_record(line, line_number)
            result.record_count += 1

            if not isinstance(record, AdvisoryRecord):
                if isinstance(record.data, dict):
                    if record.is_audit_summary:
                        audit_summary = record.data
                    else:
                        fallback_summary = record.data
                continue

            self._classify_advisory(record.advisory, result)

        result.summary = audit_summary if audit_summary is not None else fallback_summary
        return result

    def _classify_advisory(self, advisory: Advisory, result: ClassificationResult) -> None:
        result.all_advisories.append(advisory)

        if self._debug:
            self._logger.debug(
                "advisory",
                advisory_id=advisory.id,
                github_advisory_id=advisory.github_advisory_id,
                module_name=advisory.module_name,
                title=advisory.title,
                severity=advisory.severity.value,
                paths=advisory.paths,
            )

        is_dev = self._dev_matcher is not None and self._dev_matcher.is_dev_advisory(advisory)
        if is_dev:
            result.dev_advisories.append(advisory)
            result.dev_ids.append(advisory.id)

        below_threshold = advisory.severity.is_below(self._threshold)
        excluded = self.is_excluded(advisory)

        if not below_threshold and not excluded and not (is_dev and self._ignore_dev):
            result.reportable.append(advisory)

        if excluded and not below_threshold:
            result.exclusion_ignored.append(advisory)

        if below_threshold:
            result.severity_ignored.append(advisory)
