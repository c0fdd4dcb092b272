from __future__ import annotations

import json
from typing import Any

from ..domain.models import Advisory, ClassificationResult, ReportFormat, Severity, count_by_severity
from ..domain.records import ADVISORY_TYPE, SUMMARY_TYPE
from ..ports import LoggerPort, ReportWriterPort

_SEVERITY_WIDTH = max(len(s.value) for s in Severity)
_NO_VULNERABILITIES = "No vulnerabilities found"


def unique_paths(advisory: Advisory) -> list[str]:
    """All finding paths of an advisory, de-duplicated, first occurrence wins."""
    return list(dict.fromkeys(advisory.paths))


def render_text(advisories: list[Advisory]) -> str:
    """Render advisories as blank-line separated paragraphs.

    Example paragraph:

        HIGH      webpack>chokidar>glob-parent, glob-parent
                  https://github.com/advisories/GHSA-ww39-953v-wcq6
    """
    if not advisories:
        return _NO_VULNERABILITIES
    indent = " " * (_SEVERITY_WIDTH + 2)
    paragraphs = []
    for advisory in advisories:
        severity = advisory.severity.value.upper().ljust(_SEVERITY_WIDTH)
        paths = ", ".join(unique_paths(advisory)) or "(no paths reported)"
        paragraphs.append(f"{severity}  {paths}\n{indent}{advisory.url}")
    return "\n\n".join(paragraphs)


def build_summary(summary: dict[str, Any] | None, reportable: list[Advisory]) -> dict[str, Any]:
    """Copy the audit summary, recounting vulnerabilities from ``reportable``."""
    data = dict(summary) if summary else {}
    data["vulnerabilities"] = count_by_severity(reportable)
    return data


def advisory_envelope(advisory: Advisory) -> dict[str, Any]:
    # Only the first finding's first path is reported in the resolution
    resolution = advisory.resolution.to_dict()
    resolution["path"] = advisory.first_path
    return {
        "type": ADVISORY_TYPE,
        "data": {
            "resolution": resolution,
            "advisory": advisory.raw,
        },
    }


def build_envelopes(reportable: list[Advisory], summary: dict[str, Any] | None) -> list[dict[str, Any]]:
    envelopes = [advisory_envelope(a) for a in reportable]
    envelopes.append({"type": SUMMARY_TYPE, "data": build_summary(summary, reportable)})
    return envelopes


def render_json(reportable: list[Advisory], summary: dict[str, Any] | None) -> str:
    return json.dumps(build_envelopes(reportable, summary), ensure_ascii=False, indent=2)


def render_ndjson(reportable: list[Advisory], summary: dict[str, Any] | None) -> str:
    return "\n".join(
        json.dumps(envelope, ensure_ascii=False) for envelope in build_envelopes(reportable, summary)
    )


class ReportBuilder:
    """Logs classification counts and writes the report in the configured format."""

    def __init__(
        self,
        *,
        output_format: ReportFormat,
        writer: ReportWriterPort,
        logger: LoggerPort,
        ignore_dev_dependencies: bool = False,
    ) -> None:
        self._format = output_format
        self._writer = writer
        self._logger = logger
        self._ignore_dev = ignore_dev_dependencies

    def _log_counts(self, result: ClassificationResult) -> None:
        if self._ignore_dev and result.dev_advisories:
            self._logger.info(
                f"{len(result.dev_advisories)} advisories ignored because they only affect dev dependencies",
                dev_advisory_ids=result.dev_ids,
            )
        if result.severity_ignored:
            self._logger.info(
                f"{len(result.severity_ignored)} advisories ignored because their severity is below the minimum",
                advisory_ids=[a.id for a in result.severity_ignored],
            )
        if result.exclusion_ignored:
            self._logger.info(
                f"{len(result.exclusion_ignored)} advisories ignored because they are excluded",
                advisory_ids=[a.id for a in result.exclusion_ignored],
            )
        self._logger.info(
            f"{len(result.reportable)} vulnerabilities found",
            vulnerabilities=count_by_severity(result.reportable),
        )

    def render(self, result: ClassificationResult) -> str:
        if self._format is ReportFormat.JSON:
            return render_json(result.reportable, result.summary)
        if self._format is ReportFormat.NDJSON:
            return render_ndjson(result.reportable, result.summary)
        return render_text(result.reportable)

    def create_report(self, result: ClassificationResult) -> int:
        """Emit the report for ``result``.

        Returns:
            Number of reportable advisories (the process exit code)
        """
        self._log_counts(result)
        self._writer.write(self.render(result))
        return len(result.reportable)
