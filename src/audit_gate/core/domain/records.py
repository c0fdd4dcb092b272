"""Decoding of the audit tool's newline-delimited JSON records.

Each line is one of two shapes:

    {"type": "auditAdvisory", "data": {"resolution": {...}, "advisory": {...}}}
    {"type": "auditSummary", "data": {...}}   (or any other non-advisory record)
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Union

from .exceptions import MalformedRecordError
from .models import Advisory, Finding, Resolution, Severity

ADVISORY_TYPE = "auditAdvisory"
SUMMARY_TYPE = "auditSummary"

_EXCERPT_CHARS = 200


@dataclass(frozen=True)
class AdvisoryRecord:
    advisory: Advisory


@dataclass(frozen=True)
class SummaryRecord:
    """Any record that is not an advisory; ``type`` is kept for summary selection."""
    type: str | None
    data: Any

    @property
    def is_audit_summary(self) -> bool:
        return self.type == SUMMARY_TYPE


Record = Union[AdvisoryRecord, SummaryRecord]


def _excerpt(line: str) -> str:
    line = line.strip()
    if len(line) <= _EXCERPT_CHARS:
        return line
    return line[:_EXCERPT_CHARS] + "..."


def _as_bool(value: Any) -> bool:
    return bool(value) if value is not None else False


def _parse_findings(raw: Any) -> tuple[Finding, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ValueError("'findings' must be a list")
    findings = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValueError("each finding must be an object")
        paths = item.get("paths") or []
        if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
            raise ValueError("finding 'paths' must be a list of strings")
        version = item.get("version")
        findings.append(Finding(paths=tuple(paths), version=str(version) if version is not None else None))
    return tuple(findings)


def _parse_advisory(data: Any) -> Advisory:
    if not isinstance(data, dict):
        raise ValueError("advisory record has no 'data' object")
    raw = data.get("advisory")
    if not isinstance(raw, dict):
        raise ValueError("advisory record has no 'advisory' object")

    advisory_id = raw.get("id")
    if isinstance(advisory_id, bool) or not isinstance(advisory_id, (int, str)):
        raise ValueError("advisory 'id' must be an integer")
    try:
        advisory_id = int(advisory_id)
    except ValueError:
        raise ValueError(f"advisory 'id' must be an integer, got {advisory_id!r}") from None

    severity_raw = raw.get("severity")
    if not isinstance(severity_raw, str):
        raise ValueError("advisory 'severity' must be a string")
    severity = Severity.parse(severity_raw)

    findings = _parse_findings(raw.get("findings"))

    res = data.get("resolution")
    if res is not None and not isinstance(res, dict):
        raise ValueError("'resolution' must be an object")
    res = res or {}
    resolution = Resolution(
        id=advisory_id,
        path=res.get("path"),
        dev=_as_bool(res.get("dev")),
        optional=_as_bool(res.get("optional")),
        bundled=_as_bool(res.get("bundled")),
    )

    ghsa = raw.get("github_advisory_id")
    return Advisory(
        id=advisory_id,
        severity=severity,
        url=str(raw.get("url") or ""),
        findings=findings,
        resolution=resolution,
        github_advisory_id=str(ghsa) if ghsa else None,
        module_name=raw.get("module_name"),
        title=raw.get("title"),
        raw=raw,
    )


def is_audit_data(line: str) -> bool:
    """True when ``line`` is an advisory or summary record.

    Any other line (plain text, ``error``/``warning``/``info`` records) is
    not audit data.
    """
    try:
        obj = json.loads(line)
    except ValueError:
        return False
    return isinstance(obj, dict) and obj.get("type") in (ADVISORY_TYPE, SUMMARY_TYPE)


def decode_record(line: str, line_number: int = 0) -> Record:
    """Decode one line of audit output into a tagged record.

    Args:
        line: Raw JSON text (one record)
        line_number: 1-based line number, used in error messages

    Returns:
        AdvisoryRecord for ``auditAdvisory`` lines, SummaryRecord otherwise

    Raises:
        MalformedRecordError: If the line is not JSON or the advisory is invalid
    """
    try:
        obj = json.loads(line)
    except json.JSONDecodeError as e:
        raise MalformedRecordError(line_number, _excerpt(line), f"invalid JSON ({e.msg})") from e

    if not isinstance(obj, dict):
        raise MalformedRecordError(line_number, _excerpt(line), "record is not a JSON object")

    record_type = obj.get("type")
    if record_type != ADVISORY_TYPE:
        return SummaryRecord(type=record_type if isinstance(record_type, str) else None, data=obj.get("data"))

    try:
        return AdvisoryRecord(advisory=_parse_advisory(obj.get("data")))
    except ValueError as e:
        raise MalformedRecordError(line_number, _excerpt(line), str(e)) from e
