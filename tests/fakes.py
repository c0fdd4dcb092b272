"""Shared fakes and record builders for tests."""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import IO, Any, Iterator


def advisory_record(
    advisory_id: int,
    severity: str,
    paths: list[str] | list[list[str]] | None = None,
    *,
    ghsa: str | None = None,
    url: str | None = None,
    dev: bool = False,
    title: str | None = None,
    overview: str | None = None,
) -> dict[str, Any]:
    """Build one ``auditAdvisory`` record as yarn emits it.

    ``paths`` is either a flat list (one finding) or a list of lists (one
    finding per inner list).
    """
    if paths is None:
        paths = [f"pkg-{advisory_id}"]
    if paths and isinstance(paths[0], list):
        findings = [{"version": "1.0.0", "paths": p} for p in paths]
    else:
        findings = [{"version": "1.0.0", "paths": paths}]
    first_path = next((p for f in findings for p in f["paths"]), None)
    return {
        "type": "auditAdvisory",
        "data": {
            "resolution": {
                "id": advisory_id,
                "path": first_path,
                "dev": dev,
                "optional": False,
                "bundled": False,
            },
            "advisory": {
                "findings": findings,
                "id": advisory_id,
                "github_advisory_id": ghsa,
                "severity": severity,
                "url": url or f"https://www.npmjs.com/advisories/{advisory_id}",
                "module_name": f"pkg-{advisory_id}",
                "title": title or f"Advisory {advisory_id}",
                "overview": overview or "",
            },
        },
    }


def summary_record(**vulnerabilities: int) -> dict[str, Any]:
    counts = {"info": 0, "low": 0, "moderate": 0, "high": 0, "critical": 0}
    counts.update(vulnerabilities)
    return {
        "type": "auditSummary",
        "data": {
            "vulnerabilities": counts,
            "dependencies": 120,
            "devDependencies": 30,
            "optionalDependencies": 0,
            "totalDependencies": 150,
        },
    }


def to_lines(*records: dict[str, Any]) -> list[str]:
    return [json.dumps(r) for r in records]


def write_audit_output(path: Path, *records: dict[str, Any], extra_lines: list[str] | None = None) -> Path:
    lines = to_lines(*records) + list(extra_lines or [])
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


class FakeLogger:
    """Records log calls as (level, message, fields) tuples."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        self.records.append((level, message, kwargs))

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log("debug", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log("info", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log("warning", message, **kwargs)

    def messages(self, level: str | None = None) -> list[str]:
        return [m for lvl, m, _ in self.records if level is None or lvl == level]


class FakeSink:
    """File-backed sink living in a test's tmp_path."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.write_bytes(b"")
        self.open_count = 0

    @property
    def path(self) -> Path:
        return self._path

    def open_for_write(self) -> IO[bytes]:
        self.open_count += 1
        return open(self._path, "wb")

    def lines(self) -> Iterator[str]:
        with open(self._path, "r", encoding="utf-8") as fh:
            for line in fh:
                yield line.rstrip("\n")

    def read_text(self) -> str:
        return self._path.read_text(encoding="utf-8")


class FakeAuditTool:
    """Writes one scripted output per call; the last script repeats."""

    def __init__(self, outputs: list[tuple[str, int]]) -> None:
        self._outputs = outputs
        self.calls: list[dict[str, Any]] = []

    def run(self, *, severity: str, ignore_dev_dependencies: bool, output: IO[bytes]) -> int:
        self.calls.append({"severity": severity, "ignore_dev_dependencies": ignore_dev_dependencies})
        text, exit_code = self._outputs[min(len(self.calls), len(self._outputs)) - 1]
        output.write(text.encode("utf-8"))
        return exit_code


class FakeReportWriter:
    def __init__(self) -> None:
        self.written: list[str] = []

    def write(self, text: str) -> None:
        self.written.append(text)

    @property
    def text(self) -> str:
        return "\n".join(self.written)


FAKE_YARN_SCRIPT = '''\
import json
import pathlib
import sys

cwd = pathlib.Path.cwd()
with open(cwd / "yarn-calls.jsonl", "a", encoding="utf-8") as fh:
    fh.write(json.dumps(sys.argv[1:]) + "\\n")
output = cwd / "yarn-output.txt"
if output.exists():
    sys.stdout.write(output.read_text(encoding="utf-8"))
exit_code = cwd / "yarn-exit-code"
sys.exit(int(exit_code.read_text()) if exit_code.exists() else 0)
'''


def install_fake_yarn(directory: Path) -> str:
    """Write a stand-in for ``yarn`` and return the command string running it.

    The script replays ``yarn-output.txt`` and ``yarn-exit-code`` from its
    working directory and appends its arguments to ``yarn-calls.jsonl``.
    """
    script = directory / "fake_yarn.py"
    script.write_text(FAKE_YARN_SCRIPT, encoding="utf-8")
    return f'"{sys.executable}" "{script}"'


def read_fake_yarn_calls(directory: Path) -> list[list[str]]:
    calls = directory / "yarn-calls.jsonl"
    if not calls.exists():
        return []
    return [json.loads(line) for line in calls.read_text(encoding="utf-8").splitlines()]
