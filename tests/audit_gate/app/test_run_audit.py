import pytest

from audit_gate import run_audit
from audit_gate.app.config import AppConfig, AuditConfig, LoggingConfig, ReportConfig, ToolConfig
from audit_gate.core.domain.exceptions import AuditToolError

from fakes import advisory_record, install_fake_yarn, summary_record, to_lines


def _config(tmp_path, **audit):
    scratch = tmp_path / "scratch"
    scratch.mkdir(exist_ok=True)
    return AppConfig(
        audit=AuditConfig(**audit),
        tool=ToolConfig(command=install_fake_yarn(tmp_path), cwd=tmp_path, scratch_dir=scratch),
        report=ReportConfig(output_path=tmp_path / "report.txt"),
        logging=LoggingConfig(console_output=False),
    )


def test_run_audit_returns_count(tmp_path):
    (tmp_path / "yarn-output.txt").write_text(
        "\n".join(to_lines(advisory_record(1, "moderate"), advisory_record(2, "high"), summary_record())),
        encoding="utf-8",
    )

    count = run_audit(_config(tmp_path, min_severity="high"))

    assert count == 1
    assert (tmp_path / "report.txt").read_text(encoding="utf-8").startswith("HIGH")
    assert list((tmp_path / "scratch").iterdir()) == []


def test_run_audit_removes_sink_on_error(tmp_path):
    (tmp_path / "yarn-output.txt").write_text("error Something broke\n", encoding="utf-8")
    (tmp_path / "yarn-exit-code").write_text("1", encoding="utf-8")

    with pytest.raises(AuditToolError):
        run_audit(_config(tmp_path))

    assert list((tmp_path / "scratch").iterdir()) == []
    assert not (tmp_path / "report.txt").exists()
