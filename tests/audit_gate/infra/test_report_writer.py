from audit_gate.infra.report_writer import ConsoleReportWriter, FileReportWriter


def test_file_writer_creates_parents(tmp_path):
    path = tmp_path / "reports" / "audit.json"

    FileReportWriter(path=path).write("[]")

    assert path.read_text(encoding="utf-8") == "[]\n"


def test_console_writer(capsys):
    ConsoleReportWriter().write("No vulnerabilities found")

    assert capsys.readouterr().out == "No vulnerabilities found\n"
