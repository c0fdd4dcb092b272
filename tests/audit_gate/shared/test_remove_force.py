import os
import stat

from audit_gate.shared.remove_force import remove_force


def test_remove_force_removes_file(tmp_path):
    target = tmp_path / "sink.jsonl"
    target.write_text("test", encoding="utf-8")

    remove_force(target)

    assert not target.exists()


def test_remove_force_handles_readonly_file(tmp_path):
    target = tmp_path / "readonly.jsonl"
    target.write_text("test", encoding="utf-8")
    os.chmod(target, stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH)

    remove_force(target)

    assert not target.exists()


def test_remove_force_handles_nonexistent(tmp_path):
    target = tmp_path / "nonexistent"

    # Should not raise
    remove_force(target)

    assert not target.exists()
