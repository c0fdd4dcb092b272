import json

import pytest

from audit_gate.core.domain.exceptions import ManifestError
from audit_gate.infra.package_manifest import read_dev_dependencies


def test_reads_dev_dependency_names(tmp_path):
    path = tmp_path / "package.json"
    path.write_text(json.dumps({
        "name": "demo",
        "dependencies": {"express": "^4.0.0"},
        "devDependencies": {"jest": "^29.0.0", "@types/node": "^20.0.0"},
    }), encoding="utf-8")

    assert read_dev_dependencies(path) == ["jest", "@types/node"]


def test_missing_manifest(tmp_path):
    assert read_dev_dependencies(tmp_path / "package.json") == []


def test_manifest_without_dev_dependencies(tmp_path):
    path = tmp_path / "package.json"
    path.write_text('{"name": "demo"}', encoding="utf-8")

    assert read_dev_dependencies(path) == []


def test_invalid_manifest(tmp_path):
    path = tmp_path / "package.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ManifestError):
        read_dev_dependencies(path)
