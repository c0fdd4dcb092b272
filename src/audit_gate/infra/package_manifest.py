from __future__ import annotations

import json
from pathlib import Path

from ..core.domain.exceptions import ManifestError

MANIFEST_FILENAME = "package.json"


def read_dev_dependencies(path: Path) -> list[str]:
    """Return the package names declared under ``devDependencies``.

    A missing manifest or a manifest without dev dependencies yields [].

    Raises:
        ManifestError: If the manifest is not a JSON object
    """
    if not path.is_file():
        return []
    try:
        manifest = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ManifestError(str(path), f"invalid JSON ({e.msg})") from e
    if not isinstance(manifest, dict):
        raise ManifestError(str(path), "expected a JSON object")
    dev = manifest.get("devDependencies") or {}
    if not isinstance(dev, dict):
        raise ManifestError(str(path), "'devDependencies' must be an object")
    return list(dev.keys())
