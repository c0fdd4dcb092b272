from __future__ import annotations

import os
import stat
import subprocess
from pathlib import Path


def _delete_with_shell(path: Path) -> None:
    """Delete a file with ``del``; plain unlink is unreliable for files other
    processes still hold open on Windows."""
    subprocess.run(
        ["cmd", "/c", "del", "/f", "/q", str(path)],
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        check=False,
    )


def remove_force(path: Path) -> None:
    """Remove a file, clearing read-only bits or falling back to the shell."""
    if not path.exists():
        return
    try:
        path.unlink()
        return
    except PermissionError:
        if os.name == "nt":
            _delete_with_shell(path)
            return
    try:
        os.chmod(path, stat.S_IWUSR | stat.S_IRUSR)
    except OSError:
        pass
    path.unlink(missing_ok=True)
