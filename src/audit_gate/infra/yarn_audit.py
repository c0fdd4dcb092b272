from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import IO

from ..core.domain.exceptions import AuditToolError

logger = logging.getLogger(__name__)

PRODUCTION_GROUPS = ("dependencies",)


class YarnAuditTool:
    """Subprocess-backed audit using ``yarn audit --json``.

    stdout and stderr share the output handle, so error text and JSON records
    interleave in one stream exactly as the tool produced them.
    """

    def __init__(self, *, command: str = "yarn", cwd: Path | None = None) -> None:
        self._command = shlex.split(command) or ["yarn"]
        self._cwd = cwd

    def build_command(self, *, severity: str, ignore_dev_dependencies: bool) -> list[str]:
        cmd = [*self._command, "audit", "--json", "--level", severity]
        if ignore_dev_dependencies:
            cmd.extend(["--groups", *PRODUCTION_GROUPS])
        return cmd

    def _resolve_executable(self) -> str:
        executable = shutil.which(self._command[0])
        if executable is None:
            raise AuditToolError(
                f"`{self._command[0]}` not found. Please install it and ensure it is in PATH."
            )
        return executable

    def run(self, *, severity: str, ignore_dev_dependencies: bool, output: IO[bytes]) -> int:
        cmd = self.build_command(severity=severity, ignore_dev_dependencies=ignore_dev_dependencies)
        cmd[0] = self._resolve_executable()
        logger.info("audit_exec", extra={
            "payload": {
                "type": "audit_exec",
                "cmd": " ".join(cmd),
                "cwd": str(self._cwd) if self._cwd else None,
            }
        })
        try:
            proc = subprocess.run(
                cmd,
                cwd=str(self._cwd) if self._cwd else None,
                stdin=subprocess.DEVNULL,
                stdout=output,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except OSError as e:
            raise AuditToolError(f"Unable to start audit command: {e}") from e
        return proc.returncode
