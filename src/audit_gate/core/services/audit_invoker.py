from __future__ import annotations

import time
from typing import Sequence

from ..domain.exceptions import AuditToolError, NetworkFailureError
from ..domain.records import is_audit_data
from ..ports import AuditToolPort, LoggerPort, ScratchSinkPort, Sleeper

DEFAULT_NETWORK_ERROR_MARKERS: tuple[str, ...] = (
    "Error: Request failed",
    "ESOCKETTIMEDOUT",
    "ETIMEDOUT",
    "ECONNRESET",
    "EAI_AGAIN",
    "ENOTFOUND",
)

TOOL_ERROR_EXIT_CODE = 1


class AuditInvoker:
    """Runs the audit tool into the scratch sink, retrying on network failures.

    Each attempt replaces the sink contents. After the process exits the sink is
    scanned once for network failure markers; a match is either retried after a
    fixed backoff or raised, depending on ``retry_on_network_error``.
    """

    def __init__(
        self,
        *,
        tool: AuditToolPort,
        sink: ScratchSinkPort,
        logger: LoggerPort,
        network_error_markers: Sequence[str] = DEFAULT_NETWORK_ERROR_MARKERS,
        max_retries: int = 0,
        backoff_seconds: float = 1.0,
        sleep: Sleeper = time.sleep,
    ) -> None:
        self._tool = tool
        self._sink = sink
        self._logger = logger
        self._markers = tuple(m for m in network_error_markers if m)
        self._max_retries = max_retries
        self._backoff_seconds = backoff_seconds
        self._sleep = sleep

    def _find_network_failure(self) -> str | None:
        """Return the first marker found in the sink, if any.

        Advisory and summary records are skipped: their text (titles,
        overviews) may legitimately mention error codes such as ECONNRESET.
        """
        if not self._markers:
            return None
        for line in self._sink.lines():
            marker = next((m for m in self._markers if m in line), None)
            if marker is not None and not is_audit_data(line):
                return marker
        return None

    def _retries_exhausted(self, attempt: int) -> bool:
        # max_retries == 0 means retry until the registry answers
        return self._max_retries > 0 and attempt > self._max_retries

    def run(
        self,
        *,
        severity: str,
        ignore_dev_dependencies: bool,
        retry_on_network_error: bool,
    ) -> int:
        """Run the audit until it produces usable output.

        Args:
            severity: Minimum severity passed through to the audit tool
            ignore_dev_dependencies: Restrict the scan to production dependencies
            retry_on_network_error: Retry instead of failing on network errors

        Returns:
            The audit tool's exit status

        Raises:
            NetworkFailureError: Network failure without retry, or retries exhausted
            AuditToolError: The tool exited with status 1 for another reason
        """
        attempt = 0
        while True:
            attempt += 1
            self._logger.debug(
                "audit_attempt",
                attempt=attempt,
                severity=severity,
                ignore_dev_dependencies=ignore_dev_dependencies,
            )

            with self._sink.open_for_write() as output:
                exit_code = self._tool.run(
                    severity=severity,
                    ignore_dev_dependencies=ignore_dev_dependencies,
                    output=output,
                )
            self._logger.debug("audit_exit", attempt=attempt, exit_code=exit_code)

            marker = self._find_network_failure()
            if marker is not None:
                self._logger.warning(
                    f"Network failure detected in audit output ({marker})",
                    attempt=attempt,
                    marker=marker,
                )
                if not retry_on_network_error or self._retries_exhausted(attempt):
                    raise NetworkFailureError(self._sink.read_text(), attempts=attempt)
                self._logger.info(
                    f"Retrying audit in {self._backoff_seconds:g}s",
                    attempt=attempt,
                    delay_seconds=self._backoff_seconds,
                )
                self._sleep(self._backoff_seconds)
                continue

            if exit_code == TOOL_ERROR_EXIT_CODE:
                raise AuditToolError(
                    f"Audit command failed with exit code {exit_code}",
                    output=self._sink.read_text(),
                    tool_exit_code=exit_code,
                )

            return exit_code
