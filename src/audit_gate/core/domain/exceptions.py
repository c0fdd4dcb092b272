"""Domain exceptions for audit_gate."""

from __future__ import annotations


class AuditGateError(Exception):
    """Base class for every fatal audit_gate condition."""

    exit_code: int = 1


class NetworkFailureError(AuditGateError):
    """Raised when the audit output shows the registry could not be reached.

    Only fatal when retrying is disabled or the retry budget is spent.
    """

    def __init__(self, output: str, attempts: int = 1) -> None:
        self.output = output
        self.attempts = attempts
        super().__init__(
            f"Network failure while running audit (after {attempts} attempt(s)):\n{output}"
        )


class AuditToolError(AuditGateError):
    """Raised when the audit tool itself fails or cannot be started."""

    def __init__(self, message: str, output: str = "", tool_exit_code: int | None = None) -> None:
        self.output = output
        self.tool_exit_code = tool_exit_code
        if output:
            message = f"{message}\n{output}"
        super().__init__(message)


class MalformedRecordError(AuditGateError):
    """Raised when a line of audit output is not a well-formed record."""

    def __init__(self, line_number: int, excerpt: str, reason: str) -> None:
        self.line_number = line_number
        self.excerpt = excerpt
        self.reason = reason
        super().__init__(f"Malformed audit record on line {line_number}: {reason}: {excerpt}")


class ExclusionConfigError(AuditGateError):
    """Raised when an exclusion list contains an invalid identifier."""

    def __init__(self, source: str, token: str) -> None:
        self.source = source
        self.token = token
        super().__init__(
            f"Invalid advisory exclusion '{token}' in {source}: "
            "expected a numeric advisory id or a GHSA code (GHSA-xxxx-xxxx-xxxx)"
        )


class ManifestError(AuditGateError):
    """Raised when package.json cannot be parsed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Unable to read {path}: {reason}")


class MissingExclusionsError(AuditGateError):
    """Raised when configured exclusions no longer match any advisory.

    The process exit code is the number of missing exclusions.
    """

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        self.exit_code = len(self.missing)
        super().__init__(
            f"{len(self.missing)} advisory exclusion(s) no longer match any advisory: "
            + ", ".join(self.missing)
        )
