from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.domain.models import ReportFormat, Severity
from ..core.services.audit_invoker import DEFAULT_NETWORK_ERROR_MARKERS

APP_NAME = "audit_gate"


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class AuditConfig(_Section):
    """Advisory filtering configuration."""

    min_severity: Severity = Field(
        default=Severity.LOW,
        description="Minimum severity to report (info, low, moderate, high, critical)",
    )

    exclude: str | None = Field(
        default=None,
        description="CSV list of advisory ids / GHSA codes to ignore; overrides the exclusion file",
    )

    ignore_dev_dependencies: bool = Field(
        default=False,
        description="Ignore advisories only reachable through devDependencies",
    )

    fail_on_missing_exclusions: bool = Field(
        default=False,
        description="Exit non-zero when an exclusion no longer matches any advisory",
    )

    exclusion_file: str = Field(
        default=".iyarc",
        description="Exclusion file name, relative to the project directory",
    )

    manifest_file: str = Field(
        default="package.json",
        description="Package manifest name, relative to the project directory",
    )

    @field_validator("min_severity", mode="before")
    @classmethod
    def _parse_severity(cls, value: object) -> object:
        if isinstance(value, str):
            return Severity.parse(value)
        return value


class ToolConfig(_Section):
    """Audit command configuration."""

    command: str = Field(
        default="yarn",
        description="Package manager executable (may include leading arguments)",
    )

    cwd: Path = Field(
        default_factory=Path.cwd,
        description="Project directory the audit runs in",
    )

    retry_on_network_failure: bool = Field(
        default=False,
        description="Retry the audit when the registry cannot be reached",
    )

    max_retries: int = Field(
        default=0,
        ge=0,
        description="Maximum number of retries on network failure (0 = no limit)",
    )

    retry_backoff_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Delay between retries",
    )

    network_error_markers: tuple[str, ...] = Field(
        default=DEFAULT_NETWORK_ERROR_MARKERS,
        description="Substrings in audit output that indicate a network failure",
    )

    scratch_dir: Path | None = Field(
        default=None,
        description="Directory for the temporary audit output file (system temp dir if unset)",
    )


class ReportConfig(_Section):
    """Report output configuration."""

    output_format: ReportFormat = Field(
        default=ReportFormat.TEXT,
        description="Report format (text, json, ndjson)",
    )

    output_path: Path | None = Field(
        default=None,
        description="Write the report to this file instead of stdout",
    )

    @field_validator("output_format", mode="before")
    @classmethod
    def _parse_format(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class LoggingConfig(_Section):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Logging level")
    logger_name: str = Field(default=APP_NAME, description="Root logger name")
    console_output: bool = Field(default=True, description="Log to stderr")
    log_file: Path | None = Field(default=None, description="Optional JSONL log file")
    debug: bool = Field(default=False, description="Log every advisory and subprocess detail")


class AppConfig(BaseSettings):
    """Root application configuration.

    All configuration is loaded from environment variables with AUDIT_GATE_ prefix.
    Use double underscore for nested config: AUDIT_GATE_AUDIT__MIN_SEVERITY

    Example env vars:
        export AUDIT_GATE_AUDIT__MIN_SEVERITY=moderate
        export AUDIT_GATE_AUDIT__EXCLUDE=1179,GHSA-ww39-953v-wcq6
        export AUDIT_GATE_TOOL__RETRY_ON_NETWORK_FAILURE=true
        export AUDIT_GATE_TOOL__MAX_RETRIES=5
        export AUDIT_GATE_REPORT__OUTPUT_FORMAT=json
        export AUDIT_GATE_LOGGING__LOG_FILE=/tmp/audit-gate.jsonl
    """

    model_config = SettingsConfigDict(
        env_prefix="AUDIT_GATE_",
        env_nested_delimiter="__",
        frozen=True,
        extra="forbid",
    )

    audit: AuditConfig = Field(default_factory=AuditConfig)
    tool: ToolConfig = Field(default_factory=ToolConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def exclusion_path(self) -> Path:
        return self.tool.cwd / self.audit.exclusion_file

    @property
    def manifest_path(self) -> Path:
        return self.tool.cwd / self.audit.manifest_file

    def with_overrides(self, section: str, **values: object) -> "AppConfig":
        """Return a copy with non-None ``values`` replaced in ``section``.

        Values are validated the same way as environment input.
        """
        values = {k: v for k, v in values.items() if v is not None}
        if not values:
            return self
        current = getattr(self, section)
        updated = type(current).model_validate({**current.model_dump(), **values})
        return self.model_copy(update={section: updated})
