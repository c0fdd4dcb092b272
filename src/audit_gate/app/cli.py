from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError

from .. import __version__
from .config import AppConfig
from .main import run_audit
from ..core.domain.exceptions import AuditGateError, ExclusionConfigError, MissingExclusionsError

app = typer.Typer(add_completion=False)

USAGE_HINT = "Run 'audit-gate --help' for usage."


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"audit-gate {__version__}")
        raise typer.Exit(code=0)


def _fail(message: str, *, code: int = 1, hint: bool = False) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    if hint:
        typer.echo(USAGE_HINT, err=True)
    return typer.Exit(code=code)


@app.command()
def audit(
    min_severity: str | None = typer.Option(
        None, "--min-severity", "-s",
        help="Minimum severity to treat as an error: info, low, moderate, high, critical (default: low)",
    ),
    exclude: str | None = typer.Option(
        None, "--exclude", "-e",
        help="CSV list of advisory ids / GHSA codes to ignore, e.g. 432,GHSA-xxxx-xxxx-xxxx (overrides .iyarc)",
    ),
    retry_on_network_failure: bool = typer.Option(
        False, "--retry-on-network-failure", "-r",
        help="Retry the audit if the registry throws a network error",
    ),
    ignore_dev_deps: bool = typer.Option(
        False, "--ignore-dev-deps", "-i",
        help="Ignore advisories for dev dependencies",
    ),
    fail_on_missing_exclusions: bool = typer.Option(
        False, "--fail-on-missing-exclusions", "-f",
        help="Exit with the number of exclusions that no longer match any advisory",
    ),
    output_format: str | None = typer.Option(
        None, "--output-format", "-o",
        help="Report format: text, json or ndjson (default: text)",
    ),
    output_path: Path | None = typer.Option(
        None, "--output-path", "-p",
        help="Write the report to a file instead of stdout",
    ),
    cwd: Path | None = typer.Option(
        None, "--cwd",
        help="Project directory containing package.json, yarn.lock and .iyarc",
    ),
    debug: bool = typer.Option(
        False, "--debug", "-d",
        help="Log subprocess details and every advisory",
    ),
    version: bool = typer.Option(  # noqa: ARG001
        False, "--version", "-v",
        callback=_version_callback, is_eager=True,
        help="Print version info and exit",
    ),
):
    """Run `yarn audit` and fail on advisories that matter.

    Exits with the number of reportable advisories (0 when clean).
    """
    try:
        config = AppConfig()
        config = config.with_overrides(
            "audit",
            min_severity=min_severity,
            exclude=exclude,
            ignore_dev_dependencies=ignore_dev_deps or None,
            fail_on_missing_exclusions=fail_on_missing_exclusions or None,
        )
        config = config.with_overrides(
            "tool",
            cwd=cwd,
            retry_on_network_failure=retry_on_network_failure or None,
        )
        config = config.with_overrides("report", output_format=output_format, output_path=output_path)
        config = config.with_overrides("logging", debug=debug or None)
    except ValidationError as e:
        errors = "; ".join(err["msg"] for err in e.errors())
        raise _fail(f"Invalid configuration: {errors}", hint=True)

    try:
        count = run_audit(config)
    except MissingExclusionsError as e:
        raise _fail(str(e), code=e.exit_code)
    except ExclusionConfigError as e:
        raise _fail(str(e), hint=True)
    except AuditGateError as e:
        raise _fail(str(e))

    raise typer.Exit(code=count)


if __name__ == "__main__":
    app()
