from __future__ import annotations

from pathlib import Path

from dependency_injector import containers, providers

from ..core.domain.matchers import DevDependencyMatcher
from ..core.services import AuditInvoker, ExclusionAuditor, RecordClassifier, ReportBuilder
from ..core.usecases.audit import AuditUseCase
from ..infra.exclusion_file import resolve_exclusions
from ..infra.logging import AuditLogger
from ..infra.package_manifest import read_dev_dependencies
from ..infra.report_writer import ConsoleReportWriter, FileReportWriter
from ..infra.scratch_sink import ScratchSinkResource
from ..infra.yarn_audit import YarnAuditTool


def _project_file(cwd: Path, name: str) -> Path:
    return Path(cwd) / name


def _dev_matcher(manifest_path: Path, ignore_dev_dependencies: bool) -> DevDependencyMatcher | None:
    if not ignore_dev_dependencies:
        return None
    return DevDependencyMatcher.from_names(read_dev_dependencies(manifest_path))


def _report_writer(output_path: Path | None) -> FileReportWriter | ConsoleReportWriter:
    if output_path:
        return FileReportWriter(path=Path(output_path))
    return ConsoleReportWriter()


def _log_level(level: str, debug: bool) -> str:
    return "DEBUG" if debug else level


class Container(containers.DeclarativeContainer):
    """DI container fed from a frozen AppConfig via ``config.from_pydantic``."""

    config = providers.Configuration()

    # Logger (Resource: manages lifecycle with init/shutdown)
    logger = providers.Resource(
        AuditLogger,
        logger_name=config.logging.logger_name,
        console_output=config.logging.console_output,
        log_file=config.logging.log_file,
        level=providers.Callable(_log_level, config.logging.level, config.logging.debug),
    )

    # One scratch sink per run, removed on shutdown_resources()
    sink = providers.Resource(
        ScratchSinkResource,
        directory=config.tool.scratch_dir,
    )

    exclusions = providers.Singleton(
        resolve_exclusions,
        cli_value=config.audit.exclude,
        file_path=providers.Callable(_project_file, config.tool.cwd, config.audit.exclusion_file),
    )

    dev_matcher = providers.Singleton(
        _dev_matcher,
        manifest_path=providers.Callable(_project_file, config.tool.cwd, config.audit.manifest_file),
        ignore_dev_dependencies=config.audit.ignore_dev_dependencies,
    )

    audit_tool = providers.Singleton(
        YarnAuditTool,
        command=config.tool.command,
        cwd=config.tool.cwd,
    )

    report_writer = providers.Singleton(
        _report_writer,
        output_path=config.report.output_path,
    )

    # Domain services
    invoker = providers.Factory(
        AuditInvoker,
        tool=audit_tool,
        sink=sink,
        logger=logger,
        network_error_markers=config.tool.network_error_markers,
        max_retries=config.tool.max_retries,
        backoff_seconds=config.tool.retry_backoff_seconds,
    )

    classifier = providers.Factory(
        RecordClassifier,
        threshold=config.audit.min_severity,
        exclusions=exclusions,
        dev_matcher=dev_matcher,
        ignore_dev_dependencies=config.audit.ignore_dev_dependencies,
        logger=logger,
        debug=config.logging.debug,
    )

    exclusion_auditor = providers.Factory(
        ExclusionAuditor,
        exclusions=exclusions,
        fail_on_missing=config.audit.fail_on_missing_exclusions,
        logger=logger,
    )

    report_builder = providers.Factory(
        ReportBuilder,
        output_format=config.report.output_format,
        writer=report_writer,
        logger=logger,
        ignore_dev_dependencies=config.audit.ignore_dev_dependencies,
    )

    # Use cases
    audit_uc = providers.Factory(
        AuditUseCase,
        invoker=invoker,
        sink=sink,
        classifier=classifier,
        exclusion_auditor=exclusion_auditor,
        report_builder=report_builder,
        logger=logger,
    )
