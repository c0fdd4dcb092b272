from __future__ import annotations

from ..ports import LoggerPort, ScratchSinkPort
from ..services import AuditInvoker, ExclusionAuditor, RecordClassifier, ReportBuilder


class AuditUseCase:
    """Use case for one audit run: invoke, classify, check exclusions, report.

    Separates DI concerns (collaborators) from runtime parameters. The scratch
    sink's lifecycle belongs to the container, not to this use case.
    """

    def __init__(
        self,
        *,
        invoker: AuditInvoker,
        sink: ScratchSinkPort,
        classifier: RecordClassifier,
        exclusion_auditor: ExclusionAuditor,
        report_builder: ReportBuilder,
        logger: LoggerPort,
    ) -> None:
        self._invoker = invoker
        self._sink = sink
        self._classifier = classifier
        self._exclusion_auditor = exclusion_auditor
        self._report_builder = report_builder
        self._logger = logger

    def execute(
        self,
        *,
        severity: str,
        ignore_dev_dependencies: bool = False,
        retry_on_network_error: bool = False,
    ) -> int:
        """Execute the use case.

        Args:
            severity: Minimum severity name passed to the audit tool
            ignore_dev_dependencies: Scan production dependency groups only
            retry_on_network_error: Retry the audit on registry network errors

        Returns:
            Number of reportable advisories
        """
        self._invoker.run(
            severity=severity,
            ignore_dev_dependencies=ignore_dev_dependencies,
            retry_on_network_error=retry_on_network_error,
        )

        result = self._classifier.classify(self._sink.lines())
        self._logger.debug(
            "audit_classified",
            records=result.record_count,
            advisories=len(result.all_advisories),
            reportable=len(result.reportable),
        )

        self._exclusion_auditor.check_for_missing_exclusions(result.all_advisories)
        return self._report_builder.create_report(result)
