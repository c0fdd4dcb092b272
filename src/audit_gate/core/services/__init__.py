from __future__ import annotations

from .audit_invoker import AuditInvoker, DEFAULT_NETWORK_ERROR_MARKERS
from .classifier import RecordClassifier
from .exclusion_auditor import ExclusionAuditor
from .report_builder import ReportBuilder

__all__ = [
    "AuditInvoker",
    "DEFAULT_NETWORK_ERROR_MARKERS",
    "RecordClassifier",
    "ExclusionAuditor",
    "ReportBuilder",
]
