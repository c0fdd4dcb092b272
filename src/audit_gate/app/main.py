from __future__ import annotations

from .config import AppConfig
from .container import Container


def _create_container(config: AppConfig | None = None) -> Container:
    """Create and initialize a container.

    Initializing resources configures logging and creates the scratch sink.

    Args:
        config: Optional config. If None, loads from environment variables.

    Returns:
        Initialized container instance
    """
    container = Container()

    if config is None:
        # Load from environment variables (BaseSettings default behavior)
        config = AppConfig()

    container.config.from_pydantic(config)
    container.init_resources()

    return container


def run_audit(config: AppConfig | None = None) -> int:
    """Run one audit and write the report.

    The scratch sink is removed before returning, whether the run succeeds
    or raises.

    Args:
        config: Optional config. If None, loads from env vars.

    Returns:
        Number of reportable advisories (the intended process exit code)

    Raises:
        AuditGateError: On any fatal condition (see core.domain.exceptions)
    """
    if config is None:
        config = AppConfig()

    container = _create_container(config)
    try:
        uc = container.audit_uc()
        return uc.execute(
            severity=config.audit.min_severity.value,
            ignore_dev_dependencies=config.audit.ignore_dev_dependencies,
            retry_on_network_error=config.tool.retry_on_network_failure,
        )
    finally:
        # Always shutdown resources to remove the sink and close log handlers
        container.shutdown_resources()
