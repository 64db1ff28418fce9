"""Logging mixin shared by application services.

A service binds its class name once and then derives one logger per
public operation, so every entry an operation writes carries the same
operation name, correlation id and request identifiers:

    class RequestReportService(LoggingMixin):
        def __init__(self, repository: MetadataRequestRepositoryProtocol) -> None:
            self._repository = repository
            self._init_logger(component="reporting")

        def summarize(self, request_id: int) -> None:
            log = self._log_operation("summarize", request_id=request_id)
            log.info("summary_built")
"""

import structlog

from metadata_requests.infrastructure.observability.correlation import (
    get_correlation_id,
)


class LoggingMixin:
    """Gives a service a bound structlog logger.

    Attributes:
        _log: Logger bound with ``service`` (class name) and ``component``.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "metadata_request") -> None:
        """Bind the service-level logger. Call once from ``__init__``."""
        self._log = structlog.get_logger().bind(
            service=type(self).__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Return a logger scoped to one call of ``operation``.

        The correlation id is read at call time, so an id set by the
        caller for this request is attached to every entry.
        """
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )
