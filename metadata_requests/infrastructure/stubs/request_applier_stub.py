"""Request applier stub implementation.

Records which requests were handed to the applier. Can be configured to
fail so the apply path's error handling can be exercised.
"""

from __future__ import annotations

from metadata_requests.application.ports.request_applier import RequestApplierProtocol
from metadata_requests.domain.models.metadata_request import MetadataRequest


class RequestApplierStub(RequestApplierProtocol):
    """Applier that only records what it was asked to apply.

    Attributes:
        applied: Requests passed to apply(), in call order.
        fail_exception: If set, apply() raises this exception.
    """

    def __init__(self) -> None:
        self.applied: list[MetadataRequest] = []
        self.fail_exception: Exception | None = None

    def apply(self, request: MetadataRequest) -> None:
        if self.fail_exception is not None:
            raise self.fail_exception
        self.applied.append(request)

    @property
    def applied_ids(self) -> list[int]:
        return [r.id for r in self.applied]
