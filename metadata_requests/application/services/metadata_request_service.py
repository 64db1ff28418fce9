"""Metadata Request Service.

This service orchestrates the request lifecycle: creation, weighted voting
per sub-request, cancellation, finalization and the apply extension.

Operation rules:
1. CHECK FIRST - Every precondition runs before any mutation
2. FAIL LOUD - Rejections raise a specific error and are logged
3. EVENT AFTER SAVE - The event is emitted after the store is updated
4. ROLLBACK ON EMISSION FAILURE - A store change whose event could not be
   emitted is undone, so no mutation is ever observable without its event.
   Apply is the exception: the applier has already acted, so the request
   stays APPLIED and the failure is still raised

The service assumes its callers are serialized: one operation completes
before the next begins. It performs no locking of its own.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

import structlog

from metadata_requests.application.ports.metadata_request_repository import (
    MetadataRequestRepositoryProtocol,
)
from metadata_requests.application.ports.owner_resolver import OwnerResolverProtocol
from metadata_requests.application.ports.request_applier import RequestApplierProtocol
from metadata_requests.application.ports.request_event_emitter import (
    RequestEventEmitterPort,
)
from metadata_requests.application.ports.time_authority import TimeAuthorityProtocol
from metadata_requests.application.services.access_guard import RequestAccessGuard
from metadata_requests.application.services.base import LoggingMixin
from metadata_requests.config.request_config import (
    DEFAULT_METADATA_REQUEST_CONFIG,
    DEFAULT_TTL_SECONDS,
    MetadataRequestConfig,
)
from metadata_requests.domain.errors.request import (
    EmptyRequestError,
    EventEmissionError,
    InvalidVoteWeightError,
    MismatchedLengthsError,
    RequestApplierNotConfiguredError,
    RequestNotApplicableError,
)
from metadata_requests.domain.events.metadata_request import (
    RequestAppliedEvent,
    RequestCancelledEvent,
    RequestCreatedEvent,
    RequestEventPayload,
    VoteCastEvent,
    VotingFinishedEvent,
)
from metadata_requests.domain.models.metadata_request import (
    APPLICABLE_STATES,
    Ballot,
    MetadataRequest,
    RequestStatus,
    RequestType,
    SubRequest,
    is_valid_weight,
)
from metadata_requests.domain.services.vote_aggregation import (
    cast_ballot,
    resolve_outcome,
)

E = TypeVar("E", bound=RequestEventPayload)


class MetadataRequestService(LoggingMixin):
    """Service for the metadata request lifecycle.

    Public operations:
    - create_request: Open a request with one or more sub-requests
    - vote: Collection owner adds weight to a sub-request
    - cancel_request: Requester withdraws a PENDING request
    - finalize: Resolve a PENDING request inside its voting window
    - apply_request: Hand an APPROVED/RESOLVED request to the applier
    - get_request, get_request_ids_by_did, get_request_ids_by_owner: reads

    Attributes:
        _repository: Request store.
        _owner_resolver: Oracle for current collection owners.
        _time: Time authority for all timestamps and expiry checks.
        _event_emitter: Emitter for lifecycle events.
        _applier: Optional extension that applies decided requests.
        _config: Voting window and tally mode.
        _guard: Precondition checks.
    """

    def __init__(
        self,
        repository: MetadataRequestRepositoryProtocol,
        owner_resolver: OwnerResolverProtocol,
        time_authority: TimeAuthorityProtocol,
        event_emitter: RequestEventEmitterPort,
        applier: RequestApplierProtocol | None = None,
        config: MetadataRequestConfig | None = None,
    ) -> None:
        """Initialize the metadata request service.

        Args:
            repository: Store for request records and indexes.
            owner_resolver: Resolves the current owner of a collection.
            time_authority: Source of the current time.
            event_emitter: Emitter for lifecycle events.
            applier: Optional applier for decided requests. If None,
                     apply_request raises RequestApplierNotConfiguredError.
            config: Optional configuration, defaults to a one-week window
                    with additive tallies.
        """
        self._repository = repository
        self._owner_resolver = owner_resolver
        self._time = time_authority
        self._event_emitter = event_emitter
        self._applier = applier
        self._config = config or DEFAULT_METADATA_REQUEST_CONFIG
        self._guard = RequestAccessGuard(repository, owner_resolver)
        self._init_logger()
        if not self._config.has_standard_window:
            self._log.warning(
                "non_standard_voting_window",
                ttl_seconds=self._config.ttl_seconds,
                standard_ttl_seconds=DEFAULT_TTL_SECONDS,
            )

    # =========================================================================
    # Request Store operations
    # =========================================================================

    def create_request(
        self,
        collection_ref: str,
        subject_id: str,
        requester: str,
        request_types: Sequence[RequestType | str | int],
        data: Sequence[str],
    ) -> int:
        """Open a new PENDING request.

        Types and data are parallel sequences: the i-th payload belongs to
        the i-th type.

        Args:
            collection_ref: Collection the request concerns.
            subject_id: DID of the asset record within the collection.
            requester: Identity creating the request.
            request_types: Sub-request types, in order.
            data: Opaque payload for each sub-request.

        Returns:
            The id allocated to the new request.

        Raises:
            MismatchedLengthsError: If types and data differ in length.
            EmptyRequestError: If no sub-request is supplied.
            ValueError: If a request type is unknown.
            EventEmissionError: If the created event could not be emitted
                                (the creation is rolled back).
        """
        log = self._log_operation(
            "create_request",
            collection_ref=collection_ref,
            subject_id=subject_id,
            requester=requester,
        )

        if len(request_types) != len(data):
            log.warning(
                "create_rejected_mismatched_lengths",
                types_count=len(request_types),
                data_count=len(data),
            )
            raise MismatchedLengthsError(len(request_types), len(data))

        if not request_types:
            log.warning("create_rejected_empty")
            raise EmptyRequestError()

        parsed_types = [RequestType.parse(t) for t in request_types]
        sub_requests = tuple(
            SubRequest(request_type=t, data=d) for t, d in zip(parsed_types, data)
        )

        now = self._time.now()
        expires_at = now + self._config.ttl
        owner = self._owner_resolver.resolve_owner(collection_ref)

        request = self._repository.create(
            collection_ref=collection_ref,
            subject_id=subject_id,
            requester=requester,
            owner=owner,
            sub_requests=sub_requests,
            created_at=now,
            expires_at=expires_at,
        )
        log.debug("request_stored", request_id=request.id, owner=owner)

        self._emit(
            log,
            request.id,
            RequestCreatedEvent(
                request_id=request.id,
                collection_ref=collection_ref,
                subject_id=subject_id,
                requester=requester,
                request_types=tuple(t.value for t in parsed_types),
                data=tuple(data),
                expires_at=expires_at,
            ),
            self._event_emitter.emit_request_created,
            rollback=lambda: self._repository.discard(request.id),
        )

        log.info(
            "request_created",
            request_id=request.id,
            sub_request_count=len(sub_requests),
            expires_at=expires_at.isoformat(),
        )
        return request.id

    def get_request(self, request_id: int) -> MetadataRequest:
        """Retrieve a request by id.

        Raises:
            RequestNotFoundError: If the id is unknown.
        """
        return self._guard.require_exists(request_id)

    def get_request_ids_by_did(self, subject_id: str) -> list[int]:
        """Return every request id created for a DID, in creation order."""
        return self._repository.list_ids_by_did(subject_id)

    def get_request_ids_by_owner(self, owner: str) -> list[int]:
        """Return every request id indexed under an owner, in creation order.

        The owner is the one resolved when each request was created.
        """
        return self._repository.list_ids_by_owner(owner)

    # =========================================================================
    # Voting
    # =========================================================================

    def vote(
        self,
        request_id: int,
        sub_request_index: int,
        in_favour: bool,
        weight: int | float,
        caller: str,
    ) -> MetadataRequest:
        """Add a weighted vote to one sub-request.

        Only the current collection owner may vote, only while the request
        is PENDING and inside its voting window. Under the default ADDITIVE
        mode repeated votes by the same identity accumulate.

        Args:
            request_id: Request to vote on.
            sub_request_index: Position of the sub-request.
            in_favour: True for yes, False for no.
            weight: Finite, non-negative weight supplied by the caller.
            caller: Identity casting the vote.

        Returns:
            The updated request.

        Raises:
            RequestNotFoundError: If the id is unknown.
            RequestNotPendingError: If the request left PENDING.
            NotCollectionOwnerError: If caller is not the current owner.
            RequestExpiredError: If the voting window has closed.
            SubRequestIndexOutOfRangeError: If the index is invalid.
            InvalidVoteWeightError: If weight is negative, NaN or infinite.
            EventEmissionError: If the vote event could not be emitted
                                (the vote is rolled back).
        """
        log = self._log_operation(
            "vote",
            request_id=request_id,
            sub_request_index=sub_request_index,
            in_favour=in_favour,
            weight=weight,
            caller=caller,
        )

        now = self._time.now()
        request = self._guard.require_pending(request_id)
        self._guard.require_is_collection_owner(request, caller)
        self._guard.require_not_expired(request, now)
        self._guard.require_sub_request_index(request, sub_request_index)
        if not is_valid_weight(weight):
            log.warning("vote_rejected_invalid_weight")
            raise InvalidVoteWeightError(weight)

        ballot = Ballot(voter=caller, in_favour=in_favour, weight=weight, cast_at=now)
        sub_request = cast_ballot(
            request.sub_requests[sub_request_index],
            ballot,
            self._config.vote_tally_mode,
        )
        updated = request.with_sub_request(sub_request_index, sub_request)
        self._repository.update(updated)

        self._emit(
            log,
            request_id,
            VoteCastEvent(
                request_id=request_id,
                voter=caller,
                in_favour=in_favour,
                weight=weight,
            ),
            self._event_emitter.emit_vote_cast,
            rollback=lambda: self._repository.update(request),
        )

        log.info(
            "vote_recorded",
            yes_weight=sub_request.yes_weight,
            no_weight=sub_request.no_weight,
            tally_mode=self._config.vote_tally_mode.value,
        )
        return updated

    def finalize(self, request_id: int, caller: str | None = None) -> MetadataRequest:
        """Resolve a PENDING request into APPROVED, RESOLVED or REJECTED.

        Anyone may finalize. Finalize is only accepted inside the voting
        window: an expired request stays PENDING and can no longer be
        finalized. The transition is one-shot.

        Args:
            request_id: Request to finalize.
            caller: Optional identity triggering the finalize, for logs.

        Returns:
            The finalized request.

        Raises:
            RequestNotFoundError: If the id is unknown.
            RequestNotPendingError: If the request left PENDING.
            RequestExpiredError: If the voting window has closed.
            EventEmissionError: If the event could not be emitted
                                (the request is restored to PENDING).
        """
        log = self._log_operation("finalize", request_id=request_id, caller=caller)

        now = self._time.now()
        request = self._guard.require_active_pending(request_id, now)

        outcome = resolve_outcome(request.sub_requests)
        updated = request.with_status(outcome, now)
        self._repository.update(updated)

        self._emit(
            log,
            request_id,
            VotingFinishedEvent(request_id=request_id, status=outcome.value),
            self._event_emitter.emit_voting_finished,
            rollback=lambda: self._repository.update(request),
        )

        log.info(
            "voting_finished",
            status=outcome.value,
            approved_count=sum(1 for s in request.sub_requests if s.is_approved),
            sub_request_count=len(request.sub_requests),
        )
        return updated

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def cancel_request(self, request_id: int, caller: str) -> MetadataRequest:
        """Cancel a PENDING request on behalf of its requester.

        There is no expiry check: the requester may cancel after the
        deadline as long as nobody has finalized the request.

        Args:
            request_id: Request to cancel.
            caller: Identity asking for the cancellation.

        Returns:
            The cancelled request.

        Raises:
            RequestNotFoundError: If the id is unknown.
            RequestNotPendingError: If the request left PENDING.
            NotRequesterError: If caller did not create the request.
            EventEmissionError: If the event could not be emitted
                                (the request is restored to PENDING).
        """
        log = self._log_operation("cancel_request", request_id=request_id, caller=caller)

        now = self._time.now()
        request = self._guard.require_pending(request_id)
        self._guard.require_is_requester(request, caller)

        updated = request.with_status(RequestStatus.CANCELLED, now)
        self._repository.update(updated)

        self._emit(
            log,
            request_id,
            RequestCancelledEvent(request_id=request_id),
            self._event_emitter.emit_request_cancelled,
            rollback=lambda: self._repository.update(request),
        )

        log.info("request_cancelled")
        return updated

    def apply_request(self, request_id: int, caller: str | None = None) -> MetadataRequest:
        """Hand a decided request to the configured applier.

        Only APPROVED and RESOLVED requests are applicable. When the
        applier returns without error the request moves to APPLIED.

        Args:
            request_id: Request to apply.
            caller: Optional identity triggering the apply, for logs.

        Returns:
            The applied request.

        Raises:
            RequestApplierNotConfiguredError: If no applier is wired in.
            RequestNotFoundError: If the id is unknown.
            RequestNotApplicableError: If the status is not APPROVED/RESOLVED.
            EventEmissionError: If the event could not be emitted. The
                                request stays APPLIED so the applier
                                never runs twice for it.
        """
        log = self._log_operation("apply_request", request_id=request_id, caller=caller)

        if self._applier is None:
            log.error("apply_rejected_no_applier")
            raise RequestApplierNotConfiguredError()

        request = self._guard.require_exists(request_id)
        if request.status not in APPLICABLE_STATES:
            log.warning("apply_rejected_status", status=request.status.value)
            raise RequestNotApplicableError(request_id, request.status)

        self._applier.apply(request)
        log.debug("applier_completed")

        now = self._time.now()
        updated = request.with_status(RequestStatus.APPLIED, now)
        self._repository.update(updated)

        self._emit(
            log,
            request_id,
            RequestAppliedEvent(
                request_id=request_id,
                previous_status=request.status.value,
            ),
            self._event_emitter.emit_request_applied,
            rollback=None,
        )

        log.info("request_applied", previous_status=request.status.value)
        return updated

    # =========================================================================
    # Helpers
    # =========================================================================

    def _emit(
        self,
        log: structlog.BoundLogger,
        request_id: int,
        event: E,
        emit: Callable[[E], None],
        rollback: Callable[[], None] | None,
    ) -> None:
        """Emit an event, undoing the store change if emission fails.

        With no rollback the store change is kept and only the failure
        is raised.

        Raises:
            EventEmissionError: If emission failed (after any rollback).
        """
        try:
            emit(event)
        except Exception as e:
            log.error(
                "event_emission_failed",
                event_type=event.event_type,
                error=str(e),
                error_type=type(e).__name__,
            )
            if rollback is None:
                log.warning(
                    "state_kept_after_emission_failure",
                    request_id=request_id,
                    event_type=event.event_type,
                )
            else:
                rollback()
                log.warning(
                    "state_rolled_back",
                    request_id=request_id,
                    event_type=event.event_type,
                )
            raise EventEmissionError(
                request_id=request_id,
                event_type=event.event_type,
                cause=e,
            ) from e
        log.debug("event_emitted", event_type=event.event_type)
