"""Domain errors for metadata change requests.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from MetadataRequestError.
"""

from metadata_requests.domain.errors.request import (
    EmptyRequestError,
    EventEmissionError,
    InvalidStateTransitionError,
    InvalidVoteWeightError,
    MismatchedLengthsError,
    NotCollectionOwnerError,
    NotRequesterError,
    RequestApplierNotConfiguredError,
    RequestError,
    RequestExpiredError,
    RequestNotApplicableError,
    RequestNotFoundError,
    RequestNotPendingError,
    SubRequestIndexOutOfRangeError,
)

__all__: list[str] = [
    "EmptyRequestError",
    "EventEmissionError",
    "InvalidStateTransitionError",
    "InvalidVoteWeightError",
    "MismatchedLengthsError",
    "NotCollectionOwnerError",
    "NotRequesterError",
    "RequestApplierNotConfiguredError",
    "RequestError",
    "RequestExpiredError",
    "RequestNotApplicableError",
    "RequestNotFoundError",
    "RequestNotPendingError",
    "SubRequestIndexOutOfRangeError",
]
