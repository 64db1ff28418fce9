"""Root of the metadata request exception hierarchy."""


class MetadataRequestError(Exception):
    """Base class of every error raised by the metadata request package.

    Callers that only need to tell domain failures apart from programming
    errors can catch this single type.
    """

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
