"""Domain layer for metadata change requests.

Pure business logic: models, state machine, vote aggregation, events and
errors. Imports nothing from the application or infrastructure layers.
"""

from metadata_requests.domain.exceptions import MetadataRequestError

__all__: list[str] = ["MetadataRequestError"]
