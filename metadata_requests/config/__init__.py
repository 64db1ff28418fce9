"""Configuration module for metadata requests.

Available Configurations:
- MetadataRequestConfig: Voting window and vote tally mode
"""

from metadata_requests.config.request_config import (
    DEFAULT_METADATA_REQUEST_CONFIG,
    MetadataRequestConfig,
)

__all__ = [
    "MetadataRequestConfig",
    "DEFAULT_METADATA_REQUEST_CONFIG",
]
