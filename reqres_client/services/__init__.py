"""
Service layer - typed transport, TTL cache and cached user lookups.

Provides:
- ReqResApiClient: Single-request HTTP transport with response classification
- CacheManager: Process-local cache with TTL
- ExternalUserService: Cached single-user and paginated all-users lookups
"""

from reqres_client.services.errors import (
    ServiceError,
    NotFoundError,
    ApiError,
    RequestTimeoutError,
    DeserializationError,
    PaginationConsistencyError,
)
from reqres_client.services.cache import CacheManager, CacheEntry, CacheResult
from reqres_client.services.client import ReqResApiClient
from reqres_client.services.users import ExternalUserService

__all__ = [
    # Errors
    "ServiceError",
    "NotFoundError",
    "ApiError",
    "RequestTimeoutError",
    "DeserializationError",
    "PaginationConsistencyError",
    # Cache
    "CacheManager",
    "CacheEntry",
    "CacheResult",
    # Client
    "ReqResApiClient",
    # Users
    "ExternalUserService",
]
