"""
Service layer exceptions.
"""


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class NotFoundError(ServiceError):
    """Requested resource does not exist (HTTP 404 or empty envelope)."""

    def __init__(self, path: str, message: str | None = None):
        super().__init__(message or f"Resource not found: {path}", path=path)


class ApiError(ServiceError):
    """Remote API answered with a non-2xx status or could not be reached."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message, path=path)


class RequestTimeoutError(ApiError):
    """Request timed out."""

    def __init__(self, path: str, timeout: float):
        self.timeout = timeout
        super().__init__(
            f"Request to '{path}' timed out after {timeout}s",
            path=path,
        )


class DeserializationError(ServiceError):
    """Response body did not match the expected shape."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        raw_body: str = "",
        error: Exception | None = None,
    ):
        self.raw_body = raw_body
        self.error = error
        super().__init__(message, path=path)


class PaginationConsistencyError(DeserializationError):
    """Paginated collection reported inconsistent counts across pages."""

    pass
