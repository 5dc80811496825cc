"""
ReqResApiClient - Typed async HTTP transport for the ReqRes API.

Issues a single GET per call and classifies the outcome:
- 404                     -> NotFoundError
- other non-2xx / network -> ApiError (RequestTimeoutError on timeout)
- 2xx with bad body       -> DeserializationError
- 2xx                     -> parsed pydantic model
"""

from typing import TypeVar

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from reqres_client.services.errors import (
    ApiError,
    DeserializationError,
    NotFoundError,
    RequestTimeoutError,
)
from reqres_client.settings import Settings

ModelT = TypeVar("ModelT", bound=BaseModel)

API_KEY_HEADER = "x-api-key"


class ReqResApiClient:
    """
    Low-level client for the remote user-listing API.

    Usage:
        async with ReqResApiClient(settings) as client:
            envelope = await client.get("users/2", UserResponse)
    """

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._settings = settings
        # An injected client is owned by the caller and never closed here
        self._http_client = http_client
        self._owns_http_client = http_client is None

    @property
    def settings(self) -> Settings:
        return self._settings

    def _default_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._settings.api_key:
            headers[API_KEY_HEADER] = self._settings.api_key
        return headers

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self._settings.base_url,
                timeout=httpx.Timeout(self._settings.timeout),
                headers=self._default_headers(),
            )
        return self._http_client

    async def get(self, path: str, response_model: type[ModelT]) -> ModelT:
        """
        GET a resource and parse it into ``response_model``.

        Args:
            path: Path relative to the base URL, e.g. "users/1" or "users?page=2"
            response_model: Pydantic model describing the expected body

        Returns:
            Parsed response body

        Raises:
            NotFoundError: On HTTP 404
            RequestTimeoutError: If the request exceeds the configured timeout
            ApiError: For any other non-2xx status or network failure
            DeserializationError: If a 2xx body does not match response_model
        """
        client = await self._get_http_client()
        logger.debug(f"GET {path}")

        try:
            response = await client.get(path)

        except httpx.TimeoutException as e:
            logger.error(f"Request to {path} timed out after {self._settings.timeout}s")
            raise RequestTimeoutError(path, self._settings.timeout) from e

        except httpx.RequestError as e:
            logger.error(f"Request to {path} failed: {e}")
            raise ApiError(f"Request to '{path}' failed: {e}", path=path) from e

        return self._parse_response(path, response, response_model)

    def _parse_response(
        self,
        path: str,
        response: httpx.Response,
        response_model: type[ModelT],
    ) -> ModelT:
        """Map HTTP status and body to a model or a classified error."""
        status = response.status_code

        if status == 404:
            logger.warning(f"Resource not found: {path}")
            raise NotFoundError(path)

        if not response.is_success:
            body = response.text or None
            logger.error(f"API request to {path} failed with status {status}: {body}")
            raise ApiError(
                f"HTTP {status}: {body[:200] if body else response.reason_phrase}",
                path=path,
                status_code=status,
                response_body=body,
            )

        try:
            return response_model.model_validate_json(response.content)
        except ValidationError as e:
            logger.error(f"Failed to deserialize response from {path}: {e}")
            raise DeserializationError(
                f"Failed to deserialize response from '{path}'",
                path=path,
                raw_body=response.text,
                error=e,
            ) from e

    async def close(self) -> None:
        """Close the HTTP client and cleanup resources."""
        if self._http_client and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("ReqResApiClient closed")

    async def __aenter__(self) -> "ReqResApiClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
