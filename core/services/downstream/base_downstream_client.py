"""Base client for downstream service communication."""

from typing import Any

import requests
import structlog

from core.exceptions import (
    DownstreamServiceError,
    DownstreamServiceUnavailableError,
    MissingCredentialsError,
)
from core.services.credentials import CredentialProvider

logger = structlog.get_logger(__name__)


class BaseDownstreamClient:
    """Base class for downstream service HTTP clients."""

    def __init__(
        self,
        service_name: str,
        base_url: str,
        credentials: CredentialProvider | None = None,
        timeout: int = 10,
    ):
        """Initialize base downstream client.

        Args:
            service_name: Name of the downstream service (for logging/errors)
            base_url: Base URL for the service
            credentials: Bearer token source; None sends unauthenticated requests
            timeout: Request timeout in seconds
        """
        self.service_name = service_name
        self.base_url = base_url.rstrip("/")
        self.credentials = credentials
        self.timeout = timeout

    def _get_headers(self) -> dict[str, str]:
        """Get common HTTP headers for requests.

        Returns:
            Dictionary of headers

        Raises:
            MissingCredentialsError: If a credential provider is set but holds
                no token
        """
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        if self.credentials is not None:
            token = self.credentials.get_token()
            if not token:
                logger.error(
                    "No session token for downstream request",
                    service=self.service_name,
                )
                raise MissingCredentialsError(service_name=self.service_name)
            headers["Authorization"] = f"Bearer {token}"

        return headers

    @staticmethod
    def _extract_error_message(response: requests.Response) -> str:
        """Best-effort error message from a failed response.

        Prefers the JSON ``message`` field, then the raw body text, then a
        generic status message.
        """
        fallback = f"HTTP error! status: {response.status_code}"
        try:
            payload = response.json()
        except ValueError:
            return response.text or fallback

        if isinstance(payload, dict) and payload.get("message"):
            return str(payload["message"])
        return fallback

    @staticmethod
    def _decode_body(response: requests.Response) -> Any:
        """Decode a successful response body.

        Returns:
            None for 204, parsed JSON for JSON content types, text otherwise

        Raises:
            DownstreamServiceError: If a JSON content type carries invalid JSON
        """
        if response.status_code == 204:
            return None

        content_type = response.headers.get("Content-Type", "")
        if "application/json" in content_type:
            try:
                return response.json()
            except ValueError as e:
                raise DownstreamServiceError(
                    message=response.text or str(e),
                    status_code=response.status_code,
                ) from e

        return response.text

    def _make_request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
        **kwargs,
    ) -> requests.Response:
        """Make HTTP request with error handling.

        Args:
            method: HTTP method (GET, PATCH, DELETE, etc.)
            url: Full URL for the request
            params: Query parameters
            json_data: JSON body data
            **kwargs: Additional arguments to pass to requests

        Returns:
            Response object for any 2xx/3xx status

        Raises:
            DownstreamServiceError: For client errors (4xx)
            DownstreamServiceUnavailableError: For server errors (5xx)
            MissingCredentialsError: If no session token is available
            requests.Timeout: For timeout errors
            requests.ConnectionError: For connection errors
        """
        headers = self._get_headers()

        if "headers" in kwargs:
            headers.update(kwargs.pop("headers"))

        if "timeout" not in kwargs:
            kwargs["timeout"] = self.timeout

        logger.debug(
            "Making downstream service request",
            service=self.service_name,
            method=method,
            url=url,
            params=params,
        )

        try:
            response = requests.request(
                method=method,
                url=url,
                headers=headers,
                params=params,
                json=json_data,
                **kwargs,
            )

            logger.debug(
                "Received downstream service response",
                service=self.service_name,
                method=method,
                url=url,
                status_code=response.status_code,
            )

            if response.status_code >= 500:
                message = self._extract_error_message(response)
                logger.error(
                    "Downstream service returned server error",
                    service=self.service_name,
                    status_code=response.status_code,
                    error=message,
                )
                raise DownstreamServiceUnavailableError(
                    service_name=self.service_name,
                    status_code=response.status_code,
                    message=message,
                )

            if response.status_code >= 400:
                message = self._extract_error_message(response)
                logger.error(
                    "Downstream service returned client error",
                    service=self.service_name,
                    status_code=response.status_code,
                    error=message,
                )
                raise DownstreamServiceError(
                    message=message,
                    service_name=self.service_name,
                    status_code=response.status_code,
                )

            return response

        except requests.Timeout:
            logger.error(
                "Downstream service request timed out",
                service=self.service_name,
                method=method,
                url=url,
                timeout=kwargs["timeout"],
            )
            raise

        except requests.ConnectionError as e:
            logger.error(
                "Failed to connect to downstream service",
                service=self.service_name,
                method=method,
                url=url,
                error=str(e),
            )
            raise
