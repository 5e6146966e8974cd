"""Custom exceptions for notification API communication."""


class DownstreamServiceError(Exception):
    """Base exception for failed notification API calls."""

    def __init__(
        self,
        message: str,
        service_name: str | None = None,
        status_code: int | None = None,
    ):
        """Initialize downstream service error.

        Args:
            message: Error message, extracted from the response where possible
            service_name: Name of the downstream service
            status_code: HTTP status code if applicable
        """
        self.service_name = service_name
        self.status_code = status_code
        super().__init__(message)


class DownstreamServiceUnavailableError(DownstreamServiceError):
    """Downstream service is unavailable (5xx responses)."""

    def __init__(self, service_name: str, status_code: int, message: str | None = None):
        """Initialize service unavailable error.

        Args:
            service_name: Name of the downstream service
            status_code: HTTP status code (500, 503, etc.)
            message: Optional message taken from the response body
        """
        default_message = (
            f"{service_name} service is unavailable (status: {status_code})"
        )
        super().__init__(
            message=message or default_message,
            service_name=service_name,
            status_code=status_code,
        )


class MissingCredentialsError(DownstreamServiceError):
    """No bearer token is available for an authenticated request."""

    def __init__(self, service_name: str):
        super().__init__(
            message=f"No session token available for {service_name}",
            service_name=service_name,
            status_code=None,
        )
