"""
Exception hierarchy for REST calls against the analysis service.

Every reply from the service is a JSON envelope. These classes separate the
three ways a call can fail:
- the HTTP exchange itself did not complete (TransportError)
- the reply broke the service contract (ProtocolViolation)
- the envelope reported a non-success application code (ApplicationError)

Each exception keeps the endpoint and the original exception for debugging.
"""

from typing import Any, Optional

TRANSPORT_ERROR_CODE = 999


class RestAPIError(Exception):
    """
    Base exception for all REST-level failures.

    Carries the application code (when one is known), the endpoint that was
    called and an optional hint for the user.
    """

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        code: Optional[Any] = None,
        original_exception: Optional[Exception] = None,
        suggested_action: Optional[str] = None,
    ):
        self.message = message
        self.endpoint = endpoint
        self.code = code
        self.original_exception = original_exception
        self.suggested_action = suggested_action

        error_parts = [message]

        if endpoint:
            error_parts.append(f"Endpoint: {endpoint}")

        if code is not None:
            error_parts.append(f"Code: {code}")

        if suggested_action:
            error_parts.append(f"Action: {suggested_action}")

        if original_exception:
            error_parts.append(f"Original error: {str(original_exception)}")

        super().__init__(" | ".join(error_parts))


class TransportError(RestAPIError):
    """
    Raised when the HTTP request could not be completed.

    Connection refused, DNS failure, TLS errors and timeouts all end up here.
    The code is always 999 so it never collides with an application code.
    """

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            endpoint=endpoint,
            code=TRANSPORT_ERROR_CODE,
            original_exception=original_exception,
            suggested_action="Check network connectivity and the service URL",
        )


class ProtocolViolation(RestAPIError):
    """
    Raised when a reply does not honour the service contract.

    Examples: a body that is not JSON, an upload id that is not numeric or a
    job status outside the known set. Never retried.
    """

    def __init__(self, message: str, endpoint: Optional[str] = None, original_exception: Optional[Exception] = None):
        super().__init__(message=message, endpoint=endpoint, original_exception=original_exception)


class ApplicationError(RestAPIError):
    """Raised when the envelope carries a code outside the 2xx family."""

    def __init__(self, code: Any, message: Any, endpoint: Optional[str] = None):
        self.api_message = message
        super().__init__(message=f"{message}", endpoint=endpoint, code=code)
