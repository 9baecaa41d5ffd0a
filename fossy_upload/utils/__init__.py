"""
Utility modules for fossy-upload.

Shared REST-level exception classes and the decorator that maps `requests`
failures onto them.
"""

from fossy_upload.utils.api_error_handler import handle_transport_errors
from fossy_upload.utils.exceptions import (
    TRANSPORT_ERROR_CODE,
    ApplicationError,
    ProtocolViolation,
    RestAPIError,
    TransportError,
)

__all__ = [
    "handle_transport_errors",
    "RestAPIError",
    "TransportError",
    "ProtocolViolation",
    "ApplicationError",
    "TRANSPORT_ERROR_CODE",
]
