"""
REST client for the analysis service

Every call goes through `execute`, which sends one request, checks that the
reply is JSON and classifies the envelope code. The parsed document is
returned directly to the caller; nothing is kept between calls.
"""

import json
import logging
from typing import Any, Dict, Optional, Union

import requests

from fossy_upload.utils.api_error_handler import handle_transport_errors
from fossy_upload.utils.exceptions import ApplicationError, ProtocolViolation

from .models import ApiSession

SERVICE_NAME = "Fossology"


def extract_code(document: Any) -> Any:
    """Envelope code, 0 when absent, null or when the reply is not an object"""
    if isinstance(document, dict):
        code = document.get("code")
        return 0 if code is None else code
    return 0


def is_success_code(code: Any) -> bool:
    """A code is a success when its decimal form starts with 0 or 2"""
    return str(code).startswith(("0", "2"))


def encode_header_value(value: Any) -> Union[str, bytes]:
    """Header values that are not ASCII are sent as raw UTF-8 bytes"""
    text = str(value)
    return text if text.isascii() else text.encode("utf-8")


def parse_document(body: str, endpoint: Optional[str] = None) -> Any:
    """Parse a reply body, raising ProtocolViolation if it is not JSON"""
    lines = body.splitlines()
    if not lines or not lines[0].strip():
        raise ProtocolViolation("Reply is empty", endpoint=endpoint)

    try:
        first = json.loads(lines[0])
    except ValueError as e:
        raise ProtocolViolation("Reply is not JSON", endpoint=endpoint, original_exception=e)

    if len(lines) == 1:
        return first
    try:
        return json.loads(body)
    except ValueError:
        return first


class FossologyRestClient:
    """Handles all HTTP interactions with the service"""

    def __init__(
        self,
        api_session: ApiSession,
        timeout: int = 300,
        verify_ssl: bool = True,
        dump_replies: bool = False,
    ):
        self.api_session = api_session
        self.timeout = timeout
        self.dump_replies = dump_replies
        self.logger = logging.getLogger(self.__class__.__name__)

        self.session = requests.Session()
        self.session.verify = verify_ssl

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.session.close()

    def authorize(self, token: str) -> None:
        """Attach a bearer token to every following request"""
        self.api_session = self.api_session.with_token(token)

    def build_url(self, path: str) -> str:
        return f"{self.api_session.base_url.rstrip('/')}/{path}"

    def execute(self, verb: str, path: str, headers: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        """
        Send one request and return the parsed reply document.

        Extra keyword arguments (`json`, `files`, ...) are passed to
        `requests`. Raises TransportError, ProtocolViolation or
        ApplicationError.
        """
        request_headers = dict(self.api_session.get_headers())
        for name, value in (headers or {}).items():
            request_headers[name] = encode_header_value(value)

        url = self.build_url(path)
        self.logger.debug("%s %s headers=%s", verb, url, self._mask_headers(request_headers))

        response = self._send(verb, path, url=url, headers=request_headers, **kwargs)
        self.logger.debug("HTTP status %s for %s %s", response.status_code, verb, path)

        document = parse_document(response.text, endpoint=path)
        if self.dump_replies:
            self.logger.debug("=== JSON OUTPUT ===\n%s", json.dumps(document, indent=2))

        code = extract_code(document)
        if not is_success_code(code):
            message = document.get("message") if isinstance(document, dict) else None
            self.logger.error("ERROR: Code: %s Message: %s", code, message)
            raise ApplicationError(code, message, endpoint=path)

        return document

    def get(self, path: str, headers: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return self.execute("GET", path, headers, **kwargs)

    def post(self, path: str, headers: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return self.execute("POST", path, headers, **kwargs)

    @handle_transport_errors(service=SERVICE_NAME)
    def _send(self, verb: str, path: str, url: str, **kwargs) -> requests.Response:
        return self.session.request(verb, url, timeout=self.timeout, **kwargs)

    @staticmethod
    def _mask_headers(headers: Dict[str, str]) -> Dict[str, str]:
        masked = dict(headers)
        if "Authorization" in masked:
            masked["Authorization"] = masked["Authorization"][:16] + "..."
        return masked
