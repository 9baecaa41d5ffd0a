"""
Decorator mapping `requests` failures onto TransportError.

The REST client has a single call site that talks to the network. Wrapping it
keeps transport failures apart from application errors reported inside a
JSON envelope.
"""

import functools
import logging
from typing import Callable

import requests

from .exceptions import TransportError


def handle_transport_errors(service: str):
    """
    Decorator that converts any `requests` exception into a TransportError.

    The wrapped method must take the REST path as its second positional
    argument (after the verb); it is used as the endpoint in the error.
    The error is logged and always re-raised: nothing is retried and nothing
    is suppressed.

    Usage:
        @handle_transport_errors(service="Fossology")
        def _send(self, verb, path, **kwargs):
            return self.session.request(verb, url, **kwargs)
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            logger = getattr(self, "logger", logging.getLogger(func.__name__))
            endpoint = args[1] if len(args) > 1 else kwargs.get("path")

            try:
                return func(self, *args, **kwargs)

            except requests.exceptions.Timeout as e:
                error = TransportError(
                    message=f"Timeout while calling {service}",
                    endpoint=endpoint,
                    original_exception=e,
                )
                logger.error(str(error))
                raise error from e

            except requests.exceptions.ConnectionError as e:
                error = TransportError(
                    message=f"Connection failed for {service}",
                    endpoint=endpoint,
                    original_exception=e,
                )
                logger.error(str(error))
                raise error from e

            except requests.exceptions.RequestException as e:
                error = TransportError(
                    message=f"Request failed for {service}",
                    endpoint=endpoint,
                    original_exception=e,
                )
                logger.error(str(error))
                raise error from e

        return wrapper

    return decorator


__all__ = ["handle_transport_errors"]
