"""Errors raised by the Pootle client."""

from __future__ import annotations

from typing import Dict, Optional, Type


class PootleClientError(Exception):
    """Base error of the Pootle client."""


class ConfigError(PootleClientError):
    """Configuration file missing or invalid."""


class TransportError(PootleClientError):
    """The request never produced a decodable response."""


class HTTPError(PootleClientError):
    def __init__(self, status_code: int, method: str, endpoint: str, body: str = "") -> None:
        self.status_code = status_code
        self.method = method
        self.endpoint = endpoint
        self.body = body
        super().__init__(f"{method} {endpoint} -> {status_code} {body[:200]}".rstrip())


class Unauthorized(HTTPError):
    pass


class Forbidden(HTTPError):
    pass


class NotFound(HTTPError):
    pass


class MethodNotAllowed(HTTPError):
    """Endpoint exists but the server has it disabled, e.g. listing all translation projects."""


STATUS_ERRORS: Dict[int, Type[HTTPError]] = {
    401: Unauthorized,
    403: Forbidden,
    404: NotFound,
    405: MethodNotAllowed,
}


def error_for_status(status_code: int, method: str, endpoint: str, body: str = "") -> Optional[HTTPError]:
    if status_code < 400:
        return None
    cls = STATUS_ERRORS.get(status_code, HTTPError)
    return cls(status_code, method, endpoint, body)
