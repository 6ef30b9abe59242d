#!/usr/bin/env python3
"""
Pootle API Agent — authenticated HTTP transport

Implements:
- request(method, endpoint, params) -> decoded JSON body
- HTTP basic auth from "username:password" or a credentials file
- Status >= 400 raises HTTPError subclasses (NotFound, MethodNotAllowed, ...)
- get_stats() -> {total_requests, total_errors, error_rate_percent}
"""

import logging
import os
import requests
from typing import Optional, Dict, Any, Tuple

from .exceptions import PootleClientError, TransportError, error_for_status

logger = logging.getLogger(__name__)


def parse_credentials(credentials: str) -> Tuple[str, str]:
    """
    Split "username:password", or read that line from a credentials file.

    Raises:
        PootleClientError if no usable pair is found.
    """
    if not credentials:
        raise PootleClientError("No Pootle credentials configured")

    if os.path.isfile(credentials):
        with open(credentials, "r", encoding="utf-8") as f:
            credentials = f.readline().strip()
    elif ":" not in credentials:
        raise PootleClientError(f"Credentials file not found: {credentials} (cwd={os.getcwd()})")

    username, sep, password = credentials.partition(":")
    if not sep or not username:
        raise PootleClientError("Credentials must look like 'username:password'")
    return username, password


class Agent:
    """
    Pootle API v1 transport.

    Design:
    - One GET/POST per call, no retries
    - Errors are raised, the caller decides what to do
    - Every request and failure counted for get_stats()
    """

    DEFAULT_TIMEOUT = 30

    def __init__(self, base_url: str, credentials: str = None, timeout: int = None,
                 log: logging.Logger = None):
        self.base_url = (base_url or "").rstrip("/")
        self.timeout = timeout or self.DEFAULT_TIMEOUT
        self.log = log or logger
        self.auth = parse_credentials(credentials) if credentials else None

        if not self.auth:
            self.log.warning("No Pootle credentials configured, requests are anonymous")

        self._request_count = 0
        self._error_count = 0

        self.log.info(
            f"Agent initialized (base_url={self.base_url or 'missing'}, "
            f"auth={'configured' if self.auth else 'missing'})"
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def request(self, method: str, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Make an authenticated request and decode the JSON body.

        Args:
            method: HTTP verb, case insensitive
            endpoint: API path, e.g. /api/v1/languages/124/
            params: Query parameters for GET, JSON body otherwise
        """
        method = method.upper()
        url = f"{self.base_url}{endpoint}"
        self._request_count += 1

        kwargs: Dict[str, Any] = {}
        if params:
            if method == "GET":
                kwargs["params"] = params
            else:
                kwargs["json"] = params

        try:
            resp = requests.request(
                method, url,
                headers=self._headers(),
                auth=self.auth,
                timeout=self.timeout,
                **kwargs,
            )
        except requests.Timeout as e:
            self._error_count += 1
            self.log.error(f"Pootle API timeout: {method} {endpoint} (>{self.timeout}s)")
            raise TransportError(f"Timeout: {method} {endpoint}") from e
        except requests.RequestException as e:
            self._error_count += 1
            self.log.error(f"Pootle API connection error: {method} {endpoint}: {e}")
            raise TransportError(f"Connection failed: {method} {endpoint}") from e

        error = error_for_status(resp.status_code, method, endpoint, resp.text or "")
        if error is not None:
            self._error_count += 1
            self.log.warning(
                f"Pootle API error: {method} {endpoint} -> "
                f"{resp.status_code} {(resp.text or '')[:300]}"
            )
            raise error

        try:
            return resp.json()
        except ValueError as e:
            self._error_count += 1
            raise TransportError(f"Undecodable body: {method} {endpoint}") from e

    def get_stats(self) -> Dict[str, Any]:
        """Get client-side stats."""
        return {
            "auth_configured": bool(self.auth),
            "total_requests": self._request_count,
            "total_errors": self._error_count,
            "error_rate_percent": (
                round(self._error_count / self._request_count * 100, 1)
                if self._request_count > 0 else 0
            ),
        }
