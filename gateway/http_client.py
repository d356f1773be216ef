"""HTTP transport for the REST backend.

Wraps a ``requests.Session``: adds the bearer token, maps failures onto the
``errors.ApiError`` family and never retries.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

import requests

from config import settings
from errors import ApiError, ConnectionFailed, Unauthorized


logger = logging.getLogger(__name__)


class ApiClient:
    """Thin JSON client over the backend's REST API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Backend base URL (defaults to settings.api_url)
            token_provider: Returns the current bearer token or None
            timeout: Per-request timeout in seconds
            session: Injected requests session (tests, connection reuse)
            on_unauthorized: Called when the backend answers 401
        """
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.token_provider = token_provider
        self.timeout = timeout or settings.api_timeout_seconds
        self.session = session or requests.Session()
        self.on_unauthorized = on_unauthorized

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self, url: str) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if "/login" in url or self.token_provider is None:
            return headers
        token = self.token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(self, method: str, path: str, json: Any = None) -> Any:
        """Send a request and return the decoded JSON body (None when empty).

        Raises:
            ApiError: A subclass matching the failure (ConnectionFailed,
                Unauthorized, Forbidden, NotFound, ServerError).
        """
        url = self.url(path)
        logger.debug("%s %s", method, url)
        try:
            r = self.session.request(
                method,
                url,
                headers=self._headers(url),
                json=json,
                timeout=self.timeout,
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.error("Backend unreachable at %s: %s", url, e)
            raise ConnectionFailed.from_status(0, resource=path) from e

        if r.status_code >= 400:
            error = ApiError.from_status(r.status_code, _server_message(r), resource=path)
            logger.error("%s %s failed with %s: %s", method, url, r.status_code, error.message)
            if isinstance(error, Unauthorized) and self.on_unauthorized is not None:
                self.on_unauthorized()
            raise error

        if not r.content:
            return None
        try:
            return r.json()
        except ValueError as e:
            raise ApiError(f"Respuesta inválida del servidor en {path}", status=r.status_code) from e

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def patch(self, path: str, json: Any = None) -> Any:
        return self.request("PATCH", path, json=json)


def _server_message(response: requests.Response) -> Optional[str]:
    """The ``message`` field of an error body, if the body is JSON."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        return str(message) if message else None
    return None
