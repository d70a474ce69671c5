"""HTTP delivery of queued actions."""
from typing import Any
from urllib.parse import urljoin

import requests

from lighthouse.core.constants import DEFAULT_HEADERS, DEFAULT_REQUEST_TIMEOUT_MS

from .errors import TransportError


class HttpTransport:
    """Performs one delivery attempt per call with requests.

    The transport owns timeouts: a stalled request is abandoned after
    timeout_ms and reported as a failure.
    """

    def __init__(
        self,
        base_url: str = "",
        auth_token: str = "",
        timeout_ms: int = DEFAULT_REQUEST_TIMEOUT_MS,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url
        self.timeout_ms = timeout_ms
        self.default_headers = dict(DEFAULT_HEADERS)
        if auth_token:
            self.default_headers["Authorization"] = f"Bearer {auth_token}"
        self._http = session or requests

    def resolve(self, url: str) -> str:
        """Absolute URL for a queued path."""
        if self.base_url and not url.startswith(("http://", "https://")):
            return urljoin(self.base_url.rstrip("/") + "/", url.lstrip("/"))
        return url

    def deliver(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        body: Any = None,
    ) -> None:
        """Send one request.

        Raises:
            TransportError: Network failure, timeout, or non-2xx response
        """
        merged = {**self.default_headers, **(headers or {})}
        try:
            response = self._http.request(
                method,
                self.resolve(url),
                headers=merged,
                json=body,
                timeout=self.timeout_ms / 1000,
            )
        except requests.RequestException as e:
            raise TransportError(str(e) or type(e).__name__) from e

        if not 200 <= response.status_code < 300:
            raise TransportError(f"HTTP {response.status_code}: {response.reason}")
