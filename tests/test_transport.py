"""Tests for HTTP delivery."""
from unittest.mock import MagicMock, patch

import pytest
import requests

from lighthouse.offline import HttpTransport, TransportError


def response(status_code=200, reason="OK"):
    resp = MagicMock()
    resp.status_code = status_code
    resp.reason = reason
    return resp


class TestHttpTransport:
    def test_success_merges_headers_and_encodes_body(self):
        transport = HttpTransport(base_url="https://study.example.com", auth_token="t0k", timeout_ms=2500)

        with patch("lighthouse.offline.transport.requests.request", return_value=response()) as request:
            transport.deliver("POST", "/api/sessions", {"X-Client": "web"}, {"minutes": 25})

        request.assert_called_once_with(
            "POST",
            "https://study.example.com/api/sessions",
            headers={
                "Content-Type": "application/json",
                "Authorization": "Bearer t0k",
                "X-Client": "web",
            },
            json={"minutes": 25},
            timeout=2.5,
        )

    def test_action_headers_override_defaults(self):
        transport = HttpTransport()

        with patch("lighthouse.offline.transport.requests.request", return_value=response()) as request:
            transport.deliver("PATCH", "https://api.example.com/x", {"Content-Type": "application/merge-patch+json"})

        assert request.call_args.kwargs["headers"]["Content-Type"] == "application/merge-patch+json"

    def test_absolute_url_untouched(self):
        transport = HttpTransport(base_url="https://study.example.com/v1")

        assert transport.resolve("https://other.example.com/a") == "https://other.example.com/a"
        assert transport.resolve("/api/goals") == "https://study.example.com/v1/api/goals"
        assert HttpTransport().resolve("/api/goals") == "/api/goals"

    def test_non_2xx_is_failure(self):
        transport = HttpTransport()

        with patch("lighthouse.offline.transport.requests.request",
                   return_value=response(503, "Service Unavailable")):
            with pytest.raises(TransportError, match="HTTP 503: Service Unavailable"):
                transport.deliver("POST", "https://api.example.com/api/sessions")

    @pytest.mark.parametrize("status_code, reason", [(304, "Not Modified"), (302, "Found"), (199, "Early")])
    def test_outside_2xx_is_failure(self, status_code, reason):
        transport = HttpTransport()

        with patch("lighthouse.offline.transport.requests.request",
                   return_value=response(status_code, reason)):
            with pytest.raises(TransportError, match=f"HTTP {status_code}: {reason}"):
                transport.deliver("PUT", "https://api.example.com/api/goals/7")

    def test_any_2xx_is_success(self):
        transport = HttpTransport()

        with patch("lighthouse.offline.transport.requests.request", return_value=response(204, "No Content")):
            assert transport.deliver("DELETE", "https://api.example.com/api/goals/7") is None

    def test_network_error_is_failure(self):
        transport = HttpTransport()

        with patch("lighthouse.offline.transport.requests.request",
                   side_effect=requests.ConnectionError("Name or service not known")):
            with pytest.raises(TransportError, match="Name or service not known"):
                transport.deliver("DELETE", "https://api.example.com/api/sessions/1")

    def test_timeout_is_failure(self):
        transport = HttpTransport()

        with patch("lighthouse.offline.transport.requests.request", side_effect=requests.Timeout()):
            with pytest.raises(TransportError, match="Timeout"):
                transport.deliver("GET", "https://api.example.com/api/stats")

    def test_custom_session(self):
        session = MagicMock()
        session.request.return_value = response()

        HttpTransport(session=session).deliver("GET", "https://api.example.com/api/stats")

        session.request.assert_called_once()
