"""Tests for the access logging middleware."""

import logging
from unittest.mock import MagicMock

from hotelaccess.api.middleware.access_log import (
    determine_level,
    get_client_ip,
    get_session_role,
)

LOGGER = "hotelaccess.api.middleware.access_log"


def make_request(headers=None, host="10.0.0.5"):
    request = MagicMock()
    request.headers = headers or {}
    request.client = MagicMock(host=host) if host else None
    return request


class TestHelpers:

    def test_client_ip_from_forwarded_header(self):
        request = make_request({"x-forwarded-for": "203.0.113.9, 10.0.0.1"})
        assert get_client_ip(request) == "203.0.113.9"

    def test_client_ip_from_real_ip(self):
        assert get_client_ip(make_request({"x-real-ip": "198.51.100.4"})) == "198.51.100.4"

    def test_client_ip_fallbacks(self):
        assert get_client_ip(make_request()) == "10.0.0.5"
        assert get_client_ip(make_request(host=None)) == "unknown"

    def test_session_role(self, auth_headers):
        assert get_session_role(make_request()) == "anonymous"
        assert get_session_role(make_request({"authorization": "Basic abc"})) == "anonymous"
        assert get_session_role(make_request({"authorization": "Bearer nope"})) == "invalid-token"
        headers = {k.lower(): v for k, v in auth_headers("manager").items()}
        assert get_session_role(make_request(headers)) == "manager"
        headers = {k.lower(): v for k, v in auth_headers("owner").items()}
        assert get_session_role(make_request(headers)) == "unknown-role"

    def test_levels(self):
        assert determine_level(200) == logging.INFO
        assert determine_level(401) == logging.WARNING
        assert determine_level(403) == logging.WARNING
        assert determine_level(503) == logging.ERROR


class TestMiddleware:

    def test_request_is_logged_with_role(self, client, auth_headers, caplog):
        caplog.set_level(logging.INFO, logger=LOGGER)
        client.get("/api/access/navigation", headers=auth_headers("housekeeping"))
        messages = [r.getMessage() for r in caplog.records if r.name == LOGGER]
        assert any(
            "GET /api/access/navigation -> 200 role=housekeeping" in m for m in messages
        )

    def test_denial_logged_as_warning(self, client, auth_headers, caplog):
        caplog.set_level(logging.INFO, logger=LOGGER)
        client.get("/api/access/admin/policy/validate", headers=auth_headers("guest"))
        records = [r for r in caplog.records if r.name == LOGGER]
        assert records[-1].levelno == logging.WARNING

    def test_health_is_not_logged(self, client, caplog):
        caplog.set_level(logging.INFO, logger=LOGGER)
        client.get("/health")
        assert not [r for r in caplog.records if r.name == LOGGER]
