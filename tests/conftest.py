"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from hotelaccess.core.rbac import reset_policy
from hotelaccess.core.security import create_access_token


@pytest.fixture(autouse=True)
def default_policy():
    """Every test starts and ends with the built-in policy active."""
    reset_policy()
    yield
    reset_policy()


@pytest.fixture
def client():
    """Test client for the access API."""
    from hotelaccess.api.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    """Factory for bearer headers carrying a given role."""

    def _headers(role: str, user_id: str = "user-1") -> dict:
        token = create_access_token(user_id, role)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def sample_policy_dict():
    """Minimal policy mapping that satisfies every invariant."""
    def role_section(extra_routes=(), extra_menu=()):
        return {
            "permissions": ["dashboard.view"],
            "routes": ["/dashboard", *extra_routes],
            "menu": [
                {"title": "Dashboard", "href": "/dashboard/", "icon": "bar-chart"},
                *extra_menu,
            ],
        }

    return {
        "roles": {
            "admin": role_section(
                extra_routes=["/dashboard/users", "/dashboard/users/:id"],
                extra_menu=[{"title": "Users", "href": "/dashboard/users", "icon": "users"}],
            ),
            "manager": role_section(),
            "receptionist": role_section(),
            "housekeeping": role_section(),
            "maintenance": role_section(),
            "guest": role_section(
                extra_routes=["/dashboard/my-reservation"],
                extra_menu=[
                    {"title": "My Reservation", "href": "/dashboard/my-reservation", "icon": "box"}
                ],
            ),
        }
    }
