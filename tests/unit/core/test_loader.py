"""Tests for loading access policies from YAML."""

import copy
from pathlib import Path

import pytest
import yaml

from hotelaccess.core.rbac import (
    PolicyError,
    Role,
    can_access_route,
    get_navigation_for_role,
    has_permission,
    install_policy,
)
from hotelaccess.core.rbac.loader import load_policy_file, parse_policy

EXAMPLE_POLICY = Path(__file__).parents[3] / "config" / "access_policy.example.yaml"


def write_policy(tmp_path, data, name="policy.yaml"):
    path = tmp_path / name
    path.write_text(yaml.safe_dump(data))
    return path


class TestParsePolicy:

    def test_parse_valid_policy(self, sample_policy_dict):
        policy = parse_policy(sample_policy_dict, source="unit")
        assert policy.source == "unit"
        assert set(policy.rulesets) == set(Role)

        admin = policy.rulesets[Role.ADMIN]
        assert [item.title for item in admin.menu] == ["Dashboard", "Users"]
        assert [str(p) for p in admin.route_patterns] == [
            "/dashboard", "/dashboard/users", "/dashboard/users/:id",
        ]
        assert admin.permissions == frozenset(["dashboard.view"])

    def test_missing_roles_section(self):
        with pytest.raises(PolicyError) as exc_info:
            parse_policy({"rules": {}})
        assert "roles" in exc_info.value.problems[0]

    def test_unknown_role(self, sample_policy_dict):
        sample_policy_dict["roles"]["superadmin"] = sample_policy_dict["roles"]["admin"]
        with pytest.raises(PolicyError) as exc_info:
            parse_policy(sample_policy_dict)
        assert exc_info.value.problems == ["unknown role: superadmin"]

    def test_missing_role(self, sample_policy_dict):
        del sample_policy_dict["roles"]["housekeeping"]
        with pytest.raises(PolicyError) as exc_info:
            parse_policy(sample_policy_dict)
        assert exc_info.value.problems == ["housekeeping: no ruleset defined"]

    def test_menu_href_outside_routes(self, sample_policy_dict):
        sample_policy_dict["roles"]["guest"]["menu"].append(
            {"title": "Users", "href": "/dashboard/users"}
        )
        with pytest.raises(PolicyError) as exc_info:
            parse_policy(sample_policy_dict)
        assert "guest" in str(exc_info.value)
        assert "/dashboard/users" in str(exc_info.value)

    def test_nested_submenu_rejected(self, sample_policy_dict):
        sample_policy_dict["roles"]["manager"]["menu"].append({
            "title": "Rooms",
            "href": "/dashboard",
            "submenu": [{
                "title": "Floors",
                "href": "/dashboard",
                "submenu": [{"title": "Floor 1", "href": "/dashboard"}],
            }],
        })
        with pytest.raises(PolicyError) as exc_info:
            parse_policy(sample_policy_dict)
        assert exc_info.value.problems[0].startswith("manager:")

    def test_menu_item_without_href(self, sample_policy_dict):
        sample_policy_dict["roles"]["receptionist"]["menu"].append({"title": "Broken"})
        with pytest.raises(PolicyError):
            parse_policy(sample_policy_dict)

    def test_routes_must_be_a_list(self, sample_policy_dict):
        sample_policy_dict["roles"]["maintenance"]["routes"] = "/dashboard"
        with pytest.raises(PolicyError) as exc_info:
            parse_policy(sample_policy_dict)
        assert exc_info.value.problems == ["maintenance: 'routes' must be a list"]

    def test_empty_sections_are_allowed(self, sample_policy_dict):
        sample_policy_dict["roles"]["maintenance"] = {}
        policy = parse_policy(sample_policy_dict)
        ruleset = policy.rulesets[Role.MAINTENANCE]
        assert ruleset.permissions == frozenset()
        assert ruleset.menu == ()


class TestLoadPolicyFile:

    def test_load_and_install(self, tmp_path, sample_policy_dict):
        path = write_policy(tmp_path, sample_policy_dict)
        policy = load_policy_file(path)
        assert policy.source == str(path)

        install_policy(policy)
        assert can_access_route("admin", "/dashboard/users/42")
        assert not can_access_route("admin", "/dashboard/rooms")
        assert has_permission("guest", "dashboard.view")
        assert not has_permission("guest", "feedback.create")
        assert [item.title for item in get_navigation_for_role("nobody")] == [
            "Dashboard", "My Reservation",
        ]

    def test_env_vars_are_expanded(self, tmp_path, sample_policy_dict, monkeypatch):
        monkeypatch.setenv("HOTEL_REPORTS_ROUTE", "/dashboard/reports")
        data = copy.deepcopy(sample_policy_dict)
        data["roles"]["manager"]["routes"].append("${HOTEL_REPORTS_ROUTE}")
        policy = load_policy_file(write_policy(tmp_path, data))
        routes = [str(p) for p in policy.rulesets[Role.MANAGER].route_patterns]
        assert "/dashboard/reports" in routes

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_policy_file(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("roles: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_policy_file(path)

    def test_example_policy_is_valid(self):
        policy = load_policy_file(EXAMPLE_POLICY)
        assert set(policy.rulesets) == set(Role)
        install_policy(policy)
        assert can_access_route("admin", "/dashboard/rooms/12/edit")
        assert can_access_route("guest", "/dashboard/my-reservation")
