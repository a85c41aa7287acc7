"""Tests for route pattern compilation and matching."""

import pytest

from hotelaccess.core.rbac.routes import (
    RoutePattern,
    compile_patterns,
    first_match,
    normalize_path,
)


class TestNormalizePath:

    @pytest.mark.parametrize("raw,expected", [
        ("/dashboard/", "/dashboard"),
        ("/dashboard", "/dashboard"),
        ("dashboard/rooms", "/dashboard/rooms"),
        ("/dashboard//rooms///12", "/dashboard/rooms/12"),
        ("/dashboard/rooms?status=free", "/dashboard/rooms"),
        ("/dashboard/rooms#list", "/dashboard/rooms"),
        ("/dashboard/rooms/?a=1#b", "/dashboard/rooms"),
        ("/", "/"),
        ("", "/"),
        ("/dashboard/profile/../users", "/dashboard/users"),
        ("/dashboard/./rooms/.", "/dashboard/rooms"),
        ("/dashboard/rooms/../edit", "/dashboard/edit"),
        ("/../../dashboard", "/dashboard"),
        ("/dashboard/..", "/"),
        ("/dashboard/profile/x\\..\\..\\users", "/dashboard/users"),
        ("/dashboard/profile/%2e%2E/users", "/dashboard/users"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_path(raw) == expected


class TestRoutePattern:

    def test_literal(self):
        pattern = RoutePattern.compile("/dashboard/rooms")
        assert not pattern.prefix
        assert not pattern.is_parameterized
        assert pattern.matches("/dashboard/rooms")
        assert pattern.matches("/dashboard/rooms/")
        assert not pattern.matches("/dashboard/rooms/12")
        assert not pattern.matches("/dashboard")

    def test_literal_is_case_sensitive(self):
        assert not RoutePattern.compile("/dashboard/rooms").matches("/Dashboard/Rooms")

    def test_parameterized(self):
        pattern = RoutePattern.compile("/dashboard/rooms/:id/edit")
        assert pattern.is_parameterized
        assert pattern.segments == ("dashboard", "rooms", ":id", "edit")
        assert pattern.matches("/dashboard/rooms/64f1e2.a9/edit")
        assert not pattern.matches("/dashboard/rooms/edit")
        assert not pattern.matches("/dashboard/rooms/12/edit/extra")

    def test_prefix(self):
        pattern = RoutePattern.compile("/dashboard/settings/*")
        assert pattern.prefix
        assert pattern.segments == ("dashboard", "settings")
        assert pattern.matches("/dashboard/settings")
        assert pattern.matches("/dashboard/settings/users/roles")
        assert not pattern.matches("/dashboard/setting")
        assert not pattern.matches("/dashboard/settings-old")

    def test_prefix_with_parameter(self):
        pattern = RoutePattern.compile("/dashboard/rooms/:id/*")
        assert pattern.matches("/dashboard/rooms/7")
        assert pattern.matches("/dashboard/rooms/7/photos/2")
        assert not pattern.matches("/dashboard/rooms")

    def test_root_prefix_matches_everything(self):
        pattern = RoutePattern.compile("/*")
        assert pattern.matches("/")
        assert pattern.matches("/anything/at/all")

    def test_dot_segments_cannot_escape_prefix(self):
        pattern = RoutePattern.compile("/dashboard/profile/*")
        assert not pattern.matches("/dashboard/profile/../users")
        assert not pattern.matches("/dashboard/profile/../../admin")
        assert pattern.matches("/dashboard/profile/./security")

    def test_dot_segments_cannot_fill_parameter(self):
        pattern = RoutePattern.compile("/dashboard/rooms/:id")
        assert not pattern.matches("/dashboard/rooms/..")
        assert not pattern.matches("/dashboard/rooms/.")
        assert RoutePattern.compile("/dashboard/:section").matches("/dashboard/rooms/../edit")

    def test_unnamed_parameter_rejected(self):
        with pytest.raises(ValueError):
            RoutePattern.compile("/dashboard/rooms/:")

    def test_str_is_authored_pattern(self):
        assert str(RoutePattern.compile("/dashboard/")) == "/dashboard/"


class TestFirstMatch:

    def test_order_is_preserved(self):
        patterns = compile_patterns(["/a/:id", "/a/new", "/b/*"])
        assert [str(p) for p in patterns] == ["/a/:id", "/a/new", "/b/*"]
        # The general pattern was authored first, so it wins
        assert str(first_match(patterns, "/a/new")) == "/a/:id"

    def test_no_match(self):
        patterns = compile_patterns(["/a", "/b/*"])
        assert first_match(patterns, "/c") is None
        assert first_match((), "/a") is None
