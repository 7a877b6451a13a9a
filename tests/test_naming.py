"""Unit tests for module identifier derivation (featuregen.naming)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from featuregen.naming import derive_identifier, strip_suffix, to_path_segment

pytestmark = pytest.mark.unit


class TestDeriveIdentifier:
    def test_home_screen(self):
        ident = derive_identifier("HomeScreen")
        assert ident.display_token == "HomeScreen"
        assert ident.directory_token == "home"
        assert ident.path_segment_token == "home"

    def test_user_profile_screen(self):
        ident = derive_identifier("UserProfileScreen")
        assert ident.directory_token == "userprofile"
        assert ident.path_segment_token == "user_profile"

    def test_deterministic(self):
        assert derive_identifier("OrderHistoryScreen") == derive_identifier("OrderHistoryScreen")

    def test_without_suffix(self):
        ident = derive_identifier("Settings")
        assert ident.directory_token == "settings"
        assert ident.class_name == "Settings"

    def test_suffix_only_stripped_when_trailing(self):
        ident = derive_identifier("ScreenTime")
        assert ident.directory_token == "screentime"
        assert ident.path_segment_token == "screen_time"

    def test_suffix_match_is_case_sensitive(self):
        ident = derive_identifier("Homescreen")
        assert ident.directory_token == "homescreen"

    def test_custom_suffix(self):
        ident = derive_identifier("CartPage", suffix="Page")
        assert ident.directory_token == "cart"
        assert ident.class_name == "Cart"

    def test_empty_token_rejected(self):
        with pytest.raises(ValueError):
            derive_identifier("")

    def test_malformed_token_propagates(self):
        ident = derive_identifier("my-thing")
        assert ident.directory_token == "my-thing"
        assert ident.path_segment_token == "my-thing"

    def test_identifier_is_frozen(self):
        ident = derive_identifier("HomeScreen")
        with pytest.raises(ValidationError):
            ident.directory_token = "other"


class TestDerivedNames:
    def test_class_name(self, user_profile):
        assert user_profile.class_name == "UserProfile"

    def test_route_path(self, user_profile):
        assert user_profile.route_path == "/userprofile"

    def test_constant_name(self, user_profile):
        assert user_profile.constant_name == "USER_PROFILE"


class TestHelpers:
    @pytest.mark.parametrize(
        "token, expected",
        [
            ("Home", "home"),
            ("UserProfile", "user_profile"),
            ("home", "home"),
            ("ABC", "a_b_c"),
        ],
    )
    def test_to_path_segment(self, token, expected):
        assert to_path_segment(token) == expected

    def test_strip_suffix_present(self):
        assert strip_suffix("HomeScreen", "Screen") == "Home"

    def test_strip_suffix_absent(self):
        assert strip_suffix("Home", "Screen") == "Home"

    def test_strip_empty_suffix(self):
        assert strip_suffix("Home", "") == "Home"
