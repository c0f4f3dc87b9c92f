"""Tests for the origin allow-list."""

import pytest

from app.core.cors import OriginAllowList, WildcardOrigin


class TestFromEntries:
    """Tests for OriginAllowList.from_entries."""

    def test_splits_exact_and_wildcards(self):
        allow_list = OriginAllowList.from_entries(
            ["http://localhost:5500", "https://*.github.io", " ", "*.example.org"]
        )

        assert allow_list.exact == frozenset({"http://localhost:5500"})
        assert allow_list.wildcards == (
            WildcardOrigin(suffix=".github.io", scheme="https"),
            WildcardOrigin(suffix=".example.org"),
        )
        assert allow_list.allow_all is False
        assert len(allow_list) == 3

    def test_star_allows_everything(self):
        allow_list = OriginAllowList.from_entries(["*"])

        assert allow_list.matches("https://anything.test") is True

    def test_wildcard_with_port(self):
        allow_list = OriginAllowList.from_entries(["http://*.local.dev:8080"])

        assert allow_list.wildcards[0].port == 8080
        assert allow_list.matches("http://app.local.dev:8080") is True
        assert allow_list.matches("http://app.local.dev") is False

    @pytest.mark.parametrize("entry", ["https://*", "https://foo.*.io", "https://*.io:abc"])
    def test_rejects_malformed_wildcards(self, entry):
        """Should raise for wildcard shapes other than a leading *. label."""
        with pytest.raises(ValueError):
            OriginAllowList.from_entries([entry])


class TestMatches:
    """Tests for OriginAllowList.matches."""

    @pytest.fixture
    def allow_list(self):
        return OriginAllowList.from_entries(
            [
                "https://dhinesh.github.io",
                "https://*.github.io",
                "http://localhost:5500",
                "*.example.org",
            ]
        )

    def test_exact_match(self, allow_list):
        assert allow_list.matches("http://localhost:5500") is True

    def test_exact_match_is_case_and_slash_insensitive(self, allow_list):
        assert allow_list.matches("HTTP://LOCALHOST:5500/") is True

    def test_exact_requires_same_port(self, allow_list):
        assert allow_list.matches("http://localhost:3000") is False

    def test_suffix_wildcard_matches_subdomain(self, allow_list):
        assert allow_list.matches("https://someone.github.io") is True
        assert allow_list.matches("https://deep.sub.github.io") is True

    def test_suffix_wildcard_requires_subdomain(self, allow_list):
        """The bare apex is not covered by *.github.io."""
        assert allow_list.matches("https://github.io") is False

    def test_suffix_wildcard_is_not_a_substring_match(self, allow_list):
        assert allow_list.matches("https://evilgithub.io") is False
        assert allow_list.matches("https://github.io.evil.com") is False

    def test_suffix_wildcard_checks_scheme(self, allow_list):
        assert allow_list.matches("http://someone.github.io") is False

    def test_schemeless_wildcard_allows_any_scheme(self, allow_list):
        assert allow_list.matches("http://www.example.org") is True
        assert allow_list.matches("https://www.example.org") is True

    def test_default_port_is_accepted(self, allow_list):
        assert allow_list.matches("https://someone.github.io:443") is True
        assert allow_list.matches("https://someone.github.io:8443") is False

    @pytest.mark.parametrize("origin", [None, "", "null", "not a url", "https://x.github.io/path"])
    def test_garbage_origins_rejected(self, allow_list, origin):
        assert allow_list.matches(origin) is False
