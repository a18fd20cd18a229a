"""Tests for npm-style version range matching."""

import pytest

from fwscout.probes.semver import (
    InvalidRange,
    InvalidVersion,
    parse_range,
    parse_version,
    satisfies,
)


class TestParseVersion:
    def test_plain_release(self):
        assert str(parse_version("1.2.3")) == "1.2.3"

    def test_leading_v_and_equals(self):
        assert parse_version("v1.2.3") == parse_version("=1.2.3")

    def test_known_prerelease_sorts_before_release(self):
        assert parse_version("1.0.0-beta.2") < parse_version("1.0.0")
        assert parse_version("1.0.0-beta.2") < parse_version("1.0.0-rc.1")

    def test_any_prerelease_tag_sorts_before_release(self):
        v = parse_version("13.0.1-canary.4")
        assert v.is_prerelease
        assert v.prerelease == ("canary", "4")
        assert v < parse_version("13.0.1")

    def test_numeric_prerelease_is_not_a_post_release(self):
        assert parse_version("3.0.0-0") < parse_version("3.0.0")

    def test_build_metadata_ignored(self):
        assert parse_version("1.2.3+build.7") == parse_version("1.2.3")


class TestSatisfies:
    @pytest.mark.parametrize(
        "version,range_text,expected",
        [
            ("1.5.0", "^1.2.3", True),
            ("2.0.0", "^1.2.3", False),
            ("0.2.9", "^0.2.3", True),
            ("0.3.0", "^0.2.3", False),
            ("0.0.4", "^0.0.3", False),
            ("1.2.9", "~1.2.3", True),
            ("1.3.0", "~1.2.3", False),
            ("1.9.0", "1.x", True),
            ("2.0.0", "1.x", False),
            ("5.0.0", "*", True),
            ("5.0.0", "", True),
            ("2.5.0", ">=2 <3", True),
            ("3.0.0", ">=2 <3", False),
            ("1.2.3", "1.2.3", True),
            ("1.2.4", "1.2.3", False),
            ("2.3.0", "1.2.3 - 2.3", True),
            ("2.4.0", "1.2.3 - 2.3", False),
            ("4.0.0", "^2.0.0 || ^4.0.0", True),
            ("3.0.0", "^2.0.0 || ^4.0.0", False),
            ("2.0.0", ">1", True),
            ("1.9.9", ">1", False),
            ("1.1.9", "<1.2", True),
            ("1.2.0", "<1.2", False),
            ("1.2.9", "<=1.2", True),
        ],
    )
    def test_ranges(self, version, range_text, expected):
        assert satisfies(version, range_text) is expected

    def test_prerelease_excluded_without_matching_comparator(self):
        assert not satisfies("3.1.0-rc.1", "^3.0.0")

    def test_prerelease_allowed_on_same_release_line(self):
        assert satisfies("3.0.0-rc.1", "^3.0.0-0")
        assert satisfies("3.4.1", "^3.0.0-0")

    def test_nuxt_two_does_not_satisfy_nuxt_three_range(self):
        assert not satisfies("2.15.8", "^3.0.0-0")
        assert satisfies("2.15.8", "^2.0.0")

    def test_unparseable_version_never_satisfies(self):
        assert not satisfies("not-a-version", "*")

    def test_invalid_range_raises(self):
        with pytest.raises(InvalidRange):
            parse_range("latest")


class TestPrereleasePrecedence:
    """Identifier-by-identifier ordering, as npm compares prereleases."""

    @pytest.mark.parametrize(
        "lower,higher",
        [
            ("1.0.0-alpha", "1.0.0-alpha.1"),
            ("1.0.0-alpha.1", "1.0.0-alpha.beta"),
            ("1.0.0-alpha.beta", "1.0.0-beta"),
            ("1.0.0-beta", "1.0.0-beta.0"),
            ("1.0.0-beta.2", "1.0.0-beta.11"),
            ("1.0.0-beta.11", "1.0.0-rc.1"),
            ("1.0.0-rc.1", "1.0.0-rc.1.2"),
            ("1.0.0-rc.1.2", "1.0.0"),
            ("2.0.0-beta.1", "2.0.0-canary.5"),
            ("1.2.3-canary.10", "1.2.3-next.2"),
            ("1.0.0-0.9", "1.0.0-1"),
            ("1.0.0-999", "1.0.0-a"),
        ],
    )
    def test_ordering(self, lower, higher):
        assert parse_version(lower) < parse_version(higher)
        assert parse_version(higher) > parse_version(lower)

    def test_equal_tags_compare_equal(self):
        assert parse_version("1.0.0-rc.1") == parse_version("v1.0.0-rc.1+sha.abc")
        assert parse_version("1.0.0-beta") != parse_version("1.0.0-beta.0")

    @pytest.mark.parametrize(
        "version,range_text,expected",
        [
            ("2.0.0-canary.5", ">=2.0.0-beta.1", True),
            ("1.2.3-canary.10", ">1.2.3-next.2", False),
            ("1.0.0-alpha.beta", ">1.0.0-alpha.1", True),
            ("1.0.0-rc.1.2", ">1.0.0-rc.1", True),
            ("1.0.0-beta", "1.0.0-beta.0", False),
            ("1.0.0-1", ">1.0.0-0.9", True),
        ],
    )
    def test_ranges_with_prerelease_bounds(self, version, range_text, expected):
        assert satisfies(version, range_text) is expected

    def test_incomplete_version_rejected(self):
        with pytest.raises(InvalidVersion):
            parse_version("1.2")
