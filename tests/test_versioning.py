"""
Tests for gitup.versioning module.

Tests semantic version parsing and comparison including:
- Parsing of major/minor/patch, pre-release and build identifiers
- Rejection of malformed tags
- Component-wise deltas and the textual order signal
"""

from __future__ import annotations

import pytest

from gitup.exceptions import InvalidVersionError
from gitup.versioning import SemanticVersion, VersionDelta, compare, parse


class TestParse:
    """Tests for the tag parser."""

    def test_parse_plain_version(self):
        """Test parsing a tag without suffixes."""
        v = parse("v1.2.3")
        assert (v.major, v.minor, v.patch) == (1, 2, 3)
        assert v.pre_release == ""
        assert v.build == ""

    def test_parse_pre_release_and_build(self):
        """Test parsing pre-release and build metadata together."""
        v = parse("v1.0.0-alpha.1+build.5")
        assert v == SemanticVersion(1, 0, 0, "alpha.1", "build.5")

    def test_parse_build_only(self):
        """Test that a dash after '+' belongs to the build identifier."""
        v = parse("v2.4.6+exp-sha.5114f85")
        assert v.patch == 6
        assert v.pre_release == ""
        assert v.build == "exp-sha.5114f85"

    def test_parse_pre_release_with_dots_and_dashes(self):
        """Test that the pre-release runs up to the '+' marker."""
        v = parse("v0.9.12-rc.1-hotfix+20240101")
        assert v.pre_release == "rc.1-hotfix"
        assert v.build == "20240101"

    def test_parse_strips_whitespace(self):
        """Test that surrounding whitespace is ignored."""
        assert parse("  v3.2.1\n") == SemanticVersion(3, 2, 1)

    def test_parse_bounds(self):
        """Test the smallest and largest accepted components."""
        assert parse("v0.0.0") == SemanticVersion(0, 0, 0)
        assert parse("v255.255.255") == SemanticVersion(255, 255, 255)

    def test_parse_leading_zeros_accepted(self):
        """Test that decimal numerals with leading zeros are accepted."""
        assert parse("v01.002.0003") == SemanticVersion(1, 2, 3)

    @pytest.mark.parametrize(
        "tag",
        [
            "",
            "   ",
            "1.2.3",
            "V1.2.3",
            "v1.2",
            "v1",
            "va.2.3",
            "v1.b.3",
            "v1.2.c",
            "v256.0.0",
            "v0.256.0",
            "v0.0.256",
            "v-1.0.0",
            "v+1.0.0",
            "v1.2.3-",
            "v1.2.3+",
            "v1.2.3-+build",
            "v1.2.-rc",
            "v1..3",
            "v 1.2.3",
        ],
    )
    def test_parse_rejects_malformed(self, tag):
        """Test that malformed tags raise InvalidVersionError."""
        with pytest.raises(InvalidVersionError):
            parse(tag)

    def test_invalid_version_is_value_error(self):
        """Test that InvalidVersionError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse("latest")

    def test_str_renders_canonical_tag(self):
        """Test rendering a parsed version back to tag text."""
        assert str(parse("v1.2.3-beta+exp")) == "v1.2.3-beta+exp"
        assert str(parse(" v1.2.3 ")) == "v1.2.3"

    def test_version_is_immutable(self):
        """Test that SemanticVersion is frozen."""
        v = parse("v1.2.3")
        with pytest.raises(AttributeError):
            v.major = 2  # type: ignore


class TestCompare:
    """Tests for the version comparator."""

    def test_compare_same_tag(self):
        """Test that comparing a tag with itself yields an all-zero delta."""
        for tag in ["v0.0.0", "v1.2.3-rc.1", "v4.5.6-beta+build.9"]:
            delta = compare(tag, tag)
            assert delta == VersionDelta()
            assert delta.is_zero

    def test_compare_major_behind_and_ahead(self):
        """Test major deltas and the order signal in both directions."""
        behind = compare("v1.0.0", "v2.0.0")
        assert behind.major == -1
        assert behind.order == -1

        ahead = compare("v2.0.0", "v1.0.0")
        assert ahead.major == 1
        assert ahead.order == 1

    def test_compare_pre_release_difference(self):
        """Test that differing pre-releases produce the sentinel string."""
        delta = compare("v1.0.0-alpha", "v1.0.0-beta")
        assert (delta.major, delta.minor, delta.patch) == (0, 0, 0)
        assert delta.pre_release == "alpha<>beta"
        assert delta.build == ""
        assert delta.order == -1

    def test_compare_pre_release_against_release(self):
        """Test the sentinel when one side has no pre-release."""
        delta = compare("v1.0.0", "v1.0.0-rc.1")
        assert delta.pre_release == "<>rc.1"

    def test_compare_build_difference_ignored_by_order(self):
        """Test that build metadata differs but does not affect order."""
        delta = compare("v1.0.0+b2", "v1.0.0+b1")
        assert delta.build == "b2<>b1"
        assert delta.order == 0
        assert not delta.is_zero

    def test_compare_multiple_components(self):
        """Test signed differences across several components."""
        delta = compare("v1.5.0", "v2.3.7")
        assert (delta.major, delta.minor, delta.patch) == (-1, 2, -7)

    def test_compare_is_unclamped(self):
        """Test that differences are not clamped or wrapped."""
        delta = compare("v0.0.0", "v255.0.0")
        assert delta.major == -255

    def test_compare_order_is_lexicographic(self):
        """Test that order uses plain string ordering of the tags."""
        delta = compare("v9.0.0", "v10.0.0")
        assert delta.major == -1
        assert delta.order == 1

    def test_compare_propagates_parse_errors(self):
        """Test that an invalid tag on either side raises."""
        with pytest.raises(InvalidVersionError):
            compare("v1.0.0", "release-2")
        with pytest.raises(InvalidVersionError):
            compare("1.0.0", "v1.0.0")
