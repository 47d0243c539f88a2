# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Semantic version parsing and comparison for gitup.

This module is git-agnostic: it does NOT run commands or read files.
It only parses tag strings of the form::

    v<major>.<minor>.<patch>[-<pre-release>][+<build>]

and derives a component-by-component difference between two of them.

Example:
    Compare a local tag against the upstream one:

        from gitup.versioning import compare

        delta = compare("v1.0.0", "v1.1.0")
        delta.minor   # -1 (local is one minor version behind)
        delta.order   # -1
"""

from __future__ import annotations

from dataclasses import dataclass
import re

from gitup.exceptions import InvalidVersionError

# Largest value a major/minor/patch component may hold.
MAX_COMPONENT = 255

# Separator used when two pre-release or build identifiers differ.
DIFF_SEPARATOR = "<>"

_NUMERAL = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class SemanticVersion:
    """A parsed semantic version.

    Attributes:
        major: Major number (0-255).
        minor: Minor number (0-255).
        patch: Patch number (0-255).
        pre_release: Pre-release identifier, empty when absent.
        build: Build metadata, empty when absent.

    """

    major: int
    minor: int
    patch: int
    pre_release: str = ""
    build: str = ""

    def __str__(self) -> str:
        text = f"v{self.major}.{self.minor}.{self.patch}"
        if self.pre_release:
            text += f"-{self.pre_release}"
        if self.build:
            text += f"+{self.build}"
        return text


@dataclass(frozen=True)
class VersionDelta:
    """Difference between two versions, computed as ``left - right``.

    Attributes:
        major: Signed major difference.
        minor: Signed minor difference.
        patch: Signed patch difference.
        pre_release: Empty when the pre-release identifiers are equal,
            otherwise ``"<left><><right>"``.
        build: Same as pre_release, for build metadata.
        order: -1, 0 or 1 from a plain string comparison of the two tags
            with build metadata stripped. This is a textual shortcut
            ("v9.0.0" sorts after "v10.0.0"), not semver precedence.

    """

    major: int = 0
    minor: int = 0
    patch: int = 0
    pre_release: str = ""
    build: str = ""
    order: int = 0

    @property
    def is_zero(self) -> bool:
        """True when no component, pre-release or build differs."""
        return (
            self.major == 0
            and self.minor == 0
            and self.patch == 0
            and not self.pre_release
            and not self.build
        )


def _to_component(text: str, tag: str) -> int:
    """Parse one numeric component, rejecting signs, blanks and overflow."""
    if not _NUMERAL.fullmatch(text):
        raise InvalidVersionError(f"not a valid semantic version: {tag!r}")
    number = int(text)
    if number > MAX_COMPONENT:
        raise InvalidVersionError(f"not a valid semantic version: {tag!r}")
    return number


def _strip_build_meta(s: str) -> str:
    """Drop '+build' metadata (ignored in ordering)."""
    i = s.find("+")
    return s if i == -1 else s[:i]


def parse(tag: str) -> SemanticVersion:
    """Parse a tag into a SemanticVersion.

    Args:
        tag: Tag text such as "v1.2.3", "v1.2.3-rc.1" or "v1.2.3-rc.1+b42".
            Surrounding whitespace is ignored.

    Returns:
        The parsed version. Missing pre-release and build identifiers are
            empty strings.

    Raises:
        InvalidVersionError: If the tag is empty, lacks the leading "v", has
            fewer than three dotted parts, carries a component that is not a
            decimal number in [0, 255], or has an empty pre-release or build
            identifier after its marker.

    """
    text = tag.strip()
    if not text or not text.startswith("v"):
        raise InvalidVersionError(f"not a valid semantic version: {tag!r}")

    parts = text.split(".", 2)
    if len(parts) != 3:
        raise InvalidVersionError(f"not a valid semantic version: {tag!r}")

    major = _to_component(parts[0][1:], tag)
    minor = _to_component(parts[1], tag)

    # The last part carries the patch number, then pre-release and build.
    rest = parts[2]
    end = len(rest)
    dash = rest.find("-")
    plus = rest.find("+")

    pre_release = ""
    if dash > -1 and (plus == -1 or dash < plus):
        pre_end = plus if plus > -1 else len(rest)
        pre_release = rest[dash + 1 : pre_end]
        if not pre_release:
            raise InvalidVersionError(f"not a valid semantic version: {tag!r}")
        end = dash

    build = ""
    if plus > -1:
        end = min(end, plus)
        build = rest[plus + 1 :]
        if not build:
            raise InvalidVersionError(f"not a valid semantic version: {tag!r}")

    patch = _to_component(rest[:end], tag)
    return SemanticVersion(major, minor, patch, pre_release, build)


def compare(tag1: str, tag2: str) -> VersionDelta:
    """Compute the difference ``tag1 - tag2``.

    Args:
        tag1: Left-hand tag (typically the local one).
        tag2: Right-hand tag (typically the upstream one).

    Returns:
        A fresh VersionDelta. Negative numeric fields mean tag1 is behind.

    Raises:
        InvalidVersionError: If either tag fails to parse.

    Example:
        Pre-release difference:

            delta = compare("v1.0.0-alpha", "v1.0.0-beta")
            delta.pre_release  # "alpha<>beta"
            delta.order        # -1

    """
    v1 = parse(tag1)
    v2 = parse(tag2)

    # Build metadata is ignored when determining the overall order.
    left = _strip_build_meta(tag1)
    right = _strip_build_meta(tag2)
    order = (left > right) - (left < right)

    pre_release = ""
    if v1.pre_release != v2.pre_release:
        pre_release = v1.pre_release + DIFF_SEPARATOR + v2.pre_release

    build = ""
    if v1.build != v2.build:
        build = v1.build + DIFF_SEPARATOR + v2.build

    return VersionDelta(
        major=v1.major - v2.major,
        minor=v1.minor - v2.minor,
        patch=v1.patch - v2.patch,
        pre_release=pre_release,
        build=build,
        order=order,
    )
