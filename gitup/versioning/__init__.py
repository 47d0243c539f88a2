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

"""Version parsing and comparison for gitup.

This module parses git tags written as semantic versions and computes the
structured difference between two of them. Only the ``v<M>.<N>.<P>`` form
with optional ``-<pre-release>`` and ``+<build>`` suffixes is supported.

Public API:

- parse: Parse a tag into a SemanticVersion
- compare: Compute the VersionDelta between two tags
- SemanticVersion: Parsed version (frozen dataclass)
- VersionDelta: Component-wise difference (frozen dataclass)

Example:
    Basic usage:

        from gitup.versioning import compare, parse

        version = parse("v1.4.2-rc.1+build.7")
        print(version.minor)        # 4
        print(version.pre_release)  # "rc.1"

        delta = compare("v1.4.2", "v2.0.0")
        print(delta.major)          # -1

"""

from .semver import SemanticVersion, VersionDelta, compare, parse

__all__ = [
    "SemanticVersion",
    "VersionDelta",
    "compare",
    "parse",
]
