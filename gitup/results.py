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

"""Public API return types for gitup.

This module defines dataclasses for return values from public API functions
(check, update, validate). All dataclasses are frozen (immutable) to prevent
accidental mutation of return values.

Note:
    Only public API return types belong in this module. Domain types (like
    SemanticVersion or VersionDelta) and the orchestrator's internal
    RepositoryState stay co-located with their related logic.
"""

from __future__ import annotations

from dataclasses import dataclass

from gitup.versioning.semver import VersionDelta


@dataclass(frozen=True)
class CheckResult:
    """Result from checking a repository against its upstream.

    Attributes:
        path: Repository path that was checked.
        local_tag: Tag of the current checkout (empty if it could not be read).
        remote_tag: Latest upstream tag (empty if it could not be read).
        delta: local - remote difference, None if it could not be computed.
        action: Effective action label ("none", "manual", "automatic").
        due: True if the policy calls for an update.
        status: Final orchestrator status label (e.g., "due", "up-to-date").
    """

    path: str
    local_tag: str
    remote_tag: str
    delta: VersionDelta | None
    action: str
    due: bool
    status: str


@dataclass(frozen=True)
class UpdateResult:
    """Result from running the update flow on a repository.

    Attributes:
        path: Repository path.
        previous_tag: Tag checked out before the run.
        current_tag: Tag checked out after the run.
        action: Effective action label that drove the run.
        updated: True if the working tree was switched.
        status: "updated", "declined" or "up-to-date".
    """

    path: str
    previous_tag: str
    current_tag: str
    action: str
    updated: bool
    status: str


@dataclass(frozen=True)
class ValidationResult:
    """Result from validating a configuration file.

    Attributes:
        status: Validation status ("valid" or "invalid").
        errors: List of error messages (empty if valid).
        warnings: List of warning messages.
        policy: Stored action per change class when the policy is valid.
        config_path: String path to the validated file.
    """

    status: str
    errors: list[str]
    warnings: list[str]
    policy: dict[str, str]
    config_path: str
