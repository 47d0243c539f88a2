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

"""Exception hierarchy for gitup.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors:

- InvalidVersionError: Tag text is not a `v<major>.<minor>.<patch>` version
- PolicyError: An update policy entry was rejected (unknown class, unknown
    action, or an attempt to weaken an inherited action)
- NoUpdateAvailableError: An update was requested but nothing is due
- UnrecognizedConfirmationError: An operator answer was neither yes nor no
- GitError: The git collaborator failed (missing repository, failed command)
- ConfigError: Configuration loading or validation failed

All exceptions inherit from GitupError, allowing users to catch all gitup
errors with a single except clause if needed.

Example:
    Distinguishing "nothing to do" from "update failed":
        ```python
        from gitup.exceptions import GitError, NoUpdateAvailableError

        try:
            repo.update(policy)
        except NoUpdateAvailableError:
            print("Already on the latest tag.")
        except GitError as e:
            print(f"Checkout failed: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "GitupError",
    "InvalidVersionError",
    "PolicyError",
    "UnknownChangeClassError",
    "UnknownActionError",
    "CannotDowngradePolicyError",
    "NoUpdateAvailableError",
    "UnrecognizedConfirmationError",
    "GitError",
    "ConfigError",
]


class GitupError(Exception):
    """Base exception for all gitup errors.

    All gitup-specific exceptions inherit from this class, allowing users
    to catch all gitup errors with a single except clause if needed.
    """

    pass


class InvalidVersionError(GitupError, ValueError):
    """Raised when a tag is not a valid semantic version.

    There is no further sub-classification: a missing `v`, a non-numeric
    component, fewer than three dotted parts, an out-of-range number, or an
    empty pre-release/build identifier all raise this same error.
    """

    pass


class PolicyError(GitupError):
    """Base class for rejected update policy entries."""

    pass


class UnknownChangeClassError(PolicyError):
    """Raised for a change class outside major/minor/patch/pre-release.

    Build metadata is deliberately part of this set: it never drives updates.
    """

    pass


class UnknownActionError(PolicyError):
    """Raised for an action outside none/manual/automatic."""

    pass


class CannotDowngradePolicyError(PolicyError):
    """Raised when a class would get a weaker action than it inherits."""

    pass


class NoUpdateAvailableError(GitupError):
    """Raised by an update request when the repository is not behind.

    Kept distinct from GitError so callers can tell "no action needed"
    apart from "action needed but failed".
    """

    pass


class UnrecognizedConfirmationError(GitupError, ValueError):
    """Raised for an operator answer that is neither yes nor no.

    Never fatal: the confirmation reader prints it and reads the next line.
    """

    pass


class GitError(GitupError):
    """Raised for git-related errors.

    This exception is raised when there are problems with:

    - An undefined (blank) repository path or tag name
    - A directory that is not a git working tree
    - A git command exiting non-zero, or the git binary missing

    Example:
        Catching git errors:
            ```python
            from gitup.exceptions import GitError
            from gitup.vcs import open_repository

            try:
                repo = open_repository("/tmp/not-a-repo")
            except GitError as e:
                print(f"Git error: {e}")
            ```
    """

    pass


class ConfigError(GitupError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parsing (syntax errors, empty files, non-mapping documents)
    - A missing configuration file given explicitly
    - Policy entries naming unknown change classes or actions, or
        weakening an inherited action
    """

    pass
