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

"""Core orchestration for gitup.

This module drives the update decision for one repository:

1. Read the local tag and the latest upstream tag (cached per handle)
2. Compute the local - remote VersionDelta
3. Pick the change class that matters and look up its action in the policy
4. Act on it: nothing, ask the operator, or check out the upstream tag

The Repository class holds the decision state for a single working tree.
The check_repository() and update_repository() functions wrap it with
configuration loading and return frozen result dataclasses, which is what
the CLI consumes.

Design Principles:

- Collaborators (git, console) are injected, never global
- is_update_due() never raises: "cannot tell" and "nothing to do" are the
    same answer
- update() raises NoUpdateAvailableError distinctly from a failed checkout
- Errors from git during checkout propagate unchanged

Example:
    Programmatic usage:
        ```python
        from gitup.core import Repository
        from gitup.policy import UpdatePolicy
        from gitup.vcs import open_repository

        policy = UpdatePolicy.from_mapping({"minor": "automatic"})
        repo = Repository(open_repository("/src/project"))
        if repo.is_update_due(policy):
            repo.update(policy)
        ```

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from gitup.config.loader import load_effective_config, policy_from_config
from gitup.confirm import Console, read_confirmation
from gitup.exceptions import GitupError, InvalidVersionError, NoUpdateAvailableError
from gitup.logging import Logger, get_global_logger
from gitup.policy.updates import (
    Action,
    UpdatePolicy,
    select_action,
    select_change_class,
)
from gitup.results import CheckResult, UpdateResult
from gitup.vcs.base import VersionControl
from gitup.vcs.git import open_repository
from gitup.versioning.semver import VersionDelta, compare


class RepoStatus(Enum):
    """Where a Repository stands in the update decision."""

    IDLE = "idle"
    CHECKING = "checking"
    DUE = "due"
    UP_TO_DATE = "up-to-date"
    UPDATING = "updating"
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    FAILED = "failed"


@dataclass
class RepositoryState:
    """Decision state owned by one Repository.

    Attributes:
        local_tag: Cached local tag, empty until fetched.
        remote_tag: Cached upstream tag, empty until fetched.
        last_delta: Delta from the most recent decision, if any.
        chosen_action: Action selected by the most recent decision.
        status: Current state machine position.
        previous_tag: Local tag before the last successful checkout.
    """

    local_tag: str = ""
    remote_tag: str = ""
    last_delta: VersionDelta | None = None
    chosen_action: Action = Action.NONE
    status: RepoStatus = RepoStatus.IDLE
    previous_tag: str = ""


class Repository:
    """Update orchestrator for a single working tree."""

    def __init__(
        self,
        vcs: VersionControl,
        *,
        console: Console | None = None,
        logger: Logger | None = None,
    ) -> None:
        self.vcs = vcs
        self.console = console if console is not None else Console()
        self._logger = logger
        self.state = RepositoryState()

    @property
    def logger(self) -> Logger:
        return self._logger if self._logger is not None else get_global_logger()

    def refresh(self) -> None:
        """Forget cached tags so the next decision fetches them again."""
        self.state = RepositoryState()

    def _fetch_tags(self) -> bool:
        """Fill the tag cache; return False if either tag is unavailable."""
        try:
            if not self.state.local_tag:
                self.state.local_tag = self.vcs.local_tag()
            if not self.state.remote_tag:
                self.state.remote_tag = self.vcs.last_tag()
        except (GitupError, OSError) as err:
            self.logger.verbose("UPDATE", f"Unable to read tags: {err}")
            return False
        return True

    def is_update_due(self, policy: UpdatePolicy) -> bool:
        """Tell whether the policy calls for moving to the upstream tag.

        Tags are fetched once per handle and cached. Any failure to read a
        tag or to parse either tag yields False rather than an error.

        Args:
            policy: UpdatePolicy to consult. It is only read.

        Returns:
            True iff the effective action for the relevant change class is
                manual or automatic. The action is kept for update().

        """
        state = self.state
        state.status = RepoStatus.CHECKING
        state.chosen_action = Action.NONE
        state.last_delta = None

        if not self._fetch_tags():
            state.status = RepoStatus.IDLE
            return False

        try:
            delta = compare(state.local_tag, state.remote_tag)
        except InvalidVersionError as err:
            self.logger.verbose("VERSION", str(err))
            state.status = RepoStatus.IDLE
            return False

        state.last_delta = delta
        self.logger.debug(
            "VERSION",
            f"{state.local_tag} - {state.remote_tag}: major={delta.major} "
            f"minor={delta.minor} patch={delta.patch} "
            f"pre-release={delta.pre_release!r} order={delta.order}",
        )

        change_class = select_change_class(delta)
        state.chosen_action = select_action(delta, policy)
        if change_class is not None:
            self.logger.verbose(
                "POLICY",
                f"{change_class.label} change: {state.chosen_action.label}",
            )

        if state.chosen_action > Action.NONE:
            state.status = RepoStatus.DUE
            return True
        state.status = RepoStatus.UP_TO_DATE
        return False

    def update(self, policy: UpdatePolicy) -> bool:
        """Move the working tree to the upstream tag if the policy says so.

        Manual actions ask the operator first; automatic actions do not.
        During the checkout the handle is CONFIRMED after a manual answer
        and UPDATING otherwise.

        Args:
            policy: UpdatePolicy to consult.

        Returns:
            True if the tag was checked out, False if the operator declined.

        Raises:
            NoUpdateAvailableError: If no update is due.
            GitError: If the checkout fails (propagated unchanged).

        """
        if not self.is_update_due(policy):
            raise NoUpdateAvailableError(
                f"no available update (local {self.state.local_tag or '?'}, "
                f"remote {self.state.remote_tag or '?'})"
            )

        state = self.state
        if state.chosen_action == Action.MANUAL:
            self.console.write(
                f"You are currently on '{state.local_tag}', "
                "a new version is available."
            )
            self.console.write(f"Do you want to update and move on '{state.remote_tag}'?")
            if not read_confirmation(self.console):
                self.logger.verbose("UPDATE", "Update declined")
                state.status = RepoStatus.DECLINED
                return False
            self.logger.verbose("UPDATE", "Update confirmed")
            state.status = RepoStatus.CONFIRMED
        else:
            state.status = RepoStatus.UPDATING

        self.logger.verbose("UPDATE", f"Checking out {state.remote_tag}")
        try:
            self.vcs.checkout_tag(state.remote_tag)
        except Exception:
            state.status = RepoStatus.FAILED
            raise

        state.previous_tag = state.local_tag
        state.local_tag = state.remote_tag
        state.status = RepoStatus.UP_TO_DATE
        return True


def _resolve_policy(
    path: Path, policy: UpdatePolicy | None, config_path: Path | None
) -> UpdatePolicy:
    if policy is not None:
        return policy
    config = load_effective_config(path, config_path=config_path)
    return policy_from_config(config)


def check_repository(
    path: Path,
    *,
    policy: UpdatePolicy | None = None,
    config_path: Path | None = None,
    vcs: VersionControl | None = None,
) -> CheckResult:
    """Check a repository against its upstream without changing it.

    Args:
        path: Path to the git working tree.
        policy: Policy to apply. Loaded from configuration when None.
        config_path: Explicit configuration file (top configuration layer).
        vcs: Version-control collaborator. A validated GitRepository for
            path is used when None.

    Returns:
        Tags, delta and decision for the repository.

    Raises:
        ConfigError: If the configuration cannot be loaded.
        GitError: If path is not a git working tree.

    """
    logger = get_global_logger()
    path = Path(path)

    logger.step(1, 3, "Loading update policy...")
    policy = _resolve_policy(path, policy, config_path)
    logger.verbose("POLICY", repr(policy))

    logger.step(2, 3, "Reading tags...")
    if vcs is None:
        vcs = open_repository(path)
    repo = Repository(vcs)

    logger.step(3, 3, "Comparing versions...")
    due = repo.is_update_due(policy)
    state = repo.state

    return CheckResult(
        path=str(path),
        local_tag=state.local_tag,
        remote_tag=state.remote_tag,
        delta=state.last_delta,
        action=state.chosen_action.label,
        due=due,
        status=state.status.value,
    )


def update_repository(
    path: Path,
    *,
    policy: UpdatePolicy | None = None,
    config_path: Path | None = None,
    vcs: VersionControl | None = None,
    console: Console | None = None,
) -> UpdateResult:
    """Run the update flow on a repository.

    Args:
        path: Path to the git working tree.
        policy: Policy to apply. Loaded from configuration when None.
        config_path: Explicit configuration file (top configuration layer).
        vcs: Version-control collaborator. A validated GitRepository for
            path is used when None.
        console: Console for the manual confirmation prompt.

    Returns:
        Outcome of the run. Nothing due is reported rather than raised,
            with status "up-to-date", or "idle" when the tags could not be
            read or parsed.

    Raises:
        ConfigError: If the configuration cannot be loaded.
        GitError: If path is not a git working tree or the checkout fails.

    """
    logger = get_global_logger()
    path = Path(path)

    logger.step(1, 2, "Loading update policy...")
    policy = _resolve_policy(path, policy, config_path)
    logger.verbose("POLICY", repr(policy))

    if vcs is None:
        vcs = open_repository(path)
    repo = Repository(vcs, console=console)

    logger.step(2, 2, "Updating repository...")
    try:
        updated = repo.update(policy)
    except NoUpdateAvailableError as err:
        logger.verbose("UPDATE", str(err))
        return UpdateResult(
            path=str(path),
            previous_tag=repo.state.local_tag,
            current_tag=repo.state.local_tag,
            action=repo.state.chosen_action.label,
            updated=False,
            status=repo.state.status.value,
        )

    state = repo.state
    return UpdateResult(
        path=str(path),
        previous_tag=state.previous_tag if updated else state.local_tag,
        current_tag=state.local_tag,
        action=state.chosen_action.label,
        updated=updated,
        status="updated" if updated else RepoStatus.DECLINED.value,
    )
