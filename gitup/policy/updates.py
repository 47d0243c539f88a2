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

"""Update decision policy for gitup.

Determines what to do when the upstream carries a newer tag, based on the
class of the change (major, minor, patch, pre-release) and an org- or
user-defined policy.

A policy is a ledger of four slots, one per change class, each holding an
action (none, manual, automatic). Lookups cascade: the effective action for
a class is the strongest action configured for it or any less specific
class. Writes enforce the same direction: a class may not be given a weaker
action than the one it already inherits.

Example:
    Ask before major upgrades, apply everything else automatically:

        from gitup.policy.updates import Action, ChangeClass, UpdatePolicy

        policy = UpdatePolicy()
        policy.set_action("major", "manual")
        policy.set_action(ChangeClass.MINOR, Action.AUTOMATIC)

        policy.effective_action("patch")  # Action.AUTOMATIC

"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Mapping, Union

from gitup.exceptions import (
    CannotDowngradePolicyError,
    UnknownActionError,
    UnknownChangeClassError,
)
from gitup.versioning.semver import VersionDelta


class ChangeClass(IntEnum):
    """Granularity of a version change, least specific first."""

    MAJOR = 0
    MINOR = 1
    PATCH = 2
    PRE_RELEASE = 3
    # Never configurable; present so it can be rejected explicitly.
    BUILD_METADATA = 4

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")


class Action(IntEnum):
    """Response to an available update, weakest first."""

    NONE = 0
    MANUAL = 1
    AUTOMATIC = 2

    @property
    def label(self) -> str:
        return self.name.lower()


ChangeClassLike = Union[ChangeClass, str, int]
ActionLike = Union[Action, str, int]

POLICY_CLASSES: tuple[ChangeClass, ...] = (
    ChangeClass.MAJOR,
    ChangeClass.MINOR,
    ChangeClass.PATCH,
    ChangeClass.PRE_RELEASE,
)

_CLASS_NAMES: dict[str, ChangeClass] = {
    "major": ChangeClass.MAJOR,
    "minor": ChangeClass.MINOR,
    "patch": ChangeClass.PATCH,
    "pre-release": ChangeClass.PRE_RELEASE,
    "prerelease": ChangeClass.PRE_RELEASE,
    "pre_release": ChangeClass.PRE_RELEASE,
}

_ACTION_NAMES: dict[str, Action] = {
    "none": Action.NONE,
    "manual": Action.MANUAL,
    "automatic": Action.AUTOMATIC,
    "auto": Action.AUTOMATIC,
}


def to_change_class(value: ChangeClassLike) -> ChangeClass:
    """Convert a name, number or enum to a configurable ChangeClass.

    Raises:
        UnknownChangeClassError: For build metadata or any unknown value.

    """
    if isinstance(value, str):
        cls = _CLASS_NAMES.get(value.strip().lower())
    elif isinstance(value, int) and not isinstance(value, bool):
        cls = ChangeClass(value) if value in POLICY_CLASSES else None
    else:
        cls = None
    if cls is None or cls not in POLICY_CLASSES:
        raise UnknownChangeClassError(f"unknown type of version: {value!r}")
    return cls


def to_action(value: ActionLike) -> Action:
    """Convert a name, number or enum to an Action.

    Raises:
        UnknownActionError: For any value outside none/manual/automatic.

    """
    if isinstance(value, str):
        action = _ACTION_NAMES.get(value.strip().lower())
    elif isinstance(value, int) and not isinstance(value, bool):
        action = Action(value) if Action.NONE <= value <= Action.AUTOMATIC else None
    else:
        action = None
    if action is None:
        raise UnknownActionError(f"unknown action's type: {value!r}")
    return action


class UpdatePolicy:
    """Per-change-class action ledger with cascading lookup."""

    def __init__(self) -> None:
        self._until: list[Action] = [Action.NONE] * len(POLICY_CLASSES)

    def set_action(self, change_class: ChangeClassLike, action: ActionLike) -> None:
        """Configure the action for one change class.

        Args:
            change_class: "major", "minor", "patch" or "pre-release" (or the
                matching ChangeClass).
            action: "none", "manual" or "automatic" (or the matching Action).

        Raises:
            UnknownChangeClassError: If the class is unknown or is build
                metadata.
            UnknownActionError: If the action is unknown.
            CannotDowngradePolicyError: If the action is weaker than the one
                the previous, less specific class already puts in force.
                Major is the base and is never checked.

        """
        cls = to_change_class(change_class)
        act = to_action(action)
        if cls > ChangeClass.MAJOR:
            inherited = self.effective_action(cls - 1)
            if act < inherited:
                raise CannotDowngradePolicyError(
                    f"unable to downgrade behavior on {cls.label} versions: "
                    f"{act.label} is weaker than inherited {inherited.label}"
                )
        self._until[cls] = act

    def effective_action(self, change_class: Any) -> Action:
        """Return the strongest action configured from major up to the class.

        Unknown or out-of-range classes return Action.NONE instead of
        raising, so they can never trigger an update.
        """
        try:
            cls = to_change_class(change_class)
        except UnknownChangeClassError:
            return Action.NONE
        return max(self._until[: cls + 1])

    def copy(self) -> UpdatePolicy:
        """Return an independent copy of this policy."""
        other = UpdatePolicy()
        other._until = list(self._until)
        return other

    def as_dict(self) -> dict[str, str]:
        """Return the stored (not cascaded) action for each class by label."""
        return {cls.label: self._until[cls].label for cls in POLICY_CLASSES}

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> UpdatePolicy:
        """Build a policy from a ``{class: action}`` mapping.

        Entries are applied from major toward pre-release so each class is
        checked against the classes it inherits from.

        Raises:
            UnknownChangeClassError: For an unknown key.
            UnknownActionError: For an unknown value.
            CannotDowngradePolicyError: For a weakening entry.

        """
        policy = cls()
        entries = [(to_change_class(key), value) for key, value in mapping.items()]
        for change_class, action in sorted(entries, key=lambda e: e[0]):
            policy.set_action(change_class, action)
        return policy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UpdatePolicy):
            return NotImplemented
        return self._until == other._until

    def __repr__(self) -> str:
        slots = ", ".join(f"{k}={v}" for k, v in self.as_dict().items())
        return f"UpdatePolicy({slots})"


def select_change_class(delta: VersionDelta) -> ChangeClass | None:
    """Pick the change class that should drive an update decision.

    The first non-zero numeric component, from major to patch, decides: a
    negative value (left side behind) selects that class, a positive value
    (left side ahead) selects nothing. With all numbers equal, differing
    pre-release identifiers select PRE_RELEASE. Build metadata never
    selects anything.

    Args:
        delta: Difference computed as ``local - remote``.

    Returns:
        The class to consult, or None when no update applies.

    """
    for change_class, diff in (
        (ChangeClass.MAJOR, delta.major),
        (ChangeClass.MINOR, delta.minor),
        (ChangeClass.PATCH, delta.patch),
    ):
        if diff < 0:
            return change_class
        if diff > 0:
            return None
    if delta.pre_release:
        return ChangeClass.PRE_RELEASE
    return None


def select_action(delta: VersionDelta, policy: UpdatePolicy) -> Action:
    """Decide the action for a local-minus-remote delta under a policy.

    Only the class chosen by select_change_class() is consulted; classes
    are never aggregated.

    Args:
        delta: Difference computed as ``local - remote``.
        policy: UpdatePolicy controlling the decision.

    Returns:
        The effective action, Action.NONE when nothing applies.

    """
    change_class = select_change_class(delta)
    if change_class is None:
        return Action.NONE
    return policy.effective_action(change_class)
