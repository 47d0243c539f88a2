"""
Tests for gitup.policy module.

Tests the update policy ledger including:
- Validated setters (unknown class, unknown action, downgrade)
- Cascading lookup
- Change class selection from a version delta
"""

from __future__ import annotations

import pytest

from gitup.exceptions import (
    CannotDowngradePolicyError,
    PolicyError,
    UnknownActionError,
    UnknownChangeClassError,
)
from gitup.policy import Action, ChangeClass, UpdatePolicy, select_action
from gitup.policy.updates import select_change_class
from gitup.versioning import compare


class TestSetAction:
    """Tests for UpdatePolicy.set_action."""

    def test_accepts_enums_and_names(self):
        """Test that enums and string names are equivalent."""
        by_enum = UpdatePolicy()
        by_enum.set_action(ChangeClass.MINOR, Action.MANUAL)
        by_name = UpdatePolicy()
        by_name.set_action("minor", "manual")
        assert by_enum == by_name

    def test_pre_release_aliases(self):
        """Test the accepted spellings of the pre-release class."""
        for name in ["pre-release", "prerelease", "pre_release"]:
            policy = UpdatePolicy()
            policy.set_action(name, "automatic")
            assert policy.effective_action(ChangeClass.PRE_RELEASE) == Action.AUTOMATIC

    def test_build_metadata_is_rejected(self):
        """Test that build metadata is never configurable."""
        policy = UpdatePolicy()
        with pytest.raises(UnknownChangeClassError):
            policy.set_action(ChangeClass.BUILD_METADATA, Action.AUTOMATIC)
        with pytest.raises(UnknownChangeClassError):
            policy.set_action(4, Action.AUTOMATIC)

    def test_unknown_class_is_rejected(self):
        """Test that unknown change classes are rejected."""
        policy = UpdatePolicy()
        with pytest.raises(UnknownChangeClassError):
            policy.set_action("epoch", "manual")
        with pytest.raises(UnknownChangeClassError):
            policy.set_action(-1, "manual")

    def test_unknown_action_is_rejected(self):
        """Test that unknown actions are rejected."""
        policy = UpdatePolicy()
        with pytest.raises(UnknownActionError):
            policy.set_action("major", "sometimes")
        with pytest.raises(UnknownActionError):
            policy.set_action("major", 3)
        with pytest.raises(UnknownActionError):
            policy.set_action("major", None)

    def test_cannot_downgrade_minor_below_major(self):
        """Test that a weaker action than the inherited one is rejected."""
        policy = UpdatePolicy()
        policy.set_action("major", "automatic")
        with pytest.raises(CannotDowngradePolicyError):
            policy.set_action("minor", "manual")
        # The rejected write leaves the ledger unchanged
        assert policy.effective_action("minor") == Action.AUTOMATIC

    def test_downgrade_checks_whole_cascade(self):
        """Test that the check uses the cascaded action of the previous class."""
        policy = UpdatePolicy()
        policy.set_action("minor", "manual")
        with pytest.raises(CannotDowngradePolicyError):
            policy.set_action("pre-release", "none")

    def test_equal_or_stronger_is_allowed(self):
        """Test that equal or stronger actions pass the check."""
        policy = UpdatePolicy()
        policy.set_action("major", "manual")
        policy.set_action("minor", "manual")
        policy.set_action("patch", "automatic")
        assert policy.effective_action("patch") == Action.AUTOMATIC

    def test_major_is_never_downgrade_checked(self):
        """Test that major can be lowered freely."""
        policy = UpdatePolicy()
        policy.set_action("major", "automatic")
        policy.set_action("major", "none")
        assert policy.effective_action("major") == Action.NONE

    def test_policy_errors_share_base_class(self):
        """Test that all setter errors are PolicyError."""
        assert issubclass(UnknownChangeClassError, PolicyError)
        assert issubclass(UnknownActionError, PolicyError)
        assert issubclass(CannotDowngradePolicyError, PolicyError)


class TestEffectiveAction:
    """Tests for cascading lookup."""

    def test_empty_policy_is_none(self):
        """Test that an empty policy never acts."""
        policy = UpdatePolicy()
        for cls in ["major", "minor", "patch", "pre-release"]:
            assert policy.effective_action(cls) == Action.NONE

    def test_major_cascades_to_minor(self):
        """Test that a less specific action is inherited."""
        policy = UpdatePolicy()
        policy.set_action("major", "automatic")
        assert policy.effective_action("minor") == Action.AUTOMATIC
        assert policy.effective_action("pre-release") == Action.AUTOMATIC

    def test_specific_action_does_not_leak_upward(self):
        """Test that a more specific action leaves less specific ones alone."""
        policy = UpdatePolicy()
        policy.set_action("patch", "manual")
        assert policy.effective_action("major") == Action.NONE
        assert policy.effective_action("minor") == Action.NONE
        assert policy.effective_action("patch") == Action.MANUAL
        assert policy.effective_action("pre-release") == Action.MANUAL

    def test_maximum_wins(self):
        """Test that the strongest action on the path wins."""
        policy = UpdatePolicy()
        policy.set_action("major", "automatic")
        policy.set_action("major", "manual")
        policy.set_action("minor", "automatic")
        assert policy.effective_action("major") == Action.MANUAL
        assert policy.effective_action("patch") == Action.AUTOMATIC

    @pytest.mark.parametrize(
        "change_class",
        [ChangeClass.BUILD_METADATA, 4, 99, -1, "build", "", None, 1.5],
    )
    def test_out_of_range_class_is_none(self, change_class):
        """Test that unknown classes return NONE without raising."""
        policy = UpdatePolicy()
        policy.set_action("major", "automatic")
        assert policy.effective_action(change_class) == Action.NONE


class TestPolicyHelpers:
    """Tests for from_mapping, copy and as_dict."""

    def test_from_mapping_applies_in_class_order(self):
        """Test that mapping order does not matter for the downgrade check."""
        policy = UpdatePolicy.from_mapping({"patch": "automatic", "major": "manual"})
        assert policy.effective_action("minor") == Action.MANUAL
        assert policy.effective_action("patch") == Action.AUTOMATIC

    def test_from_mapping_rejects_downgrade(self):
        """Test that from_mapping enforces monotonicity."""
        with pytest.raises(CannotDowngradePolicyError):
            UpdatePolicy.from_mapping({"minor": "none", "major": "manual"})

    def test_copy_is_independent(self):
        """Test that a copy does not share the ledger."""
        policy = UpdatePolicy.from_mapping({"major": "manual"})
        snapshot = policy.copy()
        policy.set_action("major", "automatic")
        assert snapshot.effective_action("major") == Action.MANUAL

    def test_as_dict(self):
        """Test the stored (non-cascaded) action listing."""
        policy = UpdatePolicy.from_mapping({"minor": "auto"})
        assert policy.as_dict() == {
            "major": "none",
            "minor": "automatic",
            "patch": "none",
            "pre-release": "none",
        }


class TestSelectAction:
    """Tests for choosing the change class that drives a decision."""

    @pytest.mark.parametrize(
        ("local", "remote", "expected"),
        [
            ("v1.0.0", "v2.0.0", ChangeClass.MAJOR),
            ("v1.0.0", "v1.1.0", ChangeClass.MINOR),
            ("v1.0.0", "v1.0.1", ChangeClass.PATCH),
            ("v1.0.0-alpha", "v1.0.0-beta", ChangeClass.PRE_RELEASE),
            ("v1.9.9", "v2.0.0", ChangeClass.MAJOR),
            ("v1.0.0", "v1.0.0", None),
            ("v2.0.0", "v1.0.0", None),
            ("v2.0.0", "v1.5.0", None),
            ("v1.2.0", "v1.1.9", None),
            ("v1.0.0+a", "v1.0.0+b", None),
        ],
    )
    def test_select_change_class(self, local, remote, expected):
        """Test the first non-zero component decides."""
        assert select_change_class(compare(local, remote)) == expected

    def test_only_first_class_is_consulted(self):
        """Test that classes are not aggregated."""
        policy = UpdatePolicy.from_mapping({"patch": "automatic"})
        # Minor and patch both behind: only minor is consulted
        assert select_action(compare("v1.0.0", "v1.1.5"), policy) == Action.NONE

    def test_local_ahead_never_acts(self):
        """Test that a newer local tag never triggers an action."""
        policy = UpdatePolicy.from_mapping({"major": "automatic"})
        assert select_action(compare("v3.0.0", "v2.9.9"), policy) == Action.NONE
