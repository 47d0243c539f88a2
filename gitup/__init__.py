"""
gitup - keep a git checkout on its latest upstream tag

A Python CLI tool and library that checks whether a local git checkout is
behind the most recent upstream tag and, following a per-change-class
policy, leaves it alone, asks before switching, or switches automatically.

gitup provides:
  - Semantic version parsing and structured version differences
  - Tiered update policies (major, minor, patch, pre-release)
  - Manual (confirmed) or automatic checkout of the latest tag
  - Layered YAML configuration (user, repository, explicit file)

Quick Start
-----------
See what the policy would do:

    $ gitup check --minor automatic

Apply it:

    $ gitup update --major manual --minor automatic

For full CLI documentation:

    $ gitup --help

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    Update orchestrator and high-level check/update functions.
confirm : module
    Operator confirmation reader.
config : package
    YAML configuration loading and merging.
versioning : package
    Semantic version parsing and comparison.
policy : package
    Update policy ledger and decision helpers.
vcs : package
    Git collaborator.

Public API
----------
    from gitup.core import Repository, check_repository, update_repository
    from gitup.policy import UpdatePolicy
    from gitup.versioning import compare, parse
    from gitup.vcs import open_repository

For more details, see the individual module docstrings.
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "gitup - keep a git checkout on its latest upstream tag"

# Re-export commonly used functions for convenience
from gitup.config import load_effective_config, policy_from_config
from gitup.core import Repository, check_repository, update_repository
from gitup.exceptions import (
    CannotDowngradePolicyError,
    ConfigError,
    GitError,
    GitupError,
    InvalidVersionError,
    NoUpdateAvailableError,
    PolicyError,
    UnknownActionError,
    UnknownChangeClassError,
    UnrecognizedConfirmationError,
)
from gitup.policy import Action, ChangeClass, UpdatePolicy
from gitup.results import CheckResult, UpdateResult, ValidationResult
from gitup.validation import validate_config
from gitup.versioning import SemanticVersion, VersionDelta, compare, parse

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "Repository",
    "check_repository",
    "update_repository",
    "load_effective_config",
    "policy_from_config",
    "validate_config",
    "Action",
    "ChangeClass",
    "UpdatePolicy",
    "SemanticVersion",
    "VersionDelta",
    "compare",
    "parse",
    "CheckResult",
    "UpdateResult",
    "ValidationResult",
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
