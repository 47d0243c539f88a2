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

"""Command-line interface for gitup.

This module provides the main CLI entry point for the gitup tool.

Commands:

    check: Compare the local tag with the latest upstream tag
    update: Apply the update policy (ask, switch, or do nothing)
    validate: Validate a configuration file

Example:
    Check the current repository:
        ```bash
        $ gitup check
        ```

    Update, asking before major upgrades:
        ```bash
        $ gitup update ~/src/project --major manual --minor automatic
        ```

    Validate a config file:
        ```bash
        $ gitup validate .gitup.yaml
        ```

Exit Codes:

- 0: Success (including "nothing to do" and a declined update)
- 1: Error (configuration, git, or validation failure)

Note:
    Policy flags are applied on top of the configured policy. Verbose mode
    shows full tracebacks on errors. Debug mode implies verbose mode and
    shows git commands and configuration dumps.

"""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
import sys
import traceback

from gitup.config.loader import load_effective_config, policy_from_config
from gitup.core import check_repository, update_repository
from gitup.exceptions import GitupError
from gitup.logging import get_logger, set_global_logger
from gitup.validation import validate_config

POLICY_FLAGS = (
    ("major", "major"),
    ("minor", "minor"),
    ("patch", "patch"),
    ("pre_release", "pre-release"),
)


def _package_version() -> str:
    try:
        return version("gitup")
    except PackageNotFoundError:
        from gitup import __version__

        return __version__


def _policy_overrides(args: argparse.Namespace) -> dict[str, str]:
    overrides = {}
    for attr, change_class in POLICY_FLAGS:
        value = getattr(args, attr, None)
        if value is not None:
            overrides[change_class] = value
    return overrides


def _report_error(err: Exception, args: argparse.Namespace) -> int:
    print(f"Error: {err}")
    if args.verbose or args.debug:
        traceback.print_exc()
    return 1


def _load_policy(args: argparse.Namespace, repo_path: Path):
    config_path = Path(args.config).resolve() if args.config else None
    config = load_effective_config(repo_path, config_path=config_path)
    return policy_from_config(config, _policy_overrides(args))


def cmd_check(args: argparse.Namespace) -> int:
    """Handler for 'gitup check' command.

    Reads the local and upstream tags, computes their difference and
    reports what the policy would do, without changing the working tree.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    repo_path = Path(args.path).resolve()
    print(f"Checking repository: {repo_path}")
    print()

    try:
        policy = _load_policy(args, repo_path)
        result = check_repository(repo_path, policy=policy)
    except GitupError as err:
        return _report_error(err, args)

    print("=" * 70)
    print("CHECK RESULTS")
    print("=" * 70)
    print(f"Repository:      {result.path}")
    print(f"Local Tag:       {result.local_tag or '(unknown)'}")
    print(f"Remote Tag:      {result.remote_tag or '(unknown)'}")
    if result.delta is not None:
        d = result.delta
        print(f"Delta:           major={d.major} minor={d.minor} patch={d.patch}")
        if d.pre_release:
            print(f"Pre-release:     {d.pre_release}")
    print(f"Action:          {result.action}")
    print(f"Status:          {result.status}")
    print("=" * 70)
    print()
    if result.due:
        print(f"[UPDATE] {result.remote_tag} is available ({result.action}).")
    elif result.status == "idle":
        print("[WARNING] Could not determine upstream tag.")
    else:
        print("[OK] No update due.")
    return 0


def cmd_update(args: argparse.Namespace) -> int:
    """Handler for 'gitup update' command.

    Applies the update policy: checks out the upstream tag automatically,
    asks for confirmation first, or does nothing.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    repo_path = Path(args.path).resolve()
    print(f"Updating repository: {repo_path}")
    print()

    try:
        policy = _load_policy(args, repo_path)
        result = update_repository(repo_path, policy=policy)
    except GitupError as err:
        return _report_error(err, args)

    print()
    print("=" * 70)
    print("UPDATE RESULTS")
    print("=" * 70)
    print(f"Repository:      {result.path}")
    print(f"Previous Tag:    {result.previous_tag or '(unknown)'}")
    print(f"Current Tag:     {result.current_tag or '(unknown)'}")
    print(f"Action:          {result.action}")
    print(f"Status:          {result.status}")
    print("=" * 70)
    print()
    if result.updated:
        print(f"[SUCCESS] Now on {result.current_tag}.")
    elif result.status == "declined":
        print("[SKIPPED] Update declined, repository left as-is.")
    elif result.status == "idle":
        print("[WARNING] Could not determine upstream tag, nothing was changed.")
    else:
        print("[OK] Already up to date.")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Handler for 'gitup validate' command.

    Args:
        args: Parsed command-line arguments containing the config path.

    Returns:
        Exit code (0 for valid config, 1 for invalid).

    """
    logger = get_logger(verbose=args.verbose, debug=False)
    set_global_logger(logger)

    config_path = Path(args.config_file).resolve()
    print(f"Validating config: {config_path}")
    print()

    result = validate_config(config_path)

    print("=" * 70)
    print("VALIDATION RESULTS")
    print("=" * 70)
    print(f"Config:      {result.config_path}")
    print(f"Status:      {result.status.upper()}")
    for change_class, action in result.policy.items():
        print(f"  {change_class:<12} {action}")
    print()

    if result.warnings:
        print(f"Warnings ({len(result.warnings)}):")
        for warning in result.warnings:
            print(f"  [WARNING] {warning}")
        print()

    if result.errors:
        print(f"Errors ({len(result.errors)}):")
        for error in result.errors:
            print(f"  [X] {error}")
        print()

    print("=" * 70)

    if result.status == "valid":
        print()
        print("[SUCCESS] Config is valid!")
        return 0
    print()
    print(f"[FAILED] Config validation failed with {len(result.errors)} error(s).")
    return 1


def _add_repo_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the git working tree (default: current directory)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Configuration file applied on top of user and repository config",
    )
    for attr, change_class in POLICY_FLAGS:
        parser.add_argument(
            f"--{change_class}",
            dest=attr,
            choices=["none", "manual", "automatic"],
            default=None,
            help=f"Action for {change_class} changes (overrides config)",
        )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the gitup argument parser."""
    parser = argparse.ArgumentParser(
        prog="gitup",
        description="gitup - keep a git checkout on its latest upstream tag",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"gitup {_package_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'check' command
    parser_check = subparsers.add_parser(
        "check",
        help="Compare the local tag with the latest upstream tag",
        description="Report whether the update policy calls for a new tag, without changing anything.",
    )
    _add_repo_arguments(parser_check)
    parser_check.set_defaults(func=cmd_check)

    # 'update' command
    parser_update = subparsers.add_parser(
        "update",
        help="Apply the update policy to the repository",
        description="Check out the latest upstream tag automatically or after confirmation, as the policy says.",
    )
    _add_repo_arguments(parser_update)
    parser_update.set_defaults(func=cmd_update)

    # 'validate' command
    parser_validate = subparsers.add_parser(
        "validate",
        help="Validate a configuration file (no git calls)",
        description="Check a gitup YAML config for syntax and policy errors.",
    )
    parser_validate.add_argument(
        "config_file",
        nargs="?",
        default=".gitup.yaml",
        help="Path to the config file (default: .gitup.yaml)",
    )
    parser_validate.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show validation progress and details",
    )
    parser_validate.set_defaults(func=cmd_validate)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the gitup CLI.

    This function is registered as the 'gitup' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
