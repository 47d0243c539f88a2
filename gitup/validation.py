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

"""Configuration file validation.

This module checks a gitup configuration file without touching git. This
is useful for quick feedback when editing a policy and in CI pre-checks.

Validation Checks:

- YAML syntax is valid and the document is a mapping
- apiVersion is supported (a missing one is only a warning)
- policy is a mapping
- Each policy key is a known change class and each value a known action
- No class is given a weaker action than the one it inherits
- Unknown top-level keys (warning only)

Example:
    Validate a config and handle results:
        ```python
        from pathlib import Path
        from gitup.validation import validate_config

        result = validate_config(Path(".gitup.yaml"))
        if result.status == "valid":
            print(result.policy)
        else:
            for error in result.errors:
                print(f"Error: {error}")
        ```

"""

from __future__ import annotations

from pathlib import Path

import yaml

from gitup.config.loader import API_VERSION
from gitup.exceptions import PolicyError
from gitup.logging import get_global_logger
from gitup.policy.updates import UpdatePolicy
from gitup.results import ValidationResult

__all__ = ["validate_config"]

KNOWN_KEYS = {"apiVersion", "policy"}


def _result(
    config_path: Path,
    errors: list[str],
    warnings: list[str],
    policy: dict[str, str] | None = None,
) -> ValidationResult:
    return ValidationResult(
        status="invalid" if errors else "valid",
        errors=errors,
        warnings=warnings,
        policy=policy or {},
        config_path=str(config_path),
    )


def validate_config(config_path: Path) -> ValidationResult:
    """Validate a configuration file.

    Does NOT:

    - Run git
    - Merge the file with other configuration layers

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Validation status, errors, warnings and, when valid, the stored
            action per change class.

    """
    logger = get_global_logger()
    errors: list[str] = []
    warnings: list[str] = []

    logger.verbose("VALIDATION", f"Validating config: {config_path}")

    if not config_path.exists():
        errors.append(f"Config file not found: {config_path}")
        return _result(config_path, errors, warnings)

    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as err:
        errors.append(f"Invalid YAML syntax: {err}")
        return _result(config_path, errors, warnings)
    except OSError as err:
        errors.append(f"Failed to read config file: {err}")
        return _result(config_path, errors, warnings)

    if config is None:
        errors.append("Config file is empty")
        return _result(config_path, errors, warnings)
    if not isinstance(config, dict):
        errors.append("Config must be a YAML mapping (dict)")
        return _result(config_path, errors, warnings)

    logger.verbose("VALIDATION", "YAML syntax is valid")

    if "apiVersion" not in config:
        warnings.append(f"No apiVersion field: {API_VERSION!r} is assumed")
    elif config["apiVersion"] != API_VERSION:
        errors.append(
            f"Unsupported apiVersion: {config['apiVersion']!r} "
            f"(expected {API_VERSION!r})"
        )

    for key in config:
        if key not in KNOWN_KEYS:
            warnings.append(f"Unknown top-level field: {key!r}")

    section = config.get("policy")
    policy: UpdatePolicy | None = None
    if section is None:
        warnings.append("No 'policy' section: every change class defaults to 'none'")
        policy = UpdatePolicy()
    elif not isinstance(section, dict):
        errors.append("'policy' must be a mapping of change class to action")
    else:
        try:
            policy = UpdatePolicy.from_mapping(section)
        except PolicyError as err:
            errors.append(f"Invalid policy: {err}")

    if policy is not None and not errors:
        logger.verbose("VALIDATION", f"Policy: {policy!r}")
        return _result(config_path, errors, warnings, policy.as_dict())
    return _result(config_path, errors, warnings)
