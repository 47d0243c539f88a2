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

"""Configuration loading and merging for gitup.

The update policy comes from YAML files merged in layers, later layers
overriding earlier ones:

1. **Built-in defaults**: every change class set to "none"
2. **User defaults** ($GITUP_CONFIG, else ~/.config/gitup/config.yaml)
   - Optional; shared by every repository of the user
3. **Repository file** (<repo>/.gitup.yaml)
   - Optional; committed alongside the code it governs
4. **Explicit file** (--config)
   - Required when given

Merge Behavior
--------------
The loader performs deep merging with "last wins" semantics:
  - **Dicts**: Recursively merged (keys from overlay override base)
  - **Lists**: Completely replaced (NOT appended/extended)
  - **Scalars**: Overwritten (strings, numbers, booleans)

Schema
------
    apiVersion: gitup/v1
    policy:
      major: manual
      minor: automatic
      patch: automatic
      pre-release: none

Nothing is ever written back: the policy is read again on every run.
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from gitup.exceptions import ConfigError, PolicyError
from gitup.policy.updates import UpdatePolicy

API_VERSION = "gitup/v1"
REPO_CONFIG_NAME = ".gitup.yaml"
USER_CONFIG_ENV = "GITUP_CONFIG"

DEFAULT_CONFIG: dict[str, Any] = {"apiVersion": API_VERSION, "policy": {}}


# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """Loads a YAML file and returns the parsed Python object.

    Raises:
        ConfigError: When the file does not exist, is not valid YAML, or is
            empty.
    """
    if not p.exists():
        raise ConfigError(f"file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    return data


def _load_layer(p: Path) -> dict[str, Any]:
    data = _load_yaml_file(p)
    if not isinstance(data, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {p}")
    return data


def _print_yaml_content(data: dict[str, Any]) -> None:
    """Print YAML content through the debug logger."""
    from gitup.logging import get_global_logger

    logger = get_global_logger()
    yaml_str = yaml.dump(data, default_flow_style=False, sort_keys=False)
    for line in yaml_str.split("\n"):
        if line.strip():
            logger.debug("CONFIG", "  " + line)


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep-merges two dicts with "overlay wins" semantics.

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            # Replace lists and scalars entirely
            result[k] = v
    return result


# -------------------------------
# Layer discovery
# -------------------------------


def user_config_path() -> Path:
    """Return the user defaults file location ($GITUP_CONFIG wins)."""
    override = os.environ.get(USER_CONFIG_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "gitup" / "config.yaml"


# -------------------------------
# Public API
# -------------------------------


def load_effective_config(
    repo_path: Path,
    *,
    config_path: Path | None = None,
) -> dict[str, Any]:
    """Loads and merges the effective configuration for a repository.

    Args:
        repo_path: Path to the git working tree. Its .gitup.yaml, if
            present, is the third layer.
        config_path: Optional explicit configuration file, merged last.

    Returns:
        The merged configuration dict. Without any file present this is
            a copy of the built-in defaults.

    Raises:
        ConfigError: On YAML parse errors, empty files, a non-mapping top
            level, a missing explicit config_path, or an apiVersion other
            than gitup/v1.
    """
    from gitup.logging import get_global_logger

    logger = get_global_logger()
    merged = copy.deepcopy(DEFAULT_CONFIG)
    layers_merged = 1

    candidates: list[tuple[Path, bool]] = [
        (user_config_path(), False),
        (Path(repo_path) / REPO_CONFIG_NAME, False),
    ]
    if config_path is not None:
        candidates.append((Path(config_path), True))

    for path, required in candidates:
        if not required and not path.exists():
            logger.debug("CONFIG", f"Skipping missing layer: {path}")
            continue
        logger.verbose("CONFIG", f"Loading: {path}")
        layer = _load_layer(path)
        if "apiVersion" not in layer:
            logger.warning(
                "CONFIG", f"No apiVersion in {path}, assuming {API_VERSION!r}"
            )
        logger.debug("CONFIG", f"--- Content from {path.name} ---")
        _print_yaml_content(layer)
        merged = _deep_merge_dicts(merged, layer)
        layers_merged += 1

    logger.verbose("CONFIG", f"Deep merging {layers_merged} layer(s)")
    logger.debug("CONFIG", "--- Final Merged Configuration ---")
    _print_yaml_content(merged)

    api_version = merged.get("apiVersion")
    if api_version != API_VERSION:
        raise ConfigError(
            f"Unsupported apiVersion: {api_version!r} (expected {API_VERSION!r})"
        )
    return merged


def policy_from_config(
    config: Mapping[str, Any],
    overrides: Mapping[str, Any] | None = None,
) -> UpdatePolicy:
    """Build an UpdatePolicy from the merged configuration.

    Args:
        config: Merged configuration (see load_effective_config).
        overrides: Optional ``{class: action}`` entries applied on top of
            the configured policy section (e.g. from CLI flags).

    Returns:
        The validated policy.

    Raises:
        ConfigError: If the policy section is not a mapping, or an entry
            names an unknown class or action, or weakens an inherited one.
    """
    section = config.get("policy") or {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"'policy' must be a mapping of change class to action, "
            f"got {type(section).__name__}"
        )
    entries = dict(section)
    if overrides:
        entries.update(overrides)
    try:
        return UpdatePolicy.from_mapping(entries)
    except PolicyError as err:
        raise ConfigError(f"Invalid update policy: {err}") from err
