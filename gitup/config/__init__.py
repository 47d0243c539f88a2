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

"""Configuration loading and management for gitup.

This module loads the update policy from YAML files with a layered
approach:

  - Built-in defaults (no automatic action for any change class)
  - User defaults (~/.config/gitup/config.yaml or $GITUP_CONFIG)
  - Repository file (<repo>/.gitup.yaml)
  - Explicit file passed with --config

Public API:

- load_effective_config: Load and merge configuration for a repository
- policy_from_config: Build an UpdatePolicy from merged configuration

Example:
    Basic usage:

        from pathlib import Path
        from gitup.config import load_effective_config, policy_from_config

        config = load_effective_config(Path("."))
        policy = policy_from_config(config)
        print(policy.effective_action("minor"))

"""

from .loader import load_effective_config, policy_from_config

__all__ = ["load_effective_config", "policy_from_config"]
