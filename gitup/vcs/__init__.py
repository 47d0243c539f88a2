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

"""Version-control access for gitup.

Public API:

- VersionControl: Protocol the update orchestrator depends on
- GitRepository: git implementation of VersionControl
- open_repository: Create and validate a GitRepository

"""

from .base import VersionControl
from .git import GitRepository, open_repository

__all__ = ["VersionControl", "GitRepository", "open_repository"]
