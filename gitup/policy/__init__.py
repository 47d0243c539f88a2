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

"""Update policy management for gitup.

This module maps the class of an available version change to the action
gitup should take: nothing, ask the operator, or switch automatically.

Modules:

updates : module
    Policy ledger, change classes, actions and the decision helpers.

Public API:

UpdatePolicy : class
    Per-change-class action ledger with cascading lookup.
ChangeClass : enum
    major, minor, patch, pre-release (build metadata is never configurable).
Action : enum
    none, manual, automatic.
select_action : function
    Decide the action for a version delta under a policy.

Example:
    from gitup.policy import UpdatePolicy, select_action
    from gitup.versioning import compare

    policy = UpdatePolicy.from_mapping({"minor": "automatic"})
    action = select_action(compare("v1.0.0", "v1.1.0"), policy)
    print(action.label)  # "automatic"

"""

from .updates import (
    Action,
    ChangeClass,
    UpdatePolicy,
    select_action,
    select_change_class,
)

__all__ = [
    "Action",
    "ChangeClass",
    "UpdatePolicy",
    "select_action",
    "select_change_class",
]
