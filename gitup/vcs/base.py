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

"""Version-control collaborator protocol for gitup.

The update orchestrator never runs git itself. It talks to an object
implementing the VersionControl protocol, handed to it at construction
time. GitRepository is the production implementation; tests pass a fake.

Protocol Benefits:

Using typing.Protocol instead of ABC allows:

- Duck typing: Classes don't need explicit inheritance
- Better IDE support: Type checkers verify interface compliance
- Easy test doubles: any object with the three methods will do

Example:
    A fake collaborator for tests:
        ```python
        class FakeRepo:
            def local_tag(self) -> str:
                return "v1.0.0"

            def last_tag(self) -> str:
                return "v1.1.0"

            def checkout_tag(self, tag: str) -> None:
                self.checked_out = tag
        ```

"""

from __future__ import annotations

from typing import Protocol


class VersionControl(Protocol):
    """Protocol for the version-control operations gitup relies on.

    Every method is synchronous and may raise; implementations should raise
    GitError (or another GitupError) for anything that goes wrong.
    """

    def local_tag(self) -> str:
        """Return the most recent tag reachable from the current checkout."""
        ...

    def last_tag(self) -> str:
        """Refresh remote tags and return the most recent upstream tag."""
        ...

    def checkout_tag(self, tag: str) -> None:
        """Switch the working tree to the given tag.

        Raises:
            GitError: If the tag is blank after stripping or the checkout
                fails.

        """
        ...
