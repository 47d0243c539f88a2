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

"""Git command wrapper for gitup.

GitRepository implements the VersionControl protocol by running the git
binary with ``git -C <path> ...``. Commands are run with subprocess.run and
no timeout: a hung git process blocks the caller.

Commands used:

- status: validate the working tree (once per instance)
- describe --abbrev=0 --tags [<commit>]: most recent reachable tag
- fetch --tags: refresh tags from the remote
- rev-list --tags --max-count=1: newest tagged commit
- checkout <tag>: switch the working tree

Example:
    from gitup.vcs import open_repository

    repo = open_repository("/src/project")
    print(repo.local_tag(), repo.last_tag())

"""

from __future__ import annotations

from pathlib import Path
import subprocess

from gitup.exceptions import GitError
from gitup.logging import get_global_logger

GIT_BINARY = "git"


class GitRepository:
    """A git working tree addressed by path.

    The working tree is checked with ``git status`` before the first
    command. A successful check is remembered on the instance, so each
    handle validates at most once.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = str(path).strip()
        self._valid = False

    def __repr__(self) -> str:
        return f"GitRepository({self.path!r})"

    def _run(self, *args: str) -> str:
        """Run a git command against this repository and return stdout."""
        logger = get_global_logger()
        cmd = [GIT_BINARY, "-C", self.path, *args]
        logger.debug("GIT", f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as err:
            error_msg = f"git {args[0]} failed (exit code {err.returncode})"
            if err.stderr:
                error_msg += f": {err.stderr.strip()}"
            raise GitError(error_msg) from err
        except OSError as err:
            raise GitError(f"unable to run {GIT_BINARY}: {err}") from err
        return result.stdout

    def _check(self) -> None:
        """Validate the working tree unless already validated."""
        if self._valid:
            return
        if not self.path:
            raise GitError("directory path is undefined")
        self._run("status")
        self._valid = True

    def _describe(self, commit: str = "") -> str:
        self._check()
        args = ["describe", "--abbrev=0", "--tags"]
        commit = commit.strip()
        if commit:
            args.append(commit)
        return self._run(*args).strip()

    def is_repository(self) -> bool:
        """Return True if the path is a usable git working tree."""
        try:
            self._check()
        except GitError:
            return False
        return True

    def local_tag(self) -> str:
        """Return the most recent tag reachable from HEAD."""
        tag = self._describe()
        get_global_logger().verbose("GIT", f"Local tag: {tag}")
        return tag

    def last_tag(self) -> str:
        """Fetch remote tags and return the tag on the newest tagged commit."""
        self._check()
        self._run("fetch", "--tags")
        commit = self._run("rev-list", "--tags", "--max-count=1")
        tag = self._describe(commit)
        get_global_logger().verbose("GIT", f"Latest tag: {tag}")
        return tag

    def checkout_tag(self, tag: str) -> None:
        """Switch the working tree to the given tag.

        Raises:
            GitError: If the tag is blank or git checkout fails.

        """
        self._check()
        tag = tag.strip()
        if not tag:
            raise GitError("tag name is undefined")
        self._run("checkout", tag)
        get_global_logger().verbose("GIT", f"Checked out {tag}")


def open_repository(path: str | Path) -> GitRepository:
    """Create a GitRepository and validate it immediately.

    Raises:
        GitError: If the path is blank or not a git working tree.

    """
    repo = GitRepository(path)
    repo._check()
    return repo
