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

"""Operator confirmation for manual updates.

Answers are matched exactly, case-sensitively, against a fixed set of
spellings. Only the line terminator is removed: " y" or "yes " are not
recognized. An unrecognized line is reported and the next one is read; if
input runs out first, the answer is "no".

Example:
    Reading from a string buffer:
        ```python
        import io
        from gitup.confirm import Console, read_confirmation

        console = Console(stdin=io.StringIO("maybe\\nyes\\n"), stdout=io.StringIO())
        read_confirmation(console)  # True, after reporting "maybe"
        ```

"""

from __future__ import annotations

import sys
from typing import Iterator, TextIO

from gitup.exceptions import UnrecognizedConfirmationError

YES_ANSWERS = frozenset({"y", "Y", "yes", "Yes", "YES"})
NO_ANSWERS = frozenset({"n", "N", "no", "No", "NO"})


class Console:
    """Line-oriented console input plus a message output sink.

    Streams default to sys.stdin/sys.stdout, looked up when used so that
    redirections made after construction are honored.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin
        self._stdout = stdout

    def lines(self) -> Iterator[str]:
        """Yield input lines without their line terminator."""
        stream = self._stdin if self._stdin is not None else sys.stdin
        for line in stream:
            if line.endswith("\n"):
                line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
            yield line

    def write(self, message: str) -> None:
        """Write one line of output."""
        stream = self._stdout if self._stdout is not None else sys.stdout
        print(message, file=stream)


def parse_confirmation(text: str) -> bool:
    """Return the boolean value represented by an operator answer.

    Accepts y, Y, yes, Yes, YES, n, N, no, No, NO.

    Raises:
        UnrecognizedConfirmationError: For any other text.

    """
    if text in YES_ANSWERS:
        return True
    if text in NO_ANSWERS:
        return False
    raise UnrecognizedConfirmationError(
        f"only accepts yes or no as valid response, got {text!r}"
    )


def read_confirmation(console: Console | None = None) -> bool:
    """Block until the operator answers yes or no.

    Args:
        console: Where to read answers and report unrecognized ones.
            Defaults to the process console.

    Returns:
        True for a yes answer, False for a no answer or exhausted input.

    """
    if console is None:
        console = Console()
    for line in console.lines():
        try:
            return parse_confirmation(line)
        except UnrecognizedConfirmationError as err:
            console.write(str(err))
    return False
