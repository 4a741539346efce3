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

"""Whole-file reads with override and standard-input handling."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from ..config import STDIN_PATH
from ..logging import StructuredLogger, get_logger
from ._text import decode_text

if TYPE_CHECKING:
    from ..context import OverrideContent, RunContext

__all__ = ["read_file", "read_stdin"]

logger: StructuredLogger = get_logger(__name__, context={"component": "reader"})


def read_stdin() -> bytes:
    """Read standard input to exhaustion."""
    return sys.stdin.buffer.read()


def read_file(
    path: str,
    encoding: str | None = None,
    *,
    context: RunContext | None = None,
) -> OverrideContent:
    """Read the entire content of ``path``.

    Lookup order:

    1. ``context.overrides``: the entry is removed and returned without
       touching the disk. A second read of the same path falls through.
    2. The standard-input sentinel: stdin is read in full, every time. It is
       never recorded as an input file.
    3. The disk. The path is appended to ``context.input_files`` before the
       read so a later overwrite check can protect it.

    When ``encoding`` is given and the content is bytes, it is decoded with
    the run's decoder (leading byte-order mark removed). Text content, and
    bytes read without an encoding, come back unchanged.

    Raises:
        FileNotFoundError: If the path is not stashed and does not exist.
        IsADirectoryError: If the path is a directory.
        ValueError: If the bytes cannot be decoded with ``encoding``.
    """
    stdin_path = context.config.stdin_path if context is not None else STDIN_PATH
    content: OverrideContent | None = None

    if context is not None:
        content = context.consume_override(path)
        if content is not None:
            logger.debug(
                "Served read from override store.",
                event="filesystem.override_consumed",
                context={"path": path},
            )

    if content is None:
        if path == stdin_path:
            content = read_stdin()
        else:
            if context is not None:
                context.record_input(path)
            content = Path(path).read_bytes()
            logger.debug(
                "Read file from disk.",
                event="filesystem.read",
                context={"path": path, "size_bytes": len(content)},
            )

    if encoding and isinstance(content, bytes | bytearray):
        decoder = context.decoder if context is not None else decode_text
        return decoder(bytes(content), encoding)
    return content
