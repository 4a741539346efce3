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

"""Best-effort existence checks that never raise."""

from __future__ import annotations

import os
import stat
from enum import Enum
from typing import TYPE_CHECKING

from ..logging import StructuredLogger, get_logger

if TYPE_CHECKING:
    from ..context import RunContext

__all__ = ["EntryKind", "is_directory", "is_file", "is_sandboxed", "probe"]

logger: StructuredLogger = get_logger(__name__, context={"component": "probe"})


class EntryKind(Enum):
    """What a path refers to, as far as this layer cares.

    ``ABSENT`` covers missing paths, unreadable paths, and entries that are
    neither regular files nor directories (devices, sockets, FIFOs).
    """

    FILE = "file"
    DIRECTORY = "directory"
    ABSENT = "absent"


def is_sandboxed(context: RunContext | None) -> bool:
    return context is not None and context.sandboxed


def probe(path: str, *, context: RunContext | None = None) -> EntryKind:
    """Return the :class:`EntryKind` of ``path``.

    Missing paths, permission errors and any other stat failure come back
    as ``ABSENT``; callers cannot tell "missing" from "denied". In a
    sandboxed run every path is ``ABSENT``.
    """
    if is_sandboxed(context):
        return EntryKind.ABSENT
    try:
        mode = os.stat(path).st_mode
    except (OSError, ValueError) as err:
        logger.debug(
            "Stat failed.",
            event="filesystem.probe_failed",
            context={"path": path, "error": type(err).__name__},
        )
        return EntryKind.ABSENT
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    return EntryKind.ABSENT


def is_file(path: str, *, context: RunContext | None = None) -> bool:
    return probe(path, context=context) is EntryKind.FILE


def is_directory(path: str, *, context: RunContext | None = None) -> bool:
    return probe(path, context=context) is EntryKind.DIRECTORY
