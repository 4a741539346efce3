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

"""Wildcard expansion of command-line path arguments.

Shells on most platforms expand ``*`` before the program starts; the Windows
command line does not, so expansion happens here. A pattern may carry a
wildcard in its filename and in the final directory segment::

    data/*.csv          files in data/
    2023-*/*.csv        files in every directory of . starting with 2023-
    exports/run-*/a.shp a.shp in every run-* directory of exports/

Wildcards in earlier segments are matched literally. Results follow the
order of the directory listings, which the platform does not guarantee to be
sorted.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..errors import NoMatchError
from ..logging import StructuredLogger, get_logger
from ._path import join_path, parse_local_path
from ._probe import EntryKind, probe
from ._wildcard import compile_wildcard, has_wildcard

if TYPE_CHECKING:
    from ..context import RunContext

__all__ = ["expand_directory_name", "expand_file_name", "expand_input_files"]

logger: StructuredLogger = get_logger(__name__, context={"component": "expand"})


def _list_entries(directory: str) -> list[str]:
    """List ``directory``, returning [] when it cannot be read."""
    try:
        return os.listdir(directory)
    except (OSError, ValueError) as err:
        logger.debug(
            "Directory listing failed.",
            event="filesystem.list_failed",
            context={"directory": directory, "error": type(err).__name__},
        )
        return []


def expand_directory_name(
    pattern: str,
    *,
    context: RunContext | None = None,
    require_match: bool = False,
) -> list[str]:
    """Expand a wildcard in the final segment of a directory name.

    Accepts names such as ``"."``, ``"data"``, ``"*"``, ``"data/*"`` or
    ``"2023-*"``. A name without a wildcard in its final segment comes back
    unchanged as a one-item list, whether or not it exists.

    Args:
        pattern: Directory name, optionally with ``*`` in its last segment.
        context: Run context; a sandboxed run matches nothing.
        require_match: Raise instead of returning an empty list.

    Raises:
        NoMatchError: If ``require_match`` is set and nothing matched.
    """
    info = parse_local_path(pattern)
    # The final directory segment is parsed as the filename.
    if not has_wildcard(info.filename):
        return [pattern]

    matcher = compile_wildcard(info.filename)
    dirs: list[str] = []
    for item in matcher.filter(_list_entries(info.directory or ".")):
        path = join_path(info.directory, item)
        if probe(path, context=context) is EntryKind.DIRECTORY:
            dirs.append(path)

    if require_match and not dirs:
        raise NoMatchError(pattern)
    return dirs


def expand_file_name(
    pattern: str,
    *,
    context: RunContext | None = None,
) -> list[str]:
    """Expand wildcards in a file path pattern into existing file paths.

    A pattern with no ``*`` anywhere is returned as ``[pattern]``; checking
    that it exists is left to the caller. Directories that cannot be listed
    are skipped.

    Raises:
        NoMatchError: If the pattern matched no files.
    """
    if not has_wildcard(pattern):
        return [pattern]

    info = parse_local_path(pattern)
    matcher = compile_wildcard(info.filename)
    files: list[str] = []
    for directory in expand_directory_name(info.directory or ".", context=context):
        for item in matcher.filter(_list_entries(directory)):
            path = join_path(directory, item)
            if probe(path, context=context) is EntryKind.FILE:
                files.append(path)

    if not files:
        raise NoMatchError(pattern)
    return files


def expand_input_files(
    names: Iterable[str],
    *,
    context: RunContext | None = None,
) -> list[str]:
    """Expand every wildcard argument, passing plain names through in order."""
    expanded: list[str] = []
    for name in names:
        if has_wildcard(name):
            expanded.extend(expand_file_name(name, context=context))
        else:
            expanded.append(name)
    return expanded
