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

"""Structural path parsing for command-line arguments.

Functions here never touch the filesystem:

    parse_local_path: Split a path into directory and filename parts
    join_path: Join a directory and an entry name into a lookup path
"""

from __future__ import annotations

import os
from dataclasses import dataclass

__all__ = [
    "PathInfo",
    "join_path",
    "normalize_separators",
    "parse_local_path",
]


@dataclass(slots=True, frozen=True)
class PathInfo:
    """Directory and filename parts of a path string.

    Attributes:
        directory: Everything before the last separator. Empty when the
            path has no directory component (the current directory).
        filename: The final segment. May be a plain name, a wildcard
            pattern, or empty when the path ends with a separator.
        basename: ``filename`` without its extension.
        extension: Text after the last ``.`` in ``filename``, or "".

    Example::

        info = parse_local_path("data/2023-*")
        info.directory  # "data"
        info.filename  # "2023-*"
    """

    directory: str
    filename: str
    basename: str
    extension: str

    @property
    def path(self) -> str:
        """Directory and filename joined back into a lookup path."""
        if not self.directory:
            return self.filename
        if self.directory.endswith("/"):
            return f"{self.directory}{self.filename}"
        return f"{self.directory}/{self.filename}"


def normalize_separators(path: str) -> str:
    """Convert Windows-style separators to ``/``.

    Only paths written entirely with backslashes are converted; a path that
    already contains ``/`` is returned unchanged so that backslashes inside
    POSIX names survive.

    Examples:
        >>> normalize_separators("data\\\\shapes\\\\*.shp")
        'data/shapes/*.shp'
        >>> normalize_separators("data/a\\\\b")
        'data/a\\\\b'
    """
    if "/" not in path and "\\" in path:
        return path.replace("\\", "/")
    return path


def parse_local_path(path: str) -> PathInfo:
    """Split ``path`` at its last separator.

    Examples:
        >>> parse_local_path("out/map.json").directory
        'out'
        >>> parse_local_path("map.json").directory
        ''
        >>> parse_local_path("/map.json").directory
        '/'
    """
    normalized = normalize_separators(path)
    directory, sep, filename = normalized.rpartition("/")
    if sep and not directory:
        directory = "/"

    dot = filename.rfind(".")
    if dot > -1:
        basename, extension = filename[:dot], filename[dot + 1 :]
    else:
        basename, extension = filename, ""

    return PathInfo(
        directory=directory,
        filename=filename,
        basename=basename,
        extension=extension,
    )


def join_path(directory: str, name: str) -> str:
    """Join ``name`` onto ``directory`` and normalize the result.

    An empty directory means the current directory, and a leading ``./`` is
    collapsed so that names found in ``.`` come back bare.

    Examples:
        >>> join_path("", "a.txt")
        'a.txt'
        >>> join_path(".", "a.txt")
        'a.txt'
    """
    if not directory:
        return name
    return os.path.normpath(os.path.join(directory, name))
