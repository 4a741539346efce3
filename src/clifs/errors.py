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

"""Base exception hierarchy for :mod:`clifs`."""

from __future__ import annotations


class ClifsError(Exception):
    """Base class for all clifs exceptions.

    Every error raised deliberately by the filesystem layer derives from this
    class, so a command-line front end can turn any of them into a one-line
    message and a non-zero exit status with a single handler::

        try:
            paths = expand_file_name("data/*.csv", context=ctx)
        except ClifsError as e:
            print(e, file=sys.stderr)
            return 1

    Note:
        Subclasses also inherit from the closest built-in exception type
        (``FileNotFoundError``, ``RuntimeError``, ...) so generic handlers
        keep working.
    """


class NoMatchError(ClifsError, FileNotFoundError):
    """Raised when wildcard expansion produces no paths.

    The message quotes the pattern exactly as the user typed it.

    Example::

        try:
            expand_file_name("reports/*.geojson")
        except NoMatchError as e:
            assert e.pattern == "reports/*.geojson"
    """

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f"No files matched ({pattern})")


class MissingInputError(ClifsError, FileNotFoundError):
    """Raised when a required input is neither a file nor standard input."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File not found ({path})")


class DirectoryCreateError(ClifsError, RuntimeError):
    """Raised when an output directory cannot be created.

    The underlying ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, directory: str) -> None:
        self.directory = directory
        super().__init__(f"Unable to create output directory: {directory}")


class OutputValidationError(ClifsError, NotADirectoryError):
    """Raised when a designated output directory does not exist."""

    def __init__(self, directory: str) -> None:
        self.directory = directory
        super().__init__(f"Output directory not found: {directory}")


class ConfigError(ClifsError, ValueError):
    """Raised when clifs configuration is invalid."""


__all__ = [
    "ClifsError",
    "ConfigError",
    "DirectoryCreateError",
    "MissingInputError",
    "NoMatchError",
    "OutputValidationError",
]
