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

"""User-facing validations that stop a run with a descriptive error."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..config import STDIN_PATH
from ..errors import MissingInputError, OutputValidationError
from ._probe import is_directory, is_file, is_sandboxed

if TYPE_CHECKING:
    from ..context import RunContext

__all__ = ["check_file_exists", "is_readable", "validate_output_dir"]


def is_readable(path: str, *, context: RunContext | None = None) -> bool:
    """True for files, stashed overrides and the standard-input sentinel."""
    if context is not None:
        if path in context.overrides or path == context.config.stdin_path:
            return True
    elif path == STDIN_PATH:
        return True
    return is_file(path, context=context)


def check_file_exists(path: str, *, context: RunContext | None = None) -> None:
    """Raise unless ``path`` can be read.

    Raises:
        MissingInputError: If the path is not a file, not stashed and not
            standard input.
    """
    if not is_readable(path, context=context):
        raise MissingInputError(path)


def validate_output_dir(path: str, *, context: RunContext | None = None) -> None:
    """Raise if the output directory ``path`` does not exist.

    Sandboxed runs skip the check.

    Raises:
        OutputValidationError: If ``path`` is not an existing directory.
    """
    if is_sandboxed(context):
        return
    if not is_directory(path, context=context):
        raise OutputValidationError(path)
