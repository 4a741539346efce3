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

"""Filesystem access for command-line data tools.

This package resolves paths, expands ``*`` wildcards into concrete file
lists, probes entries, reads whole files and writes output synchronously.
It moves bytes and resolves names; it never interprets file contents.

Example usage::

    from clifs import RunContext
    from clifs.filesystem import expand_input_files, read_file, write_file

    ctx = RunContext()
    for path in expand_input_files(["data/*.csv"], context=ctx):
        text = read_file(path, "utf-8", context=ctx)
        write_file(f"out/{path}", text.upper(), context=ctx)
"""

from __future__ import annotations

from ._bridge import drain_stream, is_async_source
from ._checks import check_file_exists, is_readable, validate_output_dir
from ._expand import expand_directory_name, expand_file_name, expand_input_files
from ._path import PathInfo, join_path, normalize_separators, parse_local_path
from ._probe import EntryKind, is_directory, is_file, is_sandboxed, probe
from ._read import read_file, read_stdin
from ._text import BOM, decode_text, trim_bom
from ._wildcard import (
    WILDCARD,
    WildcardMatcher,
    compile_wildcard,
    has_wildcard,
    wildcard_to_regex,
)
from ._write import (
    ChunkedWriteResult,
    as_byte_view,
    create_dir_if_needed,
    is_stream,
    write_file,
    write_file_in_chunks,
    write_stream,
)

__all__ = [
    "BOM",
    "WILDCARD",
    "ChunkedWriteResult",
    "EntryKind",
    "PathInfo",
    "WildcardMatcher",
    "as_byte_view",
    "check_file_exists",
    "compile_wildcard",
    "create_dir_if_needed",
    "decode_text",
    "drain_stream",
    "expand_directory_name",
    "expand_file_name",
    "expand_input_files",
    "has_wildcard",
    "is_async_source",
    "is_directory",
    "is_file",
    "is_readable",
    "is_sandboxed",
    "is_stream",
    "join_path",
    "normalize_separators",
    "parse_local_path",
    "probe",
    "read_file",
    "read_stdin",
    "trim_bom",
    "validate_output_dir",
    "wildcard_to_regex",
    "write_file",
    "write_file_in_chunks",
    "write_stream",
]
