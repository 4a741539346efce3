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

"""Command-line entry point for ``clifs``."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from .config import load_config
from .context import RunContext
from .errors import ClifsError
from .filesystem import (
    check_file_exists,
    expand_directory_name,
    expand_input_files,
    join_path,
    parse_local_path,
    read_file,
    validate_output_dir,
    write_file,
)
from .logging import StructuredLogger, configure_logging, get_logger

if TYPE_CHECKING:
    from .context import OverrideContent

__all__ = ["CLIError", "main"]

logger: StructuredLogger = get_logger(__name__, context={"component": "cli"})

_STDIN_ALIAS = "-"


class CLIError(ClifsError):
    """Raised when a command cannot proceed safely."""


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    log = logger
    try:
        configure_logging(
            level=args.log_level,
            json_mode=None if args.log_format is None else args.log_format == "json",
        )
        config = load_config(args.config)
        context = RunContext(config=config)
        log = logger.bind(**context.to_log_context())
        if args.command == "expand":
            return _handle_expand(args, context)
        if args.command == "cat":
            return _handle_cat(args, context)
        return _handle_copy(args, context)
    except (ClifsError, OSError) as error:
        log.debug(
            "Command failed.",
            event="cli.error",
            context={"command": args.command, "error": type(error).__name__},
        )
        print(f"Error: {error}", file=sys.stderr)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clifs",
        description="Expand, read and write files the way clifs-based tools do.",
    )
    _ = parser.add_argument(
        "--config", type=Path, help="Path to a TOML or YAML config file."
    )
    _ = parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"),
        default=None,
        help="Logging level (default: INFO).",
    )
    _ = parser.add_argument(
        "--log-format", choices=("text", "json"), help="Log output format."
    )

    subcommands = parser.add_subparsers(dest="command", required=True)

    expand_parser = subcommands.add_parser("expand", help="Print expanded paths.")
    _ = expand_parser.add_argument("patterns", nargs="+", metavar="PATTERN")
    _ = expand_parser.add_argument(
        "--dirs",
        action="store_true",
        help="Expand directory names instead of file names.",
    )

    cat_parser = subcommands.add_parser("cat", help="Concatenate inputs.")
    _ = cat_parser.add_argument("inputs", nargs="+", metavar="INPUT")
    _ = cat_parser.add_argument(
        "-o", "--output", help="Output path (default: standard output)."
    )
    _ = cat_parser.add_argument(
        "--encoding", help="Decode inputs with this encoding and write text."
    )

    copy_parser = subcommands.add_parser("copy", help="Copy inputs into a directory.")
    _ = copy_parser.add_argument("inputs", nargs="+", metavar="INPUT")
    _ = copy_parser.add_argument("--out-dir", required=True, help="Existing directory.")
    _ = copy_parser.add_argument(
        "--force",
        action="store_true",
        help="Allow overwriting files that were read as input.",
    )

    return parser


def _resolve_inputs(names: Sequence[str], context: RunContext) -> list[str]:
    stdin_path = context.config.stdin_path
    resolved = [stdin_path if name == _STDIN_ALIAS else name for name in names]
    paths = expand_input_files(resolved, context=context)
    for path in paths:
        check_file_exists(path, context=context)
    return paths


def _guard_overwrite(path: str, context: RunContext, *, force: bool) -> None:
    """Refuse to write over a file consumed earlier in this run."""
    if force:
        return
    target = os.path.abspath(path)
    if any(os.path.abspath(read) == target for read in context.input_files):
        msg = f"Refusing to overwrite an input file: {path} (use --force)"
        raise CLIError(msg)


def _handle_expand(args: argparse.Namespace, context: RunContext) -> int:
    for pattern in args.patterns:
        if args.dirs:
            paths = expand_directory_name(pattern, context=context, require_match=True)
        else:
            paths = expand_input_files([pattern], context=context)
        for path in paths:
            print(path)
    return 0


def _handle_cat(args: argparse.Namespace, context: RunContext) -> int:
    paths = _resolve_inputs(args.inputs, context)
    output = args.output or context.config.stdout_path

    if args.encoding:
        texts = [str(read_file(path, args.encoding, context=context)) for path in paths]
        _guard_overwrite(output, context, force=False)
        write_file(output, "".join(texts), context=context)
        return 0

    parts: list[bytes] = []
    for path in paths:
        content = read_file(path, context=context)
        parts.append(content.encode("utf-8") if isinstance(content, str) else content)
    _guard_overwrite(output, context, force=False)
    write_file(output, b"".join(parts), context=context)
    return 0


def _handle_copy(args: argparse.Namespace, context: RunContext) -> int:
    validate_output_dir(args.out_dir, context=context)
    paths = _resolve_inputs(args.inputs, context)

    # Read every input before the first write.
    planned: list[tuple[str, OverrideContent]] = []
    seen: dict[str, str] = {}
    for path in paths:
        content = read_file(path, context=context)
        destination = join_path(args.out_dir, parse_local_path(path).filename)
        key = os.path.abspath(destination)
        if key in seen:
            msg = (
                f"Inputs {seen[key]} and {path} would both be written to "
                f"{destination}"
            )
            raise CLIError(msg)
        seen[key] = path
        planned.append((destination, content))

    for destination, _ in planned:
        _guard_overwrite(destination, context, force=args.force)
    for destination, content in planned:
        write_file(destination, content, context=context)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
