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

"""Synchronous output writes.

``write_file`` dispatches on the shape of the content:

- ``str``: written whole as UTF-8.
- Async iterables and binary file objects: drained to completion before
  the call returns.
- Buffer-protocol objects (``bytes``, ``bytearray``, ``memoryview``,
  ``array.array``, ...): written in chunks of at most
  ``IOConfig.chunk_size`` bytes. Some platforms reject a single write that
  is larger than their write limit even when the buffer itself is valid,
  so large outputs are never handed over in one call.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO, Protocol, cast

from ..config import DEFAULT_CHUNK_SIZE, STDOUT_PATH
from ..errors import DirectoryCreateError
from ..logging import StructuredLogger, get_logger
from ._bridge import drain_stream, is_async_source
from ._path import parse_local_path
from ._probe import is_directory, is_sandboxed

if TYPE_CHECKING:
    from ..context import RunContext

__all__ = [
    "ChunkedWriteResult",
    "as_byte_view",
    "create_dir_if_needed",
    "is_stream",
    "write_file",
    "write_file_in_chunks",
    "write_stream",
]

logger: StructuredLogger = get_logger(__name__, context={"component": "writer"})

_COPY_BUFSIZE = 1024 * 1024


class _RawWriter(Protocol):
    def write(self, data: memoryview, /) -> int | None: ...


@dataclass(slots=True, frozen=True)
class ChunkedWriteResult:
    """Outcome of a chunked binary write.

    Attributes:
        path: Destination path as given.
        bytes_written: Bytes actually accepted by the destination.
        chunks: Number of write calls issued.
    """

    path: str
    bytes_written: int
    chunks: int


def _stdout_path(context: RunContext | None) -> str:
    return context.config.stdout_path if context is not None else STDOUT_PATH


def is_stream(content: object) -> bool:
    """True for async iterables and readable binary file objects."""
    if isinstance(content, str | bytes | bytearray | memoryview):
        return False
    return is_async_source(content) or callable(getattr(content, "read", None))


def as_byte_view(content: object) -> memoryview:
    """Return a flat, byte-addressed view over any buffer-protocol object.

    Typed arrays such as ``array.array("d", ...)`` come back as their raw
    bytes without copying.

    Raises:
        TypeError: If ``content`` does not support the buffer protocol.
    """
    try:
        view = memoryview(cast(bytes, content))
    except TypeError:
        msg = f"Unsupported content type for writing: {type(content).__name__}"
        raise TypeError(msg) from None
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


def create_dir_if_needed(path: str, *, context: RunContext | None = None) -> None:
    """Create the parent directory of ``path`` when it is missing.

    Skipped for the standard-output sentinel, for paths without a directory
    component, and in sandboxed runs, which have no filesystem to create in.

    Raises:
        DirectoryCreateError: If the directory cannot be created.
    """
    directory = parse_local_path(path).directory
    if not directory or path == _stdout_path(context) or is_sandboxed(context):
        return
    if is_directory(directory, context=context):
        return
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as err:
        raise DirectoryCreateError(directory) from err
    logger.info(
        "Created output directory: %s",
        directory,
        event="filesystem.dir_created",
        context={"directory": directory},
    )


@contextmanager
def _open_binary(
    path: str, *, context: RunContext | None, buffered: bool = True
) -> Iterator[BinaryIO]:
    """Open ``path`` for binary writing; stdout is flushed, never closed."""
    if path == _stdout_path(context):
        stream = sys.stdout.buffer
        try:
            yield stream
        finally:
            stream.flush()
        return
    with open(path, "wb", buffering=-1 if buffered else 0) as handle:
        yield cast(BinaryIO, handle)


def _write_text(path: str, content: str, *, context: RunContext | None) -> None:
    if path == _stdout_path(context):
        _ = sys.stdout.write(content)
        sys.stdout.flush()
        return
    with open(path, "w", encoding="utf-8", newline="") as handle:
        _ = handle.write(content)


def _write_chunks(
    handle: _RawWriter, view: memoryview, chunk_size: int
) -> tuple[int, int]:
    """Issue bounded writes until ``view`` is exhausted or progress stops.

    Returns:
        ``(bytes_written, chunks)``.
    """
    offset = 0
    chunks = 0
    total = len(view)
    while offset < total:
        bytes_to_write = min(chunk_size, total - offset)
        bytes_written = handle.write(view[offset : offset + bytes_to_write]) or 0
        chunks += 1
        if bytes_written <= 0:
            logger.warning(
                "Write made no progress; stopping.",
                event="filesystem.zero_progress",
                context={"offset": offset, "remaining": total - offset},
            )
            break
        offset += bytes_written
    return offset, chunks


def write_file_in_chunks(
    path: str,
    content: object,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    *,
    context: RunContext | None = None,
) -> ChunkedWriteResult:
    """Write a byte buffer with at most ``chunk_size`` bytes per write call.

    The destination is opened unbuffered so every chunk maps to one write
    call; short writes resume at the first unwritten byte. The handle is
    closed on every path.
    """
    if chunk_size <= 0:
        msg = f"chunk_size must be positive (got {chunk_size})."
        raise ValueError(msg)
    view = as_byte_view(content)
    with _open_binary(path, context=context, buffered=False) as handle:
        bytes_written, chunks = _write_chunks(
            cast(_RawWriter, handle), view, chunk_size
        )
    logger.debug(
        "Chunked write complete.",
        event="filesystem.chunked_write",
        context={"path": path, "bytes_written": bytes_written, "chunks": chunks},
    )
    return ChunkedWriteResult(path=path, bytes_written=bytes_written, chunks=chunks)


def write_stream(
    path: str, stream: object, *, context: RunContext | None = None
) -> int:
    """Drain ``stream`` into ``path`` and return the number of bytes written.

    Does not return until the source is exhausted and the destination is
    flushed and closed.
    """
    with _open_binary(path, context=context) as handle:
        if is_async_source(stream):
            return drain_stream(stream, handle, name=path)  # type: ignore[arg-type]
        reader = cast(BinaryIO, stream)
        total = 0
        while chunk := reader.read(_COPY_BUFSIZE):
            data = chunk.encode("utf-8") if isinstance(chunk, str) else chunk
            total += handle.write(data)
        handle.flush()
        return total


def write_file(
    path: str, content: object, *, context: RunContext | None = None
) -> None:
    """Persist ``content`` at ``path``, creating the parent directory first.

    Raises:
        DirectoryCreateError: If the output directory cannot be created.
        TypeError: If ``content`` is not text, a stream, or a byte buffer.
    """
    create_dir_if_needed(path, context=context)
    if isinstance(content, str):
        _write_text(path, content, context=context)
    elif is_stream(content):
        _ = write_stream(path, content, context=context)
    else:
        chunk_size = (
            context.config.chunk_size if context is not None else DEFAULT_CHUNK_SIZE
        )
        _ = write_file_in_chunks(path, content, chunk_size, context=context)
