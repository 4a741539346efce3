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

"""Blocking bridge from asynchronous byte sources to synchronous writes.

The filesystem layer exposes only synchronous calls. An asynchronous source
(an async generator, or any object implementing ``__aiter__``) is drained
on a dedicated worker thread that owns its own event loop, while the caller
blocks on a completion event. Because the worker creates a fresh loop, the
source must not be bound to another running loop.

There is no timeout: a source that never finishes blocks the caller forever.
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import AsyncIterable
from dataclasses import dataclass, field
from typing import BinaryIO

from ..logging import StructuredLogger, get_logger

__all__ = ["drain_stream", "is_async_source"]

logger: StructuredLogger = get_logger(__name__, context={"component": "stream_bridge"})

type ChunkSource = AsyncIterable[bytes | bytearray | memoryview | str]


def is_async_source(obj: object) -> bool:
    return isinstance(obj, AsyncIterable)


@dataclass(slots=True)
class _DrainOutcome:
    """Result slot filled in by the worker thread."""

    done: threading.Event = field(default_factory=threading.Event)
    bytes_written: int = 0
    error: BaseException | None = None


async def _pump(source: ChunkSource, handle: BinaryIO) -> int:
    total = 0
    async for chunk in source:
        data = chunk.encode("utf-8") if isinstance(chunk, str) else chunk
        total += handle.write(data)
    handle.flush()
    return total


def drain_stream(source: ChunkSource, handle: BinaryIO, *, name: str = "") -> int:
    """Copy every chunk of ``source`` into ``handle``, blocking until done.

    ``str`` chunks are encoded as UTF-8. Exceptions raised by the source or
    by ``handle`` are re-raised in the calling thread. ``handle`` is flushed
    but not closed.

    Returns:
        Total bytes written.
    """
    outcome = _DrainOutcome()

    def _thread_target() -> None:
        loop = asyncio.new_event_loop()
        try:
            outcome.bytes_written = loop.run_until_complete(_pump(source, handle))
        except BaseException as exc:
            outcome.error = exc
        finally:
            loop.run_until_complete(loop.shutdown_asyncgens())
            loop.close()
            outcome.done.set()

    worker = threading.Thread(
        target=_thread_target,
        name=f"clifs-drain-{name}" if name else "clifs-drain",
        daemon=True,
    )
    worker.start()
    _ = outcome.done.wait()
    worker.join()

    if outcome.error is not None:
        raise outcome.error

    logger.debug(
        "Stream drained.",
        event="filesystem.stream_drained",
        context={"destination": name, "bytes_written": outcome.bytes_written},
    )
    return outcome.bytes_written
