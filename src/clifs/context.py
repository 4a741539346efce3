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

"""Run-scoped state shared by the filesystem operations of one invocation."""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from dataclasses import dataclass, field
from uuid import UUID, uuid4

from .config import IOConfig
from .filesystem._text import decode_text

type OverrideContent = bytes | str
type Decoder = Callable[[bytes, str], str]

__all__ = ["Decoder", "OverrideContent", "RunContext"]


@dataclass(slots=True)
class RunContext:
    """Mutable state carried through a single command-line run.

    A context is created once per invocation and passed explicitly to every
    read, write and probe that needs run state. Nothing here is guarded by a
    lock; callers that fan work out across threads must synchronise access
    to ``overrides`` and ``input_files`` themselves.

    Attributes:
        config: Resolved :class:`~clifs.config.IOConfig`.
        overrides: Path to in-memory content. ``read_file`` removes an entry
            when it returns it, so each entry is served at most once.
        input_files: Every path read from disk during the run, in read order.
            Standard input and override hits are not recorded.
        decoder: Turns raw bytes plus an encoding name into text.
        run_id: Correlation identifier for log records.

    Example::

        ctx = RunContext()
        ctx.stash("virtual.csv", b"a,b\\n1,2\\n")
        data = read_file("virtual.csv", context=ctx)
    """

    config: IOConfig = field(default_factory=IOConfig)
    overrides: MutableMapping[str, OverrideContent] = field(
        default_factory=dict[str, OverrideContent]
    )
    input_files: list[str] = field(default_factory=list[str])
    decoder: Decoder = decode_text
    run_id: UUID = field(default_factory=uuid4)

    @property
    def sandboxed(self) -> bool:
        """True when the run has no real filesystem access."""
        return self.config.sandboxed

    def stash(self, path: str, content: OverrideContent) -> None:
        """Register in-memory content to be served by the next read of ``path``."""
        self.overrides[path] = content

    def consume_override(self, path: str) -> OverrideContent | None:
        """Remove and return the stashed content for ``path``, if any."""
        return self.overrides.pop(path, None)

    def record_input(self, path: str) -> None:
        self.input_files.append(path)

    def was_read(self, path: str) -> bool:
        """Return True if ``path`` was read from disk earlier in this run."""
        return path in self.input_files

    def to_log_context(self) -> dict[str, str | bool]:
        return {"run_id": str(self.run_id), "sandboxed": self.sandboxed}
