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

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from clifs import IOConfig, RunContext

type TreeFactory = Callable[[Mapping[str, bytes | str | None]], Path]


@pytest.fixture
def run_context() -> RunContext:
    """Return a fresh, non-sandboxed run context."""
    return RunContext()


@pytest.fixture
def sandboxed_context() -> RunContext:
    return RunContext(config=IOConfig(sandboxed=True))


@pytest.fixture
def make_tree(tmp_path: Path) -> TreeFactory:
    """Return a factory that materialises ``{relative path: content}`` under tmp_path.

    A ``None`` value creates a directory instead of a file.
    """

    def factory(entries: Mapping[str, bytes | str | None]) -> Path:
        for relative, content in entries.items():
            target = tmp_path / relative
            if content is None:
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                _ = target.write_bytes(content)
            else:
                _ = target.write_text(content, encoding="utf-8")
        return tmp_path

    return factory
