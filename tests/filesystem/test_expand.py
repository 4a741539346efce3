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

"""Tests for directory and file wildcard expansion.

Listing order is platform-defined, so results are compared as sets or after
sorting.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from clifs import NoMatchError, RunContext
from clifs.filesystem._expand import (
    expand_directory_name,
    expand_file_name,
    expand_input_files,
)

type TreeFactory = Callable[[Mapping[str, bytes | str | None]], Path]


@pytest.fixture
def data_tree(make_tree: TreeFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    root = make_tree(
        {
            "a.txt": "a",
            "b.txt": "b",
            "a.csv": "1,2",
            "notes.txt": None,
            "data/2023-01/x.csv": "x",
            "data/2023-02/y.csv": "y",
            "data/2023-02/y.txt": "y",
            "data/2023-03.csv": "file, not dir",
            "data/2024-01/z.csv": "z",
            "data/readme.md": "r",
        }
    )
    monkeypatch.chdir(root)
    return root


@pytest.mark.usefixtures("data_tree")
class TestExpandDirectoryName:
    """Test expand_directory_name function."""

    def test_plain_name_returned_unchanged(self) -> None:
        assert expand_directory_name("data") == ["data"]

    def test_missing_plain_name_still_returned(self) -> None:
        assert expand_directory_name("no/such/dir") == ["no/such/dir"]

    def test_current_directory(self) -> None:
        assert expand_directory_name(".") == ["."]

    def test_wildcard_final_segment(self) -> None:
        result = expand_directory_name("data/2023-*")
        assert sorted(result) == [
            os.path.join("data", "2023-01"),
            os.path.join("data", "2023-02"),
        ]

    def test_files_are_excluded(self) -> None:
        result = expand_directory_name("data/*")
        assert os.path.join("data", "2023-03.csv") not in result
        assert os.path.join("data", "readme.md") not in result
        assert len(result) == 3

    def test_bare_wildcard_lists_current_directory(self) -> None:
        assert sorted(expand_directory_name("*")) == ["data", "notes.txt"]

    def test_missing_parent_gives_empty(self) -> None:
        assert expand_directory_name("missing/*") == []

    def test_require_match_raises(self) -> None:
        with pytest.raises(NoMatchError) as excinfo:
            _ = expand_directory_name("data/1999-*", require_match=True)
        assert excinfo.value.pattern == "data/1999-*"

    def test_wildcard_in_intermediate_segment_is_literal(self) -> None:
        assert expand_directory_name("da*/2023-01") == ["da*/2023-01"]

    def test_sandboxed_matches_nothing(self, sandboxed_context: RunContext) -> None:
        assert expand_directory_name("data/*", context=sandboxed_context) == []


@pytest.mark.usefixtures("data_tree")
class TestExpandFileName:
    """Test expand_file_name function."""

    def test_star_txt_in_current_directory(self) -> None:
        assert set(expand_file_name("*.txt")) == {"a.txt", "b.txt"}

    def test_directories_are_not_files(self) -> None:
        assert "notes.txt" not in expand_file_name("*.txt")

    def test_no_wildcard_returns_input(self) -> None:
        assert expand_file_name("a.txt") == ["a.txt"]

    def test_no_wildcard_missing_file_returns_input(self) -> None:
        assert expand_file_name("ghost.txt") == ["ghost.txt"]

    def test_wildcard_in_directory_and_filename(self) -> None:
        result = expand_file_name("data/2023-*/*.csv")
        assert sorted(result) == [
            os.path.join("data", "2023-01", "x.csv"),
            os.path.join("data", "2023-02", "y.csv"),
        ]

    def test_wildcard_only_in_directory(self) -> None:
        result = expand_file_name("data/*/y.txt")
        assert result == [os.path.join("data", "2023-02", "y.txt")]

    def test_explicit_directory(self) -> None:
        assert expand_file_name("data/*.md") == [os.path.join("data", "readme.md")]

    def test_absolute_pattern(self, data_tree: Path) -> None:
        result = expand_file_name(f"{data_tree.as_posix()}/*.csv")
        assert result == [os.path.join(str(data_tree), "a.csv")]

    def test_no_match_raises_with_pattern(self) -> None:
        with pytest.raises(NoMatchError) as excinfo:
            _ = expand_file_name("*.geojson")
        assert excinfo.value.pattern == "*.geojson"
        assert "*.geojson" in str(excinfo.value)

    def test_missing_directory_raises_no_match(self) -> None:
        with pytest.raises(NoMatchError):
            _ = expand_file_name("missing/*.txt")

    def test_no_match_is_file_not_found(self) -> None:
        with pytest.raises(FileNotFoundError):
            _ = expand_file_name("*.nothing")

    def test_unreadable_directory_is_skipped(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        real_listdir = os.listdir
        blocked = os.path.join("data", "2023-01")

        def flaky(path: str = ".") -> list[str]:
            if path == blocked:
                raise PermissionError(13, "Permission denied", path)
            return real_listdir(path)

        monkeypatch.setattr(os, "listdir", flaky)
        result = expand_file_name("data/2023-*/*.csv")
        assert result == [os.path.join("data", "2023-02", "y.csv")]

    def test_sandboxed_raises_no_match(self, sandboxed_context: RunContext) -> None:
        with pytest.raises(NoMatchError):
            _ = expand_file_name("*.txt", context=sandboxed_context)


@pytest.mark.usefixtures("data_tree")
class TestExpandInputFiles:
    def test_mixes_literal_and_wildcard(self) -> None:
        result = expand_input_files(["a.csv", "*.txt", "ghost.json"])
        assert result[0] == "a.csv"
        assert set(result[1:3]) == {"a.txt", "b.txt"}
        assert result[3] == "ghost.json"

    def test_empty_input(self) -> None:
        assert expand_input_files([]) == []

    def test_propagates_no_match(self) -> None:
        with pytest.raises(NoMatchError):
            _ = expand_input_files(["a.csv", "*.nope"])
