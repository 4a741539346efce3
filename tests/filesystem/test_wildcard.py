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

"""Tests for single-segment ``*`` matching."""

from __future__ import annotations

import pytest
from hypothesis import assume, given, settings, strategies as st

from clifs.filesystem._wildcard import (
    compile_wildcard,
    has_wildcard,
    wildcard_to_regex,
)

_names = st.text(
    alphabet=st.characters(exclude_characters="*/", exclude_categories=("Cs",)),
    max_size=20,
)


class TestHasWildcard:
    def test_detects_star(self) -> None:
        assert has_wildcard("*.txt")

    def test_plain_name(self) -> None:
        assert not has_wildcard("a.txt")


class TestCompileWildcard:
    """Test compile_wildcard matching semantics."""

    def test_star_suffix_pattern(self) -> None:
        matcher = compile_wildcard("*.txt")
        assert matcher("a.txt")
        assert matcher("b.txt")
        assert not matcher("a.csv")
        assert not matcher("a.txt.bak")

    def test_star_matches_empty_run(self) -> None:
        assert compile_wildcard("*.txt")(".txt")
        assert compile_wildcard("data*")("data")

    def test_star_in_middle(self) -> None:
        matcher = compile_wildcard("2023-*-final.csv")
        assert matcher("2023-06-final.csv")
        assert matcher("2023--final.csv")
        assert not matcher("2024-06-final.csv")

    def test_lone_star_matches_everything(self) -> None:
        matcher = compile_wildcard("*")
        assert matcher("")
        assert matcher("anything at all")

    @pytest.mark.parametrize(
        "name",
        ["data[1].csv", "a+b.txt", "(x).json", "cost$.csv", "a.b", "q?.txt", "^x|y"],
    )
    def test_regex_metacharacters_are_literal(self, name: str) -> None:
        matcher = compile_wildcard(name)
        assert matcher(name)

    def test_dot_is_not_any_character(self) -> None:
        assert not compile_wildcard("a.b")("axb")

    def test_question_mark_is_literal(self) -> None:
        assert not compile_wildcard("a?.txt")("ab.txt")

    def test_brackets_are_literal_around_star(self) -> None:
        matcher = compile_wildcard("[draft]*.md")
        assert matcher("[draft]notes.md")
        assert not matcher("dnotes.md")

    def test_filter_keeps_order(self) -> None:
        matcher = compile_wildcard("*.txt")
        assert matcher.filter(["b.txt", "a.csv", "a.txt"]) == ["b.txt", "a.txt"]

    def test_matcher_repr_shows_pattern(self) -> None:
        assert "*.txt" in repr(compile_wildcard("*.txt"))


class TestWildcardToRegex:
    def test_literal_parts_escaped(self) -> None:
        regex = wildcard_to_regex("a.b*")
        assert regex.fullmatch("a.bcd")
        assert not regex.fullmatch("axbcd")


@given(_names)
def test_pattern_without_star_matches_only_itself(name: str) -> None:
    matcher = compile_wildcard(name)
    assert matcher(name)


@given(_names, _names)
@settings(max_examples=200)
def test_pattern_without_star_rejects_other_names(name: str, other: str) -> None:
    assume(name != other)
    assert not compile_wildcard(name)(other)


@given(_names, _names, _names)
def test_star_matches_any_infix(prefix: str, infix: str, suffix: str) -> None:
    matcher = compile_wildcard(f"{prefix}*{suffix}")
    assert matcher(f"{prefix}{infix}{suffix}")
