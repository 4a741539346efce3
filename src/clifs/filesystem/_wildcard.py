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

"""Glob-style ``*`` matching for single path segments.

Only ``*`` is special. Unlike :mod:`fnmatch`, characters such as ``?`` and
``[`` match themselves, which keeps names like ``data[1].csv`` literal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Final

WILDCARD: Final[str] = "*"

__all__ = [
    "WILDCARD",
    "WildcardMatcher",
    "compile_wildcard",
    "has_wildcard",
    "wildcard_to_regex",
]


def has_wildcard(text: str) -> bool:
    return WILDCARD in text


def wildcard_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a segment pattern into an anchored regular expression.

    Each literal run between wildcards is escaped; each ``*`` becomes ``.*``.
    """
    body = ".*".join(re.escape(part) for part in pattern.split(WILDCARD))
    return re.compile(body, re.DOTALL)


@dataclass(slots=True, frozen=True)
class WildcardMatcher:
    """Predicate over candidate entry names.

    Example::

        matcher = compile_wildcard("*.txt")
        matcher("a.txt")  # True
        matcher("a.csv")  # False
    """

    pattern: str
    regex: re.Pattern[str] = field(repr=False)

    def __call__(self, name: str) -> bool:
        return self.regex.fullmatch(name) is not None

    def filter(self, names: list[str]) -> list[str]:
        """Return the matching names, keeping their order."""
        return [name for name in names if self(name)]


def compile_wildcard(pattern: str) -> WildcardMatcher:
    return WildcardMatcher(pattern=pattern, regex=wildcard_to_regex(pattern))
