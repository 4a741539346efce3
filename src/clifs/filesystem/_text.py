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

"""Default text decoder used when a run does not supply its own."""

from __future__ import annotations

import codecs
from typing import Final

BOM: Final[str] = "\ufeff"

__all__ = ["BOM", "decode_text", "trim_bom"]


def trim_bom(text: str) -> str:
    """Strip a single leading byte-order mark."""
    return text[1:] if text.startswith(BOM) else text


def decode_text(data: bytes, encoding: str) -> str:
    """Decode ``data`` with ``encoding`` and strip a leading byte-order mark.

    Raises:
        ValueError: If ``encoding`` is not a known codec, or the bytes are
            not valid in that encoding (``UnicodeDecodeError``).
    """
    try:
        codec = codecs.lookup(encoding)
    except LookupError:
        msg = f"Unsupported encoding: {encoding}"
        raise ValueError(msg) from None
    return trim_bom(codec.decode(bytes(data))[0])
