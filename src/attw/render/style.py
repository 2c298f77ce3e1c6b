# Copyright 2025 CrownOps Engineering
#
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

"""ANSI styling and terminal display width helpers."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

ANSI: Final[MappingProxyType[str, str]] = MappingProxyType({
    "reset": "\033[0m",
    "bold": "\033[1m",
    "red": "\033[31m",
    "green": "\033[32m",
    "blue": "\033[34m",
})

_ANSI_PATTERN: Final[re.Pattern[str]] = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")
_ZERO_WIDTH: Final[frozenset[str]] = frozenset({"\u200b", "\u200c", "\u200d", "\ufe0e", "\ufe0f"})
_EMOJI_PRESENTATION: Final[str] = "\ufe0f"


@dataclass(slots=True, frozen=True)
class Style:
    """Presentation capabilities for one render pass.

    Attributes:
        color: Emit ANSI colour sequences.
        emoji: Use emoji glyphs.
    """

    color: bool = False
    emoji: bool = True

    def paint(self, text: str, code: str) -> str:
        if not self.color or not text:
            return text
        return f"{ANSI[code]}{text}{ANSI['reset']}"

    def bold(self, text: str) -> str:
        return self.paint(text, "bold")

    def red(self, text: str) -> str:
        return self.paint(text, "red")

    def green(self, text: str) -> str:
        return self.paint(text, "green")

    def blue(self, text: str) -> str:
        return self.paint(text, "blue")

    def glyph(self, symbol: str, text: str = "") -> str:
        """Prefix ``text`` with ``symbol`` when emoji are enabled."""
        if not self.emoji:
            return text
        return f"{symbol} {text}" if text else symbol


def strip_ansi(text: str) -> str:
    return _ANSI_PATTERN.sub("", text)


def display_width(text: str) -> int:
    """Return the number of terminal columns a single line occupies.

    East Asian wide and fullwidth characters count two columns. Combining
    marks, zero-width joiners, variation selectors and ANSI sequences count
    zero. A narrow symbol followed by the emoji presentation selector is
    rendered as a wide emoji and counts two.
    """
    width = 0
    previous = 0
    for char in strip_ansi(text):
        if char == _EMOJI_PRESENTATION and previous == 1:
            width += 1
            previous = 2
            continue
        if char in _ZERO_WIDTH or unicodedata.combining(char):
            continue
        previous = 2 if unicodedata.east_asian_width(char) in {"W", "F"} else 1
        width += previous
    return width


def pad(text: str, width: int, *, align: str = "left") -> str:
    """Pad ``text`` with spaces to ``width`` display columns."""
    fill = " " * max(width - display_width(text), 0)
    return fill + text if align == "right" else text + fill


__all__ = ["ANSI", "Style", "display_width", "pad", "strip_ansi"]
