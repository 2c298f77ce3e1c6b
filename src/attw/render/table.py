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

"""Text table layout for the typed report.

A :class:`Table` is a header row plus a matrix of cells; every cell may span
several lines. :func:`render_grid` draws it with box-drawing characters and
:func:`render_vertical` prints one record per row with each field on its own
line. Widths are measured in terminal columns so emoji and ANSI styled text
line up.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .style import display_width, pad, strip_ansi

RECORD_RULE: Final[str] = "*" * 27


@dataclass(slots=True, frozen=True)
class Table:
    """Two-axis table.

    Attributes:
        corner: Text in the top-left cell.
        column_headers: One header per column.
        row_headers: One header per row.
        cells: ``cells[row][column]``; multi-line cells use ``\\n``.
    """

    corner: str
    column_headers: tuple[str, ...]
    row_headers: tuple[str, ...]
    cells: tuple[tuple[str, ...], ...]

    def transposed(self) -> Table:
        return Table(
            corner=self.corner,
            column_headers=self.row_headers,
            row_headers=self.column_headers,
            cells=tuple(zip(*self.cells, strict=True)) if self.cells else tuple(() for _ in self.column_headers),
        )


def _lines(text: str) -> list[str]:
    return text.split("\n")


def _block_width(texts: list[str]) -> int:
    return max((display_width(line) for text in texts for line in _lines(text)), default=0)


def _rule(widths: list[int], left: str, middle: str, right: str) -> str:
    return left + middle.join("─" * (width + 2) for width in widths) + right


def _row_lines(values: list[str], widths: list[int]) -> list[str]:
    split = [_lines(value) for value in values]
    height = max(len(lines) for lines in split)
    rendered: list[str] = []
    for index in range(height):
        parts = [
            " " + pad(lines[index] if index < len(lines) else "", width) + " "
            for lines, width in zip(split, widths, strict=True)
        ]
        rendered.append("│" + "│".join(parts) + "│")
    return rendered


def render_grid(table: Table) -> list[str]:
    """Draw ``table`` as a box-drawing grid and return its lines."""
    widths = [_block_width([table.corner, *table.row_headers])]
    for column, header in enumerate(table.column_headers):
        widths.append(_block_width([header, *(row[column] for row in table.cells)]))
    lines = [_rule(widths, "┌", "┬", "┐")]
    lines.extend(_row_lines([table.corner, *table.column_headers], widths))
    for header, row in zip(table.row_headers, table.cells, strict=True):
        lines.append(_rule(widths, "├", "┼", "┤"))
        lines.extend(_row_lines([header, *row], widths))
    lines.append(_rule(widths, "└", "┴", "┘"))
    return lines


def render_vertical(table: Table) -> list[str]:
    """Print one ``-E`` style record per row with right-aligned field labels."""
    label_width = _block_width(list(table.column_headers))
    indent = " " * (label_width + 2)
    lines: list[str] = []
    for index, (header, row) in enumerate(zip(table.row_headers, table.cells, strict=True), start=1):
        lines.append(f"{RECORD_RULE} {index}. {strip_ansi(header)} {RECORD_RULE}")
        for label, value in zip(table.column_headers, row, strict=True):
            first, *rest = _lines(value)
            lines.append(f"{pad(label, label_width, align='right')}: {first}")
            lines.extend(f"{indent}{line}" for line in rest)
    return lines


__all__ = ["Table", "render_grid", "render_vertical"]
