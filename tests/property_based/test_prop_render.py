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

"""Property-based tests for text layout helpers."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from attw.render.style import Style, display_width, pad, strip_ansi
from attw.render.table import Table, render_grid
from tests.property_based.strategies import plain_text

pytestmark = pytest.mark.property


@given(plain_text(), st.integers(min_value=0, max_value=40))
def test_pad_reaches_requested_width(text: str, width: int) -> None:
    padded = pad(text, width)
    assert display_width(padded) == max(width, display_width(text))
    assert padded.startswith(text)


@given(plain_text())
def test_paint_is_transparent_to_width(text: str) -> None:
    painted = Style(color=True).red(text)
    assert strip_ansi(painted) == text
    assert display_width(painted) == display_width(text)


@given(
    st.lists(
        st.text(alphabet="abc xyz", min_size=1, max_size=6),
        min_size=1,
        max_size=4,
    ),
)
def test_grid_lines_share_one_width(values: list[str]) -> None:
    table = Table(
        corner="",
        column_headers=tuple(f"c{index}" for index in range(len(values))),
        row_headers=("row",),
        cells=(tuple(values),),
    )
    widths = {display_width(line) for line in render_grid(table)}
    assert len(widths) == 1
    assert table.transposed().transposed() == table
