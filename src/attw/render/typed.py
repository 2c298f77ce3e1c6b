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

"""Tabular report for packages that contain types.

The report is a title line, an optional summary of reportable problem kinds,
and a table of entry points against resolution kinds. Each cell lists the
reportable problems found for that pair, or a pass marker with the module
format the entry point resolved to.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from attw.core.analysis import TypedAnalysis, entrypoints, resolution_kinds
from attw.core.model_types import ModuleKind
from attw.core.vocabulary import problem_description, problem_emoji, problem_label, rule_name
from attw.services.classify import problems_at

from .table import Table, render_grid, render_vertical

if TYPE_CHECKING:
    from attw.core.model_types import ProblemKind, ResolutionKind
    from attw.services.classify import ClassifiedProblems

    from .sink import OutputSink
    from .style import Style

PASS_EMOJI: Final[str] = "\N{LARGE GREEN CIRCLE}"
PASS_TEXT: Final[str] = "OK"
NO_PROBLEMS_TEXT: Final[str] = "No problems found"
NO_PROBLEMS_EMOJI: Final[str] = "\N{GLOWING STAR}"
SUMMARY_INDENT: Final[str] = "  "


def entrypoint_label(package_name: str, entrypoint: str) -> str:
    """Return the display name of an entry point (``"pkg"`` or ``"pkg/sub"``)."""
    suffix = "" if entrypoint == "." else entrypoint.removeprefix(".")
    return f'"{package_name}{suffix}"'


def _module_kind_text(analysis: TypedAnalysis, entrypoint: str, kind: ResolutionKind) -> str:
    outcome = analysis.entrypoint_resolutions.get(entrypoint, {}).get(kind)
    if outcome is None or outcome.resolution is None:
        return ""
    if outcome.resolution.is_json:
        return "(JSON)"
    match outcome.resolution.detected_module_kind:
        case ModuleKind.ESM:
            return "(ESM)"
        case ModuleKind.CJS:
            return "(CJS)"
        case _:
            return ""


def _cell(
    analysis: TypedAnalysis,
    classified: ClassifiedProblems,
    entrypoint: str,
    kind: ResolutionKind,
    style: Style,
) -> str:
    found = problems_at(classified.reportable, entrypoint, kind)
    if found:
        kinds: dict[ProblemKind, None] = dict.fromkeys(problem.kind for problem in found)
        return "\n".join(style.red(style.glyph(problem_emoji(item), problem_label(item))) for item in kinds)
    marker = PASS_EMOJI if style.emoji else PASS_TEXT
    module_kind = _module_kind_text(analysis, entrypoint, kind)
    return style.green(f"{marker} {module_kind}".rstrip())


def _row_entrypoints(analysis: TypedAnalysis) -> list[str]:
    ordered = dict.fromkeys(entrypoints(analysis))
    ordered.update(dict.fromkeys(problem.entrypoint for problem in analysis.problems))
    return list(ordered)


def build_table(analysis: TypedAnalysis, classified: ClassifiedProblems, style: Style) -> Table:
    """Build the entry point x resolution kind table (entry points as rows)."""
    rows = _row_entrypoints(analysis)
    columns = resolution_kinds(analysis)
    return Table(
        corner="",
        column_headers=tuple(style.bold(kind.label) for kind in columns),
        row_headers=tuple(style.bold(entrypoint_label(analysis.package_name, row)) for row in rows),
        cells=tuple(tuple(_cell(analysis, classified, row, column, style) for column in columns) for row in rows),
    )


def summary_lines(classified: ClassifiedProblems, style: Style) -> list[str]:
    """Return the per-kind summary block for the reportable problems."""
    grouped = classified.reportable_grouped
    if not grouped:
        return [f"{NO_PROBLEMS_TEXT} {NO_PROBLEMS_EMOJI}" if style.emoji else NO_PROBLEMS_TEXT]
    lines: list[str] = []
    for kind, items in grouped.items():
        heading = f"{style.bold(problem_label(kind))} ({rule_name(kind)}): {len(items)}"
        lines.append(style.glyph(problem_emoji(kind), heading))
        lines.append(f"{SUMMARY_INDENT}{problem_description(kind)}")
    return lines


def render_typed(
    analysis: TypedAnalysis,
    classified: ClassifiedProblems,
    sink: OutputSink,
    *,
    style: Style,
    summary: bool = True,
    vertical: bool = False,
    flipped: bool = False,
) -> None:
    """Write the typed report to ``sink``.

    Args:
        analysis: Typed analysis being reported.
        classified: Classification of ``analysis`` under the active ignore set.
        sink: Output destination.
        style: Colour and emoji capabilities.
        summary: Print the summary block above the table.
        vertical: Print one record per row instead of a grid.
        flipped: Put entry points on the column axis.
    """
    sink.write_line()
    sink.write_line(style.bold(f"{analysis.package_name} v{analysis.package_version}"))
    sink.write_line()
    if summary:
        for line in summary_lines(classified, style):
            sink.write_line(line)
        sink.write_line()
    table = build_table(analysis, classified, style)
    if flipped:
        table = table.transposed()
    for line in render_vertical(table) if vertical else render_grid(table):
        sink.write_line(line)


__all__ = [
    "build_table",
    "entrypoint_label",
    "render_typed",
    "summary_lines",
]
