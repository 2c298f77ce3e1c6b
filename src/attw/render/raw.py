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

"""Raw JSON output (``--raw``)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from attw.core.analysis import analysis_payload, get_problems, group_by_kind, problem_payload
from attw.json import JSONMapping, dumps_compact

if TYPE_CHECKING:
    from attw.core.analysis import Analysis

    from .sink import OutputSink


def raw_payload(analysis: Analysis) -> JSONMapping:
    """Build the ``{"analysis": ..., "problems": ...}`` envelope.

    ``problems`` is present only for typed analyses and lists every problem
    grouped by kind; the ignore list does not apply to raw output.
    """
    document = analysis_payload(analysis)
    _ = document.pop("problems", None)
    payload: JSONMapping = {"analysis": document}
    if analysis.contains_types:
        payload["problems"] = {
            str(kind): [problem_payload(problem) for problem in items]
            for kind, items in group_by_kind(get_problems(analysis)).items()
        }
    return payload


def render_raw(analysis: Analysis, sink: OutputSink) -> None:
    sink.write_line(dumps_compact(raw_payload(analysis)))


__all__ = ["raw_payload", "render_raw"]
