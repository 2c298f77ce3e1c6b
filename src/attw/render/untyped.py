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

"""Notice for packages that ship no type declarations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from attw.core.analysis import UntypedAnalysis

    from .sink import OutputSink
    from .style import Style

UNTYPED_NOTICE: Final[str] = "This package does not contain types."


def render_untyped(analysis: UntypedAnalysis, sink: OutputSink, *, style: Style) -> None:
    sink.write_line()
    sink.write_line(style.bold(UNTYPED_NOTICE))
    sink.write_line(f"Details: {analysis.package_name} v{analysis.package_version}")


__all__ = ["UNTYPED_NOTICE", "render_untyped"]
