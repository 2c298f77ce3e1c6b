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

"""Report rendering.

Exactly one of three outputs is produced per run: the raw JSON envelope, the
typed table report, or the untyped notice. Quiet mode is handled by the
caller binding a :class:`DiscardSink`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from attw._internal.exceptions import AttwTypeError
from attw._internal.logging_utils import structured_extra
from attw.core.analysis import TypedAnalysis
from attw.core.model_types import LogComponent

from .raw import raw_payload, render_raw
from .sink import DiscardSink, OutputSink, StreamSink
from .style import Style, display_width
from .typed import render_typed
from .untyped import UNTYPED_NOTICE, render_untyped

if TYPE_CHECKING:
    from attw.core.analysis import Analysis
    from attw.options import Options
    from attw.services.classify import ClassifiedProblems

logger: logging.Logger = logging.getLogger("attw.render")


def render_report(
    options: Options,
    analysis: Analysis,
    classified: ClassifiedProblems | None,
    sink: OutputSink,
) -> None:
    """Render ``analysis`` to ``sink`` according to ``options``.

    Args:
        options: Normalised options (raw, layout, emoji, colour).
        analysis: Analysis to report.
        classified: Classification of a typed analysis; ``None`` when untyped.
        sink: Output destination.

    Raises:
        AttwTypeError: If a typed analysis is rendered without a classification.
    """
    style = Style(color=options.color, emoji=options.emoji)
    if options.raw:
        mode = "raw"
        render_raw(analysis, sink)
    elif isinstance(analysis, TypedAnalysis):
        if classified is None:
            message = "Typed analyses must be classified before rendering"
            raise AttwTypeError(message)
        mode = "vertical" if options.vertical else "grid"
        render_typed(
            analysis,
            classified,
            sink,
            style=style,
            summary=options.summary,
            vertical=options.vertical,
            flipped=options.flipped,
        )
    else:
        mode = "untyped"
        render_untyped(analysis, sink, style=style)
    logger.debug(
        "Rendered %s report",
        mode,
        extra=structured_extra(LogComponent.RENDER, package=analysis.package_name),
    )


__all__ = [
    "UNTYPED_NOTICE",
    "DiscardSink",
    "OutputSink",
    "StreamSink",
    "Style",
    "display_width",
    "raw_payload",
    "render_raw",
    "render_report",
    "render_typed",
    "render_untyped",
]
