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

"""Exit status selection for strict mode."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from attw.core.analysis import Analysis
    from attw.options import Options
    from attw.services.classify import ClassifiedProblems


class ExitStatus(IntEnum):
    SUCCESS = 0
    PROBLEMS = 1


def exit_status(
    options: Options,
    analysis: Analysis,
    classified: ClassifiedProblems | None,
) -> ExitStatus:
    """Return the process exit status for a completed run.

    Strict mode fails only for typed analyses with at least one reportable
    problem. Quiet mode has no effect on the result.

    Args:
        options: Normalised options.
        analysis: Analysis that was rendered.
        classified: Classification of ``analysis``; ``None`` for untyped packages.

    Returns:
        ExitStatus: ``PROBLEMS`` when strict mode fails, ``SUCCESS`` otherwise.
    """
    if not options.strict or not analysis.contains_types or classified is None:
        return ExitStatus.SUCCESS
    return ExitStatus.PROBLEMS if classified.has_reportable else ExitStatus.SUCCESS


__all__ = ["ExitStatus", "exit_status"]
