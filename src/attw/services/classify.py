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

"""Problem classification for typed analyses."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from attw._internal.exceptions import AttwTypeError
from attw._internal.logging_utils import structured_extra
from attw.core.analysis import GroupedProblems, Problem, TypedAnalysis, group_by_kind
from attw.core.model_types import LogComponent

if TYPE_CHECKING:
    from attw.core.analysis import Analysis
    from attw.core.model_types import ProblemKind, ResolutionKind

logger: logging.Logger = logging.getLogger("attw.services")


@dataclass(slots=True, frozen=True)
class ClassifiedProblems:
    """Problems of a typed analysis, grouped and filtered.

    Attributes:
        problems: Every problem in analyzer emission order.
        grouped: All problems grouped by kind, in order of first emission.
        reportable: Problems whose kind is not ignored, in emission order.
    """

    problems: tuple[Problem, ...]
    grouped: GroupedProblems
    reportable: tuple[Problem, ...]

    @property
    def has_reportable(self) -> bool:
        return bool(self.reportable)

    @property
    def reportable_grouped(self) -> GroupedProblems:
        return group_by_kind(self.reportable)


def classify(analysis: Analysis, ignore: Iterable[ProblemKind] = ()) -> ClassifiedProblems:
    """Group the problems of ``analysis`` and drop ignored kinds.

    Args:
        analysis: Typed analysis to classify.
        ignore: Problem kinds excluded from the reportable set.

    Returns:
        ClassifiedProblems: Grouped and filtered problems.

    Raises:
        AttwTypeError: If ``analysis`` does not contain types.
    """
    if not isinstance(analysis, TypedAnalysis):
        message = f"Cannot classify problems of untyped package '{analysis.package_name}'"
        raise AttwTypeError(message)
    ignored = frozenset(ignore)
    problems = tuple(analysis.problems)
    reportable = tuple(problem for problem in problems if problem.kind not in ignored)
    classified = ClassifiedProblems(problems=problems, grouped=group_by_kind(problems), reportable=reportable)
    logger.debug(
        "Classified %d problem(s), %d reportable",
        len(problems),
        len(reportable),
        extra=structured_extra(
            LogComponent.SERVICES,
            package=analysis.package_name,
            counts={str(kind): len(items) for kind, items in classified.grouped.items()},
        ),
    )
    return classified


def problems_at(
    problems: Iterable[Problem],
    entrypoint: str,
    resolution_kind: ResolutionKind,
) -> tuple[Problem, ...]:
    """Select the problems for one (entry point, resolution kind) cell."""
    return tuple(
        problem
        for problem in problems
        if problem.entrypoint == entrypoint and problem.resolution_kind is resolution_kind
    )


__all__ = ["ClassifiedProblems", "classify", "problems_at"]
