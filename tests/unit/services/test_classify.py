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

"""Unit tests for problem classification."""

from __future__ import annotations

import pytest

from attw._internal.exceptions import AttwTypeError
from attw.core.model_types import ProblemKind, ResolutionKind
from attw.services.classify import classify, problems_at
from tests.fixtures.builders import AnalysisBuilder

pytestmark = pytest.mark.unit


def _mixed_builder() -> AnalysisBuilder:
    return (
        AnalysisBuilder(entrypoints=[".", "./sub"])
        .with_problem("false-esm", resolution_kind="node16-cjs")
        .with_problem("FallbackCondition", entrypoint="./sub", resolution_kind="bundler")
        .with_problem("false-esm", entrypoint="./sub", resolution_kind="node16-cjs")
    )


def test_groups_by_kind_in_first_emission_order() -> None:
    classified = classify(_mixed_builder().typed())
    assert list(classified.grouped) == [ProblemKind.FALSE_ESM, ProblemKind.FALLBACK_CONDITION]
    assert [p.entrypoint for p in classified.grouped[ProblemKind.FALSE_ESM]] == [".", "./sub"]
    assert len(classified.problems) == 3
    assert classified.reportable == classified.problems
    assert classified.has_reportable is True


def test_ignored_kinds_are_not_reportable() -> None:
    classified = classify(_mixed_builder().typed(), ignore=[ProblemKind.FALSE_ESM])
    assert len(classified.problems) == 3
    assert [p.kind for p in classified.reportable] == [ProblemKind.FALLBACK_CONDITION]
    assert list(classified.reportable_grouped) == [ProblemKind.FALLBACK_CONDITION]
    assert list(classified.grouped) == [ProblemKind.FALSE_ESM, ProblemKind.FALLBACK_CONDITION]


def test_everything_ignored_leaves_nothing_reportable() -> None:
    classified = classify(
        _mixed_builder().typed(),
        ignore={ProblemKind.FALSE_ESM, ProblemKind.FALLBACK_CONDITION},
    )
    assert classified.has_reportable is False
    assert classified.reportable_grouped == {}


def test_clean_package_has_no_problems() -> None:
    classified = classify(AnalysisBuilder().typed())
    assert classified.problems == ()
    assert classified.grouped == {}
    assert classified.has_reportable is False


def test_untyped_analysis_cannot_be_classified() -> None:
    with pytest.raises(AttwTypeError, match="untyped package 'example-pkg'"):
        _ = classify(AnalysisBuilder().untyped())


def test_problems_at_selects_cell() -> None:
    problems = classify(_mixed_builder().typed()).problems
    cell = problems_at(problems, "./sub", ResolutionKind.NODE16_CJS)
    assert [p.kind for p in cell] == [ProblemKind.FALSE_ESM]
    assert problems_at(problems, ".", ResolutionKind.BUNDLER) == ()
