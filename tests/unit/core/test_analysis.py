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

"""Unit tests for the analysis model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from attw.core.analysis import (
    AnalysisPayloadError,
    TypedAnalysis,
    UntypedAnalysis,
    analysis_payload,
    entrypoints,
    get_problems,
    group_by_kind,
    parse_analysis,
    problem_payload,
    resolution_kinds,
)
from attw.core.model_types import ModuleKind, ProblemKind, ResolutionKind
from tests.fixtures.builders import CJS_MODULE_KIND, AnalysisBuilder

pytestmark = pytest.mark.unit


def test_parse_analysis_selects_typed_variant(analysis_builder: AnalysisBuilder) -> None:
    analysis = parse_analysis(analysis_builder.with_problem("FalseESM").typed_payload())
    assert isinstance(analysis, TypedAnalysis)
    assert analysis.contains_types is True
    assert analysis.package_name == "example-pkg"
    assert analysis.problems[0].kind is ProblemKind.FALSE_ESM
    assert analysis.problems[0].resolution_kind is ResolutionKind.NODE16_CJS


def test_parse_analysis_selects_untyped_variant(analysis_builder: AnalysisBuilder) -> None:
    analysis = parse_analysis(analysis_builder.untyped_payload())
    assert isinstance(analysis, UntypedAnalysis)
    assert get_problems(analysis) == ()


@pytest.mark.parametrize("tag", [None, "yes", 1])
def test_parse_analysis_requires_boolean_discriminant(tag: object) -> None:
    payload: dict[str, object] = {"packageName": "x", "packageVersion": "1.0.0"}
    if tag is not None:
        payload["containsTypes"] = tag
    with pytest.raises(AnalysisPayloadError, match="containsTypes must be a boolean"):
        _ = parse_analysis(payload)


def test_parse_analysis_rejects_unknown_problem_kind(analysis_builder: AnalysisBuilder) -> None:
    payload = analysis_builder.with_problem("NotAProblem").typed_payload()
    with pytest.raises(AnalysisPayloadError) as excinfo:
        _ = parse_analysis(payload)
    assert isinstance(excinfo.value.__cause__, ValidationError)


def test_problem_metadata_is_preserved(analysis_builder: AnalysisBuilder) -> None:
    analysis = analysis_builder.with_problem("FalseCJS", typesFileName="/index.d.ts").typed()
    problem = analysis.problems[0]
    assert problem.metadata == {"typesFileName": "/index.d.ts"}
    assert problem_payload(problem) == {
        "kind": "false-cjs",
        "entrypoint": ".",
        "resolutionKind": "node16-cjs",
        "typesFileName": "/index.d.ts",
    }


def test_models_are_frozen(analysis_builder: AnalysisBuilder) -> None:
    analysis = analysis_builder.typed()
    with pytest.raises(ValidationError):
        analysis.package_name = "other"  # type: ignore[misc]


def test_group_by_kind_preserves_emission_order(analysis_builder: AnalysisBuilder) -> None:
    analysis = (
        analysis_builder.with_problem("FalseESM", resolution_kind="node10")
        .with_problem("FalseCJS", resolution_kind="node16-cjs")
        .with_problem("FalseESM", resolution_kind="bundler")
        .typed()
    )
    grouped = group_by_kind(analysis.problems)
    assert list(grouped) == [ProblemKind.FALSE_ESM, ProblemKind.FALSE_CJS]
    assert [problem.resolution_kind for problem in grouped[ProblemKind.FALSE_ESM]] == [
        ResolutionKind.NODE10,
        ResolutionKind.BUNDLER,
    ]


def test_entrypoints_and_resolution_kinds() -> None:
    builder = AnalysisBuilder(
        entrypoints=[".", "./utils"],
        resolution_kinds=(ResolutionKind.BUNDLER, ResolutionKind.NODE10),
    )
    analysis = builder.typed()
    assert entrypoints(analysis) == [".", "./utils"]
    assert resolution_kinds(analysis) == [ResolutionKind.NODE10, ResolutionKind.BUNDLER]


def test_resolution_kinds_include_problem_only_kinds() -> None:
    builder = AnalysisBuilder(resolution_kinds=(ResolutionKind.NODE10,))
    analysis = builder.with_problem("NoResolution", resolution_kind="node16-esm").typed()
    assert resolution_kinds(analysis) == [ResolutionKind.NODE10, ResolutionKind.NODE16_ESM]


def test_detected_module_kind() -> None:
    analysis = AnalysisBuilder(module_kind=CJS_MODULE_KIND).typed()
    outcome = analysis.entrypoint_resolutions["."][ResolutionKind.NODE10]
    assert outcome.resolution is not None
    assert outcome.resolution.is_typescript is True
    assert outcome.resolution.detected_module_kind is ModuleKind.CJS


def test_detected_module_kind_absent() -> None:
    analysis = AnalysisBuilder(module_kind=None).typed()
    outcome = analysis.entrypoint_resolutions["."][ResolutionKind.NODE10]
    assert outcome.resolution is not None
    assert outcome.resolution.detected_module_kind is None


def test_analysis_payload_uses_camel_case(analysis_builder: AnalysisBuilder) -> None:
    payload = analysis_payload(analysis_builder.with_problem("FalseESM").typed())
    assert payload["containsTypes"] is True
    assert payload["packageName"] == "example-pkg"
    resolutions = payload["entrypointResolutions"]
    assert isinstance(resolutions, dict)
    root = resolutions["."]
    assert isinstance(root, dict)
    assert set(root) == {"node10", "node16-cjs", "node16-esm", "bundler"}
