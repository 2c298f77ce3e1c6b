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

"""Analysis data model produced by analyzers and consumed by the renderers.

An analysis is a tagged union on ``containsTypes``: :class:`TypedAnalysis`
carries the entry point x resolution kind matrix and the problems the analyzer
found, :class:`UntypedAnalysis` only identifies the package. Payloads use the
analyzer's camelCase keys; unknown keys are preserved so raw output can echo
the analyzer document faithfully.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Literal, TypeAlias, cast

from pydantic import BaseModel, ConfigDict, Field, JsonValue, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from attw._internal.exceptions import AttwValidationError
from attw.core.model_types import ModuleKind, ProblemKind, ResolutionKind
from attw.json import JSONMapping


class AnalysisPayloadError(AttwValidationError):
    """Raised when an analyzer returns a document that does not match the contract."""

    def __init__(self, detail: str) -> None:
        """Initialise the exception with a human readable detail string.

        Args:
            detail: Description of the contract violation.
        """
        self.detail = detail
        super().__init__(f"Invalid analysis payload: {detail}")


class _AnalysisModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )


class Problem(_AnalysisModel):
    """A single mismatch between declared types and runtime resolution.

    Attributes:
        kind: Problem kind from the closed vocabulary.
        entrypoint: Entry point subpath the problem was found on (``"."``, ``"./sub"``).
        resolution_kind: Resolution mode the problem was found under.
    """

    kind: ProblemKind
    entrypoint: str
    resolution_kind: ResolutionKind

    @field_validator("kind", mode="before")
    @classmethod
    def _normalise_kind(cls, value: object) -> object:
        if isinstance(value, str) and not isinstance(value, ProblemKind):
            return ProblemKind.from_str(value)
        return value

    @property
    def metadata(self) -> dict[str, object]:
        """Opaque analyzer-specific fields attached to the problem."""
        return dict(self.model_extra or {})


class ModuleKindInfo(_AnalysisModel):
    detected_kind: int | str | None = None
    detected_reason: str | None = None
    reason_file_name: str | None = None


class Resolution(_AnalysisModel):
    """A file an entry point resolved to under one resolution kind."""

    file_name: str
    is_typescript: bool = Field(default=False, alias="isTypeScript")
    is_json: bool = False
    module_kind: ModuleKindInfo | None = None

    @property
    def detected_module_kind(self) -> ModuleKind | None:
        if self.module_kind is None:
            return None
        return ModuleKind.coerce(self.module_kind.detected_kind)


class EntrypointResolution(_AnalysisModel):
    """Resolution outcome for one (entry point, resolution kind) pair."""

    name: str
    resolution_kind: ResolutionKind
    resolution: Resolution | None = None
    implementation_resolution: Resolution | None = None
    trace: tuple[str, ...] = ()


class TypedAnalysis(_AnalysisModel):
    """Analysis of a package that ships (or has) type declarations.

    Attributes:
        contains_types: Discriminant, always ``True``.
        package_name: Name of the analysed package.
        package_version: Version of the analysed package.
        types: Analyzer description of where the types come from.
        entrypoint_resolutions: Entry point -> resolution kind -> outcome, in
            analyzer order.
        problems: Problems in analyzer emission order (entry point major,
            resolution kind minor).
    """

    contains_types: Literal[True] = True
    package_name: str
    package_version: str
    types: JsonValue = None
    entrypoint_resolutions: dict[str, dict[ResolutionKind, EntrypointResolution]] = Field(default_factory=dict)
    problems: tuple[Problem, ...] = ()


class UntypedAnalysis(_AnalysisModel):
    """Analysis of a package without any type declarations."""

    contains_types: Literal[False] = False
    package_name: str
    package_version: str


Analysis: TypeAlias = TypedAnalysis | UntypedAnalysis
GroupedProblems: TypeAlias = dict[ProblemKind, tuple[Problem, ...]]


def parse_analysis(payload: Mapping[str, object]) -> Analysis:
    """Validate an analyzer document into the matching analysis variant.

    Args:
        payload: Decoded analyzer output.

    Returns:
        A :class:`TypedAnalysis` or :class:`UntypedAnalysis` selected by the
        ``containsTypes`` discriminant.

    Raises:
        AnalysisPayloadError: If the discriminant is missing or the payload
            does not validate against the selected variant.
    """
    tag = payload.get("containsTypes", payload.get("contains_types"))
    if not isinstance(tag, bool):
        msg = "containsTypes must be a boolean"
        raise AnalysisPayloadError(msg)
    model: type[TypedAnalysis] | type[UntypedAnalysis] = TypedAnalysis if tag else UntypedAnalysis
    try:
        return model.model_validate(dict(payload))
    except ValidationError as exc:
        raise AnalysisPayloadError(str(exc)) from exc


def get_problems(analysis: Analysis) -> tuple[Problem, ...]:
    """Return every problem of ``analysis`` in analyzer emission order."""
    if not analysis.contains_types:
        return ()
    return cast("TypedAnalysis", analysis).problems


def group_by_kind(problems: Iterable[Problem]) -> GroupedProblems:
    """Group problems by kind.

    Keys appear in order of first emission and each group keeps emission order.
    """
    grouped: dict[ProblemKind, list[Problem]] = {}
    for problem in problems:
        grouped.setdefault(problem.kind, []).append(problem)
    return {kind: tuple(items) for kind, items in grouped.items()}


def entrypoints(analysis: TypedAnalysis) -> list[str]:
    """Return the analysed entry points in analyzer order."""
    return list(analysis.entrypoint_resolutions)


def resolution_kinds(analysis: TypedAnalysis) -> list[ResolutionKind]:
    """Return the resolution kinds present in ``analysis`` in canonical order."""
    present = {kind for resolutions in analysis.entrypoint_resolutions.values() for kind in resolutions}
    present.update(problem.resolution_kind for problem in analysis.problems)
    return [kind for kind in ResolutionKind if kind in present]


def analysis_payload(analysis: Analysis) -> JSONMapping:
    """Serialise ``analysis`` using the analyzer's camelCase keys.

    Only fields the analyzer sent are emitted, explicit ``null`` values
    included, so the document round-trips.
    """
    document = cast("JSONMapping", analysis.model_dump(mode="json", by_alias=True, exclude_unset=True))
    return {"containsTypes": analysis.contains_types, **document}


def problem_payload(problem: Problem) -> JSONMapping:
    """Serialise ``problem`` using the analyzer's camelCase keys."""
    return cast("JSONMapping", problem.model_dump(mode="json", by_alias=True, exclude_unset=True))


__all__ = [
    "Analysis",
    "AnalysisPayloadError",
    "EntrypointResolution",
    "GroupedProblems",
    "ModuleKindInfo",
    "Problem",
    "Resolution",
    "TypedAnalysis",
    "UntypedAnalysis",
    "analysis_payload",
    "entrypoints",
    "get_problems",
    "group_by_kind",
    "parse_analysis",
    "problem_payload",
    "resolution_kinds",
]
