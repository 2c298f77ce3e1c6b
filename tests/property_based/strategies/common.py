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

"""Shared Hypothesis strategies for property-based tests."""

from __future__ import annotations

from hypothesis import strategies as st

from attw.core.model_types import ProblemKind, ResolutionKind

__all__ = [
    "arbitrary_noise",
    "entrypoint_subpaths",
    "plain_text",
    "problem_kinds",
    "problem_payloads",
    "resolution_kinds",
]


def problem_kinds() -> st.SearchStrategy[ProblemKind]:
    return st.sampled_from(list(ProblemKind))


def resolution_kinds() -> st.SearchStrategy[ResolutionKind]:
    return st.sampled_from(list(ResolutionKind))


def entrypoint_subpaths() -> st.SearchStrategy[str]:
    """Return a strategy yielding ``"."`` or ``"./segment"`` subpaths."""
    segment = st.from_regex(r"[a-z][a-z0-9-]{0,8}", fullmatch=True)
    return st.one_of(st.just("."), segment.map(lambda name: f"./{name}"))


def problem_payloads(max_size: int = 12) -> st.SearchStrategy[list[dict[str, object]]]:
    """Return a strategy yielding analyzer problem payloads.

    Args:
        max_size: Maximum number of problems in one list.

    Returns:
        Hypothesis strategy producing lists of camelCase problem mappings.
    """
    problem = st.builds(
        lambda kind, entrypoint, resolution: {
            "kind": kind.value,
            "entrypoint": entrypoint,
            "resolutionKind": resolution.value,
        },
        problem_kinds(),
        entrypoint_subpaths(),
        resolution_kinds(),
    )
    return st.lists(problem, max_size=max_size)


def plain_text(max_size: int = 30) -> st.SearchStrategy[str]:
    """Single-line text without control characters."""
    return st.text(
        alphabet=st.characters(blacklist_categories=("Cc", "Cs")),
        max_size=max_size,
    )


def arbitrary_noise() -> st.SearchStrategy[object]:
    """Inputs that coercion helpers must tolerate.

    Returns:
        Hypothesis strategy emitting arbitrary noise values (str/int/bool/None).
    """
    return st.one_of(st.text(), st.integers(), st.booleans(), st.none())
