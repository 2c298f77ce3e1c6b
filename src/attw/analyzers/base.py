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

"""Analyzer protocol and the errors analyzers may raise.

An analyzer inspects a package's declared types and module resolution
behaviour and returns an :data:`~attw.core.analysis.Analysis`. attw treats it
as an opaque collaborator: it only chooses which entry point to call and maps
failures for reporting.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from attw._internal.exceptions import AttwError, AttwValidationError
from attw.core.analysis import get_problems, group_by_kind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from attw.core.analysis import Analysis, GroupedProblems, Problem


class AnalyzerError(AttwError):
    """Raised when an analyzer fails to produce an analysis.

    Attributes:
        code: Machine readable error code reported by the analyzer, if any.
    """

    def __init__(self, message: str, *, code: str | None = None) -> None:
        """Initialise the exception with a message and optional code.

        Args:
            message: Human readable failure description.
            code: Analyzer supplied error code (for example ``ERR_MODULE_NOT_FOUND``).
        """
        self.code = code
        super().__init__(message)


class FetchError(AnalyzerError):
    """Raised when the package could not be fetched from the registry."""


class UnknownAnalyzerError(AttwValidationError):
    """Raised when an analyzer name is not registered."""

    def __init__(self, name: str, available: tuple[str, ...]) -> None:
        """Initialise the exception with the requested and available names.

        Args:
            name: Analyzer name that was requested.
            available: Names of all registered analyzers.
        """
        self.name = name
        self.available = available
        super().__init__(f"Unknown analyzer '{name}'. Available analyzers: {', '.join(available)}")


class BaseAnalyzer(Protocol):
    """Protocol that builtin and plugin analyzers implement.

    ``check_package`` and ``check_tgz`` are required. ``get_problems`` and
    ``group_by_kind`` default to the shared implementations in
    :mod:`attw.core.analysis`.

    Attributes:
        name: Unique identifier used by ``--analyzer``.
    """

    name: str

    def check_package(self, name: str, version: str | None = None) -> Analysis:
        """Analyse a package fetched from the registry.

        Args:
            name: Registry package name.
            version: Optional version or tag; ``None`` selects the latest.

        Returns:
            Analysis: Typed or untyped analysis of the package.
        """
        ...  # pragma: no cover

    def check_tgz(self, data: bytes) -> Analysis:
        """Analyse a package from the bytes of a ``.tgz`` archive.

        Args:
            data: Archive contents.

        Returns:
            Analysis: Typed or untyped analysis of the package.
        """
        ...  # pragma: no cover

    def get_problems(self, analysis: Analysis) -> tuple[Problem, ...]:
        _ = self
        return get_problems(analysis)

    def group_by_kind(self, problems: Iterable[Problem]) -> GroupedProblems:
        _ = self
        return group_by_kind(problems)


__all__ = ["AnalyzerError", "BaseAnalyzer", "FetchError", "UnknownAnalyzerError"]
