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

"""Model types and enumerations for attw.

This module defines the closed enumerations used throughout attw:

- Problem kinds reported by the analyzer
- Module resolution kinds evaluated for each entry point
- Log formats and loggable components
"""

from __future__ import annotations

from typing import Final

from attw.compat import StrEnum


class ProblemKind(StrEnum):
    """Closed set of problems an analyzer can report.

    Values are the stable kebab-case identifiers. Analyzers built on the
    upstream TypeScript core emit PascalCase labels (``FalseESM``); those are
    accepted by :meth:`from_str` and normalised to the identifiers below.
    Members are only ever appended so saved ignore lists keep working.

    Attributes:
        NO_RESOLUTION: Module resolution failed outright.
        UNTYPED_RESOLUTION: Resolution found JavaScript but no types.
        FALSE_CJS: Types claim CommonJS while the runtime module is ESM.
        FALSE_ESM: Types claim ESM while the runtime module is CommonJS.
        CJS_RESOLVES_TO_ESM: A ``require`` resolves to an ES module.
        FALLBACK_CONDITION: Resolution relied on a fallback condition.
        CJS_ONLY_EXPORTS_DEFAULT: CommonJS module only exports ``default``.
        FALSE_EXPORT_DEFAULT: Types declare a default export the runtime lacks.
        UNEXPECTED_ESM_SYNTAX: ESM syntax found in a CommonJS file.
        UNEXPECTED_CJS_SYNTAX: CommonJS syntax found in an ES module file.
    """

    NO_RESOLUTION = "no-resolution"
    UNTYPED_RESOLUTION = "untyped-resolution"
    FALSE_CJS = "false-cjs"
    FALSE_ESM = "false-esm"
    CJS_RESOLVES_TO_ESM = "cjs-resolves-to-esm"
    FALLBACK_CONDITION = "fallback-condition"
    CJS_ONLY_EXPORTS_DEFAULT = "cjs-only-exports-default"
    FALSE_EXPORT_DEFAULT = "false-export-default"
    UNEXPECTED_ESM_SYNTAX = "unexpected-esm-syntax"
    UNEXPECTED_CJS_SYNTAX = "unexpected-cjs-syntax"

    @classmethod
    def from_str(cls, raw: str) -> ProblemKind:
        """Create a ProblemKind from an identifier or an analyzer label.

        Args:
            raw: Kebab-case identifier or upstream PascalCase label.

        Returns:
            ProblemKind enum value.

        Raises:
            ValueError: If the string does not match any known problem kind.
        """
        value = raw.strip()
        alias = _ANALYZER_LABELS.get(value)
        if alias is not None:
            return alias
        try:
            return cls(value.lower())
        except ValueError as exc:
            msg = f"Unknown problem kind '{raw}'"
            raise ValueError(msg) from exc


_ANALYZER_LABELS: Final[dict[str, ProblemKind]] = {
    "NoResolution": ProblemKind.NO_RESOLUTION,
    "UntypedResolution": ProblemKind.UNTYPED_RESOLUTION,
    "FalseCJS": ProblemKind.FALSE_CJS,
    "FalseESM": ProblemKind.FALSE_ESM,
    "CJSResolvesToESM": ProblemKind.CJS_RESOLVES_TO_ESM,
    "FallbackCondition": ProblemKind.FALLBACK_CONDITION,
    "CJSOnlyExportsDefault": ProblemKind.CJS_ONLY_EXPORTS_DEFAULT,
    "FalseExportDefault": ProblemKind.FALSE_EXPORT_DEFAULT,
    "UnexpectedESMSyntax": ProblemKind.UNEXPECTED_ESM_SYNTAX,
    "UnexpectedCJSSyntax": ProblemKind.UNEXPECTED_CJS_SYNTAX,
}


class ResolutionKind(StrEnum):
    """Module resolution modes under which each entry point is evaluated.

    Declaration order is the canonical table order.
    """

    NODE10 = "node10"
    NODE16_CJS = "node16-cjs"
    NODE16_ESM = "node16-esm"
    BUNDLER = "bundler"

    @property
    def label(self) -> str:
        """Human readable column/row heading for the resolution kind."""
        return _RESOLUTION_LABELS[self]


_RESOLUTION_LABELS: Final[dict[ResolutionKind, str]] = {
    ResolutionKind.NODE10: "node10",
    ResolutionKind.NODE16_CJS: "node16 (from CJS)",
    ResolutionKind.NODE16_ESM: "node16 (from ESM)",
    ResolutionKind.BUNDLER: "bundler",
}


class ModuleKind(StrEnum):
    """Detected module format of a resolved file."""

    CJS = "CJS"
    ESM = "ESM"

    @classmethod
    def coerce(cls, raw: object) -> ModuleKind | None:
        """Coerce a TypeScript ``ModuleKind`` number or label to a ModuleKind.

        Args:
            raw: ``1``/``99`` as emitted by the TypeScript compiler, or the
                strings ``"CJS"``/``"ESM"``.

        Returns:
            ModuleKind value, or ``None`` when the input is not recognised.
        """
        if isinstance(raw, ModuleKind):
            return raw
        if isinstance(raw, bool):
            return None
        if isinstance(raw, int):
            return _TS_MODULE_KINDS.get(raw)
        if isinstance(raw, str):
            value = raw.strip().upper()
            if value in cls._value2member_map_:
                return cls(value)
        return None


_TS_MODULE_KINDS: Final[dict[int, ModuleKind]] = {
    1: ModuleKind.CJS,
    99: ModuleKind.ESM,
}


class LogFormat(StrEnum):
    """Enumeration of log output formats.

    Attributes:
        TEXT: Human-readable text format.
        JSON: Machine-readable JSON format.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class LogComponent(StrEnum):
    """Enumeration of loggable system components."""

    CLI = "cli"
    CONFIG = "config"
    ANALYZER = "analyzer"
    SERVICES = "services"
    RENDER = "render"


__all__ = [
    "LogComponent",
    "LogFormat",
    "ModuleKind",
    "ProblemKind",
    "ResolutionKind",
]
