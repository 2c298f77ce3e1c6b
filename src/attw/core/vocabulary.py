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

"""Problem vocabulary: user-facing names and presentation for each problem kind.

The vocabulary is a frozen, bidirectional mapping between :class:`ProblemKind`
members and the rule names accepted by ``--ignore``. Presentation data (emoji,
short label, long description) lives alongside so every renderer reads from a
single table. Completeness is checked when the module is imported.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from attw._internal.exceptions import AttwError, AttwValidationError
from attw.core.model_types import ProblemKind


class VocabularyError(AttwError):
    """Raised when the problem vocabulary tables are inconsistent."""


class UnknownIgnoreRuleError(AttwValidationError):
    """Raised when an ignore rule name does not map to a problem kind."""

    def __init__(self, rule: str, allowed: tuple[str, ...]) -> None:
        """Initialise the exception with the offending rule and valid choices.

        Args:
            rule: Rule name supplied by the user.
            allowed: Rule names accepted by the vocabulary.
        """
        self.rule = rule
        self.allowed = allowed
        allowed_text = ", ".join(allowed)
        super().__init__(f"Unknown ignore rule '{rule}'. Valid rules: {allowed_text}")


@dataclass(slots=True, frozen=True)
class ProblemInfo:
    """Presentation metadata for a single problem kind.

    Attributes:
        rule: External rule name used by ``--ignore`` and config files.
        emoji: Glyph shown in tables and summaries when emoji are enabled.
        label: Short label used in table cells.
        description: One-paragraph explanation used in the summary block.
    """

    rule: str
    emoji: str
    label: str
    description: str


_PROBLEM_INFO: Final[Mapping[ProblemKind, ProblemInfo]] = MappingProxyType(
    {
        ProblemKind.NO_RESOLUTION: ProblemInfo(
            rule="no-resolution",
            emoji="\N{SKULL}",
            label="Resolution failed",
            description="Import failed to resolve to type declarations or JavaScript files.",
        ),
        ProblemKind.UNTYPED_RESOLUTION: ProblemInfo(
            rule="untyped-resolution",
            emoji="\N{CROSS MARK}",
            label="No types",
            description="Import resolved to JavaScript files, but no type declarations were found.",
        ),
        ProblemKind.FALSE_CJS: ProblemInfo(
            rule="false-cjs",
            emoji="\N{PERFORMING ARTS}",
            label="Masquerading as CJS",
            description="Import resolved to a CommonJS type declaration file, but an ESM JavaScript file.",
        ),
        ProblemKind.FALSE_ESM: ProblemInfo(
            rule="false-esm",
            emoji="\N{JAPANESE GOBLIN}",
            label="Masquerading as ESM",
            description="Import resolved to an ESM type declaration file, but a CommonJS JavaScript file.",
        ),
        ProblemKind.CJS_RESOLVES_TO_ESM: ProblemInfo(
            rule="cjs-resolves-to-esm",
            emoji="\N{WARNING SIGN}\N{VARIATION SELECTOR-16}",
            label="ESM (dynamic import only)",
            description=(
                "A require call resolved to an ESM JavaScript file, which is an error in Node and some "
                "bundlers. CommonJS consumers will need to use a dynamic import."
            ),
        ),
        ProblemKind.FALLBACK_CONDITION: ProblemInfo(
            rule="fallback-condition",
            emoji="\N{BUG}",
            label="Used fallback condition",
            description=(
                "Import resolved to types through a conditional package.json export, but only after "
                "failing to resolve through an earlier condition. This relies on TypeScript behavior "
                "that may change in future versions."
            ),
        ),
        ProblemKind.CJS_ONLY_EXPORTS_DEFAULT: ProblemInfo(
            rule="cjs-only-exports-default",
            emoji="\N{FACE WITH ONE EYEBROW RAISED}",
            label="CJS default export",
            description=(
                "CommonJS module simulates a default export with exports.default and exports.__esModule, "
                "but does not also set module.exports for compatibility with Node."
            ),
        ),
        ProblemKind.FALSE_EXPORT_DEFAULT: ProblemInfo(
            rule="false-export-default",
            emoji="\N{HEAVY EXCLAMATION MARK SYMBOL}",
            label="Incorrect default export",
            description=(
                "The resolved types use export default where the JavaScript file appears to use "
                "module.exports =. Consumers compiling for node16 will need an extra .default access."
            ),
        ),
        ProblemKind.UNEXPECTED_ESM_SYNTAX: ProblemInfo(
            rule="unexpected-esm-syntax",
            emoji="\N{NO SMOKING SYMBOL}",
            label="Unexpected ESM syntax",
            description="Package has a types file with ESM syntax that is interpreted as CommonJS.",
        ),
        ProblemKind.UNEXPECTED_CJS_SYNTAX: ProblemInfo(
            rule="unexpected-cjs-syntax",
            emoji="\N{NON-POTABLE WATER SYMBOL}",
            label="Unexpected CJS syntax",
            description="Package has a types file with CommonJS syntax that is interpreted as ESM.",
        ),
    },
)


def _build_reverse_index(info: Mapping[ProblemKind, ProblemInfo]) -> Mapping[str, ProblemKind]:
    missing = [kind.value for kind in ProblemKind if kind not in info]
    if missing:
        message = f"Problem vocabulary is missing entries for: {', '.join(missing)}"
        raise VocabularyError(message)
    reverse: dict[str, ProblemKind] = {}
    for kind, entry in info.items():
        if entry.rule in reverse:
            message = f"Rule name '{entry.rule}' is shared by {reverse[entry.rule].value} and {kind.value}"
            raise VocabularyError(message)
        reverse[entry.rule] = kind
    return MappingProxyType(reverse)


_KIND_BY_RULE: Final[Mapping[str, ProblemKind]] = _build_reverse_index(_PROBLEM_INFO)


def rule_name(kind: ProblemKind) -> str:
    """Return the external rule name for ``kind``."""
    return _PROBLEM_INFO[kind].rule


def rule_names() -> tuple[str, ...]:
    """Return every accepted rule name in problem-kind declaration order."""
    return tuple(_PROBLEM_INFO[kind].rule for kind in ProblemKind)


def kind_for_rule(name: str) -> ProblemKind:
    """Resolve an external rule name to its problem kind.

    Args:
        name: Rule name as typed by the user or stored in a config file.

    Returns:
        The matching ProblemKind.

    Raises:
        UnknownIgnoreRuleError: If ``name`` is not a known rule.
    """
    kind = _KIND_BY_RULE.get(name.strip())
    if kind is None:
        raise UnknownIgnoreRuleError(name, rule_names())
    return kind


def problem_emoji(kind: ProblemKind) -> str:
    return _PROBLEM_INFO[kind].emoji


def problem_label(kind: ProblemKind) -> str:
    return _PROBLEM_INFO[kind].label


def problem_description(kind: ProblemKind) -> str:
    return _PROBLEM_INFO[kind].description


__all__ = [
    "ProblemInfo",
    "UnknownIgnoreRuleError",
    "VocabularyError",
    "kind_for_rule",
    "problem_description",
    "problem_emoji",
    "problem_label",
    "rule_name",
    "rule_names",
]
