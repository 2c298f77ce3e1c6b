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

"""Option normalisation: CLI flags, config file, and environment into one record.

Each field is resolved with the standard precedence chain (CLI > environment >
config > default). Only colour has an environment layer. Ignore rule names are
translated to problem kinds here so that an unknown name fails before any
analysis starts.
"""

from __future__ import annotations

import argparse
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from attw._internal.exceptions import AttwValidationError
from attw._internal.precedence import resolve_with_precedence
from attw.config.models import ConfigModel
from attw.core.model_types import ProblemKind
from attw.core.vocabulary import kind_for_rule

DEFAULT_ANALYZER_NAME: Final[str] = "node"
NO_COLOR_ENV: Final[str] = "NO_COLOR"
FORCE_COLOR_ENV: Final[str] = "FORCE_COLOR"
_FORCE_COLOR_OFF: Final[frozenset[str]] = frozenset({"0", "false"})


class OptionConflictError(AttwValidationError):
    """Raised when mutually incompatible options are combined."""

    def __init__(self, first: str, second: str) -> None:
        """Initialise the exception with the two conflicting option names.

        Args:
            first: Name of the first option.
            second: Name of the option it cannot be combined with.
        """
        self.first = first
        self.second = second
        super().__init__(f"{first} cannot be combined with {second}")


@dataclass(slots=True, frozen=True)
class CLIArguments:
    """Flags as given on the command line; ``None`` means "not specified"."""

    package: str
    from_file: bool | None = None
    strict: bool | None = None
    package_version: str | None = None
    quiet: bool | None = None
    raw: bool | None = None
    vertical: bool | None = None
    flipped: bool | None = None
    summary: bool | None = None
    emoji: bool | None = None
    color: bool | None = None
    ignore: tuple[str, ...] | None = None
    config_path: Path | None = None
    analyzer: str | None = None

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> CLIArguments:
        """Build CLI arguments from a parsed ``argparse`` namespace."""
        ignore: Sequence[str] | None = args.ignore
        return cls(
            package=args.package,
            from_file=args.from_file,
            strict=args.strict,
            package_version=args.package_version,
            quiet=args.quiet,
            raw=args.raw,
            vertical=args.vertical,
            flipped=args.flipped,
            summary=args.summary,
            emoji=args.emoji,
            color=args.color,
            ignore=tuple(ignore) if ignore is not None else None,
            config_path=args.config_path,
            analyzer=args.analyzer,
        )


@dataclass(slots=True, frozen=True)
class Options:
    """Merged, validated options for a single invocation.

    Attributes:
        from_file: Treat the positional argument as a path to a ``.tgz`` archive.
        strict: Exit non-zero when reportable problems exist.
        package_version: Registry version to analyse (``None`` = latest).
        quiet: Suppress all standard output.
        raw: Emit the raw JSON envelope instead of tables.
        vertical: Render one record per table row instead of a grid.
        flipped: Swap the table axes so entry points become columns.
        summary: Print the per-kind summary block above the table.
        emoji: Use emoji glyphs in tables and summaries.
        color: Emit ANSI colour sequences.
        ignore: Problem kinds excluded from strict-mode and table reporting.
        config_path: Path the configuration layer was read from, if any.
        analyzer: Name of the analyzer to drive.
    """

    from_file: bool = False
    strict: bool = False
    package_version: str | None = None
    quiet: bool = False
    raw: bool = False
    vertical: bool = False
    flipped: bool = False
    summary: bool = True
    emoji: bool = True
    color: bool = True
    ignore: frozenset[ProblemKind] = frozenset()
    config_path: Path | None = None
    analyzer: str = DEFAULT_ANALYZER_NAME


def color_from_environment(environ: Mapping[str, str]) -> bool | None:
    """Interpret the ``NO_COLOR`` and ``FORCE_COLOR`` conventions.

    Args:
        environ: Process environment.

    Returns:
        ``False`` when colour is disabled, ``True`` when it is forced on, and
        ``None`` when the environment expresses no preference.
    """
    if environ.get(NO_COLOR_ENV):
        return False
    forced = environ.get(FORCE_COLOR_ENV)
    if forced is None or not forced.strip():
        return None
    return forced.strip().lower() not in _FORCE_COLOR_OFF


def resolve_ignore_rules(names: Sequence[str]) -> frozenset[ProblemKind]:
    """Translate rule names into problem kinds.

    Raises:
        UnknownIgnoreRuleError: If any name is not part of the vocabulary.
    """
    return frozenset(kind_for_rule(name) for name in names)


def normalize_options(
    cli: CLIArguments,
    config: ConfigModel,
    *,
    environ: Mapping[str, str],
    is_tty: bool,
    config_path: Path | None = None,
) -> Options:
    """Merge CLI flags, configuration, environment, and defaults.

    Args:
        cli: Flags parsed from the command line.
        config: Configuration layer (an empty model when no file exists).
        environ: Process environment used for colour conventions.
        is_tty: Whether standard output is a terminal; colour defaults to this.
        config_path: Path the configuration was loaded from, recorded on the result.

    Returns:
        The frozen options record for this invocation.

    Raises:
        UnknownIgnoreRuleError: If an ignore rule name is not recognised.
        OptionConflictError: If ``--from-file`` is combined with a package version.
    """
    config_ignore = tuple(config.ignore) if config.ignore is not None else None
    ignore_names = resolve_with_precedence(cli_value=cli.ignore, config_value=config_ignore, default=())
    options = Options(
        from_file=resolve_with_precedence(cli_value=cli.from_file, config_value=config.from_file, default=False),
        strict=resolve_with_precedence(cli_value=cli.strict, config_value=config.strict, default=False),
        package_version=resolve_with_precedence(
            cli_value=cli.package_version,
            config_value=config.package_version,
            default=None,
        ),
        quiet=resolve_with_precedence(cli_value=cli.quiet, config_value=config.quiet, default=False),
        raw=resolve_with_precedence(cli_value=cli.raw, config_value=config.raw, default=False),
        vertical=resolve_with_precedence(cli_value=cli.vertical, config_value=config.vertical, default=False),
        flipped=resolve_with_precedence(cli_value=cli.flipped, config_value=config.flipped, default=False),
        summary=resolve_with_precedence(cli_value=cli.summary, config_value=config.summary, default=True),
        emoji=resolve_with_precedence(cli_value=cli.emoji, config_value=config.emoji, default=True),
        color=resolve_with_precedence(
            cli_value=cli.color,
            env_value=color_from_environment(environ),
            config_value=config.color,
            default=is_tty,
        ),
        ignore=resolve_ignore_rules(ignore_names),
        config_path=config_path,
        analyzer=resolve_with_precedence(
            cli_value=cli.analyzer,
            config_value=config.analyzer,
            default=DEFAULT_ANALYZER_NAME,
        ),
    )
    if options.from_file and options.package_version is not None:
        raise OptionConflictError("--from-file", "--package-version")
    return options


__all__ = [
    "DEFAULT_ANALYZER_NAME",
    "CLIArguments",
    "OptionConflictError",
    "Options",
    "color_from_environment",
    "normalize_options",
    "resolve_ignore_rules",
]
