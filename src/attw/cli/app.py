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

"""CLI entry point and orchestration for attw."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Final, NoReturn

from attw import __version__
from attw._internal.error_codes import error_code_for
from attw._internal.exceptions import AttwValidationError
from attw._internal.logging_utils import LOG_FORMATS, LOG_LEVELS, configure_logging, structured_extra
from attw.analyzers.registry import resolve_analyzer
from attw.cli.helpers import echo, register_argument, register_negatable, stream_is_tty
from attw.config.loader import load_config
from attw.core.model_types import LogComponent
from attw.core.vocabulary import rule_names
from attw.options import CLIArguments, color_from_environment, normalize_options
from attw.render import DiscardSink, StreamSink, render_report
from attw.render.style import Style
from attw.services.classify import classify
from attw.services.driver import AnalysisFailure, analyze
from attw.services.strict import exit_status

if TYPE_CHECKING:
    from attw.analyzers.base import BaseAnalyzer
    from attw.config.loader import ConfigLoader
    from attw.render.sink import OutputSink, TextStream

logger: logging.Logger = logging.getLogger("attw.cli")

ATTW_VERSION: Final[str] = __version__
TOOL_TITLE: Final[str] = "Are the Types Wrong?"


def _build_parser(style: Style) -> argparse.ArgumentParser:
    """Build the ``attw`` argument parser.

    Toggles default to ``None`` so that unspecified flags fall through to the
    configuration file during option normalisation.

    Args:
        style: Styling for the help description.

    Returns:
        argparse.ArgumentParser: Configured parser.
    """
    parser = argparse.ArgumentParser(
        prog="attw",
        description=(
            f"{style.bold(style.blue(TOOL_TITLE))} checks whether a package's type declarations "
            "match its runtime module resolution under node10, node16 (CJS and ESM) and bundler."
        ),
    )
    register_argument(
        parser,
        "package",
        metavar="package-name",
        help="Registry package to check, or the path to a .tgz archive with --from-file.",
    )
    register_argument(parser, "--version", action="version", version=f"attw {ATTW_VERSION}")
    register_negatable(parser, "-f", "--from-file", help_text="Read a local .tgz archive instead of fetching.")
    register_negatable(parser, "-s", "--strict", help_text="Exit with status 1 when any problem is reported.")
    register_argument(
        parser,
        "-v",
        "--package-version",
        default=None,
        help="Version or tag to check; defaults to the latest release.",
    )
    register_negatable(parser, "-q", "--quiet", help_text="Suppress all report output.")
    register_negatable(parser, "-r", "--raw", help_text="Print the raw analysis as JSON.")
    register_negatable(parser, "-E", "--vertical", help_text="Print one record per table row instead of a grid.")
    register_negatable(parser, "-F", "--flipped", help_text="Put resolution kinds on the row axis.")
    register_negatable(parser, "--summary", help_text="Print the problem summary above the table (default: on).")
    register_negatable(parser, "--emoji", help_text="Use emoji in the report (default: on).")
    register_negatable(parser, "--color", help_text="Use ANSI colours (default: on for terminals).")
    register_argument(
        parser,
        "--config-path",
        type=Path,
        default=None,
        help="Configuration file to read instead of ./.attw.json.",
    )
    register_argument(
        parser,
        "-i",
        "--ignore",
        nargs="+",
        choices=rule_names(),
        default=None,
        metavar="rule",
        help=f"Problem rules to ignore. Choices: {', '.join(rule_names())}.",
    )
    register_argument(
        parser,
        "--analyzer",
        default=None,
        help="Analyzer to run (default: node).",
    )
    register_argument(
        parser,
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Select logging output format (human-readable text or structured JSON).",
    )
    register_argument(
        parser,
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Set verbosity of logged events.",
    )
    return parser


def _usage_error(parser: argparse.ArgumentParser, exc: AttwValidationError) -> NoReturn:
    parser.error(f"({error_code_for(exc)}) {exc}")


def main(
    argv: Sequence[str] | None = None,
    *,
    analyzer: BaseAnalyzer | None = None,
    config_loader: ConfigLoader = load_config,
    stdout: TextStream | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Run ``attw`` and return the process exit status.

    Args:
        argv: Command-line arguments; ``None`` uses ``sys.argv``.
        analyzer: Analyzer to drive instead of the one named by ``--analyzer``.
        config_loader: Produces the configuration layer from ``--config-path``.
        stdout: Report destination; defaults to ``sys.stdout``.
        environ: Environment used for colour conventions; defaults to ``os.environ``.

    Returns:
        int: ``0`` on success, ``1`` on strict-mode failure or when the analysis
        could not be obtained. Usage errors exit with status ``2``.
    """
    env = os.environ if environ is None else environ
    out = sys.stdout if stdout is None else stdout
    # argparse writes help to sys.stdout regardless of ``stdout``.
    help_color = color_from_environment(env)
    parser = _build_parser(Style(color=stream_is_tty(sys.stdout) if help_color is None else help_color))
    args = parser.parse_args(list(argv) if argv is not None else None)
    try:
        _ = configure_logging(args.log_format, log_level=args.log_level)
    except ValueError as exc:
        parser.error(str(exc))
    try:
        loaded = config_loader(args.config_path)
        options = normalize_options(
            CLIArguments.from_namespace(args),
            loaded.config,
            environ=env,
            is_tty=stream_is_tty(out),
            config_path=loaded.path,
        )
        selected = analyzer if analyzer is not None else resolve_analyzer(options.analyzer)
    except AttwValidationError as exc:
        _usage_error(parser, exc)

    sink: OutputSink = DiscardSink() if options.quiet else StreamSink(out)
    try:
        analysis = analyze(options, selected, args.package)
    except AnalysisFailure as failure:
        logger.debug(
            "Analysis failed",
            exc_info=True,
            extra=structured_extra(LogComponent.CLI, analyzer=selected.name, package=args.package),
        )
        echo(failure.render(), err=True)
        return 1

    classified = classify(analysis, options.ignore) if analysis.contains_types else None
    render_report(options, analysis, classified, sink)
    status = exit_status(options, analysis, classified)
    logger.info(
        "Finished checking %s v%s",
        analysis.package_name,
        analysis.package_version,
        extra=structured_extra(
            LogComponent.CLI,
            analyzer=selected.name,
            package=analysis.package_name,
            version=analysis.package_version,
            exit_code=int(status),
            counts={"problems": len(classified.problems), "reportable": len(classified.reportable)}
            if classified is not None
            else None,
        ),
    )
    return int(status)


def run() -> NoReturn:
    """Console script entry point."""
    raise SystemExit(main())


__all__ = ["ATTW_VERSION", "TOOL_TITLE", "main", "run"]
