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

"""Analysis driver: obtain exactly one analysis from the selected analyzer.

The package is either fetched from the registry by name (and optional
version) or read from a local ``.tgz`` archive. Every failure is wrapped in
:class:`AnalysisFailure`, which carries a short title for the phase that
failed and a machine readable code.
"""

from __future__ import annotations

import errno
import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Final

from attw._internal.exceptions import AttwError
from attw._internal.logging_utils import structured_extra
from attw.analyzers.base import FetchError
from attw.core.model_types import LogComponent

if TYPE_CHECKING:
    from attw.analyzers.base import BaseAnalyzer
    from attw.core.analysis import Analysis
    from attw.options import Options

logger: logging.Logger = logging.getLogger("attw.services")

UNKNOWN_ERROR_CODE: Final[str] = "UNKNOWN"
FETCH_TITLE: Final[str] = "fetching package"
FILE_TITLE: Final[str] = "checking file"
PACKAGE_TITLE: Final[str] = "checking package"


class AnalysisFailure(AttwError):
    """Raised when an analysis could not be produced.

    Attributes:
        message: Human readable failure description.
        code: Error code (``ENOTFOUND``, ``ENOENT``, ``UNKNOWN``, ...).
        title: Phase that failed, used as ``error while <title>``.
    """

    def __init__(self, message: str, code: str, title: str) -> None:
        """Initialise the failure.

        Args:
            message: Human readable failure description.
            code: Error code associated with the failure.
            title: Phase that failed.
        """
        self.message = message
        self.code = code
        self.title = title
        super().__init__(message)

    def render(self) -> str:
        """Return the two-line diagnostic printed to stderr."""
        return f"error while {self.title} ({self.code}):\n{self.message}"


def _error_code(exc: BaseException) -> str:
    if isinstance(exc, OSError) and exc.errno is not None:
        return errno.errorcode.get(exc.errno, UNKNOWN_ERROR_CODE)
    code = getattr(exc, "code", None)
    return code if isinstance(code, str) and code else UNKNOWN_ERROR_CODE


def _failure(exc: Exception, title: str) -> AnalysisFailure:
    if isinstance(exc, FetchError):
        title = FETCH_TITLE
    message = str(exc) or exc.__class__.__name__
    return AnalysisFailure(message, _error_code(exc), title)


def analyze_from_registry(analyzer: BaseAnalyzer, name: str, version: str | None = None) -> Analysis:
    """Analyse a registry package.

    Args:
        analyzer: Analyzer to drive.
        name: Registry package name.
        version: Version or tag to analyse; ``None`` selects the latest.

    Returns:
        Analysis: The analyzer result.

    Raises:
        AnalysisFailure: If the analyzer raised for any reason.
    """
    started = time.perf_counter()
    try:
        analysis = analyzer.check_package(name, version)
    except Exception as exc:  # noqa: BLE001 - analyzers are opaque collaborators
        raise _failure(exc, PACKAGE_TITLE) from exc
    logger.info(
        "Analysed %s",
        name,
        extra=structured_extra(
            LogComponent.SERVICES,
            analyzer=analyzer.name,
            package=name,
            version=version,
            duration_ms=(time.perf_counter() - started) * 1000,
        ),
    )
    return analysis


def analyze_from_archive(analyzer: BaseAnalyzer, path: Path) -> Analysis:
    """Analyse a local ``.tgz`` archive.

    Args:
        analyzer: Analyzer to drive.
        path: Archive location.

    Returns:
        Analysis: The analyzer result.

    Raises:
        AnalysisFailure: If the archive cannot be read or the analyzer raised.
    """
    started = time.perf_counter()
    try:
        data = path.read_bytes()
        analysis = analyzer.check_tgz(data)
    except Exception as exc:  # noqa: BLE001 - analyzers are opaque collaborators
        raise _failure(exc, FILE_TITLE) from exc
    logger.info(
        "Analysed archive %s",
        path,
        extra=structured_extra(
            LogComponent.SERVICES,
            analyzer=analyzer.name,
            path=path,
            duration_ms=(time.perf_counter() - started) * 1000,
        ),
    )
    return analysis


def analyze(options: Options, analyzer: BaseAnalyzer, target: str) -> Analysis:
    """Dispatch to the registry or archive path according to ``options.from_file``."""
    if options.from_file:
        return analyze_from_archive(analyzer, Path(target))
    return analyze_from_registry(analyzer, target, options.package_version)


__all__ = [
    "AnalysisFailure",
    "analyze",
    "analyze_from_archive",
    "analyze_from_registry",
]
