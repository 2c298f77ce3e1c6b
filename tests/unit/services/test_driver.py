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

"""Unit tests for the analysis driver."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from attw.analyzers.base import AnalyzerError, FetchError
from attw.options import Options
from attw.services.driver import (
    FETCH_TITLE,
    FILE_TITLE,
    PACKAGE_TITLE,
    UNKNOWN_ERROR_CODE,
    AnalysisFailure,
    analyze,
    analyze_from_archive,
    analyze_from_registry,
)
from tests.fixtures.builders import AnalysisBuilder, StubAnalyzer

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit


def test_registry_analysis_passes_name_and_version() -> None:
    analysis = AnalysisBuilder().typed()
    analyzer = StubAnalyzer(analysis)
    assert analyze_from_registry(analyzer, "example-pkg", "1.0.0") is analysis
    assert analyzer.calls == [("package", "example-pkg", "1.0.0")]


def test_archive_analysis_reads_bytes(tmp_path: Path) -> None:
    archive = tmp_path / "example-pkg-1.0.0.tgz"
    _ = archive.write_bytes(b"\x1f\x8bpayload")
    analyzer = StubAnalyzer(AnalysisBuilder().untyped())
    _ = analyze_from_archive(analyzer, archive)
    assert analyzer.calls == [("tgz", b"\x1f\x8bpayload")]


def test_missing_archive_reports_enoent(tmp_path: Path) -> None:
    analyzer = StubAnalyzer(AnalysisBuilder().typed())
    with pytest.raises(AnalysisFailure) as excinfo:
        _ = analyze_from_archive(analyzer, tmp_path / "missing.tgz")
    failure = excinfo.value
    assert failure.code == "ENOENT"
    assert failure.title == FILE_TITLE
    assert analyzer.calls == []
    assert isinstance(failure.__cause__, FileNotFoundError)


def test_fetch_error_uses_fetch_title() -> None:
    analyzer = StubAnalyzer(error=FetchError("getaddrinfo ENOTFOUND registry.npmjs.org", code="ENOTFOUND"))
    with pytest.raises(AnalysisFailure) as excinfo:
        _ = analyze_from_registry(analyzer, "example-pkg")
    assert excinfo.value.title == FETCH_TITLE
    assert excinfo.value.code == "ENOTFOUND"
    assert excinfo.value.render() == (
        "error while fetching package (ENOTFOUND):\ngetaddrinfo ENOTFOUND registry.npmjs.org"
    )


def test_analyzer_error_code_is_preserved() -> None:
    analyzer = StubAnalyzer(error=AnalyzerError("bad tarball", code="Z_DATA_ERROR"))
    with pytest.raises(AnalysisFailure) as excinfo:
        _ = analyze_from_registry(analyzer, "example-pkg")
    assert excinfo.value.title == PACKAGE_TITLE
    assert excinfo.value.code == "Z_DATA_ERROR"


def test_unexpected_exception_is_unknown() -> None:
    analyzer = StubAnalyzer(error=RuntimeError())
    with pytest.raises(AnalysisFailure) as excinfo:
        _ = analyze_from_registry(analyzer, "example-pkg")
    assert excinfo.value.code == UNKNOWN_ERROR_CODE
    assert excinfo.value.message == "RuntimeError"


def test_archive_analyzer_failure_uses_file_title(tmp_path: Path) -> None:
    archive = tmp_path / "pkg.tgz"
    _ = archive.write_bytes(b"data")
    analyzer = StubAnalyzer(error=AnalyzerError("not a gzip archive"))
    with pytest.raises(AnalysisFailure) as excinfo:
        _ = analyze_from_archive(analyzer, archive)
    assert excinfo.value.render() == "error while checking file (UNKNOWN):\nnot a gzip archive"


def test_analyze_dispatches_on_from_file(tmp_path: Path) -> None:
    archive = tmp_path / "pkg.tgz"
    _ = archive.write_bytes(b"data")
    analyzer = StubAnalyzer(AnalysisBuilder().typed())

    _ = analyze(Options(from_file=True), analyzer, str(archive))
    _ = analyze(Options(package_version="2.0.0"), analyzer, "example-pkg")

    assert analyzer.calls == [("tgz", b"data"), ("package", "example-pkg", "2.0.0")]
