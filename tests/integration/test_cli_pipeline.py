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

"""End-to-end tests of the CLI pipeline with an on-disk configuration file."""

from __future__ import annotations

import io
import json
from typing import TYPE_CHECKING

import pytest

from attw.cli.app import main
from attw.config.loader import DEFAULT_CONFIG_FILENAME
from tests.fixtures.builders import AnalysisBuilder, StubAnalyzer

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.integration


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _analyzer() -> StubAnalyzer:
    builder = (
        AnalysisBuilder(package_name="dual-pkg", package_version="2.1.0", entrypoints=[".", "./utils"])
        .with_problem("FalseESM", resolution_kind="node16-cjs")
        .with_problem("FallbackCondition", entrypoint="./utils", resolution_kind="bundler")
    )
    return StubAnalyzer(builder.typed())


def _main(argv: list[str]) -> tuple[int, str]:
    stdout = io.StringIO()
    code = main(argv, analyzer=_analyzer(), stdout=stdout, environ={})
    return code, stdout.getvalue()


def test_default_config_file_drives_the_run(project: Path) -> None:
    config = {"strict": True, "ignore": ["false-esm"], "emoji": False, "summary": True}
    _ = (project / DEFAULT_CONFIG_FILENAME).write_text(json.dumps(config), encoding="utf-8")

    code, output = _main(["dual-pkg"])

    assert code == 1
    assert "dual-pkg v2.1.0" in output
    assert "Used fallback condition (fallback-condition): 1" in output
    assert "(false-esm)" not in output
    assert '"dual-pkg/utils"' in output


def test_everything_ignored_passes(project: Path) -> None:
    config = {"strict": True, "ignore": ["false-esm", "fallback-condition"], "emoji": False}
    _ = (project / DEFAULT_CONFIG_FILENAME).write_text(json.dumps(config), encoding="utf-8")

    code, output = _main(["dual-pkg"])

    assert code == 0
    assert "No problems found" in output


def test_explicit_config_path_and_cli_override(project: Path) -> None:
    target = project / "ci.json"
    _ = target.write_text(json.dumps({"raw": True, "strict": True}), encoding="utf-8")

    code, output = _main(["dual-pkg", "--config-path", str(target), "--no-strict"])

    assert code == 0
    document = json.loads(output)
    assert document["analysis"]["packageName"] == "dual-pkg"
    assert list(document["problems"]) == ["false-esm", "fallback-condition"]


def test_malformed_config_is_a_usage_error(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _ = (project / DEFAULT_CONFIG_FILENAME).write_text("{strict: true", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        _ = _main(["dual-pkg"])

    assert excinfo.value.code == 2
    assert "Invalid attw configuration" in capsys.readouterr().err


def test_json_logs_go_to_stderr(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _ = project
    code, output = _main(["dual-pkg", "--raw", "--log-format", "json", "--log-level", "info"])

    assert code == 0
    assert json.loads(output)["analysis"]["packageVersion"] == "2.1.0"
    records = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line.strip()]
    finished = [record for record in records if record.get("component") == "cli"]
    assert finished
    assert finished[-1]["package"] == "dual-pkg"
    assert finished[-1]["exit_code"] == 0
