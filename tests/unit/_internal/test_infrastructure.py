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

"""Unit tests for precedence resolution and subprocess helpers."""

from __future__ import annotations

import sys

import pytest

import attw._internal as internal
from attw._internal.precedence import resolve_with_precedence
from attw._internal.process import CommandOutput, run_command

pytestmark = pytest.mark.unit


def test_precedence_prefers_cli_then_env_then_config() -> None:
    assert resolve_with_precedence(cli_value=1, env_value=2, config_value=3, default=4) == 1
    assert resolve_with_precedence(env_value=2, config_value=3, default=4) == 2
    assert resolve_with_precedence(config_value=3, default=4) == 3
    assert resolve_with_precedence(default=4) == 4


def test_precedence_keeps_falsy_values() -> None:
    assert resolve_with_precedence(cli_value=False, config_value=True, default=True) is False
    assert resolve_with_precedence(config_value=(), default=("x",)) == ()


def test_run_command_captures_output() -> None:
    output = run_command([sys.executable, "-c", "import sys; print('out'); print('err', file=sys.stderr)"])
    assert isinstance(output, CommandOutput)
    assert output.exit_code == 0
    assert output.stdout.strip() == "out"
    assert output.stderr.strip() == "err"
    assert output.duration_ms >= 0


def test_run_command_reports_failure_exit_code() -> None:
    output = run_command([sys.executable, "-c", "raise SystemExit(3)"])
    assert output.exit_code == 3


def test_run_command_validates_arguments() -> None:
    with pytest.raises(ValueError):  # noqa: PT011
        _ = run_command([])
    with pytest.raises(TypeError):
        _ = run_command([sys.executable, ""])


def test_run_command_missing_executable() -> None:
    with pytest.raises(FileNotFoundError):
        _ = run_command(["attw-definitely-missing-executable"])


def test_internal_package_exposes_modules_lazily() -> None:
    assert internal.precedence.resolve_with_precedence is resolve_with_precedence
    assert "error_codes" in dir(internal)
    with pytest.raises(AttributeError):
        _ = internal.not_a_module  # type: ignore[attr-defined]
