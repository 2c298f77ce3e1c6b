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

"""Unit tests for configuration loading."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from attw.config import (
    DEFAULT_CONFIG_FILENAME,
    ConfigModel,
    ConfigReadError,
    InvalidConfigFileError,
    load_config,
)

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit


def _write(path: Path, payload: object) -> Path:
    _ = path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_missing_default_file_yields_empty_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    loaded = load_config()
    assert loaded.path is None
    assert loaded.config == ConfigModel()


def test_default_file_is_discovered(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path / DEFAULT_CONFIG_FILENAME, {"strict": True, "ignore": ["false-esm"]})
    loaded = load_config()
    assert loaded.path == target.resolve()
    assert loaded.config.strict is True
    assert loaded.config.ignore == ["false-esm"]


def test_explicit_path_reads_camel_case_keys(tmp_path: Path) -> None:
    target = _write(
        tmp_path / "custom.json",
        {"fromFile": True, "packageVersion": "2.0.0", "summary": False, "analyzer": "node"},
    )
    loaded = load_config(target)
    assert loaded.config.from_file is True
    assert loaded.config.package_version == "2.0.0"
    assert loaded.config.summary is False
    assert loaded.config.emoji is None
    assert loaded.path == target


def test_explicit_missing_path_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigReadError) as excinfo:
        _ = load_config(tmp_path / "missing.json")
    assert excinfo.value.path == tmp_path / "missing.json"


@pytest.mark.parametrize(
    "payload",
    [
        {"strict": "yes"},
        {"unknownKey": True},
        {"configPath": "other.json"},
        {"ignore": "false-esm"},
        ["strict"],
    ],
)
def test_invalid_documents_are_rejected(tmp_path: Path, payload: object) -> None:
    target = _write(tmp_path / "bad.json", payload)
    with pytest.raises(InvalidConfigFileError):
        _ = load_config(target)


def test_malformed_json_is_rejected(tmp_path: Path) -> None:
    target = tmp_path / "broken.json"
    _ = target.write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidConfigFileError, match="Invalid attw configuration"):
        _ = load_config(target)
