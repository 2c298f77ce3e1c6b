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

"""Configuration models and validation errors for attw.

The configuration file is a JSON object whose keys mirror the long CLI flag
names in camelCase (``fromFile``, ``packageVersion``). Negated flags are
written as ``"summary": false``. Every field is optional; ``None`` means "not
set" so the option normaliser can fall through to the next precedence layer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from attw._internal.exceptions import AttwValidationError

if TYPE_CHECKING:
    from pathlib import Path


class ConfigValidationError(AttwValidationError):
    """Raised when configuration data contains invalid values."""


class ConfigReadError(ConfigValidationError):
    """Raised when a configuration file cannot be read from disk."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and underlying error.

        Args:
            path: The path to the configuration file that could not be read.
            error: The underlying exception that caused the read failure.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class InvalidConfigFileError(ConfigValidationError):
    """Raised when the configuration file fails validation."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and validation error.

        Args:
            path: The path to the configuration file that failed validation.
            error: The underlying validation exception.
        """
        self.path = path
        self.error = error
        super().__init__(f"Invalid attw configuration in {path}: {error}")


class ConfigModel(BaseModel):
    """Validated contents of an ``.attw.json`` file."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        strict=True,
        frozen=True,
    )

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
    ignore: list[str] | None = None
    analyzer: str | None = None


__all__ = [
    "ConfigModel",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
]
