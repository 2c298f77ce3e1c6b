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

"""Configuration loading for attw.

Configuration is read from ``.attw.json`` in the working directory, or from
the path given with ``--config-path``. A missing default file yields an empty
configuration; a missing explicit file is an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, Protocol

from pydantic import ValidationError

from attw._internal.logging_utils import structured_extra
from attw.core.model_types import LogComponent

from .models import ConfigModel, ConfigReadError, InvalidConfigFileError

logger: logging.Logger = logging.getLogger("attw.config")

DEFAULT_CONFIG_FILENAME: Final[str] = ".attw.json"


@dataclass(slots=True, frozen=True)
class LoadedConfig:
    """Container for a loaded configuration and its source path.

    Attributes:
        config: Parsed configuration instance.
        path: Filesystem path the configuration was loaded from, or None when
            no file was found.
    """

    config: ConfigModel = field(default_factory=ConfigModel)
    path: Path | None = None


class ConfigLoader(Protocol):
    """Callable that produces the configuration layer for option normalisation."""

    def __call__(self, explicit_path: Path | None = None) -> LoadedConfig: ...


def load_config(explicit_path: Path | None = None) -> LoadedConfig:
    """Load attw configuration from a JSON file or fall back to an empty config.

    Args:
        explicit_path: Optional explicit path to a configuration file. When
            provided the file must exist. When ``None`` the default
            ``.attw.json`` in the current directory is used if present.

    Returns:
        LoadedConfig: Parsed configuration and the path it originated from.

    Raises:
        ConfigReadError: If the file cannot be read.
        InvalidConfigFileError: If the file is not a valid configuration document.
    """
    candidate = _resolve_candidate_path(explicit_path or Path(DEFAULT_CONFIG_FILENAME))
    if explicit_path is None and not candidate.exists():
        return LoadedConfig()
    try:
        text = candidate.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigReadError(candidate, exc) from exc
    try:
        config = ConfigModel.model_validate_json(text)
    except ValidationError as exc:
        raise InvalidConfigFileError(candidate, exc) from exc
    logger.debug(
        "Loaded configuration from %s",
        candidate,
        extra=structured_extra(LogComponent.CONFIG, path=candidate),
    )
    return LoadedConfig(config=config, path=candidate)


def _resolve_candidate_path(candidate: Path) -> Path:
    return candidate if candidate.is_absolute() else (Path.cwd() / candidate).resolve()


__all__ = ["DEFAULT_CONFIG_FILENAME", "ConfigLoader", "LoadedConfig", "load_config"]
