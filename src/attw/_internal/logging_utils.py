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

"""Diagnostic logging for attw.

Diagnostics always go to stderr so that report output on stdout stays
machine readable (``--raw``) or empty (``--quiet``). Records may carry a small
set of structured fields, built with :func:`structured_extra`, which the JSON
formatter emits as top-level keys and the text formatter appends as a short
``key=value`` suffix.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Final, Literal, cast

from attw.compat import UTC, TypedDict, Unpack, override
from attw.core.model_types import LogComponent, LogFormat
from attw.json import normalize_enums_for_json

ROOT_LOGGER_NAME: Final[str] = "attw"
LOG_FORMAT_ENV: Final[str] = "ATTW_LOG_FORMAT"
LOG_LEVEL_ENV: Final[str] = "ATTW_LOG_LEVEL"
DEFAULT_LOG_LEVEL: Final[str] = "warning"

_LEVELS: Final[MappingProxyType[str, int]] = MappingProxyType({
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
})

LOG_FORMATS: Final[tuple[Literal["text", "json"], ...]] = cast(
    "tuple[Literal['text', 'json'], ...]",
    tuple(format_.value for format_ in LogFormat),
)
LOG_LEVELS: Final[tuple[Literal["debug", "info", "warning", "error"], ...]] = cast(
    "tuple[Literal['debug', 'info', 'warning', 'error'], ...]",
    tuple(_LEVELS),
)

# Scalar structured fields and the coercion applied before attaching them.
_SCALAR_FIELDS: Final[MappingProxyType[str, Callable[[object], object]]] = MappingProxyType({
    "analyzer": str,
    "package": str,
    "version": str,
    "path": lambda value: os.fspath(cast("str | os.PathLike[str]", value)),
    "duration_ms": lambda value: round(float(cast("float", value)), 3),
    "exit_code": lambda value: int(cast("int", value)),
})
_MAPPING_FIELDS: Final[tuple[str, ...]] = ("counts", "details")
STRUCTURED_FIELDS: Final[tuple[str, ...]] = ("component", *_SCALAR_FIELDS, *_MAPPING_FIELDS)

# Fields shown by the text formatter, in order.
_TEXT_SUFFIX_FIELDS: Final[tuple[str, ...]] = ("analyzer", "package", "version", "path", "exit_code")


@dataclass(slots=True, frozen=True)
class LogConfig:
    """Logging configuration applied by :func:`configure_logging`."""

    format: LogFormat
    level: int
    level_name: str


def _structured_fields(record: logging.LogRecord) -> dict[str, object]:
    return {field: getattr(record, field) for field in STRUCTURED_FIELDS if hasattr(record, field)}


class JSONLogFormatter(logging.Formatter):
    """One JSON object per record, structured fields at the top level."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_structured_fields(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(normalize_enums_for_json(payload), ensure_ascii=False)


class TextLogFormatter(logging.Formatter):
    """``[LEVEL] message`` with a ``(key=value ...)`` suffix for context fields."""

    def __init__(self) -> None:
        super().__init__("[%(levelname)s] %(message)s")

    @override
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = _structured_fields(record)
        context = " ".join(f"{key}={fields[key]}" for key in _TEXT_SUFFIX_FIELDS if key in fields)
        if not context:
            return line
        first, newline, rest = line.partition("\n")
        return f"{first} ({context}){newline}{rest}"


def _resolve_format(preferred: LogFormat | str | None) -> LogFormat:
    raw = preferred if preferred is not None else os.getenv(LOG_FORMAT_ENV)
    if not raw:
        return LogFormat.TEXT
    return raw if isinstance(raw, LogFormat) else LogFormat.from_str(raw)


def _resolve_level(preferred: str | int | None) -> tuple[int, str]:
    raw = preferred if preferred is not None else os.getenv(LOG_LEVEL_ENV)
    if isinstance(raw, int):
        return raw, logging.getLevelName(raw).lower()
    # Unrecognised names fall back to the default rather than failing the run.
    name = (raw or DEFAULT_LOG_LEVEL).strip().lower()
    if name not in _LEVELS:
        name = DEFAULT_LOG_LEVEL
    return _LEVELS[name], name


def configure_logging(
    log_format: LogFormat | str | None = None,
    *,
    log_level: str | int | None = None,
) -> LogConfig:
    """Install the attw stderr handler on the ``attw`` logger hierarchy.

    Args:
        log_format: ``text`` or ``json``; ``None`` consults ``ATTW_LOG_FORMAT``
            and defaults to ``text``.
        log_level: Level name or number; ``None`` consults ``ATTW_LOG_LEVEL``
            and defaults to ``warning``.

    Returns:
        LogConfig: The format and level that were applied.

    Raises:
        ValueError: If the log format is not recognised.
    """
    selected = _resolve_format(log_format)
    level, level_name = _resolve_level(log_level)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONLogFormatter() if selected is LogFormat.JSON else TextLogFormatter())

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
    return LogConfig(format=selected, level=level, level_name=level_name)


class _StructuredLogBase(TypedDict):
    component: LogComponent


class StructuredLogExtra(_StructuredLogBase, total=False):
    """Typed ``extra=`` payload for attw log records."""

    analyzer: str
    package: str
    version: str
    path: str
    duration_ms: float
    exit_code: int
    counts: Mapping[str, int]
    details: Mapping[str, object]


class _StructuredLogKwargs(TypedDict, total=False):
    analyzer: str
    package: str
    version: str | None
    path: str | os.PathLike[str]
    duration_ms: float
    exit_code: int
    counts: Mapping[str, int] | None
    details: Mapping[str, object]


def structured_extra(
    component: LogComponent,
    **fields: Unpack[_StructuredLogKwargs],
) -> StructuredLogExtra:
    """Build the ``extra`` mapping for a log call.

    ``None`` values and empty mappings are dropped so absent context never
    shows up as ``null`` in JSON logs.

    Args:
        component: Component emitting the record.
        **fields: Optional context such as analyzer, package or exit code.

    Returns:
        StructuredLogExtra: Mapping for the ``extra`` argument of a log call.
    """
    values = cast("dict[str, object]", fields)
    extra: dict[str, object] = {"component": component}
    for key, coerce in _SCALAR_FIELDS.items():
        value = values.get(key)
        if value is not None:
            extra[key] = coerce(value)
    for key in _MAPPING_FIELDS:
        mapping = values.get(key)
        if isinstance(mapping, Mapping) and mapping:
            extra[key] = dict(cast("Mapping[str, object]", mapping))
    return cast("StructuredLogExtra", extra)


__all__ = [
    "LOG_FORMATS",
    "LOG_LEVELS",
    "JSONLogFormatter",
    "LogConfig",
    "StructuredLogExtra",
    "TextLogFormatter",
    "configure_logging",
    "structured_extra",
]
