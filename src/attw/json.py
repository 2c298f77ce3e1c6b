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

"""Canonical JSON types and helpers used across attw.

This module has no dependencies on logging, configuration, or CLI layers to
keep the dependency graph simple and acyclic.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import TypeAlias, cast

from pydantic import JsonValue

__all__ = [
    "JSONMapping",
    "JSONValue",
    "as_mapping",
    "dumps_compact",
    "normalize_enums_for_json",
    "require_json",
]

JSONValue: TypeAlias = JsonValue
JSONMapping = dict[str, JsonValue]


def require_json(payload: str) -> JSONMapping:
    """Parse a JSON string into a mapping, with basic validation.

    Args:
        payload: Raw JSON string to parse.

    Returns:
        Parsed JSON object as a string-keyed mapping.

    Raises:
        ValueError: If `payload` is blank or does not hold a JSON object.
    """
    if not (data_str := payload.strip()):
        message = "Expected JSON output but received empty string"
        raise ValueError(message)
    data = json.loads(data_str)
    if not isinstance(data, dict):
        message = f"Expected a JSON object but received {type(data).__name__}"
        raise ValueError(message)
    return cast("JSONMapping", data)


def as_mapping(value: object) -> JSONMapping:
    """Return `value` as a JSON mapping if it is a dict, else an empty mapping."""
    return cast("JSONMapping", value) if isinstance(value, dict) else {}


def normalize_enums_for_json(value: object) -> JSONValue:
    """Recursively convert Enum keys/values to their string payloads.

    Args:
        value: Arbitrary Python object hierarchy that may include `Enum`
            instances, mappings, or sequences.

    Returns:
        A JSON-compatible structure with all enum keys and values replaced by
        their `.value` payloads.
    """

    def _convert(obj: object) -> JSONValue:
        if isinstance(obj, Enum):
            return cast("JSONValue", obj.value)
        if isinstance(obj, Mapping):
            mapping = cast("Mapping[object, object]", obj)
            result: dict[str, JSONValue] = {}
            for key, item in mapping.items():
                key_str = str(key.value) if isinstance(key, Enum) else str(key)
                result[key_str] = _convert(item)
            return result
        if isinstance(obj, Sequence) and not isinstance(obj, str | bytes | bytearray):
            return [_convert(item) for item in cast("Sequence[object]", obj)]
        return cast("JSONValue", obj)

    return _convert(value)


def dumps_compact(value: object) -> str:
    """Serialise ``value`` on a single line without extra whitespace."""
    return json.dumps(normalize_enums_for_json(value), ensure_ascii=False, separators=(",", ":"))
