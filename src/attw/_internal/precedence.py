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

"""Layered option resolution.

Every option attw reads can come from up to four layers. The first layer that
holds a value wins, in this order: command line, environment, configuration
file, built-in default. ``None`` marks an unset layer, so falsy values such as
``False`` or an empty tuple still take effect.
"""

from __future__ import annotations

from typing import TypeVar

T = TypeVar("T")


def resolve_with_precedence(
    *,
    cli_value: T | None = None,
    env_value: T | None = None,
    config_value: T | None = None,
    default: T,
) -> T:
    """Return the value of the highest layer that is set.

    Example:
        >>> resolve_with_precedence(config_value=False, default=True)
        False
    """
    for value in (cli_value, env_value, config_value):
        if value is not None:
            return value
    return default


__all__ = ["resolve_with_precedence"]
