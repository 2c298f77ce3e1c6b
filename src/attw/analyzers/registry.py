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

"""Analyzer registry covering the builtin bridge and plugin-provided analyzers.

Plugins register under the ``attw.analyzers`` entry point group. An entry
point may expose an analyzer instance, a class, or a zero-argument factory.
Plugins override builtin analyzers that share their name.
"""

from __future__ import annotations

import inspect
import logging
from functools import lru_cache
from importlib import metadata
from typing import TYPE_CHECKING, Final, cast

from attw._internal.logging_utils import structured_extra
from attw.core.model_types import LogComponent

from .base import UnknownAnalyzerError
from .node import NodeAnalyzer

if TYPE_CHECKING:
    from collections.abc import Callable

    from .base import BaseAnalyzer

logger: logging.Logger = logging.getLogger("attw.analyzer.registry")

ENTRY_POINT_GROUP: Final[str] = "attw.analyzers"


def _is_analyzer_like(value: object) -> bool:
    if value is None:
        return False
    name = getattr(value, "name", None)
    check_package = getattr(value, "check_package", None)
    check_tgz = getattr(value, "check_tgz", None)
    return isinstance(name, str) and callable(check_package) and callable(check_tgz)


@lru_cache
def builtin_analyzers() -> dict[str, BaseAnalyzer]:
    """Return the cached mapping of builtin analyzers by name."""
    analyzers: list[BaseAnalyzer] = [NodeAnalyzer()]
    return {analyzer.name: analyzer for analyzer in analyzers}


def _instantiate_analyzer(obj: object, *, source: str) -> BaseAnalyzer:
    """Convert an entry point object into an analyzer instance.

    Classes, and callables without ``check_package``, are invoked as factories.

    Raises:
        TypeError: If the object does not produce a valid analyzer.
    """
    candidate = obj
    if inspect.isclass(candidate) or (callable(candidate) and not hasattr(candidate, "check_package")):
        factory = cast("Callable[[], object]", candidate)
        candidate = factory()
    if not _is_analyzer_like(candidate):
        message = f"Entry point '{source}' did not provide a valid analyzer instance"
        raise TypeError(message)
    return cast("BaseAnalyzer", candidate)


@lru_cache
def entrypoint_analyzers() -> dict[str, BaseAnalyzer]:
    """Discover analyzers registered under the ``attw.analyzers`` entry point group.

    Entry points that fail to load are logged at debug level and skipped.

    Returns:
        dict[str, BaseAnalyzer]: Plugin analyzers sorted by name.
    """
    analyzers: dict[str, BaseAnalyzer] = {}
    try:
        eps = metadata.entry_points()
    except Exception as exc:  # pragma: no cover - guarded importlib behaviour
        logger.debug(
            "Failed to load entry points: %s",
            exc,
            extra=structured_extra(LogComponent.ANALYZER),
        )
        return analyzers
    for entry_point in eps.select(group=ENTRY_POINT_GROUP):
        try:
            loaded = entry_point.load()
            analyzer = _instantiate_analyzer(loaded, source=entry_point.name)
        except Exception as exc:  # noqa: BLE001 - plugin misconfiguration
            logger.debug(
                "Failed to load analyzer entry point '%s': %s",
                entry_point.name,
                exc,
                extra=structured_extra(LogComponent.ANALYZER, analyzer=entry_point.name),
            )
            continue
        name = getattr(analyzer, "name", None)
        if not isinstance(name, str) or not name:
            continue
        analyzers[name] = analyzer
    return dict(sorted(analyzers.items()))


def analyzer_map() -> dict[str, BaseAnalyzer]:
    """Return builtin analyzers overlaid with plugin analyzers."""
    mapping = dict(builtin_analyzers())
    mapping.update(entrypoint_analyzers())
    return mapping


def resolve_analyzer(name: str) -> BaseAnalyzer:
    """Look up an analyzer by name.

    Args:
        name: Analyzer name as given by ``--analyzer`` or the config file.

    Returns:
        BaseAnalyzer: The registered analyzer.

    Raises:
        UnknownAnalyzerError: If no analyzer with that name is registered.
    """
    mapping = analyzer_map()
    try:
        return mapping[name]
    except KeyError:
        raise UnknownAnalyzerError(name, tuple(mapping)) from None


__all__ = [
    "ENTRY_POINT_GROUP",
    "analyzer_map",
    "builtin_analyzers",
    "entrypoint_analyzers",
    "resolve_analyzer",
]
